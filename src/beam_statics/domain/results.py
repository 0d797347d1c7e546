from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np


@dataclass(frozen=True)
class CornerReactions:
    """Reacciones del bastidor [N]: R1 (0,0), R2 (L,0), R3 (0,W), R4 (L,W)."""
    R1: float = 0.0
    R2: float = 0.0
    R3: float = 0.0
    R4: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.R1, self.R2, self.R3, self.R4)

    @property
    def total(self) -> float:
        return self.R1 + self.R2 + self.R3 + self.R4


@dataclass(frozen=True)
class Results:
    max_shear_force_n: float
    max_bending_moment_nm: float
    max_normal_stress_mpa: float
    max_shear_stress_mpa: float
    safety_factor: float           # 0 => indeterminado (fy <= 0)

    total_beams: int
    load_per_beam_n: float

    moment_of_inertia_m4: float
    section_modulus_m3: float
    area_m2: float

    corner_reaction_force_n: float
    corner_reactions: CornerReactions

    max_deflection_m: float
    total_applied_load_n: float

    # Viga simple: reacciones en apoyos (0 en modo bastidor)
    R_left_n: float = 0.0
    R_right_n: float = 0.0

    frame_weight_n: float = 0.0
    notes: Tuple[str, ...] = ()


def _frozen(a) -> np.ndarray:
    arr = np.array(a, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class DiagramSeries:
    """
    Series muestreadas para graficar.
      - x_mm:          posiciones [mm]
      - shear_n:       V(x) [N]
      - moment_nm:     M(x) [N·m]
      - deflection_mm: δ(x) [mm], + hacia abajo
    """
    x_mm: np.ndarray
    shear_n: np.ndarray
    moment_nm: np.ndarray
    deflection_mm: np.ndarray

    def __post_init__(self):
        for name in ("x_mm", "shear_n", "moment_nm", "deflection_mm"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        n = self.x_mm.size
        if not (self.shear_n.size == self.moment_nm.size == self.deflection_mm.size == n):
            raise ValueError("Las series deben tener la misma cantidad de muestras.")

    def __len__(self) -> int:
        return int(self.x_mm.size)

    @property
    def length_mm(self) -> float:
        return float(self.x_mm[-1]) if self.x_mm.size else 0.0

    def _pairs(self, y: np.ndarray) -> List[Tuple[float, float]]:
        return list(zip(self.x_mm.tolist(), y.tolist()))

    def shear(self) -> List[Tuple[float, float]]:
        return self._pairs(self.shear_n)

    def moment(self) -> List[Tuple[float, float]]:
        return self._pairs(self.moment_nm)

    def deflection(self) -> List[Tuple[float, float]]:
        return self._pairs(self.deflection_mm)
