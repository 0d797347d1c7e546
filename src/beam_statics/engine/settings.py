from __future__ import annotations

from dataclasses import dataclass

from beam_statics.utils.conversions import GRAVITY, LBS_TO_N


@dataclass(frozen=True)
class SolverSettings:
    # Muestreo de diagramas
    n_samples: int = 100

    # Conversiones
    gravity: float = GRAVITY
    lbs_to_n: float = LBS_TO_N

    # Valores por defecto (mm) si la geometría ingresada es inválida
    beam_length_mm: float = 1000.0
    frame_length_mm: float = 1000.0
    frame_width_mm: float = 1000.0
    width_mm: float = 100.0
    height_mm: float = 218.0
    flange_width_mm: float = 66.0
    flange_thickness_mm: float = 3.0
    web_thickness_mm: float = 44.8
    diameter_mm: float = 100.0

    # Tolerancia geométrica (m)
    tol: float = 1e-9

    # Piso para denominadores (S, A, σ)
    denom_floor: float = 1e-12


DEFAULT_SETTINGS = SolverSettings()
