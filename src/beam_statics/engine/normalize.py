from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from beam_statics.domain.loads import DISTRIBUTED_LOAD, POINT_LOAD, UNIFORM_LOAD, Load
from beam_statics.engine.settings import DEFAULT_SETTINGS, SolverSettings
from beam_statics.utils.conversions import mm_to_m, to_newtons
from beam_statics.utils.validation import validate_number, validate_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedPointLoad:
    label: str
    x_m: float
    P_n: float          # + hacia abajo


@dataclass(frozen=True)
class NormalizedUniformLoad:
    label: str
    x1_m: float
    x2_m: float
    w_npm: float        # N/m, + hacia abajo

    @property
    def length_m(self) -> float:
        return self.x2_m - self.x1_m


@dataclass(frozen=True)
class NormalizedBeamLoads:
    point_loads: List[NormalizedPointLoad]
    uniform_loads: List[NormalizedUniformLoad]
    total_applied_n: float
    notes: List[str]


def load_magnitude_n(load: Load, settings: Optional[SolverSettings] = None) -> float:
    s = settings or DEFAULT_SETTINGS
    mag = validate_number(load.magnitude, 0.0)
    return to_newtons(mag, load.unit, gravity=s.gravity, lbs_factor=s.lbs_to_n)


def distributed_area_m2(load: Load, *, prefer_patch: bool) -> float:
    """
    Área cargada [m²] de una Distributed Load.
    prefer_patch=True (bastidor): largo x ancho, y si falta, area_m2.
    prefer_patch=False (viga):    area_m2, y si falta, largo x ancho.
    """
    ll = validate_number(load.load_length_mm, 0.0)
    lw = validate_number(load.load_width_mm, 0.0)
    patch = (ll * lw) / 1_000_000.0 if ll > 0 and lw > 0 else 0.0
    area = validate_number(load.area_m2, 0.0)
    area = area if area > 0 else 0.0
    if prefer_patch:
        return patch or area
    return area or patch


def normalize_beam_loads(loads: Sequence[Load], settings: Optional[SolverSettings] = None) -> NormalizedBeamLoads:
    """
    Convierte las cargas de la viga simple a N y m.
      - Point Load   -> NormalizedPointLoad (x tal cual, puede caer fuera de los apoyos)
      - Uniform Load -> NormalizedUniformLoad sin recortar (el recorte a apoyos lo hace el solver)
      - Distributed  -> solo suma al total aplicado (no entra en reacciones/M/δ)
    """
    s = settings or DEFAULT_SETTINGS
    notes: List[str] = []
    n_points: List[NormalizedPointLoad] = []
    n_uniform: List[NormalizedUniformLoad] = []
    total = 0.0

    for load in loads:
        problems = load.problems()
        if problems:
            msg = f'Carga ignorada ("{load.label}"): ' + "; ".join(problems)
            notes.append(msg)
            logger.warning(msg)
            continue

        P = load_magnitude_n(load, s)
        x1 = mm_to_m(validate_number(load.start_mm, 0.0))

        if load.kind == POINT_LOAD:
            n_points.append(NormalizedPointLoad(label=load.label, x_m=x1, P_n=P))
            total += P

        elif load.kind == UNIFORM_LOAD:
            x2 = mm_to_m(validate_number(load.end_mm, 0.0))
            if not (x2 > x1):
                notes.append(f'Uniform Load ignorada ("{load.label}"): extremo inválido.')
                continue
            u = NormalizedUniformLoad(label=load.label, x1_m=x1, x2_m=x2, w_npm=P)
            n_uniform.append(u)
            total += P * u.length_m

        elif load.kind == DISTRIBUTED_LOAD:
            area = distributed_area_m2(load, prefer_patch=False)
            if area > 0:
                total += P * area
            msg = (f'Distributed Load "{load.label}" ({P * area:g} N): se suma a la carga total, '
                   f'pero su efecto en reacciones, momento y flecha de la viga no se modela.')
            notes.append(msg)
            logger.warning(msg)

    return NormalizedBeamLoads(point_loads=n_points, uniform_loads=n_uniform, total_applied_n=total, notes=notes)


def guarded_square_side_m(area_m2: float) -> float:
    """Lado [m] de un parche cuadrado equivalente (área inválida => 1 m²)."""
    return math.sqrt(validate_positive(area_m2, 1.0))
