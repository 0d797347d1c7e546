from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from beam_statics.domain.loads import DISTRIBUTED_LOAD, POINT_LOAD, UNIFORM_LOAD, FrameSection, Load
from beam_statics.domain.results import CornerReactions
from beam_statics.engine.normalize import (
    NormalizedBeamLoads,
    NormalizedUniformLoad,
    distributed_area_m2,
    guarded_square_side_m,
    load_magnitude_n,
)
from beam_statics.engine.settings import DEFAULT_SETTINGS, SolverSettings
from beam_statics.engine.simple_beam import SimpleBeamSolution, solve_simple_beam
from beam_statics.utils.conversions import mm_to_m, to_newtons
from beam_statics.utils.validation import validate_number, validate_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanLoad:
    """Carga resultante en planta: peso [N] aplicado en (cx, cy) [m]."""
    label: str
    weight_n: float
    cx_m: float
    cy_m: float


def corner_shares(L: float, W: float, cx: float, cy: float) -> Tuple[float, float, float, float]:
    """
    Fracción de una carga en (cx, cy) que toma cada esquina.

    Regla del rectángulo opuesto: cada esquina recibe el área del rectángulo
    entre la carga y la esquina diagonalmente opuesta, dividida por L*W.
      R1 (0,0): (L-cx)(W-cy)     R2 (L,0): cx(W-cy)
      R3 (0,W): (L-cx)cy         R4 (L,W): cx*cy
    La esquina más cercana a la carga recibe la mayor parte y las cuatro suman 1.
    """
    total = L * W
    if total <= 0:
        return 0.0, 0.0, 0.0, 0.0
    return (
        (L - cx) * (W - cy) / total,
        cx * (W - cy) / total,
        (L - cx) * cy / total,
        cx * cy / total,
    )


def distribute_to_corners(L: float, W: float, plan_loads: Sequence[PlanLoad]) -> CornerReactions:
    R = [0.0, 0.0, 0.0, 0.0]
    for pl in plan_loads:
        for k, share in enumerate(corner_shares(L, W, pl.cx_m, pl.cy_m)):
            R[k] += pl.weight_n * share
    return CornerReactions(R1=R[0], R2=R[1], R3=R[2], R4=R[3])


def plan_loads_from_inputs(
    loads: Sequence[Load],
    sections: Sequence[FrameSection],
    *,
    L: float,
    W: float,
    settings: Optional[SolverSettings] = None,
) -> Tuple[List[PlanLoad], List[str]]:
    """
    Convierte cargas y tramos del bastidor a cargas en planta.
      - Point:        P en (x, W/2)
      - Uniform:      w*(x2-x1) en ((x1+x2)/2, W/2)
      - Distributed:  q*ll*lw en (x + ll/2, W - lw/2)   (parche apoyado contra el borde y=W)
                      o, con solo area, parche cuadrado en (x + lado/2, W/2)
      - Tramo:        carcasa + carga primaria en el centro del tramo, (.., W/2)
    """
    s = settings or DEFAULT_SETTINGS
    out: List[PlanLoad] = []
    notes: List[str] = []

    for load in loads:
        problems = load.problems()
        if problems:
            msg = f'Carga ignorada ("{load.label}"): ' + "; ".join(problems)
            notes.append(msg)
            logger.warning(msg)
            continue

        q = load_magnitude_n(load, s)
        x0 = mm_to_m(validate_number(load.start_mm, 0.0))
        cy = W / 2.0

        if load.kind == POINT_LOAD:
            out.append(PlanLoad(load.label, q, x0, cy))

        elif load.kind == UNIFORM_LOAD:
            x1 = mm_to_m(validate_number(load.end_mm, 0.0))
            out.append(PlanLoad(load.label, q * (x1 - x0), 0.5 * (x0 + x1), cy))

        elif load.kind == DISTRIBUTED_LOAD:
            if load.has_patch:
                ll = mm_to_m(validate_positive(load.load_length_mm, 100.0))
                lw = mm_to_m(validate_positive(load.load_width_mm, 100.0))
                out.append(PlanLoad(load.label, q * ll * lw, x0 + ll / 2.0, W - lw / 2.0))
            else:
                area = distributed_area_m2(load, prefer_patch=True)
                side = guarded_square_side_m(area)
                out.append(PlanLoad(load.label, q * area, x0 + side / 2.0, cy))

    for sec in sections:
        problems = sec.problems()
        if problems:
            msg = f'Tramo ignorado ("{sec.label}"): ' + "; ".join(problems)
            notes.append(msg)
            logger.warning(msg)
            continue

        casing = to_newtons(validate_number(sec.casing_weight, 0.0), sec.casing_weight_unit,
                            gravity=s.gravity, lbs_factor=s.lbs_to_n)
        primary = to_newtons(validate_number(sec.primary_load, 0.0), sec.primary_load_unit,
                             gravity=s.gravity, lbs_factor=s.lbs_to_n)
        x1 = mm_to_m(validate_number(sec.start_mm, 0.0))
        x2 = mm_to_m(validate_number(sec.end_mm, 0.0))
        out.append(PlanLoad(f"{sec.label} (carcasa + primaria)", casing + primary, 0.5 * (x1 + x2), W / 2.0))

    for pl in out:
        if not (0.0 <= pl.cx_m <= L and 0.0 <= pl.cy_m <= W):
            notes.append(f'"{pl.label}" fuera de la planta del bastidor: alguna esquina puede quedar con reacción negativa.')

    return out, notes


@dataclass(frozen=True)
class BaseFrameSolution:
    corner_reactions: CornerReactions
    corner_reaction_force_n: float
    total_applied_n: float
    frame_weight_n: float
    load_per_beam_n: float
    critical_length_m: float
    w_equiv_npm: float
    member: SimpleBeamSolution
    notes: List[str]


def solve_base_frame(
    *,
    frame_length_m: float,
    frame_width_m: float,
    loads: Sequence[Load],
    sections: Sequence[FrameSection],
    area_m2: float,
    density_kgm3: float,
    E_pa: float,
    I_m4: float,
    settings: Optional[SolverSettings] = None,
) -> BaseFrameSolution:
    """
    Bastidor rectangular L x W sobre 4 esquinas.

    1) Reacciones de esquina por la regla del rectángulo opuesto + peso propio / 4.
    2) Barra crítica: Lc = max(L, W), carga por barra = total/4, w = (total/4)/Lc,
       resuelta como viga simple con uniforme en todo el vano.
    """
    s = settings or DEFAULT_SETTINGS
    L = float(frame_length_m)
    W = float(frame_width_m)

    plan, notes = plan_loads_from_inputs(loads, sections, L=L, W=W, settings=s)
    applied = sum(pl.weight_n for pl in plan)
    R = distribute_to_corners(L, W, plan)

    # Peso propio: 2 barras de L + 2 de W
    perimeter = 2.0 * (L + W)
    frame_weight = area_m2 * perimeter * density_kgm3 * s.gravity
    per_corner = frame_weight / 4.0
    R = CornerReactions(R1=R.R1 + per_corner, R2=R.R2 + per_corner, R3=R.R3 + per_corner, R4=R.R4 + per_corner)

    total = applied + frame_weight

    Lc = max(L, W)
    load_per_beam = total / 4.0
    w_equiv = load_per_beam / Lc

    member = solve_simple_beam(
        beam_length_m=Lc,
        a0_m=0.0,
        a1_m=Lc,
        loads=NormalizedBeamLoads(
            point_loads=[],
            uniform_loads=[NormalizedUniformLoad(label="w_eq", x1_m=0.0, x2_m=Lc, w_npm=w_equiv)],
            total_applied_n=load_per_beam,
            notes=[],
        ),
        E_pa=E_pa,
        I_m4=I_m4,
        settings=s,
    )
    notes.extend(member.notes)

    logger.debug(
        "Bastidor: R=(%.6g, %.6g, %.6g, %.6g) N, peso propio=%.6g N, total=%.6g N, Lc=%.6g m, w=%.6g N/m",
        R.R1, R.R2, R.R3, R.R4, frame_weight, total, Lc, w_equiv,
    )

    return BaseFrameSolution(
        corner_reactions=R,
        corner_reaction_force_n=max(R.as_tuple()),
        total_applied_n=total,
        frame_weight_n=frame_weight,
        load_per_beam_n=load_per_beam,
        critical_length_m=Lc,
        w_equiv_npm=w_equiv,
        member=member,
        notes=notes,
    )
