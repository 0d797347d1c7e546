from __future__ import annotations

import logging
from typing import Optional, Tuple

from beam_statics.domain.cases import ANALYSIS_MODES, BASE_FRAME, AnalysisCase
from beam_statics.domain.results import CornerReactions, DiagramSeries, Results
from beam_statics.engine.base_frame import solve_base_frame
from beam_statics.engine.diagrams import sample_series
from beam_statics.engine.normalize import normalize_beam_loads
from beam_statics.engine.settings import DEFAULT_SETTINGS, SolverSettings
from beam_statics.engine.simple_beam import solve_simple_beam
from beam_statics.engine.stress import evaluate_stress
from beam_statics.materials.material_db import MaterialDB
from beam_statics.sections.properties import section_properties
from beam_statics.utils.conversions import mm_to_m
from beam_statics.utils.validation import validate_number, validate_positive

logger = logging.getLogger(__name__)


def solve(
    case: AnalysisCase,
    materials: Optional[MaterialDB] = None,
    settings: Optional[SolverSettings] = None,
) -> Tuple[Results, DiagramSeries]:
    """
    Cálculo completo para una instantánea de entradas.

      geometría/cargas -> validación y conversión -> propiedades de sección
        -> viga simple | bastidor -> tensiones y FS -> Results + DiagramSeries

    Función pura: no guarda estado entre llamadas.
    """
    s = settings or DEFAULT_SETTINGS
    db = materials if materials is not None else MaterialDB.standard()

    if case.mode not in ANALYSIS_MODES:
        raise ValueError(f"Modo de análisis desconocido: {case.mode!r} (esperado uno de {ANALYSIS_MODES})")

    material = db.resolve(case.material_name)
    props = section_properties(case.cross_section, s)

    E = material.elastic_modulus_pa
    density = validate_number(
        case.beam_density_kgm3 if case.beam_density_kgm3 is not None else material.density_kgm3, 0.0
    )

    logger.debug(
        "solve: modo=%s, sección=%s, material=%s, A=%.6g m², I=%.6g m⁴, S=%.6g m³",
        case.mode, case.cross_section.label, material.name, props.area_m2, props.inertia_m4, props.modulus_m3,
    )

    notes = []
    R_left = 0.0
    R_right = 0.0
    corner = CornerReactions()
    corner_max = 0.0

    if case.mode == BASE_FRAME:
        L_mm = validate_positive(case.frame_length_mm, s.frame_length_mm)
        W_mm = validate_positive(case.frame_width_mm, s.frame_width_mm)
        frame = solve_base_frame(
            frame_length_m=mm_to_m(L_mm),
            frame_width_m=mm_to_m(W_mm),
            loads=case.loads,
            sections=case.sections,
            area_m2=props.area_m2,
            density_kgm3=density,
            E_pa=E,
            I_m4=props.inertia_m4,
            settings=s,
        )
        member = frame.member
        notes.extend(frame.notes)
        total_beams = 4
        total_applied = frame.total_applied_n
        load_per_beam = frame.load_per_beam_n
        frame_weight = frame.frame_weight_n
        corner = frame.corner_reactions
        corner_max = frame.corner_reaction_force_n
        governing_mm = max(L_mm, W_mm)
    else:
        beam_mm = validate_positive(case.beam_length_mm, s.beam_length_mm)
        a0_mm = validate_number(case.left_support_mm, 0.0)
        a1_mm = validate_number(case.right_support_mm, beam_mm)
        if case.sections:
            notes.append("Los tramos (sections) solo aplican al bastidor: se ignoran en viga simple.")

        beam_loads = normalize_beam_loads(case.loads, s)
        notes.extend(beam_loads.notes)
        member = solve_simple_beam(
            beam_length_m=mm_to_m(beam_mm),
            a0_m=mm_to_m(a0_mm),
            a1_m=mm_to_m(a1_mm),
            loads=beam_loads,
            E_pa=E,
            I_m4=props.inertia_m4,
            settings=s,
        )
        notes.extend(member.notes)
        total_beams = 1
        total_applied = beam_loads.total_applied_n
        load_per_beam = total_applied
        frame_weight = props.area_m2 * mm_to_m(beam_mm) * density * s.gravity
        R_left = member.R1_n
        R_right = member.R2_n
        governing_mm = beam_mm

    stress = evaluate_stress(
        max_moment_nm=member.max_moment_nm,
        max_shear_n=member.max_shear_n,
        section_modulus_m3=props.modulus_m3,
        area_m2=props.area_m2,
        yield_strength_mpa=validate_number(material.yield_strength_mpa, 0.0),
        denom_floor=s.denom_floor,
    )
    if material.yield_strength_mpa <= 0:
        notes.append(f'Material "{material.name}" sin fy: factor de seguridad indeterminado (0).')

    results = Results(
        max_shear_force_n=member.max_shear_n,
        max_bending_moment_nm=member.max_moment_nm,
        max_normal_stress_mpa=stress.normal_stress_mpa,
        max_shear_stress_mpa=stress.shear_stress_mpa,
        safety_factor=stress.safety_factor,
        total_beams=total_beams,
        load_per_beam_n=load_per_beam,
        moment_of_inertia_m4=props.inertia_m4,
        section_modulus_m3=props.modulus_m3,
        area_m2=props.area_m2,
        corner_reaction_force_n=corner_max,
        corner_reactions=corner,
        max_deflection_m=member.max_deflection_m,
        total_applied_load_n=total_applied,
        R_left_n=R_left,
        R_right_n=R_right,
        frame_weight_n=frame_weight,
        notes=tuple(notes),
    )

    model = member.model
    series = sample_series(
        shear=model.eval_V_array,
        moment=model.eval_M_array,
        deflection=model.eval_delta_array,
        governing_length_mm=governing_mm,
        n=s.n_samples,
    )

    logger.debug(
        "Cálculo %s: Mmax=%.4g N·m, σ=%.4g MPa, FS=%.3g, δmax=%.4g mm",
        case.mode, results.max_bending_moment_nm, results.max_normal_stress_mpa,
        results.safety_factor, results.max_deflection_m * 1000.0,
    )
    return results, series
