import numpy as np
import pytest

from beam_statics.domain.cases import BASE_FRAME, AnalysisCase
from beam_statics.domain.loads import DISTRIBUTED_LOAD, POINT_LOAD, UNIFORM_LOAD, FrameSection, Load
from beam_statics.engine.settings import SolverSettings
from beam_statics.engine.solver import solve
from beam_statics.materials.material_db import CUSTOM, MaterialDB
from beam_statics.sections.shapes import RectangularSection


def _beam(*loads, **kw):
    return AnalysisCase(loads=tuple(loads), **kw)


def _midspan(P=1000.0, **kw):
    return _beam(Load(POINT_LOAD, P, start_mm=500.0), **kw)


def test_midspan_beam_results():
    res, series = solve(_midspan())
    assert res.R_left_n == pytest.approx(500.0)
    assert res.R_right_n == pytest.approx(500.0)
    assert res.max_shear_force_n == pytest.approx(500.0)
    assert res.max_bending_moment_nm == pytest.approx(250.0)
    assert res.total_applied_load_n == pytest.approx(1000.0)
    assert res.total_beams == 1
    assert res.load_per_beam_n == pytest.approx(1000.0)

    S = 0.1 * 0.218**2 / 6.0
    sigma = 250.0 / S / 1e6
    assert res.section_modulus_m3 == pytest.approx(S)
    assert res.max_normal_stress_mpa == pytest.approx(sigma)
    assert res.safety_factor == pytest.approx(250.0 / sigma)
    assert res.max_shear_stress_mpa == pytest.approx(1.5 * 500.0 / 0.0218 / 1e6)

    I = 0.1 * 0.218**3 / 12.0
    assert res.max_deflection_m == pytest.approx(1000.0 / (48.0 * 200e9 * I))

    assert len(series) == 100
    assert series.length_mm == pytest.approx(1000.0)


def test_beam_self_weight_reported():
    res, _ = solve(_midspan())
    assert res.frame_weight_n == pytest.approx(0.0218 * 1.0 * 7850.0 * 9.81)


def test_symmetric_deflection_series():
    _, series = solve(_midspan())
    d = series.deflection_mm
    assert np.allclose(d, d[::-1], rtol=1e-9, atol=1e-12)
    assert d[0] == pytest.approx(0.0, abs=1e-15)


def test_solve_is_idempotent():
    case = _beam(
        Load(POINT_LOAD, 120.0, start_mm=300.0, unit="kg"),
        Load(UNIFORM_LOAD, 800.0, start_mm=100.0, end_mm=700.0),
    )
    r1, s1 = solve(case)
    r2, s2 = solve(case)
    assert r1 == r2
    assert np.array_equal(s1.x_mm, s2.x_mm)
    assert np.array_equal(s1.shear_n, s2.shear_n)
    assert np.array_equal(s1.moment_nm, s2.moment_nm)
    assert np.array_equal(s1.deflection_mm, s2.deflection_mm)


def test_larger_load_increases_moment_and_lowers_safety_factor():
    r_small, _ = solve(_midspan(1000.0))
    r_big, _ = solve(_midspan(3000.0))
    assert r_big.max_bending_moment_nm > r_small.max_bending_moment_nm
    assert r_big.safety_factor < r_small.safety_factor


def test_units_are_converted():
    res, _ = solve(_beam(Load(POINT_LOAD, 100.0, start_mm=500.0, unit="kg")))
    assert res.R_left_n == pytest.approx(490.5)
    res, _ = solve(_beam(Load(POINT_LOAD, 100.0, start_mm=500.0, unit="lbs")))
    assert res.total_applied_load_n == pytest.approx(444.822)


def test_distributed_load_on_beam_only_adds_to_total():
    res, _ = solve(_beam(Load(DISTRIBUTED_LOAD, 100.0, area_m2=2.0)))
    assert res.total_applied_load_n == pytest.approx(200.0)
    assert res.R_left_n == 0.0
    assert res.max_bending_moment_nm == 0.0
    assert any("Distributed Load" in n for n in res.notes)


def test_invalid_uniform_is_skipped():
    res, _ = solve(_beam(Load(UNIFORM_LOAD, 100.0, start_mm=500.0, end_mm=200.0)))
    assert res.total_applied_load_n == 0.0
    assert any("Carga ignorada" in n for n in res.notes)


def test_sections_ignored_on_simple_beam():
    res, _ = solve(_midspan(sections=(FrameSection("S1", 0.0, 500.0, casing_weight=100.0),)))
    assert res.total_applied_load_n == pytest.approx(1000.0)
    assert any("sections" in n for n in res.notes)


def test_invalid_geometry_uses_fallback():
    res, series = solve(_midspan(beam_length_mm=float("nan")))
    assert series.length_mm == pytest.approx(1000.0)
    assert res.max_bending_moment_nm == pytest.approx(250.0)


def test_base_frame_centered_load():
    case = AnalysisCase(
        mode=BASE_FRAME,
        frame_length_mm=2000.0,
        frame_width_mm=1000.0,
        loads=(Load(POINT_LOAD, 1000.0, start_mm=1000.0),),
        beam_density_kgm3=0.0,
    )
    res, series = solve(case)
    assert res.corner_reactions.as_tuple() == pytest.approx((250.0,) * 4)
    assert res.corner_reaction_force_n == pytest.approx(250.0)
    assert res.total_beams == 4
    assert res.load_per_beam_n == pytest.approx(250.0)
    assert res.frame_weight_n == 0.0
    assert res.R_left_n == 0.0
    assert series.length_mm == pytest.approx(2000.0)

    w = 250.0 / 2.0
    assert res.max_shear_force_n == pytest.approx(w * 2.0 / 2.0)
    assert res.max_bending_moment_nm == pytest.approx(w * 2.0**2 / 8.0, rel=1e-9)


def test_base_frame_includes_self_weight():
    case = AnalysisCase(mode=BASE_FRAME, frame_length_mm=1000.0, frame_width_mm=1000.0)
    res, _ = solve(case)
    weight = 0.0218 * 4.0 * 7850.0 * 9.81
    assert res.frame_weight_n == pytest.approx(weight)
    assert res.total_applied_load_n == pytest.approx(weight)
    assert res.corner_reactions.total == pytest.approx(weight)


def test_unknown_material_raises():
    with pytest.raises(KeyError):
        solve(_midspan(material_name="Unobtainium"))


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        solve(_midspan(mode="Cantilever"))


def test_custom_material_catalog():
    db = MaterialDB.standard().with_custom(yield_strength_mpa=100.0, elastic_modulus_gpa=70.0, density_kgm3=2700.0)
    res, _ = solve(_midspan(material_name=CUSTOM), materials=db)
    ref, _ = solve(_midspan())
    assert res.max_bending_moment_nm == pytest.approx(ref.max_bending_moment_nm)
    assert res.safety_factor == pytest.approx(ref.safety_factor * 100.0 / 250.0)
    assert res.max_deflection_m == pytest.approx(ref.max_deflection_m * 200.0 / 70.0)


def test_default_custom_material_has_no_safety_factor():
    res, _ = solve(_midspan(material_name=CUSTOM))
    assert res.safety_factor == 0.0
    assert res.max_deflection_m == 0.0
    assert any("sin fy" in n for n in res.notes)


def test_settings_control_sample_count():
    _, series = solve(_midspan(), settings=SolverSettings(n_samples=21))
    assert len(series) == 21


def test_smaller_section_raises_stress():
    r1, _ = solve(_midspan(cross_section=RectangularSection(50.0, 50.0)))
    r2, _ = solve(_midspan())
    assert r1.max_normal_stress_mpa > r2.max_normal_stress_mpa


def test_distributed_without_area_or_patch_is_skipped_on_beam():
    res, _ = solve(_midspan())
    res2, _ = solve(_beam(Load(POINT_LOAD, 1000.0, start_mm=500.0), Load(DISTRIBUTED_LOAD, 100.0)))
    assert res2.total_applied_load_n == pytest.approx(res.total_applied_load_n)
    assert res2.max_bending_moment_nm == pytest.approx(res.max_bending_moment_nm)
    assert any("Carga ignorada" in n for n in res2.notes)


@pytest.mark.parametrize("kw", [
    dict(area_m2=-2.0),
    dict(area_m2=float("nan")),
    dict(load_length_mm=-500.0, load_width_mm=400.0),
    dict(area_m2=0.0, load_length_mm=500.0, load_width_mm=0.0),
])
def test_distributed_with_invalid_area_is_skipped(kw):
    ld = Load(DISTRIBUTED_LOAD, 100.0, **kw)
    assert ld.problems()
    res, _ = solve(_beam(ld))
    assert res.total_applied_load_n == 0.0
    assert any("Carga ignorada" in n for n in res.notes)
