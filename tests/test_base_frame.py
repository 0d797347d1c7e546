import pytest

from beam_statics.domain.loads import DISTRIBUTED_LOAD, POINT_LOAD, UNIFORM_LOAD, FrameSection, Load
from beam_statics.engine.base_frame import PlanLoad, corner_shares, distribute_to_corners, solve_base_frame

E = 200e9
I = 1e-6
G = 9.81


def _solve(loads=(), sections=(), L=2.0, W=1.0, area=0.0, density=0.0):
    return solve_base_frame(frame_length_m=L, frame_width_m=W, loads=list(loads), sections=list(sections),
                            area_m2=area, density_kgm3=density, E_pa=E, I_m4=I)


def test_corner_shares_opposite_rectangle_rule():
    # carga en (L/4, W/4): la esquina más cercana (R1) toma 9/16
    L, W = 2.0, 1.0
    shares = corner_shares(L, W, L / 4, W / 4)
    assert shares == pytest.approx((9 / 16, 3 / 16, 3 / 16, 1 / 16))
    assert sum(shares) == pytest.approx(1.0)


@pytest.mark.parametrize("cx, cy", [(0.0, 0.0), (0.3, 0.9), (1.7, 0.2), (2.0, 1.0)])
def test_corner_shares_sum_to_one(cx, cy):
    assert sum(corner_shares(2.0, 1.0, cx, cy)) == pytest.approx(1.0)


def test_load_on_corner_goes_to_that_corner():
    R = distribute_to_corners(2.0, 1.0, [PlanLoad("P", 800.0, 2.0, 1.0)])
    assert R.as_tuple() == pytest.approx((0.0, 0.0, 0.0, 800.0))


def test_centered_load_splits_equally():
    sol = _solve([Load(POINT_LOAD, 1000.0, start_mm=1000.0)])
    assert sol.corner_reactions.as_tuple() == pytest.approx((250.0, 250.0, 250.0, 250.0))
    assert sol.corner_reaction_force_n == pytest.approx(250.0)
    assert sol.total_applied_n == pytest.approx(1000.0)


def test_self_weight_split_over_corners():
    area, density = 0.01, 7850.0
    sol = _solve(area=area, density=density)
    weight = area * 2 * (2.0 + 1.0) * density * G
    assert sol.frame_weight_n == pytest.approx(weight)
    assert sol.corner_reactions.as_tuple() == pytest.approx((weight / 4,) * 4)
    assert sol.total_applied_n == pytest.approx(weight)


def test_critical_member_equivalent_uniform_load():
    sol = _solve([Load(POINT_LOAD, 4000.0, start_mm=300.0)], L=2.0, W=1.0)
    total = 4000.0
    Lc = 2.0
    w = total / 4 / Lc
    assert sol.critical_length_m == pytest.approx(Lc)
    assert sol.load_per_beam_n == pytest.approx(total / 4)
    assert sol.w_equiv_npm == pytest.approx(w)
    assert sol.member.max_shear_n == pytest.approx(w * Lc / 2)
    assert sol.member.max_moment_nm == pytest.approx(w * Lc**2 / 8, rel=1e-9)


def test_width_longer_than_length_governs():
    sol = _solve([Load(POINT_LOAD, 100.0, start_mm=250.0)], L=0.5, W=3.0)
    assert sol.critical_length_m == pytest.approx(3.0)


def test_sections_add_casing_and_primary_load():
    sec = FrameSection("S1", 0.0, 1000.0, casing_weight=10.0, casing_weight_unit="kg", primary_load=301.9)
    sol = _solve(sections=[sec])
    P = 10.0 * G + 301.9
    # resultante en (0.5, 0.5) con L=2, W=1
    assert sol.corner_reactions.as_tuple() == pytest.approx((0.375 * P, 0.125 * P, 0.375 * P, 0.125 * P))
    assert sol.total_applied_n == pytest.approx(P)


def test_empty_section_list_matches_sectionless_case():
    loads = [Load(UNIFORM_LOAD, 300.0, start_mm=200.0, end_mm=1400.0)]
    assert _solve(loads, sections=[]).corner_reactions == _solve(loads).corner_reactions


def test_distributed_patch_against_far_edge():
    ld = Load(DISTRIBUTED_LOAD, 1000.0, start_mm=0.0, load_length_mm=1000.0, load_width_mm=500.0)
    sol = _solve([ld])
    # 500 N en (0.5, 0.75)
    assert sol.total_applied_n == pytest.approx(500.0)
    assert sol.corner_reactions.R3 == pytest.approx(500.0 * 1.5 * 0.75 / 2.0)
    assert sol.corner_reactions.total == pytest.approx(500.0)


def test_invalid_records_are_skipped_with_note():
    bad_sec = FrameSection("S9", 800.0, 200.0, casing_weight=50.0)
    bad_load = Load(UNIFORM_LOAD, 10.0, start_mm=500.0, end_mm=100.0)
    sol = _solve([bad_load], sections=[bad_sec])
    assert sol.total_applied_n == 0.0
    assert any("Tramo ignorado" in n for n in sol.notes)
    assert any("Carga ignorada" in n for n in sol.notes)


def test_load_outside_plan_is_reported():
    sol = _solve([Load(POINT_LOAD, 100.0, start_mm=2500.0)])
    assert sol.corner_reactions.total == pytest.approx(100.0)
    assert min(sol.corner_reactions.as_tuple()) < 0.0
    assert any("fuera de la planta" in n for n in sol.notes)


def test_distributed_area_only_becomes_centered_square_patch():
    # 0.25 m² => lado 0.5 m, resultante 25 N en (0.25, W/2)
    sol = _solve([Load(DISTRIBUTED_LOAD, 100.0, area_m2=0.25)])
    assert sol.total_applied_n == pytest.approx(25.0)
    assert sol.corner_reactions.as_tuple() == pytest.approx(
        (25.0 * 1.75 * 0.5 / 2.0, 25.0 * 0.25 * 0.5 / 2.0, 25.0 * 1.75 * 0.5 / 2.0, 25.0 * 0.25 * 0.5 / 2.0)
    )


def test_distributed_without_area_or_patch_is_skipped():
    base = _solve([Load(POINT_LOAD, 100.0, start_mm=1000.0)])
    sol = _solve([Load(POINT_LOAD, 100.0, start_mm=1000.0), Load(DISTRIBUTED_LOAD, 100.0)])
    assert sol.total_applied_n == pytest.approx(base.total_applied_n)
    assert sol.corner_reactions == base.corner_reactions
    assert any("Carga ignorada" in n for n in sol.notes)
