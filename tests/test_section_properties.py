import math

import pytest

from beam_statics.sections.properties import section_properties
from beam_statics.sections.shapes import CChannelSection, CircularSection, IBeamSection, RectangularSection


def test_rectangle_100x218():
    p = section_properties(RectangularSection(width_mm=100.0, height_mm=218.0))
    I = 0.1 * 0.218**3 / 12.0
    assert p.inertia_m4 == pytest.approx(I, abs=1e-9)
    assert p.inertia_m4 == pytest.approx(I, rel=1e-12)
    assert p.area_m2 == pytest.approx(0.0218)
    assert p.modulus_m3 == pytest.approx(I / 0.109)


def test_i_beam_parallel_axis():
    p = section_properties(IBeamSection(height_mm=200.0, flange_width_mm=100.0,
                                        flange_thickness_mm=10.0, web_thickness_mm=5.0))
    h, bf, tf, tw = 0.2, 0.1, 0.01, 0.005
    hw = h - 2 * tf
    d = (h - tf) / 2
    I = 2 * (bf * tf**3 / 12 + bf * tf * d**2) + tw * hw**3 / 12
    assert p.inertia_m4 == pytest.approx(I, rel=1e-12)
    assert p.area_m2 == pytest.approx(2 * bf * tf + hw * tw)
    assert p.modulus_m3 == pytest.approx(I / (h / 2))


def test_channel_uses_i_beam_formula():
    dims = dict(height_mm=150.0, flange_width_mm=60.0, flange_thickness_mm=8.0, web_thickness_mm=6.0)
    assert section_properties(CChannelSection(**dims)) == section_properties(IBeamSection(**dims))


def test_circular():
    p = section_properties(CircularSection(diameter_mm=100.0))
    assert p.area_m2 == pytest.approx(math.pi * 0.05**2)
    assert p.inertia_m4 == pytest.approx(math.pi * 0.1**4 / 64)
    assert p.modulus_m3 == pytest.approx(math.pi * 0.1**3 / 32)


def test_invalid_dimension_falls_back_to_default():
    bad = section_properties(RectangularSection(width_mm=-5.0, height_mm=float("nan")))
    ref = section_properties(RectangularSection(width_mm=100.0, height_mm=218.0))
    assert bad == ref


def test_unknown_section_type():
    with pytest.raises(TypeError):
        section_properties("HSS 4x4")
