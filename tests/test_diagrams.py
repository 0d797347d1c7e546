import numpy as np
import pytest

from beam_statics.domain.results import DiagramSeries
from beam_statics.engine.diagrams import sample_series


def test_sample_series_grid_and_units():
    s = sample_series(
        shear=lambda x: 10.0 - 20.0 * x,
        moment=lambda x: x * (1.0 - x),
        deflection=lambda x: np.full_like(x, 0.002),
        governing_length_mm=1000.0,
    )
    assert len(s) == 100
    assert s.x_mm[0] == 0.0
    assert s.length_mm == pytest.approx(1000.0)
    assert s.shear_n[0] == pytest.approx(10.0)
    assert s.shear_n[-1] == pytest.approx(-10.0)
    # flecha en mm
    assert np.allclose(s.deflection_mm, 2.0)


def test_custom_sample_count():
    s = sample_series(shear=np.zeros_like, moment=np.zeros_like, deflection=np.zeros_like,
                      governing_length_mm=500.0, n=11)
    assert len(s) == 11
    assert s.x_mm[1] == pytest.approx(50.0)


def test_series_are_read_only():
    s = DiagramSeries(x_mm=[0.0, 1.0], shear_n=[1.0, 2.0], moment_nm=[0.0, 0.0], deflection_mm=[0.0, 0.0])
    with pytest.raises(ValueError):
        s.shear_n[0] = 5.0
    assert s.shear() == [(0.0, 1.0), (1.0, 2.0)]


def test_series_length_mismatch():
    with pytest.raises(ValueError):
        DiagramSeries(x_mm=[0.0, 1.0, 2.0], shear_n=[1.0], moment_nm=[0.0, 0.0, 0.0], deflection_mm=[0.0, 0.0, 0.0])
