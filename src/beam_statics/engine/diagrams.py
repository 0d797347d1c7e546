from __future__ import annotations

from typing import Callable

import numpy as np

from beam_statics.domain.results import DiagramSeries

ArrayFn = Callable[[np.ndarray], np.ndarray]


def sample_series(
    *,
    shear: ArrayFn,
    moment: ArrayFn,
    deflection: ArrayFn,
    governing_length_mm: float,
    n: int = 100,
) -> DiagramSeries:
    """
    Muestrea V, M y δ en n puntos equiespaciados sobre [0, governing_length_mm].

    Las funciones reciben x en metros y devuelven N, N·m y m.
    La flecha se entrega en mm.
    """
    x_mm = np.linspace(0.0, float(governing_length_mm), int(n), dtype=float)
    x_m = x_mm / 1000.0
    return DiagramSeries(
        x_mm=x_mm,
        shear_n=np.asarray(shear(x_m), dtype=float),
        moment_nm=np.asarray(moment(x_m), dtype=float),
        deflection_mm=np.asarray(deflection(x_m), dtype=float) * 1000.0,
    )
