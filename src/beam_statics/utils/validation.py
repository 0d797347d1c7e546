from __future__ import annotations

import math


def validate_number(value, fallback: float = 0.0) -> float:
    """
    Devuelve value como float, o fallback si no es un número finito
    (NaN, ±inf, None o texto no numérico).
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return float(fallback)
    if math.isnan(v) or math.isinf(v):
        return float(fallback)
    return v


def validate_positive(value, fallback: float = 1.0) -> float:
    """Como validate_number, pero además reemplaza valores <= 0 por fallback."""
    v = validate_number(value, fallback)
    return float(fallback) if v <= 0 else v
