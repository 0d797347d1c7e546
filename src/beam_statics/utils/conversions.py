from __future__ import annotations

GRAVITY = 9.81          # m/s², kg -> N
LBS_TO_N = 4.44822      # 1 lbf = 4.44822 N

UNIT_N = "N"
UNIT_KG = "kg"
UNIT_LBS = "lbs"
FORCE_UNITS = (UNIT_N, UNIT_KG, UNIT_LBS)


def kg_to_n(kg: float, gravity: float = GRAVITY) -> float:
    return float(kg) * gravity


def lbs_to_n(lbs: float, factor: float = LBS_TO_N) -> float:
    return float(lbs) * factor


def to_newtons(magnitude: float, unit: str = UNIT_N, *, gravity: float = GRAVITY, lbs_factor: float = LBS_TO_N) -> float:
    """
    Convierte una magnitud etiquetada con unidad a newtons.
    Para cargas lineales (por metro) o superficiales (por m²) el factor es el mismo.
    """
    u = (unit or UNIT_N).strip()
    if u == UNIT_N:
        return float(magnitude)
    if u == UNIT_KG:
        return kg_to_n(magnitude, gravity)
    if u == UNIT_LBS:
        return lbs_to_n(magnitude, lbs_factor)
    raise ValueError(f"Unidad de fuerza desconocida: {unit!r} (esperado una de {FORCE_UNITS})")


def mm_to_m(v_mm: float) -> float:
    return float(v_mm) / 1000.0
