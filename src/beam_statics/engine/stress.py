from __future__ import annotations

from dataclasses import dataclass

SHEAR_SHAPE_FACTOR = 1.5  # τmax = 1.5 V/A (distribución no uniforme del corte)


@dataclass(frozen=True)
class StressResult:
    normal_stress_mpa: float
    shear_stress_mpa: float
    safety_factor: float      # 0 => indeterminado (fy <= 0)


def evaluate_stress(
    *,
    max_moment_nm: float,
    max_shear_n: float,
    section_modulus_m3: float,
    area_m2: float,
    yield_strength_mpa: float,
    denom_floor: float = 1e-12,
) -> StressResult:
    """
    σ = M / S        [MPa]
    τ = 1.5 V / A    [MPa]
    FS = fy / σ      (0 si fy <= 0)

    S, A y σ se acotan inferiormente con denom_floor para no dividir por cero.
    """
    sigma = abs(float(max_moment_nm)) / max(float(section_modulus_m3), denom_floor) / 1e6
    tau = SHEAR_SHAPE_FACTOR * abs(float(max_shear_n)) / max(float(area_m2), denom_floor) / 1e6

    fy = float(yield_strength_mpa)
    fs = fy / max(sigma, denom_floor) if fy > 0 else 0.0

    return StressResult(normal_stress_mpa=sigma, shear_stress_mpa=tau, safety_factor=fs)
