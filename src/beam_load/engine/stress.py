from __future__ import annotations

import math
from dataclasses import dataclass

from beam_load.sections.profiles import SectionProperties


@dataclass(frozen=True)
class StressResult:
    max_normal_stress_MPa: float
    max_shear_stress_MPa: float
    safety_factor: float
    max_deflection_m: float


def normal_stress_MPa(M_Nm: float, S_m3: float) -> float:
    return M_Nm / S_m3 / 1e6 if S_m3 > 0 else 0.0


def shear_stress_MPa(V_N: float, A_m2: float) -> float:
    """τ = 1.5·V/A (factor 1.5 para toda forma de perfil)."""
    return 1.5 * V_N / A_m2 / 1e6 if A_m2 > 0 else 0.0


def safety_factor(yield_MPa: float, sigma_MPa: float) -> float:
    """fy <= 0 => 0 sin dividir. σ = 0 con fy > 0 => inf."""
    if yield_MPa <= 0:
        return 0.0
    if sigma_MPa == 0:
        return math.inf
    return yield_MPa / sigma_MPa


def headline_deflection_m(total_N: float, length_m: float, E_Pa: float, I_m4: float) -> float:
    """δ = 5·F·L⁴ / (384·E·I), con F la carga total aplicada. E·I <= 0 => 0."""
    EI = E_Pa * I_m4
    if EI <= 0:
        return 0.0
    return 5.0 * total_N * length_m**4 / (384.0 * EI)


def evaluate_stress(
    *,
    max_moment_Nm: float,
    max_shear_N: float,
    props: SectionProperties,
    yield_MPa: float,
    E_Pa: float,
    total_N: float,
    critical_length_m: float,
) -> StressResult:
    sigma = normal_stress_MPa(max_moment_Nm, props.section_modulus_m3)
    return StressResult(
        max_normal_stress_MPa=sigma,
        max_shear_stress_MPa=shear_stress_MPa(max_shear_N, props.area_m2),
        safety_factor=safety_factor(yield_MPa, sigma),
        max_deflection_m=headline_deflection_m(total_N, critical_length_m, E_Pa, props.moment_of_inertia_m4),
    )
