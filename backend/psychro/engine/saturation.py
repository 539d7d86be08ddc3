"""
Saturation pressure of water vapor over liquid water and over ice.

Implements the Hyland-Wexler regression used by ASHRAE Handbook -
Fundamentals (2017) Ch. 1, Eqs. (5) and (6):

    ln(p_ws) = C1/T + C2 + C3·T + C4·T² + C5·T³ + C6·T⁴ + C7·ln(T)

with T the absolute temperature (K for SI, °R for IP). The ice-phase
coefficients apply below the triple point of water, the liquid-phase ones at
or above it. The liquid regression has no T⁴ term (C6 = 0).

The temperature derivative is obtained analytically from the same form:

    dp_ws/dt = p_ws · (−C1/T² + C3 + 2·C4·T + 3·C5·T² + 4·C6·T³ + C7/T)
"""

import math
from enum import Enum
from typing import NamedTuple

from psychro.config import (
    UnitSystem,
    SATURATION_TEMPERATURE_RANGE,
    TRIPLE_POINT_WATER,
    ZERO_CELSIUS_AS_KELVIN,
    ZERO_FAHRENHEIT_AS_RANKINE,
)
from psychro.errors import InvalidInputRange


class Branch(str, Enum):
    ABOVE = "above"  # at or above the reference point (liquid water)
    BELOW = "below"  # below the reference point (ice)


class SaturationCoefficients(NamedTuple):
    c1: float
    c2: float
    c3: float
    c4: float
    c5: float
    c6: float
    c7: float


_COEFFICIENTS = {
    (UnitSystem.SI, Branch.BELOW): SaturationCoefficients(
        -5.6745359e03, 6.3925247e00, -9.677843e-03, 6.2215701e-07,
        2.0747825e-09, -9.4840240e-13, 4.1635019e00,
    ),
    (UnitSystem.SI, Branch.ABOVE): SaturationCoefficients(
        -5.8002206e03, 1.3914993e00, -4.8640239e-02, 4.1764768e-05,
        -1.4452093e-08, 0.0, 6.5459673e00,
    ),
    (UnitSystem.IP, Branch.BELOW): SaturationCoefficients(
        -1.0214165e04, -4.8932428e00, -5.3765794e-03, 1.9202377e-07,
        3.5575832e-10, -9.0344688e-14, 4.1635019e00,
    ),
    (UnitSystem.IP, Branch.ABOVE): SaturationCoefficients(
        -1.0440397e04, -1.1294650e01, -2.7022355e-02, 1.2890360e-05,
        -2.4780681e-09, 0.0, 6.5459673e00,
    ),
}


def classify(t: float, unit_system: UnitSystem, reference: dict) -> Branch:
    """
    Classify a temperature against a per-unit-system reference point.

    `reference` is one of the tables in config (TRIPLE_POINT_WATER or
    FREEZING_POINT_WATER).
    """
    return Branch.BELOW if t < reference[unit_system] else Branch.ABOVE


def absolute_temperature(t: float, unit_system: UnitSystem) -> float:
    """Convert °C to K (SI) or °F to °R (IP)."""
    if unit_system == UnitSystem.IP:
        return t + ZERO_FAHRENHEIT_AS_RANKINE
    return t + ZERO_CELSIUS_AS_KELVIN


def check_temperature(t: float, unit_system: UnitSystem, quantity: str = "temperature") -> None:
    """Raise InvalidInputRange if t is outside the saturation model's window."""
    low, high = SATURATION_TEMPERATURE_RANGE[unit_system]
    if not (low <= t <= high):
        raise InvalidInputRange(quantity, t, unit_system, (low, high))


def _coefficients(t: float, unit_system: UnitSystem) -> SaturationCoefficients:
    return _COEFFICIENTS[(unit_system, classify(t, unit_system, TRIPLE_POINT_WATER))]


def _ln_saturation_pressure(T: float, c: SaturationCoefficients) -> float:
    return (
        c.c1 / T
        + c.c2
        + c.c3 * T
        + c.c4 * T ** 2
        + c.c5 * T ** 3
        + c.c6 * T ** 4
        + c.c7 * math.log(T)
    )


def _deriv_ln_saturation_pressure(T: float, c: SaturationCoefficients) -> float:
    return (
        -c.c1 / T ** 2
        + c.c3
        + 2.0 * c.c4 * T
        + 3.0 * c.c5 * T ** 2
        + 4.0 * c.c6 * T ** 3
        + c.c7 / T
    )


def _evaluate(t: float, unit_system: UnitSystem, strict: bool) -> tuple[float, float]:
    """Return (ln p_ws, d ln p_ws / dt), or NaNs for a non-physical iterate."""
    if strict:
        check_temperature(t, unit_system)
    T = absolute_temperature(t, unit_system)
    if not T > 0.0:
        return math.nan, math.nan
    c = _coefficients(t, unit_system)
    return _ln_saturation_pressure(T, c), _deriv_ln_saturation_pressure(T, c)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def saturation_pressure(t: float, unit_system: UnitSystem, strict: bool = True) -> float:
    """
    Saturation vapor pressure of water at temperature t.

    Args:
        t: Temperature (°C for SI, °F for IP)
        unit_system: IP or SI
        strict: When False, skip the validity window check. Used by the
            Newton-Raphson objectives whose iterates may leave the window.

    Returns:
        Saturation pressure in Pa (SI) or psia (IP)

    Raises:
        InvalidInputRange: If strict and t is outside the validity window
    """
    ln_p, _ = _evaluate(t, unit_system, strict)
    return _exp(ln_p)


def deriv_saturation_pressure(t: float, unit_system: UnitSystem, strict: bool = True) -> float:
    """Temperature derivative of the saturation pressure, Pa/K or psi/°F."""
    ln_p, d_ln_p = _evaluate(t, unit_system, strict)
    return _exp(ln_p) * d_ln_p


def saturated_vapor_enthalpy(t: float, unit_system: UnitSystem) -> float:
    """
    Specific enthalpy of saturated water vapor, ASHRAE (2017) Ch. 1 Eq. (30).

    Returns kJ/kg (SI) or BTU/lb (IP).
    """
    if unit_system == UnitSystem.IP:
        return 1061.0 + 0.444 * t
    return 2501.0 + 1.860 * t
