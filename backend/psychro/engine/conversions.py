"""
Psychrometric property conversions.

Forward (closed-form) relations between dry-bulb temperature, humidity ratio,
relative humidity, wet-bulb temperature, dew point and specific enthalpy, and
the Newton-Raphson inversions for the relations that have no closed-form
inverse. References are to ASHRAE Handbook - Fundamentals (2017), Ch. 1.

Units follow the unit system argument:
  SI: °C, Pa, kJ/kg_da, m³/kg_da
  IP: °F, psia, BTU/lb_da, ft³/lb_da
"""

import math
from typing import NamedTuple

from psychro.config import (
    UnitSystem,
    FREEZING_POINT_WATER,
    MASS_RATIO_WATER_DRY_AIR,
    MIN_HUMIDITY_RATIO,
    R_DA_IP,
    R_DA_SI,
    RELATIVE_HUMIDITY_TOLERANCE,
    SATURATION_TEMPERATURE_RANGE,
    SOLVER_TOLERANCE,
    WET_BULB_MARGIN,
)
from psychro.engine.saturation import (
    Branch,
    absolute_temperature,
    classify,
    deriv_saturation_pressure,
    saturated_vapor_enthalpy,
    saturation_pressure,
)
from psychro.engine.solver import find_root
from psychro.errors import (
    ConvergenceFailure,
    InvalidInputRange,
    InvalidOrdering,
    InvalidParameter,
    InvalidRelativeHumidity,
)


class EnthalpyCoefficients(NamedTuple):
    cp_da: float  # specific heat of dry air
    h_fg: float   # enthalpy of saturated vapor at 0° (°C or °F)
    cp_v: float   # specific heat of water vapor


class WetBulbCoefficients(NamedTuple):
    """
    Coefficients of ASHRAE Eqs. (33)/(35) SI and (35)/(37) IP:

        W = ((a - b·t*)·Ws* - cp_da·(t - t*)) / (a + c·t - d·t*)
    """
    a: float
    b: float
    c: float
    d: float
    cp_da: float


class DewPointCoefficients(NamedTuple):
    """ASHRAE Eqs. (39)/(40) with α = ln(p_w), p_w in kPa (SI) or psia (IP)."""
    above: tuple[float, float, float, float, float]
    below: tuple[float, float, float]
    pressure_scale: float


ENTHALPY = {
    UnitSystem.SI: EnthalpyCoefficients(1.006, 2501.0, 1.860),
    UnitSystem.IP: EnthalpyCoefficients(0.240, 1061.0, 0.444),
}

WET_BULB = {
    (UnitSystem.SI, Branch.ABOVE): WetBulbCoefficients(2501.0, 2.326, 1.860, 4.186, 1.006),
    (UnitSystem.SI, Branch.BELOW): WetBulbCoefficients(2830.0, 0.240, 1.860, 2.100, 1.006),
    (UnitSystem.IP, Branch.ABOVE): WetBulbCoefficients(1093.0, 0.556, 0.444, 1.000, 0.240),
    (UnitSystem.IP, Branch.BELOW): WetBulbCoefficients(1220.0, 0.040, 0.444, 0.480, 0.240),
}

DEW_POINT = {
    UnitSystem.SI: DewPointCoefficients(
        above=(6.54, 14.526, 0.7389, 0.09486, 0.4569),
        below=(6.09, 12.608, 0.4959),
        pressure_scale=0.001,  # Pa -> kPa
    ),
    UnitSystem.IP: DewPointCoefficients(
        above=(100.45, 33.193, 2.319, 0.17074, 1.2063),
        below=(90.12, 26.142, 0.8927),
        pressure_scale=1.0,
    ),
}


# ---------------------------------------------------------------------------
# Humidity ratio / vapor pressure
# ---------------------------------------------------------------------------

def bounded_humidity_ratio(W: float) -> float:
    """Replace a non-positive humidity ratio with the minimum floor."""
    return max(W, MIN_HUMIDITY_RATIO)


def humidity_ratio_from_vapor_pressure(Pv: float, pressure: float) -> float:
    """Humidity ratio from partial vapor pressure, Eq. (20)."""
    if Pv >= pressure:
        raise InvalidParameter(
            "partial vapor pressure",
            Pv,
            f"Must be below the total pressure {pressure}",
        )
    return bounded_humidity_ratio(MASS_RATIO_WATER_DRY_AIR * Pv / (pressure - Pv))


def vapor_pressure_from_humidity_ratio(W: float, pressure: float) -> float:
    """Partial vapor pressure from humidity ratio."""
    W = bounded_humidity_ratio(W)
    return pressure * W / (MASS_RATIO_WATER_DRY_AIR + W)


def saturation_humidity_ratio(Tdb: float, pressure: float, unit_system: UnitSystem) -> float:
    """Humidity ratio of saturated air at Tdb, Eq. (23)."""
    return humidity_ratio_from_vapor_pressure(
        saturation_pressure(Tdb, unit_system), pressure
    )


def check_rel_hum(RH: float) -> None:
    """Raise InvalidRelativeHumidity unless RH lies in [0, 1] (within tolerance)."""
    if not (-RELATIVE_HUMIDITY_TOLERANCE <= RH <= 1.0 + RELATIVE_HUMIDITY_TOLERANCE):
        raise InvalidRelativeHumidity(RH)


def humidity_ratio_from_rel_hum(
    Tdb: float, RH: float, pressure: float, unit_system: UnitSystem
) -> float:
    """Humidity ratio from dry-bulb temperature and relative humidity (0-1)."""
    check_rel_hum(RH)
    Pv = RH * saturation_pressure(Tdb, unit_system)
    return humidity_ratio_from_vapor_pressure(Pv, pressure)


def rel_hum_from_humidity_ratio(
    Tdb: float, W: float, pressure: float, unit_system: UnitSystem
) -> float:
    """
    Relative humidity (0-1) implied by Tdb and W. Not range-checked.

    Air at the humidity ratio floor carries no vapor and reports exactly 0.
    """
    if W <= MIN_HUMIDITY_RATIO:
        return 0.0
    Pv = vapor_pressure_from_humidity_ratio(W, pressure)
    return Pv / saturation_pressure(Tdb, unit_system)


def degree_of_saturation(
    Tdb: float, W: float, pressure: float, unit_system: UnitSystem
) -> float:
    """Ratio of W to the saturation humidity ratio at the same Tdb."""
    return bounded_humidity_ratio(W) / saturation_humidity_ratio(Tdb, pressure, unit_system)


# ---------------------------------------------------------------------------
# Wet-bulb temperature
# ---------------------------------------------------------------------------

def humidity_ratio_from_wet_bulb(
    Tdb: float, Twb: float, pressure: float, unit_system: UnitSystem
) -> float:
    """
    Humidity ratio from dry-bulb and wet-bulb temperatures.

    Closed form; the coefficient set depends on whether the wet-bulb
    temperature is above or below the freezing point of water.
    """
    if Twb > Tdb:
        raise InvalidOrdering("wet-bulb temperature", Twb, Tdb)

    Ws = saturation_humidity_ratio(Twb, pressure, unit_system)
    k = WET_BULB[(unit_system, classify(Twb, unit_system, FREEZING_POINT_WATER))]
    W = ((k.a - k.b * Twb) * Ws - k.cp_da * (Tdb - Twb)) / (k.a + k.c * Tdb - k.d * Twb)
    return bounded_humidity_ratio(W)


def wet_bulb_from_humidity_ratio(
    Tdb: float, W: float, pressure: float, unit_system: UnitSystem
) -> float:
    """
    Wet-bulb temperature from dry-bulb temperature and humidity ratio.

    Solves the energy balance

        f(t*) = W·(a + c·t - d·t*) - (a - b·t*)·Ws(t*) + cp_da·(t - t*) = 0

    by Newton-Raphson. The coefficient set follows the current iterate across
    the freezing point.

    f is concave and decreasing below the boiling point, where Ws(t*) grows
    without bound, so iterating from any point right of the root converges
    from the right. The solve starts at the dry-bulb temperature, or just
    below the boiling point when the saturation pressure at Tdb reaches the
    total pressure.

    Raises:
        ConvergenceFailure: If the root lies above the dry-bulb temperature
        InvalidInputRange: If the root lies below the saturation model's window
    """
    W = bounded_humidity_ratio(W)
    margin = WET_BULB_MARGIN[unit_system]
    if saturation_pressure(Tdb, unit_system) < pressure:
        t0 = Tdb
    else:
        t0 = boiling_point(pressure, unit_system) - margin

    def coefficients(t: float) -> WetBulbCoefficients:
        return WET_BULB[(unit_system, classify(t, unit_system, FREEZING_POINT_WATER))]

    def saturation(t: float) -> tuple[float, float]:
        Ps = saturation_pressure(t, unit_system, strict=False)
        dPs = deriv_saturation_pressure(t, unit_system, strict=False)
        Ws = MASS_RATIO_WATER_DRY_AIR * Ps / (pressure - Ps)
        dWs = MASS_RATIO_WATER_DRY_AIR * pressure * dPs / (pressure - Ps) ** 2
        return Ws, dWs

    def f(t: float) -> float:
        k = coefficients(t)
        Ws, _ = saturation(t)
        return W * (k.a + k.c * Tdb - k.d * t) - (k.a - k.b * t) * Ws + k.cp_da * (Tdb - t)

    def df(t: float) -> float:
        k = coefficients(t)
        Ws, dWs = saturation(t)
        return -k.d * W - (k.a - k.b * t) * dWs + k.b * Ws - k.cp_da

    Twb = find_root(f, df, t0, SOLVER_TOLERANCE[unit_system], "wet-bulb temperature")
    # The IP ice regression puts the saturated root slightly above Tdb
    if Twb > Tdb + margin:
        raise ConvergenceFailure(
            "wet-bulb temperature", Twb, f"root exceeds the dry-bulb temperature {Tdb}"
        )
    return _check_solved(min(Twb, Tdb), unit_system, "wet-bulb temperature")


# ---------------------------------------------------------------------------
# Dew point temperature
# ---------------------------------------------------------------------------

def humidity_ratio_from_dew_point(
    Tdp: float, pressure: float, unit_system: UnitSystem
) -> float:
    """Humidity ratio of air whose vapor is saturated at the dew point."""
    return saturation_humidity_ratio(Tdp, pressure, unit_system)


def dew_point_estimate(Pv: float, unit_system: UnitSystem) -> float:
    """
    Approximate dew point from partial vapor pressure, Eqs. (39) and (40).

    When the two regressions disagree on which side of freezing the dew point
    lies, their average is returned.
    """
    k = DEW_POINT[unit_system]
    p = Pv * k.pressure_scale
    alpha = math.log(p)
    c14, c15, c16, c17, c18 = k.above
    t_above = c14 + c15 * alpha + c16 * alpha ** 2 + c17 * alpha ** 3 + c18 * p ** 0.1984
    c0, c1, c2 = k.below
    t_below = c0 + c1 * alpha + c2 * alpha ** 2

    freezing = FREEZING_POINT_WATER[unit_system]
    above = t_above >= freezing
    below = t_below < freezing
    if above and not below:
        return t_above
    if below and not above:
        return t_below
    return 0.5 * (t_above + t_below)


def dew_point_from_humidity_ratio(
    W: float, pressure: float, unit_system: UnitSystem
) -> float:
    """
    Dew point temperature from humidity ratio.

    Returns NaN for air at the humidity ratio floor, which has no dew point.
    """
    if W <= MIN_HUMIDITY_RATIO:
        return math.nan

    Pv = vapor_pressure_from_humidity_ratio(W, pressure)
    return _saturation_temperature(Pv, unit_system, "dew point temperature")


def boiling_point(pressure: float, unit_system: UnitSystem) -> float:
    """Temperature at which the saturation pressure equals the total pressure."""
    return _saturation_temperature(pressure, unit_system, "boiling point")


def _saturation_temperature(Pv: float, unit_system: UnitSystem, quantity: str) -> float:
    """Solve p_ws(t) = Pv, seeded with the analytic dew point estimate."""

    def f(t: float) -> float:
        return saturation_pressure(t, unit_system, strict=False) - Pv

    def df(t: float) -> float:
        return deriv_saturation_pressure(t, unit_system, strict=False)

    t = find_root(
        f, df, dew_point_estimate(Pv, unit_system),
        SOLVER_TOLERANCE[unit_system], quantity,
    )
    return _check_solved(t, unit_system, quantity)


def _check_solved(t: float, unit_system: UnitSystem, quantity: str) -> float:
    """
    Reject a solved temperature outside the saturation model's window.

    The iterates may extrapolate the regressions; a root that stays outside
    the window is not reported. Roots within one solver tolerance of the
    bounds are accepted.
    """
    low, high = SATURATION_TEMPERATURE_RANGE[unit_system]
    slack = SOLVER_TOLERANCE[unit_system]
    if not (low - slack <= t <= high + slack):
        raise InvalidInputRange(quantity, t, unit_system, (low, high))
    return t


def saturation_temperature_from_humidity_ratio(
    W: float, pressure: float, unit_system: UnitSystem
) -> float:
    """
    Temperature at which W equals the saturation humidity ratio.

    Solves f(t) = W·(p - p_ws(t)) - 0.621945·p_ws(t) = 0, seeded with the
    analytic dew point estimate.
    """
    W = bounded_humidity_ratio(W)
    Pv = vapor_pressure_from_humidity_ratio(W, pressure)

    def f(t: float) -> float:
        Ps = saturation_pressure(t, unit_system, strict=False)
        return W * (pressure - Ps) - MASS_RATIO_WATER_DRY_AIR * Ps

    def df(t: float) -> float:
        dPs = deriv_saturation_pressure(t, unit_system, strict=False)
        return -(W + MASS_RATIO_WATER_DRY_AIR) * dPs

    t = find_root(
        f, df, dew_point_estimate(Pv, unit_system),
        SOLVER_TOLERANCE[unit_system], "saturation temperature",
    )
    return _check_solved(t, unit_system, "saturation temperature")


# ---------------------------------------------------------------------------
# Enthalpy
# ---------------------------------------------------------------------------

def enthalpy_from_humidity_ratio(Tdb: float, W: float, unit_system: UnitSystem) -> float:
    """Moist air specific enthalpy, Eq. (32): h = cp_da·t + W·h_g(t)."""
    k = ENTHALPY[unit_system]
    return k.cp_da * Tdb + bounded_humidity_ratio(W) * saturated_vapor_enthalpy(Tdb, unit_system)


def humidity_ratio_from_enthalpy(Tdb: float, h: float, unit_system: UnitSystem) -> float:
    """Humidity ratio from dry-bulb temperature and specific enthalpy."""
    k = ENTHALPY[unit_system]
    return bounded_humidity_ratio((h - k.cp_da * Tdb) / (k.h_fg + k.cp_v * Tdb))


def dry_bulb_from_enthalpy_humidity_ratio(h: float, W: float, unit_system: UnitSystem) -> float:
    """Dry-bulb temperature from specific enthalpy and humidity ratio."""
    k = ENTHALPY[unit_system]
    W = bounded_humidity_ratio(W)
    return (h - k.h_fg * W) / (k.cp_da + k.cp_v * W)


def dry_bulb_from_enthalpy_rel_hum(
    h: float, RH: float, pressure: float, unit_system: UnitSystem
) -> float:
    """
    Dry-bulb temperature from specific enthalpy and relative humidity.

    The enthalpy balance is multiplied through by (p - p_w) to remove the
    division:

        f(t) = (h_fg·M + h)·p_w + (cp_v·M - cp_da)·t·p_w + cp_da·p·t - h·p = 0

    with p_w = RH·p_ws(t) and M the water/dry air mass ratio. The initial
    guess assumes dry air, t0 = h / cp_da.
    """
    check_rel_hum(RH)
    k = ENTHALPY[unit_system]
    M = MASS_RATIO_WATER_DRY_AIR

    def f(t: float) -> float:
        Pv = RH * saturation_pressure(t, unit_system, strict=False)
        return (
            (k.h_fg * M + h) * Pv
            + (k.cp_v * M - k.cp_da) * t * Pv
            + k.cp_da * pressure * t
            - h * pressure
        )

    def df(t: float) -> float:
        Pv = RH * saturation_pressure(t, unit_system, strict=False)
        dPv = RH * deriv_saturation_pressure(t, unit_system, strict=False)
        return (
            (k.h_fg * M + h) * dPv
            + (k.cp_v * M - k.cp_da) * (Pv + t * dPv)
            + k.cp_da * pressure
        )

    return find_root(
        f, df, h / k.cp_da, SOLVER_TOLERANCE[unit_system], "dry-bulb temperature"
    )


# ---------------------------------------------------------------------------
# Volume and density
# ---------------------------------------------------------------------------

def specific_volume(Tdb: float, W: float, pressure: float, unit_system: UnitSystem) -> float:
    """Moist air specific volume per unit mass of dry air, Eq. (26)."""
    W = bounded_humidity_ratio(W)
    T = absolute_temperature(Tdb, unit_system)
    if unit_system == UnitSystem.IP:
        # psia -> lbf/ft²
        return R_DA_IP * T * (1.0 + 1.607858 * W) / (144.0 * pressure)
    return R_DA_SI * T * (1.0 + 1.607858 * W) / pressure


def density(Tdb: float, W: float, pressure: float, unit_system: UnitSystem) -> float:
    """Moist air density (kg/m³ or lb/ft³), Eq. (11)."""
    return (1.0 + bounded_humidity_ratio(W)) / specific_volume(Tdb, W, pressure, unit_system)
