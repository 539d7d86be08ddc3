"""
Psychro engine configuration and constants.
"""

from enum import Enum

class UnitSystem(str, Enum):
    IP = "IP"  # Inch-Pound (°F, psia, BTU/lb, ft³/lb)
    SI = "SI"  # Metric (°C, Pa, kJ/kg, m³/kg)

# Supported input pair combinations for state point resolution.
# Each pair must consist of two independent psychrometric properties.
SUPPORTED_INPUT_PAIRS: list[tuple[str, str]] = [
    ("Tdb", "RH"),
    ("Tdb", "W"),
    ("Tdb", "Twb"),
    ("Tdb", "Tdp"),
    ("Tdb", "h"),
    ("h", "RH"),
]

# Default atmospheric pressure at sea level
DEFAULT_PRESSURE_IP = 14.696  # psia
DEFAULT_PRESSURE_SI = 101325.0  # Pa

def default_pressure(unit_system: UnitSystem) -> float:
    """Sea-level atmospheric pressure in the given unit system."""
    if unit_system == UnitSystem.IP:
        return DEFAULT_PRESSURE_IP
    return DEFAULT_PRESSURE_SI

# Pascal per psi
PA_PER_PSI = 6894.75729

# Grains per lb conversion
GRAINS_PER_LB = 7000.0

# Absolute temperature offsets
ZERO_FAHRENHEIT_AS_RANKINE = 459.67
ZERO_CELSIUS_AS_KELVIN = 273.15

# Gas constant for dry air: ft·lbf/(lb_da·°R) and J/(kg_da·K)
R_DA_IP = 53.350
R_DA_SI = 287.042

# Ratio of molecular masses of water and dry air
MASS_RATIO_WATER_DRY_AIR = 0.621945

# Phase-change reference temperatures (°F / °C)
FREEZING_POINT_WATER = {
    UnitSystem.IP: 32.0,
    UnitSystem.SI: 0.0,
}
TRIPLE_POINT_WATER = {
    UnitSystem.IP: 32.018,
    UnitSystem.SI: 0.01,
}

# Validity window of the saturation pressure regression (inclusive)
SATURATION_TEMPERATURE_RANGE = {
    UnitSystem.IP: (-148.0, 392.0),  # °F
    UnitSystem.SI: (-100.0, 200.0),  # °C
}

# Humidity ratio floor; computed values at or below zero are replaced by it.
MIN_HUMIDITY_RATIO = 1e-12

# Allowed overshoot of relative humidity outside [0, 1] from round-off
RELATIVE_HUMIDITY_TOLERANCE = 1e-6

# Newton-Raphson step tolerance, in degrees of the active unit system
SOLVER_TOLERANCE = {
    UnitSystem.IP: 1e-6 * 9.0 / 5.0,
    UnitSystem.SI: 1e-6,
}

# Iteration budget for every Newton-Raphson solve
MAX_ITER_COUNT = 100

# Gap kept below the boiling point when seeding the wet-bulb solve, and the
# largest excess of a wet-bulb root over Tdb accepted as regression round-off
WET_BULB_MARGIN = {
    UnitSystem.IP: 1.8e-3,  # °F
    UnitSystem.SI: 1e-3,  # °C
}

