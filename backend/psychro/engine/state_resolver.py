"""
Core state point resolver.

Given any supported pair of independent psychrometric properties and
atmospheric pressure, builds the MoistAir state and reports all of its
properties. Relative humidity is in percent at this boundary and a 0-1
fraction inside the engine.
"""

import math
from typing import Optional

from psychro.config import (
    UnitSystem,
    SUPPORTED_INPUT_PAIRS,
    GRAINS_PER_LB,
    default_pressure,
)
from psychro.engine.moist_air import MoistAir
from psychro.models.state_point import StatePointOutput


def _resolve_tdb_rh(Tdb: float, RH_pct: float, pressure: float, unit_system: UnitSystem) -> MoistAir:
    return MoistAir.from_tdb_rh(Tdb, RH_pct / 100.0, pressure, unit_system)


def _resolve_tdb_w(Tdb: float, W: float, pressure: float, unit_system: UnitSystem) -> MoistAir:
    return MoistAir.from_tdb_w(Tdb, W, pressure, unit_system)


def _resolve_tdb_twb(Tdb: float, Twb: float, pressure: float, unit_system: UnitSystem) -> MoistAir:
    return MoistAir.from_tdb_twb(Tdb, Twb, pressure, unit_system)


def _resolve_tdb_tdp(Tdb: float, Tdp: float, pressure: float, unit_system: UnitSystem) -> MoistAir:
    return MoistAir.from_tdb_tdp(Tdb, Tdp, pressure, unit_system)


def _resolve_tdb_h(Tdb: float, h: float, pressure: float, unit_system: UnitSystem) -> MoistAir:
    return MoistAir.from_tdb_h(Tdb, h, pressure, unit_system)


def _resolve_h_rh(h: float, RH_pct: float, pressure: float, unit_system: UnitSystem) -> MoistAir:
    return MoistAir.from_h_rh(h, RH_pct / 100.0, pressure, unit_system)


# Resolver dispatch table
_RESOLVERS = {
    ("Tdb", "RH"): _resolve_tdb_rh,
    ("Tdb", "W"): _resolve_tdb_w,
    ("Tdb", "Twb"): _resolve_tdb_twb,
    ("Tdb", "Tdp"): _resolve_tdb_tdp,
    ("Tdb", "h"): _resolve_tdb_h,
    ("h", "RH"): _resolve_h_rh,
}


def air_from_pair(
    input_pair: tuple[str, str],
    values: tuple[float, float],
    pressure: float,
    unit_system: UnitSystem,
) -> MoistAir:
    """
    Build a MoistAir state from an input pair, in either order.

    Raises:
        ValueError: If the pair is not supported, or any PsychroError raised
            by the constructor
    """
    pair = tuple(input_pair)

    # Check if pair is supported (or its reverse)
    if pair not in _RESOLVERS:
        reverse_pair = (pair[1], pair[0])
        if reverse_pair in _RESOLVERS:
            pair = reverse_pair
            values = (values[1], values[0])
        else:
            supported = [f"({a}, {b})" for a, b in SUPPORTED_INPUT_PAIRS]
            raise ValueError(
                f"Unsupported input pair: {input_pair}. "
                f"Supported pairs: {', '.join(supported)}"
            )

    return _RESOLVERS[pair](values[0], values[1], pressure, unit_system)


def state_point_properties(air: MoistAir) -> dict:
    """
    All properties of a state, rounded for reporting.

    Tdp is None for air at the humidity ratio floor (no dew point).
    """
    W = air.W
    Tdp = air.Tdp

    # Display humidity ratio (grains for IP, g/kg for SI)
    if air.unit_system == UnitSystem.IP:
        W_display = W * GRAINS_PER_LB
    else:
        W_display = W * 1000.0

    return {
        "Tdb": round(air.Tdb, 4),
        "Twb": round(air.Twb, 4),
        "Tdp": None if math.isnan(Tdp) else round(Tdp, 4),
        "RH": round(air.RH * 100.0, 4),
        "W": round(W, 7),
        "W_display": round(W_display, 4),
        "h": round(air.h, 4),
        "v": round(air.v, 4),
        "rho": round(air.density, 4),
        "Pv": round(air.Pv, 6),
        "Ps": round(air.Ps, 6),
        "mu": round(air.mu, 6),
    }


def resolve_state_point(
    input_pair: tuple[str, str],
    values: tuple[float, float],
    pressure: Optional[float],
    unit_system: UnitSystem,
    label: str = "",
) -> StatePointOutput:
    """
    Main entry point. Resolves a full state point from any supported input pair.

    Args:
        input_pair: Tuple of two property names, e.g. ("Tdb", "RH")
        values: Tuple of two values corresponding to the input pair
        pressure: Atmospheric pressure (psia for IP, Pa for SI); None for
            sea level
        unit_system: IP or SI
        label: Optional user label

    Returns:
        StatePointOutput with all resolved properties

    Raises:
        ValueError: If the input pair is not supported or values are out of range
    """
    if pressure is None:
        pressure = default_pressure(unit_system)
    air = air_from_pair(input_pair, values, pressure, unit_system)

    return StatePointOutput(
        label=label,
        unit_system=unit_system,
        pressure=pressure,
        input_pair=input_pair,
        input_values=values,
        **state_point_properties(air),
    )


def convert_state_point(
    input_pair: tuple[str, str],
    values: tuple[float, float],
    pressure: Optional[float],
    unit_system: UnitSystem,
    target_unit_system: UnitSystem,
    label: str = "",
) -> StatePointOutput:
    """
    Resolve a state point, then report it in target_unit_system.

    The converted state is echoed as its (Tdb, W) pair in the target units.
    """
    if pressure is None:
        pressure = default_pressure(unit_system)
    air = air_from_pair(input_pair, values, pressure, unit_system)
    converted = air.to_unit_system(target_unit_system)

    return StatePointOutput(
        label=label,
        unit_system=target_unit_system,
        pressure=round(converted.pressure, 6),
        input_pair=("Tdb", "W"),
        input_values=(converted.Tdb, converted.W),
        **state_point_properties(converted),
    )
