"""
Sensible heating and cooling.

Heating is a horizontal line on the psychrometric chart: the humidity ratio
(W) stays constant while the dry-bulb temperature changes. Cooling follows the
same line down to the dew point; below it the air leaves saturated at the new
temperature and the excess moisture is removed as condensate.

Energies are Q = m_da · Δh, in kW (SI, m_da in kg_da/s) or BTU/h (IP, m_da
in lb_da/h).

Three input modes:
  - TARGET_TDB: desired leaving dry-bulb
  - DELTA_T: temperature rise (heating) or drop (cooling), as a positive value
  - ENERGY: heat added (heating) or removed (cooling)
"""

import logging

from psychro.engine.conversions import (
    ENTHALPY,
    dry_bulb_from_enthalpy_rel_hum,
    saturation_humidity_ratio,
)
from psychro.engine.moist_air import MoistAir
from psychro.engine.processes.base import ProcessSolver, check_mass_flow
from psychro.models.process import (
    ProcessInput,
    ProcessOutput,
    ProcessType,
    SensibleMode,
)

logger = logging.getLogger(__name__)


def _sensible_capacity(air: MoistAir) -> float:
    """dh/dt at constant W: cp_da + cp_v·W."""
    k = ENTHALPY[air.unit_system]
    return k.cp_da + k.cp_v * air.W


# ---------------------------------------------------------------------------
# Heating
# ---------------------------------------------------------------------------

def heat_to_temperature(air: MoistAir, mass_flow: float, Tdb: float) -> float:
    """Heat to Tdb at constant W. Returns the heat added."""
    check_mass_flow(mass_flow)
    h0 = air.h
    air.update(Tdb=Tdb)
    return mass_flow * (air.h - h0)


def heat_by_delta(air: MoistAir, mass_flow: float, delta_T: float) -> float:
    """Raise the dry-bulb by delta_T at constant W. Returns the heat added."""
    return heat_to_temperature(air, mass_flow, air.Tdb + delta_T)


def heat_with_energy(air: MoistAir, mass_flow: float, Q: float) -> float:
    """Add heat Q at constant W. Returns the dry-bulb rise."""
    check_mass_flow(mass_flow)
    delta_T = (Q / mass_flow) / _sensible_capacity(air)
    air.update(Tdb=air.Tdb + delta_T)
    return delta_T


# ---------------------------------------------------------------------------
# Cooling
# ---------------------------------------------------------------------------

def _cooled_humidity_ratio(air: MoistAir, Tdb: float) -> float:
    """Humidity ratio after cooling to Tdb, saturated if below the dew point."""
    Tdp = air.Tdp
    if Tdb < Tdp:
        logger.warning(
            "Cooling to %.4g is below the dew point %.4g; condensate removed", Tdb, Tdp
        )
        return saturation_humidity_ratio(Tdb, air.pressure, air.unit_system)
    return air.W


def cool_to_temperature(air: MoistAir, mass_flow: float, Tdb: float) -> float:
    """Cool to Tdb. Returns the heat removed."""
    check_mass_flow(mass_flow)
    h0 = air.h
    air.update(Tdb=Tdb, W=_cooled_humidity_ratio(air, Tdb))
    return mass_flow * (h0 - air.h)


def cool_by_delta(air: MoistAir, mass_flow: float, delta_T: float) -> float:
    """Lower the dry-bulb by delta_T. Returns the heat removed."""
    return cool_to_temperature(air, mass_flow, air.Tdb - delta_T)


def cool_with_energy(air: MoistAir, mass_flow: float, Q: float) -> float:
    """
    Remove heat Q. Returns the dry-bulb drop.

    If the sensible end point falls below the dew point, the air leaves
    saturated at the temperature whose saturated enthalpy is h0 - Q/m.
    """
    check_mass_flow(mass_flow)
    T0 = air.Tdb
    dh = Q / mass_flow
    Tdb = T0 - dh / _sensible_capacity(air)
    W = air.W

    Tdp = air.Tdp
    if Tdb < Tdp:
        logger.warning(
            "Cooling by %.4g crosses the dew point %.4g; condensate removed", Q, Tdp
        )
        Tdb = dry_bulb_from_enthalpy_rel_hum(
            air.h - dh, 1.0, air.pressure, air.unit_system
        )
        W = saturation_humidity_ratio(Tdb, air.pressure, air.unit_system)

    air.update(Tdb=Tdb, W=W)
    return T0 - air.Tdb


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------

class SensibleSolver(ProcessSolver):
    """Solver for sensible heating and cooling processes."""

    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        pi = process_input
        mode = pi.sensible_mode
        heating = pi.process_type == ProcessType.SENSIBLE_HEATING

        if mode is None:
            raise ValueError("sensible_mode is required for sensible heating/cooling")

        start = self.start_air(pi)
        mass_flow = self.mass_flow(pi, start)
        air = start.copy()
        warnings: list[str] = []

        if mode == SensibleMode.TARGET_TDB:
            if pi.target_Tdb is None:
                raise ValueError("target_Tdb is required for TARGET_TDB mode")
            op = heat_to_temperature if heating else cool_to_temperature
            Q = op(air, mass_flow, pi.target_Tdb)

        elif mode == SensibleMode.DELTA_T:
            if pi.delta_T is None:
                raise ValueError("delta_T is required for DELTA_T mode")
            op = heat_by_delta if heating else cool_by_delta
            Q = op(air, mass_flow, pi.delta_T)

        elif mode == SensibleMode.ENERGY:
            if pi.Q is None:
                raise ValueError("Q is required for ENERGY mode")
            op = heat_with_energy if heating else cool_with_energy
            op(air, mass_flow, pi.Q)
            Q = pi.Q
        else:
            raise ValueError(f"Unknown sensible mode: {mode}")

        condensate = start.W - air.W
        if condensate > 0.0:
            Tdp = start.Tdp
            warnings.append(
                f"Leaving Tdb ({air.Tdb:.1f}) is below the entering dew point "
                f"({Tdp:.1f}). The air leaves saturated and condensate is removed."
            )

        metadata: dict = {
            "Q": round(Q, 4),
            "delta_T": round(air.Tdb - start.Tdb, 4),
            "delta_h": round(air.h - start.h, 4),
            "condensate": round(mass_flow * condensate, 8) if condensate > 0.0 else 0.0,
        }
        return self.output(pi.process_type, start, air, mass_flow, metadata, warnings)
