"""
Cooling to saturation.

Sensible cooling at constant humidity ratio until the air just reaches 100%
relative humidity, i.e. the temperature where W equals the saturation
humidity ratio at the current pressure.
"""

from psychro.engine.conversions import saturation_temperature_from_humidity_ratio
from psychro.engine.moist_air import MoistAir
from psychro.engine.processes.base import ProcessSolver, check_mass_flow
from psychro.models.process import ProcessInput, ProcessOutput


def cool_to_saturation(air: MoistAir, mass_flow: float) -> float:
    """
    Cool to saturation at constant W.

    Returns the enthalpy flow change m·(h1 - h0), negative for cooling.
    """
    check_mass_flow(mass_flow)
    Tsat = saturation_temperature_from_humidity_ratio(air.W, air.pressure, air.unit_system)
    h0 = air.h
    air.update(Tdb=Tsat)
    return mass_flow * (air.h - h0)


class SaturationCoolingSolver(ProcessSolver):
    """Solver for cooling to saturation."""

    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        pi = process_input
        start = self.start_air(pi)
        mass_flow = self.mass_flow(pi, start)
        air = start.copy()

        Q = cool_to_saturation(air, mass_flow)

        metadata: dict = {
            "Q": round(Q, 4),
            "delta_T": round(air.Tdb - start.Tdb, 4),
            "T_saturation": round(air.Tdb, 4),
        }
        return self.output(pi.process_type, start, air, mass_flow, metadata, [])
