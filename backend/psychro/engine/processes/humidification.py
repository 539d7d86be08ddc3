"""
Humidification process solvers: adiabatic and isothermal.

Adiabatic humidification:
    Constant enthalpy. Water is evaporated into the air stream using the air's
    own sensible heat (e.g. wetted media, atomizing spray), so the dry-bulb
    drops as the humidity ratio rises:

        T1 = ((cp_da + cp_v·W0)·T0 - h_fg·(W1 - W0)) / (cp_da + cp_v·W1)

Isothermal humidification:
    Constant dry-bulb temperature (vertical path on the psychrometric chart),
    e.g. steam injection.

In both cases W1 = W0 + water / m_da. Adding more water than the air can hold
raises InvalidRelativeHumidity and leaves the state untouched.
"""

import logging
from abc import abstractmethod

from psychro.engine.conversions import ENTHALPY
from psychro.engine.moist_air import MoistAir
from psychro.engine.processes.base import (
    ProcessSolver,
    check_mass_flow,
    check_water_flow,
)
from psychro.models.process import ProcessInput, ProcessOutput

logger = logging.getLogger(__name__)


def humidify_adiabatic(air: MoistAir, mass_flow: float, water: float) -> float:
    """Add water at constant enthalpy. Returns the humidity ratio increase."""
    check_mass_flow(mass_flow)
    check_water_flow(water)

    k = ENTHALPY[air.unit_system]
    T0, W0 = air.Tdb, air.W
    W1 = W0 + water / mass_flow
    T1 = ((k.cp_da + k.cp_v * W0) * T0 - k.h_fg * (W1 - W0)) / (k.cp_da + k.cp_v * W1)

    air.update(Tdb=T1, W=W1)
    return air.W - W0


def humidify_isothermal(air: MoistAir, mass_flow: float, water: float) -> float:
    """Add water at constant dry-bulb. Returns the humidity ratio increase."""
    check_mass_flow(mass_flow)
    check_water_flow(water)

    W0 = air.W
    air.update(W=W0 + water / mass_flow)
    return air.W - W0


class _HumidificationSolver(ProcessSolver):
    """Shared flow for both humidifiers; subclasses pick the operation."""

    @staticmethod
    @abstractmethod
    def humidify(air: MoistAir, mass_flow: float, water: float) -> float:
        """Apply the humidification to air in place; return the W increase."""
        ...

    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        pi = process_input
        if pi.water_flow is None:
            raise ValueError(f"water_flow is required for {pi.process_type.value}")

        start = self.start_air(pi)
        mass_flow = self.mass_flow(pi, start)
        air = start.copy()

        delta_W = self.humidify(air, mass_flow, pi.water_flow)
        logger.debug("%s: W %.6g -> %.6g", pi.process_type.value, start.W, air.W)

        metadata: dict = {
            "water_flow": pi.water_flow,
            "delta_W": round(delta_W, 8),
            "delta_T": round(air.Tdb - start.Tdb, 4),
            "delta_h": round(air.h - start.h, 4),
        }
        return self.output(pi.process_type, start, air, mass_flow, metadata, [])


class AdiabaticHumidificationSolver(_HumidificationSolver):
    """Solver for adiabatic (constant enthalpy) humidification."""

    humidify = staticmethod(humidify_adiabatic)


class IsothermalHumidificationSolver(_HumidificationSolver):
    """Solver for isothermal (constant dry-bulb) humidification."""

    humidify = staticmethod(humidify_isothermal)
