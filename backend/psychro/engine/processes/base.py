"""
Abstract base class for psychrometric process solvers, plus the input checks
shared by the single-step process operations.
"""

from abc import ABC, abstractmethod

from psychro.config import UnitSystem, default_pressure
from psychro.engine.moist_air import MoistAir
from psychro.engine.state_resolver import air_from_pair, state_point_properties
from psychro.errors import InvalidParameter
from psychro.models.process import ProcessInput, ProcessOutput, ProcessType

# Minutes per hour, for CFM -> ft³/h
_MINUTES_PER_HOUR = 60.0


def check_mass_flow(mass_flow: float) -> None:
    if not mass_flow > 0.0:
        raise InvalidParameter("dry air mass flow", mass_flow, "Must be positive")


def check_water_flow(water: float) -> None:
    if not water >= 0.0:
        raise InvalidParameter("water mass flow", water, "Must not be negative")


class ProcessSolver(ABC):
    """Base class for all process solvers."""

    @abstractmethod
    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        """Solve the process and return the result."""
        ...

    @staticmethod
    def start_air(pi: ProcessInput) -> MoistAir:
        """Resolve the entering air state from the input pair."""
        pressure = pi.pressure if pi.pressure is not None else default_pressure(pi.unit_system)
        return air_from_pair(pi.start_point_pair, pi.start_point_values, pressure, pi.unit_system)

    @staticmethod
    def mass_flow(pi: ProcessInput, air: MoistAir) -> float:
        """
        Dry air mass flow: taken as given, or derived from the entering
        volumetric airflow (m³/s for SI, CFM for IP).
        """
        if pi.mass_flow is not None:
            return pi.mass_flow
        if pi.airflow is None:
            raise ValueError("mass_flow or airflow is required")
        if pi.unit_system == UnitSystem.IP:
            return air.dry_air_mass_flow(pi.airflow * _MINUTES_PER_HOUR)
        return air.dry_air_mass_flow(pi.airflow)

    @staticmethod
    def output(
        process_type: ProcessType,
        start: MoistAir,
        end: MoistAir,
        mass_flow: float,
        metadata: dict,
        warnings: list[str],
    ) -> ProcessOutput:
        return ProcessOutput(
            process_type=process_type,
            unit_system=start.unit_system,
            pressure=start.pressure,
            start_point=state_point_properties(start),
            end_point=state_point_properties(end),
            mass_flow=round(mass_flow, 6),
            metadata=metadata,
            warnings=warnings,
        )
