"""
Pydantic models for psychrometric process input/output.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from psychro.config import UnitSystem


class ProcessType(str, Enum):
    SENSIBLE_HEATING = "sensible_heating"
    SENSIBLE_COOLING = "sensible_cooling"
    ADIABATIC_HUMIDIFICATION = "adiabatic_humidification"
    ISOTHERMAL_HUMIDIFICATION = "isothermal_humidification"
    SATURATION_COOLING = "saturation_cooling"


class SensibleMode(str, Enum):
    TARGET_TDB = "target_tdb"
    DELTA_T = "delta_t"
    ENERGY = "energy"


class ProcessInput(BaseModel):
    """Input for a psychrometric process calculation."""

    process_type: ProcessType
    unit_system: UnitSystem = UnitSystem.IP
    pressure: Optional[float] = None  # psia (IP) or Pa (SI); sea level if omitted

    # Start state: resolved from an input pair (reuses existing resolver)
    start_point_pair: tuple[str, str]
    start_point_values: tuple[float, float]

    # Air flow: dry air mass flow, or entering volumetric flow
    mass_flow: Optional[float] = None  # lb_da/h (IP) or kg_da/s (SI)
    airflow: Optional[float] = None  # CFM (IP) or m³/s (SI)

    # Sensible heating/cooling parameters
    sensible_mode: Optional[SensibleMode] = None
    target_Tdb: Optional[float] = None
    delta_T: Optional[float] = None  # magnitude; sign follows process_type
    Q: Optional[float] = None  # BTU/h (IP) or kW (SI)

    # Humidification parameters
    water_flow: Optional[float] = None  # lb_w/h (IP) or kg_w/s (SI)


class ProcessOutput(BaseModel):
    """Result of a process calculation."""

    process_type: ProcessType
    unit_system: UnitSystem
    pressure: float
    mass_flow: float

    start_point: dict  # Full state point properties
    end_point: dict  # Full state point properties

    metadata: dict = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
