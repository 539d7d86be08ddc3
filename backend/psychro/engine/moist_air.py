"""
Moist air state.

A MoistAir instance is characterized by dry-bulb temperature, humidity ratio,
total pressure and unit system. Every other property (relative humidity, dew
point, wet-bulb temperature, enthalpy, volume...) is derived on demand.

Instances are built through one of the from_* constructors, each taking a
different pair of independent properties, and are changed only through
update(), which validates the candidate state before assigning anything.
"""

from typing import Optional

from psychro.config import (
    UnitSystem,
    PA_PER_PSI,
    RELATIVE_HUMIDITY_TOLERANCE,
    default_pressure,
)
from psychro.engine import conversions
from psychro.engine.saturation import check_temperature, saturation_pressure
from psychro.errors import (
    InvalidOrdering,
    InvalidParameter,
    InvalidRelativeHumidity,
)


def _celsius_to_fahrenheit(t: float) -> float:
    return t * 9.0 / 5.0 + 32.0


def _fahrenheit_to_celsius(t: float) -> float:
    return (t - 32.0) * 5.0 / 9.0


class MoistAir:
    """
    State of a parcel of moist air.

    Units follow unit_system:
      SI: °C, kg_w/kg_da, Pa
      IP: °F, lb_w/lb_da, psia
    """

    def __init__(
        self,
        Tdb: float,
        W: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ):
        if pressure is None:
            pressure = default_pressure(unit_system)
        if not pressure > 0.0:
            raise InvalidParameter("pressure", pressure, "Must be positive")

        self._pressure = pressure
        self._unit_system = unit_system
        self._Tdb, self._W = self._validated(Tdb, W)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_tdb_w(
        cls,
        Tdb: float,
        W: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ) -> "MoistAir":
        """From dry-bulb temperature and humidity ratio."""
        return cls(Tdb, W, pressure, unit_system)

    @classmethod
    def from_tdb_rh(
        cls,
        Tdb: float,
        RH: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ) -> "MoistAir":
        """From dry-bulb temperature and relative humidity (0-1)."""
        pressure = pressure if pressure is not None else default_pressure(unit_system)
        W = conversions.humidity_ratio_from_rel_hum(Tdb, RH, pressure, unit_system)
        return cls(Tdb, W, pressure, unit_system)

    @classmethod
    def from_tdb_twb(
        cls,
        Tdb: float,
        Twb: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ) -> "MoistAir":
        """From dry-bulb and wet-bulb temperatures."""
        pressure = pressure if pressure is not None else default_pressure(unit_system)
        check_temperature(Tdb, unit_system, "dry-bulb temperature")
        W = conversions.humidity_ratio_from_wet_bulb(Tdb, Twb, pressure, unit_system)
        return cls(Tdb, W, pressure, unit_system)

    @classmethod
    def from_tdb_tdp(
        cls,
        Tdb: float,
        Tdp: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ) -> "MoistAir":
        """From dry-bulb and dew point temperatures."""
        pressure = pressure if pressure is not None else default_pressure(unit_system)
        if Tdp > Tdb:
            raise InvalidOrdering("dew point temperature", Tdp, Tdb)
        check_temperature(Tdp, unit_system, "dew point temperature")
        W = conversions.humidity_ratio_from_dew_point(Tdp, pressure, unit_system)
        return cls(Tdb, W, pressure, unit_system)

    @classmethod
    def from_tdb_h(
        cls,
        Tdb: float,
        h: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ) -> "MoistAir":
        """From dry-bulb temperature and specific enthalpy."""
        W = conversions.humidity_ratio_from_enthalpy(Tdb, h, unit_system)
        return cls(Tdb, W, pressure, unit_system)

    @classmethod
    def from_h_rh(
        cls,
        h: float,
        RH: float,
        pressure: Optional[float] = None,
        unit_system: UnitSystem = UnitSystem.SI,
    ) -> "MoistAir":
        """From specific enthalpy and relative humidity (0-1)."""
        pressure = pressure if pressure is not None else default_pressure(unit_system)
        Tdb = conversions.dry_bulb_from_enthalpy_rel_hum(h, RH, pressure, unit_system)
        check_temperature(Tdb, unit_system, "dry-bulb temperature")
        W = conversions.humidity_ratio_from_rel_hum(Tdb, RH, pressure, unit_system)
        return cls(Tdb, W, pressure, unit_system)

    # ------------------------------------------------------------------
    # Validation and mutation
    # ------------------------------------------------------------------

    def _validated(self, Tdb: float, W: float) -> tuple[float, float]:
        """Return the (Tdb, W) pair to store, or raise without side effects."""
        check_temperature(Tdb, self._unit_system, "dry-bulb temperature")
        if W < 0.0:
            raise InvalidParameter("humidity ratio", W, "Must not be negative")
        W = conversions.bounded_humidity_ratio(W)

        RH = conversions.rel_hum_from_humidity_ratio(
            Tdb, W, self._pressure, self._unit_system
        )
        if not RH <= 1.0 + RELATIVE_HUMIDITY_TOLERANCE:
            raise InvalidRelativeHumidity(RH)
        return Tdb, W

    def update(self, Tdb: Optional[float] = None, W: Optional[float] = None) -> None:
        """
        Replace dry-bulb temperature and/or humidity ratio.

        The candidate state is validated first; on failure the instance is
        left unchanged.
        """
        self._Tdb, self._W = self._validated(
            self._Tdb if Tdb is None else Tdb,
            self._W if W is None else W,
        )

    def copy(self) -> "MoistAir":
        return MoistAir(self._Tdb, self._W, self._pressure, self._unit_system)

    def to_unit_system(self, unit_system: UnitSystem) -> "MoistAir":
        """Return the same state expressed in another unit system."""
        if unit_system == self._unit_system:
            return self.copy()
        if unit_system == UnitSystem.IP:
            Tdb = _celsius_to_fahrenheit(self._Tdb)
            pressure = self._pressure / PA_PER_PSI
        else:
            Tdb = _fahrenheit_to_celsius(self._Tdb)
            pressure = self._pressure * PA_PER_PSI
        return MoistAir(Tdb, self._W, pressure, unit_system)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def Tdb(self) -> float:
        return self._Tdb

    @property
    def W(self) -> float:
        return self._W

    @property
    def pressure(self) -> float:
        return self._pressure

    @property
    def unit_system(self) -> UnitSystem:
        return self._unit_system

    @property
    def RH(self) -> float:
        """Relative humidity, 0-1."""
        return conversions.rel_hum_from_humidity_ratio(
            self._Tdb, self._W, self._pressure, self._unit_system
        )

    @property
    def Tdp(self) -> float:
        """Dew point temperature; NaN for air at the humidity ratio floor."""
        return conversions.dew_point_from_humidity_ratio(
            self._W, self._pressure, self._unit_system
        )

    @property
    def Twb(self) -> float:
        return conversions.wet_bulb_from_humidity_ratio(
            self._Tdb, self._W, self._pressure, self._unit_system
        )

    @property
    def h(self) -> float:
        """Specific enthalpy per unit mass of dry air."""
        return conversions.enthalpy_from_humidity_ratio(self._Tdb, self._W, self._unit_system)

    @property
    def v(self) -> float:
        """Specific volume per unit mass of dry air."""
        return conversions.specific_volume(
            self._Tdb, self._W, self._pressure, self._unit_system
        )

    @property
    def density(self) -> float:
        return conversions.density(self._Tdb, self._W, self._pressure, self._unit_system)

    @property
    def Pv(self) -> float:
        """Partial pressure of water vapor."""
        return conversions.vapor_pressure_from_humidity_ratio(self._W, self._pressure)

    @property
    def Ps(self) -> float:
        """Saturation pressure at the dry-bulb temperature."""
        return saturation_pressure(self._Tdb, self._unit_system)

    @property
    def mu(self) -> float:
        """Degree of saturation."""
        return conversions.degree_of_saturation(
            self._Tdb, self._W, self._pressure, self._unit_system
        )

    def dry_air_mass_flow(self, volumetric_flow: float) -> float:
        """
        Dry air mass flow carried by a volumetric flow of this air.

        m³/s -> kg_da/s (SI), ft³/h -> lb_da/h (IP).
        """
        if volumetric_flow < 0.0:
            raise InvalidParameter("volumetric flow", volumetric_flow, "Must not be negative")
        return volumetric_flow / self.v

    def __repr__(self) -> str:
        return (
            f"MoistAir(Tdb={self._Tdb!r}, W={self._W!r}, "
            f"pressure={self._pressure!r}, unit_system={self._unit_system.value})"
        )
