"""
Tests for the state point resolver.

Ranges are the usual ASHRAE psychrometric table values at sea level;
IP cases use 14.696 psia and SI cases 101325 Pa.
"""

import pytest
from psychro.config import UnitSystem, DEFAULT_PRESSURE_IP, DEFAULT_PRESSURE_SI
from psychro.engine.state_resolver import (
    air_from_pair,
    convert_state_point,
    resolve_state_point,
)
from psychro.errors import InvalidOrdering, InvalidRelativeHumidity


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def _ip(pair, values, **kwargs):
    return resolve_state_point(pair, values, DEFAULT_PRESSURE_IP, UnitSystem.IP, **kwargs)


def _si(pair, values, **kwargs):
    return resolve_state_point(pair, values, DEFAULT_PRESSURE_SI, UnitSystem.SI, **kwargs)


# ---------------------------------------------------------------------------
# Tdb + RH
# ---------------------------------------------------------------------------

class TestOfficeAir:
    """75°F / 50% RH office air."""

    def setup_method(self):
        self.sp = _ip(("Tdb", "RH"), (75.0, 50.0), label="Office")

    def test_echo(self):
        assert self.sp.label == "Office"
        assert self.sp.unit_system == UnitSystem.IP
        assert self.sp.input_pair == ("Tdb", "RH")
        assert self.sp.Tdb == approx(75.0)
        assert self.sp.RH == approx(50.0)

    def test_wet_bulb(self):
        # ~62.6°F
        assert 61.0 <= self.sp.Twb <= 64.0

    def test_dew_point(self):
        # ~55.1°F
        assert 54.0 <= self.sp.Tdp <= 57.0

    def test_grains(self):
        # ~65 gr/lb
        assert 63.0 <= self.sp.W_display <= 68.0

    def test_enthalpy(self):
        assert 27.0 <= self.sp.h <= 30.0

    def test_specific_volume(self):
        assert 13.5 <= self.sp.v <= 13.9

    def test_density_consistent_with_volume(self):
        assert self.sp.rho == approx((1.0 + self.sp.W) / self.sp.v, abs_tol=1e-3)


class TestSummerDesign:
    """95°F / 40% RH."""

    def test_properties(self):
        sp = _ip(("Tdb", "RH"), (95.0, 40.0))
        assert 75.0 <= sp.Twb <= 80.0
        assert 95.0 <= sp.W_display <= 105.0
        assert 37.0 <= sp.h <= 42.0


class TestCoilLeaving:
    """55°F saturated air."""

    def setup_method(self):
        self.sp = _ip(("Tdb", "RH"), (55.0, 100.0))

    def test_temperatures_coincide(self):
        assert self.sp.Twb == approx(55.0, abs_tol=1e-3)
        assert self.sp.Tdp == approx(55.0, abs_tol=1e-3)

    def test_fully_saturated(self):
        assert self.sp.mu == approx(1.0, abs_tol=1e-6)
        assert self.sp.Pv == approx(self.sp.Ps, rel_tol=1e-5, abs_tol=0.0)


# ---------------------------------------------------------------------------
# Remaining pairs
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("pair,values,attr,expected,tol", [
    (("Tdb", "Twb"), (75.0, 62.5), "Twb", 62.5, 1e-3),
    (("Tdb", "Tdp"), (75.0, 55.0), "Tdp", 55.0, 1e-3),
    (("Tdb", "W"), (75.0, 0.0093), "W", 0.0093, 1e-7),
    (("Tdb", "h"), (75.0, 28.2), "h", 28.2, 1e-4),
])
def test_pair_recovers_input_near_half_saturation(pair, values, attr, expected, tol):
    sp = _ip(pair, values)
    assert getattr(sp, attr) == approx(expected, rel_tol=0.0, abs_tol=tol)
    assert 45.0 <= sp.RH <= 55.0


def test_grains_from_humidity_ratio():
    assert _ip(("Tdb", "W"), (75.0, 0.0093)).W_display == approx(65.1, abs_tol=0.01)


class TestEnthalpyAndRH:
    """28.2 BTU/lb at 50% lands near 75°F."""

    def setup_method(self):
        self.sp = _ip(("h", "RH"), (28.2, 50.0))

    def test_inputs_recovered(self):
        assert self.sp.h == approx(28.2, abs_tol=1e-3)
        assert self.sp.RH == approx(50.0, abs_tol=1e-3)

    def test_dry_bulb(self):
        assert 73.0 <= self.sp.Tdb <= 77.0


@pytest.mark.parametrize("pair,values", [
    (("RH", "Tdb"), (50.0, 75.0)),
    (("RH", "h"), (50.0, 28.2)),
    (("W", "Tdb"), (0.0093, 75.0)),
])
def test_reversed_pair(pair, values):
    forward = _ip((pair[1], pair[0]), (values[1], values[0]))
    reversed_ = _ip(pair, values)
    assert reversed_.Tdb == forward.Tdb
    assert reversed_.W == forward.W
    assert reversed_.input_pair == pair


# ---------------------------------------------------------------------------
# SI
# ---------------------------------------------------------------------------

class TestSIRoom:
    """24°C / 50% RH."""

    def setup_method(self):
        self.sp = _si(("Tdb", "RH"), (24.0, 50.0))

    def test_grams_per_kg(self):
        # ~9.3 g/kg
        assert 8.5 <= self.sp.W_display <= 10.0
        assert self.sp.W_display == approx(self.sp.W * 1000.0, abs_tol=1e-3)

    def test_pressure_defaults_to_sea_level(self):
        sp = resolve_state_point(("Tdb", "RH"), (24.0, 50.0), None, UnitSystem.SI)
        assert sp.pressure == DEFAULT_PRESSURE_SI
        assert sp.W == self.sp.W


@pytest.mark.parametrize("Tdb", [212.0, 300.0, 392.0])
def test_hot_dry_air_wet_bulb(Tdb):
    sp = _ip(("Tdb", "W"), (Tdb, 0.0))
    assert sp.Twb < Tdb
    assert sp.Twb < 212.0


def test_dry_air_has_no_dew_point():
    sp = _si(("Tdb", "W"), (25.0, 0.0))
    assert sp.Tdp is None
    assert sp.RH == approx(0.0, abs_tol=1e-6)


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------

class TestConvertToIP:

    def setup_method(self):
        self.si = _si(("Tdb", "RH"), (24.0, 50.0))
        self.ip = convert_state_point(
            ("Tdb", "RH"), (24.0, 50.0), DEFAULT_PRESSURE_SI, UnitSystem.SI, UnitSystem.IP,
        )

    def test_temperature_and_pressure(self):
        assert self.ip.unit_system == UnitSystem.IP
        assert self.ip.Tdb == approx(75.2, abs_tol=1e-4)
        assert self.ip.pressure == approx(DEFAULT_PRESSURE_IP, abs_tol=1e-3)

    def test_moisture_is_unit_independent(self):
        assert self.ip.W == self.si.W
        assert self.ip.RH == approx(self.si.RH, abs_tol=1e-3)
        assert self.ip.W_display == approx(self.si.W * 7000.0, abs_tol=1e-3)

    def test_echoes_tdb_w(self):
        assert self.ip.input_pair == ("Tdb", "W")
        assert self.ip.input_values[0] == approx(75.2, abs_tol=1e-6)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_unsupported_pair(self):
        with pytest.raises(ValueError, match="Unsupported input pair"):
            _ip(("h", "v"), (28.0, 13.5))

    def test_impossible_enthalpy(self):
        with pytest.raises(InvalidRelativeHumidity):
            _ip(("Tdb", "h"), (75.0, 200.0))

    def test_rh_above_100(self):
        with pytest.raises(InvalidRelativeHumidity) as exc_info:
            air_from_pair(("Tdb", "RH"), (25.0, 150.0), DEFAULT_PRESSURE_SI, UnitSystem.SI)
        assert exc_info.value.value == 1.5

    def test_dew_point_above_dry_bulb(self):
        with pytest.raises(InvalidOrdering):
            _ip(("Tdb", "Tdp"), (70.0, 75.0))


# ---------------------------------------------------------------------------
# Same state from every pair
# ---------------------------------------------------------------------------

class TestCrossConsistency:

    def setup_method(self):
        self.ref = _ip(("Tdb", "RH"), (75.0, 50.0))

    @pytest.mark.parametrize("attr", ["Twb", "Tdp", "W", "h"])
    def test_tdb_pairs(self, attr):
        sp = _ip(("Tdb", attr), (self.ref.Tdb, getattr(self.ref, attr)))
        assert sp.RH == approx(self.ref.RH, abs_tol=0.01)
        assert sp.W == approx(self.ref.W, rel_tol=1e-3, abs_tol=1e-6)

    def test_enthalpy_rh_pair(self):
        sp = _ip(("h", "RH"), (self.ref.h, self.ref.RH))
        assert sp.Tdb == approx(75.0, abs_tol=1e-3)
