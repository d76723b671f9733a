"""
Tests for the moist air property calculator.

Covers absolute humidity / enthalpy / RH conversions, round-trip consistency,
dew point, density, out-of-domain inputs and the AirState constructors.
"""

import pytest
import psychrolib

from airchain.engine.properties import (
    absolute_humidity_from_temp_enthalpy,
    absolute_humidity_from_temp_rh,
    air_state_from_temp_enthalpy,
    air_state_from_temp_rh,
    air_state_from_temp_x,
    dew_point_from_x,
    dry_air_density,
    enthalpy_from_temp_x,
    pressure_from_altitude,
    relative_humidity_from_temp_x,
    resolve_air_state,
    saturation_absolute_humidity,
    saturation_pressure,
    temperature_from_rh_x,
)


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ---------------------------------------------------------------------------
# Basic relations
# ---------------------------------------------------------------------------

class TestAbsoluteHumidity:
    def test_25c_50rh(self):
        assert absolute_humidity_from_temp_rh(25.0, 50.0) == approx(9.88, abs_tol=0.05)

    def test_saturation_at_20c(self):
        assert saturation_absolute_humidity(20.0) == approx(14.7, abs_tol=0.05)

    def test_zero_rh_is_dry(self):
        assert absolute_humidity_from_temp_rh(20.0, 0.0) == 0.0

    def test_matches_psychrolib(self):
        psychrolib.SetUnitSystem(psychrolib.SI)
        expected = psychrolib.GetHumRatioFromRelHum(30.0, 0.6, 101325.0) * 1000.0
        assert absolute_humidity_from_temp_rh(30.0, 60.0) == approx(expected, abs_tol=0.01)

    def test_rh_out_of_range_is_none(self):
        assert absolute_humidity_from_temp_rh(20.0, 120.0) is None
        assert absolute_humidity_from_temp_rh(20.0, -1.0) is None

    def test_missing_input_is_none(self):
        assert absolute_humidity_from_temp_rh(None, 50.0) is None
        assert absolute_humidity_from_temp_rh(20.0, None) is None

    def test_temperature_outside_correlation_is_none(self):
        assert saturation_pressure(250.0) is None
        assert absolute_humidity_from_temp_rh(250.0, 10.0) is None


class TestEnthalpy:
    def test_25c_50rh(self):
        x = absolute_humidity_from_temp_rh(25.0, 50.0)
        assert enthalpy_from_temp_x(25.0, x) == approx(50.3, abs_tol=0.2)

    def test_dry_air_at_zero(self):
        assert enthalpy_from_temp_x(0.0, 0.0) == 0.0

    def test_negative_x_is_none(self):
        assert enthalpy_from_temp_x(20.0, -1.0) is None

    def test_x_from_enthalpy_below_dry_air_is_none(self):
        # h below the dry-air enthalpy at this temperature means x < 0
        assert absolute_humidity_from_temp_enthalpy(30.0, 10.0) is None


class TestRelativeHumidity:
    def test_supersaturated_reports_100(self):
        assert relative_humidity_from_temp_x(20.0, 30.0) == 100.0

    def test_missing_x_is_none(self):
        assert relative_humidity_from_temp_x(20.0, None) is None


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

class TestRoundTrips:
    @pytest.mark.parametrize("t, rh", [(-10.0, 80.0), (0.0, 50.0), (25.0, 50.0), (40.0, 5.0), (55.2, 4.58), (30.0, 100.0)])
    def test_rh_through_x(self, t, rh):
        x = absolute_humidity_from_temp_rh(t, rh)
        assert relative_humidity_from_temp_x(t, x) == pytest.approx(rh, rel=1e-6)

    @pytest.mark.parametrize("t, x", [(-5.0, 1.5), (20.0, 7.3), (35.0, 20.0), (60.0, 0.0)])
    def test_x_through_enthalpy(self, t, x):
        h = enthalpy_from_temp_x(t, x)
        assert absolute_humidity_from_temp_enthalpy(t, h) == pytest.approx(x, rel=1e-9, abs=1e-9)

    def test_temperature_from_rh_and_x(self):
        x = absolute_humidity_from_temp_rh(27.0, 60.0)
        assert temperature_from_rh_x(60.0, x) == pytest.approx(27.0, abs=1e-6)


# ---------------------------------------------------------------------------
# Dew point, density, altitude
# ---------------------------------------------------------------------------

class TestDewPoint:
    def test_25c_50rh(self):
        x = absolute_humidity_from_temp_rh(25.0, 50.0)
        assert dew_point_from_x(x) == approx(13.9, abs_tol=0.2)

    def test_saturated_air_dew_point_is_dry_bulb(self):
        x = saturation_absolute_humidity(15.0)
        assert dew_point_from_x(x) == pytest.approx(15.0, abs=1e-6)

    def test_dry_air_has_no_dew_point(self):
        assert dew_point_from_x(0.0) is None


class TestDensity:
    def test_dry_air_at_20c(self):
        assert dry_air_density(20.0, 0.0) == approx(1.204, abs_tol=0.005)

    def test_humid_air_is_lighter_per_m3(self):
        assert dry_air_density(20.0, 10.0) < dry_air_density(20.0, 0.0)

    def test_missing_input_is_none(self):
        assert dry_air_density(None, 5.0) is None


class TestAltitude:
    def test_sea_level(self):
        assert pressure_from_altitude(0.0) == approx(101325.0, abs_tol=1.0)

    def test_pressure_falls_with_altitude(self):
        assert pressure_from_altitude(1500.0) < pressure_from_altitude(0.0)


# ---------------------------------------------------------------------------
# AirState constructors
# ---------------------------------------------------------------------------

class TestAirStateConstructors:
    def test_from_temp_rh_is_complete(self):
        state = air_state_from_temp_rh(25.0, 50.0)
        assert state.is_determined
        assert state.relative_humidity == 50.0
        assert state.density is not None

    def test_from_temp_x_matches_from_temp_rh(self):
        a = air_state_from_temp_rh(25.0, 50.0)
        b = air_state_from_temp_x(25.0, a.absolute_humidity)
        assert b.relative_humidity == pytest.approx(50.0, rel=1e-6)
        assert b.enthalpy == pytest.approx(a.enthalpy)

    def test_from_temp_enthalpy(self):
        a = air_state_from_temp_rh(30.0, 40.0)
        b = air_state_from_temp_enthalpy(30.0, a.enthalpy)
        assert b.absolute_humidity == pytest.approx(a.absolute_humidity)

    def test_missing_temperature_is_undetermined(self):
        state = air_state_from_temp_rh(None, 50.0)
        assert not state.is_determined
        assert state.absolute_humidity is None
        assert state.relative_humidity == 50.0

    def test_resolve_prefers_absolute_humidity(self):
        state = resolve_air_state(20.0, relative_humidity=90.0, absolute_humidity=5.0)
        assert state.absolute_humidity == 5.0
        assert state.relative_humidity < 90.0

    def test_resolve_temperature_only(self):
        state = resolve_air_state(20.0)
        assert state.temperature == 20.0
        assert not state.is_determined
