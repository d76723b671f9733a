"""
Tests for the fan model.
"""

import pytest

from airchain.engine.equipment.fan import (
    FanModel,
    required_motor_power,
    standard_motor_output,
)
from airchain.engine.properties import air_state_from_temp_rh
from airchain.models.equipment import Airflow, FanConditions


class TestFanHeat:
    """0.2 kW motor at 80% efficiency in a 100 m³/min airstream at 25°C/60%."""

    def setup_method(self):
        self.inlet = air_state_from_temp_rh(25.0, 60.0)
        self.airflow = Airflow.from_state(100.0, self.inlet)
        self.result = FanModel().transform(
            self.inlet, FanConditions(motor_output=0.2, motor_efficiency=80.0), self.airflow
        )
        self.r = self.result.results

    def test_heat_generation(self):
        assert self.r.heat_generation == pytest.approx(0.04)

    def test_temperature_rise(self):
        expected = 0.04 / (self.airflow.mass_flow * 1.02)
        assert self.r.temp_rise == pytest.approx(expected)
        assert self.result.outlet_air.temperature == pytest.approx(25.0 + expected)

    def test_humidity_unchanged(self):
        assert self.result.outlet_air.absolute_humidity == self.inlet.absolute_humidity

    def test_no_pressure_loss(self):
        assert self.result.pressure_loss is None


class TestFanWithoutMassFlow:
    def test_outlet_undetermined(self):
        inlet = air_state_from_temp_rh(25.0, 60.0)
        result = FanModel().transform(inlet, FanConditions(), Airflow())
        assert not result.outlet_air.is_determined
        assert result.results.temp_rise is None


class TestMotorSizing:
    def test_required_power(self):
        assert required_motor_power(100.0 / 60.0, 500.0, 60.0) == pytest.approx(1.3889, abs=1e-4)

    def test_margin(self):
        assert required_motor_power(100.0 / 60.0, 500.0, 60.0, 10.0) == pytest.approx(1.5278, abs=1e-4)

    def test_zero_efficiency(self):
        assert required_motor_power(1.0, 500.0, 0.0) is None

    def test_standard_sizes(self):
        assert standard_motor_output(1.3889) == 1.5
        assert standard_motor_output(1.5) == 1.5
        assert standard_motor_output(1.5278) == 2.2
        assert standard_motor_output(1000.0) is None

    def test_fan_reports_recommendation(self):
        inlet = air_state_from_temp_rh(25.0, 60.0)
        result = FanModel().transform(
            inlet,
            FanConditions(total_pressure=500.0, fan_efficiency=60.0, margin_factor=10.0),
            Airflow.from_state(100.0, inlet),
        )
        assert result.results.required_motor_power == pytest.approx(1.5278, abs=1e-4)
        assert result.results.recommended_motor_output == 2.2
