"""
Tests for SI ↔ Imperial unit conversion.
"""

import pytest

from airchain.config import UnitSystem
from airchain.engine.units import (
    QuantityKind,
    convert,
    convert_step,
    display_precision,
    to_display,
    unit_label,
)

SI = UnitSystem.SI
IMPERIAL = UnitSystem.IMPERIAL


class TestInvolution:
    @pytest.mark.parametrize("kind", list(QuantityKind))
    def test_there_and_back(self, kind):
        value = 12.345
        there = convert(value, kind, SI, IMPERIAL)
        assert convert(there, kind, IMPERIAL, SI) == pytest.approx(value, rel=1e-12)


class TestTemperature:
    def test_affine(self):
        assert convert(20.0, QuantityKind.TEMPERATURE, SI, IMPERIAL) == pytest.approx(68.0)
        assert convert(-40.0, QuantityKind.TEMPERATURE, SI, IMPERIAL) == pytest.approx(-40.0)

    def test_delta_is_linear(self):
        assert convert(10.0, QuantityKind.TEMPERATURE_DELTA, SI, IMPERIAL) == pytest.approx(18.0)

    def test_step_uses_delta(self):
        assert convert_step(1.0, QuantityKind.TEMPERATURE, SI, IMPERIAL) == pytest.approx(1.8)
        assert convert_step(1.8, QuantityKind.TEMPERATURE, IMPERIAL, SI) == pytest.approx(1.0)


class TestLinearFactors:
    def test_airflow(self):
        assert convert(100.0, QuantityKind.AIRFLOW, SI, IMPERIAL) == pytest.approx(3531.47)

    def test_abs_humidity_to_grains(self):
        assert convert(10.0, QuantityKind.ABS_HUMIDITY, SI, IMPERIAL) == pytest.approx(70.0)

    def test_heat_load(self):
        assert convert(1.0, QuantityKind.HEAT_LOAD, SI, IMPERIAL) == pytest.approx(3412.142)

    def test_pressure(self):
        assert convert(249.0, QuantityKind.PRESSURE, SI, IMPERIAL) == pytest.approx(1.0, abs=0.001)


class TestPassThrough:
    def test_none(self):
        assert convert(None, QuantityKind.AIRFLOW, SI, IMPERIAL) is None

    def test_same_system(self):
        assert convert(20.0, QuantityKind.TEMPERATURE, SI, SI) == 20.0

    @pytest.mark.parametrize("kind", [QuantityKind.RH, QuantityKind.SHF, QuantityKind.SHEETS])
    def test_dimensionless(self, kind):
        assert convert(0.85, kind, SI, IMPERIAL) == 0.85

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            convert(1.0, "furlongs", SI, IMPERIAL)


class TestDisplay:
    def test_labels(self):
        assert unit_label(QuantityKind.TEMPERATURE, IMPERIAL) == "°F"
        assert unit_label(QuantityKind.AIRFLOW, SI) == "m³/min"
        assert unit_label(QuantityKind.SHEETS, SI) == ""

    def test_precision(self):
        assert display_precision(QuantityKind.DENSITY, SI) == 4
        assert display_precision(QuantityKind.LENGTH, IMPERIAL) == 3
        assert display_precision(QuantityKind.ENTHALPY, SI) == 2

    def test_to_display_rounds(self):
        assert to_display(100.0, QuantityKind.AIRFLOW, IMPERIAL) == 3531.0
        assert to_display(None, QuantityKind.AIRFLOW, IMPERIAL) is None
