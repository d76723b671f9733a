"""
Tests for the saturated steam table interpolator.
"""

import pytest

from airchain.config import SteamPressureUnit
from airchain.engine.steam_table import (
    STEAM_TABLE,
    from_gauge_kpa,
    lookup,
    lookup_gauge,
    to_gauge_kpa,
)


class TestLookup:
    def test_exact_row(self):
        props = lookup(300.0)
        assert props.temperature == pytest.approx(133.5)
        assert props.enthalpy == pytest.approx(2725.3)
        assert not props.clamped

    def test_atmospheric_row(self):
        props = lookup(101.325)
        assert props.temperature == pytest.approx(100.0)
        assert props.enthalpy == pytest.approx(2676.1)

    def test_midpoint_interpolation(self):
        props = lookup(250.0)
        assert props.temperature == pytest.approx((120.2 + 133.5) / 2)
        assert props.enthalpy == pytest.approx((2706.7 + 2725.3) / 2)

    def test_interpolation_is_monotonic(self):
        pressures = [110.0 + 10.0 * i for i in range(85)]
        temps = [lookup(p).temperature for p in pressures]
        assert temps == sorted(temps)


class TestGaugePressure:
    """100 kPaG → 201.325 kPa abs, bracketed by the 200 and 300 kPa rows."""

    def setup_method(self):
        self.props = lookup_gauge(100.0)

    def test_absolute_pressure(self):
        assert self.props.absolute_pressure == pytest.approx(201.325)

    def test_bracketed_by_table_rows(self):
        ratio = (201.325 - 200.0) / (300.0 - 200.0)
        assert self.props.temperature == pytest.approx(120.2 + ratio * (133.5 - 120.2))
        assert self.props.enthalpy == pytest.approx(2706.7 + ratio * (2725.3 - 2706.7))

    def test_enthalpy_kcal(self):
        assert self.props.enthalpy_kcal == pytest.approx(self.props.enthalpy / 4.186)


class TestClamping:
    def test_below_table(self):
        props = lookup(50.0)
        assert props.clamped
        assert props.temperature == STEAM_TABLE[0][1]
        assert props.absolute_pressure == 50.0

    def test_above_table(self):
        props = lookup(2000.0)
        assert props.clamped
        assert props.temperature == STEAM_TABLE[-1][1]
        assert props.enthalpy == STEAM_TABLE[-1][2]

    def test_zero_gauge_is_not_clamped(self):
        assert not lookup_gauge(0.0).clamped


class TestGaugeUnits:
    def test_bar_to_kpa(self):
        assert to_gauge_kpa(1.0, SteamPressureUnit.BARG) == pytest.approx(100.0)

    def test_mpa_to_kpa(self):
        assert to_gauge_kpa(0.2, SteamPressureUnit.MPAG) == pytest.approx(200.0)

    def test_psig_round_trip(self):
        kpa = to_gauge_kpa(15.0, SteamPressureUnit.PSIG)
        assert kpa == pytest.approx(103.42, abs=0.01)
        assert from_gauge_kpa(kpa, SteamPressureUnit.PSIG) == pytest.approx(15.0)

    def test_kgf_cm2(self):
        assert from_gauge_kpa(98.0665, SteamPressureUnit.KGFCM2G) == pytest.approx(1.0)
