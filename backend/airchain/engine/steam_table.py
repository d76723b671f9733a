"""
Saturated steam table interpolator.

A small fixed table of saturated steam (absolute pressure kPa, temperature °C,
vapour enthalpy kJ/kg) covering the gauge pressures used by steam
humidifiers. Lookups interpolate linearly between the bracketing rows.

Pressures outside the table are clamped to the nearest edge row rather than
extrapolated. This is a known limitation for very low or very high supply
pressures; the returned SteamProperties carries a `clamped` flag.
"""

import logging
from bisect import bisect_right
from types import MappingProxyType
from typing import NamedTuple

from airchain.config import ATMOSPHERIC_PRESSURE, KJ_PER_KCAL, SteamPressureUnit

logger = logging.getLogger(__name__)

# (absolute pressure kPa, saturation temperature °C, vapour enthalpy kJ/kg)
STEAM_TABLE: tuple[tuple[float, float, float], ...] = (
    (101.325, 100.0, 2676.1),
    (150.0, 111.4, 2693.6),
    (200.0, 120.2, 2706.7),
    (300.0, 133.5, 2725.3),
    (400.0, 143.6, 2738.6),
    (500.0, 151.8, 2748.7),
    (600.0, 158.8, 2756.8),
    (800.0, 170.4, 2769.1),
    (1000.0, 179.9, 2778.1),
)

_PRESSURES = tuple(row[0] for row in STEAM_TABLE)

# Gauge pressure unit → kPa
_GAUGE_TO_KPA = MappingProxyType({
    SteamPressureUnit.PAG: 0.001,
    SteamPressureUnit.KPAG: 1.0,
    SteamPressureUnit.MPAG: 1000.0,
    SteamPressureUnit.PSIG: 6.894757,
    SteamPressureUnit.BARG: 100.0,
    SteamPressureUnit.KGFCM2G: 98.0665,
})


class SteamProperties(NamedTuple):
    absolute_pressure: float  # kPa
    temperature: float        # °C
    enthalpy: float           # kJ/kg
    clamped: bool = False

    @property
    def enthalpy_kcal(self) -> float:
        """Vapour enthalpy in kcal/kg."""
        return self.enthalpy / KJ_PER_KCAL


def lookup(absolute_pressure: float) -> SteamProperties:
    """
    Interpolate saturated steam temperature and enthalpy at an absolute
    pressure (kPa). Out-of-range pressures return the edge row.
    """
    first, last = STEAM_TABLE[0], STEAM_TABLE[-1]
    if absolute_pressure <= first[0]:
        if absolute_pressure < first[0]:
            logger.debug("Steam pressure %.3f kPa below table, clamped", absolute_pressure)
        return SteamProperties(
            absolute_pressure, first[1], first[2], absolute_pressure < first[0]
        )
    if absolute_pressure >= last[0]:
        if absolute_pressure > last[0]:
            logger.debug("Steam pressure %.3f kPa above table, clamped", absolute_pressure)
        return SteamProperties(
            absolute_pressure, last[1], last[2], absolute_pressure > last[0]
        )

    i = bisect_right(_PRESSURES, absolute_pressure)
    p1, t1, h1 = STEAM_TABLE[i - 1]
    p2, t2, h2 = STEAM_TABLE[i]
    ratio = (absolute_pressure - p1) / (p2 - p1)

    return SteamProperties(
        absolute_pressure=absolute_pressure,
        temperature=t1 + ratio * (t2 - t1),
        enthalpy=h1 + ratio * (h2 - h1),
    )


def lookup_gauge(
    gauge_pressure: float, atmospheric_pressure: float = ATMOSPHERIC_PRESSURE
) -> SteamProperties:
    """Look up steam properties from a gauge pressure in kPaG."""
    return lookup(gauge_pressure + atmospheric_pressure / 1000.0)


def to_gauge_kpa(value: float, unit: SteamPressureUnit) -> float:
    """Convert a gauge pressure in any supported unit to kPaG."""
    return value * _GAUGE_TO_KPA[unit]


def from_gauge_kpa(value: float, unit: SteamPressureUnit) -> float:
    """Convert a gauge pressure in kPaG to the given unit."""
    return value / _GAUGE_TO_KPA[unit]
