"""
Moist air property calculator.

Pure functions converting between dry-bulb temperature (°C), relative
humidity (%), absolute humidity (g/kg dry air) and enthalpy (kJ/kg dry air)
at a given atmospheric pressure (Pa).

Saturation vapour pressure comes from psychrolib (ASHRAE correlation). The
humidity/enthalpy relations are the closed forms:

    x = 1000 × 0.622 × Pv / (P − Pv)
    h = 1.006 × t + (x / 1000) × (2501 + 1.86 × t)

Every function returns None for missing or physically impossible input
instead of raising or leaking NaN; callers treat None as "undetermined".
"""

import logging
from typing import Optional

import psychrolib
from scipy.optimize import brentq

from airchain.config import (
    ATMOSPHERIC_PRESSURE,
    CP_DRY_AIR,
    CP_WATER_VAPOR,
    HFG_0C,
    MOLAR_MASS_RATIO,
)
from airchain.models.air_state import AirState

logger = logging.getLogger(__name__)

# Validity range of psychrolib's saturation pressure correlation (SI)
T_MIN = -100.0
T_MAX = 200.0


def _set_unit_system() -> None:
    """The engine always runs psychrolib in SI."""
    psychrolib.SetUnitSystem(psychrolib.SI)


def saturation_pressure(t: Optional[float]) -> Optional[float]:
    """Saturation vapour pressure over water/ice at t (°C), in Pa."""
    if t is None or not (T_MIN <= t <= T_MAX):
        return None
    _set_unit_system()
    return psychrolib.GetSatVapPres(t)


def _vapor_pressure_from_x(x: float, pressure: float) -> float:
    w = x / 1000.0
    return pressure * w / (MOLAR_MASS_RATIO + w)


def _temperature_at_saturation_pressure(ps: float) -> Optional[float]:
    """Invert the saturation pressure curve: find t with Psat(t) == ps."""
    ps_min = saturation_pressure(T_MIN)
    ps_max = saturation_pressure(T_MAX)
    if ps <= ps_min or ps >= ps_max:
        return None

    def objective(t: float) -> float:
        return psychrolib.GetSatVapPres(t) - ps

    return brentq(objective, T_MIN, T_MAX, xtol=1e-8)


def absolute_humidity_from_temp_rh(
    t: Optional[float], rh: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> Optional[float]:
    """Absolute humidity (g/kg) from temperature and relative humidity."""
    if t is None or rh is None or rh < 0.0 or rh > 100.0:
        return None
    ps = saturation_pressure(t)
    if ps is None:
        return None
    pv = ps * rh / 100.0
    if pv >= pressure:
        return None
    return 1000.0 * MOLAR_MASS_RATIO * pv / (pressure - pv)


def enthalpy_from_temp_x(t: Optional[float], x: Optional[float]) -> Optional[float]:
    """Specific enthalpy (kJ/kg) from temperature and absolute humidity."""
    if t is None or x is None or x < 0.0:
        return None
    return CP_DRY_AIR * t + (x / 1000.0) * (HFG_0C + CP_WATER_VAPOR * t)


def relative_humidity_from_temp_x(
    t: Optional[float], x: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> Optional[float]:
    """Relative humidity (%) from temperature and absolute humidity.

    Supersaturated inputs report 100 %.
    """
    if t is None or x is None or x < 0.0:
        return None
    ps = saturation_pressure(t)
    if not ps:
        return None
    rh = 100.0 * _vapor_pressure_from_x(x, pressure) / ps
    return min(100.0, rh)


def absolute_humidity_from_temp_enthalpy(
    t: Optional[float], h: Optional[float]
) -> Optional[float]:
    """Absolute humidity (g/kg) from temperature and enthalpy.

    Linear in x, so solved directly rather than by root finding.
    """
    if t is None or h is None:
        return None
    denominator = HFG_0C + CP_WATER_VAPOR * t
    if abs(denominator) < 1e-12:
        return None
    x = 1000.0 * (h - CP_DRY_AIR * t) / denominator
    if x < 0.0:
        # Float noise on dry air
        if x > -1e-9:
            return 0.0
        return None
    return x


def saturation_absolute_humidity(
    t: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> Optional[float]:
    """Absolute humidity (g/kg) of saturated air at t."""
    return absolute_humidity_from_temp_rh(t, 100.0, pressure)


def dew_point_from_x(
    x: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> Optional[float]:
    """Dew point temperature (°C) for absolute humidity x. None for dry air."""
    if x is None or x <= 0.0:
        return None
    return _temperature_at_saturation_pressure(_vapor_pressure_from_x(x, pressure))


def temperature_from_rh_x(
    rh: Optional[float], x: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> Optional[float]:
    """Dry-bulb temperature (°C) at which air of humidity x has relative humidity rh."""
    if rh is None or x is None or rh <= 0.0 or rh > 100.0 or x <= 0.0:
        return None
    ps_target = _vapor_pressure_from_x(x, pressure) / (rh / 100.0)
    return _temperature_at_saturation_pressure(ps_target)


def dry_air_density(
    t: Optional[float], x: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> Optional[float]:
    """Mass of dry air per m³ of moist air (kg/m³), i.e. 1 / specific volume."""
    if t is None or x is None or x < 0.0 or t <= -273.15:
        return None
    _set_unit_system()
    v = psychrolib.GetMoistAirVolume(t, x / 1000.0, pressure)
    if v <= 0:
        return None
    return 1.0 / v


def pressure_from_altitude(altitude_m: float) -> float:
    """Standard-atmosphere pressure (Pa) at an altitude in metres."""
    _set_unit_system()
    return psychrolib.GetStandardAtmPressure(max(0.0, altitude_m))


# ---------------------------------------------------------------------------
# AirState constructors
# ---------------------------------------------------------------------------

def _complete_state(
    t: float, rh: float, x: float, pressure: float
) -> AirState:
    return AirState(
        temperature=t,
        relative_humidity=rh,
        absolute_humidity=x,
        enthalpy=enthalpy_from_temp_x(t, x),
        density=dry_air_density(t, x, pressure),
    )


def air_state_from_temp_rh(
    t: Optional[float], rh: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> AirState:
    """Resolve a full state from temperature and relative humidity."""
    x = absolute_humidity_from_temp_rh(t, rh, pressure)
    if x is None:
        return AirState(temperature=t, relative_humidity=rh)
    return _complete_state(t, rh, x, pressure)


def air_state_from_temp_x(
    t: Optional[float], x: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> AirState:
    """Resolve a full state from temperature and absolute humidity."""
    rh = relative_humidity_from_temp_x(t, x, pressure)
    if rh is None:
        return AirState(temperature=t, absolute_humidity=x)
    return _complete_state(t, rh, x, pressure)


def air_state_from_temp_enthalpy(
    t: Optional[float], h: Optional[float], pressure: float = ATMOSPHERIC_PRESSURE
) -> AirState:
    """Resolve a full state from temperature and enthalpy."""
    x = absolute_humidity_from_temp_enthalpy(t, h)
    if x is None:
        return AirState(temperature=t, enthalpy=h)
    return air_state_from_temp_x(t, x, pressure)


def resolve_air_state(
    temperature: Optional[float],
    relative_humidity: Optional[float] = None,
    absolute_humidity: Optional[float] = None,
    pressure: float = ATMOSPHERIC_PRESSURE,
) -> AirState:
    """
    Resolve a state from temperature plus either absolute humidity or RH.

    Absolute humidity wins when both are given, so that a humidity carried
    along a sensible process is not re-derived through a rounded RH.
    """
    if temperature is None:
        return AirState(
            relative_humidity=relative_humidity,
            absolute_humidity=absolute_humidity,
        )
    if absolute_humidity is not None:
        return air_state_from_temp_x(temperature, absolute_humidity, pressure)
    if relative_humidity is not None:
        return air_state_from_temp_rh(temperature, relative_humidity, pressure)
    return AirState(temperature=temperature)
