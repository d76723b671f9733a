"""
Shared utility functions for equipment models.

These are used by several models (cooling coil, heating coil, burner,
humidifiers) and are extracted here to avoid duplication.
"""

from typing import Optional

from scipy.optimize import brentq

from airchain.config import CHART_RANGES, CP_WATER, WATER_DENSITY
from airchain.engine.properties import saturation_absolute_humidity


def find_adp(
    inlet_temp: float,
    inlet_x: float,
    outlet_temp: float,
    outlet_x: float,
) -> float:
    """
    Find the apparatus dew point (ADP): the intersection of the coil process
    line with the saturation curve.

    The process line in t-x space is:
        x = inlet_x + slope × (t - inlet_temp)

    The ADP is where x_sat(t) == x_line(t). Returns the ADP temperature.

    Raises:
        ValueError: if the line is vertical or never meets the saturation curve
    """
    if abs(outlet_temp - inlet_temp) < 1e-10:
        raise ValueError(
            "Inlet and outlet temperatures are identical, cannot determine process line."
        )

    slope = (outlet_x - inlet_x) / (outlet_temp - inlet_temp)

    def objective(t: float) -> float:
        return saturation_absolute_humidity(t) - (inlet_x + slope * (t - inlet_temp))

    # Search domain: from chart minimum up to the outlet temperature
    t_min = CHART_RANGES["t_min"]
    t_max = outlet_temp

    f_max = objective(t_max)
    if abs(f_max) < 1e-9:
        # Outlet already saturated: it is its own ADP
        return t_max
    if t_max <= t_min or objective(t_min) * f_max > 0:
        raise ValueError(
            "Process line does not intersect the saturation curve. "
            "Check inlet and outlet conditions."
        )

    return brentq(objective, t_min, t_max, xtol=1e-8)


def mass_flow_or_none(mass_flow: Optional[float]) -> Optional[float]:
    """Mass flow usable as a divisor/multiplier, or None when zero or unknown."""
    if mass_flow is None or mass_flow <= 0:
        return None
    return mass_flow


def water_side_load(air_side_kw: Optional[float], efficiency: Optional[float]) -> Optional[float]:
    """Water-side heat load (kW) from the air-side load and exchange efficiency (%)."""
    if air_side_kw is None or efficiency is None or efficiency <= 0:
        return None
    return air_side_kw / (efficiency / 100.0)


def water_flow_l_min(water_side_kw: Optional[float], delta_t: Optional[float]) -> Optional[float]:
    """
    Water flow (L/min) carrying a heat load across a water temperature rise.

        flow = Q / (cp_water × ΔT) × 60 / ρ_water
    """
    if water_side_kw is None or delta_t is None or delta_t <= 0:
        return None
    return max(0.0, water_side_kw / (CP_WATER * delta_t) * 60.0 / WATER_DENSITY)


def moisture_l_min(mass_flow: float, delta_x: float) -> float:
    """Water mass moved (L/min) for a humidity change delta_x (g/kg) at mass_flow (kg/s)."""
    return mass_flow * delta_x / 1000.0 * 60.0 / WATER_DENSITY
