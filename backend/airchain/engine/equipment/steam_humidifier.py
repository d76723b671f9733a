"""
Steam humidifier model.

Saturated steam at the supply pressure is injected until the air reaches the
outlet RH target. With h_s the steam enthalpy, the mixing energy balance per
kg of dry air is

    h_out − x_out × h_s / 1000 = h_in − x_in × h_s / 1000

so the outlet is found on the target RH curve. The residual is scanned on a
grid around the inlet temperature to locate a bracket, which brentq refines.
"""

import logging
from typing import Optional

import numpy as np
from scipy.optimize import brentq

from airchain.config import EquipmentWarning
from airchain.engine import steam_table
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.utils import mass_flow_or_none
from airchain.engine.properties import (
    absolute_humidity_from_temp_rh,
    air_state_from_temp_x,
    enthalpy_from_temp_x,
)
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    SteamHumidifierConditions,
    SteamHumidifierResults,
    TransformResult,
)

logger = logging.getLogger(__name__)

_SCAN_HALF_WIDTH = 30.0  # K either side of the inlet temperature
_SCAN_POINTS = 121


def _residual(t: float, target_rh: float, steam_h: float, c: float) -> float:
    x = absolute_humidity_from_temp_rh(t, target_rh)
    if x is None:
        return float("nan")
    return enthalpy_from_temp_x(t, x) - x * steam_h / 1000.0 - c


def solve_outlet_temperature(
    t_in: float, x_in: float, h_in: float, target_rh: float, steam_h: float
) -> Optional[float]:
    """Outlet temperature on the target RH curve satisfying the steam energy balance."""
    c = h_in - x_in * steam_h / 1000.0

    grid = np.linspace(t_in - _SCAN_HALF_WIDTH, t_in + _SCAN_HALF_WIDTH, _SCAN_POINTS)
    values = np.array([_residual(t, target_rh, steam_h, c) for t in grid])

    brackets = []
    for i in range(len(grid) - 1):
        a, b = values[i], values[i + 1]
        if not (np.isfinite(a) and np.isfinite(b)):
            continue
        if a == 0.0:
            return float(grid[i])
        if a * b < 0:
            brackets.append((grid[i], grid[i + 1]))

    if not brackets:
        return None

    lo, hi = min(brackets, key=lambda br: abs(0.5 * (br[0] + br[1]) - t_in))
    return brentq(_residual, lo, hi, args=(target_rh, steam_h, c), xtol=1e-8)


class SteamHumidifierModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: SteamHumidifierConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions
        results = SteamHumidifierResults()
        warnings: list[EquipmentWarning] = []

        steam = None
        if c.steam_gauge_pressure is not None:
            steam = steam_table.lookup_gauge(
                steam_table.to_gauge_kpa(c.steam_gauge_pressure, c.steam_gauge_pressure_unit)
            )
            results.steam_absolute_pressure = steam.absolute_pressure
            results.steam_temperature = steam.temperature
            results.steam_enthalpy = steam.enthalpy_kcal
            results.steam_table_clamped = steam.clamped

        if not inlet.is_determined or c.outlet_rh is None or steam is None:
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
            )

        t_in, x_in, h_in = inlet.temperature, inlet.absolute_humidity, inlet.enthalpy
        target = c.outlet_rh

        if inlet.relative_humidity is not None and target < inlet.relative_humidity:
            warnings.append(EquipmentWarning.STEAM_HUMIDIFIER_TARGET)

        t_out = None
        if 0.0 < target <= 100.0:
            t_out = solve_outlet_temperature(t_in, x_in, h_in, target, steam.enthalpy)

        if t_out is None:
            logger.debug("Steam humidifier: no outlet for RH %.1f%%", target)
            if EquipmentWarning.STEAM_HUMIDIFIER_TARGET not in warnings:
                warnings.append(EquipmentWarning.STEAM_HUMIDIFIER_TARGET)
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
                warnings=warnings,
            )

        x_out = absolute_humidity_from_temp_rh(t_out, target)
        outlet = air_state_from_temp_x(t_out, x_out)

        m = mass_flow_or_none(airflow.mass_flow)
        if m is not None and x_out is not None:
            results.required_steam_amount = max(0.0, m * (x_out - x_in) / 1000.0 * 3600.0)

        return TransformResult(
            outlet_air=outlet,
            results=results,
            pressure_loss=c.pressure_loss,
            warnings=warnings,
        )
