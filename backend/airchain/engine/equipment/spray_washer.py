"""
Spray (air) washer model.

Recirculated spray water approaches the adiabatic saturation temperature,
so the air moves along its constant-enthalpy line until it reaches the
outlet RH target:

    find t_out on h = h_in such that RH(t_out, x(t_out, h_in)) = target

Humidification efficiency compares the humidity gained with the
saturation humidity at the inlet dry-bulb temperature.
"""

import logging
from typing import Optional

from scipy.optimize import brentq

from airchain.config import CP_DRY_AIR, EquipmentWarning
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.utils import mass_flow_or_none, moisture_l_min
from airchain.engine.properties import (
    T_MAX,
    absolute_humidity_from_temp_enthalpy,
    air_state_from_temp_x,
    enthalpy_from_temp_x,
    relative_humidity_from_temp_x,
    saturation_absolute_humidity,
)
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    SprayWasherConditions,
    SprayWasherResults,
    TransformResult,
)

logger = logging.getLogger(__name__)

# Bounds of the adiabatic saturation search; above ~100 °C saturation is undefined at 1 atm
_T_SAT_MIN = -60.0
_T_SAT_MAX = 99.0


def adiabatic_saturation_temperature(t_in: float, h_in: float) -> Optional[float]:
    """Temperature where the constant-enthalpy line through h_in meets saturation."""

    def objective(t: float) -> float:
        return enthalpy_from_temp_x(t, saturation_absolute_humidity(t)) - h_in

    t_hi = min(t_in, _T_SAT_MAX)
    if objective(t_hi) <= 0:
        # Inlet already saturated
        return t_hi
    if t_hi <= _T_SAT_MIN or objective(_T_SAT_MIN) > 0:
        return None
    return brentq(objective, _T_SAT_MIN, t_hi, xtol=1e-8)


def _outlet_temperature(t_sat: float, h_in: float, target_rh: float) -> Optional[float]:
    """Temperature on the constant-enthalpy line with the target RH."""

    def objective(t: float) -> float:
        x = absolute_humidity_from_temp_enthalpy(t, h_in)
        return relative_humidity_from_temp_x(t, x or 0.0) - target_rh

    # x reaches zero at h / cp_da
    t_dry = min(h_in / CP_DRY_AIR, T_MAX)
    if t_dry <= t_sat:
        return None
    f_sat, f_dry = objective(t_sat), objective(t_dry)
    if abs(f_sat) < 1e-6:
        return t_sat
    if f_sat * f_dry > 0:
        return None
    return brentq(objective, t_sat, t_dry, xtol=1e-8)


class SprayWasherModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: SprayWasherConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions
        results = SprayWasherResults()
        warnings: list[EquipmentWarning] = []

        if not inlet.is_determined or c.outlet_rh is None:
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
            )

        t_in, x_in, h_in = inlet.temperature, inlet.absolute_humidity, inlet.enthalpy
        target = c.outlet_rh

        if inlet.relative_humidity is not None and target < inlet.relative_humidity:
            warnings.append(EquipmentWarning.SPRAY_WASHER_TARGET)

        t_sat = adiabatic_saturation_temperature(t_in, h_in)
        results.adiabatic_saturation_temp = t_sat

        t_out = None
        if t_sat is not None and 0.0 < target <= 100.0:
            t_out = _outlet_temperature(t_sat, h_in, target)

        if t_out is None:
            logger.debug("Spray washer: no outlet on h=%.3f for RH %.1f%%", h_in, target)
            if EquipmentWarning.SPRAY_WASHER_TARGET not in warnings:
                warnings.append(EquipmentWarning.SPRAY_WASHER_TARGET)
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
                warnings=warnings,
            )

        x_out = absolute_humidity_from_temp_enthalpy(t_out, h_in)
        outlet = air_state_from_temp_x(t_out, x_out)

        x_sat_in = saturation_absolute_humidity(t_in)
        if x_sat_in is not None and x_out is not None:
            potential = x_sat_in - x_in
            if potential > 1e-3:
                efficiency = (x_out - x_in) / potential * 100.0
                results.humidification_efficiency = min(100.0, max(0.0, efficiency))

        m = mass_flow_or_none(airflow.mass_flow)
        if m is not None and x_out is not None:
            results.humidification = max(0.0, moisture_l_min(m, x_out - x_in))
            if c.water_to_air_ratio is not None:
                results.spray_amount = m * c.water_to_air_ratio * 60.0

        return TransformResult(
            outlet_air=outlet,
            results=results,
            pressure_loss=c.pressure_loss,
            warnings=warnings,
        )
