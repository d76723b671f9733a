"""
Chilled water cooling coil model.

Two ways of fixing the leaving state:

  - Outlet mode: outlet temperature, plus optionally an outlet RH. The ADP
    is back-solved by intersecting the process line with the saturation
    curve, and BF = (t_out − t_adp) / (t_in − t_adp). Without an RH the
    leaving air keeps the entering humidity until it drops below the
    entering dew point, after which it leaves saturated.
  - Bypass factor mode: outlet temperature plus BF. The ADP follows from
    t_adp = (t_out − BF × t_in) / (1 − BF) and the leaving humidity mixes
    bypassed and saturated air: x_out = BF × x_in + (1 − BF) × x_adp.

When the humidity drop is within SENSIBLE_ONLY_TOLERANCE the process is
treated as sensible cooling: no ADP or BF is reported and the unit is
flagged. A leaving humidity above saturation at the outlet temperature is
clamped to saturation and flagged as supersaturated.

Outlet RH and BF are mutually exclusive; CoolingCoilConditions rejects both.
"""

import logging
from typing import Optional

from airchain.config import SENSIBLE_ONLY_TOLERANCE, EquipmentWarning
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.utils import (
    find_adp,
    mass_flow_or_none,
    moisture_l_min,
    water_flow_l_min,
    water_side_load,
)
from airchain.engine.properties import (
    absolute_humidity_from_temp_rh,
    air_state_from_temp_x,
    dew_point_from_x,
    saturation_absolute_humidity,
)
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    CoolingCoilConditions,
    CoolingCoilResults,
    TransformResult,
)

logger = logging.getLogger(__name__)


class CoolingCoilModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: CoolingCoilConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions
        results = CoolingCoilResults()
        warnings: list[EquipmentWarning] = []

        if not inlet.is_determined or c.outlet_temp is None:
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
            )

        t_in, x_in = inlet.temperature, inlet.absolute_humidity
        t_out = c.outlet_temp
        results.inlet_dew_point = dew_point_from_x(x_in)

        if t_out > t_in:
            warnings.append(EquipmentWarning.COOLING_COIL_TEMP)

        if c.bypass_factor is not None:
            x_out = self._bypass_factor_mode(t_in, x_in, t_out, c.bypass_factor, results, warnings)
        else:
            x_out = self._outlet_mode(t_in, x_in, t_out, c.outlet_rh, results, warnings)

        if x_out is None:
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
                warnings=warnings,
            )

        # Leaving air cannot hold more than saturation; the excess is fog
        x_sat_out = saturation_absolute_humidity(t_out)
        if x_sat_out is not None and x_out > x_sat_out + SENSIBLE_ONLY_TOLERANCE:
            warnings.append(EquipmentWarning.COOLING_COIL_SUPERSATURATED)
            x_out = x_sat_out

        outlet = air_state_from_temp_x(t_out, x_out)

        m = mass_flow_or_none(airflow.mass_flow)
        if m is not None and outlet.enthalpy is not None:
            results.air_side_heat_load = m * abs(inlet.enthalpy - outlet.enthalpy)
            results.water_side_heat_load = water_side_load(
                results.air_side_heat_load, c.heat_exchange_efficiency
            )
            if c.chilled_water_inlet_temp is not None and c.chilled_water_outlet_temp is not None:
                results.chilled_water_flow = water_flow_l_min(
                    results.water_side_heat_load,
                    c.chilled_water_outlet_temp - c.chilled_water_inlet_temp,
                )
            results.dehumidification = moisture_l_min(m, abs(x_in - x_out))

        return TransformResult(
            outlet_air=outlet,
            results=results,
            pressure_loss=c.pressure_loss,
            warnings=warnings,
        )

    def _bypass_factor_mode(
        self,
        t_in: float,
        x_in: float,
        t_out: float,
        bf: float,
        results: CoolingCoilResults,
        warnings: list,
    ) -> Optional[float]:
        if not (0.0 <= bf < 1.0):
            warnings.append(EquipmentWarning.COOLING_COIL_BYPASS)
            return x_in

        t_adp = (t_out - bf * t_in) / (1.0 - bf)
        x_adp = saturation_absolute_humidity(t_adp)
        if x_adp is None or x_adp >= x_in - SENSIBLE_ONLY_TOLERANCE:
            warnings.append(EquipmentWarning.COOLING_COIL_SENSIBLE)
            return x_in

        results.apparatus_dew_point = t_adp
        results.bypass_factor = bf
        results.contact_factor = 1.0 - bf
        return bf * x_in + (1.0 - bf) * x_adp

    def _outlet_mode(
        self,
        t_in: float,
        x_in: float,
        t_out: float,
        outlet_rh: Optional[float],
        results: CoolingCoilResults,
        warnings: list,
    ) -> Optional[float]:
        if outlet_rh is not None:
            x_out = absolute_humidity_from_temp_rh(t_out, outlet_rh)
            if x_out is None:
                return None
        elif results.inlet_dew_point is not None and t_out < results.inlet_dew_point:
            x_out = saturation_absolute_humidity(t_out)
            if x_out is None:
                return None
        else:
            x_out = x_in

        if x_out > x_in + SENSIBLE_ONLY_TOLERANCE:
            warnings.append(EquipmentWarning.COOLING_COIL_HUMIDITY)

        if x_in - x_out <= SENSIBLE_ONLY_TOLERANCE:
            warnings.append(EquipmentWarning.COOLING_COIL_SENSIBLE)
            return x_out

        try:
            t_adp = find_adp(t_in, x_in, t_out, x_out)
        except ValueError as e:
            logger.warning("ADP not found: %s", e)
            return x_out

        results.apparatus_dew_point = t_adp
        if abs(t_in - t_adp) > 1e-10:
            bf = (t_out - t_adp) / (t_in - t_adp)
            results.bypass_factor = bf
            results.contact_factor = 1.0 - bf
        return x_out
