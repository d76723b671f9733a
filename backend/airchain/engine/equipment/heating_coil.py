"""
Hot water heating coil model.

Sensible heating only: the absolute humidity is unchanged and the outlet
follows the user's outlet temperature target. Loads:

    air side   = m × (h_out − h_in)
    water side = air side / (efficiency / 100)
    water flow = water side / (4.186 × (t_hw_in − t_hw_out)) × 60   [L/min]
"""

from airchain.config import EquipmentWarning
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.utils import (
    mass_flow_or_none,
    water_flow_l_min,
    water_side_load,
)
from airchain.engine.properties import air_state_from_temp_x
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    HeatingCoilConditions,
    HeatingCoilResults,
    TransformResult,
)


class HeatingCoilModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: HeatingCoilConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions
        results = HeatingCoilResults()
        warnings = []

        if not inlet.is_determined or c.outlet_temp is None:
            return TransformResult(
                outlet_air=AirState.empty(),
                results=results,
                pressure_loss=c.pressure_loss,
            )

        if c.outlet_temp < inlet.temperature:
            warnings.append(EquipmentWarning.HEATING_COIL)

        outlet = air_state_from_temp_x(c.outlet_temp, inlet.absolute_humidity)

        m = mass_flow_or_none(airflow.mass_flow)
        if m is not None and outlet.enthalpy is not None:
            results.air_side_heat_load = m * (outlet.enthalpy - inlet.enthalpy)
            results.water_side_heat_load = water_side_load(
                results.air_side_heat_load, c.heat_exchange_efficiency
            )
            if c.hot_water_inlet_temp is not None and c.hot_water_outlet_temp is not None:
                results.hot_water_flow = water_flow_l_min(
                    results.water_side_heat_load,
                    c.hot_water_inlet_temp - c.hot_water_outlet_temp,
                )

        return TransformResult(
            outlet_air=outlet,
            results=results,
            pressure_loss=c.pressure_loss,
            warnings=warnings,
        )
