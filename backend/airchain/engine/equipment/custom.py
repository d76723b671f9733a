"""
Custom equipment: the user states the outlet air and pressure loss directly.

With no outlet temperature the unit is a pass-through. With a temperature
but no RH, the inlet absolute humidity is carried across (sensible change).
"""

from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.properties import resolve_air_state
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    CustomConditions,
    CustomResults,
    TransformResult,
)


class CustomModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: CustomConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions

        if c.outlet_temp is None:
            outlet = inlet.model_copy()
        elif c.outlet_rh is not None:
            outlet = resolve_air_state(c.outlet_temp, relative_humidity=c.outlet_rh)
        else:
            outlet = resolve_air_state(c.outlet_temp, absolute_humidity=inlet.absolute_humidity)

        return TransformResult(
            outlet_air=outlet,
            results=CustomResults(pressure_loss=c.pressure_loss),
            pressure_loss=c.pressure_loss,
        )
