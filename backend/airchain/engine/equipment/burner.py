"""
Direct-fired gas burner model.

The user sets the outlet dry-bulb temperature and the SHF (sensible heat
factor) of the combustion process. Combustion adds water vapour, so for
SHF < 1 the absolute humidity rises along a line whose slope matches SHF:

    Δh_sensible = h(t_out, x_in) − h_in
    Δh_total    = Δh_sensible / SHF
    x_out       = x(t_out, h_in + Δh_total)

SHF = 1 leaves the absolute humidity unchanged. The heat load is
m × (h_out − h_in) and the gas flow is that load over the fuel's lower
heating value.
"""

from airchain.config import (
    GAS_LOWER_HEATING_VALUES,
    KW_TO_KCAL_H,
    EquipmentWarning,
)
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.utils import mass_flow_or_none
from airchain.engine.properties import (
    absolute_humidity_from_temp_enthalpy,
    air_state_from_temp_x,
    enthalpy_from_temp_x,
)
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    BurnerConditions,
    BurnerResults,
    TransformResult,
)


class BurnerModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: BurnerConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions
        warnings = []

        lhv = c.lower_heating_value
        if lhv is None:
            lhv = GAS_LOWER_HEATING_VALUES[c.fuel]

        if not inlet.is_determined or c.outlet_temp is None or c.shf is None:
            return TransformResult(
                outlet_air=AirState.empty(),
                results=BurnerResults(lower_heating_value=lhv),
                pressure_loss=c.pressure_loss,
            )

        t_in, x_in, h_in = inlet.temperature, inlet.absolute_humidity, inlet.enthalpy
        t_out = c.outlet_temp

        if t_out < t_in:
            warnings.append(EquipmentWarning.BURNER)

        shf = c.shf
        if not (0.0 < shf <= 1.0):
            warnings.append(EquipmentWarning.BURNER_SHF)
            shf = 1.0

        dh_sensible = enthalpy_from_temp_x(t_out, x_in) - h_in
        h_out = h_in + dh_sensible / shf
        x_out = absolute_humidity_from_temp_enthalpy(t_out, h_out)
        outlet = air_state_from_temp_x(t_out, x_out)

        results = BurnerResults(lower_heating_value=lhv)
        m = mass_flow_or_none(airflow.mass_flow)
        if m is not None and outlet.enthalpy is not None:
            heat_load = m * (outlet.enthalpy - h_in)
            results.heat_load = heat_load
            results.heat_load_kcal_h = heat_load * KW_TO_KCAL_H
            if lhv and lhv > 0:
                # kW × 3.6 = MJ/h
                results.gas_flow = max(0.0, heat_load * 3.6 / lhv)

        return TransformResult(
            outlet_air=outlet,
            results=results,
            pressure_loss=c.pressure_loss,
            warnings=warnings,
        )
