"""
Supply/return fan model.

Motor losses end up in the airstream as sensible heat:

    heat     = motor output × (1 − motor efficiency / 100)      [kW]
    ΔT       = heat / (m × 1.02)
    t_out    = t_in + ΔT,  x unchanged

Fans are the pressure source of the system, so they report no pressure loss.
When the fan's total pressure and efficiency are given, the required motor
power and the next standard motor size are reported as well.
"""

from typing import Optional

from airchain.config import CP_MOIST_AIR, MOTOR_OUTPUTS
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.utils import mass_flow_or_none
from airchain.engine.properties import air_state_from_temp_x
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    FanConditions,
    FanResults,
    TransformResult,
)


def standard_motor_output(required_kw: float) -> Optional[float]:
    """Smallest standard motor output (kW) that covers the requirement."""
    for _, kw in MOTOR_OUTPUTS:
        if kw >= required_kw:
            return kw
    return None


def required_motor_power(
    volume_flow_m3_s: float,
    total_pressure: float,
    fan_efficiency: float,
    margin_factor: Optional[float] = None,
) -> Optional[float]:
    """Shaft power (kW) = Q × ΔP / η, plus an optional safety margin (%)."""
    if fan_efficiency <= 0:
        return None
    power = volume_flow_m3_s * total_pressure / (fan_efficiency / 100.0) / 1000.0
    if margin_factor:
        power *= 1.0 + margin_factor / 100.0
    return power


class FanModel(EquipmentModel):

    def transform(
        self, inlet: AirState, conditions: FanConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions
        results = FanResults()

        if c.total_pressure is not None and c.fan_efficiency is not None and airflow.volume_flow:
            results.required_motor_power = required_motor_power(
                airflow.volume_flow_m3_s, c.total_pressure, c.fan_efficiency, c.margin_factor
            )
            if results.required_motor_power is not None:
                results.recommended_motor_output = standard_motor_output(
                    results.required_motor_power
                )

        m = mass_flow_or_none(airflow.mass_flow)
        if (
            not inlet.is_determined
            or m is None
            or c.motor_output is None
            or c.motor_efficiency is None
        ):
            return TransformResult(outlet_air=AirState.empty(), results=results)

        heat = max(0.0, c.motor_output * (1.0 - c.motor_efficiency / 100.0))
        temp_rise = heat / (m * CP_MOIST_AIR)

        results.heat_generation = heat
        results.temp_rise = temp_rise

        return TransformResult(
            outlet_air=air_state_from_temp_x(
                inlet.temperature + temp_rise, inlet.absolute_humidity
            ),
            results=results,
        )
