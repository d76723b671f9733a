"""
Damper and eliminator models.

Both leave the air state unchanged and only contribute pressure loss.

Damper: ΔP = K × ½ρv², with v the duct velocity and ρ the inlet air density.
The Imperial equivalent uses the standard-air velocity pressure
Pv = (V / 4005)² in.wg with V in ft/min.

Eliminator: a blade-profile label with a default pressure loss per profile.
"""

from typing import Optional

from airchain.config import ELIMINATOR_PRESSURE_LOSS
from airchain.engine.equipment.base import EquipmentModel
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    DamperConditions,
    DamperResults,
    EliminatorConditions,
    EliminatorResults,
    TransformResult,
)

# ft/min at which standard air has a velocity pressure of 1 in.wg
VELOCITY_PRESSURE_CONSTANT_FPM = 4005.0


def velocity_pressure_inwg(velocity_fpm: float) -> float:
    """Standard-air velocity pressure (in.wg) at a velocity in ft/min."""
    return (velocity_fpm / VELOCITY_PRESSURE_CONSTANT_FPM) ** 2


def damper_pressure_loss_imperial(k: float, velocity_fpm: float) -> float:
    """Damper pressure loss (in.wg) from K and velocity (ft/min)."""
    return k * velocity_pressure_inwg(velocity_fpm)


def damper_pressure_loss(k: float, density: float, velocity: float) -> float:
    """Damper pressure loss (Pa) from K, density (kg/m³) and velocity (m/s)."""
    return k * 0.5 * density * velocity ** 2


class DamperModel(EquipmentModel):
    """Volume damper characterised by a loss coefficient K."""

    def transform(
        self, inlet: AirState, conditions: DamperConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions

        velocity: Optional[float] = None
        if c.width and c.height and c.width > 0 and c.height > 0 and airflow.volume_flow is not None:
            area = (c.width / 1000.0) * (c.height / 1000.0)
            velocity = airflow.volume_flow_m3_s / area

        pressure_loss: Optional[float] = None
        if velocity is not None and inlet.density is not None and c.loss_coefficient_k is not None:
            pressure_loss = damper_pressure_loss(c.loss_coefficient_k, inlet.density, velocity)

        return TransformResult(
            outlet_air=inlet.model_copy(),
            results=DamperResults(air_velocity=velocity, pressure_loss=pressure_loss),
            pressure_loss=pressure_loss,
        )


class EliminatorModel(EquipmentModel):
    """Droplet eliminator downstream of a washer."""

    def transform(
        self, inlet: AirState, conditions: EliminatorConditions, airflow: Airflow
    ) -> TransformResult:
        pressure_loss = conditions.pressure_loss
        if pressure_loss is None:
            pressure_loss = ELIMINATOR_PRESSURE_LOSS[conditions.eliminator_type]

        return TransformResult(
            outlet_air=inlet.model_copy(),
            results=EliminatorResults(pressure_loss=pressure_loss),
            pressure_loss=pressure_loss,
        )
