"""
Air filter model.

A filter does not change the air state. Its pressure loss is the empirical
initial resistance of one sheet of the selected media times the number of
sheets; the face velocity is the airflow spread over the total face area.
"""

from airchain.config import FILTER_MEDIA_RESISTANCE
from airchain.engine.equipment.base import EquipmentModel
from airchain.models.air_state import AirState
from airchain.models.equipment import (
    Airflow,
    FilterConditions,
    FilterResults,
    TransformResult,
)


class FilterModel(EquipmentModel):
    """Pass-through filter bank."""

    def transform(
        self, inlet: AirState, conditions: FilterConditions, airflow: Airflow
    ) -> TransformResult:
        c = conditions

        resistance = c.resistance_per_sheet
        if resistance is None:
            resistance = FILTER_MEDIA_RESISTANCE[c.media]

        sheets = c.sheets if c.sheets and c.sheets > 0 else None
        pressure_loss = resistance * sheets if sheets is not None else None

        face_area = None
        if sheets is not None and c.width and c.height and c.width > 0 and c.height > 0:
            face_area = (c.width / 1000.0) * (c.height / 1000.0) * sheets

        face_velocity = None
        if face_area is not None and airflow.volume_flow is not None:
            face_velocity = airflow.volume_flow_m3_s / face_area

        airflow_per_sheet = None
        if sheets is not None and airflow.volume_flow is not None:
            airflow_per_sheet = airflow.volume_flow / sheets

        return TransformResult(
            outlet_air=inlet.model_copy(),
            results=FilterResults(
                face_area=face_area,
                face_velocity=face_velocity,
                airflow_per_sheet=airflow_per_sheet,
                resistance_per_sheet=resistance,
            ),
            pressure_loss=pressure_loss,
        )
