"""
API routes for evaluating a single equipment unit.
"""

from fastapi import APIRouter, HTTPException

from airchain.engine.equipment.registry import transform_unit
from airchain.engine.properties import air_state_from_temp_rh
from airchain.models.equipment import Airflow, TransformInput, TransformResult

router = APIRouter(prefix="/api/v1", tags=["equipment"])


@router.post("/equipment/transform", response_model=TransformResult)
async def transform_equipment(data: TransformInput) -> TransformResult:
    """
    Run one equipment model on an inlet state.

    The dry-air mass flow is derived from the airflow (m³/min) at the inlet
    density.
    """
    try:
        inlet = air_state_from_temp_rh(data.inlet_temperature, data.inlet_relative_humidity)
        airflow = Airflow.from_state(data.airflow, inlet)
        return transform_unit(inlet, data.conditions, airflow)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
