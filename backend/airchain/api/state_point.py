"""
API routes for air states, steam properties and unit conversion.
"""

from fastapi import APIRouter, HTTPException

from airchain.config import SteamPressureUnit
from airchain.engine import steam_table
from airchain.engine.properties import resolve_air_state
from airchain.engine.units import convert, display_precision, unit_label
from airchain.models.air_state import AirState, AirStateInput
from airchain.models.conversion import ConversionInput, ConversionOutput, SteamOutput

router = APIRouter(prefix="/api/v1", tags=["state-point"])


@router.post("/air-state", response_model=AirState)
async def create_air_state(data: AirStateInput) -> AirState:
    """
    Resolve a moist air state from temperature plus RH or absolute humidity.

    Missing or out-of-range inputs leave the derived fields as null.
    """
    try:
        return resolve_air_state(
            data.temperature,
            relative_humidity=data.relative_humidity,
            absolute_humidity=data.absolute_humidity,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/steam", response_model=SteamOutput)
async def get_steam_properties(
    gauge_pressure: float, unit: SteamPressureUnit = SteamPressureUnit.KPAG
) -> SteamOutput:
    """Saturated steam properties at a supply gauge pressure."""
    gauge_kpa = steam_table.to_gauge_kpa(gauge_pressure, unit)
    props = steam_table.lookup_gauge(gauge_kpa)
    return SteamOutput(
        gauge_pressure=gauge_pressure,
        gauge_pressure_unit=unit,
        absolute_pressure=props.absolute_pressure,
        temperature=props.temperature,
        enthalpy=props.enthalpy,
        enthalpy_kcal=props.enthalpy_kcal,
        clamped=props.clamped,
    )


@router.post("/convert", response_model=ConversionOutput)
async def convert_value(data: ConversionInput) -> ConversionOutput:
    """Convert a value of a given quantity kind between SI and Imperial."""
    try:
        value = convert(data.value, data.kind, data.from_system, data.to_system)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ConversionOutput(
        value=value,
        kind=data.kind,
        unit_system=data.to_system,
        unit=unit_label(data.kind, data.to_system),
        precision=display_precision(data.kind, data.to_system),
    )
