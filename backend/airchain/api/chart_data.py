"""
API routes for chart background data generation.
"""

from fastapi import APIRouter, HTTPException

from airchain.config import UnitSystem
from airchain.engine.chart_generator import generate_chart_data
from airchain.engine.persistence import chain_from_document
from airchain.models.chain import ChainDocument

router = APIRouter(prefix="/api/v1", tags=["chart-data"])


@router.get("/chart-data")
async def get_chart_data(unit_system: UnitSystem = UnitSystem.SI) -> dict:
    """
    Generate psychrometric chart background data: saturation curve,
    constant RH lines and constant enthalpy lines.
    """
    try:
        return generate_chart_data(unit_system)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Chart data generation error: {str(e)}")


@router.post("/chart-data")
async def get_chain_chart_data(
    document: ChainDocument, unit_system: UnitSystem = UnitSystem.SI
) -> dict:
    """Chart background data plus the process segments of a chain."""
    try:
        chain = chain_from_document(document)
        return generate_chart_data(unit_system, chain=chain)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Chart data generation error: {str(e)}")
