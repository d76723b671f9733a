"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from airchain.api.state_point import router as state_point_router
from airchain.api.chart_data import router as chart_data_router
from airchain.api.chain import router as chain_router
from airchain.api.equipment import router as equipment_router

router = APIRouter()
router.include_router(state_point_router)
router.include_router(chart_data_router)
router.include_router(chain_router)
router.include_router(equipment_router)
