"""
Pydantic models for unit conversion and steam property lookups.
"""

from typing import Optional

from pydantic import BaseModel, Field

from airchain.config import SteamPressureUnit, UnitSystem
from airchain.engine.units import QuantityKind


class ConversionInput(BaseModel):
    value: Optional[float] = None
    kind: QuantityKind
    from_system: UnitSystem = UnitSystem.SI
    to_system: UnitSystem = UnitSystem.IMPERIAL


class ConversionOutput(BaseModel):
    value: Optional[float] = None
    kind: QuantityKind
    unit_system: UnitSystem
    unit: str = Field("", description="Unit label in the target system")
    precision: int = Field(2, description="Decimal places used for display")


class SteamOutput(BaseModel):
    gauge_pressure: float
    gauge_pressure_unit: SteamPressureUnit
    absolute_pressure: float = Field(..., description="kPa")
    temperature: float = Field(..., description="Saturation temperature, °C")
    enthalpy: float = Field(..., description="Vapour enthalpy, kJ/kg")
    enthalpy_kcal: float = Field(..., description="Vapour enthalpy, kcal/kg")
    clamped: bool = False
