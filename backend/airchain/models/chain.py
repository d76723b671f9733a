"""
Pydantic models for persisted chain documents and computed chain state.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from airchain.config import DEFAULT_AIRFLOW, InletLock
from airchain.models.air_state import AirState, AirStateInput
from airchain.models.equipment import EquipmentConditions, EquipmentUnit

CHAIN_DOCUMENT_VERSION = 1


class UnitDocument(BaseModel):
    """One persisted equipment unit."""

    id: int
    name: str = ""
    inlet_lock: InletLock = InletLock.UNLOCKED
    inlet_air: AirStateInput = Field(default_factory=AirStateInput)
    pressure_loss: Optional[float] = None  # informational, recomputed on load
    conditions: EquipmentConditions


class ChainDocument(BaseModel):
    """
    Serialised chain. Only user inputs are authoritative; every derived
    value is recomputed when the document is loaded.
    """

    version: int = CHAIN_DOCUMENT_VERSION
    airflow: Optional[float] = DEFAULT_AIRFLOW  # m³/min
    ac_inlet: AirStateInput = Field(default_factory=AirStateInput)
    ac_outlet: AirStateInput = Field(default_factory=AirStateInput)
    ac_outlet_lock: InletLock = InletLock.UNLOCKED
    equipment: list[UnitDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_document(self) -> "ChainDocument":
        if self.version > CHAIN_DOCUMENT_VERSION:
            raise ValueError(
                f"Unsupported document version {self.version} "
                f"(newest supported is {CHAIN_DOCUMENT_VERSION})"
            )
        ids = [unit.id for unit in self.equipment]
        if len(ids) != len(set(ids)):
            raise ValueError("Equipment ids must be unique")
        return self


class ChainState(BaseModel):
    """A fully computed chain, as returned by the API."""

    airflow: Optional[float] = None
    mass_flow: Optional[float] = None  # kg/s dry air
    ac_inlet: AirState
    ac_outlet: AirState
    ac_outlet_lock: InletLock
    equipment: list[EquipmentUnit]
    total_pressure_loss: float
