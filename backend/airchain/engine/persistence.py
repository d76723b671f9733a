"""
Chain document load/dump.

Documents carry only user inputs (airflow, boundary states, unit conditions,
lock flags and locked inlet states). Loading validates the whole document
before a new chain is built, so a malformed document never leaves a
half-loaded chain behind.
"""

import logging
from typing import Union

from pydantic import ValidationError

from airchain.engine.chain import ProcessChain
from airchain.engine.properties import resolve_air_state
from airchain.models.air_state import AirState, AirStateInput
from airchain.models.chain import ChainDocument, ChainState, UnitDocument
from airchain.models.equipment import EquipmentUnit

logger = logging.getLogger(__name__)


class ChainDocumentError(ValueError):
    """A persisted chain document could not be parsed or validated."""


# RH is re-derived from x on load; rounding keeps repeated saves identical
_DOCUMENT_RH_DIGITS = 9


def _input_from_state(state: AirState) -> AirStateInput:
    rh = state.relative_humidity
    return AirStateInput(
        temperature=state.temperature,
        relative_humidity=None if rh is None else round(rh, _DOCUMENT_RH_DIGITS),
        absolute_humidity=state.absolute_humidity,
    )


def _state_from_input(data: AirStateInput) -> AirState:
    return resolve_air_state(data.temperature, data.relative_humidity, data.absolute_humidity)


def chain_to_document(chain: ProcessChain) -> ChainDocument:
    return ChainDocument(
        airflow=chain.airflow,
        ac_inlet=_input_from_state(chain.ac_inlet),
        ac_outlet=_input_from_state(chain.ac_outlet),
        ac_outlet_lock=chain.ac_outlet_lock,
        equipment=[
            UnitDocument(
                id=unit.id,
                name=unit.name,
                inlet_lock=unit.inlet_lock,
                inlet_air=_input_from_state(unit.inlet_air),
                pressure_loss=unit.pressure_loss,
                conditions=unit.conditions,
            )
            for unit in chain.units
        ],
    )


def chain_from_document(document: ChainDocument) -> ProcessChain:
    units = [
        EquipmentUnit(
            id=unit.id,
            name=unit.name,
            conditions=unit.conditions,
            inlet_lock=unit.inlet_lock,
            inlet_air=_state_from_input(unit.inlet_air),
        )
        for unit in document.equipment
    ]
    return ProcessChain(
        airflow=document.airflow,
        ac_inlet=_state_from_input(document.ac_inlet),
        ac_outlet=_state_from_input(document.ac_outlet),
        ac_outlet_lock=document.ac_outlet_lock,
        units=units,
    )


def parse_chain_document(data: Union[str, bytes, dict]) -> ChainDocument:
    """Validate raw JSON text or a decoded dict into a ChainDocument."""
    try:
        if isinstance(data, (str, bytes)):
            return ChainDocument.model_validate_json(data)
        return ChainDocument.model_validate(data)
    except ValidationError as e:
        logger.warning("Rejected chain document: %d error(s)", e.error_count())
        raise ChainDocumentError(f"Invalid chain document: {e}") from e


def load_chain_document(data: Union[str, bytes, dict]) -> ProcessChain:
    """Build a new, fully computed chain from a document."""
    return chain_from_document(parse_chain_document(data))


def dump_chain_document(chain: ProcessChain, indent: int = 2) -> str:
    """Serialise a chain's user inputs as JSON text."""
    return chain_to_document(chain).model_dump_json(indent=indent)


def chain_state(chain: ProcessChain) -> ChainState:
    """Snapshot of a computed chain for API responses."""
    return ChainState(
        airflow=chain.airflow,
        mass_flow=chain.flow.mass_flow,
        ac_inlet=chain.ac_inlet,
        ac_outlet=chain.ac_outlet,
        ac_outlet_lock=chain.ac_outlet_lock,
        equipment=[unit.model_copy() for unit in chain.units],
        total_pressure_loss=chain.total_pressure_loss,
    )
