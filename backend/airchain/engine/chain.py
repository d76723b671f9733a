"""
Process chain propagator.

A chain is an ordered list of equipment units between the AC (air
conditioner) inlet and outlet. Every edit triggers a full recompute:

  1. unit 0's inlet follows the AC inlet, unless its inlet is locked
  2. unit i's inlet follows unit i−1's outlet, unless locked
  3. each unit is transformed by its equipment model
  4. the AC outlet follows the last unit's outlet, unless locked
  5. total pressure loss is the sum over all units except fans

A locked inlet only changes through a direct edit; sync_inlet() is the
only way to unlock it. The dry-air mass flow is fixed once per recompute
from the system airflow and the AC inlet density, so every unit sees the
same mass flow.
"""

import logging
from typing import Optional

from airchain.config import (
    DEFAULT_AC_INLET,
    DEFAULT_AC_OUTLET,
    DEFAULT_AIRFLOW,
    DEFAULT_CHAIN,
    EQUIPMENT_NAMES,
    EquipmentType,
    InletLock,
)
from airchain.engine.equipment.registry import transform_unit
from airchain.engine.properties import resolve_air_state
from airchain.models.air_state import AirState
from airchain.models.equipment import Airflow, EquipmentUnit, default_conditions

logger = logging.getLogger(__name__)

# Kinds whose outlet target is an RH rather than a temperature
_RH_TARGET_TYPES = frozenset({
    EquipmentType.SPRAY_WASHER,
    EquipmentType.STEAM_HUMIDIFIER,
})


class UnknownUnitError(KeyError):
    """Raised when an operation names a unit id that is not in the chain."""


class ProcessChain:
    """Ordered equipment units with AC inlet/outlet boundary states."""

    def __init__(
        self,
        airflow: Optional[float] = DEFAULT_AIRFLOW,
        ac_inlet: Optional[AirState] = None,
        ac_outlet: Optional[AirState] = None,
        ac_outlet_lock: InletLock = InletLock.UNLOCKED,
        units: Optional[list[EquipmentUnit]] = None,
    ):
        self.airflow = airflow
        self.ac_inlet = ac_inlet if ac_inlet is not None else resolve_air_state(
            DEFAULT_AC_INLET[0], relative_humidity=DEFAULT_AC_INLET[1]
        )
        self.ac_outlet = ac_outlet if ac_outlet is not None else resolve_air_state(
            DEFAULT_AC_OUTLET[0], relative_humidity=DEFAULT_AC_OUTLET[1]
        )
        self.ac_outlet_lock = InletLock(ac_outlet_lock)
        self.units: list[EquipmentUnit] = list(units) if units else []
        self.flow = Airflow(volume_flow=airflow)
        self._next_id = max((u.id for u in self.units), default=-1) + 1
        self.recompute()

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def _reference_air(self) -> AirState:
        """State whose density fixes the mass flow: AC inlet, else first locked inlet."""
        if self.ac_inlet.density is not None:
            return self.ac_inlet
        for unit in self.units:
            if unit.is_locked and unit.inlet_air.density is not None:
                return unit.inlet_air
        return self.ac_inlet

    def recompute(self) -> None:
        """Propagate air states and results through the whole chain."""
        self.flow = Airflow.from_state(self.airflow, self._reference_air())

        upstream = self.ac_inlet
        for unit in self.units:
            if not unit.is_locked:
                unit.inlet_air = upstream.model_copy()

            result = transform_unit(unit.inlet_air, unit.conditions, self.flow)
            unit.outlet_air = result.outlet_air
            unit.results = result.results
            unit.pressure_loss = result.pressure_loss
            unit.warnings = list(result.warnings)
            if unit.warnings:
                logger.debug(
                    "Unit %d (%s): %s",
                    unit.id, unit.equipment_type.value, [w.value for w in unit.warnings],
                )

            upstream = unit.outlet_air

        if self.units and self.ac_outlet_lock == InletLock.UNLOCKED:
            self.ac_outlet = self.units[-1].outlet_air.model_copy()

    @property
    def total_pressure_loss(self) -> float:
        """Sum of unit pressure losses (Pa). Fans are the pressure source and are excluded."""
        return sum(
            unit.pressure_loss or 0.0
            for unit in self.units
            if unit.equipment_type != EquipmentType.FAN
        )

    # ------------------------------------------------------------------
    # Unit list edits
    # ------------------------------------------------------------------

    def get_unit(self, unit_id: int) -> EquipmentUnit:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        raise UnknownUnitError(unit_id)

    def _index(self, unit_id: int) -> int:
        for i, unit in enumerate(self.units):
            if unit.id == unit_id:
                return i
        raise UnknownUnitError(unit_id)

    def add_unit(
        self,
        equipment_type: EquipmentType,
        position: Optional[int] = None,
        name: Optional[str] = None,
    ) -> EquipmentUnit:
        """Insert a unit with default conditions (appended when position is None)."""
        equipment_type = EquipmentType(equipment_type)
        unit = EquipmentUnit(
            id=self._next_id,
            name=name if name is not None else EQUIPMENT_NAMES[equipment_type],
            conditions=default_conditions(equipment_type),
        )
        self._next_id += 1

        if position is None:
            self.units.append(unit)
        else:
            self.units.insert(max(0, min(position, len(self.units))), unit)

        self.recompute()
        return unit

    def remove_unit(self, unit_id: int) -> None:
        del self.units[self._index(unit_id)]
        self.recompute()

    def move_unit(self, unit_id: int, direction: str) -> None:
        """Swap a unit with its neighbour. Moving past either end is a no-op."""
        if direction not in ("up", "down"):
            raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

        index = self._index(unit_id)
        new_index = index - 1 if direction == "up" else index + 1
        if not 0 <= new_index < len(self.units):
            return

        self.units[index], self.units[new_index] = self.units[new_index], self.units[index]
        self.recompute()

    def clear(self) -> None:
        self.units.clear()
        self.recompute()

    def rename_unit(self, unit_id: int, name: str) -> None:
        self.get_unit(unit_id).name = name

    # ------------------------------------------------------------------
    # Condition and boundary edits
    # ------------------------------------------------------------------

    def update_conditions(self, unit_id: int, **changes) -> EquipmentUnit:
        """
        Change condition fields of a unit. The merged conditions are
        re-validated, so unknown fields or a different `type` raise
        pydantic's ValidationError (a ValueError).
        """
        unit = self.get_unit(unit_id)
        if "type" in changes and changes["type"] != unit.conditions.type:
            raise ValueError(
                f"Cannot change unit {unit_id} from '{unit.conditions.type}' to '{changes['type']}'"
            )
        data = unit.conditions.model_dump()
        data.update(changes)
        unit.conditions = type(unit.conditions).model_validate(data)
        self.recompute()
        return unit

    def set_inlet_air(
        self,
        unit_id: int,
        temperature: Optional[float],
        relative_humidity: Optional[float] = None,
        absolute_humidity: Optional[float] = None,
    ) -> EquipmentUnit:
        """Pin a unit's inlet to a user-entered state. Locks the inlet."""
        unit = self.get_unit(unit_id)
        unit.inlet_air = resolve_air_state(temperature, relative_humidity, absolute_humidity)
        unit.inlet_lock = InletLock.LOCKED
        self.recompute()
        return unit

    def sync_inlet(self, unit_id: int) -> EquipmentUnit:
        """Unlock a unit's inlet so it follows the upstream outlet again."""
        unit = self.get_unit(unit_id)
        unit.inlet_lock = InletLock.UNLOCKED
        self.recompute()
        return unit

    def sync_outlet_target(self, unit_id: int) -> EquipmentUnit:
        """
        Copy the downstream state (next unit's inlet, or the AC outlet for the
        last unit) into this unit's outlet target: RH for humidifiers,
        temperature for everything else that has one.
        """
        index = self._index(unit_id)
        unit = self.units[index]

        if index == len(self.units) - 1:
            source = self.ac_outlet
        else:
            source = self.units[index + 1].inlet_air

        fields = type(unit.conditions).model_fields
        if unit.equipment_type in _RH_TARGET_TYPES:
            if source.relative_humidity is None:
                return unit
            return self.update_conditions(unit_id, outlet_rh=source.relative_humidity)

        if "outlet_temp" not in fields:
            raise ValueError(
                f"'{unit.equipment_type.value}' has no outlet target to synchronise"
            )
        if source.temperature is None:
            return unit
        return self.update_conditions(unit_id, outlet_temp=source.temperature)

    def set_airflow(self, airflow: Optional[float]) -> None:
        """Set the system volumetric airflow (m³/min)."""
        self.airflow = airflow
        self.recompute()

    def set_ac_inlet(
        self,
        temperature: Optional[float],
        relative_humidity: Optional[float] = None,
        absolute_humidity: Optional[float] = None,
    ) -> None:
        self.ac_inlet = resolve_air_state(temperature, relative_humidity, absolute_humidity)
        self.recompute()

    def set_ac_outlet(
        self,
        temperature: Optional[float],
        relative_humidity: Optional[float] = None,
        absolute_humidity: Optional[float] = None,
    ) -> None:
        """Pin the AC outlet to a user-entered state. Locks it."""
        self.ac_outlet = resolve_air_state(temperature, relative_humidity, absolute_humidity)
        self.ac_outlet_lock = InletLock.LOCKED
        self.recompute()

    def sync_ac_outlet(self) -> None:
        """Let the AC outlet follow the last unit again."""
        self.ac_outlet_lock = InletLock.UNLOCKED
        self.recompute()


def default_chain() -> ProcessChain:
    """A new chain with the starter equipment line-up."""
    units = []
    for unit_id, (equipment_type, inlet) in enumerate(DEFAULT_CHAIN):
        unit = EquipmentUnit(
            id=unit_id,
            name=EQUIPMENT_NAMES[equipment_type],
            conditions=default_conditions(equipment_type),
        )
        if inlet is not None:
            unit.inlet_air = resolve_air_state(inlet[0], relative_humidity=inlet[1])
            unit.inlet_lock = InletLock.LOCKED
        units.append(unit)
    return ProcessChain(units=units)
