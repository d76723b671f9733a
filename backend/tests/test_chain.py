"""
Tests for the process chain propagator.

Covers propagation order, inlet locking and syncing, AC outlet locking,
list edits, pressure loss totals and the starter line-up.
"""

import pytest

from airchain.config import EquipmentType, InletLock
from airchain.engine.chain import ProcessChain, UnknownUnitError, default_chain


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def _snapshot(unit):
    return (unit.inlet_air.model_dump(), unit.outlet_air.model_dump())


def _build_chain():
    chain = ProcessChain()
    chain.clear()
    chain.add_unit(EquipmentType.FILTER)
    chain.add_unit(EquipmentType.HEATING_COIL)
    chain.add_unit(EquipmentType.STEAM_HUMIDIFIER)
    chain.add_unit(EquipmentType.FAN)
    return chain


# ---------------------------------------------------------------------------
# Propagation
# ---------------------------------------------------------------------------

class TestPropagation:
    def setup_method(self):
        self.chain = _build_chain()
        self.units = self.chain.units

    def test_first_inlet_follows_ac_inlet(self):
        assert self.units[0].inlet_air == self.chain.ac_inlet

    def test_inlets_follow_upstream_outlets(self):
        for upstream, unit in zip(self.units, self.units[1:]):
            assert unit.inlet_air == upstream.outlet_air

    def test_ac_outlet_follows_last_unit(self):
        assert self.chain.ac_outlet == self.units[-1].outlet_air

    def test_heating_coil_reaches_target(self):
        assert self.units[1].outlet_air.temperature == 30.0

    def test_mass_flow_from_ac_inlet_density(self):
        assert self.chain.flow.mass_flow == pytest.approx(100.0 / 60.0 * self.chain.ac_inlet.density)

    def test_editing_ac_inlet_updates_everything(self):
        before = [_snapshot(u) for u in self.units]
        ac_outlet_before = self.chain.ac_outlet.model_dump()
        self.chain.set_ac_inlet(5.0, 50.0)
        after = [_snapshot(u) for u in self.units]
        for b, a in zip(before, after):
            assert b[0] != a[0]
        assert self.units[0].inlet_air.temperature == 5.0
        assert self.chain.ac_outlet.model_dump() != ac_outlet_before
        assert self.chain.ac_outlet == self.units[-1].outlet_air

    def test_editing_unit_only_affects_downstream(self):
        before = [_snapshot(u) for u in self.units]
        self.chain.update_conditions(self.units[1].id, outlet_temp=35.0)
        after = [_snapshot(u) for u in self.units]
        assert after[0] == before[0]
        assert after[1][0] == before[1][0]
        assert after[1][1] != before[1][1]
        assert self.units[2].inlet_air == self.units[1].outlet_air
        assert self.units[2].inlet_air.temperature == 35.0

    def test_undetermined_ac_inlet_propagates(self):
        self.chain.set_ac_inlet(None, 50.0)
        assert self.chain.flow.mass_flow is None
        for unit in self.units:
            assert not unit.outlet_air.is_determined

    def test_airflow_change(self):
        self.chain.set_airflow(200.0)
        assert self.chain.flow.mass_flow == pytest.approx(200.0 / 60.0 * self.chain.ac_inlet.density)
        self.chain.set_airflow(None)
        assert self.units[1].results.air_side_heat_load is None


# ---------------------------------------------------------------------------
# Locking
# ---------------------------------------------------------------------------

class TestInletLocking:
    def setup_method(self):
        self.chain = _build_chain()
        self.coil, self.humidifier = self.chain.units[1], self.chain.units[2]

    def test_direct_edit_locks(self):
        self.chain.set_inlet_air(self.humidifier.id, 20.0, 40.0)
        assert self.humidifier.inlet_lock == InletLock.LOCKED
        assert self.humidifier.inlet_air.temperature == 20.0

    def test_locked_inlet_ignores_upstream(self):
        self.chain.set_inlet_air(self.humidifier.id, 20.0, 40.0)
        before = self.humidifier.inlet_air.model_dump()
        self.chain.update_conditions(self.coil.id, outlet_temp=40.0)
        assert self.humidifier.inlet_air.model_dump() == before
        self.chain.set_ac_inlet(-5.0, 80.0)
        assert self.humidifier.inlet_air.model_dump() == before

    def test_locked_unit_still_feeds_downstream(self):
        self.chain.set_inlet_air(self.humidifier.id, 20.0, 40.0)
        fan = self.chain.units[3]
        assert fan.inlet_air == self.humidifier.outlet_air

    def test_sync_unlocks_and_follows(self):
        self.chain.set_inlet_air(self.humidifier.id, 20.0, 40.0)
        self.chain.sync_inlet(self.humidifier.id)
        assert self.humidifier.inlet_lock == InletLock.UNLOCKED
        assert self.humidifier.inlet_air == self.coil.outlet_air

    def test_mass_flow_falls_back_to_locked_inlet(self):
        self.chain.set_inlet_air(self.humidifier.id, 20.0, 40.0)
        self.chain.set_ac_inlet(None, None)
        assert self.chain.flow.mass_flow == pytest.approx(100.0 / 60.0 * self.humidifier.inlet_air.density)
        assert self.humidifier.outlet_air.is_determined


class TestAcOutletLocking:
    def setup_method(self):
        self.chain = _build_chain()

    def test_set_ac_outlet_locks(self):
        self.chain.set_ac_outlet(26.0, 50.0)
        assert self.chain.ac_outlet_lock == InletLock.LOCKED
        self.chain.set_ac_inlet(10.0, 50.0)
        assert self.chain.ac_outlet.temperature == 26.0

    def test_sync_ac_outlet(self):
        self.chain.set_ac_outlet(26.0, 50.0)
        self.chain.sync_ac_outlet()
        assert self.chain.ac_outlet == self.chain.units[-1].outlet_air

    def test_empty_chain_keeps_ac_outlet(self):
        self.chain.clear()
        assert self.chain.ac_outlet.temperature is not None
        assert self.chain.total_pressure_loss == 0.0


# ---------------------------------------------------------------------------
# List edits
# ---------------------------------------------------------------------------

class TestListEdits:
    def setup_method(self):
        self.chain = _build_chain()
        self.ids = [u.id for u in self.chain.units]

    def test_ids_are_unique(self):
        assert len(set(self.ids)) == 4
        unit = self.chain.add_unit(EquipmentType.DAMPER)
        assert unit.id not in self.ids

    def test_add_at_position(self):
        unit = self.chain.add_unit(EquipmentType.COOLING_COIL, position=1)
        assert self.chain.units[1] is unit
        assert unit.name == "Cooling Coil"
        assert unit.inlet_air == self.chain.units[0].outlet_air

    def test_remove(self):
        self.chain.remove_unit(self.ids[1])
        assert [u.id for u in self.chain.units] == [self.ids[0], self.ids[2], self.ids[3]]
        assert self.chain.units[1].inlet_air == self.chain.units[0].outlet_air

    def test_move(self):
        self.chain.move_unit(self.ids[2], "up")
        assert [u.id for u in self.chain.units] == [self.ids[0], self.ids[2], self.ids[1], self.ids[3]]
        self.chain.move_unit(self.ids[2], "down")
        assert [u.id for u in self.chain.units] == self.ids

    def test_move_past_end_is_noop(self):
        self.chain.move_unit(self.ids[0], "up")
        self.chain.move_unit(self.ids[3], "down")
        assert [u.id for u in self.chain.units] == self.ids

    def test_bad_direction(self):
        with pytest.raises(ValueError):
            self.chain.move_unit(self.ids[0], "sideways")

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            self.chain.remove_unit(999)
        with pytest.raises(KeyError):
            self.chain.sync_inlet(999)

    def test_rename(self):
        self.chain.rename_unit(self.ids[0], "Pre-filter")
        assert self.chain.units[0].name == "Pre-filter"


class TestConditionEdits:
    def setup_method(self):
        self.chain = _build_chain()
        self.coil = self.chain.units[1]

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            self.chain.update_conditions(self.coil.id, bypass_factor=0.1)

    def test_type_change_rejected(self):
        with pytest.raises(ValueError):
            self.chain.update_conditions(self.coil.id, type="burner")

    def test_sync_outlet_target_temperature(self):
        self.chain.set_inlet_air(self.chain.units[2].id, 24.0, 40.0)
        self.chain.sync_outlet_target(self.coil.id)
        assert self.coil.conditions.outlet_temp == 24.0
        assert self.coil.outlet_air.temperature == 24.0

    def test_sync_outlet_target_rh_for_last_humidifier(self):
        humidifier = self.chain.units[2]
        self.chain.remove_unit(self.chain.units[3].id)
        self.chain.set_ac_outlet(32.0, 55.0)
        self.chain.sync_outlet_target(humidifier.id)
        assert humidifier.conditions.outlet_rh == pytest.approx(55.0)

    def test_sync_outlet_target_without_target(self):
        with pytest.raises(ValueError):
            self.chain.sync_outlet_target(self.chain.units[0].id)


# ---------------------------------------------------------------------------
# Pressure loss and starter line-up
# ---------------------------------------------------------------------------

class TestPressureLoss:
    def test_fans_excluded(self):
        chain = _build_chain()
        # filter 80 + heating coil 50 + steam humidifier 50
        assert chain.total_pressure_loss == pytest.approx(180.0)


class TestDefaultChain:
    def setup_method(self):
        self.chain = default_chain()

    def test_line_up(self):
        types = [u.equipment_type for u in self.chain.units]
        assert types == [
            EquipmentType.FILTER,
            EquipmentType.BURNER,
            EquipmentType.COOLING_COIL,
            EquipmentType.HEATING_COIL,
            EquipmentType.ELIMINATOR,
            EquipmentType.SPRAY_WASHER,
            EquipmentType.STEAM_HUMIDIFIER,
            EquipmentType.FAN,
            EquipmentType.DAMPER,
        ]

    def test_locked_inlets(self):
        locked = [u.is_locked for u in self.chain.units]
        assert locked == [False, False, True, True, False, True, True, True, False]

    def test_all_outlets_determined(self):
        for unit in self.chain.units:
            assert unit.outlet_air.is_determined, unit.name

    def test_ac_boundaries(self):
        assert self.chain.ac_inlet.temperature == 0.0
        assert self.chain.ac_inlet.relative_humidity == 50.0
        assert self.chain.ac_outlet == self.chain.units[-1].outlet_air

    def test_next_id(self):
        unit = self.chain.add_unit(EquipmentType.CUSTOM)
        assert unit.id == 9
