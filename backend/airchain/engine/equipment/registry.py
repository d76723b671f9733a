"""
Equipment model dispatch.

Every EquipmentType maps to exactly one model instance; the mapping is
checked for completeness at import time so a new kind cannot be added
without a model.
"""

from airchain.config import EquipmentType
from airchain.engine.equipment.base import EquipmentModel
from airchain.engine.equipment.burner import BurnerModel
from airchain.engine.equipment.cooling_coil import CoolingCoilModel
from airchain.engine.equipment.custom import CustomModel
from airchain.engine.equipment.damper import DamperModel, EliminatorModel
from airchain.engine.equipment.fan import FanModel
from airchain.engine.equipment.filter import FilterModel
from airchain.engine.equipment.heating_coil import HeatingCoilModel
from airchain.engine.equipment.spray_washer import SprayWasherModel
from airchain.engine.equipment.steam_humidifier import SteamHumidifierModel
from airchain.models.air_state import AirState
from airchain.models.equipment import Airflow, TransformResult

_MODELS: dict[EquipmentType, EquipmentModel] = {
    EquipmentType.FILTER: FilterModel(),
    EquipmentType.BURNER: BurnerModel(),
    EquipmentType.COOLING_COIL: CoolingCoilModel(),
    EquipmentType.HEATING_COIL: HeatingCoilModel(),
    EquipmentType.SPRAY_WASHER: SprayWasherModel(),
    EquipmentType.STEAM_HUMIDIFIER: SteamHumidifierModel(),
    EquipmentType.FAN: FanModel(),
    EquipmentType.DAMPER: DamperModel(),
    EquipmentType.ELIMINATOR: EliminatorModel(),
    EquipmentType.CUSTOM: CustomModel(),
}

_missing = set(EquipmentType) - set(_MODELS)
if _missing:
    raise RuntimeError(f"No equipment model for: {sorted(m.value for m in _missing)}")


def get_model(equipment_type: EquipmentType) -> EquipmentModel:
    return _MODELS[EquipmentType(equipment_type)]


def transform_unit(inlet: AirState, conditions, airflow: Airflow) -> TransformResult:
    """Run the model matching the conditions' `type` tag."""
    return get_model(conditions.type).transform(inlet, conditions, airflow)
