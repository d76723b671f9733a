"""
Pydantic models for equipment conditions, results and units.

Conditions and results are tagged unions keyed on `type`, one variant per
equipment kind. Condition fields are Optional because a value the user is
still typing is simply absent; models treat a missing input as
"undetermined" rather than as zero.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from airchain.config import (
    DEFAULT_PRESSURE_LOSS,
    EquipmentType,
    EquipmentWarning,
    GasFuel,
    InletLock,
    SteamPressureUnit,
)
from airchain.models.air_state import AirState


class _Conditions(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

class FilterConditions(_Conditions):
    type: Literal["filter"] = "filter"
    width: Optional[float] = 500.0       # mm, per sheet
    height: Optional[float] = 500.0      # mm, per sheet
    thickness: Optional[float] = 50.0    # mm
    sheets: Optional[int] = 1
    media: Literal["pre_filter", "glass_fiber", "medium", "hepa"] = "glass_fiber"
    resistance_per_sheet: Optional[float] = None  # Pa, overrides the media table


class BurnerConditions(_Conditions):
    type: Literal["burner"] = "burner"
    outlet_temp: Optional[float] = 55.2  # °C
    shf: Optional[float] = 0.9
    fuel: GasFuel = GasFuel.NATURAL_GAS
    lower_heating_value: Optional[float] = None  # MJ/m³N, overrides the fuel table
    pressure_loss: Optional[float] = DEFAULT_PRESSURE_LOSS


class CoolingCoilConditions(_Conditions):
    """
    Driven by outlet temperature plus either an outlet RH, a bypass factor,
    or neither (outlet saturated once it drops below the inlet dew point).
    """

    type: Literal["cooling_coil"] = "cooling_coil"
    outlet_temp: Optional[float] = 15.0  # °C
    outlet_rh: Optional[float] = None    # %
    bypass_factor: Optional[float] = None
    chilled_water_inlet_temp: Optional[float] = 7.0
    chilled_water_outlet_temp: Optional[float] = 14.0
    heat_exchange_efficiency: Optional[float] = 85.0  # %
    pressure_loss: Optional[float] = DEFAULT_PRESSURE_LOSS

    @model_validator(mode="after")
    def check_single_driver(self) -> "CoolingCoilConditions":
        if self.outlet_rh is not None and self.bypass_factor is not None:
            raise ValueError("Specify either outlet_rh or bypass_factor, not both")
        return self


class HeatingCoilConditions(_Conditions):
    type: Literal["heating_coil"] = "heating_coil"
    outlet_temp: Optional[float] = 30.0
    hot_water_inlet_temp: Optional[float] = 80.0
    hot_water_outlet_temp: Optional[float] = 50.0
    heat_exchange_efficiency: Optional[float] = 85.0
    pressure_loss: Optional[float] = DEFAULT_PRESSURE_LOSS


class SprayWasherConditions(_Conditions):
    type: Literal["spray_washer"] = "spray_washer"
    outlet_rh: Optional[float] = 70.0
    water_to_air_ratio: Optional[float] = 0.8  # L/G, kg water per kg dry air
    pressure_loss: Optional[float] = DEFAULT_PRESSURE_LOSS


class SteamHumidifierConditions(_Conditions):
    type: Literal["steam_humidifier"] = "steam_humidifier"
    outlet_rh: Optional[float] = 60.0
    steam_gauge_pressure: Optional[float] = 100.0  # in steam_gauge_pressure_unit
    steam_gauge_pressure_unit: SteamPressureUnit = SteamPressureUnit.KPAG
    pressure_loss: Optional[float] = DEFAULT_PRESSURE_LOSS


class FanConditions(_Conditions):
    type: Literal["fan"] = "fan"
    motor_output: Optional[float] = 0.2     # kW
    motor_efficiency: Optional[float] = 80.0  # %
    total_pressure: Optional[float] = None  # Pa
    fan_efficiency: Optional[float] = None  # %
    margin_factor: Optional[float] = None   # %


class DamperConditions(_Conditions):
    type: Literal["damper"] = "damper"
    width: Optional[float] = 500.0   # mm
    height: Optional[float] = 500.0  # mm
    loss_coefficient_k: Optional[float] = 1.0


class EliminatorConditions(_Conditions):
    type: Literal["eliminator"] = "eliminator"
    eliminator_type: Literal["3-fold", "6-fold"] = "3-fold"
    pressure_loss: Optional[float] = None  # Pa, overrides the blade-type default


class CustomConditions(_Conditions):
    type: Literal["custom"] = "custom"
    outlet_temp: Optional[float] = None
    outlet_rh: Optional[float] = None
    pressure_loss: Optional[float] = DEFAULT_PRESSURE_LOSS


EquipmentConditions = Annotated[
    Union[
        FilterConditions,
        BurnerConditions,
        CoolingCoilConditions,
        HeatingCoilConditions,
        SprayWasherConditions,
        SteamHumidifierConditions,
        FanConditions,
        DamperConditions,
        EliminatorConditions,
        CustomConditions,
    ],
    Field(discriminator="type"),
]

CONDITIONS_BY_TYPE: dict[EquipmentType, type] = {
    EquipmentType.FILTER: FilterConditions,
    EquipmentType.BURNER: BurnerConditions,
    EquipmentType.COOLING_COIL: CoolingCoilConditions,
    EquipmentType.HEATING_COIL: HeatingCoilConditions,
    EquipmentType.SPRAY_WASHER: SprayWasherConditions,
    EquipmentType.STEAM_HUMIDIFIER: SteamHumidifierConditions,
    EquipmentType.FAN: FanConditions,
    EquipmentType.DAMPER: DamperConditions,
    EquipmentType.ELIMINATOR: EliminatorConditions,
    EquipmentType.CUSTOM: CustomConditions,
}


def default_conditions(equipment_type: EquipmentType):
    """Fresh default conditions for a kind."""
    return CONDITIONS_BY_TYPE[EquipmentType(equipment_type)]()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class FilterResults(BaseModel):
    type: Literal["filter"] = "filter"
    face_area: Optional[float] = None             # m², all sheets
    face_velocity: Optional[float] = None         # m/s
    airflow_per_sheet: Optional[float] = None     # m³/min
    resistance_per_sheet: Optional[float] = None  # Pa


class BurnerResults(BaseModel):
    type: Literal["burner"] = "burner"
    heat_load: Optional[float] = None        # kW
    heat_load_kcal_h: Optional[float] = None
    gas_flow: Optional[float] = None         # m³N/h
    lower_heating_value: Optional[float] = None


class CoolingCoilResults(BaseModel):
    type: Literal["cooling_coil"] = "cooling_coil"
    air_side_heat_load: Optional[float] = None    # kW
    water_side_heat_load: Optional[float] = None  # kW
    chilled_water_flow: Optional[float] = None    # L/min
    dehumidification: Optional[float] = None      # L/min
    bypass_factor: Optional[float] = None
    contact_factor: Optional[float] = None
    apparatus_dew_point: Optional[float] = None   # °C
    inlet_dew_point: Optional[float] = None       # °C


class HeatingCoilResults(BaseModel):
    type: Literal["heating_coil"] = "heating_coil"
    air_side_heat_load: Optional[float] = None
    water_side_heat_load: Optional[float] = None
    hot_water_flow: Optional[float] = None  # L/min


class SprayWasherResults(BaseModel):
    type: Literal["spray_washer"] = "spray_washer"
    humidification: Optional[float] = None            # L/min
    spray_amount: Optional[float] = None              # L/min
    humidification_efficiency: Optional[float] = None  # %
    adiabatic_saturation_temp: Optional[float] = None  # °C


class SteamHumidifierResults(BaseModel):
    type: Literal["steam_humidifier"] = "steam_humidifier"
    steam_absolute_pressure: Optional[float] = None  # kPa
    steam_temperature: Optional[float] = None        # °C
    steam_enthalpy: Optional[float] = None           # kcal/kg
    required_steam_amount: Optional[float] = None    # kg/h
    steam_table_clamped: bool = False


class FanResults(BaseModel):
    type: Literal["fan"] = "fan"
    heat_generation: Optional[float] = None  # kW
    temp_rise: Optional[float] = None        # K
    required_motor_power: Optional[float] = None  # kW
    recommended_motor_output: Optional[float] = None  # kW, next standard size


class DamperResults(BaseModel):
    type: Literal["damper"] = "damper"
    air_velocity: Optional[float] = None  # m/s
    pressure_loss: Optional[float] = None  # Pa


class EliminatorResults(BaseModel):
    type: Literal["eliminator"] = "eliminator"
    pressure_loss: Optional[float] = None


class CustomResults(BaseModel):
    type: Literal["custom"] = "custom"
    pressure_loss: Optional[float] = None


EquipmentResults = Annotated[
    Union[
        FilterResults,
        BurnerResults,
        CoolingCoilResults,
        HeatingCoilResults,
        SprayWasherResults,
        SteamHumidifierResults,
        FanResults,
        DamperResults,
        EliminatorResults,
        CustomResults,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Transform contract and units
# ---------------------------------------------------------------------------

class Airflow(BaseModel):
    """System airflow shared by every unit in a chain."""

    volume_flow: Optional[float] = None  # m³/min
    mass_flow: Optional[float] = None    # kg/s of dry air

    @classmethod
    def from_state(cls, volume_flow: Optional[float], air: AirState) -> "Airflow":
        """Dry-air mass flow from a volumetric flow measured at `air`."""
        if volume_flow is None or air.density is None:
            return cls(volume_flow=volume_flow)
        return cls(volume_flow=volume_flow, mass_flow=volume_flow / 60.0 * air.density)

    @property
    def volume_flow_m3_s(self) -> Optional[float]:
        return None if self.volume_flow is None else self.volume_flow / 60.0


class TransformResult(BaseModel):
    """Outcome of running one equipment model."""

    outlet_air: AirState
    results: EquipmentResults
    pressure_loss: Optional[float] = None  # Pa
    warnings: list[EquipmentWarning] = Field(default_factory=list)


class EquipmentUnit(BaseModel):
    """One piece of equipment in a chain, with its last computed state."""

    id: int
    name: str = ""
    conditions: EquipmentConditions
    inlet_lock: InletLock = InletLock.UNLOCKED
    inlet_air: AirState = Field(default_factory=AirState)
    outlet_air: AirState = Field(default_factory=AirState)
    results: Optional[EquipmentResults] = None
    pressure_loss: Optional[float] = None
    warnings: list[EquipmentWarning] = Field(default_factory=list)

    @property
    def equipment_type(self) -> EquipmentType:
        return EquipmentType(self.conditions.type)

    @property
    def is_locked(self) -> bool:
        return self.inlet_lock == InletLock.LOCKED


class TransformInput(BaseModel):
    """Request body for evaluating a single unit outside a chain."""

    conditions: EquipmentConditions
    inlet_temperature: Optional[float] = None
    inlet_relative_humidity: Optional[float] = None
    airflow: Optional[float] = None  # m³/min
