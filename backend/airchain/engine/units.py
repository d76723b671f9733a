"""
Unit conversion between the canonical SI system and Imperial units.

Most quantities convert by a fixed factor. Absolute temperature is affine
(°F = °C × 9/5 + 32) while a temperature difference is linear
(Δ°F = Δ°C × 9/5), so the two are separate quantity kinds. Dimensionless
kinds (ratios, percentages, counts) pass through unchanged.
"""

from enum import Enum
from types import MappingProxyType
from typing import Optional

from airchain.config import UnitSystem


class QuantityKind(str, Enum):
    AIRFLOW = "airflow"
    TEMPERATURE = "temperature"
    TEMPERATURE_DELTA = "temperature_delta"
    LENGTH = "length"
    PRESSURE = "pressure"
    HEAT_LOAD = "heat_load"
    WATER_FLOW = "water_flow"
    ABS_HUMIDITY = "abs_humidity"
    ENTHALPY = "enthalpy"
    MOTOR_POWER = "motor_power"
    VELOCITY = "velocity"
    AIRFLOW_PER_SHEET = "airflow_per_sheet"
    AREA = "area"
    DENSITY = "density"
    STEAM_PRESSURE = "steam_pressure"
    STEAM_ENTHALPY = "steam_enthalpy"
    STEAM_FLOW = "steam_flow"
    GAS_FLOW = "gas_flow"
    HEATING_VALUE = "heating_value"
    # Dimensionless
    RH = "rh"
    SHEETS = "sheets"
    SHF = "shf"
    EFFICIENCY = "efficiency"
    K_VALUE = "k_value"
    WATER_TO_AIR_RATIO = "water_to_air_ratio"
    BYPASS_FACTOR = "bypass_factor"


# SI value × factor = Imperial value
LINEAR_FACTORS = MappingProxyType({
    QuantityKind.AIRFLOW: 35.3147,             # m³/min → CFM
    QuantityKind.TEMPERATURE_DELTA: 9.0 / 5.0,  # K → °F difference
    QuantityKind.LENGTH: 0.0393701,            # mm → in
    QuantityKind.PRESSURE: 0.00401463,         # Pa → in.wg
    QuantityKind.HEAT_LOAD: 3412.142,          # kW → BTU/h
    QuantityKind.WATER_FLOW: 0.264172,         # L/min → GPM
    QuantityKind.ABS_HUMIDITY: 7.0,            # g/kg(DA) → gr/lb(DA)
    QuantityKind.ENTHALPY: 0.429923,           # kJ/kg(DA) → BTU/lb(DA)
    QuantityKind.MOTOR_POWER: 1.34102,         # kW → HP
    QuantityKind.VELOCITY: 196.850,            # m/s → ft/min
    QuantityKind.AIRFLOW_PER_SHEET: 35.3147,   # m³/min per sheet → CFM per sheet
    QuantityKind.AREA: 10.7639,                # m² → ft²
    QuantityKind.DENSITY: 0.062428,            # kg/m³ → lb/ft³
    QuantityKind.STEAM_PRESSURE: 0.145038,     # kPa → psi
    QuantityKind.STEAM_ENTHALPY: 1.8,          # kcal/kg → BTU/lb
    QuantityKind.STEAM_FLOW: 2.20462,          # kg/h → lb/h
    QuantityKind.GAS_FLOW: 35.3147,            # m³/h → ft³/h
    QuantityKind.HEATING_VALUE: 26.8222,       # MJ/m³ → BTU/ft³
})

DIMENSIONLESS = frozenset({
    QuantityKind.RH,
    QuantityKind.SHEETS,
    QuantityKind.SHF,
    QuantityKind.EFFICIENCY,
    QuantityKind.K_VALUE,
    QuantityKind.WATER_TO_AIR_RATIO,
    QuantityKind.BYPASS_FACTOR,
})

UNIT_LABELS = MappingProxyType({
    UnitSystem.SI: MappingProxyType({
        QuantityKind.AIRFLOW: "m³/min",
        QuantityKind.TEMPERATURE: "°C",
        QuantityKind.TEMPERATURE_DELTA: "°C",
        QuantityKind.LENGTH: "mm",
        QuantityKind.PRESSURE: "Pa",
        QuantityKind.HEAT_LOAD: "kW",
        QuantityKind.WATER_FLOW: "L/min",
        QuantityKind.ABS_HUMIDITY: "g/kg(DA)",
        QuantityKind.ENTHALPY: "kJ/kg(DA)",
        QuantityKind.MOTOR_POWER: "kW",
        QuantityKind.VELOCITY: "m/s",
        QuantityKind.AIRFLOW_PER_SHEET: "m³/min/sheet",
        QuantityKind.AREA: "m²",
        QuantityKind.DENSITY: "kg/m³",
        QuantityKind.STEAM_PRESSURE: "kPa",
        QuantityKind.STEAM_ENTHALPY: "kcal/kg",
        QuantityKind.STEAM_FLOW: "kg/h",
        QuantityKind.GAS_FLOW: "m³/h",
        QuantityKind.HEATING_VALUE: "MJ/m³",
        QuantityKind.RH: "%",
        QuantityKind.EFFICIENCY: "%",
    }),
    UnitSystem.IMPERIAL: MappingProxyType({
        QuantityKind.AIRFLOW: "CFM",
        QuantityKind.TEMPERATURE: "°F",
        QuantityKind.TEMPERATURE_DELTA: "°F",
        QuantityKind.LENGTH: "in",
        QuantityKind.PRESSURE: "in.wg",
        QuantityKind.HEAT_LOAD: "BTU/h",
        QuantityKind.WATER_FLOW: "GPM",
        QuantityKind.ABS_HUMIDITY: "gr/lb(DA)",
        QuantityKind.ENTHALPY: "BTU/lb(DA)",
        QuantityKind.MOTOR_POWER: "HP",
        QuantityKind.VELOCITY: "fpm",
        QuantityKind.AIRFLOW_PER_SHEET: "CFM/sheet",
        QuantityKind.AREA: "ft²",
        QuantityKind.DENSITY: "lb/ft³",
        QuantityKind.STEAM_PRESSURE: "psi",
        QuantityKind.STEAM_ENTHALPY: "BTU/lb",
        QuantityKind.STEAM_FLOW: "lb/h",
        QuantityKind.GAS_FLOW: "ft³/h",
        QuantityKind.HEATING_VALUE: "BTU/ft³",
        QuantityKind.RH: "%",
        QuantityKind.EFFICIENCY: "%",
    }),
})

# Decimal places used when a value is shown in a given system
_PRECISION = MappingProxyType({
    UnitSystem.SI: MappingProxyType({
        QuantityKind.TEMPERATURE: 1,
        QuantityKind.TEMPERATURE_DELTA: 1,
        QuantityKind.LENGTH: 0,
        QuantityKind.AIRFLOW: 0,
        QuantityKind.PRESSURE: 0,
        QuantityKind.HEAT_LOAD: 2,
        QuantityKind.MOTOR_POWER: 1,
        QuantityKind.EFFICIENCY: 0,
        QuantityKind.AIRFLOW_PER_SHEET: 0,
        QuantityKind.DENSITY: 4,
    }),
    UnitSystem.IMPERIAL: MappingProxyType({
        QuantityKind.TEMPERATURE: 1,
        QuantityKind.TEMPERATURE_DELTA: 1,
        QuantityKind.LENGTH: 3,
        QuantityKind.AIRFLOW: 0,
        QuantityKind.HEAT_LOAD: 0,
        QuantityKind.MOTOR_POWER: 1,
        QuantityKind.VELOCITY: 0,
        QuantityKind.AIRFLOW_PER_SHEET: 0,
        QuantityKind.DENSITY: 4,
    }),
})
_DEFAULT_PRECISION = 2


def convert(
    value: Optional[float],
    kind: QuantityKind,
    from_system: UnitSystem,
    to_system: UnitSystem,
) -> Optional[float]:
    """Convert a value of the given kind between unit systems."""
    if value is None or from_system == to_system or kind in DIMENSIONLESS:
        return value

    if kind == QuantityKind.TEMPERATURE:
        if to_system == UnitSystem.IMPERIAL:
            return value * 9.0 / 5.0 + 32.0
        return (value - 32.0) * 5.0 / 9.0

    try:
        factor = LINEAR_FACTORS[kind]
    except KeyError:
        raise ValueError(f"Unknown quantity kind: {kind}")

    if to_system == UnitSystem.IMPERIAL:
        return value * factor
    return value / factor


def convert_step(
    step: float,
    kind: QuantityKind,
    from_system: UnitSystem,
    to_system: UnitSystem,
) -> float:
    """
    Convert an increment/decrement step. Steps are differences, so absolute
    temperature steps convert as temperature deltas.
    """
    if kind == QuantityKind.TEMPERATURE:
        kind = QuantityKind.TEMPERATURE_DELTA
    return convert(step, kind, from_system, to_system)


def display_precision(kind: QuantityKind, unit_system: UnitSystem) -> int:
    """Number of decimal places a value of this kind is shown with."""
    return _PRECISION[unit_system].get(kind, _DEFAULT_PRECISION)


def unit_label(kind: QuantityKind, unit_system: UnitSystem) -> str:
    """Unit label for a kind in a system ('' for dimensionless counts/ratios)."""
    return UNIT_LABELS[unit_system].get(kind, "")


def to_display(
    value: Optional[float], kind: QuantityKind, unit_system: UnitSystem
) -> Optional[float]:
    """Convert a canonical SI value into a rounded display value."""
    converted = convert(value, kind, UnitSystem.SI, unit_system)
    if converted is None:
        return None
    return round(converted, display_precision(kind, unit_system))
