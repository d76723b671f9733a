"""
AirChain configuration and constants.

Everything the engine computes is expressed in one canonical unit system
(SI: °C, %, g/kg(DA), kJ/kg(DA), Pa, m³/min, kW). Imperial values only exist
at the presentation boundary via engine.units.
"""

from enum import Enum
from types import MappingProxyType


class UnitSystem(str, Enum):
    SI = "si"              # °C, g/kg, kJ/kg, Pa, m³/min
    IMPERIAL = "imperial"  # °F, gr/lb, BTU/lb, in.wg, CFM


class EquipmentType(str, Enum):
    FILTER = "filter"
    BURNER = "burner"
    COOLING_COIL = "cooling_coil"
    HEATING_COIL = "heating_coil"
    SPRAY_WASHER = "spray_washer"
    STEAM_HUMIDIFIER = "steam_humidifier"
    FAN = "fan"
    DAMPER = "damper"
    ELIMINATOR = "eliminator"
    CUSTOM = "custom"


class InletLock(str, Enum):
    UNLOCKED = "unlocked"  # inlet follows the upstream outlet
    LOCKED = "locked"      # inlet pinned by the user


class EquipmentWarning(str, Enum):
    BURNER = "burner"
    BURNER_SHF = "burner_shf"
    COOLING_COIL_TEMP = "cooling_coil_temp"
    COOLING_COIL_HUMIDITY = "cooling_coil_humidity"
    COOLING_COIL_SENSIBLE = "cooling_coil_sensible"
    COOLING_COIL_BYPASS = "cooling_coil_bypass"
    COOLING_COIL_SUPERSATURATED = "cooling_coil_supersaturated"
    HEATING_COIL = "heating_coil"
    SPRAY_WASHER_TARGET = "spray_washer_target"
    STEAM_HUMIDIFIER_TARGET = "steam_humidifier_target"


class SteamPressureUnit(str, Enum):
    PAG = "pag"
    KPAG = "kpag"
    MPAG = "mpag"
    PSIG = "psig"
    BARG = "barg"
    KGFCM2G = "kgfcm2g"


class GasFuel(str, Enum):
    NATURAL_GAS = "natural_gas"
    CITY_GAS = "city_gas"
    LPG = "lpg"


# Atmospheric pressure is held constant at sea level
ATMOSPHERIC_PRESSURE = 101325.0  # Pa

# Moist air constants (kJ/kg·K, kJ/kg)
CP_DRY_AIR = 1.006
CP_WATER_VAPOR = 1.86
HFG_0C = 2501.0
CP_MOIST_AIR = 1.02       # lumped value used for fan and burner temperature rise
MOLAR_MASS_RATIO = 0.622  # Mw / Mda

CP_WATER = 4.186          # kJ/(kg·K)
WATER_DENSITY = 1.0       # kg/L
KW_TO_KCAL_H = 860.421
KJ_PER_KCAL = 4.186

# Defaults for a freshly created chain
DEFAULT_AIRFLOW = 100.0  # m³/min
DEFAULT_AC_INLET = (0.0, 50.0)    # °C, %RH
DEFAULT_AC_OUTLET = (27.0, 70.0)  # °C, %RH
DEFAULT_PRESSURE_LOSS = 50.0      # Pa

# Cooling coil: outlet humidity within this band of the inlet is treated as
# sensible-only cooling (no ADP / bypass factor).
SENSIBLE_ONLY_TOLERANCE = 0.01  # g/kg(DA)

# Empirical initial resistance per filter sheet, Pa
FILTER_MEDIA_RESISTANCE = MappingProxyType({
    "pre_filter": 50.0,
    "glass_fiber": 80.0,
    "medium": 120.0,
    "hepa": 250.0,
})

# Default pressure loss per eliminator blade profile, Pa
ELIMINATOR_PRESSURE_LOSS = MappingProxyType({
    "3-fold": 30.0,
    "6-fold": 60.0,
})

# Lower heating values, MJ/m³N
GAS_LOWER_HEATING_VALUES = MappingProxyType({
    GasFuel.NATURAL_GAS: 45.0,
    GasFuel.CITY_GAS: 17.2,
    GasFuel.LPG: 93.2,
})

# Standard motor outputs (HP label, kW), ascending
MOTOR_OUTPUTS: tuple[tuple[str, float], ...] = (
    ("1/8", 0.1), ("1/6", 0.125), ("1/5", 0.15), ("1/4", 0.2),
    ("1/3", 0.25), ("1/2", 0.4), ("2/3", 0.5), ("3/4", 0.55),
    ("1", 0.75), ("1.5", 1.1), ("2", 1.5), ("3", 2.2), ("4.0", 3.0),
    ("5.0", 3.7), ("7.5", 5.5), ("10", 7.5), ("15", 11.0), ("20", 15.0),
    ("25", 19.0), ("30", 22.0), ("35", 26.0), ("40", 30.0), ("45", 33.0),
    ("50", 37.0), ("60", 45.0), ("75", 55.0), ("80", 60.0), ("100", 75.0),
    ("125", 95.0), ("150", 110.0), ("200", 150.0), ("250", 190.0),
    ("300", 220.0), ("350", 260.0), ("400", 300.0), ("500", 370.0),
)

# Chart axis ranges (SI)
CHART_RANGES = MappingProxyType({
    "t_min": -10.0,  # °C
    "t_max": 55.0,   # °C
    "x_min": 0.0,    # g/kg(DA)
    "x_max": 30.0,   # g/kg(DA)
})

# Equipment kinds drawn without a process line on the chart
CHART_EXCLUDED_TYPES = frozenset({
    EquipmentType.FILTER,
    EquipmentType.DAMPER,
    EquipmentType.ELIMINATOR,
    EquipmentType.CUSTOM,
})

# Display names given to newly added units
EQUIPMENT_NAMES = MappingProxyType({
    EquipmentType.FILTER: "Filter",
    EquipmentType.BURNER: "Burner",
    EquipmentType.COOLING_COIL: "Cooling Coil",
    EquipmentType.HEATING_COIL: "Heating Coil",
    EquipmentType.SPRAY_WASHER: "Spray Washer",
    EquipmentType.STEAM_HUMIDIFIER: "Steam Humidifier",
    EquipmentType.FAN: "Fan",
    EquipmentType.DAMPER: "Damper",
    EquipmentType.ELIMINATOR: "Eliminator",
    EquipmentType.CUSTOM: "Custom",
})

# Starter line-up for a new project: (kind, locked inlet °C/%RH or None)
DEFAULT_CHAIN = (
    (EquipmentType.FILTER, None),
    (EquipmentType.BURNER, None),
    (EquipmentType.COOLING_COIL, (25.0, 80.0)),
    (EquipmentType.HEATING_COIL, (15.0, 60.0)),
    (EquipmentType.ELIMINATOR, None),
    (EquipmentType.SPRAY_WASHER, (55.2, 4.58)),
    (EquipmentType.STEAM_HUMIDIFIER, (30.0, 30.0)),
    (EquipmentType.FAN, (25.0, 60.0)),
    (EquipmentType.DAMPER, None),
)
