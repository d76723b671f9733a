"""
Chart data generator.

Generates the reference lines of a t-x psychrometric chart plus the process
segments of a computed chain:
- Saturation curve (100% RH)
- Constant relative humidity lines (10%, 20%, ... 90%)
- Constant enthalpy lines
- One inlet → outlet segment per state-changing unit

Values are computed in SI and converted to the requested unit system on
the way out.
"""

from typing import Optional

import numpy as np

from airchain.config import CHART_EXCLUDED_TYPES, CHART_RANGES, UnitSystem
from airchain.engine.properties import (
    absolute_humidity_from_temp_enthalpy,
    absolute_humidity_from_temp_rh,
    saturation_absolute_humidity,
)
from airchain.engine.units import QuantityKind, convert


def _point(t: float, x: float, unit_system: UnitSystem) -> dict:
    return {
        "temperature": round(convert(float(t), QuantityKind.TEMPERATURE, UnitSystem.SI, unit_system), 2),
        "absolute_humidity": round(convert(float(x), QuantityKind.ABS_HUMIDITY, UnitSystem.SI, unit_system), 3),
    }


def _t_range(num_points: int) -> np.ndarray:
    return np.linspace(CHART_RANGES["t_min"], CHART_RANGES["t_max"], num_points)


def generate_saturation_curve(
    unit_system: UnitSystem = UnitSystem.SI, num_points: int = 200
) -> list[dict]:
    """Saturation curve points, clipped to the chart's humidity range."""
    points = []
    for t in _t_range(num_points):
        x = saturation_absolute_humidity(float(t))
        if x is not None and x <= CHART_RANGES["x_max"]:
            points.append(_point(t, x, unit_system))
    return points


def generate_rh_lines(
    unit_system: UnitSystem = UnitSystem.SI, num_points: int = 200
) -> dict[str, list[dict]]:
    """Constant RH lines keyed by percentage ("10" ... "90")."""
    lines = {}
    for rh in range(10, 100, 10):
        points = []
        for t in _t_range(num_points):
            x = absolute_humidity_from_temp_rh(float(t), float(rh))
            if x is not None and x <= CHART_RANGES["x_max"]:
                points.append(_point(t, x, unit_system))
        lines[str(rh)] = points
    return lines


def generate_enthalpy_lines(
    unit_system: UnitSystem = UnitSystem.SI, num_points: int = 150
) -> dict[str, list[dict]]:
    """
    Constant enthalpy lines keyed by kJ/kg(DA), every 10 kJ/kg.

    x is linear in h at fixed t:
        x = 1000 × (h − 1.006 t) / (2501 + 1.86 t)
    Points above saturation are dropped.
    """
    lines = {}
    for h in range(0, 121, 10):
        points = []
        for t in _t_range(num_points):
            x = absolute_humidity_from_temp_enthalpy(float(t), float(h))
            if x is None or x > CHART_RANGES["x_max"]:
                continue
            x_sat = saturation_absolute_humidity(float(t))
            if x_sat is not None and x <= x_sat:
                points.append(_point(t, x, unit_system))
        if len(points) >= 2:
            lines[str(h)] = points
    return lines


def generate_process_segments(chain, unit_system: UnitSystem = UnitSystem.SI) -> list[dict]:
    """
    Inlet → outlet segments for the units of a computed chain.

    Filters, dampers, eliminators and custom units are left off the chart,
    as are units whose inlet or outlet is undetermined.
    """
    segments = []
    for unit in chain.units:
        if unit.equipment_type in CHART_EXCLUDED_TYPES:
            continue
        inlet, outlet = unit.inlet_air, unit.outlet_air
        if (
            inlet.temperature is None or inlet.absolute_humidity is None
            or outlet.temperature is None or outlet.absolute_humidity is None
        ):
            continue
        segments.append({
            "unit_id": unit.id,
            "name": unit.name,
            "type": unit.equipment_type.value,
            "start": _point(inlet.temperature, inlet.absolute_humidity, unit_system),
            "end": _point(outlet.temperature, outlet.absolute_humidity, unit_system),
        })
    return segments


def generate_chart_data(
    unit_system: UnitSystem = UnitSystem.SI, chain: Optional[object] = None
) -> dict:
    """All chart background data, plus process segments when a chain is given."""
    t_min = convert(CHART_RANGES["t_min"], QuantityKind.TEMPERATURE, UnitSystem.SI, unit_system)
    t_max = convert(CHART_RANGES["t_max"], QuantityKind.TEMPERATURE, UnitSystem.SI, unit_system)
    x_max = convert(CHART_RANGES["x_max"], QuantityKind.ABS_HUMIDITY, UnitSystem.SI, unit_system)

    return {
        "unit_system": unit_system.value,
        "ranges": {
            "t_min": round(t_min, 2),
            "t_max": round(t_max, 2),
            "x_min": CHART_RANGES["x_min"],
            "x_max": round(x_max, 3),
        },
        "saturation_curve": generate_saturation_curve(unit_system),
        "rh_lines": generate_rh_lines(unit_system),
        "enthalpy_lines": generate_enthalpy_lines(unit_system),
        "process_segments": generate_process_segments(chain, unit_system) if chain is not None else [],
    }
