"""
Pydantic models for moist air states.
"""

from typing import Optional

from pydantic import BaseModel, Field


class AirState(BaseModel):
    """
    A moist air state at the fixed atmospheric pressure.

    Any field may be None while the user is mid-edit; None means
    "undetermined" and is never treated as zero.
    """

    temperature: Optional[float] = Field(None, description="Dry-bulb temperature, °C")
    relative_humidity: Optional[float] = Field(None, description="Relative humidity, %")
    absolute_humidity: Optional[float] = Field(None, description="Humidity ratio, g/kg(DA)")
    enthalpy: Optional[float] = Field(None, description="Specific enthalpy, kJ/kg(DA)")
    density: Optional[float] = Field(None, description="Dry-air density, kg/m³")

    @classmethod
    def empty(cls) -> "AirState":
        return cls()

    @property
    def is_determined(self) -> bool:
        """True when temperature, humidity and enthalpy are all known."""
        return (
            self.temperature is not None
            and self.absolute_humidity is not None
            and self.enthalpy is not None
        )


class AirStateInput(BaseModel):
    """Input pair for resolving an air state: temperature plus RH or x."""

    temperature: Optional[float] = None
    relative_humidity: Optional[float] = None
    absolute_humidity: Optional[float] = None
