"""
Pydantic models for moist air state and dry-bulb recovery requests.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from psychrocalc.config import DEFAULT_PRESSURE


class MoistAirInput(BaseModel):
    """Dry bulb plus exactly one humidity descriptor."""

    temperature: float = Field(..., description="Dry-bulb temperature, °C", examples=[20.0])
    relative_humidity: Optional[float] = Field(default=None, description="Relative humidity, %")
    humidity_ratio: Optional[float] = Field(default=None, description="Humidity ratio, kg/kg")
    pressure: float = Field(default=DEFAULT_PRESSURE, description="Absolute pressure, Pa")


class DryBulbPair(str, Enum):
    ENTHALPY_HUMIDITY_RATIO = "enthalpy_humidity_ratio"   # (h [kJ/kg], x [kg/kg])
    HUMIDITY_RATIO_RH = "humidity_ratio_rh"               # (x [kg/kg], RH [%])
    DEW_POINT_RH = "dew_point_rh"                         # (Tdp [°C], RH [%])
    WET_BULB_RH = "wet_bulb_rh"                           # (Twb [°C], RH [%])


class DryBulbInput(BaseModel):
    pair: DryBulbPair
    values: tuple[float, float] = Field(..., description="Values in the order named by pair")
    pressure: float = Field(default=DEFAULT_PRESSURE, description="Absolute pressure, Pa")


class DryBulbOutput(BaseModel):
    pair: DryBulbPair
    values: tuple[float, float]
    pressure: float
    temperature: float = Field(..., description="Recovered dry-bulb temperature, °C")

    @field_serializer("temperature", when_used="json")
    def _finite_temperature(self, value: float) -> Optional[float]:
        # Dry air (RH = 0) has no finite dry bulb for a given dew point
        return value if math.isfinite(value) else None
