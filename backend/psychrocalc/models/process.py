"""
Pydantic models for process calculations: coolant data, results and requests.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from psychrocalc.config import (
    COOLANT_TEMPERATURE_MAX,
    COOLANT_TEMPERATURE_MIN,
    ProcessMode,
    ProcessType,
)
from psychrocalc.exceptions import require
from psychrocalc.models.flows import FlowOfLiquidWater, FlowOfMoistAir
from psychrocalc.models.moist_air import MoistAirInput


class CoolantData(BaseModel):
    """Coolant supply/return temperatures; their mean is the coil wall temperature."""

    model_config = ConfigDict(frozen=True)

    supply_temperature: float
    return_temperature: float
    average_temperature: float

    @classmethod
    def of(cls, supply_temperature: float, return_temperature: float) -> "CoolantData":
        for name, value in (("supply", supply_temperature), ("return", return_temperature)):
            require(
                COOLANT_TEMPERATURE_MIN < value < COOLANT_TEMPERATURE_MAX,
                f"Coolant {name} temperature {value} °C is outside "
                f"({COOLANT_TEMPERATURE_MIN}, {COOLANT_TEMPERATURE_MAX}) °C",
            )
        require(
            supply_temperature <= return_temperature,
            f"Coolant supply temperature {supply_temperature} °C must not exceed "
            f"return temperature {return_temperature} °C",
        )
        return cls(
            supply_temperature=supply_temperature,
            return_temperature=return_temperature,
            average_temperature=(supply_temperature + return_temperature) / 2.0,
        )


class ProcessResult(BaseModel):
    """Outcome of one process calculation. Heat is positive for heating."""

    model_config = ConfigDict(frozen=True)

    process_type: ProcessType
    process_mode: Optional[ProcessMode] = None
    inlet_flow: FlowOfMoistAir
    additional_inlet_flows: tuple[FlowOfMoistAir, ...] = ()
    outlet_flow: FlowOfMoistAir
    heat_of_process: float = Field(..., description="Heat of process, W")

    # Cooling only
    condensate_flow: Optional[FlowOfLiquidWater] = None
    bypass_factor: Optional[float] = None
    coolant: Optional[CoolantData] = None
    average_wall_temperature: Optional[float] = None

    warnings: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# API requests
# ---------------------------------------------------------------------------

class FlowInput(BaseModel):
    """Moist air flow given by exactly one flow rate."""

    air: MoistAirInput
    dry_air_mass_flow: Optional[float] = Field(default=None, description="kg/s")
    mass_flow: Optional[float] = Field(default=None, description="kg/s")
    volumetric_flow: Optional[float] = Field(default=None, description="m³/s")


class HeatingInput(BaseModel):
    inlet: FlowInput
    mode: ProcessMode
    target: float = Field(..., description="W (from_power), °C (from_temperature) or % (from_humidity)")


class CoolingInput(BaseModel):
    inlet: FlowInput
    mode: ProcessMode
    target: float = Field(..., description="W (from_power), °C (from_temperature) or % (from_humidity)")
    coolant_supply_temperature: float = Field(..., description="°C")
    coolant_return_temperature: float = Field(..., description="°C")


class DryCoolingInput(BaseModel):
    inlet: FlowInput
    mode: ProcessMode
    target: float = Field(..., description="W (from_power) or °C (from_temperature)")


class MixingInput(BaseModel):
    flows: list[FlowInput] = Field(..., min_length=2)
