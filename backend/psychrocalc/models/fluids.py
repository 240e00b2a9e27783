"""
Immutable fluid state records.

Every record is tagged by ``kind`` and exposes at least density, specific
heat and specific enthalpy. Records are built through their ``of`` factory,
which validates the input domain and derives all properties once.
"""

import math
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from psychrocalc.config import DEFAULT_PRESSURE, TEMPERATURE_MAX, TEMPERATURE_MIN, VapourState
from psychrocalc.engine.properties import dry_air, humid_air, ice, liquid_water, water_vapour
from psychrocalc.exceptions import ArgumentDomainError, require


class DryAirState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["dry_air"] = "dry_air"
    pressure: float
    temperature: float
    density: float
    specific_heat: float
    specific_enthalpy: float
    dynamic_viscosity: float
    kinematic_viscosity: float
    thermal_conductivity: float

    @classmethod
    def of(cls, temperature: float, pressure: float = DEFAULT_PRESSURE) -> "DryAirState":
        humid_air.validate_pressure(pressure)
        humid_air.validate_temperature(temperature)
        return cls(
            pressure=pressure,
            temperature=temperature,
            density=dry_air.density(temperature, pressure),
            specific_heat=dry_air.specific_heat(temperature),
            specific_enthalpy=dry_air.specific_enthalpy(temperature),
            dynamic_viscosity=dry_air.dynamic_viscosity(temperature),
            kinematic_viscosity=dry_air.kinematic_viscosity(temperature, pressure),
            thermal_conductivity=dry_air.thermal_conductivity(temperature),
        )


class WaterVapourState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["water_vapour"] = "water_vapour"
    pressure: float
    temperature: float
    density: float
    specific_heat: float
    specific_enthalpy: float
    dynamic_viscosity: float
    thermal_conductivity: float

    @classmethod
    def of(cls, temperature: float, pressure: float = DEFAULT_PRESSURE) -> "WaterVapourState":
        humid_air.validate_pressure(pressure)
        humid_air.validate_temperature(temperature)
        return cls(
            pressure=pressure,
            temperature=temperature,
            density=water_vapour.density(temperature, pressure),
            specific_heat=water_vapour.specific_heat(temperature),
            specific_enthalpy=water_vapour.specific_enthalpy(temperature),
            dynamic_viscosity=water_vapour.dynamic_viscosity(temperature),
            thermal_conductivity=water_vapour.thermal_conductivity(temperature),
        )


class LiquidWaterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["liquid_water"] = "liquid_water"
    pressure: float
    temperature: float
    density: float
    specific_heat: float
    specific_enthalpy: float

    @classmethod
    def of(cls, temperature: float, pressure: float = DEFAULT_PRESSURE) -> "LiquidWaterState":
        humid_air.validate_pressure(pressure)
        require(
            0.0 <= temperature <= TEMPERATURE_MAX,
            f"Liquid water temperature {temperature} °C is outside [0, {TEMPERATURE_MAX}] °C",
        )
        return cls(
            pressure=pressure,
            temperature=temperature,
            density=liquid_water.density(temperature),
            specific_heat=liquid_water.specific_heat(temperature),
            specific_enthalpy=liquid_water.specific_enthalpy(temperature),
        )


class IceState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ice"] = "ice"
    pressure: float
    temperature: float
    density: float
    specific_heat: float
    specific_enthalpy: float
    thermal_conductivity: float

    @classmethod
    def of(cls, temperature: float, pressure: float = DEFAULT_PRESSURE) -> "IceState":
        humid_air.validate_pressure(pressure)
        require(
            TEMPERATURE_MIN <= temperature <= 0.0,
            f"Ice temperature {temperature} °C is outside [{TEMPERATURE_MIN}, 0] °C",
        )
        return cls(
            pressure=pressure,
            temperature=temperature,
            density=ice.density(temperature),
            specific_heat=ice.specific_heat(temperature),
            specific_enthalpy=ice.specific_enthalpy(temperature),
            thermal_conductivity=ice.thermal_conductivity(temperature),
        )


class MoistAirState(BaseModel):
    """Snapshot of moist air; every property is derived at construction."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["moist_air"] = "moist_air"
    pressure: float = Field(..., description="Absolute pressure, Pa")
    temperature: float = Field(..., description="Dry-bulb temperature, °C")
    relative_humidity: float = Field(..., description="Relative humidity, %")
    humidity_ratio: float = Field(..., description="Humidity ratio, kg/kg dry air")
    saturation_pressure: float = Field(..., description="Saturation pressure at dry bulb, Pa")
    max_humidity_ratio: float = Field(..., description="Humidity ratio at saturation, kg/kg")
    vapour_state: VapourState
    dew_point: float = Field(..., description="Dew point temperature, °C (-inf for dry air)")
    wet_bulb: float = Field(..., description="Wet-bulb temperature, °C")
    density: float = Field(..., description="Density, kg/m³")
    specific_heat: float = Field(..., description="Specific heat, kJ/(kg·K)")
    specific_enthalpy: float = Field(..., description="Specific enthalpy, kJ/kg dry air")
    dynamic_viscosity: float = Field(..., description="Dynamic viscosity, Pa·s")
    kinematic_viscosity: float = Field(..., description="Kinematic viscosity, m²/s")
    thermal_conductivity: float = Field(..., description="Thermal conductivity, W/(m·K)")
    thermal_diffusivity: float = Field(..., description="Thermal diffusivity, m²/s")
    prandtl_number: float

    @classmethod
    def of(
        cls,
        temperature: float,
        relative_humidity: Optional[float] = None,
        humidity_ratio: Optional[float] = None,
        pressure: float = DEFAULT_PRESSURE,
    ) -> "MoistAirState":
        """Build a state from dry bulb and exactly one humidity descriptor."""
        if (relative_humidity is None) == (humidity_ratio is None):
            raise ArgumentDomainError(
                "Exactly one of relative_humidity or humidity_ratio must be given"
            )
        humid_air.validate_pressure(pressure)
        humid_air.validate_temperature(temperature)

        ps = humid_air.saturation_pressure(temperature)
        if ps >= pressure:
            raise ArgumentDomainError(
                f"Saturation pressure {ps:.1f} Pa at {temperature} °C reaches the "
                f"absolute pressure {pressure} Pa"
            )

        if humidity_ratio is None:
            humidity_ratio = humid_air.humidity_ratio(relative_humidity, ps, pressure)
        else:
            humid_air.validate_humidity_ratio(humidity_ratio)
            relative_humidity = humid_air.relative_humidity(temperature, humidity_ratio, pressure)

        x_max = humid_air.max_humidity_ratio(ps, pressure)
        rho = humid_air.density(temperature, humidity_ratio, pressure)
        cp = humid_air.specific_heat(temperature, humidity_ratio)
        mu = humid_air.dynamic_viscosity(temperature, humidity_ratio)
        k = humid_air.thermal_conductivity(temperature, humidity_ratio)

        return cls(
            pressure=pressure,
            temperature=temperature,
            relative_humidity=relative_humidity,
            humidity_ratio=humidity_ratio,
            saturation_pressure=ps,
            max_humidity_ratio=x_max,
            vapour_state=humid_air.vapour_state(temperature, humidity_ratio, x_max),
            dew_point=humid_air.dew_point_temperature(temperature, relative_humidity, pressure),
            wet_bulb=humid_air.wet_bulb_temperature(temperature, relative_humidity, pressure),
            density=rho,
            specific_heat=cp,
            specific_enthalpy=humid_air.specific_enthalpy(temperature, humidity_ratio, pressure),
            dynamic_viscosity=mu,
            kinematic_viscosity=humid_air.kinematic_viscosity(temperature, humidity_ratio, rho),
            thermal_conductivity=k,
            thermal_diffusivity=humid_air.thermal_diffusivity(rho, k, cp),
            prandtl_number=humid_air.prandtl_number(mu, k, cp),
        )

    @field_serializer("dew_point", when_used="json")
    def _finite_dew_point(self, value: float) -> Optional[float]:
        # JSON has no infinity; dry air reports null
        return value if math.isfinite(value) else None


Fluid = Annotated[
    Union[DryAirState, WaterVapourState, LiquidWaterState, IceState, MoistAirState],
    Field(discriminator="kind"),
]


class FluidKind(str, Enum):
    DRY_AIR = "dry_air"
    WATER_VAPOUR = "water_vapour"
    LIQUID_WATER = "liquid_water"
    ICE = "ice"


class FluidInput(BaseModel):
    """Request for a single-substance state."""

    kind: FluidKind
    temperature: float = Field(..., description="°C")
    pressure: float = Field(default=DEFAULT_PRESSURE, description="Pa")


_FLUID_FACTORIES = {
    FluidKind.DRY_AIR: DryAirState.of,
    FluidKind.WATER_VAPOUR: WaterVapourState.of,
    FluidKind.LIQUID_WATER: LiquidWaterState.of,
    FluidKind.ICE: IceState.of,
}


def fluid_state(kind: FluidKind, temperature: float, pressure: float = DEFAULT_PRESSURE):
    """Build the state record of a single substance."""
    return _FLUID_FACTORIES[kind](temperature, pressure)
