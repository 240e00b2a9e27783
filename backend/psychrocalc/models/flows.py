"""
Immutable flow records: a fluid state paired with its flow rate.
"""

from pydantic import BaseModel, ConfigDict, Field

from psychrocalc.config import MASS_FLOW_MAX
from psychrocalc.exceptions import require
from psychrocalc.models.fluids import LiquidWaterState, MoistAirState


def _validate_mass_flow(mass_flow: float) -> None:
    require(
        0.0 <= mass_flow <= MASS_FLOW_MAX,
        f"Mass flow {mass_flow} kg/s is outside [0, {MASS_FLOW_MAX}] kg/s",
    )


class FlowOfMoistAir(BaseModel):
    """Moist air flow. Dry air mass flow is the basis of every energy balance."""

    model_config = ConfigDict(frozen=True)

    fluid: MoistAirState
    dry_air_mass_flow: float = Field(..., description="Dry air mass flow, kg/s")
    mass_flow: float = Field(..., description="Moist air mass flow, kg/s")
    volumetric_flow: float = Field(..., description="Moist air volumetric flow, m³/s")

    @classmethod
    def of_dry_air_mass_flow(cls, fluid: MoistAirState, dry_air_mass_flow: float) -> "FlowOfMoistAir":
        _validate_mass_flow(dry_air_mass_flow)
        mass_flow = dry_air_mass_flow * (1.0 + fluid.humidity_ratio)
        return cls(
            fluid=fluid,
            dry_air_mass_flow=dry_air_mass_flow,
            mass_flow=mass_flow,
            volumetric_flow=mass_flow / fluid.density,
        )

    @classmethod
    def of_mass_flow(cls, fluid: MoistAirState, mass_flow: float) -> "FlowOfMoistAir":
        _validate_mass_flow(mass_flow)
        return cls.of_dry_air_mass_flow(fluid, mass_flow / (1.0 + fluid.humidity_ratio))

    @classmethod
    def of_volumetric_flow(cls, fluid: MoistAirState, volumetric_flow: float) -> "FlowOfMoistAir":
        require(volumetric_flow >= 0.0, f"Volumetric flow {volumetric_flow} m³/s must not be negative")
        return cls.of_mass_flow(fluid, volumetric_flow * fluid.density)

    def with_state(self, fluid: MoistAirState) -> "FlowOfMoistAir":
        """Same dry air mass flow carried by a different state."""
        return FlowOfMoistAir.of_dry_air_mass_flow(fluid, self.dry_air_mass_flow)


class FlowOfLiquidWater(BaseModel):
    model_config = ConfigDict(frozen=True)

    fluid: LiquidWaterState
    mass_flow: float = Field(..., description="Mass flow, kg/s")
    volumetric_flow: float = Field(..., description="Volumetric flow, m³/s")

    @classmethod
    def of_mass_flow(cls, fluid: LiquidWaterState, mass_flow: float) -> "FlowOfLiquidWater":
        _validate_mass_flow(mass_flow)
        return cls(fluid=fluid, mass_flow=mass_flow, volumetric_flow=mass_flow / fluid.density)
