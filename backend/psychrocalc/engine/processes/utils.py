"""
Shared helpers for the process calculations.
"""

from psychrocalc.config import TEMPERATURE_MAX
from psychrocalc.engine.properties import humid_air
from psychrocalc.exceptions import ArgumentDomainError
from psychrocalc.models.flows import FlowOfMoistAir
from psychrocalc.models.fluids import MoistAirState
from psychrocalc.models.moist_air import MoistAirInput
from psychrocalc.models.process import FlowInput


def build_state(air: MoistAirInput) -> MoistAirState:
    return MoistAirState.of(
        temperature=air.temperature,
        relative_humidity=air.relative_humidity,
        humidity_ratio=air.humidity_ratio,
        pressure=air.pressure,
    )


def build_flow(flow_input: FlowInput) -> FlowOfMoistAir:
    """Resolve a request flow from exactly one of its flow rates."""
    rates = {
        "dry_air_mass_flow": flow_input.dry_air_mass_flow,
        "mass_flow": flow_input.mass_flow,
        "volumetric_flow": flow_input.volumetric_flow,
    }
    given = [name for name, value in rates.items() if value is not None]
    if len(given) != 1:
        raise ArgumentDomainError(
            "Exactly one of dry_air_mass_flow, mass_flow or volumetric_flow must be given"
        )

    state = build_state(flow_input.air)
    name = given[0]
    if name == "dry_air_mass_flow":
        return FlowOfMoistAir.of_dry_air_mass_flow(state, rates[name])
    if name == "mass_flow":
        return FlowOfMoistAir.of_mass_flow(state, rates[name])
    return FlowOfMoistAir.of_volumetric_flow(state, rates[name])


def outlet_flow(inlet_flow: FlowOfMoistAir, temperature: float, humidity_ratio: float) -> FlowOfMoistAir:
    """Outlet flow carrying the inlet dry air mass flow at a new state."""
    state = MoistAirState.of(
        temperature=temperature,
        humidity_ratio=humidity_ratio,
        pressure=inlet_flow.fluid.pressure,
    )
    return inlet_flow.with_state(state)


def heat_between(inlet_flow: FlowOfMoistAir, outlet: FlowOfMoistAir) -> float:
    """Heat of process [W] for the enthalpy change at constant dry air flow."""
    return inlet_flow.dry_air_mass_flow * (
        outlet.fluid.specific_enthalpy - inlet_flow.fluid.specific_enthalpy
    ) * 1000.0


def outlet_temperature_limit(pressure: float) -> float:
    """Highest outlet temperature a heater may produce at ``pressure``."""
    if pressure > humid_air.saturation_pressure(TEMPERATURE_MAX):
        return TEMPERATURE_MAX
    return 0.98 * humid_air.dry_bulb_temperature_max(pressure)
