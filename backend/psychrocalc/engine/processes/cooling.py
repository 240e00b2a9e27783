"""
Cooling of a moist air flow.

Real cooling runs the bypass factor coil model: the coolant supply/return
mean sets the coil wall temperature and the outlet may lose moisture as
condensate. Dry cooling is sensible only and is refused once the outlet
would drop below the inlet dew point.
"""

import logging

from psychrocalc.config import ProcessMode, ProcessType
from psychrocalc.engine import coil
from psychrocalc.engine.coil import CoilBalance, RH_WALL_FALLBACK
from psychrocalc.engine.processes.base import ProcessSolver
from psychrocalc.engine.processes.utils import build_flow, heat_between, outlet_flow
from psychrocalc.engine.properties import humid_air
from psychrocalc.exceptions import ArgumentDomainError, PhysicallyInfeasibleProcessError
from psychrocalc.models.flows import FlowOfLiquidWater, FlowOfMoistAir
from psychrocalc.models.fluids import LiquidWaterState
from psychrocalc.models.process import CoolantData, CoolingInput, DryCoolingInput, ProcessResult

logger = logging.getLogger(__name__)


def _real_cooling_result(
    inlet_flow: FlowOfMoistAir,
    coolant: CoolantData,
    balance: CoilBalance,
    mode: ProcessMode,
    warnings: tuple[str, ...] = (),
) -> ProcessResult:
    outlet = outlet_flow(inlet_flow, balance.outlet_temperature, balance.outlet_humidity_ratio)
    condensate = FlowOfLiquidWater.of_mass_flow(
        LiquidWaterState.of(balance.wall_temperature, inlet_flow.fluid.pressure),
        balance.condensate_mass_flow,
    )
    logger.debug(
        "Cooling %s: %.2f °C -> %.2f °C, BF=%.4f, %.1f W, condensate %.6f kg/s",
        mode.value, inlet_flow.fluid.temperature, balance.outlet_temperature,
        balance.bypass_factor, balance.heat_of_process, balance.condensate_mass_flow,
    )
    return ProcessResult(
        process_type=ProcessType.COOLING,
        process_mode=mode,
        inlet_flow=inlet_flow,
        outlet_flow=outlet,
        heat_of_process=balance.heat_of_process,
        condensate_flow=condensate,
        bypass_factor=balance.bypass_factor,
        coolant=coolant,
        average_wall_temperature=balance.wall_temperature,
        warnings=warnings,
    )


def cooling_from_temperature(
    inlet_flow: FlowOfMoistAir, coolant: CoolantData, target_temperature: float
) -> ProcessResult:
    balance = coil.cooling_from_temperature(inlet_flow, coolant.average_temperature, target_temperature)
    return _real_cooling_result(inlet_flow, coolant, balance, ProcessMode.FROM_TEMPERATURE)


def cooling_from_relative_humidity(
    inlet_flow: FlowOfMoistAir, coolant: CoolantData, target_relative_humidity: float
) -> ProcessResult:
    balance = coil.cooling_from_relative_humidity(
        inlet_flow, coolant.average_temperature, target_relative_humidity
    )
    warnings: tuple[str, ...] = ()
    if target_relative_humidity > RH_WALL_FALLBACK:
        warnings = (
            f"Target RH {target_relative_humidity}% is above {RH_WALL_FALLBACK:.0f}%; "
            f"outlet taken at the coil wall temperature {coolant.average_temperature:.2f} °C.",
        )
    return _real_cooling_result(inlet_flow, coolant, balance, ProcessMode.FROM_HUMIDITY, warnings)


def cooling_from_power(
    inlet_flow: FlowOfMoistAir, coolant: CoolantData, heat_of_process: float
) -> ProcessResult:
    balance = coil.cooling_from_power(inlet_flow, coolant.average_temperature, heat_of_process)
    return _real_cooling_result(inlet_flow, coolant, balance, ProcessMode.FROM_POWER)


# ---------------------------------------------------------------------------
# Dry (sensible) cooling
# ---------------------------------------------------------------------------

def _check_above_dew_point(inlet_flow: FlowOfMoistAir, outlet_temperature: float) -> None:
    dew_point = inlet_flow.fluid.dew_point
    if outlet_temperature < dew_point:
        raise PhysicallyInfeasibleProcessError(
            f"Dry cooling to {outlet_temperature:.2f} °C would pass the inlet dew point "
            f"{dew_point:.2f} °C; use real cooling"
        )


def _dry_cooling_result(inlet_flow: FlowOfMoistAir, outlet: FlowOfMoistAir, mode: ProcessMode, heat: float) -> ProcessResult:
    logger.debug(
        "Dry cooling %s: %.2f °C -> %.2f °C, %.1f W",
        mode.value, inlet_flow.fluid.temperature, outlet.fluid.temperature, heat,
    )
    return ProcessResult(
        process_type=ProcessType.DRY_COOLING,
        process_mode=mode,
        inlet_flow=inlet_flow,
        outlet_flow=outlet,
        heat_of_process=heat,
    )


def dry_cooling_from_temperature(inlet_flow: FlowOfMoistAir, target_temperature: float) -> ProcessResult:
    inlet = inlet_flow.fluid
    if target_temperature > inlet.temperature:
        raise PhysicallyInfeasibleProcessError(
            f"Cooling cannot raise the air temperature: target {target_temperature} °C "
            f"is above the inlet {inlet.temperature} °C"
        )
    _check_above_dew_point(inlet_flow, target_temperature)
    outlet = outlet_flow(inlet_flow, target_temperature, inlet.humidity_ratio)
    return _dry_cooling_result(inlet_flow, outlet, ProcessMode.FROM_TEMPERATURE, heat_between(inlet_flow, outlet))


def dry_cooling_from_power(inlet_flow: FlowOfMoistAir, heat_of_process: float) -> ProcessResult:
    """Outlet state after removing ``heat_of_process`` [W, negative] sensibly."""
    if heat_of_process > 0.0:
        raise PhysicallyInfeasibleProcessError(
            f"Cooling power must not be positive, got {heat_of_process} W"
        )
    if heat_of_process == 0.0:
        return _dry_cooling_result(inlet_flow, inlet_flow, ProcessMode.FROM_POWER, 0.0)
    if inlet_flow.dry_air_mass_flow == 0.0:
        raise PhysicallyInfeasibleProcessError("Cannot remove heat from a zero air flow")

    inlet = inlet_flow.fluid
    h_out = inlet.specific_enthalpy + heat_of_process / (inlet_flow.dry_air_mass_flow * 1000.0)
    t_out = humid_air.dry_bulb_temperature_from_enthalpy(h_out, inlet.humidity_ratio, inlet.pressure)
    _check_above_dew_point(inlet_flow, t_out)
    outlet = outlet_flow(inlet_flow, t_out, inlet.humidity_ratio)
    return _dry_cooling_result(inlet_flow, outlet, ProcessMode.FROM_POWER, heat_of_process)


class CoolingSolver(ProcessSolver):
    """Solver for real (condensing) cooling requests."""

    def solve(self, process_input: CoolingInput) -> ProcessResult:
        coolant = CoolantData.of(
            process_input.coolant_supply_temperature,
            process_input.coolant_return_temperature,
        )
        inlet_flow = build_flow(process_input.inlet)
        mode = process_input.mode
        if mode == ProcessMode.FROM_POWER:
            return cooling_from_power(inlet_flow, coolant, process_input.target)
        if mode == ProcessMode.FROM_TEMPERATURE:
            return cooling_from_temperature(inlet_flow, coolant, process_input.target)
        return cooling_from_relative_humidity(inlet_flow, coolant, process_input.target)


class DryCoolingSolver(ProcessSolver):
    """Solver for sensible-only cooling requests."""

    def solve(self, process_input: DryCoolingInput) -> ProcessResult:
        mode = process_input.mode
        if mode == ProcessMode.FROM_HUMIDITY:
            raise ArgumentDomainError("Dry cooling keeps the humidity ratio; use from_power or from_temperature")
        inlet_flow = build_flow(process_input.inlet)
        if mode == ProcessMode.FROM_POWER:
            return dry_cooling_from_power(inlet_flow, process_input.target)
        return dry_cooling_from_temperature(inlet_flow, process_input.target)
