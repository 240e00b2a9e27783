"""
Sensible heating of a moist air flow.

Heating never changes the humidity ratio, so every mode reduces to finding
the outlet dry bulb at the inlet humidity ratio:
  - FROM_POWER: outlet enthalpy from the energy balance, then dry bulb from (h, x)
  - FROM_TEMPERATURE: outlet dry bulb given, heat from the enthalpy difference
  - FROM_HUMIDITY: outlet dry bulb from (x, RH), heat from the enthalpy difference
"""

import logging

from psychrocalc.config import ProcessMode, ProcessType
from psychrocalc.engine.processes.base import ProcessSolver
from psychrocalc.engine.processes.utils import (
    build_flow,
    heat_between,
    outlet_flow,
    outlet_temperature_limit,
)
from psychrocalc.engine.properties import humid_air
from psychrocalc.exceptions import ArgumentDomainError, PhysicallyInfeasibleProcessError
from psychrocalc.models.flows import FlowOfMoistAir
from psychrocalc.models.process import HeatingInput, ProcessResult

logger = logging.getLogger(__name__)


def _result(inlet_flow: FlowOfMoistAir, outlet: FlowOfMoistAir, mode: ProcessMode, heat: float) -> ProcessResult:
    logger.debug(
        "Heating %s: %.2f °C -> %.2f °C, %.1f W",
        mode.value, inlet_flow.fluid.temperature, outlet.fluid.temperature, heat,
    )
    return ProcessResult(
        process_type=ProcessType.HEATING,
        process_mode=mode,
        inlet_flow=inlet_flow,
        outlet_flow=outlet,
        heat_of_process=heat,
    )


def heating_from_power(inlet_flow: FlowOfMoistAir, heat_of_process: float) -> ProcessResult:
    """Outlet state reached by adding ``heat_of_process`` [W] to the flow."""
    if heat_of_process < 0.0:
        raise PhysicallyInfeasibleProcessError(
            f"Heating power must not be negative, got {heat_of_process} W"
        )
    inlet = inlet_flow.fluid
    if heat_of_process == 0.0:
        return _result(inlet_flow, inlet_flow, ProcessMode.FROM_POWER, 0.0)
    if inlet_flow.dry_air_mass_flow == 0.0:
        raise PhysicallyInfeasibleProcessError("Cannot deliver heating power to a zero air flow")

    x = inlet.humidity_ratio
    pressure = inlet.pressure
    h_out = inlet.specific_enthalpy + heat_of_process / (inlet_flow.dry_air_mass_flow * 1000.0)

    t_limit = outlet_temperature_limit(pressure)
    h_limit = humid_air.specific_enthalpy(t_limit, x, pressure)
    if h_out > h_limit:
        max_power = (h_limit - inlet.specific_enthalpy) * inlet_flow.dry_air_mass_flow * 1000.0
        raise PhysicallyInfeasibleProcessError(
            f"Heating power {heat_of_process:.1f} W exceeds {max_power:.1f} W, which "
            f"already brings the air to the {t_limit:.2f} °C limit"
        )

    t_out = humid_air.dry_bulb_temperature_from_enthalpy(h_out, x, pressure)
    outlet = outlet_flow(inlet_flow, t_out, x)
    return _result(inlet_flow, outlet, ProcessMode.FROM_POWER, heat_of_process)


def heating_from_temperature(inlet_flow: FlowOfMoistAir, target_temperature: float) -> ProcessResult:
    inlet = inlet_flow.fluid
    if target_temperature < inlet.temperature:
        raise PhysicallyInfeasibleProcessError(
            f"Heating cannot lower the air temperature: target {target_temperature} °C "
            f"is below the inlet {inlet.temperature} °C"
        )
    t_limit = outlet_temperature_limit(inlet.pressure)
    if target_temperature > t_limit:
        raise ArgumentDomainError(
            f"Target temperature {target_temperature} °C exceeds the {t_limit:.2f} °C "
            f"limit at {inlet.pressure} Pa"
        )
    outlet = outlet_flow(inlet_flow, target_temperature, inlet.humidity_ratio)
    return _result(inlet_flow, outlet, ProcessMode.FROM_TEMPERATURE, heat_between(inlet_flow, outlet))


def heating_from_relative_humidity(inlet_flow: FlowOfMoistAir, target_relative_humidity: float) -> ProcessResult:
    humid_air.validate_relative_humidity(target_relative_humidity)
    inlet = inlet_flow.fluid
    if target_relative_humidity > inlet.relative_humidity:
        raise PhysicallyInfeasibleProcessError(
            f"Heating cannot raise relative humidity: target {target_relative_humidity}% "
            f"is above the inlet {inlet.relative_humidity:.2f}%"
        )
    if inlet.humidity_ratio == 0.0:
        raise ArgumentDomainError("Relative humidity of dry air stays 0% at any temperature")
    if target_relative_humidity == 0.0:
        raise PhysicallyInfeasibleProcessError("Heating cannot bring moist air to 0% relative humidity")
    if target_relative_humidity == inlet.relative_humidity:
        return _result(inlet_flow, inlet_flow, ProcessMode.FROM_HUMIDITY, 0.0)

    t_out = humid_air.dry_bulb_temperature_from_humidity_ratio(
        inlet.humidity_ratio, target_relative_humidity, inlet.pressure
    )
    t_limit = outlet_temperature_limit(inlet.pressure)
    if t_out > t_limit:
        raise PhysicallyInfeasibleProcessError(
            f"Reaching {target_relative_humidity}% needs {t_out:.2f} °C, above the "
            f"{t_limit:.2f} °C limit"
        )
    outlet = outlet_flow(inlet_flow, t_out, inlet.humidity_ratio)
    return _result(inlet_flow, outlet, ProcessMode.FROM_HUMIDITY, heat_between(inlet_flow, outlet))


class HeatingSolver(ProcessSolver):
    """Solver for heating requests."""

    def solve(self, process_input: HeatingInput) -> ProcessResult:
        inlet_flow = build_flow(process_input.inlet)
        mode = process_input.mode
        if mode == ProcessMode.FROM_POWER:
            return heating_from_power(inlet_flow, process_input.target)
        if mode == ProcessMode.FROM_TEMPERATURE:
            return heating_from_temperature(inlet_flow, process_input.target)
        return heating_from_relative_humidity(inlet_flow, process_input.target)
