"""
Adiabatic mixing of two or more moist air flows.

Humidity ratio and enthalpy of the outlet are dry-air-mass weighted averages
of the inlets; the outlet dry bulb is recovered from (h, x). The mixed flow
leaves at the highest inlet pressure.
"""

import logging
from typing import Sequence

from psychrocalc.config import ProcessType
from psychrocalc.engine.processes.base import ProcessSolver
from psychrocalc.engine.processes.utils import build_flow
from psychrocalc.engine.properties import humid_air
from psychrocalc.exceptions import ArgumentDomainError
from psychrocalc.models.flows import FlowOfMoistAir
from psychrocalc.models.fluids import MoistAirState
from psychrocalc.models.process import MixingInput, ProcessResult

logger = logging.getLogger(__name__)


def mix_flows(inlet_flow: FlowOfMoistAir, *other_flows: FlowOfMoistAir) -> ProcessResult:
    flows: Sequence[FlowOfMoistAir] = (inlet_flow, *other_flows)
    if len(flows) < 2:
        raise ArgumentDomainError("Mixing needs at least two flows")

    m_da = sum(f.dry_air_mass_flow for f in flows)
    if m_da == 0.0:
        raise ArgumentDomainError("Cannot mix flows with zero total dry air mass flow")

    x_out = sum(f.dry_air_mass_flow * f.fluid.humidity_ratio for f in flows) / m_da
    h_out = sum(f.dry_air_mass_flow * f.fluid.specific_enthalpy for f in flows) / m_da
    pressure = max(f.fluid.pressure for f in flows)

    t_out = humid_air.dry_bulb_temperature_from_enthalpy(h_out, x_out, pressure)
    outlet_state = MoistAirState.of(temperature=t_out, humidity_ratio=x_out, pressure=pressure)
    outlet = FlowOfMoistAir.of_dry_air_mass_flow(outlet_state, m_da)

    logger.debug("Mixed %d flows: %.4f kg/s at %.2f °C, x=%.6f", len(flows), m_da, t_out, x_out)
    return ProcessResult(
        process_type=ProcessType.MIXING,
        inlet_flow=inlet_flow,
        additional_inlet_flows=tuple(other_flows),
        outlet_flow=outlet,
        heat_of_process=0.0,
    )


class MixingSolver(ProcessSolver):
    """Solver for adiabatic mixing requests."""

    def solve(self, process_input: MixingInput) -> ProcessResult:
        flows = [build_flow(f) for f in process_input.flows]
        return mix_flows(*flows)
