"""
Real cooling coil model based on the bypass factor.

Air leaving a real coil is a mix of two streams: the part that touched the
coil surface and left at the average wall temperature, and the part that
bypassed the coil unchanged. The bypass factor

    BF = (t_out - t_wall) / (t_in - t_wall)

sets the split. When the wall is colder than the inlet dew point, the
contact stream leaves saturated at the wall temperature and the difference
in humidity ratio is discharged as condensate at the wall temperature.

Three entry modes:
    - target outlet temperature: closed form
    - target outlet relative humidity: root search over the outlet temperature
    - target heat of process: root search over the outlet temperature
"""

import logging
from typing import NamedTuple, Optional

from psychrocalc.engine.properties import humid_air, liquid_water
from psychrocalc.engine.solver import BrentSolver
from psychrocalc.exceptions import ArgumentDomainError, PhysicallyInfeasibleProcessError
from psychrocalc.models.flows import FlowOfMoistAir

logger = logging.getLogger(__name__)

# Above this target RH the outlet is taken at the wall temperature
RH_WALL_FALLBACK = 99.0


class CoilBalance(NamedTuple):
    outlet_temperature: float       # °C
    outlet_humidity_ratio: float    # kg/kg
    condensate_mass_flow: float     # kg/s
    heat_of_process: float          # W, negative for cooling
    bypass_factor: float
    wall_temperature: float         # °C


def coil_bypass_factor(wall_temperature: float, inlet_temperature: float, outlet_temperature: float) -> float:
    """Fraction of air that leaves the coil without touching its surface."""
    if inlet_temperature == wall_temperature:
        raise ArgumentDomainError("Bypass factor is undefined when inlet and wall temperatures are equal")
    return (outlet_temperature - wall_temperature) / (inlet_temperature - wall_temperature)


def condensate_discharge(dry_air_mass_flow: float, inlet_humidity_ratio: float, outlet_humidity_ratio: float) -> float:
    """Condensate mass flow [kg/s] released between two humidity ratios."""
    if inlet_humidity_ratio == 0.0:
        return 0.0
    return dry_air_mass_flow * (inlet_humidity_ratio - outlet_humidity_ratio)


def _check_wall(inlet_flow: FlowOfMoistAir, wall_temperature: float) -> None:
    inlet_temperature = inlet_flow.fluid.temperature
    if wall_temperature >= inlet_temperature:
        raise PhysicallyInfeasibleProcessError(
            f"Coil wall temperature {wall_temperature} °C must be below the inlet "
            f"air temperature {inlet_temperature} °C"
        )


def coil_balance(inlet_flow: FlowOfMoistAir, wall_temperature: float, outlet_temperature: float) -> CoilBalance:
    """Mass and energy balance of the coil for a given outlet temperature."""
    inlet = inlet_flow.fluid
    pressure = inlet.pressure
    m_da = inlet_flow.dry_air_mass_flow

    bypass_factor = coil_bypass_factor(wall_temperature, inlet.temperature, outlet_temperature)
    m_direct = (1.0 - bypass_factor) * m_da
    m_bypass = m_da - m_direct

    if wall_temperature >= inlet.dew_point:
        x_wall = inlet.humidity_ratio
    else:
        x_wall = humid_air.max_humidity_ratio(humid_air.saturation_pressure(wall_temperature), pressure)

    m_condensate = condensate_discharge(m_direct, inlet.humidity_ratio, x_wall)
    h_wall = humid_air.specific_enthalpy(wall_temperature, x_wall, pressure)
    h_condensate = liquid_water.specific_enthalpy(wall_temperature)
    heat_kw = m_direct * (h_wall - inlet.specific_enthalpy) + m_condensate * h_condensate

    if m_da > 0.0:
        x_out = (x_wall * m_direct + inlet.humidity_ratio * m_bypass) / m_da
    else:
        x_out = inlet.humidity_ratio

    return CoilBalance(
        outlet_temperature=outlet_temperature,
        outlet_humidity_ratio=x_out,
        condensate_mass_flow=m_condensate,
        heat_of_process=heat_kw * 1000.0,
        bypass_factor=bypass_factor,
        wall_temperature=wall_temperature,
    )


def cooling_from_temperature(
    inlet_flow: FlowOfMoistAir, wall_temperature: float, outlet_temperature: float
) -> CoilBalance:
    """Closed-form coil balance for a target outlet temperature."""
    _check_wall(inlet_flow, wall_temperature)
    inlet_temperature = inlet_flow.fluid.temperature
    if outlet_temperature > inlet_temperature:
        raise PhysicallyInfeasibleProcessError(
            f"Cooling cannot raise the air temperature: target {outlet_temperature} °C "
            f"is above the inlet {inlet_temperature} °C"
        )
    if outlet_temperature < wall_temperature:
        raise PhysicallyInfeasibleProcessError(
            f"Outlet temperature {outlet_temperature} °C cannot be below the coil wall "
            f"temperature {wall_temperature} °C"
        )
    return coil_balance(inlet_flow, wall_temperature, outlet_temperature)


def cooling_from_relative_humidity(
    inlet_flow: FlowOfMoistAir,
    wall_temperature: float,
    target_relative_humidity: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> CoilBalance:
    """
    Coil balance whose outlet reaches ``target_relative_humidity``.

    Targets above 99% would need an unbounded coil surface; the outlet is
    then taken at the wall temperature.
    """
    humid_air.validate_relative_humidity(target_relative_humidity)
    _check_wall(inlet_flow, wall_temperature)
    inlet = inlet_flow.fluid
    if target_relative_humidity < inlet.relative_humidity:
        raise PhysicallyInfeasibleProcessError(
            f"Cooling cannot lower relative humidity: target {target_relative_humidity}% "
            f"is below the inlet {inlet.relative_humidity:.2f}%"
        )

    if target_relative_humidity > RH_WALL_FALLBACK:
        logger.info(
            "Target RH %.2f%% above %.0f%%, outlet taken at wall temperature %.2f °C",
            target_relative_humidity, RH_WALL_FALLBACK, wall_temperature,
        )
        return coil_balance(inlet_flow, wall_temperature, wall_temperature)

    pressure = inlet.pressure

    def rh_difference(outlet_temperature: float) -> float:
        balance = coil_balance(inlet_flow, wall_temperature, outlet_temperature)
        rh = humid_air.relative_humidity(outlet_temperature, balance.outlet_humidity_ratio, pressure)
        return rh - target_relative_humidity

    reachable = rh_difference(wall_temperature)
    if reachable < 0.0:
        raise PhysicallyInfeasibleProcessError(
            f"Target RH {target_relative_humidity}% is above the "
            f"{reachable + target_relative_humidity:.2f}% reachable at wall temperature "
            f"{wall_temperature} °C"
        )

    solver = solver if solver is not None else BrentSolver("coil_outlet_from_rh")
    outlet_temperature = solver.find_root(rh_difference, wall_temperature, inlet.temperature)
    return coil_balance(inlet_flow, wall_temperature, outlet_temperature)


def cooling_from_power(
    inlet_flow: FlowOfMoistAir,
    wall_temperature: float,
    heat_of_process: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> CoilBalance:
    """Coil balance that removes ``heat_of_process`` [W, negative]."""
    if heat_of_process > 0.0:
        raise PhysicallyInfeasibleProcessError(
            f"Cooling power must not be positive, got {heat_of_process} W"
        )
    _check_wall(inlet_flow, wall_temperature)
    inlet_temperature = inlet_flow.fluid.temperature
    if heat_of_process == 0.0:
        return coil_balance(inlet_flow, wall_temperature, inlet_temperature)

    max_cooling = coil_balance(inlet_flow, wall_temperature, wall_temperature).heat_of_process
    if heat_of_process < max_cooling:
        raise PhysicallyInfeasibleProcessError(
            f"Requested cooling {heat_of_process:.1f} W exceeds the coil limit "
            f"{max_cooling:.1f} W at wall temperature {wall_temperature} °C"
        )

    solver = solver if solver is not None else BrentSolver("coil_outlet_from_power")
    outlet_temperature = solver.find_root(
        lambda t: coil_balance(inlet_flow, wall_temperature, t).heat_of_process - heat_of_process,
        wall_temperature,
        inlet_temperature,
    )
    return coil_balance(inlet_flow, wall_temperature, outlet_temperature)
