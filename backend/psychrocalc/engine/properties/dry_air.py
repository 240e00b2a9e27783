"""
Thermophysical properties of dry air.

Temperatures in °C, pressures in Pa. Specific heat and enthalpy in kJ/kg
units, viscosity in Pa·s, conductivity in W/(m·K).
"""

import numpy as np

from psychrocalc.config import DRY_AIR_GAS_CONSTANT, KELVIN_OFFSET

_VISCOSITY_COEFFS = (0.40401, 0.074582, -5.7171e-5, 2.9928e-8, -6.2524e-12)
_CONDUCTIVITY_COEFFS = (2.43714e-2, 7.83035e-5, -1.94021e-8, 2.85943e-12, -2.61420e-14)

# Specific heat fits, ascending powers of t [°C]
_CP_MID = (
    1.0036104793123004,
    5.2562229415778261e-05,
    2.9091167529181888e-07,
    -1.3405671294850166e-08,
    1.3020833332371173e-10,
)
_CP_HIGH = (
    1.0065876262557212,
    -2.9062712816134989e-05,
    7.4445335877306371e-07,
    -8.4171864437938596e-10,
    3.0582028042912701e-13,
)


def density(temperature: float, pressure: float) -> float:
    """Ideal gas density [kg/m³]."""
    return pressure / (DRY_AIR_GAS_CONSTANT * (temperature + KELVIN_OFFSET))


def dynamic_viscosity(temperature: float) -> float:
    tk = temperature + KELVIN_OFFSET
    return float(np.polynomial.polynomial.polyval(tk, _VISCOSITY_COEFFS)) * 1e-6


def kinematic_viscosity(temperature: float, pressure: float) -> float:
    return dynamic_viscosity(temperature) / density(temperature, pressure)


def thermal_conductivity(temperature: float) -> float:
    return float(np.polynomial.polynomial.polyval(temperature, _CONDUCTIVITY_COEFFS))


def specific_heat(temperature: float) -> float:
    """Isobaric specific heat [kJ/(kg·K)], piecewise over the temperature range."""
    if temperature <= -73.15:
        return 1.002
    if temperature <= -53.15:
        return float(np.interp(temperature, [-73.15, -53.15], [1.002, 1.003]))
    if temperature <= -13.15:
        return 1.003
    coeffs = _CP_MID if temperature <= 86.85 else _CP_HIGH
    return float(np.polynomial.polynomial.polyval(temperature, coeffs))


def specific_enthalpy(temperature: float) -> float:
    """Specific enthalpy [kJ/kg] referenced to 0 °C."""
    return specific_heat(temperature) * temperature
