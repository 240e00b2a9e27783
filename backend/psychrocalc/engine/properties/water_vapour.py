"""
Thermophysical properties of superheated water vapour.
"""

import math

import numpy as np

from psychrocalc.config import (
    HEAT_OF_VAPORIZATION,
    KELVIN_OFFSET,
    WATER_VAPOUR_GAS_CONSTANT,
)

_CONDUCTIVITY_COEFFS = (1.74822e-2, 7.69127e-5, -3.23464e-7, 2.59524e-9, -3.1765e-12)
_CP_LOW = (1.8429999999889115, 4.0000000111904223e-05, -2.7939677238430251e-16)
_CP = (
    1.9295247225621268,
    -9.1586611999057584e-04,
    3.1728684251752865e-06,
    -3.3653682733422277e-09,
    2.0703915723982299e-12,
    -7.0213425618115390e-16,
    9.8631583006961855e-20,
)


def density(temperature: float, pressure: float) -> float:
    return pressure / (WATER_VAPOUR_GAS_CONSTANT * (temperature + KELVIN_OFFSET))


def dynamic_viscosity(temperature: float) -> float:
    tk = temperature + KELVIN_OFFSET
    b = 647.27 / tk
    denominator = 0.0181583 + 0.0177624 * b + 0.0105287 * b**2 - 0.0036744 * b**3
    return math.sqrt(tk / 647.27) / denominator * 1e-6


def kinematic_viscosity(temperature: float, pressure: float) -> float:
    return dynamic_viscosity(temperature) / density(temperature, pressure)


def thermal_conductivity(temperature: float) -> float:
    return float(np.polynomial.polynomial.polyval(temperature, _CONDUCTIVITY_COEFFS))


def specific_heat(temperature: float) -> float:
    """Isobaric specific heat [kJ/(kg·K)], fitted in kelvin."""
    tk = temperature + KELVIN_OFFSET
    coeffs = _CP_LOW if temperature <= -48.15 else _CP
    return float(np.polynomial.polynomial.polyval(tk, coeffs))


def specific_enthalpy(temperature: float) -> float:
    """Enthalpy [kJ/kg] including the latent heat of vaporization at 0 °C."""
    return specific_heat(temperature) * temperature + HEAT_OF_VAPORIZATION
