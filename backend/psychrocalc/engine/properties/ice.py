"""
Properties of water ice.
"""

import numpy as np

from psychrocalc.config import HEAT_OF_ICE_MELT

_CP_COEFFS = (2.0509727263, 0.0048764802, -0.0000277225, -0.0000001031)
_CONDUCTIVITY_COEFFS = (2.2173524402158, -0.0069168602852, 0.0001016721167, 0.0000004456743)
_DENSITY_COEFFS = (
    916.1204382651714,
    -0.42803436487679,
    -0.02237994685111,
    -0.00061508830263,
    -0.00000784399543,
    -0.00000003790984,
    0.00000000005916,
    0.00000000000078,
)


def density(temperature: float) -> float:
    return float(np.polynomial.polynomial.polyval(temperature, _DENSITY_COEFFS))


def specific_heat(temperature: float) -> float:
    return float(np.polynomial.polynomial.polyval(temperature, _CP_COEFFS))


def thermal_conductivity(temperature: float) -> float:
    return float(np.polynomial.polynomial.polyval(temperature, _CONDUCTIVITY_COEFFS))


def specific_enthalpy(temperature: float) -> float:
    """Enthalpy [kJ/kg] relative to liquid water at 0 °C; zero above freezing."""
    if temperature > 0.0:
        return 0.0
    return temperature * specific_heat(temperature) - HEAT_OF_ICE_MELT
