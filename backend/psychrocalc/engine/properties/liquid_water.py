"""
Properties of liquid water at atmospheric pressure.
"""

import numpy as np

_CP_LOW = (
    4.219924305,
    -3.400567477e-3,
    1.156152199e-4,
    -2.166932275e-6,
    2.479227180e-8,
    -1.525847751e-10,
    3.93240161e-13,
)
_CP_HIGH = (
    -15.75651097,
    8.093157187e-1,
    -1.370455849e-2,
    1.255841880e-4,
    -6.727469888e-7,
    2.112059173e-9,
    -3.604612987e-12,
    2.588246403e-15,
)
_DENSITY_NUMERATOR = (
    999.83952,
    16.945176,
    -7.9870401e-3,
    -46.170461e-6,
    105.56302e-9,
    -280.54253e-12,
)


def density(temperature: float) -> float:
    """Kell's density correlation [kg/m³]."""
    numerator = np.polynomial.polynomial.polyval(temperature, _DENSITY_NUMERATOR)
    return float(numerator / (1.0 + 16.89785e-3 * temperature))


def specific_heat(temperature: float) -> float:
    coeffs = _CP_LOW if 0.0 < temperature <= 100.0 else _CP_HIGH
    return float(np.polynomial.polynomial.polyval(temperature, coeffs))


def specific_enthalpy(temperature: float) -> float:
    """Enthalpy [kJ/kg] referenced to liquid at 0 °C; zero below freezing."""
    if temperature < 0.0:
        return 0.0
    return temperature * specific_heat(temperature)
