"""
psychrocalc configuration and constants.
"""

from enum import Enum


class ProcessType(str, Enum):
    HEATING = "heating"
    COOLING = "cooling"            # real coil, bypass factor model
    DRY_COOLING = "dry_cooling"    # sensible only
    MIXING = "mixing"


class ProcessMode(str, Enum):
    FROM_POWER = "from_power"
    FROM_TEMPERATURE = "from_temperature"
    FROM_HUMIDITY = "from_humidity"


class VapourState(str, Enum):
    UNSATURATED = "unsaturated"
    SATURATED = "saturated"
    WATER_MIST = "water_mist"
    ICE_FOG = "ice_fog"


# Default atmospheric pressure at sea level
DEFAULT_PRESSURE = 101325.0  # Pa

# Validity limits
PRESSURE_MIN = 50_000.0       # Pa
PRESSURE_MAX = 5_000_000.0    # Pa
TEMPERATURE_MIN = -100.0      # °C, lower limit of saturation pressure correlation
TEMPERATURE_MAX = 200.0       # °C
HUMIDITY_RATIO_MAX = 3.0      # kg/kg
MASS_FLOW_MAX = 5.0e9         # kg/s
COOLANT_TEMPERATURE_MIN = 0.0   # °C, exclusive
COOLANT_TEMPERATURE_MAX = 90.0  # °C, exclusive

# Root solver defaults
SOLVER_TOLERANCE = 1e-10
SOLVER_MAX_ITERATIONS = 100
SOLVER_EXPANSION_FACTOR = 1.6
SOLVER_MAX_EXPANSIONS = 60

# Physical constants
WG_RATIO = 18.01528 / 28.96546     # molar mass ratio water / dry air
DRY_AIR_GAS_CONSTANT = 287.055     # J/(kg·K)
WATER_VAPOUR_GAS_CONSTANT = 461.52  # J/(kg·K)
DRY_AIR_SUTHERLAND = 111.0         # K
WATER_VAPOUR_SUTHERLAND = 961.0    # K
HEAT_OF_VAPORIZATION = 2500.9      # kJ/kg at 0 °C
HEAT_OF_ICE_MELT = 334.1           # kJ/kg
KELVIN_OFFSET = 273.15

# Browser origins the HTTP API accepts cross-origin requests from
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
