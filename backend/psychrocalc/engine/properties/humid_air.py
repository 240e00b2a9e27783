"""
Moist air property equations.

Closed-form quantities (humidity ratio, density, viscosity, conductivity,
specific heat, enthalpy) are evaluated directly. Quantities without a closed
inverse (saturation pressure, dew point at low humidity, wet bulb and every
dry-bulb recovery) start from a cheap empirical estimate and are refined by a
BrentSolver against the exact relation.

Units: temperature °C, pressure Pa, relative humidity %, humidity ratio
kg/kg, enthalpy kJ/kg, specific heat kJ/(kg·K).

Every solver-backed function accepts an optional ``solver``; when omitted a
new BrentSolver is built for that call. Nested solves always get their own
instance.
"""

import math
from typing import Optional

from psychrocalc.config import (
    HUMIDITY_RATIO_MAX,
    KELVIN_OFFSET,
    PRESSURE_MAX,
    PRESSURE_MIN,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
    VapourState,
    WATER_VAPOUR_SUTHERLAND,
    DRY_AIR_SUTHERLAND,
    WG_RATIO,
)
from psychrocalc.engine.properties import dry_air, ice, liquid_water, water_vapour
from psychrocalc.engine.solver import BrentSolver
from psychrocalc.exceptions import ArgumentDomainError, require

# Hyland-Wexler coefficients, over ice (t < 0 °C) and over water (t >= 0 °C)
_ICE_COEFFS = (
    -5.6745359e03, 6.3925247, -9.6778430e-03, 6.2215701e-07,
    2.0747825e-09, -9.4840240e-13, 4.1635019,
)
_WATER_COEFFS = (
    -5.8002206e03, 1.3914993, -4.8640239e-02, 4.1764768e-05,
    -1.4452093e-08, 6.5459673,
)

_TIGHT_TOLERANCE = 1e-12
_CEILING_MARGIN = 1e-3  # K below the boiling point at a given pressure
_EXPLICIT_DEW_POINT_RH = 25.0  # % RH from which the Arden-Buck inverse is used directly


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def validate_pressure(pressure: float) -> None:
    require(
        PRESSURE_MIN <= pressure <= PRESSURE_MAX,
        f"Absolute pressure {pressure} Pa is outside [{PRESSURE_MIN}, {PRESSURE_MAX}] Pa",
    )


def validate_relative_humidity(relative_humidity: float) -> None:
    require(
        0.0 <= relative_humidity <= 100.0,
        f"Relative humidity {relative_humidity}% is outside [0, 100]%",
    )


def validate_humidity_ratio(humidity_ratio: float) -> None:
    require(
        0.0 <= humidity_ratio <= HUMIDITY_RATIO_MAX,
        f"Humidity ratio {humidity_ratio} kg/kg is outside [0, {HUMIDITY_RATIO_MAX}] kg/kg",
    )


def validate_temperature(temperature: float) -> None:
    require(
        TEMPERATURE_MIN <= temperature <= TEMPERATURE_MAX,
        f"Temperature {temperature} °C is outside [{TEMPERATURE_MIN}, {TEMPERATURE_MAX}] °C",
    )


def _solver(name: str, solver: Optional[BrentSolver], **kwargs) -> BrentSolver:
    return solver if solver is not None else BrentSolver(name, **kwargs)


def _estimate_bracket(estimate: float, lower: float, upper: float, half_width: float = 1.0):
    """Starting pair centred on ``estimate`` and kept inside ``[lower, upper]``."""
    if upper - lower <= 2.0 * half_width:
        return lower, upper
    centre = min(max(estimate, lower + half_width), upper - half_width)
    return centre - half_width, centre + half_width


def _arden_buck_alpha(temperature: float) -> float:
    if temperature > 0.0:
        b, c, d = 18.678, 257.14, 234.50
    else:
        b, c, d = 23.036, 279.82, 333.70
    return (b - temperature / d) * (temperature / (c + temperature))


# ---------------------------------------------------------------------------
# Saturation, humidity ratio and relative humidity
# ---------------------------------------------------------------------------

def saturation_pressure(temperature: float, *, solver: Optional[BrentSolver] = None) -> float:
    """
    Saturation pressure of water vapour [Pa] over ice (t < 0) or water.

    The Hyland-Wexler relation is implicit in ln(ps); the Arden-Buck value
    seeds the bracket.
    """
    validate_temperature(temperature)
    tk = temperature + KELVIN_OFFSET

    if temperature < 0.0:
        c1, c2, c3, c4, c5, c6, c7 = _ICE_COEFFS
        rhs = c1 / tk + c2 + c3 * tk + c4 * tk**2 + c5 * tk**3 + c6 * tk**4 + c7 * math.log(tk)
        a = 6.1115
    else:
        c8, c9, c10, c11, c12, c13 = _WATER_COEFFS
        rhs = c8 / tk + c9 + c10 * tk + c11 * tk**2 + c12 * tk**3 + c13 * math.log(tk)
        a = 6.1121

    n = 1.1 if temperature > 50.0 else 1.0
    estimate = a * math.exp(_arden_buck_alpha(temperature)) * 100.0

    solver = _solver("saturation_pressure", solver)
    return solver.find_root_from_estimate(
        lambda ps: math.log(ps) - rhs,
        estimate * 0.8,
        estimate * 1.01 * n,
        lower_bound=estimate * 1e-3,
    )


def saturation_pressure_from_humidity(
    humidity_ratio: float, relative_humidity: float, pressure: float
) -> float:
    """Saturation pressure [Pa] implied by humidity ratio and relative humidity."""
    validate_humidity_ratio(humidity_ratio)
    validate_relative_humidity(relative_humidity)
    validate_pressure(pressure)
    require(relative_humidity > 0.0, "Relative humidity must be positive to imply a saturation pressure")
    phi = relative_humidity / 100.0
    return humidity_ratio * pressure / (WG_RATIO * phi + humidity_ratio * phi)


def humidity_ratio(relative_humidity: float, saturation_pressure: float, pressure: float) -> float:
    """Humidity ratio [kg/kg] from relative humidity and saturation pressure."""
    validate_relative_humidity(relative_humidity)
    validate_pressure(pressure)
    if relative_humidity == 0.0:
        return 0.0
    vapour_pressure = relative_humidity / 100.0 * saturation_pressure
    if pressure <= vapour_pressure:
        raise ArgumentDomainError(
            f"Absolute pressure {pressure} Pa must exceed the vapour pressure "
            f"{vapour_pressure:.2f} Pa"
        )
    return WG_RATIO * vapour_pressure / (pressure - vapour_pressure)


def max_humidity_ratio(saturation_pressure: float, pressure: float) -> float:
    return humidity_ratio(100.0, saturation_pressure, pressure)


def relative_humidity(temperature: float, humidity_ratio: float, pressure: float) -> float:
    """Relative humidity [%] of air at (t, x, p), capped at 100 for fog."""
    validate_humidity_ratio(humidity_ratio)
    validate_pressure(pressure)
    if humidity_ratio == 0.0:
        return 0.0
    ps = saturation_pressure(temperature)
    phi = humidity_ratio * pressure / (WG_RATIO * ps + humidity_ratio * ps)
    return 100.0 if phi > 1.0 else phi * 100.0


def relative_humidity_from_dew_point(dew_point: float, temperature: float) -> float:
    """Relative humidity [%] from the Arden-Buck ratio of dew point and dry bulb."""
    return math.exp(_arden_buck_alpha(dew_point) - _arden_buck_alpha(temperature)) * 100.0


# ---------------------------------------------------------------------------
# Dew point and wet bulb
# ---------------------------------------------------------------------------

def dew_point_temperature(
    temperature: float,
    relative_humidity: float,
    pressure: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> float:
    """
    Dew point [°C]. Returns the dry bulb at saturation and -inf for bone dry air.

    Below 25% RH the Arden-Buck inverse loses accuracy, so the dew point is
    solved from equal humidity ratios at saturation instead. A solved dew point
    below the lowest supported temperature raises ArgumentDomainError.
    """
    validate_temperature(temperature)
    validate_relative_humidity(relative_humidity)
    validate_pressure(pressure)
    if relative_humidity >= 100.0:
        return temperature
    if relative_humidity == 0.0:
        return -math.inf

    if temperature > 0.0:
        b, c, d = 18.678, 257.14, 234.50
    else:
        b, c, d = 23.036, 279.82, 333.70
    a = 2.0 / d
    beta = math.log(relative_humidity / 100.0) + _arden_buck_alpha(temperature)
    b_trh = b - beta
    c_trh = -c * beta
    estimate = 1.0 / a * (b_trh - math.sqrt(b_trh * b_trh + 2.0 * a * c_trh))

    if relative_humidity >= _EXPLICIT_DEW_POINT_RH:
        return estimate

    ps = saturation_pressure(temperature)
    x = humidity_ratio(relative_humidity, ps, pressure)
    if x < _floor_humidity_ratio(pressure):
        raise ArgumentDomainError(
            f"Dew point of air at {temperature} °C and {relative_humidity}% RH "
            f"lies below {TEMPERATURE_MIN} °C"
        )
    upper = _saturable_upper_bound(temperature, ps, pressure)
    tolerance = {"tolerance": _TIGHT_TOLERANCE} if relative_humidity < 1.0 else {}
    solver = _solver("dew_point_temperature", solver, **tolerance)
    x1, x2 = _estimate_bracket(estimate, TEMPERATURE_MIN, upper)
    return solver.find_root_from_estimate(
        lambda t: max_humidity_ratio(saturation_pressure(t), pressure) / x - 1.0,
        x1, x2,
        lower_bound=TEMPERATURE_MIN,
        upper_bound=upper,
    )


def wet_bulb_temperature(
    temperature: float,
    relative_humidity: float,
    pressure: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> float:
    """
    Thermodynamic wet-bulb temperature [°C] from the adiabatic saturation balance.

    Seeded by Stull's empirical fit.
    """
    validate_relative_humidity(relative_humidity)
    validate_pressure(pressure)
    if relative_humidity >= 100.0:
        return temperature

    rh = relative_humidity
    estimate = (
        temperature * math.atan(0.151977 * math.sqrt(rh + 8.313659))
        + math.atan(temperature + rh)
        - math.atan(rh - 1.676331)
        + 0.00391838 * rh**1.5 * math.atan(0.023101 * rh)
        - 4.686035
    )

    ps = saturation_pressure(temperature)
    x = humidity_ratio(rh, ps, pressure)
    h = specific_enthalpy(temperature, x, pressure)
    upper = _saturable_upper_bound(temperature, ps, pressure)

    def balance(t: float) -> float:
        x_sat = max_humidity_ratio(saturation_pressure(t), pressure)
        h_sat = specific_enthalpy(t, x_sat, pressure)
        h_water = ice.specific_enthalpy(t) if t <= 0.0 else liquid_water.specific_enthalpy(t)
        return h + (x_sat - x) * h_water - h_sat

    # Air saturated near the floor holds under 1e-8 kg/kg, so the depression there is below 1e-4 K
    if upper - TEMPERATURE_MIN < 1.0 and balance(TEMPERATURE_MIN) <= 0.0:
        return TEMPERATURE_MIN

    solver = _solver("wet_bulb_temperature", solver)
    x1, x2 = _estimate_bracket(estimate, TEMPERATURE_MIN, upper)
    return solver.find_root_from_estimate(
        balance, x1, x2, lower_bound=TEMPERATURE_MIN, upper_bound=upper
    )


# ---------------------------------------------------------------------------
# Transport and caloric properties
# ---------------------------------------------------------------------------

def density(temperature: float, humidity_ratio: float, pressure: float) -> float:
    """Moist air density [kg/m³] per unit volume of mixture, dry air basis."""
    validate_humidity_ratio(humidity_ratio)
    validate_pressure(pressure)
    if humidity_ratio == 0.0:
        return dry_air.density(temperature, pressure)
    tk = temperature + KELVIN_OFFSET
    return 1.0 / ((0.2871 * tk * (1.0 + 1.6078 * humidity_ratio)) / (pressure / 1000.0))


def dynamic_viscosity(temperature: float, humidity_ratio: float) -> float:
    """Mixture dynamic viscosity [Pa·s] with Wilke interaction terms."""
    validate_humidity_ratio(humidity_ratio)
    mu_da = dry_air.dynamic_viscosity(temperature)
    if humidity_ratio == 0.0:
        return mu_da
    mu_wv = water_vapour.dynamic_viscosity(temperature)
    xm = 1.61 * humidity_ratio
    fi_av = (1.0 + math.sqrt(mu_da / mu_wv) * WG_RATIO**0.25) ** 2 / (
        2.0 * math.sqrt(2.0) * math.sqrt(1.0 + 1.0 / WG_RATIO)
    )
    fi_va = (1.0 + math.sqrt(mu_wv / mu_da) * (1.0 / WG_RATIO) ** 0.25) ** 2 / (
        2.0 * math.sqrt(2.0) * math.sqrt(1.0 + WG_RATIO)
    )
    return mu_da / (1.0 + fi_av * xm) + mu_wv / (1.0 + fi_va / xm)


def kinematic_viscosity(temperature: float, humidity_ratio: float, density: float) -> float:
    return dynamic_viscosity(temperature, humidity_ratio) / density


def thermal_conductivity(temperature: float, humidity_ratio: float) -> float:
    """Mixture thermal conductivity [W/(m·K)] with Sutherland interaction terms."""
    validate_humidity_ratio(humidity_ratio)
    k_da = dry_air.thermal_conductivity(temperature)
    if humidity_ratio == 0.0:
        return k_da

    mu_da = dry_air.dynamic_viscosity(temperature)
    mu_wv = water_vapour.dynamic_viscosity(temperature)
    k_wv = water_vapour.thermal_conductivity(temperature)
    tk = temperature + KELVIN_OFFSET
    s_da, s_wv = DRY_AIR_SUTHERLAND, WATER_VAPOUR_SUTHERLAND
    s_av = 0.733 * math.sqrt(s_da * s_wv)
    xm = 1.61 * humidity_ratio

    alpha_av = (mu_da / mu_wv) * WG_RATIO**0.75 * ((1.0 + s_da / tk) / (1.0 + s_wv / tk))
    alpha_va = (mu_wv / mu_da) * WG_RATIO**0.75 * ((1.0 + s_wv / tk) / (1.0 + s_da / tk))
    beta_av = (1.0 + s_av / tk) / (1.0 + s_da / tk)
    beta_va = (1.0 + s_av / tk) / (1.0 + s_wv / tk)
    a_av = 0.25 * (1.0 + alpha_av) ** 2 * beta_av
    a_va = 0.25 * (1.0 + alpha_va) ** 2 * beta_va
    return k_da / (1.0 + a_av * xm) + k_wv / (1.0 + a_va / xm)


def thermal_diffusivity(density: float, thermal_conductivity: float, specific_heat: float) -> float:
    """Thermal diffusivity [m²/s]; specific heat in kJ/(kg·K)."""
    return thermal_conductivity / (density * specific_heat * 1000.0)


def prandtl_number(dynamic_viscosity: float, thermal_conductivity: float, specific_heat: float) -> float:
    return dynamic_viscosity * specific_heat * 1000.0 / thermal_conductivity


def specific_heat(temperature: float, humidity_ratio: float) -> float:
    validate_humidity_ratio(humidity_ratio)
    return dry_air.specific_heat(temperature) + humidity_ratio * water_vapour.specific_heat(temperature)


def specific_enthalpy(temperature: float, humidity_ratio: float, pressure: float) -> float:
    """
    Specific enthalpy [kJ/kg dry air].

    Three regimes: unsaturated air (x <= x_max), water mist (x > x_max,
    t > 0) and ice fog (x > x_max, t <= 0). The condensed excess carries the
    enthalpy of liquid water or ice at the air temperature.
    """
    validate_humidity_ratio(humidity_ratio)
    validate_pressure(pressure)
    h_da = dry_air.specific_enthalpy(temperature)
    if humidity_ratio == 0.0:
        return h_da

    ps = saturation_pressure(temperature)
    h_wv = water_vapour.specific_enthalpy(temperature)
    # Above the boiling point at this pressure the air cannot saturate
    if ps >= pressure:
        return h_da + humidity_ratio * h_wv
    x_max = max_humidity_ratio(ps, pressure)
    if humidity_ratio <= x_max:
        return h_da + humidity_ratio * h_wv

    excess = humidity_ratio - x_max
    if temperature > 0.0:
        h_condensed = liquid_water.specific_enthalpy(temperature)
    else:
        h_condensed = ice.specific_enthalpy(temperature)
    return h_da + x_max * h_wv + excess * h_condensed


def vapour_state(temperature: float, humidity_ratio: float, max_humidity_ratio: float) -> VapourState:
    if math.isclose(humidity_ratio, max_humidity_ratio, rel_tol=1e-9):
        return VapourState.SATURATED
    if humidity_ratio > max_humidity_ratio:
        return VapourState.WATER_MIST if temperature > 0.0 else VapourState.ICE_FOG
    return VapourState.UNSATURATED


# ---------------------------------------------------------------------------
# Dry-bulb temperature recovered from other quantities
# ---------------------------------------------------------------------------

def _saturation_temperature(vapour_pressure: float) -> float:
    """Temperature at which saturation pressure equals ``vapour_pressure``, capped at the range limit."""
    if vapour_pressure >= saturation_pressure(TEMPERATURE_MAX):
        return TEMPERATURE_MAX
    return _solve_saturation_temperature(vapour_pressure, BrentSolver("saturation_temperature"))


def _solve_saturation_temperature(vapour_pressure: float, solver: BrentSolver) -> float:
    # Magnus inverse as the starting point
    log_ratio = math.log(vapour_pressure / 610.94)
    estimate = 243.04 * log_ratio / (17.625 - log_ratio)
    x1, x2 = _estimate_bracket(estimate, TEMPERATURE_MIN, TEMPERATURE_MAX)
    return solver.find_root_from_estimate(
        lambda t: math.log(vapour_pressure) - math.log(saturation_pressure(t)),
        x1, x2,
        lower_bound=TEMPERATURE_MIN,
        upper_bound=TEMPERATURE_MAX,
    )


def _temperature_ceiling(vapour_pressure: float) -> float:
    ceiling = _saturation_temperature(vapour_pressure)
    return ceiling if ceiling >= TEMPERATURE_MAX else ceiling - _CEILING_MARGIN


def _saturable_upper_bound(temperature: float, ps: float, pressure: float) -> float:
    """Search ceiling for saturated states: the dry bulb, or just below boiling when that is lower."""
    if ps < pressure:
        return temperature
    return min(temperature, _temperature_ceiling(pressure))


def _floor_humidity_ratio(pressure: float) -> float:
    """Humidity ratio of air saturated at the lowest supported temperature."""
    return max_humidity_ratio(saturation_pressure(TEMPERATURE_MIN), pressure)


def dry_bulb_temperature_max(pressure: float, *, solver: Optional[BrentSolver] = None) -> float:
    """Highest dry bulb [°C] for moist air at ``pressure``: where ps(t) equals p."""
    validate_pressure(pressure)
    if pressure > saturation_pressure(TEMPERATURE_MAX):
        raise ArgumentDomainError(
            f"Pressure {pressure} Pa exceeds the saturation pressure at {TEMPERATURE_MAX} °C"
        )
    log_p = math.log(0.001638 * pressure)
    estimate = -237300.0 * log_p / (1000.0 * log_p - 17269.0)
    solver = _solver("dry_bulb_temperature_max", solver)
    x1, x2 = _estimate_bracket(estimate, TEMPERATURE_MIN, TEMPERATURE_MAX)
    return solver.find_root_from_estimate(
        lambda t: pressure - saturation_pressure(t),
        x1, x2,
        lower_bound=TEMPERATURE_MIN,
        upper_bound=TEMPERATURE_MAX,
    )


def dry_bulb_temperature_from_enthalpy(
    enthalpy: float,
    humidity_ratio: float,
    pressure: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> float:
    """Dry bulb [°C] whose specific enthalpy at (x, p) equals ``enthalpy``."""
    validate_humidity_ratio(humidity_ratio)
    validate_pressure(pressure)
    ceiling = _temperature_ceiling(pressure)
    estimate = (enthalpy - 2500.9 * humidity_ratio) / (1.005 + 1.86 * humidity_ratio)
    x1, x2 = _estimate_bracket(estimate, TEMPERATURE_MIN, ceiling)
    solver = _solver("dry_bulb_temperature_from_enthalpy", solver)
    return solver.find_root_from_estimate(
        lambda t: enthalpy - specific_enthalpy(t, humidity_ratio, pressure),
        x1, x2,
        lower_bound=TEMPERATURE_MIN,
        upper_bound=ceiling,
    )


def dry_bulb_temperature_from_humidity_ratio(
    humidity_ratio: float,
    relative_humidity: float,
    pressure: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> float:
    """Dry bulb [°C] at which air with humidity ratio x has relative humidity RH."""
    require(humidity_ratio > 0.0, "Humidity ratio must be positive to recover a dry bulb temperature")
    target = saturation_pressure_from_humidity(humidity_ratio, relative_humidity, pressure)
    if not saturation_pressure(TEMPERATURE_MIN) <= target <= saturation_pressure(TEMPERATURE_MAX):
        raise ArgumentDomainError(
            f"Implied saturation pressure {target:.4g} Pa is outside the correlation range"
        )
    return _solve_saturation_temperature(
        target, _solver("dry_bulb_temperature_from_humidity_ratio", solver)
    )


def dry_bulb_temperature_from_dew_point(
    dew_point: float,
    relative_humidity: float,
    pressure: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> float:
    """
    Dry bulb [°C] whose dew point at RH equals ``dew_point``.

    RH = 100 returns the dew point itself; RH = 0 returns +inf.
    """
    validate_relative_humidity(relative_humidity)
    validate_pressure(pressure)
    if relative_humidity >= 100.0:
        return dew_point
    if relative_humidity == 0.0:
        return math.inf

    solved = relative_humidity < _EXPLICIT_DEW_POINT_RH
    if solved:
        validate_temperature(dew_point)
    x_floor = _floor_humidity_ratio(pressure)

    def objective(t: float) -> float:
        if solved and humidity_ratio(relative_humidity, saturation_pressure(t), pressure) < x_floor:
            # Dew point of the candidate is under the floor, so under the target
            return dew_point - TEMPERATURE_MIN + 1.0
        return dew_point - dew_point_temperature(t, relative_humidity, pressure)

    phi_8 = (relative_humidity / 100.0) ** 0.125
    estimate = (dew_point - 112.0 * phi_8 + 112.0) / (0.9 * phi_8 + 0.1)
    lower = max(dew_point, TEMPERATURE_MIN)
    ceiling = _temperature_ceiling(pressure * 100.0 / relative_humidity)
    x1, x2 = _estimate_bracket(estimate, lower, ceiling)
    solver = _solver("dry_bulb_temperature_from_dew_point", solver)
    return solver.find_root_from_estimate(
        objective, x1, x2, lower_bound=lower, upper_bound=ceiling
    )


def dry_bulb_temperature_from_wet_bulb(
    wet_bulb: float,
    relative_humidity: float,
    pressure: float,
    *,
    solver: Optional[BrentSolver] = None,
) -> float:
    """Dry bulb [°C] whose wet bulb at RH equals ``wet_bulb``."""
    validate_relative_humidity(relative_humidity)
    validate_pressure(pressure)
    if relative_humidity >= 100.0:
        return wet_bulb

    ceiling = _temperature_ceiling(pressure * 100.0 / max(relative_humidity, 1e-9))
    upper = min(wet_bulb + 5.0, ceiling)
    solver = _solver("dry_bulb_temperature_from_wet_bulb", solver)
    return solver.find_root_from_estimate(
        lambda t: wet_bulb - wet_bulb_temperature(t, relative_humidity, pressure),
        wet_bulb, upper,
        lower_bound=wet_bulb,
        upper_bound=ceiling,
    )
