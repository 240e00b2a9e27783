"""
Tests for the cooling processes.

Summer case: 1 kg/s of dry air at 34 °C / 40% and 100 kPa cooled by a coil
fed with 9/14 °C coolant. Covers real cooling in all three modes, the
high-RH warning, dry cooling, and the solver dispatch.
"""

import pytest

from psychrocalc.config import ProcessMode, ProcessType
from psychrocalc.engine.processes.cooling import (
    CoolingSolver,
    DryCoolingSolver,
    cooling_from_power,
    cooling_from_relative_humidity,
    cooling_from_temperature,
    dry_cooling_from_power,
    dry_cooling_from_temperature,
)
from psychrocalc.exceptions import ArgumentDomainError, PhysicallyInfeasibleProcessError
from psychrocalc.models.flows import FlowOfMoistAir
from psychrocalc.models.fluids import MoistAirState
from psychrocalc.models.moist_air import MoistAirInput
from psychrocalc.models.process import CoolantData, CoolingInput, DryCoolingInput, FlowInput

PRESSURE = 100_000.0


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def _summer_inlet() -> FlowOfMoistAir:
    state = MoistAirState.of(temperature=34.0, relative_humidity=40.0, pressure=PRESSURE)
    return FlowOfMoistAir.of_dry_air_mass_flow(state, 1.0)


def _flow_input() -> FlowInput:
    return FlowInput(
        air=MoistAirInput(temperature=34.0, relative_humidity=40.0, pressure=PRESSURE),
        dry_air_mass_flow=1.0,
    )


# ---------------------------------------------------------------------------
# Real cooling
# ---------------------------------------------------------------------------

class TestRealCooling:

    def setup_method(self):
        self.inlet = _summer_inlet()
        self.coolant = CoolantData.of(9.0, 14.0)
        self.result = cooling_from_temperature(self.inlet, self.coolant, 17.0)

    def test_metadata(self):
        assert self.result.process_type == ProcessType.COOLING
        assert self.result.process_mode == ProcessMode.FROM_TEMPERATURE
        assert self.result.coolant == self.coolant
        assert self.result.average_wall_temperature == 11.5
        assert self.result.warnings == ()

    def test_heat_of_process(self):
        assert self.result.heat_of_process == approx(-26835.19, rel_tol=1e-4, abs_tol=0.0)

    def test_outlet(self):
        outlet = self.result.outlet_flow
        assert outlet.fluid.temperature == 17.0
        assert outlet.fluid.humidity_ratio == pytest.approx(0.009772748723824064, rel=1e-6)
        assert outlet.fluid.relative_humidity == approx(79.83, abs_tol=0.01)
        assert outlet.dry_air_mass_flow == 1.0

    def test_condensate_flow(self):
        condensate = self.result.condensate_flow
        assert condensate.mass_flow == pytest.approx(0.0037604402299109005, rel=1e-6)
        assert condensate.fluid.temperature == 11.5
        assert condensate.fluid.kind == "liquid_water"

    def test_bypass_factor(self):
        assert self.result.bypass_factor == pytest.approx(5.5 / 22.5, rel=1e-12)

    def test_from_relative_humidity(self):
        result = cooling_from_relative_humidity(self.inlet, self.coolant, 79.82572722353957)
        assert result.process_mode == ProcessMode.FROM_HUMIDITY
        assert result.outlet_flow.fluid.temperature == pytest.approx(17.0, abs=1e-3)
        assert result.warnings == ()

    def test_from_power(self):
        result = cooling_from_power(self.inlet, self.coolant, self.result.heat_of_process)
        assert result.process_mode == ProcessMode.FROM_POWER
        assert result.outlet_flow.fluid.temperature == pytest.approx(17.0, abs=1e-6)

    def test_high_rh_target_warns(self):
        result = cooling_from_relative_humidity(self.inlet, self.coolant, 99.5)
        assert result.outlet_flow.fluid.temperature == 11.5
        assert len(result.warnings) == 1
        assert "coil wall temperature" in result.warnings[0]

    def test_coolant_warmer_than_air(self):
        coolant = CoolantData.of(35.0, 40.0)
        with pytest.raises(PhysicallyInfeasibleProcessError):
            cooling_from_temperature(self.inlet, coolant, 30.0)


# ---------------------------------------------------------------------------
# Dry cooling: 34 °C / 40% has its dew point near 18.4 °C
# ---------------------------------------------------------------------------

class TestDryCooling:

    def setup_method(self):
        self.inlet = _summer_inlet()

    def test_from_temperature(self):
        result = dry_cooling_from_temperature(self.inlet, 25.0)
        assert result.process_type == ProcessType.DRY_COOLING
        assert result.heat_of_process == approx(-9287.469, rel_tol=1e-5, abs_tol=0.0)
        assert result.condensate_flow is None
        assert result.outlet_flow.fluid.humidity_ratio == pytest.approx(
            self.inlet.fluid.humidity_ratio, rel=1e-12
        )

    def test_from_power(self):
        result = dry_cooling_from_power(self.inlet, -9287.469)
        assert result.outlet_flow.fluid.temperature == pytest.approx(25.0, abs=1e-4)

    def test_zero_power(self):
        result = dry_cooling_from_power(self.inlet, 0.0)
        assert result.outlet_flow.fluid.temperature == 34.0

    def test_below_dew_point(self):
        with pytest.raises(PhysicallyInfeasibleProcessError, match="dew point"):
            dry_cooling_from_temperature(self.inlet, 15.0)

    def test_power_past_dew_point(self):
        with pytest.raises(PhysicallyInfeasibleProcessError, match="dew point"):
            dry_cooling_from_power(self.inlet, -30_000.0)

    def test_target_above_inlet(self):
        with pytest.raises(PhysicallyInfeasibleProcessError, match="cannot raise"):
            dry_cooling_from_temperature(self.inlet, 40.0)

    def test_positive_power(self):
        with pytest.raises(PhysicallyInfeasibleProcessError, match="must not be positive"):
            dry_cooling_from_power(self.inlet, 500.0)


# ---------------------------------------------------------------------------
# Solver dispatch
# ---------------------------------------------------------------------------

class TestCoolingSolvers:

    @pytest.mark.parametrize("mode, target", [
        (ProcessMode.FROM_TEMPERATURE, 17.0),
        (ProcessMode.FROM_POWER, -26835.19),
        (ProcessMode.FROM_HUMIDITY, 79.82572722353957),
    ])
    def test_cooling_modes(self, mode, target):
        data = CoolingInput(
            inlet=_flow_input(),
            mode=mode,
            target=target,
            coolant_supply_temperature=9.0,
            coolant_return_temperature=14.0,
        )
        result = CoolingSolver().solve(data)
        assert result.process_mode == mode
        assert result.outlet_flow.fluid.temperature == pytest.approx(17.0, abs=1e-3)

    def test_invalid_coolant(self):
        data = CoolingInput(
            inlet=_flow_input(),
            mode=ProcessMode.FROM_TEMPERATURE,
            target=17.0,
            coolant_supply_temperature=14.0,
            coolant_return_temperature=9.0,
        )
        with pytest.raises(ArgumentDomainError, match="must not exceed"):
            CoolingSolver().solve(data)

    @pytest.mark.parametrize("mode, target", [
        (ProcessMode.FROM_TEMPERATURE, 25.0),
        (ProcessMode.FROM_POWER, -9287.469),
    ])
    def test_dry_cooling_modes(self, mode, target):
        data = DryCoolingInput(inlet=_flow_input(), mode=mode, target=target)
        result = DryCoolingSolver().solve(data)
        assert result.outlet_flow.fluid.temperature == pytest.approx(25.0, abs=1e-4)

    def test_dry_cooling_rejects_humidity_target(self):
        data = DryCoolingInput(inlet=_flow_input(), mode=ProcessMode.FROM_HUMIDITY, target=60.0)
        with pytest.raises(ArgumentDomainError, match="keeps the humidity ratio"):
            DryCoolingSolver().solve(data)
