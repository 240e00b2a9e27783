"""
API-level tests for the moist air, fluid and process endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from psychrocalc.config import CORS_ORIGINS
from psychrocalc.main import app

client = TestClient(app)


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


SUMMER_FLOW = {
    "air": {"temperature": 34.0, "relative_humidity": 40.0, "pressure": 100000.0},
    "dry_air_mass_flow": 1.0,
}


class TestHealth:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_cors_allows_configured_origin(self):
        resp = client.options(
            "/health",
            headers={"Origin": CORS_ORIGINS[0], "Access-Control-Request-Method": "GET"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == CORS_ORIGINS[0]

    def test_cors_refuses_other_origin(self):
        resp = client.options(
            "/health",
            headers={"Origin": "http://example.com", "Access-Control-Request-Method": "GET"},
        )
        assert resp.status_code == 400
        assert "access-control-allow-origin" not in resp.headers


# ---------------------------------------------------------------------------
# Moist air
# ---------------------------------------------------------------------------

class TestMoistAirEndpoint:
    def test_from_relative_humidity(self):
        resp = client.post(
            "/api/v1/moist-air",
            json={"temperature": 20.0, "relative_humidity": 50.0, "pressure": 100000.0},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["kind"] == "moist_air"
        assert data["humidity_ratio"] == approx(0.00736, abs_tol=5e-5)
        assert data["dew_point"] == approx(9.27, abs_tol=0.05)
        assert data["vapour_state"] == "unsaturated"

    def test_from_humidity_ratio(self):
        resp = client.post("/api/v1/moist-air", json={"temperature": 25.0, "humidity_ratio": 0.01})
        assert resp.status_code == 200
        assert resp.json()["pressure"] == 101325.0

    def test_dry_air_dew_point_is_null(self):
        resp = client.post("/api/v1/moist-air", json={"temperature": 20.0, "relative_humidity": 0.0})
        assert resp.status_code == 200
        assert resp.json()["dew_point"] is None

    def test_at_temperature_floor(self):
        resp = client.post("/api/v1/moist-air", json={"temperature": -100.0, "relative_humidity": 50.0})
        assert resp.status_code == 200
        assert resp.json()["wet_bulb"] == -100.0

    def test_dew_point_below_temperature_floor(self):
        resp = client.post("/api/v1/moist-air", json={"temperature": -70.0, "relative_humidity": 0.1})
        assert resp.status_code == 422
        assert "below -100" in resp.json()["detail"]

    def test_both_humidities(self):
        resp = client.post(
            "/api/v1/moist-air",
            json={"temperature": 20.0, "relative_humidity": 50.0, "humidity_ratio": 0.007},
        )
        assert resp.status_code == 422
        assert "Exactly one" in resp.json()["detail"]

    def test_pressure_out_of_range(self):
        resp = client.post(
            "/api/v1/moist-air",
            json={"temperature": 20.0, "relative_humidity": 50.0, "pressure": 1000.0},
        )
        assert resp.status_code == 422

    def test_missing_temperature(self):
        resp = client.post("/api/v1/moist-air", json={"relative_humidity": 50.0})
        assert resp.status_code == 422


class TestDryBulbEndpoint:
    @pytest.mark.parametrize("pair, values, expected", [
        ("dew_point_rh", [9.2744829786, 50.0], 20.0),
        ("humidity_ratio_rh", [0.007359483455449959, 50.0], 20.0),
    ])
    def test_pairs(self, pair, values, expected):
        resp = client.post(
            "/api/v1/moist-air/dry-bulb",
            json={"pair": pair, "values": values, "pressure": 100000.0},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["pair"] == pair
        assert data["temperature"] == approx(expected, abs_tol=0.05)

    def test_enthalpy_pair(self):
        state = client.post(
            "/api/v1/moist-air",
            json={"temperature": 20.0, "relative_humidity": 50.0, "pressure": 100000.0},
        ).json()
        resp = client.post(
            "/api/v1/moist-air/dry-bulb",
            json={
                "pair": "enthalpy_humidity_ratio",
                "values": [state["specific_enthalpy"], state["humidity_ratio"]],
                "pressure": 100000.0,
            },
        )
        assert resp.status_code == 200
        assert resp.json()["temperature"] == pytest.approx(20.0, abs=1e-6)

    def test_wet_bulb_pair(self):
        state = client.post(
            "/api/v1/moist-air",
            json={"temperature": 30.0, "relative_humidity": 40.0, "pressure": 100000.0},
        ).json()
        resp = client.post(
            "/api/v1/moist-air/dry-bulb",
            json={"pair": "wet_bulb_rh", "values": [state["wet_bulb"], 40.0], "pressure": 100000.0},
        )
        assert resp.status_code == 200
        assert resp.json()["temperature"] == pytest.approx(30.0, abs=1e-4)

    def test_dry_air_dew_point_is_null(self):
        resp = client.post(
            "/api/v1/moist-air/dry-bulb",
            json={"pair": "dew_point_rh", "values": [5.0, 0.0]},
        )
        assert resp.status_code == 200
        assert resp.json()["temperature"] is None

    def test_invalid_rh(self):
        resp = client.post(
            "/api/v1/moist-air/dry-bulb",
            json={"pair": "wet_bulb_rh", "values": [15.0, 150.0]},
        )
        assert resp.status_code == 422

    def test_unknown_pair(self):
        resp = client.post(
            "/api/v1/moist-air/dry-bulb",
            json={"pair": "enthalpy_rh", "values": [40.0, 50.0]},
        )
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Single substances
# ---------------------------------------------------------------------------

class TestFluidEndpoint:
    @pytest.mark.parametrize("kind, temperature", [
        ("dry_air", 20.0), ("water_vapour", 50.0), ("liquid_water", 15.0), ("ice", -20.0),
    ])
    def test_kinds(self, kind, temperature):
        resp = client.post("/api/v1/fluid", json={"kind": kind, "temperature": temperature})
        assert resp.status_code == 200
        data = resp.json()
        assert data["kind"] == kind
        assert data["temperature"] == temperature

    def test_liquid_water_density(self):
        resp = client.post("/api/v1/fluid", json={"kind": "liquid_water", "temperature": 15.0})
        assert resp.json()["density"] == pytest.approx(998.8844003066922, abs=1e-9)

    def test_ice_above_freezing(self):
        resp = client.post("/api/v1/fluid", json={"kind": "ice", "temperature": 5.0})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Processes
# ---------------------------------------------------------------------------

class TestProcessEndpoints:
    def test_heating(self):
        resp = client.post(
            "/api/v1/process/heating",
            json={
                "inlet": {
                    "air": {"temperature": 10.0, "relative_humidity": 60.0, "pressure": 98700.0},
                    "dry_air_mass_flow": 10000.0 / 3600.0,
                },
                "mode": "from_temperature",
                "target": 30.0,
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["process_type"] == "heating"
        assert data["heat_of_process"] == approx(56360.0, rel_tol=0.01, abs_tol=0.0)
        assert data["outlet_flow"]["fluid"]["temperature"] == 30.0

    def test_heating_infeasible(self):
        resp = client.post(
            "/api/v1/process/heating",
            json={"inlet": SUMMER_FLOW, "mode": "from_temperature", "target": 20.0},
        )
        assert resp.status_code == 422
        assert "cannot lower" in resp.json()["detail"]

    def test_cooling(self):
        resp = client.post(
            "/api/v1/process/cooling",
            json={
                "inlet": SUMMER_FLOW,
                "mode": "from_temperature",
                "target": 17.0,
                "coolant_supply_temperature": 9.0,
                "coolant_return_temperature": 14.0,
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["heat_of_process"] == approx(-26835.19, rel_tol=1e-4, abs_tol=0.0)
        assert data["condensate_flow"]["mass_flow"] == pytest.approx(0.0037604402299109005, rel=1e-6)
        assert data["average_wall_temperature"] == 11.5
        assert data["coolant"]["supply_temperature"] == 9.0

    def test_cooling_high_rh_warning(self):
        resp = client.post(
            "/api/v1/process/cooling",
            json={
                "inlet": SUMMER_FLOW,
                "mode": "from_humidity",
                "target": 100.0,
                "coolant_supply_temperature": 9.0,
                "coolant_return_temperature": 14.0,
            },
        )
        assert resp.status_code == 200
        assert len(resp.json()["warnings"]) == 1

    def test_cooling_bad_coolant(self):
        resp = client.post(
            "/api/v1/process/cooling",
            json={
                "inlet": SUMMER_FLOW,
                "mode": "from_temperature",
                "target": 17.0,
                "coolant_supply_temperature": 9.0,
                "coolant_return_temperature": 95.0,
            },
        )
        assert resp.status_code == 422

    def test_dry_cooling(self):
        resp = client.post(
            "/api/v1/process/dry-cooling",
            json={"inlet": SUMMER_FLOW, "mode": "from_temperature", "target": 25.0},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["process_type"] == "dry_cooling"
        assert data["condensate_flow"] is None

    def test_dry_cooling_below_dew_point(self):
        resp = client.post(
            "/api/v1/process/dry-cooling",
            json={"inlet": SUMMER_FLOW, "mode": "from_temperature", "target": 10.0},
        )
        assert resp.status_code == 422
        assert "dew point" in resp.json()["detail"]

    def test_mixing(self):
        resp = client.post(
            "/api/v1/process/mixing",
            json={
                "flows": [
                    {"air": {"temperature": 30.0, "relative_humidity": 50.0}, "dry_air_mass_flow": 0.5},
                    {"air": {"temperature": 20.0, "relative_humidity": 40.0}, "dry_air_mass_flow": 1.5},
                ]
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["outlet_flow"]["dry_air_mass_flow"] == 2.0
        assert len(data["additional_inlet_flows"]) == 1

    def test_mixing_needs_two_flows(self):
        resp = client.post(
            "/api/v1/process/mixing",
            json={"flows": [{"air": {"temperature": 30.0, "relative_humidity": 50.0}, "mass_flow": 1.0}]},
        )
        assert resp.status_code == 422

    def test_flow_needs_one_rate(self):
        resp = client.post(
            "/api/v1/process/heating",
            json={
                "inlet": {"air": {"temperature": 10.0, "relative_humidity": 60.0}},
                "mode": "from_temperature",
                "target": 30.0,
            },
        )
        assert resp.status_code == 422
        assert "Exactly one" in resp.json()["detail"]
