"""
API-level tests for the state point and process endpoints.
"""

from fastapi.testclient import TestClient

from psychro.main import app

client = TestClient(app)


class TestHealth:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestStatePointEndpoint:
    def test_resolve_default_ip(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Tdb", "RH"], "values": [75.0, 50.0]},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["unit_system"] == "IP"
        assert data["pressure"] == 14.696
        assert 63.0 <= data["W_display"] <= 68.0
        assert 54.0 <= data["Tdp"] <= 57.0

    def test_resolve_si_scenario(self):
        resp = client.post(
            "/api/v1/state-point",
            json={
                "input_pair": ["Tdb", "Twb"],
                "values": [40.0, 20.0],
                "unit_system": "SI",
                "pressure": 101325.0,
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert 0.00637 <= data["W"] <= 0.00663
        assert 13.86 <= data["RH"] <= 14.14

    def test_hot_air_wet_bulb_below_dry_bulb(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Tdb", "RH"], "values": [120.0, 5.0], "unit_system": "SI"},
        )
        assert resp.status_code == 200
        data = resp.json()
        # ~52.55 °C
        assert 52.0 <= data["Twb"] <= 53.1
        assert data["Tdp"] <= data["Twb"] < data["Tdb"]

    def test_dry_air_has_null_dew_point(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Tdb", "W"], "values": [25.0, 0.0], "unit_system": "SI"},
        )
        assert resp.status_code == 200
        assert resp.json()["Tdp"] is None

    def test_invalid_rh_is_422(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Tdb", "RH"], "values": [25.0, 150.0], "unit_system": "SI"},
        )
        assert resp.status_code == 422
        assert "relative humidity" in resp.json()["detail"]

    def test_unsupported_pair_is_422(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Twb", "RH"], "values": [62.5, 50.0]},
        )
        assert resp.status_code == 422
        assert "Unsupported input pair" in resp.json()["detail"]

    def test_out_of_range_is_422(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Tdb", "W"], "values": [500.0, 0.01]},
        )
        assert resp.status_code == 422
        assert "500.0" in resp.json()["detail"]

    def test_invalid_unit_system_is_rejected(self):
        resp = client.post(
            "/api/v1/state-point",
            json={"input_pair": ["Tdb", "RH"], "values": [75.0, 50.0], "unit_system": "XX"},
        )
        assert resp.status_code == 422


class TestConvertEndpoint:
    def test_si_to_ip(self):
        resp = client.post(
            "/api/v1/state-point/convert",
            json={
                "input_pair": ["Tdb", "RH"],
                "values": [25.0, 50.0],
                "unit_system": "SI",
                "target_unit_system": "IP",
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["unit_system"] == "IP"
        assert abs(data["Tdb"] - 77.0) < 1e-4
        assert abs(data["pressure"] - 14.696) < 1e-3

    def test_missing_target_is_rejected(self):
        resp = client.post(
            "/api/v1/state-point/convert",
            json={"input_pair": ["Tdb", "RH"], "values": [25.0, 50.0]},
        )
        assert resp.status_code == 422


class TestProcessEndpoint:
    def test_heating_scenario(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "sensible_heating",
                "unit_system": "SI",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [2.0, 100.0],
                "airflow": 10.0,
                "sensible_mode": "target_tdb",
                "target_Tdb": 40.0,
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert abs(data["mass_flow"] - 12.74) <= 12.74e-5
        assert abs(data["metadata"]["Q"] - 490.0) <= 490.0 * 2e-3
        assert data["end_point"]["Tdb"] == 40.0

    def test_adiabatic_humidification(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "adiabatic_humidification",
                "unit_system": "SI",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [30.0, 30.0],
                "mass_flow": 1.0,
                "water_flow": 0.002,
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert abs(data["metadata"]["delta_W"] - 0.002) < 1e-8
        assert data["end_point"]["Tdb"] < 30.0

    def test_saturation_cooling(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "saturation_cooling",
                "unit_system": "SI",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [30.0, 50.0],
                "mass_flow": 1.0,
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["metadata"]["Q"] < 0.0
        assert abs(data["end_point"]["RH"] - 100.0) < 1e-3

    def test_oversaturation_is_422(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "isothermal_humidification",
                "unit_system": "SI",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [25.0, 90.0],
                "mass_flow": 1.0,
                "water_flow": 0.01,
            },
        )
        assert resp.status_code == 422
        assert "relative humidity" in resp.json()["detail"]

    def test_negative_mass_flow_is_422(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "saturation_cooling",
                "unit_system": "SI",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [30.0, 50.0],
                "mass_flow": -1.0,
            },
        )
        assert resp.status_code == 422
        assert "mass flow" in resp.json()["detail"]

    def test_missing_water_flow_is_422(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "adiabatic_humidification",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [75.0, 30.0],
                "mass_flow": 1000.0,
            },
        )
        assert resp.status_code == 422

    def test_unknown_process_type_is_rejected(self):
        resp = client.post(
            "/api/v1/process",
            json={
                "process_type": "adiabatic_mixing",
                "start_point_pair": ["Tdb", "RH"],
                "start_point_values": [75.0, 30.0],
                "mass_flow": 1000.0,
            },
        )
        assert resp.status_code == 422
