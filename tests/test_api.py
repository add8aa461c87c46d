# -*- coding: utf-8 -*-
"""
Tests for the stress test JSON API
"""

import pytest


class TestStressTestApi:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.get_json()
        assert body["status"] == "ok"
        assert body["name"] == "Stress Test"
        assert body["description"] == "Expected credit loss under country collateral shocks"

    def test_countries(self, client):
        response = client.get("/api/stress-test/countries")

        assert response.status_code == 200
        assert response.get_json()["countries"] == ["DE", "GB", "US"]

    def test_run(self, client):
        response = client.post(
            "/api/stress-test/run",
            json={"country_changes": {"GB": -10, "US": "10"}},
        )

        assert response.status_code == 201
        data = response.get_json()
        assert data["id"] is not None
        assert data["total_portfolios"] == 2
        assert data["total_loans"] == 3
        assert data["total_expected_loss"] == pytest.approx(25.2)
        assert data["country_inputs"] == {"GB": -10.0, "US": 10.0}
        assert [r["port_id"] for r in data["results"]] == [1, 2]
        assert data["results"][0]["total_expected_loss"] == pytest.approx(18.0)

    def test_run_with_empty_body_object(self, client):
        response = client.post("/api/stress-test/run", json={})

        assert response.status_code == 201
        assert response.get_json()["country_inputs"] == {}

    def test_run_rejects_non_numeric_change(self, client):
        response = client.post(
            "/api/stress-test/run",
            json={"country_changes": {"GB": "abc"}},
        )

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_run_rejects_non_json(self, client):
        response = client.post("/api/stress-test/run", data="GB=-10")

        assert response.status_code == 400

    def test_run_rejects_json_list(self, client):
        response = client.post("/api/stress-test/run", json=[1, 2])

        assert response.status_code == 400

    def test_list_runs(self, client):
        client.post("/api/stress-test/run", json={"country_changes": {"GB": -1}})
        client.post("/api/stress-test/run", json={"country_changes": {"GB": -2}})

        response = client.get("/api/stress-test/runs")

        assert response.status_code == 200
        runs = response.get_json()["runs"]
        assert len(runs) == 2
        assert runs[0]["country_inputs"] == {"GB": -2.0}
        assert "results" not in runs[0]

    def test_get_run(self, client):
        created = client.post(
            "/api/stress-test/run", json={"country_changes": {"GB": -5.12}}
        ).get_json()

        response = client.get(f"/api/stress-test/runs/{created['id']}")

        assert response.status_code == 200
        data = response.get_json()
        assert data["id"] == created["id"]
        assert data["country_inputs"] == {"GB": -5.12}
        assert len(data["results"]) == 2

    def test_get_unknown_run(self, client):
        response = client.get("/api/stress-test/runs/999")

        assert response.status_code == 404

    def test_missing_data_source(self, empty_app):
        client = empty_app.test_client()

        run = client.post("/api/stress-test/run", json={"country_changes": {}})
        countries = client.get("/api/stress-test/countries")

        assert run.status_code == 503
        assert countries.status_code == 503
