"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from cellbounds.config import Settings
from cellbounds.dependencies import get_settings
from cellbounds.main import app, create_app
from tests.conftest import THREE_T_JUNCTION, TWO_SIDE_BY_SIDE, as_dicts


client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 10


def test_boundaries_side_by_side():
    response = client.post("/api/boundaries", json={"cellContents": as_dicts(TWO_SIDE_BY_SIDE)})
    assert response.status_code == 200
    data = response.json()
    assert data["cell_count"] == 2
    assert data["boundaries"] == [{"start": {"x": 150.0, "y": 0.0}, "end": {"x": 150.0, "y": 100.0}}]
    assert data["processing_time_ms"] >= 0


def test_boundaries_accepts_snake_case_and_container():
    body = {
        "cell_contents": as_dicts(TWO_SIDE_BY_SIDE),
        "container_width": 400,
        "container_height": 100,
    }
    response = client.post("/api/boundaries", json=body)
    assert response.status_code == 200
    assert len(response.json()["boundaries"]) == 1


def test_boundaries_repeat_request_is_stable():
    body = {"cellContents": as_dicts(THREE_T_JUNCTION)}
    first = client.post("/api/boundaries", json=body).json()
    second = client.post("/api/boundaries", json=body).json()
    assert first["boundaries"] == second["boundaries"]
    assert len(first["boundaries"]) == 2


def test_boundaries_empty_and_single():
    assert client.post("/api/boundaries", json={"cellContents": []}).json()["boundaries"] == []
    single = {"cellContents": as_dicts([[0, 0, 10, 10]])}
    assert client.post("/api/boundaries", json=single).json()["boundaries"] == []


def test_invalid_rectangle_is_422():
    body = {"cellContents": as_dicts([[0, 0, 100, 100], [300, 0, 200, 100]])}
    response = client.post("/api/boundaries", json=body)
    assert response.status_code == 422


def test_missing_field_is_422():
    response = client.post("/api/boundaries", json={"cellContents": [{"minX": 0, "minY": 0}]})
    assert response.status_code == 422


def test_negative_container_is_422():
    body = {"cellContents": as_dicts(TWO_SIDE_BY_SIDE), "containerWidth": -5}
    assert client.post("/api/boundaries", json=body).status_code == 422


def test_debug_endpoint():
    response = client.post("/api/boundaries/debug", json={"cellContents": as_dicts(THREE_T_JUNCTION)})
    assert response.status_code == 200
    data = response.json()
    assert data["cell_count"] == 3
    result = data["result"]
    assert len(result["groups"]) == 3
    assert result["partition"]["coverage"] == 1.0
    assert len(result["boundaries"]) == 2
    assert {"midlines", "segments", "validSegments", "gridRects", "orphanRects"} <= set(result)


def test_app_settings_drive_cache_and_policy():
    custom = create_app(Settings(boundary_cache_size=1, orphan_policy="ignore"))
    assert custom.state.boundary_cache.cache_info().maxsize == 1
    assert get_settings in custom.dependency_overrides

    custom_client = TestClient(custom)
    for rows in (TWO_SIDE_BY_SIDE, THREE_T_JUNCTION, TWO_SIDE_BY_SIDE):
        response = custom_client.post("/api/boundaries", json={"cellContents": as_dicts(rows)})
        assert response.status_code == 200

    info = custom.state.boundary_cache.cache_info()
    assert info.currsize == 1
    assert info.misses == 3
