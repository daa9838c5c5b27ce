"""
Tests for the health and path decomposition endpoints.

These tests use FastAPI's TestClient to simulate requests against the
application without running a real server.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add the backend directory to sys.path so we can import the app
sys.path.append(str(Path(__file__).resolve().parents[1]))

from pathcut.main import app  # type: ignore


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def as_points(coords):
    return [{"x": x, "y": y} for x, y in coords]


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_decompose_three_pass_path(client: TestClient) -> None:
    path = [(-2, 0), (2, 0), (0, 2), (0, -2), (4, -2), (4, 4), (-3, 3), (1, -1)]
    resp = client.post("/api/paths/decompose", json={"points": as_points(path)})
    assert resp.status_code == 200
    data = resp.json()
    assert data["isCut"] is True
    assert len(data["clusters"]) == 1
    assert sorted(data["clusters"][0]) == [0.5, 2.5, 6.75]
    assert [b["sense"] for b in data["boundaries"]] == [1, -1]
    assert len(data["boundaries"][0]["points"]) == 8
    assert data["boundaries"][0]["crossings"][0] == [6.75, 2.5]
    assert len(data["polygons"]) == 2
    first = data["polygons"][0]
    assert [(p["x"], p["y"]) for p in first] == [(0.0, 2.0), (2.0, 0.0), (0.0, 0.0)]


def test_decompose_without_crossings(client: TestClient) -> None:
    resp = client.post("/api/paths/decompose", json={"points": as_points([(0, 0), (1, 0), (1, 1)])})
    assert resp.status_code == 200
    data = resp.json()
    assert data["isCut"] is False
    assert data["polygons"] == []
    assert data["clusters"] == []
    first, second = ([(p["x"], p["y"]) for p in b["points"]] for b in data["boundaries"])
    assert first == [(1.0, 1.0), (1.0, 0.0), (0.0, 0.0)]
    assert second == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]


def test_decompose_rejects_short_path(client: TestClient) -> None:
    resp = client.post("/api/paths/decompose", json={"points": as_points([(0, 0)])})
    assert resp.status_code == 422


def test_decompose_rejects_repeated_points(client: TestClient) -> None:
    resp = client.post(
        "/api/paths/decompose",
        json={"points": as_points([(0, 0), (1, 0), (1, 0), (2, 1)])},
    )
    assert resp.status_code == 422
