"""
Tests for the shape management and cutting endpoints.

A 10x10 square is added to the world and cut by a vertical knife,
which must replace it with two 5x10 halves.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pathcut.api.routes_shapes import world  # type: ignore
from pathcut.main import app  # type: ignore
from pathcut.services import shape_store  # type: ignore

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def as_points(coords):
    return [{"x": x, "y": y} for x, y in coords]


@pytest.fixture
def client() -> TestClient:
    world.clear()
    shape_store.clear_shape_coords()
    yield TestClient(app)
    world.clear()
    shape_store.clear_shape_coords()


def create_square(client: TestClient) -> dict:
    resp = client.post("/api/shapes", json={"points": as_points(SQUARE)})
    assert resp.status_code == 201
    return resp.json()


def test_create_get_list_delete(client: TestClient) -> None:
    shape = create_square(client)
    assert shape["position"] == {"x": 5.0, "y": 5.0}
    assert math.isclose(shape["area"], 100.0)
    assert [(p["x"], p["y"]) for p in shape["points"]] == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

    shape_id = shape["shapeId"]
    assert client.get(f"/api/shapes/{shape_id}").json()["shapeId"] == shape_id
    assert [s["shapeId"] for s in client.get("/api/shapes").json()] == [shape_id]

    assert client.delete(f"/api/shapes/{shape_id}").status_code == 204
    assert client.get(f"/api/shapes/{shape_id}").status_code == 404
    assert client.delete(f"/api/shapes/{shape_id}").status_code == 404


def test_create_in_placed_frame(client: TestClient) -> None:
    """Outlines may be given relative to a position and angle."""
    resp = client.post(
        "/api/shapes",
        json={"points": as_points(SQUARE), "position": {"x": 100, "y": 0}, "angle": math.pi / 2},
    )
    assert resp.status_code == 201
    shape = resp.json()
    assert shape["position"]["x"] == pytest.approx(95.0)
    assert shape["position"]["y"] == pytest.approx(5.0)
    assert shape["angle"] == pytest.approx(math.pi / 2)
    assert shape["points"][1]["x"] == pytest.approx(100.0)
    assert shape["points"][1]["y"] == pytest.approx(10.0)


def test_create_rejects_degenerate_polygon(client: TestClient) -> None:
    resp = client.post("/api/shapes", json={"points": as_points([(0, 0), (1, 0), (2, 0)])})
    assert resp.status_code == 400


def test_cut_replaces_shape_with_halves(client: TestClient) -> None:
    shape_id = create_square(client)["shapeId"]
    resp = client.post(
        f"/api/shapes/{shape_id}/cut",
        json={"points": as_points([(5, -1), (5, 1), (5, 9), (5, 11)])},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["removedShapeId"] == shape_id
    pieces = data["shapes"]
    assert len(pieces) == 2
    for piece in pieces:
        assert math.isclose(piece["area"], 50.0)
    assert sum(1 for p in pieces if p["isStatic"]) == 1

    xs = sorted(
        (min(p["x"] for p in piece["points"]), max(p["x"] for p in piece["points"])) for piece in pieces
    )
    assert xs[0] == pytest.approx((0.0, 5.0))
    assert xs[1] == pytest.approx((5.0, 10.0))

    assert client.get(f"/api/shapes/{shape_id}").status_code == 404
    remaining = {s["shapeId"] for s in client.get("/api/shapes").json()}
    assert remaining == {p["shapeId"] for p in pieces}


def test_cut_that_never_enters(client: TestClient) -> None:
    shape_id = create_square(client)["shapeId"]
    resp = client.post(f"/api/shapes/{shape_id}/cut", json={"points": as_points([(-5, -1), (-5, 11)])})
    assert resp.status_code == 400
    assert client.get(f"/api/shapes/{shape_id}").status_code == 200


def test_cut_straight_across_in_one_segment(client: TestClient) -> None:
    """A single knife segment crossing the outline twice cuts it in two."""
    shape_id = create_square(client)["shapeId"]
    resp = client.post(f"/api/shapes/{shape_id}/cut", json={"points": as_points([(-5, 5.1), (15, 4.9)])})
    assert resp.status_code == 200
    pieces = resp.json()["shapes"]
    assert len(pieces) == 2
    for piece in pieces:
        assert piece["area"] == pytest.approx(50.0)
    assert sum(1 for p in pieces if p["isStatic"]) == 1
    assert client.get(f"/api/shapes/{shape_id}").status_code == 404


def test_cut_that_never_leaves(client: TestClient) -> None:
    shape_id = create_square(client)["shapeId"]
    resp = client.post(f"/api/shapes/{shape_id}/cut", json={"points": as_points([(5, -1), (5, 1), (5, 5)])})
    assert resp.status_code == 400


def test_cut_unknown_shape(client: TestClient) -> None:
    resp = client.post("/api/shapes/999999/cut", json={"points": as_points([(5, -1), (5, 1)])})
    assert resp.status_code == 404
