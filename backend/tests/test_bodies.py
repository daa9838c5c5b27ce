"""Tests for body creation, frame conversion and body replacement."""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pathcut.services.bodies import (  # type: ignore
    Body,
    World,
    body_to_world,
    poly_to_body,
    replace_body,
    world_to_body,
)

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


def test_poly_to_body_centres_on_centroid() -> None:
    body = poly_to_body(SQUARE)
    assert body is not None
    assert body.position == pytest.approx((5.0, 5.0))
    assert math.isclose(body.area, 100.0)
    assert body.angle == 0.0
    assert not body.is_static


def test_poly_to_body_ids_are_unique() -> None:
    a = poly_to_body(SQUARE)
    b = poly_to_body(SQUARE)
    assert a is not None and b is not None
    assert a.id != b.id


def test_poly_to_body_rejects_degenerate_polygons() -> None:
    assert poly_to_body([(0.0, 0.0), (1.0, 0.0)]) is None
    assert poly_to_body([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]) is None
    assert poly_to_body([(0.0, 0.0), (1e-4, 0.0), (0.0, 1e-4)]) is None


def test_frames_round_trip() -> None:
    body = Body(id=-1, position=(3.0, -2.0), angle=math.pi / 3)
    p = (1.5, 4.0)
    assert body_to_world(body, world_to_body(body, p)) == pytest.approx(p)
    assert body_to_world(Body(id=-2, position=(1.0, 2.0), angle=math.pi / 2), (1.0, 0.0)) == pytest.approx((1.0, 3.0))


def test_world_registry() -> None:
    world = World()
    body = Body(id=-10)
    world.add(body)
    assert -10 in world
    assert len(world) == 1
    assert world.get(-10) is body
    assert world.remove(-10) is body
    assert world.remove(-10) is None
    assert len(world) == 0


def test_replace_body_transforms_and_anchors() -> None:
    """Replacements move into the outgoing frame; the largest becomes static."""
    world = World()
    outgoing = Body(
        id=-100,
        position=(1.0, 2.0),
        angle=math.pi / 2,
        velocity=(3.0, 0.0),
        angular_velocity=0.5,
        area=15.0,
    )
    world.add(outgoing)
    big = Body(id=-101, position=(1.0, 0.0), area=10.0)
    small = Body(id=-102, position=(0.0, 0.0), area=5.0)

    added = replace_body(world, outgoing, [big, small])

    assert added == [big, small]
    assert -100 not in world
    assert world.get(-101) is big and world.get(-102) is small

    assert big.position == pytest.approx((1.0, 3.0))
    assert small.position == pytest.approx((1.0, 2.0))
    assert big.angle == pytest.approx(math.pi / 2)
    assert small.angle == pytest.approx(math.pi / 2)

    assert big.is_static
    assert big.velocity == (0.0, 0.0)
    assert big.angular_velocity == 0.0
    assert not small.is_static
    assert small.velocity == (3.0, 0.0)
    assert small.angular_velocity == 0.5


def test_replace_body_with_nothing_keeps_original() -> None:
    world = World()
    outgoing = Body(id=-200)
    world.add(outgoing)
    assert replace_body(world, outgoing, []) == []
    assert world.get(-200) is outgoing
