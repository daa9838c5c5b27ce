"""
Rigid-body records for shapes being cut.

This is the bookkeeping side of a physics world, without any
simulation: a :class:`Body` carries a pose, velocities, an area and a
static flag, and a :class:`World` keeps the bodies currently in play.
The exact vertices of each body live in :mod:`.shape_store`, keyed by
the body id; a body only knows where it is and how it moves.

Two collaborator operations are provided for the cutter:

- :func:`poly_to_body` turns a polygon into a body centred on the
  polygon's centroid, or returns ``None`` for polygons too small or too
  degenerate to be worth keeping.  Callers skip ``None`` results.
- :func:`replace_body` swaps a body for the pieces it was cut into.
  The pieces inherit the original's motion, except the largest one,
  which becomes the static mass anchor.

Frame helpers convert between world coordinates and a body's local
frame (origin at the body position, axes rotated by the body angle).
"""

from __future__ import annotations

import itertools
import logging
import os
from dataclasses import dataclass
from threading import RLock
from typing import Dict, List, Optional, Sequence

from .geometry import Point, Vector, add, polygon_area, polygon_centroid, rotate, sub

logger = logging.getLogger(__name__)

# Polygons whose absolute area falls below this value are rejected by
# poly_to_body.  Override with the PATHCUT_MIN_BODY_AREA environment
# variable.
MIN_BODY_AREA: float = float(os.getenv("PATHCUT_MIN_BODY_AREA", "1e-6"))

_ids = itertools.count(1)


@dataclass
class Body:
    """Pose and motion of one shape.

    Attributes:
        id: Unique identifier, also the key into the shape store.
        position: World position of the body origin.
        angle: Rotation of the body frame in radians.
        velocity: Linear velocity in world units per second.
        angular_velocity: Angular velocity in radians per second.
        area: Absolute area of the body's polygon.
        is_static: Static bodies do not move; their velocities are zero.
    """

    id: int
    position: Point = (0.0, 0.0)
    angle: float = 0.0
    velocity: Vector = (0.0, 0.0)
    angular_velocity: float = 0.0
    area: float = 0.0
    is_static: bool = False

    def set_static(self, flag: bool) -> None:
        self.is_static = flag
        if flag:
            self.velocity = (0.0, 0.0)
            self.angular_velocity = 0.0


def poly_to_body(poly: Sequence[Point]) -> Optional[Body]:
    """Create a body for ``poly``, positioned at the polygon's centroid.

    The polygon is expressed in the frame the body will live in (for a
    cut piece, the frame of the body it was cut from).

    Returns:
        The new body, or ``None`` when the polygon has fewer than three
        vertices or an area below ``MIN_BODY_AREA``.
    """
    if len(poly) < 3:
        return None
    area = abs(polygon_area(poly))
    if area < MIN_BODY_AREA:
        logger.debug("Rejecting polygon with area %.3g below %.3g", area, MIN_BODY_AREA)
        return None
    return Body(id=next(_ids), position=polygon_centroid(poly), area=area)


def world_to_body(body: Body, position: Point) -> Point:
    """Express a world point in ``body``'s local frame."""
    return rotate(sub(position, body.position), -body.angle)


def body_to_world(body: Body, position: Point) -> Point:
    """Express a point of ``body``'s local frame in world coordinates."""
    return add(rotate(position, body.angle), body.position)


class World:
    """Registry of the bodies currently in play.

    All mutations go through a re-entrant lock so that a replacement is
    seen by other threads either entirely or not at all.
    """

    def __init__(self) -> None:
        self._bodies: Dict[int, Body] = {}
        self._lock = RLock()

    def add(self, body: Body) -> None:
        with self._lock:
            self._bodies[body.id] = body

    def remove(self, body_id: int) -> Optional[Body]:
        with self._lock:
            return self._bodies.pop(body_id, None)

    def get(self, body_id: int) -> Optional[Body]:
        with self._lock:
            return self._bodies.get(body_id)

    def all_bodies(self) -> List[Body]:
        with self._lock:
            return list(self._bodies.values())

    def clear(self) -> None:
        with self._lock:
            self._bodies.clear()

    def __contains__(self, body_id: object) -> bool:
        with self._lock:
            return body_id in self._bodies

    def __len__(self) -> int:
        with self._lock:
            return len(self._bodies)


def replace_body(world: World, outgoing: Body, incomings: Sequence[Body]) -> List[Body]:
    """Swap ``outgoing`` for ``incomings`` in ``world``.

    Each incoming body is assumed to be positioned in the local frame of
    ``outgoing``; it is rotated by the outgoing angle about the origin
    and translated by the outgoing position.  Incoming bodies inherit
    the outgoing velocity and angular velocity.  The incoming body with
    the largest area is made static and acts as the mass anchor.

    An empty ``incomings`` leaves the world unchanged.

    Returns:
        The bodies added to the world.
    """
    if not incomings:
        logger.warning("replace_body(%s): no replacement bodies, keeping original", outgoing.id)
        return []
    anchor = max(incomings, key=lambda b: b.area)
    with world._lock:
        for incoming in incomings:
            incoming.set_static(False)
            incoming.velocity = outgoing.velocity
            incoming.angular_velocity = outgoing.angular_velocity
            incoming.position = body_to_world(outgoing, incoming.position)
            incoming.angle = incoming.angle + outgoing.angle
        anchor.set_static(True)
        for incoming in incomings:
            world.add(incoming)
        world.remove(outgoing.id)
    logger.info(
        "Replaced body %s with %d bodies (anchor %s)",
        outgoing.id,
        len(incomings),
        anchor.id,
    )
    return list(incomings)
