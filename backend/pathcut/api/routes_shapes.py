"""
Routes for managing shapes and cutting them with a knife path.

Shapes live in a process-wide :class:`~..services.bodies.World`; their
exact outlines live in :mod:`..services.shape_store`.  A cut converts
the knife path into the shape's frame.  A first knife segment that
crosses the outline more than once cuts straight across
(:func:`~..services.shell_cut.cut_straight`); otherwise the entry is
taken from the first segment and the exit from a later one
(:func:`~..services.shell_cut.cut_shell`).  Either way the shape is
replaced by the resulting pieces.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from .models import CutRequest, CutResponse, Point2D, ShapeCreateRequest, ShapeInfo
from ..services.bodies import Body, World, body_to_world, poly_to_body, replace_body, world_to_body
from ..services.geometry import Point, add, rotate
from ..services.shape_store import delete_shape_coords, get_shape_coords, put_shape_coords
from ..services.shell_cut import cut_shell, cut_straight, find_entry, find_exit, shell_crossings

logger = logging.getLogger(__name__)

router = APIRouter()

# Bodies currently in play.  Tests reset it with ``world.clear()``.
world = World()


def shape_info(body: Body) -> ShapeInfo:
    coords = get_shape_coords(body.id) or []
    return ShapeInfo(
        shapeId=body.id,
        points=[Point2D(x=p[0], y=p[1]) for p in (body_to_world(body, c) for c in coords)],
        position=Point2D(x=body.position[0], y=body.position[1]),
        angle=body.angle,
        area=body.area,
        isStatic=body.is_static,
        velocity=Point2D(x=body.velocity[0], y=body.velocity[1]),
        angularVelocity=body.angular_velocity,
    )


def _require(shape_id: int) -> Body:
    body = world.get(shape_id)
    if body is None:
        raise HTTPException(status_code=404, detail="Shape not found")
    return body


@router.post("/shapes", response_model=ShapeInfo, status_code=201)
async def create_shape(body: ShapeCreateRequest) -> ShapeInfo:
    """Add a shape to the world.

    Raises:
        HTTPException: 400 when the outline is too small or degenerate.
    """
    poly = [p.as_tuple() for p in body.points]
    shape = poly_to_body(poly)
    if shape is None:
        raise HTTPException(status_code=400, detail="Degenerate polygon")
    origin = body.position.as_tuple() if body.position is not None else (0.0, 0.0)
    shape.position = add(rotate(shape.position, body.angle), origin)
    shape.angle = body.angle
    put_shape_coords(shape.id, poly)
    world.add(shape)
    logger.info("Created shape %s with %d vertices", shape.id, len(poly))
    return shape_info(shape)


@router.get("/shapes", response_model=list[ShapeInfo])
async def list_shapes() -> list[ShapeInfo]:
    return [shape_info(b) for b in world.all_bodies()]


@router.get("/shapes/{shape_id}", response_model=ShapeInfo)
async def get_shape(shape_id: int) -> ShapeInfo:
    return shape_info(_require(shape_id))


@router.delete("/shapes/{shape_id}", status_code=204)
async def delete_shape(shape_id: int) -> None:
    _require(shape_id)
    world.remove(shape_id)
    delete_shape_coords(shape_id)


def _extended_cut(shell: List[Point], knife: List[Point]) -> List[List[Point]]:
    entry_s = find_entry(shell, knife[0], knife[1])
    if entry_s is None:
        raise HTTPException(status_code=400, detail="Knife does not enter the shape")

    inside = [knife[1]]
    for a, b in zip(knife[1:], knife[2:]):
        exit_s = find_exit(shell, a, b)
        if exit_s is not None:
            return cut_shell(shell, entry_s, inside, b, exit_s)
        inside.append(b)
    raise HTTPException(status_code=400, detail="Knife does not leave the shape")


@router.post("/shapes/{shape_id}/cut", response_model=CutResponse)
async def cut_shape(shape_id: int, body: CutRequest) -> CutResponse:
    """Cut a shape along a knife path given in world coordinates.

    When the first knife segment crosses the outline two or more times
    the shape is cut straight along that segment.  Otherwise the first
    segment must enter the shape, and knife points are collected until
    a segment leaves it again.  Knife points after the segment that
    completes the cut are ignored.

    Raises:
        HTTPException: 404 for an unknown shape, 400 when the knife
            never enters or never leaves the shape.
    """
    shape = _require(shape_id)
    shell = get_shape_coords(shape_id)
    if shell is None:
        raise HTTPException(status_code=404, detail="Shape outline not found")

    knife = [world_to_body(shape, p.as_tuple()) for p in body.points]
    if len(shell_crossings(shell, knife[0], knife[1])) >= 2:
        polygons = cut_straight(shell, knife[0], knife[1])
        if not polygons:
            raise HTTPException(status_code=400, detail="Knife does not cut across the shape")
    else:
        polygons = _extended_cut(shell, knife)

    pieces: List[Body] = []
    for poly in polygons:
        piece = poly_to_body(poly)
        if piece is None:
            continue
        put_shape_coords(piece.id, poly)
        pieces.append(piece)
    if not pieces:
        raise HTTPException(status_code=400, detail="Cut produced no usable pieces")

    replace_body(world, shape, pieces)
    delete_shape_coords(shape_id)
    logger.info("Cut shape %s into %d pieces", shape_id, len(pieces))
    return CutResponse(removedShapeId=shape_id, shapes=[shape_info(p) for p in pieces])
