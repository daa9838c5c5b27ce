"""
Pydantic data models for the path-cutting API.

These models define the request and response bodies of the decompose
and shape endpoints.  Points travel as ``{x, y}`` objects; s-value
pairs travel as two-element lists.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Point2D(BaseModel):
    """A point or vector in the plane."""

    x: float = Field(..., description="Horizontal coordinate")
    y: float = Field(..., description="Vertical coordinate")

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def _reject_repeats(points: List[Point2D]) -> List[Point2D]:
    for prev, cur in zip(points, points[1:]):
        if prev.x == cur.x and prev.y == cur.y:
            raise ValueError(f"consecutive duplicate point ({cur.x}, {cur.y})")
    return points


class DecomposeRequest(BaseModel):
    """Request body for decomposing a cut path."""

    points: List[Point2D] = Field(
        ..., min_length=2, description="Ordered points of the open cut path"
    )

    @field_validator("points")
    @classmethod
    def no_consecutive_duplicates(cls, points: List[Point2D]) -> List[Point2D]:
        return _reject_repeats(points)


class BoundaryModel(BaseModel):
    """One exterior boundary of a decomposed path."""

    sense: int = Field(..., description="Rotational sense: 1 clockwise, -1 anticlockwise")
    points: List[Point2D] = Field(
        ..., description="Boundary points from the path end back to its start"
    )
    crossings: List[List[float]] = Field(
        default_factory=list,
        description="(s_prev, s_next) pairs consumed while walking the boundary",
    )


class DecomposeResponse(BaseModel):
    """Result of decomposing a cut path."""

    isCut: bool = Field(..., description="Whether the path crosses itself at all")
    boundaries: List[BoundaryModel] = Field(
        ..., description="Exterior boundaries, clockwise first"
    )
    polygons: List[List[Point2D]] = Field(
        default_factory=list, description="Interior polygons enclosed by the path"
    )
    clusters: List[List[float]] = Field(
        default_factory=list, description="Groups of s-values meeting at one crossing"
    )


class ShapeCreateRequest(BaseModel):
    """Request body for adding a shape to the world.

    ``points`` are expressed in a frame placed at ``position`` and
    rotated by ``angle``; with the defaults they are world coordinates.
    """

    points: List[Point2D] = Field(..., min_length=3, description="Closed outline of the shape")
    position: Optional[Point2D] = Field(
        default=None, description="Origin of the frame the outline is given in"
    )
    angle: float = Field(default=0.0, description="Rotation of that frame in radians")

    @field_validator("points")
    @classmethod
    def no_consecutive_duplicates(cls, points: List[Point2D]) -> List[Point2D]:
        return _reject_repeats(points)


class ShapeInfo(BaseModel):
    """A shape currently in the world."""

    shapeId: int = Field(..., description="Identifier of the body")
    points: List[Point2D] = Field(..., description="Outline in world coordinates")
    position: Point2D = Field(..., description="World position of the body centroid")
    angle: float = Field(..., description="Body rotation in radians")
    area: float = Field(..., description="Absolute area of the outline")
    isStatic: bool = Field(..., description="Whether the body is the static anchor of a cut")
    velocity: Point2D = Field(..., description="Linear velocity")
    angularVelocity: float = Field(..., description="Angular velocity in radians per second")


class CutRequest(BaseModel):
    """Knife path through a shape, in world coordinates.

    The first segment must enter the shape and a later segment must
    leave it.
    """

    points: List[Point2D] = Field(..., min_length=2, description="Ordered knife points")

    @field_validator("points")
    @classmethod
    def no_consecutive_duplicates(cls, points: List[Point2D]) -> List[Point2D]:
        return _reject_repeats(points)


class CutResponse(BaseModel):
    """Outcome of a completed cut."""

    removedShapeId: int = Field(..., description="Identifier of the shape that was cut")
    shapes: List[ShapeInfo] = Field(..., description="Shapes that replaced it")
