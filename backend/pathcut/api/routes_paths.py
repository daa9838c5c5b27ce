"""
Routes for decomposing cut paths.

The single endpoint in this router runs the decomposition on a path
supplied by the client and returns both exterior boundaries, the
interior polygons and the crossing clusters.  Nothing is stored.
"""

from __future__ import annotations

from typing import List, Sequence

from fastapi import APIRouter

from .models import BoundaryModel, DecomposeRequest, DecomposeResponse, Point2D
from ..services.decompose import decompose_path
from ..services.geometry import Point


router = APIRouter()


def to_points(points: Sequence[Point]) -> List[Point2D]:
    return [Point2D(x=p[0], y=p[1]) for p in points]


@router.post("/paths/decompose", response_model=DecomposeResponse)
async def decompose(body: DecomposeRequest) -> DecomposeResponse:
    """Decompose a possibly self-crossing path.

    Args:
        body: The ordered path points.  Validation rejects paths with
            fewer than two points or repeated consecutive points.

    Returns:
        DecomposeResponse: Boundaries (clockwise first), interior
        polygons and crossing clusters.
    """
    result = decompose_path([p.as_tuple() for p in body.points])
    boundaries = [
        BoundaryModel(
            sense=b.sense,
            points=to_points(b.points),
            crossings=[[sp, sn] for sp, sn in b.crossings],
        )
        for b in result.boundaries
    ]
    clusters = [list(c) for c in result.graph.clusters] if result.graph is not None else []
    return DecomposeResponse(
        isCut=result.is_cut,
        boundaries=boundaries,
        polygons=[to_points(poly) for poly in result.polygons],
        clusters=clusters,
    )
