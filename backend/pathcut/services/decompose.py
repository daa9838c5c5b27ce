"""
Decomposition of a self-intersecting cut path into boundaries and polygons.

Given an open polyline that may cross itself, :func:`decompose_path`
returns

* two *exterior boundaries*, one per rotational sense, each walked from
  the start of the path by always taking the sharpest turn in that
  sense at every crossing, and
* the *interior polygons*: closed regions bounded purely by stretches of
  path running from crossing to crossing.

The two boundaries are what a cut leaves on either side of the knife;
the interior polygons are the pieces cut loose when the knife loops
over itself.

Pipeline:

1. :func:`~.intersections.build_intersection_graph` finds and clusters
   the crossings and builds the sorted s-value index.
2. :func:`~.traversal.trace` is run from just past the first point for
   each sense.  The untouched stretch after the last crossing is put in
   front of each result so both boundaries run from the path end back
   to its start.
3. Every crossing-to-crossing edge not used by a boundary is walked in
   both senses to discover polygons.  A visited table keyed by the
   unordered rank pair and the sense (relative to the edge's increasing
   direction) ensures each side of an edge yields at most one polygon.

A path with no crossings is reported as "no cut": the first boundary
is the path listed end first, the second is the path as given, and
there are no polygons.

Set the ``DECOMPOSE_DEBUG`` environment variable to log a summary of
each decomposition.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .geometry import Point
from .intersections import IntersectionGraph, build_intersection_graph
from .traversal import ANTICLOCKWISE, CLOCKWISE, Trace, trace

logger = logging.getLogger(__name__)

# Rotational senses, in the order boundaries are reported.
DIRS: Tuple[int, int] = (CLOCKWISE, ANTICLOCKWISE)

# s-value the exterior walks start from: just past the first point, so
# the walk begins on segment 0 heading forward.
START_OFFSET: float = 1e-9


@dataclass
class Decomposition:
    """Result of :func:`decompose_path`.

    Attributes:
        boundaries: One exterior :class:`Trace` per entry in ``DIRS``.
        interiors: Traces of the discovered interior polygons.
        graph: The crossing graph the decomposition was computed from.
    """

    boundaries: List[Trace]
    interiors: List[Trace] = field(default_factory=list)
    graph: IntersectionGraph | None = None

    @property
    def polygons(self) -> List[List[Point]]:
        """Interior polygons as open point lists (first point not repeated)."""
        return [t.points for t in self.interiors]

    @property
    def is_cut(self) -> bool:
        """False when the path never crosses itself."""
        return self.graph is not None and self.graph.crossing_count > 0


def _mark_visited(
    visited: Dict[Tuple[int, int], List[bool]],
    r0: int,
    r1: int,
    dir_idx: int,
) -> bool:
    """Flag the edge ``r0→r1`` as walked in sense ``dir_idx``.

    The flag is stored relative to the edge's increasing direction, so
    walking ``r1→r0`` in the other sense sets the same flag.

    Returns:
        Whether the flag was already set.
    """
    slot = int(r1 < r0) ^ dir_idx
    flags = visited.setdefault((min(r0, r1), max(r0, r1)), [False, False])
    seen = flags[slot]
    flags[slot] = True
    return seen


def decompose_path(path: Sequence[Point]) -> Decomposition:
    """Split a cut path into exterior boundaries and interior polygons.

    Args:
        path: At least two points, no exact duplicates in a row.

    Returns:
        Decomposition: Both boundaries and every interior polygon.
    """
    graph = build_intersection_graph(path)
    pts = graph.path
    index = graph.index

    if len(index) == 0:
        return Decomposition(
            boundaries=[
                Trace(points=pts[::-1], sense=DIRS[0]),
                Trace(points=list(pts), sense=DIRS[1]),
            ],
            graph=graph,
        )

    tail = pts[math.floor(index.max) + 1:][::-1]
    boundaries: List[Trace] = []
    for sense in DIRS:
        boundary = trace(graph, START_OFFSET, index.min, sense)
        boundary.points[:0] = tail
        boundaries.append(boundary)

    boundary_edges = set()
    for boundary in boundaries:
        for sp, sn in boundary.crossings:
            key = index.edge_key(sp, sn)
            if key is not None:
                boundary_edges.add(key)

    visited: Dict[Tuple[int, int], List[bool]] = {}
    interiors: List[Trace] = []
    for cluster in graph.clusters:
        for s in cluster:
            rank = index.find(s)
            for dir_idx, sense in enumerate(DIRS):
                for adj in index.neighbours(rank):
                    if (min(rank, adj), max(rank, adj)) in boundary_edges:
                        continue
                    if _mark_visited(visited, rank, adj, dir_idx):
                        continue
                    polygon = trace(graph, s, index.at(adj), sense, s_first=s)
                    interiors.append(polygon)
                    for sp, sn in polygon.crossings:
                        _mark_visited(visited, index.find(sp), index.find(sn), dir_idx)

    if os.getenv("DECOMPOSE_DEBUG"):
        logger.debug(
            "decompose_path: %d points, %d clusters, %d boundary edges, %d polygons",
            len(pts),
            graph.crossing_count,
            len(boundary_edges),
            len(interiors),
        )
    return Decomposition(boundaries=boundaries, interiors=interiors, graph=graph)
