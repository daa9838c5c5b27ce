"""
Rotational walk through the crossings of a self-intersecting path.

Starting on the stretch of path between two s-values, the walker
arrives at a crossing, looks at every way out of that crossing and
takes the sharpest turn in the requested rotational sense.  It repeats
until it walks off an unattached end of the path or arrives back at the
crossing it started from.  Walking from the path start yields an
exterior boundary; walking from an interior edge yields the polygon on
one side of that edge.

Every way out of a crossing is a pair ``(s_overlap, rank)``: leave the
crossing along the path at ``s_overlap`` (any member of the crossing's
cluster) toward the crossing with index ``rank``, which is either the
predecessor or the successor of ``s_overlap``.  A rank outside the
index means the path's start or end lies that way.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .geometry import Point, Vector, normalise, rotation_score, sample, scale, sub
from .intersections import IntersectionGraph

logger = logging.getLogger(__name__)

# Rotational senses.  A sense multiplies the rotation score so that the
# minimum picks the sharpest clockwise (1) or anticlockwise (-1) turn.
CLOCKWISE = 1
ANTICLOCKWISE = -1


@dataclass
class Trace:
    """Result of one walk.

    Attributes:
        points: Points of the walk, listed from the last point reached
            back to the starting point.
        crossings: ``(s_prev, s_next)`` pairs consumed by the walk, in the
            same tail-first order as ``points``.
        sense: Rotational sense the walk was made in.
    """

    points: List[Point] = field(default_factory=list)
    crossings: List[Tuple[float, float]] = field(default_factory=list)
    sense: int = CLOCKWISE


def _reference_direction(path: List[Point], s_prev: float, s_next: float) -> Vector:
    """Unit vector at ``s_next`` pointing back the way the walk came.

    When ``s_next`` is a vertex, the segment before it is used when
    walking forward and the segment after it when walking backward.
    """
    if s_next > s_prev:
        low = math.ceil(s_next) - 1
    else:
        low = math.floor(s_next)
    return normalise(scale(sub(path[low + 1], path[low]), s_prev - s_next))


def _choose_exit(
    graph: IntersectionGraph,
    s_prev: float,
    s_next: float,
    sense: int,
) -> Optional[Tuple[float, int]]:
    path = graph.path
    index = graph.index
    ref = _reference_direction(path, s_prev, s_next)

    best = math.inf
    choice: Optional[Tuple[float, int]] = None
    for s_overlap in graph.cluster_of(s_next):
        rank = index.find(s_overlap)
        # Second element picks the segment the exit runs along, which
        # matters when s_overlap is exactly on a vertex.
        exits = [
            (rank - 1, math.ceil(s_overlap) - 1),
            (rank + 1, math.floor(s_overlap)),
        ]
        if s_overlap == s_next:
            # never walk straight back toward s_prev
            del exits[1 if s_next < s_prev else 0]
        for adj_rank, seg in exits:
            s_adj = index.at(adj_rank)
            if s_adj is None:
                s_adj = 0.0 if adj_rank < 0 else float(len(path))
            target = normalise(scale(sub(path[seg + 1], path[seg]), s_adj - s_overlap))
            score = rotation_score(ref, target) * sense
            if score < best:
                best = score
                choice = (s_overlap, adj_rank)
    return choice


def trace(
    graph: IntersectionGraph,
    s_prev: float,
    s_next: Optional[float],
    sense: int,
    s_first: Optional[float] = None,
) -> Trace:
    """Walk the crossing graph from ``s_prev`` toward ``s_next``.

    Args:
        graph: Crossing graph of the path.
        s_prev: Where the walk starts.  Need not be a crossing.
        s_next: First crossing to arrive at, or ``None`` when there is
            none in that direction.
        sense: ``CLOCKWISE`` or ``ANTICLOCKWISE``.
        s_first: The walk stops as soon as it arrives at the cluster
            containing this s-value.  ``None`` walks until an end of
            the path is reached.

    Returns:
        Trace: The walked points and consumed crossing pairs.
    """
    path = graph.path
    steps: List[Tuple[float, float]] = []
    points: List[Point] = []
    limit = 2 * (len(graph.index) + 1)

    while True:
        if s_next is None:
            points.append(sample(path, s_prev))
            break
        steps.append((s_prev, s_next))
        if s_first is not None and s_first in graph.cluster_of(s_next):
            break
        if len(steps) >= limit:
            logger.warning(
                "Traversal stopped after %d steps without closing (start=%s, sense=%d)",
                len(steps),
                steps[0][0],
                sense,
            )
            break
        choice = _choose_exit(graph, s_prev, s_next, sense)
        if choice is None:
            logger.warning("No usable exit from crossing at s=%s", s_next)
            break
        s_prev, s_next = choice[0], graph.index.at(choice[1])

    crossings: List[Tuple[float, float]] = []
    for sp, sn in reversed(steps):
        crossings.append((sp, sn))
        # vertices strictly between the two s-values; a vertex sitting
        # exactly on a crossing is already emitted as the sampled point
        edge = path[math.floor(min(sp, sn)) + 1:math.ceil(max(sp, sn))]
        if sp < sn:
            edge.reverse()
        points.extend(edge)
        points.append(sample(path, sp))

    if os.getenv("DECOMPOSE_DEBUG"):
        logger.debug(
            "trace(sense=%d, s_first=%s): %d steps, %d points, crossings=%s",
            sense,
            s_first,
            len(steps),
            len(points),
            crossings,
        )
    return Trace(points=points, crossings=crossings, sense=sense)
