"""
Planar geometry primitives for path decomposition.

This module collects the small vector and polyline helpers used by the
intersection graph builder, the traversal and the shell cutter.  Points
and vectors are plain ``(x, y)`` tuples so that results can be handed
to the API layer without conversion.

Two conventions are used throughout:

- A *path* is an ordered list of points.  Segment ``i`` joins
  ``path[i]`` and ``path[i + 1]``.
- An *s-value* locates a position along a path: ``floor(s)`` is the
  segment index and the fractional part is the position on that
  segment.  Integer s-values coincide with vertices.

Turn selection at crossings never computes an absolute angle.  Instead
``rotation_score`` maps the signed angle between two directions onto a
monotonic score using only cross and dot products, which is all the
traversal needs to compare candidates.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]
Vector = Tuple[float, float]


def add(a: Vector, b: Vector) -> Vector:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vector, b: Vector) -> Vector:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Vector, k: float) -> Vector:
    return (v[0] * k, v[1] * k)


def neg(v: Vector) -> Vector:
    return (-v[0], -v[1])


def dot(a: Vector, b: Vector) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Vector, b: Vector) -> float:
    """Return the z component of the 3D cross product of ``a`` and ``b``."""
    return a[0] * b[1] - a[1] * b[0]


def norm(v: Vector) -> float:
    return math.hypot(v[0], v[1])


def normalise(v: Vector) -> Vector:
    """Return ``v`` scaled to unit length.

    A zero vector is returned unchanged rather than raising; callers
    comparing scores treat it as a degenerate direction.
    """
    length = norm(v)
    if length == 0.0:
        return v
    return (v[0] / length, v[1] / length)


def rotate(v: Vector, angle: float) -> Vector:
    """Rotate ``v`` counter-clockwise about the origin by ``angle`` radians."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (v[0] * c - v[1] * s, v[0] * s + v[1] * c)


def _sign(x: float) -> int:
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def segment_intersect(a0: Point, a1: Point, b0: Point, b1: Point) -> Optional[Tuple[float, float]]:
    """Intersect segment ``a0→a1`` with segment ``b0→b1``.

    The segments are treated as half-open: a hit is reported only when
    both parameters lie in ``[0, 1)``.  Excluding the far endpoint
    means consecutive segments of a polyline, which share a vertex,
    never report that shared vertex twice.

    Args:
        a0, a1: Endpoints of the first segment.
        b0, b1: Endpoints of the second segment.

    Returns:
        ``(u, t)`` such that ``a0 + u * (a1 - a0) == b0 + t * (b1 - b0)``,
        or ``None`` when the segments are parallel, their bounding
        boxes are disjoint, or either parameter falls outside ``[0, 1)``.
    """
    if (
        max(a0[0], a1[0]) < min(b0[0], b1[0])
        or max(b0[0], b1[0]) < min(a0[0], a1[0])
        or max(a0[1], a1[1]) < min(b0[1], b1[1])
        or max(b0[1], b1[1]) < min(a0[1], a1[1])
    ):
        return None
    a_delta = sub(a1, a0)
    b_delta = sub(b1, b0)
    denom = cross(b_delta, a_delta)
    if denom == 0.0:
        return None
    offset = sub(a0, b0)
    u = cross(offset, b_delta) / denom
    t = cross(offset, a_delta) / denom
    if 0.0 <= u < 1.0 and 0.0 <= t < 1.0:
        return (u, t)
    return None


def delta(path: Sequence[Point], s: float) -> Vector:
    """Direction of the segment containing ``s``.

    The end index wraps around so that closed polygons can be sampled
    on their closing edge.  For an integer ``s`` the result is the zero
    vector.
    """
    return sub(path[math.ceil(s) % len(path)], path[math.floor(s)])


def sample(path: Sequence[Point], s: float) -> Point:
    """Return the point at parameter ``s`` along ``path``."""
    frac = s - math.floor(s)
    return add(scale(delta(path, s), frac), path[math.floor(s)])


def rotation_score(ref: Vector, target: Vector) -> float:
    """Score the rotation from ``ref`` to ``target`` without trigonometry.

    The score decreases monotonically as the counter-clockwise angle
    from ``ref`` to ``target`` grows from 0 to 2π: it falls from 2 to 0
    over the first half turn and from 0 to -2 over the second.  Only
    comparisons between scores are meaningful.
    """
    return _sign(cross(ref, target)) * (dot(normalise(ref), normalise(target)) + 1.0)


def point_in_polygon(p: Point, poly: Sequence[Point]) -> bool:
    """Parity test for ``p`` against the closed polygon ``poly``.

    Every edge whose endpoints straddle ``p.x`` is evaluated at
    ``p.x``; the edge counts as a crossing when it passes below ``p``.
    An odd count means ``p`` is inside.  The result is unstable when
    ``p`` lies exactly on an edge or vertex.
    """
    crossings = 0
    n = len(poly)
    for i in range(n):
        edge = (poly[i], poly[(i + 1) % n])
        if (edge[0][0] <= p[0]) != (edge[1][0] <= p[0]):
            s = abs((p[0] - edge[0][0]) / (edge[1][0] - edge[0][0]))
            if sample(edge, s)[1] < p[1]:
                crossings += 1
    return crossings % 2 == 1


def split(poly: Sequence[Point], left: float, right: float) -> Tuple[List[Point], List[Point]]:
    """Split a closed polygon's vertices at two parametric positions.

    The first arc holds the vertices met when walking forward from
    ``left`` to ``right``.  The second arc holds the remaining vertices,
    listed from ``left`` walking backwards to ``right``, so that each
    arc starts next to ``left``.  Vertices exactly at ``left`` or
    ``right`` are excluded from both arcs.
    """
    if left < right:
        arc_a = list(poly[math.floor(left) + 1:math.ceil(right)])
        arc_b = list(poly[math.floor(right) + 1:]) + list(poly[:math.ceil(left)])
    else:
        arc_a = list(poly[math.floor(left) + 1:]) + list(poly[:math.ceil(right)])
        arc_b = list(poly[math.floor(right) + 1:math.ceil(left)])
    arc_b.reverse()
    return arc_a, arc_b


def wrap_slice(seq: Sequence[Point], lo: int, hi: int) -> List[Point]:
    """Slice ``seq[lo:hi]`` treating it as cyclic when ``lo > hi``."""
    if lo > hi:
        return list(seq[lo:]) + list(seq[:hi])
    return list(seq[lo:hi])


def polygon_area(poly: Sequence[Point]) -> float:
    """Signed shoelace area; positive for counter-clockwise winding."""
    if len(poly) < 3:
        return 0.0
    pts = np.asarray(poly, dtype=float)
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def polygon_centroid(poly: Sequence[Point]) -> Point:
    """Area-weighted centroid of a closed polygon.

    Falls back to the vertex mean when the polygon has no area.
    """
    pts = np.asarray(poly, dtype=float)
    area = polygon_area(poly)
    if area == 0.0:
        mean = pts.mean(axis=0)
        return (float(mean[0]), float(mean[1]))
    x = pts[:, 0]
    y = pts[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    w = x * y_next - x_next * y
    cx = float(np.sum((x + x_next) * w)) / (6.0 * area)
    cy = float(np.sum((y + y_next) * w)) / (6.0 * area)
    return (cx, cy)


def centrify(poly: Sequence[Point]) -> List[Point]:
    """Translate ``poly`` so that its centroid sits at the origin."""
    c = polygon_centroid(poly)
    return [sub(p, c) for p in poly]
