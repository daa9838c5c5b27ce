"""
Cutting a shape's outline (its *shell*) with a knife path.

Two kinds of cut are supported.

*Straight* cuts happen within a single knife segment that crosses the
shell two or more times.  :func:`cut_straight` walks the crossings in
shell order: an arc of shell whose two ends are joined by a stretch of
knife lying inside the shell closes a piece immediately; other arcs are
collected until the knife closes them into one larger piece.

*Extended* cuts begin when the knife enters the shell, continue while
the knife moves inside it and end when the knife leaves again.  The
path drawn inside the shell may loop over itself.  :func:`cut_shell`
turns the three ingredients of a finished cut (where the knife entered,
the path inside and where it left) into the polygons that replace the
shell:

- every interior polygon found by :func:`.decompose.decompose_path`,
- one daughter polygon per exterior boundary: the boundary closed off
  by the stretch of shell between the exit and entry points, with the
  stretch chosen to lie on that boundary's side of the knife.

All coordinates are in the shell's own frame.  Detecting entry and exit
on successive knife segments is left to the caller; :func:`find_entry`
and :func:`find_exit` test one segment each.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .decompose import DIRS, decompose_path
from .geometry import (
    Point,
    neg,
    point_in_polygon,
    rotation_score,
    sample,
    segment_intersect,
    split,
    sub,
    wrap_slice,
)

logger = logging.getLogger(__name__)


def shell_crossings(shell: Sequence[Point], a: Point, b: Point) -> List[Tuple[float, float]]:
    """All crossings of the knife segment ``a→b`` with the closed shell.

    Returns:
        ``(u, s)`` pairs where ``u`` is the position along the knife
        segment and ``s`` the s-value on the shell, in shell edge order.
    """
    n = len(shell)
    hits: List[Tuple[float, float]] = []
    for i in range(n):
        hit = segment_intersect(a, b, shell[i], shell[(i + 1) % n])
        if hit is not None:
            hits.append((hit[0], i + hit[1]))
    return hits


def find_entry(shell: Sequence[Point], a: Point, b: Point) -> Optional[float]:
    """Shell s-value where the knife segment ``a→b`` enters the shell.

    The segment must cross the shell exactly once and end inside it.
    Checking the end point guards against knife points that graze an
    edge and would otherwise register as an entry.
    """
    hits = shell_crossings(shell, a, b)
    if len(hits) == 1 and point_in_polygon(b, shell):
        return hits[0][1]
    return None


def find_exit(shell: Sequence[Point], a: Point, b: Point) -> Optional[float]:
    """Shell s-value of the first crossing along ``a→b``, if any."""
    hits = shell_crossings(shell, a, b)
    if not hits:
        return None
    return min(hits)[1]


def _inside_chord(k0: int, k1: int) -> bool:
    # Crossings are numbered along the knife from an outside start, so
    # the knife is inside the shell between crossings 2m and 2m + 1.
    return abs(k0 - k1) == 1 and min(k0, k1) % 2 == 0


def cut_straight(shell: Sequence[Point], a: Point, b: Point) -> List[List[Point]]:
    """Pieces left after the knife segment ``a→b`` cuts straight across.

    A crossing whose knife stretch runs into an end point lying inside
    the shell separates nothing and is ignored, so a segment that
    starts or ends inside the shell still cuts along its other
    crossings.

    Returns:
        The pieces in the shell's frame, or an empty list when fewer
        than two usable crossings remain.
    """
    hits = sorted(shell_crossings(shell, a, b))
    starts_inside = point_in_polygon(a, shell)
    ends_inside = (len(hits) + int(starts_inside)) % 2 == 1
    if ends_inside:
        hits = hits[:-1]
    if starts_inside:
        hits = hits[1:]
    if len(hits) < 2:
        return []

    # (shell s-value, knife order) sorted along the shell
    by_shell = sorted((s, k) for k, (_, s) in enumerate(hits))
    count = len(by_shell)
    polygons: List[List[Point]] = []
    pending: List[Point] = []
    first_k: Optional[int] = None
    for i, (s, k) in enumerate(by_shell):
        s_next, k_next = by_shell[(i + 1) % count]
        arc = (
            [sample(shell, s)]
            + wrap_slice(shell, math.floor(s) + 1, math.ceil(s_next))
            + [sample(shell, s_next)]
        )
        if _inside_chord(k, k_next):
            polygons.append(arc)
            continue
        if first_k is None:
            first_k = k
        pending.extend(arc)
        if _inside_chord(k_next, first_k):
            polygons.append(pending)
            pending = []
            first_k = None

    if pending:
        logger.warning("cut_straight: %d arc points left unclosed", len(pending))
    logger.debug("cut_straight: %d crossings -> %d polygons", count, len(polygons))
    return polygons


def cut_shell(
    shell: Sequence[Point],
    entry_s: float,
    path: Sequence[Point],
    exit_point: Point,
    exit_s: float,
) -> List[List[Point]]:
    """Polygons that replace ``shell`` after a completed cut.

    Args:
        shell: Vertices of the closed outline being cut.
        entry_s: Shell s-value where the knife entered.
        path: Knife points inside the shell, in drawing order.
        exit_point: First knife point outside the shell.
        exit_s: Shell s-value where the segment from ``path[-1]`` to
            ``exit_point`` leaves the shell.

    Returns:
        The interior polygons of ``path`` followed by one daughter
        polygon per rotational sense.
    """
    decomposition = decompose_path(path)
    polygons = [list(p) for p in decomposition.polygons]

    increasing_shell, decreasing_shell = split(shell, entry_s, exit_s)
    n = len(shell)
    ref = neg(sub(exit_point, path[-1]))
    decreasing_dir = neg(sub(shell[math.ceil(exit_s) % n], shell[math.ceil(exit_s) - 1]))
    increasing_dir = sub(shell[(math.floor(exit_s) + 1) % n], shell[math.floor(exit_s)])

    for dir_idx, sense in enumerate(DIRS):
        boundary = decomposition.boundaries[dir_idx].points
        if not decomposition.is_cut:
            # an uncrossed path comes back once in each direction
            boundary = decomposition.graph.path[::-1]
        # The boundary runs from the path end back to its start; its
        # last point stands in for the start and is replaced by the
        # entry point on the shell.
        daughter = [sample(shell, exit_s)] + boundary[:-1] + [sample(shell, entry_s)]
        if rotation_score(ref, decreasing_dir) * sense > rotation_score(ref, increasing_dir) * sense:
            daughter.extend(decreasing_shell)
        else:
            daughter.extend(increasing_shell)
        polygons.append(daughter)

    logger.debug(
        "cut_shell: entry=%s exit=%s path=%d points -> %d polygons",
        entry_s,
        exit_s,
        len(path),
        len(polygons),
    )
    return polygons
