"""
Self-intersection graph of an open polyline.

Every pair of non-adjacent segments is tested for a crossing.  Each hit
yields two s-values, one on each segment, that denote the same plane
point.  Hits are grouped into *clusters*: when three or more segments
pass through one point, all of their s-values end up in the same
cluster.  The distinct s-values are also collected in a
:class:`~.parameter_index.ParameterIndex` so that the traversal can
step to the neighbouring crossing along the path.

Clustering is by exact floating-point equality of s-values.  Crossings
that miss each other by rounding noise stay in separate clusters.

Crossings that coincide with the first point of the path (``s == 0``)
cannot be walked by the traversal because there is no segment before
them.  Such hits are dropped with a warning; callers that need them
should trim or perturb the path before decomposing it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .geometry import Point, segment_intersect
from .parameter_index import ParameterIndex

logger = logging.getLogger(__name__)


@dataclass
class IntersectionGraph:
    """Crossings of a path grouped by location.

    Attributes:
        path: The polyline the graph was built from.
        clusters: Groups of s-values sharing a plane point, in the order
            they were discovered.  Members keep discovery order.
        index: Every distinct crossing s-value, sorted.
    """

    path: List[Point]
    clusters: List[List[float]] = field(default_factory=list)
    index: ParameterIndex = field(default_factory=ParameterIndex)
    _owner: Dict[float, int] = field(default_factory=dict, repr=False)

    def cluster_of(self, s: float) -> List[float]:
        """Return the cluster containing ``s``.

        Raises:
            KeyError: If ``s`` is not a crossing of this path.
        """
        return self.clusters[self._owner[s]]

    @property
    def crossing_count(self) -> int:
        return len(self.clusters)


def build_intersection_graph(path: Sequence[Point]) -> IntersectionGraph:
    """Find all self-crossings of ``path`` and cluster them.

    Segment pairs ``(i, j)`` with ``j >= i + 2`` are scanned with ``i``
    increasing, so the s-value on the earlier segment is looked up
    among existing clusters first.  If both s-values already belong to
    different clusters the clusters are merged, keeping membership
    transitively closed.

    Args:
        path: Ordered points of an open polyline.

    Returns:
        IntersectionGraph: Clusters and sorted index of the crossings.
    """
    pts = [(float(p[0]), float(p[1])) for p in path]
    members: Dict[int, List[float]] = {}
    owner: Dict[float, int] = {}
    next_id = 0
    n = len(pts)
    for i in range(n - 1):
        for j in range(i + 2, n - 1):
            hit = segment_intersect(pts[i], pts[i + 1], pts[j], pts[j + 1])
            if hit is None:
                continue
            s_i = i + hit[0]
            s_j = j + hit[1]
            if s_i == 0.0:
                logger.warning(
                    "Dropping crossing at the path start (segments %d and %d, s=%s)",
                    i,
                    j,
                    s_j,
                )
                continue
            cid = owner.get(s_i)
            if cid is None:
                cid = next_id
                next_id += 1
                members[cid] = [s_i]
                owner[s_i] = cid
            other = owner.get(s_j)
            if other is None:
                members[cid].append(s_j)
                owner[s_j] = cid
            elif other != cid:
                for s in members.pop(other):
                    members[cid].append(s)
                    owner[s] = cid

    graph = IntersectionGraph(path=pts)
    for cluster in members.values():
        graph._owner.update({s: len(graph.clusters) for s in cluster})
        graph.clusters.append(cluster)
        for s in cluster:
            graph.index.insert(s)

    if os.getenv("DECOMPOSE_DEBUG"):
        logger.debug(
            "Intersection graph: %d points, %d clusters, %d crossings, index=%s",
            n,
            len(graph.clusters),
            len(graph.index),
            list(graph.index),
        )
    return graph
