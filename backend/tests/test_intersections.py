"""
Tests for self-intersection detection and clustering.

The three-pass path used here draws a loop, closes it, then sweeps a
wide outer loop and passes back through the first crossing, so that
three segments meet at the origin.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pathcut.services.intersections import build_intersection_graph  # type: ignore

SINGLE_LOOP = [(-2.0, 0.0), (2.0, 0.0), (0.0, 2.0), (0.0, -2.0)]

THREE_PASS = [
    (-2.0, 0.0),
    (2.0, 0.0),
    (0.0, 2.0),
    (0.0, -2.0),
    (4.0, -2.0),
    (4.0, 4.0),
    (-3.0, 3.0),
    (1.0, -1.0),
]


def test_straight_path_has_no_crossings() -> None:
    graph = build_intersection_graph([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 1.0)])
    assert graph.clusters == []
    assert len(graph.index) == 0
    assert graph.crossing_count == 0


def test_single_loop_yields_one_pair() -> None:
    graph = build_intersection_graph(SINGLE_LOOP)
    assert graph.clusters == [[0.5, 2.5]]
    assert list(graph.index) == [0.5, 2.5]
    assert graph.cluster_of(2.5) is graph.cluster_of(0.5)


def test_triple_point_forms_one_cluster() -> None:
    """Three segments through one point share a single cluster."""
    graph = build_intersection_graph(THREE_PASS)
    assert len(graph.clusters) == 1
    assert sorted(graph.clusters[0]) == [0.5, 2.5, 6.75]
    assert list(graph.index) == [0.5, 2.5, 6.75]
    for s in graph.index:
        assert graph.cluster_of(s) == graph.clusters[0]


def test_cluster_of_unknown_value_raises() -> None:
    graph = build_intersection_graph(SINGLE_LOOP)
    with pytest.raises(KeyError):
        graph.cluster_of(1.0)


def test_crossing_at_path_start_is_dropped() -> None:
    """A crossing through the first point cannot be walked and is ignored."""
    graph = build_intersection_graph([(0.0, 0.0), (2.0, 0.0), (1.0, 1.0), (-1.0, -1.0)])
    assert graph.clusters == []
    assert len(graph.index) == 0


def test_points_are_normalised_to_float_tuples() -> None:
    graph = build_intersection_graph([[0, 0], [1, 0], [1, 1]])
    assert graph.path == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
