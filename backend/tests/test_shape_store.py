"""Tests for the per-body outline store."""

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pathcut.services import shape_store  # type: ignore


@pytest.fixture(autouse=True)
def empty_store():
    shape_store.clear_shape_coords()
    yield
    shape_store.clear_shape_coords()


def test_outlines_are_stored_centred() -> None:
    stored = shape_store.put_shape_coords(1, [(0.0, 0.0), (4.0, 0.0), (4.0, 2.0), (0.0, 2.0)])
    assert stored == [(-2.0, -1.0), (2.0, -1.0), (2.0, 1.0), (-2.0, 1.0)]
    assert shape_store.get_shape_coords(1) == stored
    assert shape_store.has_shape_coords(1)


def test_get_returns_a_copy() -> None:
    shape_store.put_shape_coords(2, [(0.0, 0.0), (4.0, 0.0), (4.0, 2.0)])
    coords = shape_store.get_shape_coords(2)
    coords.clear()
    assert len(shape_store.get_shape_coords(2)) == 3


def test_delete_and_missing() -> None:
    assert shape_store.get_shape_coords(3) is None
    shape_store.put_shape_coords(3, [(0.0, 0.0), (4.0, 0.0), (4.0, 2.0)])
    assert shape_store.delete_shape_coords(3)
    assert not shape_store.delete_shape_coords(3)
    assert not shape_store.has_shape_coords(3)
