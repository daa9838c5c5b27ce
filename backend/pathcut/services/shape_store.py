"""
In-memory store of exact shape outlines keyed by body id.

Physics back ends often keep only the convex hull of a body, which is
useless for cutting concave shapes.  This module keeps the exact
vertices of every body instead.  Outlines are stored in the body's
local frame, translated so that their centroid is the origin; this
matches the convention of :func:`.bodies.poly_to_body`, which places
the body origin at the polygon centroid.

The store mirrors the structure of the other in-memory caches: a
module-level dictionary guarded by a re-entrant lock.  Unlike those
caches it never evicts, since a missing outline makes its body
uncuttable.

Usage::

    from .shape_store import put_shape_coords, get_shape_coords
    put_shape_coords(body.id, polygon)
    shell = get_shape_coords(body.id)
"""

from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional, Sequence

from .geometry import Point, centrify

# Underlying storage.  The key is a body id and the value is the
# centred outline of that body.
_store: Dict[int, List[Point]] = {}
_lock = RLock()


def put_shape_coords(body_id: int, poly: Sequence[Point]) -> List[Point]:
    """Store ``poly`` for ``body_id`` after centring it on its centroid.

    Returns:
        The centred outline as stored.
    """
    centred = centrify(poly)
    with _lock:
        _store[body_id] = centred
    return centred


def get_shape_coords(body_id: int) -> Optional[List[Point]]:
    """Return the stored outline for ``body_id`` or ``None``."""
    with _lock:
        coords = _store.get(body_id)
        return list(coords) if coords is not None else None


def has_shape_coords(body_id: int) -> bool:
    with _lock:
        return body_id in _store


def delete_shape_coords(body_id: int) -> bool:
    """Forget the outline for ``body_id``.

    Returns:
        Whether an outline was stored.
    """
    with _lock:
        return _store.pop(body_id, None) is not None


def clear_shape_coords() -> None:
    with _lock:
        _store.clear()
