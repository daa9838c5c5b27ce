"""
Ordered index over crossing s-values.

The traversal needs to move from one crossing to the next crossing
along the path, in either direction, and to turn s-values into stable
integer ranks for edge bookkeeping.  ``ParameterIndex`` keeps every
distinct s-value in a sorted list and answers those queries with
binary search.  The index is filled once per decomposition and never
modified afterwards, so no rebalancing structure is required.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator, List, Optional, Tuple


class ParameterIndex:
    """Sorted, duplicate-free collection of s-values with rank lookup."""

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._keys: List[float] = []
        for s in values:
            self.insert(s)

    def insert(self, s: float) -> bool:
        """Insert ``s`` unless it is already present.

        Returns:
            True when the value was added, False when it already existed.
        """
        pos = bisect_left(self._keys, s)
        if pos < len(self._keys) and self._keys[pos] == s:
            return False
        self._keys.insert(pos, s)
        return True

    def find(self, s: float) -> Optional[int]:
        """Return the rank of ``s`` or ``None`` when it is not indexed.

        Lookup is by exact floating-point equality.
        """
        pos = bisect_left(self._keys, s)
        if pos < len(self._keys) and self._keys[pos] == s:
            return pos
        return None

    def at(self, rank: int) -> Optional[float]:
        """Return the s-value at ``rank``.

        Ranks outside ``[0, len(self))`` return ``None``; negative ranks
        do not wrap around.  The traversal relies on this to detect that
        it has walked off either end of the path.
        """
        if 0 <= rank < len(self._keys):
            return self._keys[rank]
        return None

    def neighbours(self, rank: int) -> List[int]:
        """Ranks adjacent to ``rank`` that exist in the index."""
        return [r for r in (rank - 1, rank + 1) if 0 <= r < len(self._keys)]

    def edge_key(self, s0: float, s1: float) -> Optional[Tuple[int, int]]:
        """Unordered rank pair for the stretch of path between two crossings.

        Returns ``None`` when either value is not an indexed crossing,
        which is the case for the path's start offset.
        """
        r0 = self.find(s0)
        r1 = self.find(s1)
        if r0 is None or r1 is None:
            return None
        return (min(r0, r1), max(r0, r1))

    @property
    def min(self) -> Optional[float]:
        return self._keys[0] if self._keys else None

    @property
    def max(self) -> Optional[float]:
        return self._keys[-1] if self._keys else None

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, s: object) -> bool:
        return isinstance(s, (int, float)) and self.find(float(s)) is not None

    def __iter__(self) -> Iterator[float]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f"ParameterIndex({self._keys!r})"
