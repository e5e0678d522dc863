"""Subset enumeration shared by the meld search."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

__all__ = ["combinations"]


def combinations(items: Sequence[T], k: int) -> list[list[T]]:
    """Return every ``k``-element subset of ``items``.

    Subsets are built by include/exclude backtracking, so chosen elements
    keep their relative order and each subset appears once. Elements are
    treated by position, never compared, so equal items at different
    positions yield distinct subsets.
    """

    if k < 0:
        raise ValueError("k must be non-negative")

    result: list[list[T]] = []
    current: list[T] = []
    total = len(items)

    def backtrack(start: int) -> None:
        if len(current) == k:
            result.append(list(current))
            return
        # Not enough items left to fill the subset.
        if total - start < k - len(current):
            return
        current.append(items[start])
        backtrack(start + 1)
        current.pop()
        backtrack(start + 1)

    backtrack(0)
    return result
