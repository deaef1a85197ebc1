# MIT License (see LICENSE)
"""
Broadphase pair enumeration.

The broadphase decides which particle pairs reach the narrowphase
(collision/contact.py). At the particle counts this simulator targets a
brute-force scan of all unordered pairs is used. A spatial partition (grid,
sweep-and-prune) can replace it as long as it keeps the same contract:
yield each candidate pair once as (i, j) with i < j, in a deterministic order.
"""
from __future__ import annotations
from typing import Iterator, Protocol

import numpy as np


class Broadphase(Protocol):
    """Interface shared by broadphase implementations."""

    def pairs(self, positions: np.ndarray, radius: float) -> Iterator[tuple[int, int]]:
        """Yield candidate pairs (i, j), i < j, each at most once."""
        ...


class BruteForceBroadphase:
    """
    Every unordered pair, in nested index order: (0,1), (0,2), ..., (1,2), ...

    O(N²) pairs; the narrowphase squared-distance test rejects most of them
    without a square root.
    """

    def pairs(self, positions: np.ndarray, radius: float) -> Iterator[tuple[int, int]]:
        n = len(positions)
        for i in range(n):
            for j in range(i + 1, n):
                yield i, j
