# -*- coding: utf-8 -*-
"""
Distance estimates between two (row, col) cells.

Both are symmetric, non-negative, zero only on identical cells and satisfy
the triangle inequality. On 4-connected unit-cost mazes Manhattan is
admissible *and* consistent, and it is the default everywhere. Euclidean is
admissible but weaker (it expands more cells) on 4-connected mazes.
"""

from __future__ import annotations
from typing import Callable, Dict, Sequence, Union
import math

Heuristic = Callable[[Sequence[int], Sequence[int]], float]


def euclidean(a: Sequence[int], b: Sequence[int]) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def manhattan(a: Sequence[int], b: Sequence[int]) -> float:
    return float(abs(b[0] - a[0]) + abs(b[1] - a[1]))


HEURISTICS: Dict[str, Heuristic] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
}

DEFAULT_HEURISTIC = "manhattan"


def get_heuristic(h: Union[str, Heuristic, None] = None) -> Heuristic:
    """Resolve a heuristic given by name (or pass a callable through)."""
    if h is None:
        h = DEFAULT_HEURISTIC
    if callable(h):
        return h
    name = h.strip().lower()
    if name not in HEURISTICS:
        raise ValueError(f"Unknown heuristic '{h}'. Available: {sorted(HEURISTICS)}")
    return HEURISTICS[name]
