#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Indexed binary min-heap.

Each entry is a (key, value) pair. `value` is the priority and is ordered by a
caller-supplied compare(a, b) -> number (negative when a < b), so priorities
may be scalars or D* Lite's (k1, k2) tuples. A dict maps every live key to its
current array slot and is kept in sync on every swap, which makes
has_key / find_index O(1) and lets callers change the priority of a key in
place.

Slots move whenever the heap is mutated: look a key up with find_index()
immediately before decrease_key / modify_key / delete_key.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Hashable, List, NamedTuple, Optional
import math

import numpy as np


class HeapEntry(NamedTuple):
    key: Hashable
    value: Any


def compare_values(a: Any, b: Any) -> int:
    return int(a > b) - int(a < b)


def canonical_key(key: Any) -> Hashable:
    """Coordinates compare by content: [1, 2], (1, 2) and numpy ints collide."""
    if isinstance(key, (tuple, list, np.ndarray)):
        return tuple(int(k) for k in key)
    return key


class IndexedMinHeap:
    def __init__(self,
                 compare: Optional[Callable[[Any, Any], float]] = None,
                 minimum: Any = -math.inf):
        # `minimum` must compare below every real priority; delete_key uses it.
        self._compare = compare or compare_values
        self._minimum = minimum
        self._array: List[HeapEntry] = []
        self._index: Dict[Hashable, int] = {}

    # ------------------------------ queries ------------------------------ #

    def __len__(self) -> int:
        return len(self._array)

    def __contains__(self, key: Any) -> bool:
        return self.has_key(key)

    def is_empty(self) -> bool:
        return not self._array

    def has_key(self, key: Any) -> bool:
        return canonical_key(key) in self._index

    def find_index(self, key: Any) -> int:
        return self._index[canonical_key(key)]

    def peek(self) -> HeapEntry:
        if not self._array:
            raise IndexError("peek from an empty heap")
        return self._array[0]

    def top_value(self, default: Any = None) -> Any:
        """Priority of the minimum entry, or `default` when empty."""
        return self._array[0].value if self._array else default

    def keys(self) -> List[Hashable]:
        return [e.key for e in self._array]

    # ----------------------------- mutation ------------------------------ #

    def insert(self, key: Any, value: Any) -> None:
        key = canonical_key(key)
        if key in self._index:
            raise KeyError(f"{key!r} is already in the heap")
        self._array.append(HeapEntry(key, value))
        self._index[key] = len(self._array) - 1
        self._sift_up(len(self._array) - 1)

    def extract_min(self) -> HeapEntry:
        if not self._array:
            raise IndexError("extract from an empty heap")
        root = self._array[0]
        last = self._array.pop()
        del self._index[root.key]
        if self._array:
            self._array[0] = last
            self._index[last.key] = 0
            self._heapify(0)
        return root

    def decrease_key(self, i: int, value: Any) -> None:
        """Overwrite the priority at slot i; `value` must not exceed the old one."""
        self._array[i] = HeapEntry(self._array[i].key, value)
        self._sift_up(i)

    def modify_key(self, i: int, value: Any) -> None:
        old = self._array[i]
        order = self._compare(value, old.value)
        if order < 0:
            self.decrease_key(i, value)
        elif order > 0:
            self.delete_key(i)
            self.insert(old.key, value)

    def delete_key(self, i: int) -> HeapEntry:
        entry = self._array[i]
        self.decrease_key(i, self._minimum)
        self.extract_min()
        return entry

    # ------------------------------ internals ---------------------------- #

    @staticmethod
    def _parent(i: int) -> int:
        return (i - 1) // 2

    def _less(self, i: int, j: int) -> bool:
        return self._compare(self._array[i].value, self._array[j].value) < 0

    def _swap(self, i: int, j: int) -> None:
        a = self._array
        a[i], a[j] = a[j], a[i]
        self._index[a[i].key] = i
        self._index[a[j].key] = j

    def _sift_up(self, i: int) -> None:
        while i > 0:
            p = self._parent(i)
            if not self._less(i, p):
                break
            self._swap(i, p)
            i = p

    def _heapify(self, i: int) -> None:
        n = len(self._array)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            smallest = i
            if left < n and self._less(left, smallest):
                smallest = left
            if right < n and self._less(right, smallest):
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest

    def check_invariants(self) -> bool:
        """Heap order holds and the key->slot map matches the array."""
        for i in range(1, len(self._array)):
            if self._less(i, self._parent(i)):
                return False
        if len(self._index) != len(self._array):
            return False
        return all(self._array[slot].key == key for key, slot in self._index.items())
