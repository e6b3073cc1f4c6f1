#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
metrics.py
----------
Path quality and maze connectivity metrics.

Assumptions
-----------
- Maze: raw wall-bit maze (uint8) or occupancy grid (bool, True = wall)
- Planner API: planner.plan(maze, start, goal) -> {'success': bool, 'path': [...], 'expanded': int}
- Path: list of (r, c) from start to goal inclusive; [] means "no path"

What's inside
-------------
- path_cost() / is_continuous() / is_valid_path() for a single path
- reachable_mask() / count_regions() / is_solvable() via connected-component
  labeling of the occupancy-grid view of the maze
- evaluate_planners(): run several planners on one maze and tabulate them
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Sequence, Tuple
import time
import numpy as np

try:
    from scipy.ndimage import label as cc_label
except Exception as e:
    raise ImportError(
        "scipy.ndimage is required. Install with: pip install scipy"
    ) from e

from mazes.convert import raw_to_grid, raw_to_grid_point
from mazes.grid import grid_neighbors, has_wall_between, is_occupancy_grid

# 4-connected labeling structure
_CROSS = np.array([[0, 1, 0],
                   [1, 1, 1],
                   [0, 1, 0]], dtype=np.uint8)


# ------------------------------- Single path -------------------------------- #

def path_cost(path: Sequence[Tuple[int, int]], edge_cost: float = 1.0) -> float:
    """Sum of step costs along the path; inf for an empty path."""
    if not path:
        return float("inf")
    return float(edge_cost * (len(path) - 1))


def is_continuous(path: Sequence[Tuple[int, int]]) -> bool:
    """Consecutive cells are at most one step apart (Chebyshev distance 1)."""
    for a, b in zip(path, path[1:]):
        if max(abs(a[0] - b[0]), abs(a[1] - b[1])) > 1:
            return False
    return True


def is_valid_path(maze: np.ndarray,
                  path: Sequence[Tuple[int, int]],
                  start: Tuple[int, int],
                  goal: Tuple[int, int]) -> bool:
    """
    Endpoints match, every step is a 4-neighbor move, and no step crosses a
    wall (raw maze) or enters a wall cell (occupancy grid).
    """
    if not path:
        return False
    if tuple(path[0]) != tuple(start) or tuple(path[-1]) != tuple(goal):
        return False
    occupancy = is_occupancy_grid(maze)
    for a, b in zip(path, path[1:]):
        if abs(a[0] - b[0]) + abs(a[1] - b[1]) != 1:
            return False
        if occupancy:
            if maze[tuple(b)]:
                return False
        elif has_wall_between(a, b, maze):
            return False
    return True


# ------------------------------ Connectivity -------------------------------- #

def _free_labels(maze: np.ndarray) -> Tuple[np.ndarray, int, bool]:
    if is_occupancy_grid(maze):
        labels, num = cc_label(~maze, structure=_CROSS)
        return labels, num, True
    labels, num = cc_label(~raw_to_grid(maze), structure=_CROSS)
    return labels, num, False


def reachable_mask(maze: np.ndarray, start: Tuple[int, int]) -> np.ndarray:
    """Boolean mask (maze-shaped) of cells connected to `start`."""
    labels, _, occupancy = _free_labels(maze)
    if occupancy:
        lab = labels[tuple(start)]
        return (labels == lab) if lab else np.zeros(maze.shape, dtype=bool)
    lab = labels[raw_to_grid_point(start)]
    # Cell (r, c) sits at grid (2r, 2c) for factor 1
    return labels[::2, ::2] == lab


def count_regions(maze: np.ndarray) -> int:
    """Number of connected regions; 1 for a perfect or braided maze."""
    _, num, _ = _free_labels(maze)
    return int(num)


def is_solvable(maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> bool:
    return bool(reachable_mask(maze, start)[tuple(goal)])


def open_edge_count(cells: np.ndarray) -> int:
    """Number of open interior edges in a raw maze (rows*cols - 1 when perfect)."""
    rows, cols = cells.shape
    count = 0
    for r in range(rows):
        for c in range(cols):
            for n in grid_neighbors((r, c), cells.shape):
                if n > (r, c) and not has_wall_between((r, c), n, cells):
                    count += 1
    return count


# ------------------------------- Convenience -------------------------------- #

def evaluate_planners(maze: np.ndarray,
                      start: Tuple[int, int],
                      goal: Tuple[int, int],
                      planners: Mapping[str, Any],
                      edge_cost: float = 1.0) -> List[Dict[str, Any]]:
    """
    Run every planner on (a copy of) the same maze and return one row per
    planner: success, path length, cost, expansions, validity and wall time.
    """
    rows: List[Dict[str, Any]] = []
    for name, planner in planners.items():
        t0 = time.perf_counter()
        res = planner.plan(maze.copy(), start, goal)
        dt = time.perf_counter() - t0
        path = res.get('path') or []
        rows.append({
            'planner': name,
            'success': bool(res.get('success', False)),
            'length': len(path),
            'cost': path_cost(path, edge_cost),
            'expanded': int(res.get('expanded', 0)),
            'valid': is_valid_path(maze, path, start, goal) if path else False,
            'time_sec': dt,
        })
    return rows
