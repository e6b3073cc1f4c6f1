#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
grid.py
-------
Cell-level model of a rectangular maze.

A "raw" maze is a (rows, cols) np.uint8 array. Every cell stores five flags:

    0b10000  VISITED  (scratch bit, never relied on by the planners)
    0b01000  NORTH    wall present
    0b00100  SOUTH    wall present
    0b00010  EAST     wall present
    0b00001  WEST     wall present

Walls are always stored on both sides of an edge: if (r, c) has no EAST wall
then (r, c+1) has no WEST wall. remove_wall_between / add_wall_between write
both cells so the invariant holds after any sequence of edits.

An "occupancy grid" is a (H, W) bool array where True marks a wall cell and
False a free cell (see convert.py). The planners accept both formats; use
neighbor_function(maze) to get the matching neighbor enumerator.

Positions are (row, col). Out-of-bounds positions are caller errors and are
not checked by cell_at / remove_wall_between.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

Cell = Tuple[int, int]

VISITED = 0b10000
NORTH = 0b01000
SOUTH = 0b00100
EAST = 0b00010
WEST = 0b00001

ALL_WALLS = NORTH | SOUTH | EAST | WEST
DIRECTIONS = (NORTH, SOUTH, EAST, WEST)

OPPOSITE: Dict[int, int] = {
    NORTH: SOUTH,
    SOUTH: NORTH,
    EAST: WEST,
    WEST: EAST,
}

# Enumeration order N, S, E, W; tie-breaking in every planner depends on it.
DELTAS_4 = ((-1, 0), (1, 0), (0, 1), (0, -1))


# ------------------------------ Cell helpers -------------------------------- #

def create_filled_maze(rows: int, cols: int) -> np.ndarray:
    """A maze with every wall present and nothing visited."""
    return np.full((max(rows, 0), max(cols, 0)), ALL_WALLS, dtype=np.uint8)


def cell_at(pos: Sequence[int], cells: np.ndarray) -> int:
    return int(cells[pos[0], pos[1]])


def cell_is(mask: int, cell: int) -> bool:
    return (int(cell) & mask) != 0


def direction_between(a: Sequence[int], b: Sequence[int]) -> int:
    """Cardinal direction (as a wall mask) pointing from `a` to adjacent `b`."""
    if a[0] == b[0]:
        return EAST if a[1] < b[1] else WEST
    return SOUTH if a[0] < b[0] else NORTH


def has_wall_between(a: Sequence[int], b: Sequence[int], cells: np.ndarray) -> bool:
    return cell_is(direction_between(a, b), cells[a[0], a[1]])


def remove_wall_between(a: Sequence[int], b: Sequence[int], cells: np.ndarray) -> None:
    direction = direction_between(a, b)
    cells[a[0], a[1]] &= ~direction & 0xFF
    cells[b[0], b[1]] &= ~OPPOSITE[direction] & 0xFF


def add_wall_between(a: Sequence[int], b: Sequence[int], cells: np.ndarray) -> None:
    direction = direction_between(a, b)
    cells[a[0], a[1]] |= direction
    cells[b[0], b[1]] |= OPPOSITE[direction]


def clear_visited(cells: np.ndarray) -> None:
    """Strip the VISITED scratch bit from every cell, in place."""
    cells &= ~VISITED & 0xFF


def in_bounds(r: int, c: int, H: int, W: int) -> bool:
    return (0 <= r < H) and (0 <= c < W)


# --------------------------- Neighbor enumeration --------------------------- #

def grid_neighbors(pos: Sequence[int], shape: Tuple[int, int]) -> List[Cell]:
    """In-bounds 4-neighbors of `pos`, walls ignored."""
    H, W = shape
    r, c = int(pos[0]), int(pos[1])
    out: List[Cell] = []
    for dr, dc in DELTAS_4:
        nr, nc = r + dr, c + dc
        if in_bounds(nr, nc, H, W):
            out.append((nr, nc))
    return out


def available_neighbors(pos: Sequence[int], cells: np.ndarray) -> List[Cell]:
    """
    Neighbors reachable from `pos` in one step of a raw maze.

    Ordered North, South, East, West. A neighbor is available when it is in
    bounds and `pos` has no wall on the side facing it.
    """
    H, W = cells.shape
    r, c = int(pos[0]), int(pos[1])
    cell = int(cells[r, c])
    out: List[Cell] = []
    for (dr, dc), direction in zip(DELTAS_4, DIRECTIONS):
        nr, nc = r + dr, c + dc
        if in_bounds(nr, nc, H, W) and not (cell & direction):
            out.append((nr, nc))
    return out


def unvisited_neighbors(pos: Sequence[int], visited: np.ndarray) -> List[Cell]:
    """In-bounds neighbors whose entry in the boolean `visited` matrix is False."""
    return [n for n in grid_neighbors(pos, visited.shape) if not visited[n]]


def grid_available_neighbors(pos: Sequence[int], grid: np.ndarray) -> List[Cell]:
    """Free 4-neighbors of `pos` in an occupancy grid (True = wall)."""
    return [n for n in grid_neighbors(pos, grid.shape) if not grid[n]]


def is_occupancy_grid(maze: np.ndarray) -> bool:
    return maze.dtype == np.bool_


def neighbor_function(maze: np.ndarray) -> Callable[[Sequence[int], np.ndarray], List[Cell]]:
    """Pick the neighbor enumerator matching the maze format."""
    if is_occupancy_grid(maze):
        return grid_available_neighbors
    return available_neighbors


# ------------------------------- Invariants --------------------------------- #

def walls_are_symmetric(cells: np.ndarray) -> bool:
    """True when every interior edge is walled on both sides or on neither."""
    walls = cells & ALL_WALLS
    east = (walls[:, :-1] & EAST) != 0
    west = (walls[:, 1:] & WEST) != 0
    south = (walls[:-1, :] & SOUTH) != 0
    north = (walls[1:, :] & NORTH) != 0
    return bool(np.array_equal(east, west) and np.array_equal(south, north))
