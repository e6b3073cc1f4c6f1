#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Randomized spanning-tree maze generators on the raw wall-bit format.

Every generator starts from a fully walled maze and knocks walls down until
all cells are connected, so the result is a "perfect" maze (exactly one path
between any two cells). braid_maze() can add loops afterwards; braid_grid()
does the same on an occupancy grid.

Generators:
- backtracking : randomized depth-first search with an explicit stack
- kruskal      : shuffled walls joined through a disjoint set
- growing_tree : active-cell list; "prim" picks a random active cell,
                 "backtracking" picks the newest one

Visitation is tracked in a separate boolean matrix; returned mazes never carry
the VISITED bit.

Dependencies:
    numpy
    scipy.cluster.hierarchy (DisjointSet, for Kruskal)

Usage (quick smoke test):
    python3 -m mazes.generator
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

try:
    from scipy.cluster.hierarchy import DisjointSet
except Exception as e:
    raise ImportError(
        "scipy>=1.6 is required for DisjointSet. Install with: pip install scipy"
    ) from e

from mazes.grid import (
    ALL_WALLS,
    direction_between,
    grid_neighbors,
    create_filled_maze,
    remove_wall_between,
    unvisited_neighbors,
)


# ------------------------------- Data classes ------------------------------- #

@dataclass
class MazeEnvironment:
    """A generated maze together with its endpoints and provenance."""
    cells: np.ndarray           # (rows, cols) uint8 wall bits
    start: Tuple[int, int]
    goal: Tuple[int, int]
    settings: Dict              # record of generator settings used (for provenance)
    rng: np.random.Generator

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape

    @property
    def rows(self) -> int:
        return self.cells.shape[0]

    @property
    def cols(self) -> int:
        return self.cells.shape[1]


# ------------------------------ Utility helpers ----------------------------- #

def _choose(rng: np.random.Generator, items: List):
    return items[int(rng.integers(0, len(items)))]


# -------------------------------- Generators -------------------------------- #

def generate_backtracking(rows: int,
                          cols: int,
                          start: Tuple[int, int] = (0, 0),
                          rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Randomized depth-first search ("recursive backtracker").

    Long, winding corridors with few branches.
    """
    rng = rng or np.random.default_rng()
    cells = create_filled_maze(rows, cols)
    if rows <= 0 or cols <= 0:
        return cells

    start = (int(start[0]), int(start[1]))
    visited = np.zeros((rows, cols), dtype=bool)
    visited[start] = True
    stack = [start]

    while stack:
        current = stack.pop()
        neighbors = unvisited_neighbors(current, visited)
        if neighbors:
            stack.append(current)
            nxt = _choose(rng, neighbors)
            remove_wall_between(current, nxt, cells)
            visited[nxt] = True
            stack.append(nxt)

    return cells


def generate_kruskal(rows: int,
                     cols: int,
                     rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Randomized Kruskal: visit every interior wall in random order and remove
    it when the two cells it separates are not yet connected.
    """
    rng = rng or np.random.default_rng()
    cells = create_filled_maze(rows, cols)
    if rows <= 0 or cols <= 0:
        return cells

    sets = DisjointSet((r, c) for r in range(rows) for c in range(cols))

    # Each interior wall once: south and east of every cell
    walls: List[Tuple[Tuple[int, int], Tuple[int, int]]] = []
    for r in range(rows):
        for c in range(cols):
            if r < rows - 1:
                walls.append(((r, c), (r + 1, c)))
            if c < cols - 1:
                walls.append(((r, c), (r, c + 1)))

    order = rng.permutation(len(walls))
    for i in order:
        a, b = walls[int(i)]
        if sets.merge(a, b):
            remove_wall_between(a, b, cells)

    return cells


GROWING_TREE_METHODS: Dict[str, Callable[[int, np.random.Generator], int]] = {
    "backtracking": lambda size, rng: size - 1,
    "prim": lambda size, rng: int(rng.integers(0, size)),
}


def generate_growing_tree(rows: int,
                          cols: int,
                          method: str = "prim",
                          rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Growing-tree generator. The `method` picks which active cell grows next.
    """
    if method not in GROWING_TREE_METHODS:
        raise ValueError(f"Unknown growing-tree method '{method}'. Available: {sorted(GROWING_TREE_METHODS)}")
    pick = GROWING_TREE_METHODS[method]
    rng = rng or np.random.default_rng()
    cells = create_filled_maze(rows, cols)
    if rows <= 0 or cols <= 0:
        return cells

    visited = np.zeros((rows, cols), dtype=bool)
    first = (int(rng.integers(0, rows)), int(rng.integers(0, cols)))
    visited[first] = True
    active = [first]

    while active:
        idx = pick(len(active), rng)
        current = active[idx]
        neighbors = unvisited_neighbors(current, visited)
        if not neighbors:
            active.pop(idx)
            continue
        nxt = _choose(rng, neighbors)
        remove_wall_between(current, nxt, cells)
        visited[nxt] = True
        active.append(nxt)

    return cells


def braid_maze(cells: np.ndarray,
               probability: float,
               rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Remove dead ends in place: each cell with three walls loses one of them
    (chosen at random among in-bounds sides) with the given probability.
    """
    rng = rng or np.random.default_rng()
    rows, cols = cells.shape
    for r in range(rows):
        for c in range(cols):
            if rng.random() > probability:
                continue
            cell = int(cells[r, c])
            if bin(cell & ALL_WALLS).count("1") != 3:
                continue
            walled = [n for n in grid_neighbors((r, c), cells.shape)
                      if cell & direction_between((r, c), n)]
            if walled:
                remove_wall_between((r, c), _choose(rng, walled), cells)
    return cells


def braid_grid(grid: np.ndarray,
               probability: float,
               rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    braid_maze() for a factor-1 occupancy grid (raw_to_grid(cells, 1) layout:
    cells on even coordinates, wall cells between them). A free cell walled
    on three sides, the border counting as a wall, has one of its in-bounds
    walls cleared with the given probability. Works in place.
    """
    rng = rng or np.random.default_rng()
    H, W = grid.shape
    for r in range(0, H, 2):
        for c in range(0, W, 2):
            if rng.random() > probability or grid[r, c]:
                continue
            walled, open_sides = [], 0
            for dr, dc in ((-1, 0), (1, 0), (0, 1), (0, -1)):
                nr, nc = r + 2 * dr, c + 2 * dc
                if not (0 <= nr < H and 0 <= nc < W):
                    continue
                if not grid[r + dr, c + dc]:
                    open_sides += 1
                elif not grid[nr, nc]:
                    walled.append((r + dr, c + dc))
            if open_sides == 1 and walled:
                grid[_choose(rng, walled)] = False
    return grid


GENERATORS: Dict[str, Callable[..., np.ndarray]] = {
    "backtracking": generate_backtracking,
    "kruskal": generate_kruskal,
    "growing_tree": generate_growing_tree,
}


# ------------------------------- Core generator ----------------------------- #

def generate_maze(rows: int = 20,
                  cols: int = 20,
                  *,
                  method: str = "backtracking",
                  braid: float = 0.0,
                  start: Tuple[int, int] = (0, 0),
                  goal: Optional[Tuple[int, int]] = None,
                  rng: Optional[np.random.Generator] = None,
                  **method_kwargs) -> MazeEnvironment:
    """
    Generate a maze and wrap it with its endpoints.

    Parameters
    ----------
    rows, cols : int
        Maze dimensions in cells.
    method : str
        One of GENERATORS ('backtracking', 'kruskal', 'growing_tree').
    braid : float
        Probability (0..1) of opening each dead end afterwards; 0 keeps the
        maze perfect.
    start, goal : (r, c)
        Endpoints; goal defaults to the bottom-right cell.
    rng : np.random.Generator
        Source of randomness (a fresh default_rng() if omitted).
    method_kwargs : dict
        Extra generator options. growing_tree reads grow='prim' | 'backtracking'.

    Returns
    -------
    MazeEnvironment
    """
    if method not in GENERATORS:
        raise ValueError(f"Unknown generator '{method}'. Available: {sorted(GENERATORS)}")
    if goal is None:
        goal = (rows - 1, cols - 1)
    rng = rng or np.random.default_rng()

    settings = dict(
        rows=rows, cols=cols, method=method, braid=braid,
        start=start, goal=goal, seed=int(rng.integers(0, 2**31 - 1)),
        **method_kwargs,
    )

    if method == "backtracking":
        cells = generate_backtracking(rows, cols, start=start, rng=rng)
    elif method == "growing_tree":
        cells = generate_growing_tree(rows, cols, method=method_kwargs.get("grow", "prim"), rng=rng)
    else:
        cells = generate_kruskal(rows, cols, rng=rng)

    if braid > 0 and cells.size:
        braid_maze(cells, braid, rng=rng)

    return MazeEnvironment(cells=cells, start=tuple(start), goal=tuple(goal),
                           settings=settings, rng=rng)


# ---------------------------------- Demo ------------------------------------ #

if __name__ == "__main__":
    rng = np.random.default_rng(123)
    for name in GENERATORS:
        env = generate_maze(12, 16, method=name, rng=rng)
        open_edges = int(((env.cells & ALL_WALLS) != ALL_WALLS).sum())
        print(f"{name:>13}: shape={env.shape} start={env.start} goal={env.goal} "
              f"cells with an opening={open_edges}")
