#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
affordances.py
--------------
Maze perturbation affordances, used to simulate obstacles that appear or
disappear after a plan was made:
- remove: knock down walls between given cell pairs
- add   : raise walls between given cell pairs
- random: open or close n random interior edges

Every wall edit mutates the raw maze in place and returns a MazeEdit
recording the *prior* value of every touched cell. That record is the replan
input for DStarLite.solve(start, edit): the maze must already hold the new
state when it is passed in.

Occupancy grids get the cell-level counterparts degrade_grid / fill_grid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from mazes.grid import (
    Cell,
    add_wall_between,
    grid_neighbors,
    has_wall_between,
    remove_wall_between,
)

CellPair = Tuple[Sequence[int], Sequence[int]]


@dataclass
class MazeEdit:
    """Cells changed by an edit and the values they held before it."""
    updated_cells: List[Cell] = field(default_factory=list)
    original_values: List[int] = field(default_factory=list)

    def record(self, pos: Sequence[int], cells: np.ndarray) -> None:
        pos = (int(pos[0]), int(pos[1]))
        if pos not in self.updated_cells:
            self.updated_cells.append(pos)
            self.original_values.append(int(cells[pos]))

    def merge(self, other: "MazeEdit") -> "MazeEdit":
        """Combine two consecutive edits; the earliest prior value wins."""
        merged = MazeEdit(list(self.updated_cells), list(self.original_values))
        for pos, value in zip(other.updated_cells, other.original_values):
            if pos not in merged.updated_cells:
                merged.updated_cells.append(pos)
                merged.original_values.append(value)
        return merged

    def __len__(self) -> int:
        return len(self.updated_cells)


# ------------------------------- Wall edits --------------------------------- #

def remove_walls(cells: np.ndarray, pairs: Iterable[CellPair]) -> MazeEdit:
    """Open the edge between each (a, b) pair; pairs already open are skipped."""
    edit = MazeEdit()
    for a, b in pairs:
        if not has_wall_between(a, b, cells):
            continue
        edit.record(a, cells)
        edit.record(b, cells)
        remove_wall_between(a, b, cells)
    return edit


def add_walls(cells: np.ndarray, pairs: Iterable[CellPair]) -> MazeEdit:
    """Close the edge between each (a, b) pair; pairs already walled are skipped."""
    edit = MazeEdit()
    for a, b in pairs:
        if has_wall_between(a, b, cells):
            continue
        edit.record(a, cells)
        edit.record(b, cells)
        add_wall_between(a, b, cells)
    return edit


def walled_edges(cells: np.ndarray) -> List[Tuple[Cell, Cell]]:
    """All interior edges that currently carry a wall (south/east of each cell)."""
    rows, cols = cells.shape
    out = []
    for r in range(rows):
        for c in range(cols):
            for n in grid_neighbors((r, c), cells.shape):
                if n > (r, c) and has_wall_between((r, c), n, cells):
                    out.append(((r, c), n))
    return out


def random_wall_removals(cells: np.ndarray,
                         n: int,
                         rng: Optional[np.random.Generator] = None) -> MazeEdit:
    """Open `n` random interior walls (fewer if the maze has fewer)."""
    rng = rng or np.random.default_rng()
    candidates = walled_edges(cells)
    if not candidates or n <= 0:
        return MazeEdit()
    picks = rng.choice(len(candidates), size=min(n, len(candidates)), replace=False)
    return remove_walls(cells, [candidates[int(i)] for i in picks])


def open_edges(cells: np.ndarray) -> List[Tuple[Cell, Cell]]:
    """All interior edges without a wall (south/east of each cell)."""
    rows, cols = cells.shape
    out = []
    for r in range(rows):
        for c in range(cols):
            for n in grid_neighbors((r, c), cells.shape):
                if n > (r, c) and not has_wall_between((r, c), n, cells):
                    out.append(((r, c), n))
    return out


def random_wall_additions(cells: np.ndarray,
                          n: int,
                          rng: Optional[np.random.Generator] = None) -> MazeEdit:
    """Close `n` random open interior edges (fewer if the maze has fewer)."""
    rng = rng or np.random.default_rng()
    candidates = open_edges(cells)
    if not candidates or n <= 0:
        return MazeEdit()
    picks = rng.choice(len(candidates), size=min(n, len(candidates)), replace=False)
    return add_walls(cells, [candidates[int(i)] for i in picks])


# ---------------------------- Occupancy grids ------------------------------- #

def degrade_grid(grid: np.ndarray, probability: float,
                 rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Clear each wall cell with the given probability, in place."""
    rng = rng or np.random.default_rng()
    grid[grid & (rng.random(grid.shape) <= probability)] = False
    return grid


def fill_grid(grid: np.ndarray, probability: float,
              rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Turn each free cell into a wall with the given probability, in place."""
    rng = rng or np.random.default_rng()
    grid[~grid & (rng.random(grid.shape) <= probability)] = True
    return grid
