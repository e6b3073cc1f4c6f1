# -*- coding: utf-8 -*-
"""
Maze model, generation and edits.
Exposes:
- wall-bit constants and cell helpers (from grid.py)
- MazeEnvironment (dataclass from generator.py)
- generate_maze(...) and the individual generators
- MazeEdit and the wall affordances (from affordances.py)
- render_maze / save_maze_figure (matplotlib, from render.py)
"""

from __future__ import annotations

from .grid import (
    VISITED, NORTH, SOUTH, EAST, WEST, ALL_WALLS,
    cell_at, cell_is, has_wall_between, remove_wall_between, add_wall_between,
    available_neighbors, grid_neighbors, clear_visited, create_filled_maze,
    walls_are_symmetric,
)
from .generator import (
    GENERATORS, MazeEnvironment, generate_maze,
    generate_backtracking, generate_kruskal, generate_growing_tree, braid_maze, braid_grid,
)
from .affordances import (
    MazeEdit, remove_walls, add_walls, random_wall_removals, random_wall_additions,
)
from .render import render_maze, save_maze_figure

__all__ = [
    "VISITED", "NORTH", "SOUTH", "EAST", "WEST", "ALL_WALLS",
    "cell_at", "cell_is", "has_wall_between", "remove_wall_between",
    "add_wall_between", "available_neighbors", "grid_neighbors",
    "clear_visited", "create_filled_maze", "walls_are_symmetric",
    "GENERATORS", "MazeEnvironment", "generate_maze",
    "generate_backtracking", "generate_kruskal", "generate_growing_tree",
    "braid_maze", "braid_grid",
    "MazeEdit", "remove_walls", "add_walls", "random_wall_removals",
    "random_wall_additions", "render_maze", "save_maze_figure",
]
