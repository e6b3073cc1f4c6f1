#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest

from mazes.grid import (
    ALL_WALLS, EAST, NORTH, SOUTH, VISITED, WEST,
    add_wall_between, available_neighbors, cell_at, cell_is, clear_visited,
    create_filled_maze, direction_between, grid_available_neighbors,
    grid_neighbors, has_wall_between, neighbor_function, remove_wall_between,
    unvisited_neighbors, walls_are_symmetric,
)


def test_filled_maze_has_every_wall():
    cells = create_filled_maze(3, 4)
    assert cells.shape == (3, 4)
    assert cells.dtype == np.uint8
    assert (cells == ALL_WALLS).all()
    assert not cell_is(VISITED, cell_at((1, 1), cells))


@pytest.mark.parametrize("a,b,d", [
    ((1, 1), (0, 1), NORTH),
    ((1, 1), (2, 1), SOUTH),
    ((1, 1), (1, 2), EAST),
    ((1, 1), (1, 0), WEST),
])
def test_direction_between(a, b, d):
    assert direction_between(a, b) == d


def test_remove_wall_clears_both_sides():
    cells = create_filled_maze(3, 3)
    remove_wall_between((1, 1), (1, 2), cells)
    assert not has_wall_between((1, 1), (1, 2), cells)
    assert not has_wall_between((1, 2), (1, 1), cells)
    assert cells[1, 1] == ALL_WALLS & ~EAST
    assert cells[1, 2] == ALL_WALLS & ~WEST
    assert walls_are_symmetric(cells)


def test_add_wall_restores_both_sides():
    cells = create_filled_maze(2, 2)
    remove_wall_between((0, 0), (1, 0), cells)
    add_wall_between((1, 0), (0, 0), cells)
    assert has_wall_between((0, 0), (1, 0), cells)
    assert has_wall_between((1, 0), (0, 0), cells)
    assert (cells == ALL_WALLS).all()


def test_random_edits_keep_walls_symmetric(seed=3):
    rng = np.random.default_rng(seed)
    cells = create_filled_maze(6, 7)
    for _ in range(200):
        r, c = int(rng.integers(0, 6)), int(rng.integers(0, 7))
        nbrs = grid_neighbors((r, c), cells.shape)
        n = nbrs[int(rng.integers(0, len(nbrs)))]
        if rng.random() < 0.6:
            remove_wall_between((r, c), n, cells)
            assert not has_wall_between((r, c), n, cells)
            assert not has_wall_between(n, (r, c), cells)
        else:
            add_wall_between((r, c), n, cells)
            assert has_wall_between(n, (r, c), cells)
        assert walls_are_symmetric(cells)


def test_asymmetric_walls_detected():
    cells = create_filled_maze(2, 2)
    cells[0, 0] &= ~EAST & 0xFF
    assert not walls_are_symmetric(cells)


def test_available_neighbors_order_and_borders():
    cells = np.zeros((3, 3), dtype=np.uint8)
    # Open center: N, S, E, W order
    assert available_neighbors((1, 1), cells) == [(0, 1), (2, 1), (1, 2), (1, 0)]
    # Corner never leaves the grid even without border walls
    assert available_neighbors((0, 0), cells) == [(1, 0), (0, 1)]
    assert available_neighbors((1, 1), create_filled_maze(3, 3)) == []


def test_grid_neighbors_ignore_walls():
    assert grid_neighbors((0, 0), (3, 3)) == [(1, 0), (0, 1)]
    assert len(grid_neighbors((1, 1), (3, 3))) == 4


def test_unvisited_neighbors_uses_matrix():
    visited = np.zeros((3, 3), dtype=bool)
    visited[0, 1] = True
    assert unvisited_neighbors((1, 1), visited) == [(2, 1), (1, 2), (1, 0)]


def test_clear_visited_keeps_walls():
    cells = create_filled_maze(2, 2) | VISITED
    clear_visited(cells)
    assert (cells == ALL_WALLS).all()


def test_neighbor_function_dispatch():
    grid = np.zeros((3, 3), dtype=bool)
    grid[0, 1] = True
    assert neighbor_function(grid) is grid_available_neighbors
    assert neighbor_function(create_filled_maze(2, 2)) is available_neighbors
    assert grid_available_neighbors((0, 0), grid) == [(1, 0)]
