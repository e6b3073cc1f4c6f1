#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys, math
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from mazes.generator import generate_maze
from mazes.grid import create_filled_maze, remove_wall_between
from planners import get_planner
from eval.metrics import (
    count_regions, evaluate_planners, is_continuous, is_solvable, is_valid_path,
    open_edge_count, path_cost, reachable_mask,
)


def _two_rooms():
    # Left column open top to bottom, right column separate
    cells = create_filled_maze(3, 2)
    remove_wall_between((0, 0), (1, 0), cells)
    remove_wall_between((1, 0), (2, 0), cells)
    remove_wall_between((0, 1), (1, 1), cells)
    return cells


def test_path_cost():
    assert path_cost([(0, 0), (0, 1), (1, 1)]) == 2.0
    assert path_cost([(0, 0)]) == 0.0
    assert path_cost([(0, 0), (0, 1)], edge_cost=2.5) == 2.5
    assert math.isinf(path_cost([]))


def test_is_continuous():
    assert is_continuous([(0, 0), (0, 1), (1, 2)])
    assert not is_continuous([(0, 0), (0, 2)])
    assert is_continuous([])


def test_is_valid_path_checks_walls_and_endpoints():
    cells = _two_rooms()
    good = [(0, 0), (1, 0), (2, 0)]
    assert is_valid_path(cells, good, (0, 0), (2, 0))
    assert not is_valid_path(cells, good, (0, 0), (2, 1))
    # Crosses the wall between the columns
    assert not is_valid_path(cells, [(0, 0), (0, 1)], (0, 0), (0, 1))
    # Diagonal step
    assert not is_valid_path(cells, [(0, 0), (1, 1)], (0, 0), (1, 1))
    assert not is_valid_path(cells, [], (0, 0), (0, 0))


def test_is_valid_path_on_occupancy_grid():
    grid = np.zeros((3, 3), dtype=bool)
    grid[1, 1] = True
    assert is_valid_path(grid, [(0, 0), (0, 1), (0, 2)], (0, 0), (0, 2))
    assert not is_valid_path(grid, [(0, 1), (1, 1), (2, 1)], (0, 1), (2, 1))


def test_regions_and_reachability():
    cells = _two_rooms()
    assert count_regions(cells) == 3
    mask = reachable_mask(cells, (1, 0))
    assert mask.shape == cells.shape
    assert mask[:, 0].all() and not mask[:, 1].any()
    assert is_solvable(cells, (0, 0), (2, 0))
    assert not is_solvable(cells, (0, 0), (0, 1))
    assert is_solvable(cells, (0, 1), (1, 1))


def test_regions_on_occupancy_grid():
    grid = np.zeros((3, 5), dtype=bool)
    grid[:, 2] = True
    assert count_regions(grid) == 2
    assert not is_solvable(grid, (0, 0), (0, 4))
    assert not reachable_mask(grid, (0, 2)).any()


def test_open_edge_count():
    assert open_edge_count(create_filled_maze(3, 3)) == 0
    assert open_edge_count(np.zeros((3, 3), dtype=np.uint8)) == 12
    assert open_edge_count(_two_rooms()) == 3


def test_evaluate_planners_rows(seed=0):
    env = generate_maze(10, 10, braid=0.3, rng=np.random.default_rng(seed))
    before = env.cells.copy()
    planners = {name: get_planner(name) for name in ("a_star", "bfs", "dfs")}
    rows = evaluate_planners(env.cells, env.start, env.goal, planners)
    assert [r['planner'] for r in rows] == ["a_star", "bfs", "dfs"]
    for r in rows:
        assert r['success'] and r['valid']
        assert r['length'] == r['cost'] + 1
        assert r['time_sec'] >= 0
    assert rows[0]['cost'] == rows[1]['cost'] <= rows[2]['cost']
    assert np.array_equal(env.cells, before)
