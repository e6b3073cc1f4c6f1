#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest

from mazes.convert import (
    HEADER, GraphNode, MatrixNode,
    deserialize_binary_to_raw, deserialize_string_to_raw, grid_to_raw,
    grid_to_raw_point, node_graph_to_raw, node_matrix_to_raw, raw_to_grid,
    raw_to_grid_point, raw_to_node_graph,
    raw_to_node_matrix, serialize_raw_to_binary, serialize_raw_to_string,
    supersample_grid, supersample_grid_sparse, supersample_maze,
)
from mazes.generator import generate_maze
from mazes.grid import (
    ALL_WALLS, EAST, NORTH, VISITED, WEST, create_filled_maze, remove_wall_between,
    walls_are_symmetric,
)
from planners.bfs import solve_bfs
from eval.metrics import count_regions, path_cost


def _maze(seed=0, rows=7, cols=9):
    return generate_maze(rows, cols, method="kruskal", braid=0.3,
                         rng=np.random.default_rng(seed)).cells


def test_node_matrix_roundtrip():
    cells = _maze()
    nodes = raw_to_node_matrix(cells)
    assert isinstance(nodes[0][0], MatrixNode)
    assert nodes[0][0].has_north_wall and nodes[0][0].has_west_wall
    assert np.array_equal(node_matrix_to_raw(nodes), cells)


def test_raw_to_grid_layout():
    cells = create_filled_maze(2, 2)
    remove_wall_between((0, 0), (0, 1), cells)
    grid = raw_to_grid(cells)
    assert grid.shape == (3, 3)
    assert grid.dtype == bool
    # Cells free, open edge free, walled edges and the corner blocked
    assert not grid[0, 0] and not grid[0, 2] and not grid[2, 0] and not grid[2, 2]
    assert not grid[0, 1]
    assert grid[1, 0] and grid[1, 2] and grid[2, 1]
    assert grid[1, 1]


@pytest.mark.parametrize("factor", [1, 2, 3])
def test_grid_roundtrip(factor):
    cells = _maze(seed=factor)
    grid = raw_to_grid(cells, factor)
    assert grid.shape == (7 * (factor + 1) - 1, 9 * (factor + 1) - 1)
    assert np.array_equal(grid_to_raw(grid, factor), cells)


def test_grid_to_raw_shape_mismatch():
    with pytest.raises(ValueError):
        grid_to_raw(np.zeros((4, 5), dtype=bool), factor=1)


def test_point_mapping():
    assert raw_to_grid_point((3, 4)) == (6, 8)
    assert raw_to_grid_point((3, 4), factor=2) == (9, 12)
    assert grid_to_raw_point((9, 12), factor=2) == (3, 4)
    assert grid_to_raw_point((7, 8)) == (3, 4)


def test_supersample_maze_keeps_structure():
    cells = _maze(seed=4, rows=5, cols=5)
    big = supersample_maze(cells, 2)
    assert big.shape == (10, 10)
    assert walls_are_symmetric(big)
    assert count_regions(big) == 1
    small = solve_bfs(cells, (0, 0), (4, 4))
    large = solve_bfs(big, (0, 0), (9, 9))
    assert large
    assert path_cost(large) >= path_cost(small)


def test_supersample_grid():
    grid = np.array([[True, False], [False, False]])
    big = supersample_grid(grid, 3)
    assert big.shape == (6, 6)
    assert big[:3, :3].all()
    assert not big[3:, :].any()


def test_binary_roundtrip_strips_visited():
    cells = _maze(seed=8)
    buf = serialize_raw_to_binary(cells | VISITED)
    assert len(buf) == HEADER.size + cells.size
    assert HEADER.unpack_from(buf, 0) == (7, 9)
    assert np.array_equal(deserialize_binary_to_raw(buf), cells)


def test_string_roundtrip():
    cells = _maze(seed=9)
    text = serialize_raw_to_string(cells)
    assert isinstance(text, str)
    out = deserialize_string_to_raw(text)
    assert np.array_equal(out, cells)
    # Independent copy, writable
    out[0, 0] = 0
    assert cells[0, 0] & (NORTH | WEST)


def test_malformed_serialized_data():
    with pytest.raises(ValueError):
        deserialize_binary_to_raw(b"\x01\x00")
    with pytest.raises(ValueError):
        deserialize_binary_to_raw(HEADER.pack(4, 4) + bytes(3))
    with pytest.raises(ValueError):
        deserialize_string_to_raw("not base64!!")


def test_empty_body_ok():
    buf = HEADER.pack(1, 2) + bytes([ALL_WALLS, ALL_WALLS])
    assert deserialize_binary_to_raw(buf).shape == (1, 2)


def _walk_graph(node):
    seen, stack = {id(node): node}, [node]
    while stack:
        for nbr, _ in stack.pop().links():
            if id(nbr) not in seen:
                seen[id(nbr)] = nbr
                stack.append(nbr)
    return list(seen.values())


@pytest.mark.parametrize("start", [(0, 0), (3, 4)])
def test_node_graph_roundtrip(start):
    cells = _maze(seed=2)
    node = raw_to_node_graph(cells, start, (6, 8))
    assert isinstance(node, GraphNode) and node.is_start
    nodes = _walk_graph(node)
    assert len(nodes) == cells.size
    assert sum(n.is_goal for n in nodes) == 1
    assert np.array_equal(node_graph_to_raw(node, start), cells)


def test_node_graph_links_are_mutual():
    cells = create_filled_maze(2, 2)
    remove_wall_between((0, 0), (0, 1), cells)
    remove_wall_between((0, 1), (1, 1), cells)
    node = raw_to_node_graph(cells, (0, 0), (1, 1))
    assert node.south is None and node.north is None and node.west is None
    assert node.east.west is node
    assert node.east.south.is_goal
    assert node.east.south.north is node.east


def test_node_graph_partial_and_bad_start():
    cells = create_filled_maze(3, 3)
    remove_wall_between((0, 0), (0, 1), cells)
    node = raw_to_node_graph(cells, (0, 0), (2, 2))
    # Only the reachable part is rebuilt
    out = node_graph_to_raw(node, (0, 0))
    assert out.shape == (1, 2)
    assert out.tolist() == [[ALL_WALLS & ~EAST, ALL_WALLS & ~WEST]]

    other = raw_to_node_graph(cells, (0, 1), (2, 2))
    with pytest.raises(ValueError):
        node_graph_to_raw(other, (0, 0))


def test_supersample_grid_sparse_keeps_thin_walls():
    cells = _maze(seed=6, rows=5, cols=6)
    grid = raw_to_grid(cells)
    big = supersample_grid_sparse(grid, 2)
    assert big.shape == (5 * 5 - 1, 6 * 5 - 1)
    assert np.array_equal(big, raw_to_grid(cells, 4))
    assert np.array_equal(grid_to_raw(big, 4), cells)
    assert count_regions(big) == count_regions(grid) == 1
    with pytest.raises(ValueError):
        supersample_grid_sparse(np.zeros((4, 4), dtype=bool))
