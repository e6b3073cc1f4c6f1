#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
convert.py
----------
Conversions between maze representations:

- raw maze       : (rows, cols) uint8 wall bits (see grid.py)
- node matrix    : nested lists of MatrixNode with one boolean per wall
- node graph     : GraphNode objects linked to their open neighbors
- occupancy grid : (H, W) bool array, True = wall cell. A raw maze of
                   rows x cols cells with supersample factor f becomes a grid of
                   (rows*f + rows - 1) x (cols*f + cols - 1); one row/column of
                   wall cells is inserted between neighboring cells.
- binary / base64: 8-byte header (rows, cols as little-endian uint32)
                   followed by one byte per cell, VISITED stripped.

Also supersampling (scale a maze up while keeping its pattern), either with
thick walls (supersample_grid) or one-cell walls (supersample_grid_sparse).
"""

from __future__ import annotations

import base64
import binascii
import struct
from dataclasses import astuple, dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from mazes.grid import ALL_WALLS, EAST, NORTH, SOUTH, WEST

HEADER = struct.Struct("<II")


# ------------------------------- Node matrix -------------------------------- #

@dataclass
class MatrixNode:
    has_north_wall: bool
    has_south_wall: bool
    has_east_wall: bool
    has_west_wall: bool

    @classmethod
    def from_cell(cls, cell: int) -> "MatrixNode":
        cell = int(cell)
        return cls(bool(cell & NORTH), bool(cell & SOUTH),
                   bool(cell & EAST), bool(cell & WEST))

    def to_cell(self) -> int:
        return ((self.has_north_wall << 3) | (self.has_south_wall << 2)
                | (self.has_east_wall << 1) | int(self.has_west_wall))


def raw_to_node_matrix(cells: np.ndarray) -> List[List[MatrixNode]]:
    return [[MatrixNode.from_cell(v) for v in row] for row in cells]


def node_matrix_to_raw(nodes: Sequence[Sequence[MatrixNode]]) -> np.ndarray:
    return np.array([[n.to_cell() for n in row] for row in nodes], dtype=np.uint8)


# -------------------------------- Node graph -------------------------------- #

@dataclass(eq=False)
class GraphNode:
    """A cell linked to the neighbors it can step to (None behind a wall)."""
    has_north_wall: bool
    has_south_wall: bool
    has_east_wall: bool
    has_west_wall: bool
    north: Optional["GraphNode"] = field(default=None, repr=False)
    south: Optional["GraphNode"] = field(default=None, repr=False)
    east: Optional["GraphNode"] = field(default=None, repr=False)
    west: Optional["GraphNode"] = field(default=None, repr=False)
    is_start: bool = False
    is_goal: bool = False

    def to_cell(self) -> int:
        return ((self.has_north_wall << 3) | (self.has_south_wall << 2)
                | (self.has_east_wall << 1) | int(self.has_west_wall))

    def links(self) -> List[Tuple["GraphNode", Tuple[int, int]]]:
        """Reachable neighbors with their (dr, dc) offsets."""
        out = []
        for node, wall, delta in ((self.north, self.has_north_wall, (-1, 0)),
                                  (self.south, self.has_south_wall, (1, 0)),
                                  (self.east, self.has_east_wall, (0, 1)),
                                  (self.west, self.has_west_wall, (0, -1))):
            if not wall and node is not None:
                out.append((node, delta))
        return out


def raw_to_node_graph(cells: np.ndarray,
                      start: Sequence[int],
                      goal: Sequence[int]) -> GraphNode:
    """Link every cell to its open in-bounds neighbors; returns the start node."""
    rows, cols = cells.shape
    nodes = [[GraphNode(*astuple(MatrixNode.from_cell(v))) for v in row] for row in cells]
    for r in range(rows):
        for c in range(cols):
            node = nodes[r][c]
            if not node.has_north_wall and r > 0:
                node.north = nodes[r - 1][c]
            if not node.has_south_wall and r < rows - 1:
                node.south = nodes[r + 1][c]
            if not node.has_east_wall and c < cols - 1:
                node.east = nodes[r][c + 1]
            if not node.has_west_wall and c > 0:
                node.west = nodes[r][c - 1]
    nodes[int(start[0])][int(start[1])].is_start = True
    nodes[int(goal[0])][int(goal[1])].is_goal = True
    return nodes[int(start[0])][int(start[1])]


def node_graph_to_raw(node: GraphNode, start: Sequence[int] = (0, 0)) -> np.ndarray:
    """
    Rebuild a raw maze from the nodes reachable from `node`, which sits at
    `start`. The maze is sized by the largest index reached; cells the walk
    never reaches are fully walled.
    """
    index: Dict[int, Tuple[GraphNode, Tuple[int, int]]] = {}
    stack = [(node, (int(start[0]), int(start[1])))]
    while stack:
        current, pos = stack.pop()
        if id(current) in index:
            continue
        if pos[0] < 0 or pos[1] < 0:
            raise ValueError(f"Node graph reaches {pos}; is {tuple(start)} the right start index?")
        index[id(current)] = (current, pos)
        for nbr, (dr, dc) in current.links():
            stack.append((nbr, (pos[0] + dr, pos[1] + dc)))

    rows = 1 + max(pos[0] for _, pos in index.values())
    cols = 1 + max(pos[1] for _, pos in index.values())
    cells = np.full((rows, cols), ALL_WALLS, dtype=np.uint8)
    for current, pos in index.values():
        cells[pos] = current.to_cell()
    return cells


# ----------------------------- Occupancy grid ------------------------------- #

def raw_to_grid(cells: np.ndarray, factor: int = 1) -> np.ndarray:
    """
    Convert a raw maze into an occupancy grid.

    Each cell becomes a factor x factor block of free space. Wall cells are
    placed on the separator rows/columns wherever the raw maze has a wall.
    Separator corners are always walls; they never join two cells under
    4-connectivity.
    """
    rows, cols = cells.shape
    step = factor + 1
    H, W = rows * step - 1, cols * step - 1
    grid = np.zeros((H, W), dtype=bool)

    for r in range(rows - 1):
        for c in range(cols - 1):
            grid[r * step + factor, c * step + factor] = True

    for r in range(rows):
        for c in range(cols):
            gr, gc = r * step, c * step
            cell = int(cells[r, c])
            if r < rows - 1 and cell & SOUTH:
                grid[gr + factor, gc:gc + factor] = True
            if c < cols - 1 and cell & EAST:
                grid[gr:gr + factor, gc + factor] = True
    return grid


def grid_to_raw(grid: np.ndarray, factor: int = 1) -> np.ndarray:
    """Inverse of raw_to_grid; the outer border is always walled."""
    H, W = grid.shape
    step = factor + 1
    rows, cols = (H + 1) // step, (W + 1) // step
    if rows * step - 1 != H or cols * step - 1 != W:
        raise ValueError(f"Grid of shape {grid.shape} does not match factor {factor}")

    cells = np.zeros((rows, cols), dtype=np.uint8)
    for r in range(rows):
        for c in range(cols):
            gr, gc = r * step, c * step
            value = 0
            if r == 0 or grid[gr - 1, gc]:
                value |= NORTH
            if r == rows - 1 or grid[gr + factor, gc]:
                value |= SOUTH
            if c == cols - 1 or grid[gr, gc + factor]:
                value |= EAST
            if c == 0 or grid[gr, gc - 1]:
                value |= WEST
            cells[r, c] = value
    return cells


def raw_to_grid_point(pos: Sequence[int], factor: int = 1) -> Tuple[int, int]:
    return (int(pos[0]) * (factor + 1), int(pos[1]) * (factor + 1))


def grid_to_raw_point(pos: Sequence[int], factor: int = 1) -> Tuple[int, int]:
    return (int(pos[0]) // (factor + 1), int(pos[1]) // (factor + 1))


# ------------------------------ Supersampling ------------------------------- #

def supersample_maze(cells: np.ndarray, factor: int = 2) -> np.ndarray:
    """
    Scale a raw maze by `factor`. Each cell becomes a factor x factor block
    with walls only on the block's outer sides.
    """
    rows, cols = cells.shape
    out = np.zeros((rows * factor, cols * factor), dtype=np.uint8)
    for r in range(rows):
        for c in range(cols):
            cell = int(cells[r, c])
            r0, c0 = r * factor, c * factor
            if cell & NORTH:
                out[r0, c0:c0 + factor] |= NORTH
            if cell & SOUTH:
                out[r0 + factor - 1, c0:c0 + factor] |= SOUTH
            if cell & EAST:
                out[r0:r0 + factor, c0 + factor - 1] |= EAST
            if cell & WEST:
                out[r0:r0 + factor, c0] |= WEST
    return out


def supersample_grid(grid: np.ndarray, factor: int = 2) -> np.ndarray:
    """Scale an occupancy grid; every wall cell becomes a factor x factor block."""
    return np.kron(grid, np.ones((factor, factor), dtype=bool)).astype(bool)


def supersample_grid_sparse(grid: np.ndarray, factor: int = 2) -> np.ndarray:
    """
    Scale a factor-1 occupancy grid while keeping walls one cell thick.

    The grid is read back as a raw maze and redrawn with 2 * factor free
    cells per maze cell: every cell plus its wall line (two grid rows)
    becomes 2 * factor free rows and one wall row.
    """
    return raw_to_grid(grid_to_raw(grid, 1), 2 * factor)


# ------------------------------ Serialization ------------------------------- #

def serialize_raw_to_binary(cells: np.ndarray) -> bytes:
    rows, cols = cells.shape
    body = (np.asarray(cells, dtype=np.uint8) & ALL_WALLS).tobytes(order="C")
    return HEADER.pack(rows, cols) + body


def deserialize_binary_to_raw(buffer: bytes) -> np.ndarray:
    if len(buffer) < HEADER.size:
        raise ValueError("Buffer is too short to hold a maze header")
    rows, cols = HEADER.unpack_from(buffer, 0)
    expected = HEADER.size + rows * cols
    if len(buffer) < expected:
        raise ValueError(f"Buffer holds {len(buffer)} bytes, expected {expected}")
    body = np.frombuffer(buffer, dtype=np.uint8, count=rows * cols, offset=HEADER.size)
    return body.reshape(rows, cols).copy()


def serialize_raw_to_string(cells: np.ndarray) -> str:
    return base64.b64encode(serialize_raw_to_binary(cells)).decode("ascii")


def deserialize_string_to_raw(text: str) -> np.ndarray:
    try:
        buffer = base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Not a base64 maze: {e}") from e
    return deserialize_binary_to_raw(buffer)
