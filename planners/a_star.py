#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A* path planner for mazes (raw wall-bit mazes or occupancy grids).
- Moves are 4-connected; every step costs `edge_cost`.
- Heuristic: Manhattan by default (consistent on 4-connected grids);
  estimates are scaled by `edge_cost` so they stay admissible.
- The open set is an IndexedMinHeap keyed by cell; a cell whose g improves
  while queued gets its priority decreased in place.

Returns {'success': bool, 'path': list[(r,c)], 'expanded': int};
path is [] when the goal cannot be reached.
"""

from __future__ import annotations
from typing import Dict, List, Tuple, Union
import logging
import numpy as np

from mazes.grid import Cell, in_bounds, is_occupancy_grid, neighbor_function
from planners.heuristics import Heuristic, get_heuristic
from planners.indexed_heap import IndexedMinHeap

logger = logging.getLogger(__name__)


class AStarPlanner:
    def __init__(self, heuristic: Union[str, Heuristic, None] = None, edge_cost: float = 1.0):
        assert edge_cost > 0
        self.h = get_heuristic(heuristic)
        self.edge_cost = float(edge_cost)

    def _heuristic(self, a: Cell, b: Cell) -> float:
        return self.edge_cost * self.h(a, b)

    @staticmethod
    def _reconstruct(came_from: Dict[Cell, Cell], current: Cell) -> List[Cell]:
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def plan(self, maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        H, W = maze.shape
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))

        # Validate start and goal positions
        if not (in_bounds(*start, H, W) and in_bounds(*goal, H, W)):
            return {'success': False, 'path': [], 'expanded': 0}
        if is_occupancy_grid(maze) and (maze[start] or maze[goal]):
            return {'success': False, 'path': [], 'expanded': 0}

        neighbors = neighbor_function(maze)

        g = np.full((H, W), np.inf, dtype=np.float64)
        f = np.full((H, W), np.inf, dtype=np.float64)
        came_from: Dict[Cell, Cell] = {}

        g[start] = 0.0
        f[start] = self._heuristic(start, goal)

        open_set = IndexedMinHeap()
        open_set.insert(start, float(f[start]))
        expanded = 0

        while not open_set.is_empty():
            current = open_set.peek().key

            if current == goal:
                path = self._reconstruct(came_from, current)
                logger.debug("A*: %s -> %s, %d expanded, cost %.3f", start, goal, expanded, g[goal])
                return {'success': True, 'path': path, 'expanded': expanded}

            open_set.extract_min()
            expanded += 1

            for nbr in neighbors(current, maze):
                tentative_g = g[current] + self.edge_cost

                # Record a better path if one has been found
                if tentative_g < g[nbr]:
                    came_from[nbr] = current
                    g[nbr] = tentative_g
                    f[nbr] = tentative_g + self._heuristic(nbr, goal)
                    if open_set.has_key(nbr):
                        open_set.decrease_key(open_set.find_index(nbr), float(f[nbr]))
                    else:
                        open_set.insert(nbr, float(f[nbr]))

        logger.debug("A*: no path %s -> %s after %d expansions", start, goal, expanded)
        return {'success': False, 'path': [], 'expanded': expanded}


def solve_a_star(maze: np.ndarray,
                 start: Tuple[int, int],
                 goal: Tuple[int, int],
                 heuristic: Union[str, Heuristic, None] = None,
                 edge_cost: float = 1.0) -> List[Cell]:
    """Functional form: the path from start to goal, or [] if none exists."""
    return AStarPlanner(heuristic=heuristic, edge_cost=edge_cost).plan(maze, start, goal)['path']
