#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Depth-First Search planner (not optimal, but useful as a baseline).
- Raw wall-bit mazes and occupancy grids, 4-connected.
- Returns the first path found; on a perfect maze that is the only path.
"""

from __future__ import annotations
from typing import Dict, List, Tuple
import logging
import numpy as np

from mazes.grid import Cell, in_bounds, is_occupancy_grid, neighbor_function

logger = logging.getLogger(__name__)


class DFSPlanner:
    @staticmethod
    def _reconstruct(par_r: np.ndarray, par_c: np.ndarray,
                     start: Tuple[int, int], goal: Tuple[int, int]):
        """Reconstruct path from parent arrays."""
        if par_r[goal] == -1 and goal != start:
            return []
        path = []
        r, c = goal
        while (r, c) != start:
            path.append((int(r), int(c)))
            pr, pc = int(par_r[r, c]), int(par_c[r, c])
            if pr == -1 and pc == -1:
                return []
            r, c = pr, pc
        path.append(start)
        path.reverse()
        return path

    def plan(self, maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        """
        Find a path from start to goal using depth-first search.

        Args:
            maze: raw (uint8 wall bits) or occupancy (bool, True = wall) maze
            start: (row, col) starting position
            goal: (row, col) goal position

        Returns:
            Dictionary with 'success' (bool), 'path' (list, [] on failure)
            and 'expanded' (number of cells popped)
        """
        H, W = maze.shape
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))

        # Validate start and goal
        if not (in_bounds(*start, H, W) and in_bounds(*goal, H, W)):
            return {'success': False, 'path': [], 'expanded': 0}

        if is_occupancy_grid(maze) and (maze[start] or maze[goal]):
            return {'success': False, 'path': [], 'expanded': 0}

        if start == goal:
            return {'success': True, 'path': [start], 'expanded': 0}

        neighbors = neighbor_function(maze)
        visited = np.zeros((H, W), dtype=bool)
        par_r = np.full((H, W), -1, dtype=np.int32)
        par_c = np.full((H, W), -1, dtype=np.int32)

        stack = [start]
        visited[start] = True
        expanded = 0

        while stack:
            r, c = stack.pop()
            if (r, c) == goal:
                path = self._reconstruct(par_r, par_c, start, goal)
                return {'success': True, 'path': path, 'expanded': expanded}
            expanded += 1

            # Explore neighbors
            for nr, nc in neighbors((r, c), maze):
                if visited[nr, nc]:
                    continue
                visited[nr, nc] = True
                par_r[nr, nc] = r
                par_c[nr, nc] = c
                stack.append((nr, nc))

        logger.debug("DFS: no path %s -> %s after %d expansions", start, goal, expanded)
        return {'success': False, 'path': [], 'expanded': expanded}


def solve_dfs(maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> List[Cell]:
    return DFSPlanner().plan(maze, start, goal)['path']
