#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Breadth-First Search planner (unweighted shortest hops).
- Works on raw wall-bit mazes and occupancy grids, 4-connected.
- Visited cells live in a per-call boolean matrix, never in the maze itself,
  so the same maze can be searched any number of times.
"""

from __future__ import annotations
from typing import Dict, List, Tuple
from collections import deque
import logging
import numpy as np

from mazes.grid import Cell, in_bounds, is_occupancy_grid, neighbor_function

logger = logging.getLogger(__name__)


class BFSPlanner:
    @staticmethod
    def _reconstruct(par_r: np.ndarray, par_c: np.ndarray,
                     start: Tuple[int, int], goal: Tuple[int, int]):
        if par_r[goal] == -1 and goal != start:
            return []
        path = []
        r, c = goal
        while (r, c) != start:
            path.append((int(r), int(c)))
            pr, pc = par_r[r, c], par_c[r, c]
            if pr == -1:
                return []
            r, c = int(pr), int(pc)
        path.append(start)
        path.reverse()
        return path

    def plan(self, maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        H, W = maze.shape
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
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

        dq = deque()
        dq.append(start)
        visited[start] = True
        expanded = 0

        while dq:
            r, c = dq.popleft()
            if (r, c) == goal:
                path = self._reconstruct(par_r, par_c, start, goal)
                return {'success': True, 'path': path, 'expanded': expanded}
            expanded += 1
            for nr, nc in neighbors((r, c), maze):
                if visited[nr, nc]:
                    continue
                visited[nr, nc] = True
                par_r[nr, nc] = r
                par_c[nr, nc] = c
                dq.append((nr, nc))

        logger.debug("BFS: no path %s -> %s after %d expansions", start, goal, expanded)
        return {'success': False, 'path': [], 'expanded': expanded}


def solve_bfs(maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> List[Cell]:
    return BFSPlanner().plan(maze, start, goal)['path']
