#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
D* Lite incremental planner for raw wall-bit mazes.

The search runs backwards from the goal, so the start may move and walls may
appear or disappear between calls; only the cells whose cost-to-goal is
invalidated by a change are re-expanded.

State per cell:
    g    current cost-to-goal estimate
    rhs  one-step lookahead: min over available neighbors of (cost + g);
         rhs(goal) = 0
A cell is locally consistent when g == rhs. Inconsistent cells sit in the
priority queue U keyed by

    (k1, k2) = (min(g, rhs) + h(start, s) + km, min(g, rhs))

ordered lexicographically. km grows by h(last, start) whenever the start moves
so keys already in U stay lower bounds without re-keying the queue.

g, rhs, km and the keys count steps. Every open edge has the same cost, so
edge_cost only scales what is reported (cost_to_goal); keeping the search in
whole steps keeps the equality tests between cost + g and rhs exact.

Usage:
    solver = DStarLite(maze, start, goal)
    path = solver.solve(start)
    edit = remove_walls(maze, [((2, 3), (2, 4))])   # mutates maze in place
    path = solver.solve(robot_pos, edit)

Based on Koenig & Likhachev, "D* Lite", AAAI 2002.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging
import math
import numpy as np

from mazes.affordances import MazeEdit
from mazes.grid import (
    Cell,
    available_neighbors,
    direction_between,
    grid_neighbors,
    has_wall_between,
    in_bounds,
    is_occupancy_grid,
)
from planners.heuristics import Heuristic, get_heuristic
from planners.indexed_heap import IndexedMinHeap

logger = logging.getLogger(__name__)

INF = math.inf
Key = Tuple[float, float]


def compare_priority(a: Key, b: Key) -> float:
    """Lexicographic (k1, k2) comparison; negative when a < b."""
    if a[0] != b[0]:
        return -1 if a[0] < b[0] else 1
    if a[1] != b[1]:
        return -1 if a[1] < b[1] else 1
    return 0


def _as_cell(pos: Sequence[int]) -> Cell:
    return (int(pos[0]), int(pos[1]))


class DStarLite:
    """Owns g, rhs, the queue U and km; replans through solve()."""

    def __init__(self,
                 maze: np.ndarray,
                 start: Tuple[int, int],
                 goal: Tuple[int, int],
                 heuristic: Union[str, Heuristic, None] = None,
                 edge_cost: float = 1.0):
        assert not is_occupancy_grid(maze), "D* Lite works on raw wall-bit mazes"
        assert edge_cost > 0
        assert in_bounds(*_as_cell(goal), *maze.shape), f"goal {goal} is outside the maze"
        self.maze = maze
        self.h = get_heuristic(heuristic)
        self.edge_cost = float(edge_cost)
        self.start = _as_cell(start)
        self.last = self.start
        self.goal = _as_cell(goal)
        self.km = 0.0
        self.expanded = 0

        shape = maze.shape
        self.g = np.full(shape, INF, dtype=np.float64)
        self.rhs = np.full(shape, INF, dtype=np.float64)
        self.U = IndexedMinHeap(compare=compare_priority, minimum=(-INF, -INF))

        self.rhs[self.goal] = 0.0
        self.U.insert(self.goal, self.calculate_key(self.goal))

    # ------------------------------ costs -------------------------------- #

    def _h(self, a: Cell, b: Cell) -> float:
        return float(self.h(a, b))

    def cost(self, a: Cell, b: Cell) -> float:
        """Steps between adjacent cells under the current maze: 1 or inf."""
        return INF if has_wall_between(a, b, self.maze) else 1.0

    def _cost_from_value(self, a_value: int, a: Cell, b: Cell) -> float:
        """Steps a -> b had `a` held the wall bits `a_value`."""
        return INF if (a_value & direction_between(a, b)) else 1.0

    def cost_to_goal(self, s: Optional[Tuple[int, int]] = None) -> float:
        """Cost of the best known path from s (default: start), in edge_cost units."""
        s = self.start if s is None else _as_cell(s)
        return float(self.rhs[s]) * self.edge_cost

    def lookahead(self, s: Cell) -> float:
        """min over available neighbors of cost + g; inf for a walled-in cell."""
        best = INF
        for n in available_neighbors(s, self.maze):
            best = min(best, self.cost(s, n) + self.g[n])
        return best

    # ------------------------------ queue -------------------------------- #

    def calculate_key(self, s: Cell) -> Key:
        k2 = min(self.g[s], self.rhs[s])
        return (float(k2 + self._h(self.start, s) + self.km), float(k2))

    def update_node(self, s: Cell) -> None:
        """Queue s iff it is inconsistent, with a fresh key."""
        inconsistent = self.g[s] != self.rhs[s]
        queued = self.U.has_key(s)
        if inconsistent and queued:
            self.U.modify_key(self.U.find_index(s), self.calculate_key(s))
        elif inconsistent:
            self.U.insert(s, self.calculate_key(s))
        elif queued:
            self.U.delete_key(self.U.find_index(s))

    def compute_shortest_path(self) -> None:
        g, rhs = self.g, self.rhs
        while not self.U.is_empty():
            k_start = self.calculate_key(self.start)
            if not (compare_priority(self.U.top_value(), k_start) < 0
                    or rhs[self.start] != g[self.start]):
                break

            u, k_old = self.U.extract_min()
            k_new = self.calculate_key(u)

            if compare_priority(k_old, k_new) < 0:
                # Stale key: requeue and look at it again later
                self.U.insert(u, k_new)
            elif g[u] > rhs[u]:
                # Overconsistent: accept the improvement
                self.expanded += 1
                g[u] = rhs[u]
                for s in available_neighbors(u, self.maze):
                    if s != self.goal:
                        rhs[s] = min(rhs[s], self.cost(s, u) + g[u])
                    self.update_node(s)
            else:
                # Underconsistent: anything that leaned on u must look again
                self.expanded += 1
                g_old = g[u]
                g[u] = INF
                for s in available_neighbors(u, self.maze):
                    if s != self.goal and rhs[s] == self.cost(s, u) + g_old:
                        rhs[s] = self.lookahead(s)
                    self.update_node(s)
                self.update_node(u)

    # ------------------------------ edits -------------------------------- #

    def _update_edge(self, u: Cell, v: Cell, c_old: float, c_new: float) -> None:
        if u != self.goal:
            if c_old > c_new:
                self.rhs[u] = min(self.rhs[u], c_new + self.g[v])
            elif self.rhs[u] == c_old + self.g[v]:
                self.rhs[u] = self.lookahead(u)
        self.update_node(u)

    def apply_edit(self, edit: MazeEdit) -> int:
        """
        Fold a maze edit into g/rhs/U. The maze must already hold the new
        walls; `edit` carries each changed cell's previous value.

        Returns the number of edges whose cost changed.
        """
        prior: Dict[Cell, int] = {
            _as_cell(p): int(v) for p, v in zip(edit.updated_cells, edit.original_values)
        }
        seen = set()
        changed = 0
        for v in prior:
            for u in grid_neighbors(v, self.maze.shape):
                edge = (min(u, v), max(u, v))
                if edge in seen:
                    continue
                seen.add(edge)
                c_old = self._cost_from_value(prior[v], v, u)
                c_new = self.cost(v, u)
                if c_old == c_new:
                    continue
                changed += 1
                self._update_edge(v, u, c_old, c_new)
                self._update_edge(u, v, c_old, c_new)
        logger.debug("D* Lite: edit touched %d cells, %d edge costs changed", len(prior), changed)
        return changed

    # ------------------------------- solve ------------------------------- #

    def extract_path(self) -> List[Cell]:
        """Walk greedily downhill in cost + g from start to goal."""
        if self.rhs[self.start] == INF:
            return []
        path = [self.start]
        current = self.start
        limit = self.maze.size
        while current != self.goal:
            best, best_cost = None, INF
            for n in available_neighbors(current, self.maze):
                c = self.cost(current, n) + self.g[n]
                if c < best_cost:
                    best, best_cost = n, c
            if best is None:
                return []
            current = best
            path.append(current)
            if len(path) > limit:
                logger.warning("D* Lite: walk from %s exceeded %d steps; giving up", self.start, limit)
                return []
        return path

    def solve(self, start: Tuple[int, int], edit: Optional[MazeEdit] = None) -> List[Cell]:
        """
        Plan (or replan) from `start` to the goal.

        Parameters
        ----------
        start : (r, c)
            Current position; may differ from the previous call.
        edit : MazeEdit, optional
            Cells changed since the previous call and their prior values.

        Returns
        -------
        list of (r, c) from start to goal inclusive, or [] when unreachable.
        """
        start = _as_cell(start)
        H, W = self.maze.shape
        if not in_bounds(*start, H, W):
            return []
        self.km += self._h(self.last, start)
        self.last = start
        self.start = start

        if edit is not None and len(edit):
            self.apply_edit(edit)

        before = self.expanded
        self.compute_shortest_path()
        path = self.extract_path()
        logger.debug("D* Lite: solve from %s expanded %d cells, path length %d",
                     start, self.expanded - before, len(path))
        return path


class DStarLitePlanner:
    """One-shot D* Lite with the unified plan() API."""

    def __init__(self, heuristic: Union[str, Heuristic, None] = None, edge_cost: float = 1.0):
        self.heuristic = heuristic
        self.edge_cost = edge_cost

    def plan(self, maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        H, W = maze.shape
        if not (in_bounds(*start, H, W) and in_bounds(*goal, H, W)):
            return {'success': False, 'path': [], 'expanded': 0}
        solver = DStarLite(maze, start, goal, heuristic=self.heuristic, edge_cost=self.edge_cost)
        path = solver.solve(start)
        return {'success': bool(path), 'path': path, 'expanded': solver.expanded}


def solve_d_star_lite(maze: np.ndarray,
                      start: Tuple[int, int],
                      goal: Tuple[int, int],
                      expose_solver: bool = False,
                      heuristic: Union[str, Heuristic, None] = None,
                      edge_cost: float = 1.0):
    """
    Solve once with D* Lite. With expose_solver=True return (path, solver) so
    the caller can keep replanning through solver.solve(start, edit).

    A start or goal outside the maze yields [] (and no solver).
    """
    H, W = maze.shape
    if not (in_bounds(*_as_cell(start), H, W) and in_bounds(*_as_cell(goal), H, W)):
        return ([], None) if expose_solver else []
    solver = DStarLite(maze, start, goal, heuristic=heuristic, edge_cost=edge_cost)
    path = solver.solve(start)
    if expose_solver:
        return path, solver
    return path
