# -*- coding: utf-8 -*-
"""
Planners on mazes with a unified API:
planner.plan(maze: np.ndarray, start: (r,c), goal: (r,c))
  -> {'success': bool, 'path': List[(r,c)] ([] on failure), 'expanded': int}

`maze` is a raw wall-bit maze (uint8) or, for A*/BFS/DFS, an occupancy grid
(bool, True = wall). Each planner module also exposes a solve_* function that
returns just the path.
"""

from __future__ import annotations
from typing import Any, Dict, Type

from .a_star import AStarPlanner, solve_a_star
from .bfs import BFSPlanner, solve_bfs
from .dfs import DFSPlanner, solve_dfs
from .d_star_lite import DStarLite, DStarLitePlanner, solve_d_star_lite
from .ant_colony import ACOConfig, AntColonyPlanner, solve_aco
from .heuristics import HEURISTICS, euclidean, manhattan, get_heuristic
from .indexed_heap import IndexedMinHeap

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type] = {
    "a_star": AStarPlanner,
    "bfs": BFSPlanner,
    "dfs": DFSPlanner,
    "d_star_lite": DStarLitePlanner,
    "aco": AntColonyPlanner,
}

# Planners that guarantee a shortest path on unit-cost mazes
OPTIMAL_PLANNERS = ("a_star", "bfs", "d_star_lite")


def get_planner(name: str, **kwargs) -> Any:
    """
    Factory: instantiate a planner by name.

    Parameters
    ----------
    name : str
        One of: 'a_star', 'bfs', 'dfs', 'd_star_lite', 'aco'
    kwargs : dict
        Passed to the planner constructor (e.g., heuristic='euclidean')
    """
    name = name.strip().lower()
    if name not in PLANNERS:
        raise ValueError(f"Unknown planner '{name}'. Available: {sorted(PLANNERS)}")
    return PLANNERS[name](**kwargs)


__all__ = [
    "AStarPlanner",
    "BFSPlanner",
    "DFSPlanner",
    "DStarLite",
    "DStarLitePlanner",
    "AntColonyPlanner",
    "ACOConfig",
    "IndexedMinHeap",
    "HEURISTICS",
    "euclidean",
    "manhattan",
    "get_heuristic",
    "solve_a_star",
    "solve_bfs",
    "solve_dfs",
    "solve_d_star_lite",
    "solve_aco",
    "PLANNERS",
    "OPTIMAL_PLANNERS",
    "get_planner",
]
