#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ant Colony Optimization solver (approximate; paths are rarely shortest).

Ants walk from the start, each step choosing an unvisited available neighbor
with probability proportional to

    (pheromone + 1e-6) * 1 / (1 + h(neighbor, goal))

and backtracking along their own stack when cornered. Visited cells are shared
by the whole colony for one call (kept in a scratch matrix, not in the maze).
After each round pheromone evaporates and every ant deposits on its cell.
The first ant to stand on the goal returns its stack as the path.

The search gives up after `max_iterations` rounds, or once every ant is
stranded back at the start; both return [] like an unreachable goal.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple, Union
import logging
import numpy as np

from mazes.grid import Cell, available_neighbors, in_bounds
from planners.heuristics import Heuristic, get_heuristic

logger = logging.getLogger(__name__)


@dataclass
class ACOConfig:
    heuristic: Union[str, Heuristic] = "euclidean"
    number_of_ants: int = 10
    evaporation_rate: float = 0.1
    pheromone_deposit: float = 1.0
    max_iterations: int = 100_000
    seed: Optional[int] = None


class AntColonyPlanner:
    def __init__(self, config: Optional[ACOConfig] = None, **overrides):
        config = config or ACOConfig()
        if overrides:
            config = replace(config, **overrides)
        assert config.number_of_ants > 0
        assert 0.0 <= config.evaporation_rate <= 1.0
        self.config = config
        self.h = get_heuristic(config.heuristic)

    def _select_move(self, options: List[Cell], pheromone: np.ndarray,
                     goal: Cell, rng: np.random.Generator) -> Cell:
        weights = np.array([
            (pheromone[n] + 1e-6) / (1.0 + self.h(n, goal)) for n in options
        ], dtype=np.float64)
        weights /= weights.sum()
        return options[int(rng.choice(len(options), p=weights))]

    def plan(self, maze: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> Dict:
        H, W = maze.shape
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        if not (in_bounds(*start, H, W) and in_bounds(*goal, H, W)):
            return {'success': False, 'path': [], 'expanded': 0}

        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        pheromone = np.zeros((H, W), dtype=np.float64)
        visited = np.zeros((H, W), dtype=bool)

        ants: List[Cell] = [start] * cfg.number_of_ants
        stacks: List[List[Cell]] = [[] for _ in range(cfg.number_of_ants)]
        stranded = [False] * cfg.number_of_ants
        moves = 0

        for iteration in range(cfg.max_iterations):
            for i, pos in enumerate(ants):
                if stranded[i]:
                    continue
                visited[pos] = True

                if pos == goal:
                    path = stacks[i] + [pos]
                    logger.debug("ACO: ant %d reached %s after %d rounds", i, goal, iteration)
                    return {'success': True, 'path': path, 'expanded': moves}

                options = [n for n in available_neighbors(pos, maze) if not visited[n]]
                if not options:
                    if stacks[i]:
                        ants[i] = stacks[i].pop()
                    else:
                        stranded[i] = True
                    continue

                stacks[i].append(pos)
                ants[i] = self._select_move(options, pheromone, goal, rng)
                moves += 1

            if all(stranded):
                logger.debug("ACO: every ant stranded after %d rounds", iteration)
                break

            pheromone *= 1.0 - cfg.evaporation_rate
            for i, pos in enumerate(ants):
                if not stranded[i]:
                    pheromone[pos] += cfg.pheromone_deposit
        else:
            logger.debug("ACO: hit the %d round cap", cfg.max_iterations)

        return {'success': False, 'path': [], 'expanded': moves}


def solve_aco(maze: np.ndarray,
              start: Tuple[int, int],
              goal: Tuple[int, int],
              config: Optional[ACOConfig] = None) -> List[Cell]:
    return AntColonyPlanner(config).plan(maze, start, goal)['path']
