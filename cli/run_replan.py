#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_replan.py
-------------
Incremental replanning vs planning from scratch:
- Generates a maze per seed and solves it once with D* Lite
- Repeatedly advances the agent a few cells along its current path, then
  opens and/or closes random walls
- Replans with the same D* Lite solver (fed the MazeEdit) and with a fresh
  A* on the edited maze, recording cost and expansions of both
- Writes one CSV row per replanning step

Example:
    python -m cli.run_replan --size 30x30 --num-mazes 10 --steps 8 \
        --remove 5 --add 2 --advance 3 --seed 0

The "agree" column is True when D* Lite and A* return paths of equal cost
(or both report the goal unreachable).
"""

from __future__ import annotations
import argparse
import csv
import logging
import os
import time

import numpy as np
import pandas as pd
from tqdm import tqdm

from mazes.affordances import random_wall_additions, random_wall_removals
from mazes.generator import GENERATORS, generate_maze
from planners.a_star import AStarPlanner
from planners.d_star_lite import DStarLite
from eval.metrics import is_valid_path, path_cost


def _ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def main():
    ap = argparse.ArgumentParser(description="Compare D* Lite replanning with A* from scratch.")
    ap.add_argument("--size", type=str, default="30x30", help="Maze size like 30x30")
    ap.add_argument("--generator", type=str, default="backtracking",
                    help=f"One of: {','.join(sorted(GENERATORS))}")
    ap.add_argument("--braid", type=float, default=0.0, help="Dead-end removal probability (0–1)")
    ap.add_argument("--num-mazes", type=int, default=10, help="Number of mazes (one per seed)")
    ap.add_argument("--steps", type=int, default=8, help="Replanning steps per maze")
    ap.add_argument("--remove", type=int, default=5, help="Walls opened per step")
    ap.add_argument("--add", type=int, default=0, help="Walls closed per step")
    ap.add_argument("--advance", type=int, default=3, help="Cells the agent moves before each edit")
    ap.add_argument("--heuristic", type=str, default="manhattan", help="euclidean|manhattan")
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--outdir", type=str, default="results/csv", help="Output directory for CSV")
    ap.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    H, W = (int(v) for v in args.size.lower().split("x"))
    a_star = AStarPlanner(heuristic=args.heuristic)

    _ensure_dir(args.outdir)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_csv = os.path.join(args.outdir, f"replan_s{args.seed}_{stamp}.csv")
    tmp_csv = out_csv + f".tmp_{os.getpid()}"
    fieldnames = [
        "maze_id", "step", "agent_r", "agent_c", "edited_cells",
        "dstar_cost", "dstar_expanded", "dstar_valid", "dstar_time_sec",
        "astar_cost", "astar_expanded", "astar_time_sec", "agree",
    ]

    with open(tmp_csv, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        for maze_id in tqdm(range(args.num_mazes), desc="Replanning"):
            rng = np.random.default_rng(args.seed + maze_id)
            env = generate_maze(H, W, method=args.generator, braid=args.braid, rng=rng)
            cells = env.cells
            solver = DStarLite(cells, env.start, env.goal, heuristic=args.heuristic)
            path = solver.solve(env.start)
            agent = env.start

            for step in range(1, args.steps + 1):
                if not path or agent == env.goal:
                    break
                agent = path[min(args.advance, len(path) - 1)]

                edit = random_wall_removals(cells, args.remove, rng)
                edit = edit.merge(random_wall_additions(cells, args.add, rng))

                before = solver.expanded
                t0 = time.perf_counter()
                path = solver.solve(agent, edit)
                dt_d = time.perf_counter() - t0

                t0 = time.perf_counter()
                ref = a_star.plan(cells.copy(), agent, env.goal)
                dt_a = time.perf_counter() - t0

                d_cost = path_cost(path)
                a_cost = path_cost(ref['path'])
                writer.writerow({
                    "maze_id": maze_id, "step": step,
                    "agent_r": agent[0], "agent_c": agent[1],
                    "edited_cells": len(edit),
                    "dstar_cost": d_cost,
                    "dstar_expanded": solver.expanded - before,
                    "dstar_valid": is_valid_path(cells, path, agent, env.goal) if path else False,
                    "dstar_time_sec": dt_d,
                    "astar_cost": a_cost,
                    "astar_expanded": ref['expanded'],
                    "astar_time_sec": dt_a,
                    "agree": d_cost == a_cost,
                })

    os.replace(tmp_csv, out_csv)
    print(f"[OK] Wrote: {out_csv}")

    df = pd.read_csv(out_csv)
    if len(df):
        print(f"steps={len(df)}  agree={df['agree'].mean():.3f}  "
              f"mean expanded: D*={df['dstar_expanded'].mean():.1f}  A*={df['astar_expanded'].mean():.1f}")


if __name__ == "__main__":
    main()
