#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
make_figs.py
------------
Generates a maze and renders it with each selected planner's path
(using matplotlib only), one PNG per planner.

Generates:
  - figs/maze_<generator>_<RxC>_s<seed>_<planner>.png

Example:
    python -m cli.make_figs --size 15x15 --generator kruskal \
        --planners a_star,dfs --braid 0.3 --seed 1 --outdir figs
"""

from __future__ import annotations
import argparse
import logging
import os

import numpy as np
import matplotlib
matplotlib.use("Agg")

from mazes.generator import GENERATORS, generate_maze
from mazes.render import save_maze_figure
from planners import get_planner
from eval.metrics import path_cost


def main():
    ap = argparse.ArgumentParser(description="Render generated mazes with planner paths.")
    ap.add_argument("--size", type=str, default="15x15", help="Maze size like 15x15")
    ap.add_argument("--generator", type=str, default="backtracking",
                    help=f"One of: {','.join(sorted(GENERATORS))}")
    ap.add_argument("--planners", type=str, default="a_star,dfs",
                    help="Comma-separated planners: a_star,bfs,dfs,d_star_lite,aco")
    ap.add_argument("--braid", type=float, default=0.0, help="Dead-end removal probability (0–1)")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed")
    ap.add_argument("--outdir", type=str, default="figs", help="Output directory for PNGs")
    ap.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    H, W = (int(v) for v in args.size.lower().split("x"))
    env = generate_maze(H, W, method=args.generator, braid=args.braid,
                        rng=np.random.default_rng(args.seed))

    for name in [p.strip().lower() for p in args.planners.split(",") if p.strip()]:
        planner = get_planner(name)
        res = planner.plan(env.cells.copy(), env.start, env.goal)
        title = f"{name}: cost={path_cost(res['path']):g}, expanded={res['expanded']}"
        out = os.path.join(args.outdir, f"maze_{args.generator}_{H}x{W}_s{args.seed}_{name}.png")
        save_maze_figure(env.cells, out, path=res['path'],
                         start=env.start, goal=env.goal, title=title)
        print(f"[make_figs] Saved {out}")


if __name__ == "__main__":
    main()
