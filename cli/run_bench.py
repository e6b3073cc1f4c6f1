#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_bench.py
------------
Planner benchmark:
- Generates mazes across (sizes × generators × seeds)
- Runs the selected planners on each maze from the top-left to the
  bottom-right cell
- Writes one CSV row per (maze, planner) and prints a pandas summary

Example:
    python -m cli.run_bench \
        --sizes 10x10,20x20 \
        --generators backtracking,kruskal,growing_tree \
        --planners a_star,bfs,dfs,d_star_lite \
        --num-mazes 20 \
        --braid 0.2 \
        --seed 0

Maze convention: raw wall-bit mazes (see mazes/grid.py).
"""

from __future__ import annotations
import argparse
import csv
import logging
import os
import time
from typing import List, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from mazes.generator import GENERATORS, generate_maze
from planners import get_planner
from eval.metrics import count_regions, evaluate_planners


# -------------------- helpers -------------------- #

def _parse_sizes(s: str) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for token in s.split(","):
        token = token.strip().lower()
        if "x" not in token:
            raise ValueError(f"Bad size '{token}', expected like 20x20")
        h, w = token.split("x")
        sizes.append((int(h), int(w)))
    return sizes


def _parse_list(s: str) -> List[str]:
    return [t.strip().lower() for t in s.split(",") if t.strip()]


def _ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per (generator, size, planner) success rate and mean cost/expansions/time."""
    df = df.copy()
    df["size"] = df["rows"].astype(str) + "x" + df["cols"].astype(str)
    solved = df[df["success"]]
    agg = df.groupby(["generator", "size", "planner"]).agg(
        runs=("success", "size"),
        success_rate=("success", "mean"),
        mean_expanded=("expanded", "mean"),
        mean_time_ms=("time_sec", lambda x: 1000.0 * float(np.mean(x))),
    )
    cost = solved.groupby(["generator", "size", "planner"])["cost"].mean().rename("mean_cost")
    return agg.join(cost).reset_index()


# -------------------- main loop -------------------- #

def main():
    ap = argparse.ArgumentParser(description="Benchmark maze planners on generated mazes.")
    ap.add_argument("--sizes", type=str, default="10x10,20x20",
                    help="Comma-separated maze sizes like 10x10,20x20")
    ap.add_argument("--generators", type=str, default="backtracking,kruskal,growing_tree",
                    help=f"Comma-separated generators: {','.join(sorted(GENERATORS))}")
    ap.add_argument("--planners", type=str, default="a_star,bfs,dfs,d_star_lite",
                    help="Comma-separated planners: a_star,bfs,dfs,d_star_lite,aco")
    ap.add_argument("--heuristic", type=str, default="manhattan",
                    help="Heuristic for a_star / d_star_lite / aco (euclidean|manhattan)")
    ap.add_argument("--num-mazes", type=int, default=20, help="Mazes per (size, generator)")
    ap.add_argument("--braid", type=float, default=0.0, help="Dead-end removal probability (0–1)")
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--outdir", type=str, default="results/csv", help="Output directory for CSV")
    ap.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sizes = _parse_sizes(args.sizes)
    generators = _parse_list(args.generators)
    for g in generators:
        if g not in GENERATORS:
            raise ValueError(f"Unknown generator '{g}'. Available: {sorted(GENERATORS)}")

    # Instantiate planner objects once (reused across mazes)
    planners = {}
    for key in _parse_list(args.planners):
        if key in ("a_star", "d_star_lite"):
            planners[key] = get_planner(key, heuristic=args.heuristic)
        elif key == "aco":
            planners[key] = get_planner(key, heuristic=args.heuristic, seed=args.seed)
        else:
            planners[key] = get_planner(key)

    # Prepare output CSV (unique, atomic)
    _ensure_dir(args.outdir)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_csv = os.path.join(args.outdir, f"bench_s{args.seed}_{stamp}.csv")
    tmp_csv = out_csv + f".tmp_{os.getpid()}"
    fieldnames = [
        "maze_id", "rows", "cols", "generator", "braid", "regions",
        "planner", "success", "length", "cost", "expanded", "valid", "time_sec",
    ]

    total = len(sizes) * len(generators) * args.num_mazes
    with open(tmp_csv, "w", newline="") as f, tqdm(total=total, desc="Benchmark") as pbar:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()

        maze_id = 0
        for (H, W) in sizes:
            for gen in generators:
                for _ in range(args.num_mazes):
                    # Unique seed per maze so runs are reproducible individually
                    base = (int(args.seed) * 1_000_003 + maze_id * 97 + H * 11 + W * 13) % 2**32
                    env = generate_maze(H, W, method=gen, braid=args.braid,
                                        rng=np.random.default_rng(base))
                    maze_id += 1

                    regions = count_regions(env.cells)
                    for row in evaluate_planners(env.cells, env.start, env.goal, planners):
                        row.update(maze_id=maze_id, rows=H, cols=W, generator=gen,
                                   braid=args.braid, regions=regions)
                        writer.writerow(row)
                    pbar.update(1)

    # Atomic rename to final path
    os.replace(tmp_csv, out_csv)
    print(f"[OK] Wrote: {out_csv}")

    df = pd.read_csv(out_csv)
    with pd.option_context("display.max_rows", 200, "display.width", 160):
        print(summarize(df).to_string(index=False))


if __name__ == "__main__":
    main()
