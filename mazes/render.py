#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
render.py
---------
Matplotlib drawing for raw mazes.

Cell (r, c) covers the unit square [c, c+1] x [r, r+1] with the y axis pointing
down, so the picture reads like the array. Walls become line segments, the
path is drawn through cell centers.
"""

from __future__ import annotations
import os
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

from .grid import NORTH, SOUTH, EAST, WEST


def wall_segments(cells: np.ndarray) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """Line segments ((x0, y0), (x1, y1)) for every wall; shared walls appear once."""
    rows, cols = cells.shape
    segs = []
    for r in range(rows):
        for c in range(cols):
            v = int(cells[r, c])
            if v & NORTH:
                segs.append(((c, r), (c + 1, r)))
            if v & WEST:
                segs.append(((c, r), (c, r + 1)))
            # South/east only on the outer border; inner ones are the neighbor's N/W
            if r == rows - 1 and v & SOUTH:
                segs.append(((c, r + 1), (c + 1, r + 1)))
            if c == cols - 1 and v & EAST:
                segs.append(((c + 1, r), (c + 1, r + 1)))
    return segs


def render_maze(cells: np.ndarray,
                path: Optional[Sequence[Tuple[int, int]]] = None,
                start: Optional[Tuple[int, int]] = None,
                goal: Optional[Tuple[int, int]] = None,
                ax=None,
                title: Optional[str] = None):
    """
    Draw a raw maze.

    Layers:
      - walls (black line segments)
      - path through cell centers (blue), if given
      - start (green star), goal (red star)
    """
    rows, cols = cells.shape
    if ax is None:
        _, ax = plt.subplots(figsize=(max(3, cols / 4), max(3, rows / 4)), dpi=120)

    ax.add_collection(LineCollection(wall_segments(cells), colors="k", linewidths=1.5))

    if path:
        ys = [p[0] + 0.5 for p in path]
        xs = [p[1] + 0.5 for p in path]
        ax.plot(xs, ys, color="tab:blue", lw=2)

    if start is not None:
        ax.plot(start[1] + 0.5, start[0] + 0.5, marker="*", markersize=10,
                markeredgecolor="k", markerfacecolor="lime", lw=0)
    if goal is not None:
        ax.plot(goal[1] + 0.5, goal[0] + 0.5, marker="*", markersize=10,
                markeredgecolor="k", markerfacecolor="red", lw=0)

    ax.set_xlim(-0.1, cols + 0.1)
    ax.set_ylim(rows + 0.1, -0.1)
    ax.set_aspect("equal")
    ax.set_xticks([]); ax.set_yticks([])

    if title:
        ax.set_title(title, fontsize=10)

    return ax


def save_maze_figure(cells: np.ndarray, out_path: str, **kwargs) -> str:
    """Render to a file (directories are created) and close the figure."""
    rows, cols = cells.shape
    fig, ax = plt.subplots(figsize=(max(3, cols / 4), max(3, rows / 4)), dpi=140)
    render_maze(cells, ax=ax, **kwargs)
    fig.tight_layout()
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    return out_path
