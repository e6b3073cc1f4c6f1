# -*- coding: utf-8 -*-
"""
Evaluation utilities: path metrics and maze connectivity checks.
"""

from __future__ import annotations

from .metrics import (
    path_cost,
    is_continuous,
    is_valid_path,
    reachable_mask,
    count_regions,
    is_solvable,
    open_edge_count,
    evaluate_planners,
)

__all__ = [
    "path_cost", "is_continuous", "is_valid_path",
    "reachable_mask", "count_regions", "is_solvable", "open_edge_count",
    "evaluate_planners",
]
