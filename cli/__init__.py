# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m cli.<name>`):

- run_bench   : planner benchmark over generated mazes (CSV + pandas summary)
- run_replan  : D* Lite replanning vs A* from scratch after random wall edits
- make_figs   : render a generated maze with planner paths to PNG
"""
__all__ = [
    "run_bench",
    "run_replan",
    "make_figs",
]
