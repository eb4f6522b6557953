"""
===========================================================
cumulative.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Composite trapezoidal rule for cumulative quantities such as
    infected-human-days: sum of (x[i]-x[i-1]) * (y[i-1]+y[i]) / 2.

Notes:
    - Exact for piecewise-linear y. On coarse grids it overestimates
      convex curves and underestimates concave ones (epidemic peaks).
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations

import numpy as np
from scipy.integrate import trapezoid
from typing import Sequence

from .errors import ShapeError


def definite_integral(x: Sequence[float], y: Sequence[float]) -> float:
    """Area under y(x) by the composite trapezoidal rule"""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.ndim != 1 or y.ndim != 1:
        raise ShapeError(f"x and y must be one-dimensional, got shapes {x.shape} and {y.shape}")
    if x.size != y.size:
        raise ShapeError(f"x and y must have the same length, got {x.size} and {y.size}")
    if x.size < 2:
        raise ShapeError(f"need at least 2 points, got {x.size}")
    if not np.all(np.diff(x) > 0):
        raise ShapeError("x must be strictly increasing")
    return float(trapezoid(y, x))
