# MIT License (see LICENSE)
"""
Small numeric helpers shared by the engine, the front-end and scenarios.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def clamp_delta_time(delta_time: float, max_delta_time: float) -> float:
    """
    Clamp a measured frame time into [0, max_delta_time].

    step() must only ever see a sane, non-negative value, whatever the
    wall clock reported.
    """
    return min(max(float(delta_time), 0.0), float(max_delta_time))
