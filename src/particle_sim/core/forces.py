# MIT License (see LICENSE)
"""
Force generators for the particle simulation.

Uniform gravity is the only external force. All particles have equal mass,
so it is applied directly as a velocity change rather than accumulated as a
force: dv = g * dt.
"""
from __future__ import annotations

import numpy as np


def apply_gravity(velocities: np.ndarray, g: float, dt: float) -> None:
    """
    Apply downward gravity to every particle.

    Implements vy += g * dt, once per frame (not per sub-step).

    Args:
        velocities: (N, 2) velocities in px/s; updated in place.
        g: Gravitational acceleration in px/s² (+y is down).
        dt: Frame time in seconds.
    """
    if g != 0.0 and dt != 0.0:
        velocities[:, 1] += g * dt
