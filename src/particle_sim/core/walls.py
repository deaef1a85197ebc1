# MIT License (see LICENSE)
"""
Continuous collision detection against the arena walls.

Instead of moving a particle by a whole frame and clamping it back inside,
each particle is advanced to its next wall impact, reflected, and advanced
again with the time that is left. This prevents tunneling through the walls
at high speed or low frame rates.

Key concepts:
- TOI (Time of Impact): time until the particle's edge touches a wall,
  solved per axis as t = (boundary - p) / v.
- Sub-step: one advance-to-impact-and-reflect iteration. A frame uses at
  most max_iterations sub-steps; leftover time is dropped.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np


@dataclass
class WallStepResult:
    """
    Outcome of advancing one particle through one frame.

    Attributes:
        iterations: Sub-steps used (<= max_iterations).
        bounces: Number of wall reflections.
        truncated: True if the iteration cap left unconsumed time.
    """
    iterations: int = 0
    bounces: int = 0
    truncated: bool = False


def wall_toi(p: float, v: float, lo: float, hi: float, remaining: float) -> float:
    """
    Time until a particle centre moving along one axis reaches lo or hi.

    Only a boundary the particle would actually cross within `remaining`,
    while moving toward it, counts as an impact.

    Args:
        p: Centre coordinate on this axis.
        v: Velocity on this axis.
        lo: Lowest allowed centre coordinate (radius).
        hi: Highest allowed centre coordinate (extent - radius).
        remaining: Time budget left in this frame.

    Returns:
        Time of impact in [0, remaining], or math.inf if no wall is reached.
    """
    tentative = p + v * remaining
    if v < 0.0 and tentative < lo:
        return max((lo - p) / v, 0.0)
    if v > 0.0 and tentative > hi:
        return max((hi - p) / v, 0.0)
    return math.inf


def advance_particle(
    position: np.ndarray,
    velocity: np.ndarray,
    radius: float,
    width: float,
    height: float,
    dt: float,
    dampening: float,
    max_iterations: int,
) -> WallStepResult:
    """
    Advance one particle by dt, bouncing off the arena walls.

    On each sub-step the earliest wall impact over both axes is found. If it
    lies beyond the remaining time the particle simply moves; otherwise it
    moves to the impact point and the colliding velocity component becomes
    -v * dampening. When both axes hit at the same time only x is reflected.

    Args:
        position: Centre [x, y]; updated in place.
        velocity: Velocity [vx, vy]; updated in place.
        radius: Particle radius.
        width: Arena width.
        height: Arena height.
        dt: Frame time (>= 0).
        dampening: Restitution of a wall bounce.
        max_iterations: Sub-step cap.

    Returns:
        A WallStepResult describing the sub-stepping.
    """
    x, y = float(position[0]), float(position[1])
    vx, vy = float(velocity[0]), float(velocity[1])
    x_lo, x_hi = radius, width - radius
    y_lo, y_hi = radius, height - radius

    result = WallStepResult()
    remaining = float(dt)

    while remaining > 0.0 and result.iterations < max_iterations:
        result.iterations += 1

        tx = wall_toi(x, vx, x_lo, x_hi, remaining)
        ty = wall_toi(y, vy, y_lo, y_hi, remaining)
        t = min(tx, ty)

        if t > remaining:
            x += vx * remaining
            y += vy * remaining
            remaining = 0.0
            break

        x += vx * t
        y += vy * t
        if tx <= ty:
            vx = -vx * dampening
        else:
            vy = -vy * dampening
        result.bounces += 1
        remaining -= t

    result.truncated = remaining > 0.0

    position[0], position[1] = x, y
    velocity[0], velocity[1] = vx, vy
    return result


def clamp_to_arena(positions: np.ndarray, radius: float, width: float, height: float) -> int:
    """
    Clamp all centres into [radius, extent - radius] on both axes.

    Args:
        positions: (N, 2) centres; updated in place.

    Returns:
        Number of particles that had to be moved.
    """
    lo = np.array([radius, radius], dtype=np.float64)
    hi = np.array([width - radius, height - radius], dtype=np.float64)
    outside = np.any((positions < lo) | (positions > hi), axis=1)
    np.clip(positions, lo, hi, out=positions)
    return int(np.count_nonzero(outside))
