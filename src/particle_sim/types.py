# MIT License (see LICENSE)
"""
Core type definitions for the particle simulation.

Particles are stored as records of one contiguous numpy structured array
(PARTICLE_DTYPE) owned by a ParticleStore. The Particle class is a thin view
onto one record, so writes through it land in the store's buffer.

Kinematics follow simple Newtonian motion in pixel space:
  dx/dt = v
  dv/dt = (0, g)     (+y points down the screen)
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np


# One particle record: centre position [x, y] in px and velocity [vx, vy] in px/s.
PARTICLE_DTYPE = np.dtype([
    ("position", np.float64, (2,)),
    ("velocity", np.float64, (2,)),
])


@dataclass(frozen=True)
class Particle:
    """
    View of a single particle record.

    Attributes:
        index: Position of the record in the store's buffer.
        position: Centre [x, y] in pixels (view into the buffer).
        velocity: Velocity [vx, vy] in px/s (view into the buffer).
        radius: Radius in pixels, shared by all particles of a store.
    """
    index: int
    position: np.ndarray
    velocity: np.ndarray
    radius: float

    @property
    def pixel_position(self) -> tuple[int, int]:
        """Centre in integer pixels, truncated toward zero."""
        return (int(self.position[0]), int(self.position[1]))
