# MIT License (see LICENSE)
"""
Particle-particle collision handling.

This subpackage provides:
    - Broadphase: candidate pair enumeration (brute force).
    - Contact: circle-circle overlap test, impulse and positional correction.

Typical usage:
    from particle_sim.collision import BruteForceBroadphase, resolve_pairs

    bp = BruteForceBroadphase()
    resolve_pairs(bp.pairs(store.positions, r), store.positions,
                  store.velocities, r, 0.9, 0.2, 0.01)
"""
from .broadphase import Broadphase, BruteForceBroadphase
from .contact import (
    Contact,
    circle_circle_contact,
    normal_velocity,
    resolve_contact,
    resolve_pairs,
)

__all__ = [
    # Broadphase
    "Broadphase",
    "BruteForceBroadphase",
    # Contact
    "Contact",
    "circle_circle_contact",
    "normal_velocity",
    "resolve_contact",
    "resolve_pairs",
]
