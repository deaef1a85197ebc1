# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and debugging stability issues.
All particles share the same (unit) mass, so momentum and energy reduce to
sums over velocities. Wall bounces and restitution < 1 both dissipate
energy; momentum is only conserved by isolated particle-particle impulses.
"""
from __future__ import annotations
import numpy as np

from ..store import ParticleStore


def kinetic_energy(store: ParticleStore) -> float:
    """
    Total kinetic energy per unit mass.

    T = Σ 0.5 * |v|²

    Returns:
        Energy in px²/s².
    """
    v = store.velocities
    return float(0.5 * np.sum(v * v))


def linear_momentum(store: ParticleStore) -> np.ndarray:
    """
    Total linear momentum per unit mass.

    P = Σ v

    Returns:
        Momentum vector [Px, Py] in px/s.
    """
    return store.velocities.sum(axis=0)


def containment_violations(store: ParticleStore, tol: float = 1e-9) -> int:
    """
    Count particles whose centre lies outside [r, extent - r] by more than tol.
    """
    r = store.radius
    w, h = store.config.width, store.config.height
    p = store.positions
    lo = np.array([r - tol, r - tol])
    hi = np.array([w - r + tol, h - r + tol])
    return int(np.count_nonzero(np.any((p < lo) | (p > hi), axis=1)))
