# MIT License (see LICENSE)
"""
Core particle motion.

This subpackage provides:
    - Force generators: uniform gravity.
    - Wall CCD: sub-stepped integration with wall bounces.
    - Invariants: energy, momentum and containment diagnostics.

Typical usage:
    from particle_sim.core import apply_gravity, advance_particle

    apply_gravity(store.velocities, config.gravity, dt)
    advance_particle(store.positions[0], store.velocities[0], r, w, h, dt, 0.9, 5)
"""
from .forces import apply_gravity
from .walls import WallStepResult, advance_particle, clamp_to_arena, wall_toi
from .invariants import kinetic_energy, linear_momentum, containment_violations

__all__ = [
    # Forces
    "apply_gravity",
    # Walls
    "WallStepResult",
    "advance_particle",
    "clamp_to_arena",
    "wall_toi",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "containment_violations",
]
