# MIT License (see LICENSE)
"""
particle_sim - A real-time 2D particle simulator.

A fixed population of equal circular particles falls under gravity inside
a rectangular arena, bounces off the walls with continuous collision
detection, and collides pairwise with damped impulses.

Main entry points:
    - SimConfig: Immutable simulation parameters.
    - ParticleStore: Owns the particles (one contiguous numpy buffer).
    - PhysicsEngine: Advances a store by one frame with step().

Submodules:
    - core: Gravity, wall CCD, invariants.
    - collision: Brute-force pair enumeration and contact resolution.
    - renderer: Optional visualization adapters.
    - app: pygame front-end (console script "particle-sim").

Example:
    from particle_sim import SimConfig, ParticleStore, PhysicsEngine

    config = SimConfig(particle_count=20, master_seed=1)
    engine = PhysicsEngine(config)
    with ParticleStore.create(config) as store:
        for _ in range(240):
            engine.step(store, 1 / 240)
        print(store.pixel_positions())
"""
from .config import SimConfig, RunConfig, config_from_dict, load_run_config
from .engine import PhysicsEngine, StepReport, step
from .errors import AllocationError, ConfigError, ParticleSimError, StoreReleasedError
from .store import ParticleStore, create, destroy
from .types import Particle

__all__ = [
    # Configuration
    "SimConfig",
    "RunConfig",
    "config_from_dict",
    "load_run_config",
    # Simulation
    "ParticleStore",
    "Particle",
    "PhysicsEngine",
    "StepReport",
    "create",
    "step",
    "destroy",
    # Errors
    "ParticleSimError",
    "AllocationError",
    "ConfigError",
    "StoreReleasedError",
]
