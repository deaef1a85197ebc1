# MIT License (see LICENSE)
"""
The physics engine and its per-frame step.

PhysicsEngine advances every particle of a ParticleStore by one frame:
    1. Gravity: vy += g * dt, once per frame.
    2. Wall CCD: per particle, sub-stepped advance with wall bounces
       (core/walls.py), at most config.max_iterations sub-steps.
    3. Pairs: every unordered pair visited once; overlapping, approaching
       pairs get an impulse and a positional correction (collision/contact.py).
    4. Clamp: centres are clamped into [r, extent - r] so that pair
       corrections can never push a particle through a wall.

The engine keeps no particle state between frames; it only borrows the
store for the duration of step().

Structure:
    - User creates a SimConfig and a ParticleStore.
    - User creates a PhysicsEngine(config).
    - User calls engine.step(store, dt) once per frame.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

from .config import SimConfig
from .store import ParticleStore
from .profiler import Profiler
from .core.forces import apply_gravity
from .core.walls import advance_particle, clamp_to_arena
from .collision.broadphase import Broadphase, BruteForceBroadphase
from .collision.contact import resolve_pairs

logger = logging.getLogger(__name__)


@dataclass
class StepReport:
    """
    Diagnostics for one call to step().

    Attributes:
        delta_time: Frame time that was simulated.
        substeps: Wall sub-steps used, summed over particles.
        max_substeps: Largest sub-step count used by a single particle.
        wall_bounces: Wall reflections, summed over particles.
        truncated: Particles whose leftover time was dropped at the cap.
        pair_contacts: Pairs that received an impulse.
        clamped: Particles moved back inside by the final clamp.
    """
    delta_time: float = 0.0
    substeps: int = 0
    max_substeps: int = 0
    wall_bounces: int = 0
    truncated: int = 0
    pair_contacts: int = 0
    clamped: int = 0


@dataclass
class PhysicsEngine:
    """
    Steps a particle store forward in time.

    Attributes:
        config: Physics parameters (gravity, restitution, correction, ...).
        profiler: Optional Profiler receiving 'integrate', 'pairs' and
                  'clamp' timings.
        broadphase: Source of candidate pairs. Defaults to brute force.
    """
    config: SimConfig = field(default_factory=SimConfig)
    profiler: Profiler | None = None
    broadphase: Broadphase = field(default_factory=BruteForceBroadphase)

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def _integrate(self, store: ParticleStore, dt: float, report: StepReport) -> None:
        """Apply gravity, then advance each particle with wall CCD."""
        cfg = self.config
        positions = store.positions
        velocities = store.velocities
        r = store.radius

        apply_gravity(velocities, cfg.gravity, dt)

        for i in range(len(positions)):
            res = advance_particle(
                positions[i], velocities[i], r,
                cfg.width, cfg.height, dt,
                cfg.dampening, cfg.max_iterations,
            )
            report.substeps += res.iterations
            report.max_substeps = max(report.max_substeps, res.iterations)
            report.wall_bounces += res.bounces
            if res.truncated:
                report.truncated += 1

    def _collide_pairs(self, store: ParticleStore, report: StepReport) -> None:
        """Resolve every overlapping, approaching pair once."""
        cfg = self.config
        positions = store.positions
        r = store.radius
        report.pair_contacts = resolve_pairs(
            self.broadphase.pairs(positions, r),
            positions,
            store.velocities,
            r,
            cfg.restitution,
            cfg.correction_percent,
            cfg.slop,
            cfg.min_distance,
            cfg.min_separation,
        )

    def step_with_report(self, store: ParticleStore, delta_time: float) -> StepReport:
        """
        Advance the simulation by one frame and describe what happened.

        Args:
            store: Particles to advance; mutated in place.
            delta_time: Frame time in seconds. Must be >= 0; use
                        util.clamp_delta_time() on wall-clock measurements.

        Returns:
            A StepReport for this frame.

        Raises:
            ValueError: If delta_time is negative.
        """
        dt = float(delta_time)
        if dt < 0.0:
            raise ValueError(f"delta_time must be >= 0, got {dt}")

        report = StepReport(delta_time=dt)

        with self._section("integrate"):
            self._integrate(store, dt, report)

        with self._section("pairs"):
            self._collide_pairs(store, report)

        with self._section("clamp"):
            cfg = self.config
            report.clamped = clamp_to_arena(store.positions, store.radius, cfg.width, cfg.height)

        if report.truncated:
            logger.debug(
                "dt=%.5f: %d particle(s) hit the %d sub-step cap; leftover time dropped",
                dt, report.truncated, self.config.max_iterations,
            )
        logger.debug(
            "dt=%.5f substeps=%d bounces=%d contacts=%d clamped=%d",
            dt, report.substeps, report.wall_bounces, report.pair_contacts, report.clamped,
        )
        return report

    def step(self, store: ParticleStore, delta_time: float) -> None:
        """Advance the simulation by one frame. See step_with_report()."""
        self.step_with_report(store, delta_time)


def step(store: ParticleStore, delta_time: float, config: SimConfig | None = None) -> None:
    """
    Advance store by delta_time using config (defaults to store.config).
    """
    PhysicsEngine(config if config is not None else store.config).step(store, delta_time)
