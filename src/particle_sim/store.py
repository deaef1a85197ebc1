# MIT License (see LICENSE)
"""
Particle storage.

The ParticleStore owns a single contiguous buffer of N particle records
(see types.PARTICLE_DTYPE). It is created once with randomized state,
mutated in place by the engine every frame, and released at shutdown.

Structure:
    - create() allocates and initializes all N particles, or nothing.
    - positions / velocities are (N, 2) views into the buffer.
    - destroy() releases the buffer; the store is unusable afterwards.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterator

import numpy as np

from .config import SimConfig
from .errors import AllocationError, StoreReleasedError
from .types import PARTICLE_DTYPE, Particle
from .util import f64

logger = logging.getLogger(__name__)


def _allocate_buffer(count: int) -> np.ndarray:
    """Obtain uninitialized storage for count particle records."""
    return np.empty(count, dtype=PARTICLE_DTYPE)


class ParticleStore:
    """
    Fixed-size collection of particles sharing one radius.

    Usage:
        config = SimConfig(particle_count=50, master_seed=7)
        with ParticleStore.create(config) as store:
            engine.step(store, 1 / 240)
            xs, ys = store.pixel_positions().T

    Attributes:
        config: The configuration the store was created with.
        radius: Radius of every particle in pixels.
    """

    def __init__(self, config: SimConfig) -> None:
        self.config = config
        self.radius = float(config.radius)
        self._buffer: np.ndarray | None = None

    @classmethod
    def create(
        cls,
        config: SimConfig,
        rng: np.random.Generator | None = None,
        count: int | None = None,
    ) -> "ParticleStore":
        """
        Allocate and randomly initialize a store.

        Positions are uniform in [r, width - r) x [r, height - r); velocity
        components are uniform in [-v, v) with v = config.velocity_range.
        Particles may overlap initially.

        Args:
            config: Simulation parameters.
            rng: Random source. Defaults to default_rng(config.master_seed).
            count: Number of particles. Defaults to config.particle_count.

        Returns:
            A fully initialized store.

        Raises:
            AllocationError: If storage could not be obtained. Nothing is
                left allocated when this is raised.
        """
        n = config.particle_count if count is None else count
        if rng is None:
            rng = np.random.default_rng(config.master_seed)

        store = cls(config)
        try:
            store._buffer = _allocate_buffer(n)
            store._initialize(rng)
        except MemoryError as exc:
            store.destroy()
            raise AllocationError(f"Could not allocate storage for {n} particles") from exc
        except Exception:
            store.destroy()
            raise

        logger.info(
            "Created %d particles (r=%.1f) in a %dx%d arena",
            n, store.radius, config.width, config.height,
        )
        return store

    def _initialize(self, rng: np.random.Generator) -> None:
        n = len(self._buffer)
        r = self.radius
        w, h = self.config.width, self.config.height
        v = self.config.velocity_range

        positions = self._buffer["position"]
        velocities = self._buffer["velocity"]

        positions[:, 0] = rng.uniform(r, w - r, size=n)
        positions[:, 1] = rng.uniform(r, h - r, size=n)
        velocities[:, 0] = rng.uniform(-v, v, size=n)
        velocities[:, 1] = rng.uniform(-v, v, size=n)

    @classmethod
    def from_state(
        cls,
        config: SimConfig,
        positions,
        velocities,
    ) -> "ParticleStore":
        """
        Build a store from explicit positions and velocities.

        Used for scripted scenarios and tests. No bounds check is made.

        Args:
            config: Simulation parameters (particle_count is ignored).
            positions: Array-like of shape (N, 2) in pixels.
            velocities: Array-like of shape (N, 2) in px/s.
        """
        positions = f64(positions).reshape(-1, 2)
        velocities = f64(velocities).reshape(-1, 2)
        if positions.shape != velocities.shape:
            raise ValueError(
                f"positions {positions.shape} and velocities {velocities.shape} differ in shape"
            )

        store = cls(config)
        try:
            store._buffer = _allocate_buffer(len(positions))
        except MemoryError as exc:
            raise AllocationError(f"Could not allocate storage for {len(positions)} particles") from exc
        store._buffer["position"] = positions
        store._buffer["velocity"] = velocities
        return store

    def destroy(self) -> None:
        """Release the buffer. Safe to call repeatedly and on a half-built store."""
        if self._buffer is not None:
            logger.debug("Releasing %d particles", len(self._buffer))
        self._buffer = None

    @property
    def released(self) -> bool:
        return self._buffer is None

    @property
    def buffer(self) -> np.ndarray:
        """The structured record array. Raises StoreReleasedError after destroy()."""
        if self._buffer is None:
            raise StoreReleasedError("Particle store has been destroyed")
        return self._buffer

    @property
    def positions(self) -> np.ndarray:
        """(N, 2) view of particle centres in pixels."""
        return self.buffer["position"]

    @property
    def velocities(self) -> np.ndarray:
        """(N, 2) view of particle velocities in px/s."""
        return self.buffer["velocity"]

    def pixel_positions(self) -> np.ndarray:
        """Centres as integer pixels, truncated toward zero (C cast semantics)."""
        return np.trunc(self.positions).astype(np.int64)

    def __len__(self) -> int:
        return len(self.buffer)

    def __getitem__(self, index: int) -> Particle:
        buffer = self.buffer
        if index < 0:
            index += len(buffer)
        if not 0 <= index < len(buffer):
            raise IndexError(f"Particle index {index} out of range")
        return Particle(
            index=int(index),
            position=buffer["position"][index],
            velocity=buffer["velocity"][index],
            radius=self.radius,
        )

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield self[i]

    def __enter__(self) -> "ParticleStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()


def create(
    count: int,
    bounds: tuple[int, int],
    velocity_range: float,
    config: SimConfig | None = None,
    rng: np.random.Generator | None = None,
) -> ParticleStore:
    """
    Create a store of count particles inside bounds = (width, height).

    velocity_range is the per-axis speed bound in m/s; it is converted to
    px/s with config.pixels_per_meter. Other parameters come from config
    (defaults if omitted).

    Raises:
        AllocationError: If storage could not be obtained.
        ConfigError: If the resulting configuration is invalid.
    """
    base = config if config is not None else SimConfig()
    width, height = bounds
    cfg = replace(
        base,
        particle_count=count,
        width=width,
        height=height,
        max_speed=velocity_range,
    )
    return ParticleStore.create(cfg, rng=rng)


def destroy(store: ParticleStore) -> None:
    """Release all resources held by store."""
    store.destroy()
