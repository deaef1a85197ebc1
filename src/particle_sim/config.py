# MIT License (see LICENSE)
"""
Simulation configuration.

A SimConfig is an immutable value passed explicitly to ParticleStore.create()
and PhysicsEngine.step(), so several simulations with different parameters
can coexist in one process.

JSON Layout (config.json):
--------------------------
{
  "run_id": string,                # Names the log directory runs/<run_id>/
  "master_seed": int | null,       # Seed for particle initialization
  "logging": {
    "level": "DEBUG" | "INFO" | ...,
    "format": string               # logging.Formatter format string
  },
  "simulation": {                  # Any SimConfig field, all optional
    "particle_count": int,
    "width": int, "height": int,   # Arena size in pixels
    "radius": float,               # Particle radius in pixels
    "gravity_acceleration": float, # m/s², scaled by pixels_per_meter
    "dampening": float,            # Wall restitution
    "restitution": float,          # Particle-particle restitution
    ...
  }
}
"""
from __future__ import annotations
import json
import logging
import numbers
from dataclasses import dataclass, field, fields, asdict
from typing import Any

from . import constants
from .errors import ConfigError


def _is_int(value: Any) -> bool:
    # bool is an Integral but never a valid count or extent
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class SimConfig:
    """
    Immutable parameters for one simulation.

    Attributes:
        particle_count: Number of particles N (>= 1).
        width: Arena width in pixels.
        height: Arena height in pixels.
        radius: Radius shared by every particle, in pixels.
        max_speed: Initial per-axis speed bound in m/s.
        pixels_per_meter: Conversion from metres to pixels.
        gravity_acceleration: Downward acceleration in m/s².
        dampening: Restitution applied when a particle bounces off a wall.
        restitution: Restitution applied to particle-particle impulses.
        correction_percent: Fraction of overlap (beyond slop) removed per frame.
        slop: Overlap in pixels tolerated without positional correction.
        max_iterations: Cap on wall-collision sub-steps per particle per frame.
        fps: Target frame rate of the front-end.
        max_delta_time: Largest frame time the front-end passes to step().
        min_distance: Centre distance below which two particles count as coincident.
        min_separation: Substitute x-separation used for coincident particles.
        master_seed: Seed for the initialization RNG (None = OS entropy).
    """
    particle_count: int = constants.DEFAULT_PARTICLE_COUNT
    width: int = constants.DEFAULT_WIDTH
    height: int = constants.DEFAULT_HEIGHT
    radius: float = constants.DEFAULT_RADIUS
    max_speed: float = constants.DEFAULT_MAX_SPEED
    pixels_per_meter: float = constants.PIXELS_PER_METER
    gravity_acceleration: float = constants.GRAVITATIONAL_ACCELERATION
    dampening: float = constants.DEFAULT_DAMPENING
    restitution: float = constants.DEFAULT_RESTITUTION
    correction_percent: float = constants.DEFAULT_CORRECTION_PERCENT
    slop: float = constants.DEFAULT_SLOP
    max_iterations: int = constants.DEFAULT_MAX_ITERATIONS
    fps: int = constants.DEFAULT_FPS
    max_delta_time: float = constants.DEFAULT_MAX_DELTA_TIME
    min_distance: float = constants.MIN_DISTANCE
    min_separation: float = constants.MIN_SEPARATION
    master_seed: int | None = None

    def __post_init__(self) -> None:
        self.validate()

    @property
    def gravity(self) -> float:
        """Downward acceleration in px/s² (+y points down the screen)."""
        return self.gravity_acceleration * self.pixels_per_meter

    @property
    def velocity_range(self) -> float:
        """Initial per-axis speed bound in px/s."""
        return self.max_speed * self.pixels_per_meter

    @property
    def bounds(self) -> tuple[int, int]:
        return (self.width, self.height)

    def validate(self) -> None:
        """
        Check every field against its allowed range.

        Raises:
            ConfigError: On the first field that is out of range.
        """
        for name in ("particle_count", "width", "height", "max_iterations", "fps"):
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigError(f"{name} must be an int, got {value!r}")
        if self.master_seed is not None and (not _is_int(self.master_seed) or self.master_seed < 0):
            raise ConfigError(f"master_seed must be a non-negative int or null, got {self.master_seed!r}")
        if self.particle_count < 1:
            raise ConfigError(f"particle_count must be >= 1, got {self.particle_count}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Arena extents must be positive, got ({self.width}, {self.height})")
        if self.radius <= 0:
            raise ConfigError(f"radius must be positive, got {self.radius}")
        if 2 * self.radius >= min(self.width, self.height):
            raise ConfigError(
                f"Particle diameter {2 * self.radius} does not fit a "
                f"{self.width}x{self.height} arena"
            )
        if self.max_speed < 0:
            raise ConfigError(f"max_speed must be >= 0, got {self.max_speed}")
        if self.pixels_per_meter <= 0:
            raise ConfigError(f"pixels_per_meter must be positive, got {self.pixels_per_meter}")
        if not 0.0 < self.dampening <= 1.0:
            raise ConfigError(f"dampening must be in (0, 1], got {self.dampening}")
        if not 0.0 <= self.restitution <= 1.0:
            raise ConfigError(f"restitution must be in [0, 1], got {self.restitution}")
        if not 0.0 <= self.correction_percent <= 1.0:
            raise ConfigError(f"correction_percent must be in [0, 1], got {self.correction_percent}")
        if self.slop < 0:
            raise ConfigError(f"slop must be >= 0, got {self.slop}")
        if self.max_iterations < 1:
            raise ConfigError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.fps <= 0:
            raise ConfigError(f"fps must be positive, got {self.fps}")
        if self.max_delta_time <= 0:
            raise ConfigError(f"max_delta_time must be positive, got {self.max_delta_time}")
        if self.min_distance <= 0 or self.min_separation <= 0:
            raise ConfigError("min_distance and min_separation must be positive")


@dataclass(frozen=True)
class RunConfig:
    """
    Everything the front-end reads from config.json.

    Attributes:
        simulation: Physics parameters.
        run_id: Name of this run; selects the log directory.
        log_level: Name of a logging level.
        log_format: logging.Formatter format string.
    """
    simulation: SimConfig = field(default_factory=SimConfig)
    run_id: str | None = None
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_from_dict(data: dict[str, Any]) -> SimConfig:
    """
    Build a SimConfig from a plain dict (e.g. the "simulation" JSON section).

    Missing keys take their defaults.

    Raises:
        ConfigError: If a key is not a SimConfig field or a value is invalid.
    """
    known = {f.name for f in fields(SimConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown simulation settings: {', '.join(unknown)}")
    try:
        return SimConfig(**data)
    except TypeError as exc:
        # e.g. a string where a number is expected
        raise ConfigError(f"Invalid simulation settings: {exc}") from exc


def config_to_dict(config: SimConfig) -> dict[str, Any]:
    """Inverse of config_from_dict()."""
    return asdict(config)


def load_run_config(path: str) -> RunConfig:
    """
    Load the front-end configuration file.

    Args:
        path: Path to a JSON file in the layout described in the module docstring.

    Returns:
        The parsed RunConfig. A top-level "master_seed" is folded into the
        simulation settings unless the "simulation" section sets its own.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ConfigError: If a section has the wrong shape or holds invalid values.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a JSON object")

    sim_section = data.get("simulation", {})
    if not isinstance(sim_section, dict):
        raise ConfigError(f"{path}: 'simulation' must be a JSON object")
    sim_data = dict(sim_section)
    if "master_seed" in data and "master_seed" not in sim_data:
        sim_data["master_seed"] = data["master_seed"]

    log_data = data.get("logging", {})
    if not isinstance(log_data, dict):
        raise ConfigError(f"{path}: 'logging' must be a JSON object")

    defaults = RunConfig()
    log_level = str(log_data.get("level", defaults.log_level)).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"{path}: unknown logging level {log_level!r}")

    return RunConfig(
        simulation=config_from_dict(sim_data),
        run_id=data.get("run_id"),
        log_level=log_level,
        log_format=log_data.get("format", defaults.log_format),
    )
