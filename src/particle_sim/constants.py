# MIT License (see LICENSE)
"""
Physical constants and default simulation parameters.

Units: lengths in pixels, times in seconds. Physical quantities given in SI
units are converted to pixel space through PIXELS_PER_METER.
"""
from __future__ import annotations

# Standard gravity at the Earth's surface, m/s².
GRAVITATIONAL_ACCELERATION: float = 9.81

# Scale between physical units and pixel space (px per metre).
PIXELS_PER_METER: float = 100.0

# Arena and population
DEFAULT_WIDTH: int = 800
DEFAULT_HEIGHT: int = 800
DEFAULT_PARTICLE_COUNT: int = 10
DEFAULT_RADIUS: float = 10.0

# Initial speed per axis, m/s. Components are drawn from [-MAX_SPEED, MAX_SPEED).
DEFAULT_MAX_SPEED: float = 1.0

# Wall bounce restitution. Must be < 1 for particles to settle.
DEFAULT_DAMPENING: float = 0.9

# Particle-particle restitution.
DEFAULT_RESTITUTION: float = 0.9

# Baumgarte-style positional correction: fraction of the overlap removed per
# frame, and the overlap (px) tolerated before any correction happens.
DEFAULT_CORRECTION_PERCENT: float = 0.2
DEFAULT_SLOP: float = 0.01

# Wall-collision sub-steps per particle per frame.
DEFAULT_MAX_ITERATIONS: int = 5

DEFAULT_FPS: int = 240

# Upper bound the front-end applies to measured frame time, seconds.
DEFAULT_MAX_DELTA_TIME: float = 0.05

# Below this centre distance (px) two particles are treated as coincident and
# MIN_SEPARATION along +x is used as their displacement.
MIN_DISTANCE: float = 1e-9
MIN_SEPARATION: float = 0.01
