# MIT License (see LICENSE)
"""
Exception types raised by the simulator.

Only AllocationError is a runtime condition callers are expected to recover
from. The others signal misuse: a bad configuration or a store that has
already been destroyed.
"""
from __future__ import annotations


class ParticleSimError(Exception):
    """Base class for all simulator errors."""


class AllocationError(ParticleSimError, MemoryError):
    """Storage for the particle collection could not be obtained."""


class ConfigError(ParticleSimError, ValueError):
    """A configuration value is missing, unknown or out of range."""


class StoreReleasedError(ParticleSimError, RuntimeError):
    """The particle store was used after destroy()."""
