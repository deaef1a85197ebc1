# MIT License (see LICENSE)
"""
Particle-particle contact detection and resolution.

Each overlapping, approaching pair receives one equal-and-opposite impulse
along the contact normal, followed by a partial (Baumgarte-style)
positional correction. Pairs are visited once per frame in broadphase
order; simultaneous multi-body contacts are therefore resolved
sequentially and approximately, not iterated to convergence.

Key concepts:
- Contact normal n: unit vector from particle a toward particle b.
- Normal relative velocity v_n = (v_b - v_a) · n; v_n > 0 means separating.
- Impulse j = -(1 + e) * v_n / 2, the /2 coming from equal masses.
- Slop: overlap tolerated without positional correction, avoiding jitter.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ..constants import MIN_DISTANCE, MIN_SEPARATION


@dataclass
class Contact:
    """
    Overlap between two particles.

    Attributes:
        a: Index of the first particle.
        b: Index of the second particle.
        normal: Unit vector (nx, ny) from a toward b.
        distance: Centre distance (substituted when centres coincide).
        penetration: Overlap depth 2r - distance (positive = overlapping).
    """
    a: int
    b: int
    normal: tuple[float, float]
    distance: float
    penetration: float


def circle_circle_contact(
    positions: np.ndarray,
    a: int,
    b: int,
    radius: float,
    min_distance: float = MIN_DISTANCE,
    min_separation: float = MIN_SEPARATION,
) -> Contact | None:
    """
    Detect overlap between particles a and b of equal radius.

    Args:
        positions: (N, 2) centres.
        a: Index of the first particle.
        b: Index of the second particle.
        radius: Shared radius.
        min_distance: Below this distance the centres count as coincident.
        min_separation: Displacement (+x) substituted for coincident centres.

    Returns:
        Contact if the particles overlap, None otherwise.
    """
    dx = float(positions[b, 0] - positions[a, 0])
    dy = float(positions[b, 1] - positions[a, 1])
    dist2 = dx * dx + dy * dy
    diameter = 2.0 * radius

    if dist2 >= diameter * diameter:
        return None

    dist = math.sqrt(dist2)
    if dist < min_distance:
        dx, dy = min_separation, 0.0
        dist = min_separation

    return Contact(
        a=a,
        b=b,
        normal=(dx / dist, dy / dist),
        distance=dist,
        penetration=diameter - dist,
    )


def normal_velocity(contact: Contact, velocities: np.ndarray) -> float:
    """Relative velocity of b with respect to a along the contact normal."""
    nx, ny = contact.normal
    dvx = float(velocities[contact.b, 0] - velocities[contact.a, 0])
    dvy = float(velocities[contact.b, 1] - velocities[contact.a, 1])
    return dvx * nx + dvy * ny


def resolve_contact(
    contact: Contact,
    positions: np.ndarray,
    velocities: np.ndarray,
    restitution: float,
    correction_percent: float,
    slop: float,
) -> float | None:
    """
    Apply the collision impulse and positional correction for one contact.

    Separating pairs (v_n > 0) are left untouched.

    Args:
        contact: Output of circle_circle_contact().
        positions: (N, 2) centres; updated in place.
        velocities: (N, 2) velocities; updated in place.
        restitution: Coefficient of restitution e.
        correction_percent: Fraction of (penetration - slop) removed.
        slop: Tolerated penetration.

    Returns:
        The impulse magnitude j, or None if the pair was separating.
    """
    v_n = normal_velocity(contact, velocities)
    if v_n > 0.0:
        return None

    a, b = contact.a, contact.b
    nx, ny = contact.normal

    j = -(1.0 + restitution) * v_n / 2.0
    velocities[a, 0] -= j * nx
    velocities[a, 1] -= j * ny
    velocities[b, 0] += j * nx
    velocities[b, 1] += j * ny

    excess = contact.penetration - slop
    if excess > 0.0:
        shift = excess * correction_percent / 2.0
        positions[a, 0] -= shift * nx
        positions[a, 1] -= shift * ny
        positions[b, 0] += shift * nx
        positions[b, 1] += shift * ny

    return j


def resolve_pairs(
    pairs: Iterable[tuple[int, int]],
    positions: np.ndarray,
    velocities: np.ndarray,
    radius: float,
    restitution: float,
    correction_percent: float,
    slop: float,
    min_distance: float = MIN_DISTANCE,
    min_separation: float = MIN_SEPARATION,
) -> int:
    """
    Detect and resolve contacts for every candidate pair, once each.

    Returns:
        Number of contacts that received an impulse.
    """
    resolved = 0
    for a, b in pairs:
        c = circle_circle_contact(positions, a, b, radius, min_distance, min_separation)
        if c is None:
            continue
        if resolve_contact(c, positions, velocities, restitution, correction_percent, slop) is not None:
            resolved += 1
    return resolved
