#!/usr/bin/env python3
"""
Data models for the planet simulator.

This module defines the immutable records shared between the physics engine,
the collapse subsystem, the trail recorder and the viewer.

Units and usage
- Positions, velocities and radii are in simulation units (the viewer maps a
  1000x1000 square onto the window).
- Every record is frozen. A tick never mutates a body; it builds new ones, so a
  renderer holding the previous snapshot always sees a consistent state.
- density is only consulted for Roche-limit comparisons.
"""
import math
from dataclasses import dataclass, field, replace
from typing import Iterable, Tuple

from .constants import DEBRIS_COUNT, DEFAULT_TRAIL_LENGTH
from .errors import InvalidConfiguration
from .utils import Color
from .vector_utils import vec_len, vec_sub


@dataclass(frozen=True)
class CelestialBody:
    """
    Represents a gravitating point mass.

    Fields:
    - name: Identifier, unique within the active body set
    - x, y: Position
    - vx, vy: Velocity
    - mass: Mass (> 0)
    - radius: Physical radius (> 0), also the drawn size
    - density: Density (> 0), used for the Roche distance
    - color: RGBA tuple passed through to the renderer
    - is_debris: Fragments produced by a collapse; never collapse again
    """
    name: str
    x: float
    y: float
    vx: float
    vy: float
    mass: float
    radius: float
    density: float = 1.0
    color: Color = (0.0, 0.0, 1.0, 1.0)
    is_debris: bool = False

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    def distance_to(self, other: "CelestialBody") -> float:
        return vec_len(vec_sub(other.position, self.position))

    def relative_speed_to(self, other: "CelestialBody") -> float:
        return vec_len(vec_sub(self.velocity, other.velocity))

    def with_state(self, x: float, y: float, vx: float, vy: float) -> "CelestialBody":
        """Return a copy moved to a new position and velocity."""
        return replace(self, x=x, y=y, vx=vx, vy=vy)


@dataclass(frozen=True)
class Trail:
    """
    Bounded position history for one body.

    points is ordered oldest first; only the newest max_length points survive.
    """
    body_name: str
    color: Color
    points: Tuple[Tuple[float, float], ...] = ()
    max_length: int = DEFAULT_TRAIL_LENGTH

    def add_position(self, x: float, y: float) -> "Trail":
        points = self.points + ((x, y),)
        if len(points) > self.max_length:
            points = points[len(points) - self.max_length:]
        return replace(self, points=points)

    def clear(self) -> "Trail":
        return replace(self, points=())

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class SimulationPreset:
    """A named initial configuration: gravitational constant plus bodies."""
    name: str
    description: str
    gravity_constant: float
    bodies: Tuple[CelestialBody, ...] = field(default_factory=tuple)


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def validate_body(body: CelestialBody) -> None:
    """Raise InvalidConfiguration if the body breaks the mass/radius/density invariants."""
    for attr in ("mass", "radius", "density"):
        value = getattr(body, attr)
        if not _is_positive(value):
            raise InvalidConfiguration(f"body {body.name!r}: {attr} must be positive, got {value!r}")
    for attr in ("x", "y", "vx", "vy"):
        value = getattr(body, attr)
        if not math.isfinite(value):
            raise InvalidConfiguration(f"body {body.name!r}: {attr} must be finite, got {value!r}")


def debris_name(victim_name: str, index: int) -> str:
    return f"{victim_name}_Debris_{index + 1}"


def validate_bodies(bodies: Iterable[CelestialBody]) -> None:
    """
    Check every body and the name set.

    Names must be unique, and no body may carry a name that another body's
    debris would take if it collapsed.
    """
    bodies = list(bodies)
    seen = set()
    for body in bodies:
        validate_body(body)
        if body.name in seen:
            raise InvalidConfiguration(f"duplicate body name {body.name!r}")
        seen.add(body.name)

    for body in bodies:
        for k in range(DEBRIS_COUNT):
            name = debris_name(body.name, k)
            if name in seen:
                raise InvalidConfiguration(f"body name {name!r} clashes with debris of {body.name!r}")


def validate_preset(preset: SimulationPreset) -> None:
    """
    Check a preset before it is allowed to replace the active state.

    Raises:
        InvalidConfiguration: non-positive gravity constant, non-positive mass,
            radius or density, non-finite coordinates, duplicate names, or
            names that would collide with another body's debris.
    """
    if not _is_positive(preset.gravity_constant):
        raise InvalidConfiguration(
            f"preset {preset.name!r}: gravity constant must be positive, got {preset.gravity_constant!r}"
        )
    validate_bodies(preset.bodies)
