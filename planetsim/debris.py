#!/usr/bin/env python3
"""
Debris generation for collapsed bodies.

A victim is replaced by a fixed ring of fragments that together carry its
exact mass and fly away from the primary with a random scatter. Randomness is
drawn from an explicit random.Random handle so a seeded run is reproducible.
"""
import math
from typing import List

from .constants import (
    DEBRIS_ALPHA,
    DEBRIS_COLOR_WEIGHTS,
    DEBRIS_COUNT,
    DEBRIS_DIMMING,
    DEBRIS_ESCAPE_MAX,
    DEBRIS_ESCAPE_MIN,
    DEBRIS_RADIUS_FACTOR,
    DEBRIS_SPEED_MAX,
    DEBRIS_SPEED_MIN,
    DEBRIS_SPREAD_FACTOR,
)
from .data_models import CelestialBody, debris_name
from .utils import Color
from .vector_utils import clamp, vec_norm, vec_sub


def debris_color(color: Color, index: int) -> Color:
    """Dim the victim's color and shift it slightly per fragment."""
    variation = (index * 0.1) % 0.3
    r, g, b = (
        clamp(channel * DEBRIS_DIMMING + variation * weight, 0.0, 1.0)
        for channel, weight in zip(color[:3], DEBRIS_COLOR_WEIGHTS)
    )
    return (r, g, b, DEBRIS_ALPHA)


def create_debris(victim: CelestialBody, primary: CelestialBody, rng) -> List[CelestialBody]:
    """
    Break a victim into DEBRIS_COUNT fragments.

    Fragments sit on a ring of radius 0.8 * victim.radius around the victim's
    last position. Each inherits the victim's velocity plus a kick of
    Uniform(20, 50) along a blend of the escape direction (away from the
    primary) and a random direction.

    Args:
        victim: Body being destroyed.
        primary: Heavier body that caused the collapse.
        rng: random.Random (or anything with uniform(a, b)).

    Returns:
        The fragments, in index order.
    """
    escape_x, escape_y = vec_norm(vec_sub(victim.position, primary.position), fallback=(1.0, 0.0))

    fragment_mass = victim.mass / DEBRIS_COUNT
    fragment_radius = victim.radius * DEBRIS_RADIUS_FACTOR
    spread = victim.radius * DEBRIS_SPREAD_FACTOR

    debris = []
    for k in range(DEBRIS_COUNT):
        angle = 2.0 * math.pi * k / DEBRIS_COUNT

        base_speed = rng.uniform(DEBRIS_SPEED_MIN, DEBRIS_SPEED_MAX)
        escape_component = rng.uniform(DEBRIS_ESCAPE_MIN, DEBRIS_ESCAPE_MAX)
        random_angle = rng.uniform(0.0, 2.0 * math.pi)
        random_component = 1.0 - escape_component

        vx = victim.vx + base_speed * (escape_component * escape_x + random_component * math.cos(random_angle))
        vy = victim.vy + base_speed * (escape_component * escape_y + random_component * math.sin(random_angle))

        debris.append(CelestialBody(
            name=debris_name(victim.name, k),
            x=victim.x + math.cos(angle) * spread,
            y=victim.y + math.sin(angle) * spread,
            vx=vx,
            vy=vy,
            mass=fragment_mass,
            radius=fragment_radius,
            density=victim.density,
            color=debris_color(victim.color, k),
            is_debris=True,
        ))

    return debris
