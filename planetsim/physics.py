#!/usr/bin/env python3
"""
Core Physics Engine for the planet simulator

Responsibilities
- Compute pairwise Newtonian gravitational forces with a hard distance floor.
- Advance body states with semi-implicit (symplectic) Euler.
- Provide small helpers for common orbital computations (circular velocity, momentum).

Numerical notes
- Distance floor: pairs closer than the floor contribute zero force for that tick.
  Unlike softening this leaves the force law exact outside the floor while keeping
  coincident bodies from producing infinities or NaN.
- Ordering: velocities are updated from forces evaluated at the pre-tick positions,
  then positions are advanced with the updated velocities. This keeps orbits closed
  over long runs where explicit Euler spirals outwards.
- Complexity: force computation is O(N^2) per step (direct summation).

Threading
- This module is pure compute. Input bodies are never mutated; new bodies are returned.
"""

import math
from typing import List, Sequence, Tuple

from .constants import DISTANCE_FLOOR
from .data_models import CelestialBody


class NBodyPhysics:
    """
    N-body gravitational physics engine with a distance floor.

    The gravitational force on body i from body j is:
    F = G * m_i * m_j / d^2 along the unit vector from i to j

    Pairs with d below the floor are ignored for the step.
    """

    def __init__(self, distance_floor: float = DISTANCE_FLOOR):
        """
        Initialize the physics engine.

        Args:
            distance_floor: Separation below which a pair exerts no force (>= 0)
        """
        self.distance_floor = max(0.0, float(distance_floor))

    def compute_forces(self, bodies: Sequence[CelestialBody], g: float) -> List[Tuple[float, float]]:
        """
        Compute the net gravitational force on every body.

        Args:
            bodies: Bodies in iteration order.
            g: Gravitational constant.

        Returns:
            List of (fx, fy) forces, same order as the input.
        """
        n = len(bodies)
        forces = [(0.0, 0.0)] * n
        floor = self.distance_floor

        for i in range(n):
            fx_total, fy_total = 0.0, 0.0
            bi = bodies[i]

            for j in range(n):
                if i == j:
                    continue
                bj = bodies[j]

                # Vector from body i to body j
                dx = bj.x - bi.x
                dy = bj.y - bi.y
                distance = math.sqrt(dx * dx + dy * dy)

                # Zero distance lands here as well
                if distance < floor or distance == 0.0:
                    continue

                force = g * bi.mass * bj.mass / (distance * distance)
                fx_total += force * dx / distance
                fy_total += force * dy / distance

            forces[i] = (fx_total, fy_total)

        return forces

    def step(self, bodies: Sequence[CelestialBody], g: float, dt: float) -> List[CelestialBody]:
        """
        Advance all bodies by dt using semi-implicit Euler.

        With zero or one body no forces act; a lone body simply drifts.

        Args:
            bodies: Current bodies (not modified).
            g: Gravitational constant.
            dt: Time step (> 0).

        Returns:
            New list of bodies with updated velocities and positions.
        """
        forces = self.compute_forces(bodies, g)
        updated = []
        for body, (fx, fy) in zip(bodies, forces):
            vx = body.vx + (fx / body.mass) * dt
            vy = body.vy + (fy / body.mass) * dt
            updated.append(body.with_state(body.x + vx * dt, body.y + vy * dt, vx, vy))
        return updated


def circular_orbit_velocity(g: float, central_mass: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    G * M / r = v^2 / r, therefore v = sqrt(G * M / r)

    Args:
        g: Gravitational constant
        central_mass: Mass of the central body
        orbital_radius: Orbital radius

    Returns:
        Orbital speed for a circular orbit, 0.0 for a non-positive radius
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(g * central_mass / orbital_radius)


def total_momentum(bodies: Sequence[CelestialBody]) -> Tuple[float, float]:
    """Sum of m * v over all bodies."""
    px = sum(b.mass * b.vx for b in bodies)
    py = sum(b.mass * b.vy for b in bodies)
    return (px, py)
