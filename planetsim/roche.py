#!/usr/bin/env python3
"""
Roche-limit collapse detection.

A satellite that drifts inside its primary's Roche distance at low relative
speed is torn apart: it is removed from the body set and replaced by debris
(see debris.py). Debris never takes part in a collapse, either as primary or
as victim, so collapses cannot chain.

The Roche distance uses a tuned rigid-body form:

    d_roche = k * R_primary * (rho_primary / rho_satellite)^(1/3),  k = 3.0
"""
import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Tuple

from .constants import MAX_COLLAPSE_SPEED, RIGID_ROCHE_COEFFICIENT, ROCHE_COEFFICIENT
from .data_models import CelestialBody
from .debris import create_debris

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollapseEvent:
    victim_name: str
    primary_name: str
    debris_count: int


@dataclass
class CollapseResult:
    """
    Outcome of one collapse pass.

    - bodies: survivors in their original order followed by all new debris
    - removed: names of destroyed victims, in collapse order
    - events: one entry per collapse
    """
    bodies: List[CelestialBody]
    removed: List[str] = field(default_factory=list)
    events: List[CollapseEvent] = field(default_factory=list)


def select_primary_and_victim(first: CelestialBody, second: CelestialBody) -> Tuple[CelestialBody, CelestialBody]:
    """
    Return (primary, victim): the heavier body is the primary.

    On equal masses the first argument (the lower list index when called from
    process_collapses) is the primary.
    """
    if second.mass > first.mass:
        return second, first
    return first, second


def roche_distance(primary: CelestialBody, satellite: CelestialBody) -> float:
    """Roche distance of satellite around primary; arguments are swapped if primary is lighter."""
    if primary.mass < satellite.mass:
        return roche_distance(satellite, primary)

    density_ratio = primary.density / satellite.density
    return ROCHE_COEFFICIENT * primary.radius * density_ratio ** (1.0 / 3.0)


def roche_radius(body: CelestialBody, reference_density: float = 1.0) -> float:
    """Rigid-body Roche radius against a reference density; used to draw the Roche ring."""
    density_ratio = body.density / reference_density
    return RIGID_ROCHE_COEFFICIENT * body.radius * density_ratio ** (1.0 / 3.0)


def is_within_roche_limit(first: CelestialBody, second: CelestialBody) -> bool:
    """True if the pair is closer than its Roche distance. Debris is never within it."""
    if first.is_debris or second.is_debris:
        return False

    primary, victim = select_primary_and_victim(first, second)
    return primary.distance_to(victim) < roche_distance(primary, victim)


def should_collapse(victim: CelestialBody, primary: CelestialBody) -> bool:
    """Only slow encounters collapse; fast flybys survive."""
    return victim.relative_speed_to(primary) < MAX_COLLAPSE_SPEED


def can_collapse(first: CelestialBody, second: CelestialBody) -> bool:
    return is_within_roche_limit(first, second) and should_collapse(first, second)


def process_collapses(bodies: Sequence[CelestialBody], rng) -> CollapseResult:
    """
    Detect and resolve every Roche collapse among bodies.

    Pairs are visited as (i, j) with i < j in list order. A victim is consumed at
    most once and is skipped for all later pairs; primaries are left untouched.
    Debris created here is only appended to the result, so it is never checked
    in the same pass.

    Args:
        bodies: Current bodies (not modified).
        rng: Random source handed to the debris generator.

    Returns:
        CollapseResult with the new body list.
    """
    n = len(bodies)
    if n < 2:
        return CollapseResult(bodies=list(bodies))

    consumed: Set[int] = set()
    new_debris: List[CelestialBody] = []
    result = CollapseResult(bodies=[])

    for i in range(n):
        if i in consumed:
            continue
        for j in range(i + 1, n):
            if j in consumed:
                continue
            bi, bj = bodies[i], bodies[j]
            if not can_collapse(bi, bj):
                continue

            primary, victim = select_primary_and_victim(bi, bj)
            victim_index = j if victim is bj else i
            consumed.add(victim_index)

            debris = create_debris(victim, primary, rng)
            new_debris.extend(debris)
            result.removed.append(victim.name)
            result.events.append(CollapseEvent(victim.name, primary.name, len(debris)))
            logger.info("Roche collapse: %s torn apart by %s into %d fragments",
                        victim.name, primary.name, len(debris))

            if victim_index == i:
                break

    result.bodies = [b for idx, b in enumerate(bodies) if idx not in consumed]
    result.bodies.extend(new_debris)
    return result
