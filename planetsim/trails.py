#!/usr/bin/env python3
"""
Trail recording.

Trails are kept in a name -> Trail mapping. Every function returns a new
dictionary and leaves its input alone; the orchestrator wraps the result in a
read-only view before publishing it.

Clearing empties each trail but keeps the entries, so a cleared map still has
exactly one trail per live non-debris body.
"""
from typing import Dict, Iterable, Mapping, Sequence

from .constants import DEFAULT_TRAIL_LENGTH, TRAIL_ALPHA
from .data_models import CelestialBody, Trail
from .utils import with_alpha

Trails = Mapping[str, Trail]


def new_trail(body: CelestialBody, max_length: int = DEFAULT_TRAIL_LENGTH) -> Trail:
    return Trail(body_name=body.name, color=with_alpha(body.color, TRAIL_ALPHA), max_length=max_length)


def initialize_trails(bodies: Sequence[CelestialBody], max_length: int = DEFAULT_TRAIL_LENGTH) -> Dict[str, Trail]:
    """One empty trail per non-debris body."""
    return {b.name: new_trail(b, max_length) for b in bodies if not b.is_debris}


def record_trails(trails: Trails, bodies: Sequence[CelestialBody],
                  max_length: int = DEFAULT_TRAIL_LENGTH) -> Dict[str, Trail]:
    """
    Append each live non-debris body's position to its trail.

    A body without an entry gets a fresh trail starting at its current position.
    Trails whose body is gone are carried over unchanged.
    """
    updated = dict(trails)
    for body in bodies:
        if body.is_debris:
            continue
        trail = updated.get(body.name)
        if trail is None:
            trail = new_trail(body, max_length)
        updated[body.name] = trail.add_position(body.x, body.y)
    return updated


def prune_trails(trails: Trails, removed_names: Iterable[str]) -> Dict[str, Trail]:
    """Drop the trails of destroyed bodies."""
    removed = set(removed_names)
    return {name: trail for name, trail in trails.items() if name not in removed}


def clear_trails(trails: Trails) -> Dict[str, Trail]:
    return {name: trail.clear() for name, trail in trails.items()}
