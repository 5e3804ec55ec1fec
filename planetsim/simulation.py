#!/usr/bin/env python3
"""
Simulation orchestration.

What this module does
- SimulationState is an immutable snapshot of everything a renderer may read:
  bodies, trails, the active preset and its gravitational constant, and the
  feature toggles.
- step(state, dt, rng) is the pure per-tick transition:
    1) Roche collapse (if enabled), pruning the trails of destroyed bodies
    2) gravity integration over the resulting bodies
    3) trail recording (if enabled)
- OrbitalSimulator owns the current snapshot and swaps it wholesale on every
  tick, preset load or toggle. Readers holding an older snapshot are unaffected.

Threading model
- Single-threaded. The caller drives tick() from a fixed-interval timer and must
  not overlap calls. Play/pause belongs to the caller.
"""
import logging
import math
import random
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .constants import DEFAULT_TRAIL_LENGTH
from .data_models import CelestialBody, SimulationPreset, Trail, validate_preset
from .physics import NBodyPhysics
from .presets import sun_and_earth
from .roche import CollapseEvent, process_collapses
from .trails import clear_trails, initialize_trails, prune_trails, record_trails

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationState:
    preset: SimulationPreset
    gravity_constant: float
    bodies: Tuple[CelestialBody, ...]
    trails: Mapping[str, Trail]
    collapse_enabled: bool = True
    trail_enabled: bool = True
    trail_max_length: int = DEFAULT_TRAIL_LENGTH
    elapsed_time: float = 0.0
    tick_count: int = 0
    collapses: Tuple[CollapseEvent, ...] = ()  # collapses resolved during the last tick


def _freeze(trails) -> Mapping[str, Trail]:
    return MappingProxyType(dict(trails))


def _check_trail_length(trail_max_length: int) -> None:
    if trail_max_length < 1:
        raise ValueError(f"trail_max_length must be at least 1, got {trail_max_length!r}")


def initial_state(preset: SimulationPreset, collapse_enabled: bool = True, trail_enabled: bool = True,
                  trail_max_length: int = DEFAULT_TRAIL_LENGTH) -> SimulationState:
    """Validate a preset and build the snapshot it starts from."""
    _check_trail_length(trail_max_length)
    validate_preset(preset)
    bodies = tuple(preset.bodies)
    return SimulationState(
        preset=preset,
        gravity_constant=preset.gravity_constant,
        bodies=bodies,
        trails=_freeze(initialize_trails(bodies, trail_max_length)),
        collapse_enabled=collapse_enabled,
        trail_enabled=trail_enabled,
        trail_max_length=trail_max_length,
    )


def step(state: SimulationState, dt: float, rng, physics: Optional[NBodyPhysics] = None) -> SimulationState:
    """
    Advance a snapshot by one tick.

    Args:
        state: Current snapshot (not modified).
        dt: Time step, finite and > 0.
        rng: Random source for debris generation.
        physics: Integrator to use; a default NBodyPhysics if omitted.

    Returns:
        The next snapshot.
    """
    if not (math.isfinite(dt) and dt > 0):
        raise ValueError(f"dt must be a positive finite number, got {dt!r}")
    physics = physics or NBodyPhysics()

    bodies = state.bodies
    trails = state.trails
    collapses = ()

    if state.collapse_enabled:
        result = process_collapses(bodies, rng)
        collapses = tuple(result.events)
        if result.removed:
            bodies = tuple(result.bodies)
            trails = prune_trails(trails, result.removed)

    bodies = tuple(physics.step(bodies, state.gravity_constant, dt))

    if state.trail_enabled:
        trails = record_trails(trails, bodies, state.trail_max_length)

    return replace(
        state,
        bodies=bodies,
        trails=_freeze(trails),
        elapsed_time=state.elapsed_time + dt,
        tick_count=state.tick_count + 1,
        collapses=collapses,
    )


class OrbitalSimulator:
    """
    Stateful facade over step() for a real-time driver.

    The random source is injected (rng) or built from seed; it is the only
    nondeterministic input of the engine.
    """

    def __init__(self, preset: Optional[SimulationPreset] = None, rng: Optional[random.Random] = None,
                 seed: Optional[int] = None, trail_max_length: int = DEFAULT_TRAIL_LENGTH,
                 physics: Optional[NBodyPhysics] = None):
        if preset is None:
            preset = sun_and_earth()
        self.rng = rng if rng is not None else random.Random(seed)
        self.physics = physics or NBodyPhysics()
        self.trail_max_length = int(trail_max_length)
        _check_trail_length(self.trail_max_length)
        self._state = initial_state(preset, trail_max_length=self.trail_max_length)
        logger.info("Simulator initialized with preset %r", preset.name)

    # -- accessors -------------------------------------------------------

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def current_preset(self) -> SimulationPreset:
        return self._state.preset

    @property
    def gravity_constant(self) -> float:
        return self._state.gravity_constant

    @property
    def collapse_enabled(self) -> bool:
        return self._state.collapse_enabled

    @property
    def trail_enabled(self) -> bool:
        return self._state.trail_enabled

    def get_bodies(self) -> Tuple[CelestialBody, ...]:
        return self._state.bodies

    def get_trails(self) -> Mapping[str, Trail]:
        return self._state.trails

    # -- lifecycle -------------------------------------------------------

    def load_preset(self, preset: SimulationPreset) -> None:
        """
        Replace bodies, trails and gravitational constant in one swap.

        Raises:
            InvalidConfiguration: the preset is rejected and the previous state is kept.
        """
        try:
            new_state = initial_state(
                preset,
                collapse_enabled=self._state.collapse_enabled,
                trail_enabled=self._state.trail_enabled,
                trail_max_length=self.trail_max_length,
            )
        except ValueError:
            logger.warning("Rejected preset %r; keeping %r", preset.name, self._state.preset.name)
            raise
        self._state = new_state
        logger.info("Loaded preset %r (%d bodies, G=%g)", preset.name, len(preset.bodies), preset.gravity_constant)

    initialize = load_preset

    def reset(self) -> None:
        """Reload the active preset."""
        self.load_preset(self._state.preset)

    def tick(self, dt: float) -> None:
        self._state = step(self._state, dt, self.rng, self.physics)

    # -- toggles ---------------------------------------------------------

    def set_collapse_enabled(self, enabled: bool) -> None:
        self._state = replace(self._state, collapse_enabled=bool(enabled))

    def set_trail_enabled(self, enabled: bool) -> None:
        """Enable or disable recording; disabling empties every trail."""
        trails = self._state.trails
        if not enabled:
            trails = _freeze(clear_trails(trails))
        self._state = replace(self._state, trail_enabled=bool(enabled), trails=trails)

    def toggle_collapse(self) -> bool:
        self.set_collapse_enabled(not self._state.collapse_enabled)
        return self._state.collapse_enabled

    def toggle_trails(self) -> bool:
        self.set_trail_enabled(not self._state.trail_enabled)
        return self._state.trail_enabled
