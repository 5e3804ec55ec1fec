"""Planet simulator core: gravity, Roche collapse, debris and trails."""

from .data_models import CelestialBody, SimulationPreset, Trail
from .errors import InvalidConfiguration
from .physics import NBodyPhysics, circular_orbit_velocity, total_momentum
from .presets import get_all_presets, get_preset, load_preset_dir, load_preset_file
from .simulation import OrbitalSimulator, SimulationState, initial_state, step

__all__ = [
    "CelestialBody",
    "SimulationPreset",
    "Trail",
    "InvalidConfiguration",
    "NBodyPhysics",
    "circular_orbit_velocity",
    "total_momentum",
    "get_all_presets",
    "get_preset",
    "load_preset_dir",
    "load_preset_file",
    "OrbitalSimulator",
    "SimulationState",
    "initial_state",
    "step",
]
