#!/usr/bin/env python3
"""
Preset catalog and JSON preset loading.

Built-in presets are plain functions returning SimulationPreset records. Users can
also describe a preset in JSON:

{
  "name": "Sun and Earth",
  "description": "Optional description",
  "gravity_constant": 40000.0,
  "bodies": [
    {
      "name": "Sun",
      "position": [500.0, 500.0],
      "velocity": [0.0, 0.0],
      "mass": 333000.0,
      "radius": 35.0,
      "density": 1.4,              # optional, default 1.0
      "color": "#FDB813"           # "#RRGGBB", "#AARRGGBB" or [r, g, b(, a)] in 0..1
    }
  ]
}

The loader only parses. Range checks (positive mass, radius, density) happen in
data_models.validate_preset when the preset is loaded into a simulator.
"""
import json
import logging
import os
from typing import Callable, Dict, List

from .data_models import CelestialBody, SimulationPreset
from .errors import InvalidConfiguration
from .physics import circular_orbit_velocity
from .utils import color_from_hex, parse_color

logger = logging.getLogger(__name__)

CENTER = 500.0


def sun_and_earth() -> SimulationPreset:
    """Sun/Earth mass ratio with Earth on a circular orbit."""
    sun_mass = 333000.0
    au_distance = 200.0
    g = 40000.0
    earth_speed = circular_orbit_velocity(g, sun_mass, au_distance)

    return SimulationPreset(
        name="Sun and Earth",
        description="Real Sun/Earth mass ratio",
        gravity_constant=g,
        bodies=(
            CelestialBody("Sun", CENTER, CENTER, 0.0, 0.0, mass=sun_mass, radius=35.0,
                          density=1.4, color=color_from_hex(0xFFFDB813)),
            CelestialBody("Earth", CENTER + au_distance, CENTER, 0.0, earth_speed, mass=1.0, radius=10.0,
                          density=5.5, color=color_from_hex(0xFF4169E1)),
        ),
    )


def binary_star() -> SimulationPreset:
    """Two equal stars circling their common barycenter."""
    mass = 100.0
    distance = 150.0
    g = 50000.0
    speed = circular_orbit_velocity(g, mass, 2 * distance)

    return SimulationPreset(
        name="Binary Star",
        description="Two equal-mass stars orbiting a shared barycenter",
        gravity_constant=g,
        bodies=(
            CelestialBody("Star A", CENTER - distance / 2, CENTER, 0.0, speed, mass=mass, radius=25.0,
                          density=1.0, color=color_from_hex(0xFFFFD700)),
            CelestialBody("Star B", CENTER + distance / 2, CENTER, 0.0, -speed, mass=mass, radius=25.0,
                          density=1.0, color=color_from_hex(0xFFFFA500)),
        ),
    )


def three_body() -> SimulationPreset:
    """Three equal stars with zero net momentum."""
    mass = 50.0
    g = 20000.0
    separation = 200.0

    return SimulationPreset(
        name="Three Body",
        description="Three equal-mass stars on a complex but bounded path",
        gravity_constant=g,
        bodies=(
            CelestialBody("Star 1", CENTER - separation / 3, CENTER - separation / 4, 8.0, 12.0,
                          mass=mass, radius=20.0, density=0.8, color=color_from_hex(0xFFFFD700)),
            CelestialBody("Star 2", CENTER + separation / 3, CENTER - separation / 4, 8.0, -12.0,
                          mass=mass, radius=20.0, density=0.8, color=color_from_hex(0xFF00CED1)),
            CelestialBody("Star 3", CENTER, CENTER + separation / 2, -16.0, 0.0,
                          mass=mass, radius=20.0, density=0.8, color=color_from_hex(0xFFFF69B4)),
        ),
    )


def elliptical_orbit() -> SimulationPreset:
    """A planet launched 15% faster than circular speed at perihelion."""
    sun_mass = 300.0
    g = 40000.0
    perihelion = 120.0
    speed = circular_orbit_velocity(g, sun_mass, perihelion) * 1.15

    return SimulationPreset(
        name="Elliptical Orbit",
        description="A planet on a markedly elliptical orbit",
        gravity_constant=g,
        bodies=(
            CelestialBody("Sun", CENTER, CENTER, 0.0, 0.0, mass=sun_mass, radius=30.0,
                          density=1.4, color=color_from_hex(0xFFFFA500)),
            CelestialBody("Planet", CENTER + perihelion, CENTER, 0.0, speed, mass=1.0, radius=10.0,
                          density=3.0, color=color_from_hex(0xFF8A2BE2)),
        ),
    )


def tidal_disruption() -> SimulationPreset:
    """A dense heavy body shredding two stars and a comet."""
    black_hole_mass = 500.0
    star_mass = 20.0
    g = 35000.0
    star_speed = circular_orbit_velocity(g, black_hole_mass, 150.0) * 0.9
    comet_speed = circular_orbit_velocity(g, black_hole_mass, 120.0) * 0.85

    return SimulationPreset(
        name="Tidal Disruption",
        description="A black-hole-like body tearing apart several bodies",
        gravity_constant=g,
        bodies=(
            CelestialBody("Black Hole", CENTER, CENTER, 0.0, 0.0, mass=black_hole_mass, radius=25.0,
                          density=10.0, color=color_from_hex(0xFF1C1C1C)),
            CelestialBody("Red Star", CENTER + 150.0, CENTER, -5.0, star_speed, mass=star_mass, radius=20.0,
                          density=0.8, color=color_from_hex(0xFFDC143C)),
            CelestialBody("Blue Star", CENTER - 150.0, CENTER, 5.0, -star_speed, mass=star_mass, radius=20.0,
                          density=0.8, color=color_from_hex(0xFF4682B4)),
            CelestialBody("Comet", CENTER, CENTER - 120.0, comet_speed, 0.0, mass=0.5, radius=8.0,
                          density=0.3, color=color_from_hex(0xFFF0E68C)),
        ),
    )


PRESET_FACTORIES: List[Callable[[], SimulationPreset]] = [
    sun_and_earth,
    binary_star,
    three_body,
    elliptical_orbit,
    tidal_disruption,
]


def get_all_presets() -> List[SimulationPreset]:
    return [factory() for factory in PRESET_FACTORIES]


def get_preset(name: str) -> SimulationPreset:
    """Look up a built-in preset by display name. Raises KeyError if unknown."""
    presets: Dict[str, SimulationPreset] = {p.name: p for p in get_all_presets()}
    return presets[name]


def preset_from_dict(data: dict) -> SimulationPreset:
    """
    Build a preset from parsed JSON.

    Raises:
        InvalidConfiguration: missing or malformed fields.
    """
    try:
        name = str(data.get("name") or "Custom")
        bodies = []
        for index, b in enumerate(data["bodies"]):
            bodies.append(CelestialBody(
                name=str(b.get("name") or f"Body {index + 1}"),
                x=float(b["position"][0]),
                y=float(b["position"][1]),
                vx=float(b["velocity"][0]),
                vy=float(b["velocity"][1]),
                mass=float(b["mass"]),
                radius=float(b["radius"]),
                density=float(b.get("density", 1.0)),
                color=parse_color(b.get("color", "#4169E1")),
            ))
        return SimulationPreset(
            name=name,
            description=str(data.get("description", "")),
            gravity_constant=float(data["gravity_constant"]),
            bodies=tuple(bodies),
        )
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidConfiguration(f"malformed preset: {exc}") from exc


def load_preset_file(path: str) -> SimulationPreset:
    """Load a preset JSON file. Raises InvalidConfiguration on unreadable or malformed files."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidConfiguration(f"cannot read preset {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"preset {path} must be a JSON object")
    preset = preset_from_dict(data)
    logger.info("Loaded preset %r from %s (%d bodies)", preset.name, path, len(preset.bodies))
    return preset


def list_preset_files(directory: str) -> List[str]:
    """List JSON files available in a preset directory."""
    if not os.path.isdir(directory):
        return []
    return sorted(fn for fn in os.listdir(directory) if fn.lower().endswith(".json"))


def load_preset_dir(directory: str) -> List[SimulationPreset]:
    """
    Load every JSON preset in a directory, sorted by file name.

    Raises:
        InvalidConfiguration: the first unreadable or malformed file.
    """
    return [load_preset_file(os.path.join(directory, fn)) for fn in list_preset_files(directory)]
