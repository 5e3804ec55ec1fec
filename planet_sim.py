#!/usr/bin/env python3
"""
Planet Simulator application entry point and renderer.

What this module does
- Opens a Pygame window and drives OrbitalSimulator.tick() at a fixed 60 Hz while playing.
- Draws the last committed snapshot: grid, trails, Roche rings and bodies.
- Keyboard controls replace a separate control panel.

Controls
- Space: Play/Pause    R: Reset preset    C: Toggle Roche collapse    T: Toggle trails
- 1-9: Built-in presets, then any loaded with --preset-dir    Esc: Quit

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python planet_sim.py [--preset-file my_preset.json] [--preset-dir presets/] [--seed 42]`
"""

import argparse
import logging
import sys

import pygame
from pygame import gfxdraw

from planetsim.camera import CoordinateConverter
from planetsim.constants import (
    BACKGROUND_COLOR,
    DEFAULT_DT,
    FPS,
    GRID_COLOR,
    GRID_SPACING,
    HUD_COLOR,
    ROCHE_RING_COLOR,
    SAFE_COORD_LIMIT,
    SIM_HEIGHT,
    SIM_WIDTH,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from planetsim.errors import InvalidConfiguration
from planetsim.presets import get_all_presets, load_preset_dir, load_preset_file
from planetsim.roche import roche_radius
from planetsim.simulation import OrbitalSimulator
from planetsim.utils import color_to_rgb255

logger = logging.getLogger("planet_sim")


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameRenderer:
    """
    Pygame loop: steps the simulator, draws bodies and trails, handles keys.
    """

    def __init__(self, sim: OrbitalSimulator, extra_presets=()):
        self.sim = sim
        self.presets = get_all_presets() + list(extra_presets)
        self.converter = CoordinateConverter((VIEW_WIDTH, VIEW_HEIGHT))
        self.surface = None
        self.clock = None
        self.font = None
        self.playing = True
        self.running = True
        self.status = ""

    def run(self):
        pygame.init()
        pygame.display.set_caption("Planet Simulator")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)

        while self.running:
            self.handle_events()
            if self.playing:
                self.sim.tick(DEFAULT_DT)
                for event in self.sim.state.collapses:
                    self.status = f"{event.victim_name} torn apart by {event.primary_name}"
            self.draw()
            self.clock.tick(FPS)

        pygame.quit()

    def load_preset(self, index: int):
        if not 0 <= index < len(self.presets):
            return
        preset = self.presets[index]
        try:
            self.sim.load_preset(preset)
        except InvalidConfiguration as exc:
            self.status = f"Preset rejected: {exc}"
            return
        self.status = f"Loaded {preset.name}"

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.converter.set_viewport_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.playing = not self.playing
                elif event.key == pygame.K_r:
                    self.sim.reset()
                    self.status = "Reset"
                elif event.key == pygame.K_c:
                    enabled = self.sim.toggle_collapse()
                    self.status = f"Roche collapse {'on' if enabled else 'off'}"
                elif event.key == pygame.K_t:
                    enabled = self.sim.toggle_trails()
                    self.status = f"Trails {'on' if enabled else 'off'}"
                elif pygame.K_1 <= event.key <= pygame.K_9:
                    self.load_preset(event.key - pygame.K_1)

    def draw_grid(self, surf):
        steps = int(SIM_WIDTH / GRID_SPACING)
        for k in range(steps + 1):
            v = k * GRID_SPACING
            start = _safe_point(self.converter.sim_to_screen((v, 0.0)))
            end = _safe_point(self.converter.sim_to_screen((v, SIM_HEIGHT)))
            if start and end:
                pygame.draw.line(surf, GRID_COLOR, start, end, 1)
            start = _safe_point(self.converter.sim_to_screen((0.0, v)))
            end = _safe_point(self.converter.sim_to_screen((SIM_WIDTH, v)))
            if start and end:
                pygame.draw.line(surf, GRID_COLOR, start, end, 1)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.draw_grid(surf)

        # One snapshot for the whole frame
        state = self.sim.state

        if state.trail_enabled:
            for trail in state.trails.values():
                pts = [p for p in (_safe_point(self.converter.sim_to_screen(pt)) for pt in trail.points) if p]
                if len(pts) > 1:
                    pygame.draw.aalines(surf, color_to_rgb255(trail.color), False, pts)

        for body in state.bodies:
            center = _safe_point(self.converter.sim_to_screen(body.position))
            if center is None:
                continue
            vis_r = max(2, min(200, int(self.converter.scale_to_screen(body.radius))))
            if state.collapse_enabled and not body.is_debris:
                ring_r = min(SAFE_COORD_LIMIT, int(self.converter.scale_to_screen(roche_radius(body))))
                gfxdraw.aacircle(surf, center[0], center[1], ring_r, ROCHE_RING_COLOR)
            gfxdraw.filled_circle(surf, center[0], center[1], vis_r, color_to_rgb255(body.color))
            gfxdraw.aacircle(surf, center[0], center[1], vis_r, color_to_rgb255(body.color))

        self.draw_text(surf, "Space: Play/Pause | R: Reset | C: Collapse | T: Trails | 1-9: Presets", 10, 10)
        self.draw_text(
            surf,
            f"{state.preset.name}  [{'Playing' if self.playing else 'Paused'}]  "
            f"bodies={len(state.bodies)}  collapse={'on' if state.collapse_enabled else 'off'}  "
            f"trails={'on' if state.trail_enabled else 'off'}",
            10, 30,
        )
        if self.status:
            self.draw_text(surf, self.status, 10, 50)

        pygame.display.flip()

    def draw_text(self, surface, text, x, y):
        img = self.font.render(text, True, HUD_COLOR)
        surface.blit(img, (x, y))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Real-time N-body simulator with Roche-limit collapse")
    parser.add_argument("--preset-file", help="JSON preset to load instead of the built-in Sun and Earth")
    parser.add_argument("--preset-dir", help="directory of JSON presets added after the built-in ones")
    parser.add_argument("--seed", type=int, default=None, help="seed for debris generation")
    parser.add_argument("--trail-length", type=int, default=200, help="maximum points per trail")
    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    preset = None
    extra_presets = []
    try:
        if args.preset_file:
            preset = load_preset_file(args.preset_file)
        if args.preset_dir:
            extra_presets = load_preset_dir(args.preset_dir)
    except InvalidConfiguration as exc:
        logger.error("%s", exc)
        return 1

    try:
        sim = OrbitalSimulator(preset, seed=args.seed, trail_max_length=args.trail_length)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    PygameRenderer(sim, extra_presets).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
