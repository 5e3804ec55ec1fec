#!/usr/bin/env python3
"""
Camera utilities for 2D simulation-to-screen transforms.

The simulation lives in a fixed SIM_WIDTH x SIM_HEIGHT square; the converter
fits that square into the window with a uniform scale and centers it.
"""
from typing import Tuple

from .constants import SIM_HEIGHT, SIM_WIDTH, VIEW_HEIGHT, VIEW_WIDTH


class CoordinateConverter:
    """
    Maps simulation coordinates to screen pixels for a given viewport size.
    """

    def __init__(self, viewport_size=(VIEW_WIDTH, VIEW_HEIGHT), sim_width=SIM_WIDTH, sim_height=SIM_HEIGHT):
        self.sim_width = float(sim_width)
        self.sim_height = float(sim_height)
        self.set_viewport_size(*viewport_size)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)
        self.scale = min(w / self.sim_width, h / self.sim_height)
        self.offset = ((w - self.sim_width * self.scale) / 2, (h - self.sim_height * self.scale) / 2)

    def sim_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        px = pos[0] * self.scale + self.offset[0]
        py = pos[1] * self.scale + self.offset[1]
        return (int(px), int(py))

    def screen_to_sim(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        return ((screen[0] - self.offset[0]) / self.scale, (screen[1] - self.offset[1]) / self.scale)

    def scale_to_screen(self, value: float) -> float:
        return value * self.scale
