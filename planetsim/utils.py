#!/usr/bin/env python3
"""
General utilities for the planet simulator.

Colors are carried through the engine as RGBA float tuples in [0, 1].
"""
from typing import Tuple

from .vector_utils import clamp

Color = Tuple[float, float, float, float]


def color_from_hex(argb: int) -> Color:
    """Build a color from a 0xAARRGGBB integer."""
    a = (argb >> 24) & 0xFF
    r = (argb >> 16) & 0xFF
    g = (argb >> 8) & 0xFF
    b = argb & 0xFF
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def parse_color(value) -> Color:
    """
    Parse a color from preset data.

    Accepts "#RRGGBB" / "#AARRGGBB" strings or a list of 3-4 floats in [0, 1].
    Raises ValueError for anything else.
    """
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) == 6:
            text = "FF" + text
        if len(text) != 8:
            raise ValueError(f"bad color string: {value!r}")
        return color_from_hex(int(text, 16))
    channels = [float(c) for c in value]
    if len(channels) == 3:
        channels.append(1.0)
    if len(channels) != 4:
        raise ValueError(f"bad color: {value!r}")
    r, g, b, a = (clamp(c, 0.0, 1.0) for c in channels)
    return (r, g, b, a)


def with_alpha(color: Color, alpha: float) -> Color:
    return (color[0], color[1], color[2], alpha)


def color_to_rgb255(color: Color) -> Tuple[int, int, int]:
    """Convert to a pygame-friendly RGB tuple, premultiplied against black."""
    r, g, b, a = color
    return (int(round(r * a * 255)), int(round(g * a * 255)), int(round(b * a * 255)))
