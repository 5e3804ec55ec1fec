#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the engine.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_norm(a: Vec2, fallback: Vec2 = (0.0, 0.0)) -> Vec2:
    """Unit vector along a, or fallback when a has zero length."""
    l = vec_len(a)
    if l == 0:
        return fallback
    return (a[0] / l, a[1] / l)
