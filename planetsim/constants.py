#!/usr/bin/env python3
"""
Shared constants for the planet simulator (simulation units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Gravity integrator
DISTANCE_FLOOR = 1.0  # pairs closer than this contribute no force for the tick
DEFAULT_DT = 0.016  # simulation time per tick (about 60 Hz)

# Roche collapse
ROCHE_COEFFICIENT = 3.0  # tuned up from the rigid-body 2.44 so collapses happen readily
RIGID_ROCHE_COEFFICIENT = 2.44  # used only for drawing Roche rings
MAX_COLLAPSE_SPEED = 100.0  # faster flybys never collapse

# Debris
DEBRIS_COUNT = 10
DEBRIS_SPEED_MIN = 20.0
DEBRIS_SPEED_MAX = 50.0
DEBRIS_ESCAPE_MIN = 0.6
DEBRIS_ESCAPE_MAX = 1.0
DEBRIS_SPREAD_FACTOR = 0.8  # ring radius as a fraction of the victim radius
DEBRIS_RADIUS_FACTOR = 0.4
DEBRIS_DIMMING = 0.7
DEBRIS_ALPHA = 0.8
DEBRIS_COLOR_WEIGHTS = (1.0, 0.5, 0.3)  # per-channel weight of the variation term

# Trails
DEFAULT_TRAIL_LENGTH = 200
TRAIL_ALPHA = 0.5

# Simulation area (the viewer fits this square to the window)
SIM_WIDTH = 1000.0
SIM_HEIGHT = 1000.0

# Rendering (viewport)
VIEW_WIDTH = 900
VIEW_HEIGHT = 900
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
GRID_COLOR = (70, 70, 70)
GRID_SPACING = 50.0
ROCHE_RING_COLOR = (120, 40, 40)
HUD_COLOR = (200, 200, 200)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
