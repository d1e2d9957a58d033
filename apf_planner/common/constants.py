#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Constants: default planning parameters and fixed search settings
"""

# =============================
# Potential field defaults
# =============================

# Grid cell size
DEFAULT_RESOLUTION: float = 0.5

# Repulsion cutoff radius
DEFAULT_ROBOT_RADIUS: float = 5.0

# Attractive / repulsive gains
DEFAULT_KP: float = 5.0
DEFAULT_ETA: float = 100.0

# Margin added around the obstacle bounding box
DEFAULT_AREA_WIDTH: float = 20.0

# Nearest obstacle distance never goes below this inside the radius
REPULSION_DQ_FLOOR: float = 0.1

# =============================
# Search
# =============================

# 8-connected neighborhood; the order is the tie-break order
MOTION_MODEL_8WAY = [
    (1, 0),
    (0, 1),
    (-1, 0),
    (0, -1),
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
]

# Iteration cap = ceil(factor * grid diagonal in cells)
ITERATION_CAP_FACTOR: float = 4.0

# Number of recent cells checked for revisits (0 disables)
DEFAULT_OSCILLATION_WINDOW: int = 3

# =============================
# Demo scenario / animation
# =============================

DEMO_OBSTACLES_X = [15.0, 5.0, 20.0, 25.0]
DEMO_OBSTACLES_Y = [25.0, 15.0, 26.0, 25.0]
DEMO_START: tuple[float, float] = (0.0, 10.0)
DEMO_GOAL: tuple[float, float] = (30.0, 30.0)

DEFAULT_PLOT_RANGE: tuple[float, float] = (0.0, 40.0)
DEFAULT_ANIMATION_PATH: str = "animations/potential_field.gif"
DEFAULT_ANIMATION_FPS: int = 20

# =============================
# Logging
# =============================

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
