#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Geometry helpers

Planning region bounds and conversion between world coordinates and grid indices.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(ax - bx, ay - by)


def world_to_grid(value: float, origin: float, resolution: float) -> int:
    """
    Convert a world coordinate on one axis to a grid index

    Args:
        value: world coordinate
        origin: world coordinate of index 0 (minx or miny)
        resolution: grid cell size

    Returns:
        grid index, not clamped to the map
    """
    return round_half_away((value - origin) / resolution)


def grid_to_world(index: int, origin: float, resolution: float) -> float:
    """Convert a grid index on one axis back to its world coordinate."""
    return index * resolution + origin


@dataclass(frozen=True)
class Bounds:
    """Planning region (minx, miny, maxx, maxy) in world units"""
    minx: float
    miny: float
    maxx: float
    maxy: float

    @classmethod
    def from_obstacles(cls, ox: Sequence[float], oy: Sequence[float], area_width: float) -> "Bounds":
        """Obstacle extrema padded by half the area width on every side."""
        half = area_width / 2.0
        return cls(
            minx=min(ox) - half,
            miny=min(oy) - half,
            maxx=max(ox) + half,
            maxy=max(oy) + half,
        )

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny

    def is_valid(self) -> bool:
        values = (self.minx, self.miny, self.maxx, self.maxy)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.maxx > self.minx and self.maxy > self.miny

    def contains(self, x: float, y: float) -> bool:
        """Inclusive containment test."""
        return self.minx <= x <= self.maxx and self.miny <= y <= self.maxy

    def grid_shape(self, resolution: float) -> Tuple[int, int]:
        """Map dimensions (xw, yw) for the given cell size."""
        return (
            round_half_away(self.width / resolution),
            round_half_away(self.height / resolution),
        )
