#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Potential field model: obstacle geometry, planning parameters and the
discretized potential map
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from apf_planner.common.constants import REPULSION_DQ_FLOOR
from apf_planner.common.exceptions import InvalidInputError
from apf_planner.config.models import PlanningConfig
from apf_planner.core.geometry import Bounds, distance, grid_to_world, world_to_grid


class FieldModel:
    """
    Artificial potential field over the obstacle bounding region

    The map is an array of shape (xw, yw) indexed [ix, iy]; cell (ix, iy) sits at
    world coordinate (ix * resolution + minx, iy * resolution + miny). It is
    replaced every time generate_potential_map() runs, so one instance must not
    be used to plan for two goals at the same time.

    Example:
        ```python
        field = FieldModel([15.0, 5.0], [25.0, 15.0], PlanningConfig(resolution=0.5))
        pmap = field.generate_potential_map(30.0, 30.0)
        ```
    """

    def __init__(self, ox: Sequence[float], oy: Sequence[float], config: Optional[PlanningConfig] = None):
        """
        Args:
            ox: obstacle x coordinates
            oy: obstacle y coordinates, paired with ox by index
            config: planning parameters (defaults when None)

        Raises:
            InvalidInputError: empty or mismatched obstacle arrays, non-finite
                coordinates, invalid parameters or a region smaller than one cell
        """
        if config is None:
            config = PlanningConfig()
        config.check_values()

        if ox is None or oy is None:
            raise InvalidInputError("obstacle arrays must not be None")
        ox_arr = np.array(ox, dtype=float).ravel()
        oy_arr = np.array(oy, dtype=float).ravel()
        if ox_arr.size != oy_arr.size:
            raise InvalidInputError(f"obstacle arrays differ in length: {ox_arr.size} != {oy_arr.size}")
        if ox_arr.size == 0:
            raise InvalidInputError("at least one obstacle is required")
        if not (np.all(np.isfinite(ox_arr)) and np.all(np.isfinite(oy_arr))):
            raise InvalidInputError("obstacle coordinates must be finite")

        ox_arr.setflags(write=False)
        oy_arr.setflags(write=False)
        self._ox = ox_arr
        self._oy = oy_arr
        self._config = config

        self._bounds = Bounds.from_obstacles(ox_arr.tolist(), oy_arr.tolist(), config.area_width)
        if not self._bounds.is_valid():
            raise InvalidInputError(f"degenerate planning region: {self._bounds}")
        self._grid_shape = self._bounds.grid_shape(config.resolution)
        if self._grid_shape[0] <= 0 or self._grid_shape[1] <= 0:
            raise InvalidInputError(
                f"planning region {self._bounds} is smaller than one cell at resolution {config.resolution}"
            )

        self._pmap: Optional[np.ndarray] = None
        self._map_goal: Optional[Tuple[float, float]] = None

        logger.debug(
            f"FieldModel created: obstacles={ox_arr.size}, bounds={self._bounds}, grid_shape={self._grid_shape}"
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def config(self) -> PlanningConfig:
        return self._config

    @property
    def resolution(self) -> float:
        return self._config.resolution

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def grid_shape(self) -> Tuple[int, int]:
        """(xw, yw)"""
        return self._grid_shape

    @property
    def obstacles(self) -> Tuple[np.ndarray, np.ndarray]:
        """Read-only (ox, oy) arrays."""
        return self._ox, self._oy

    @property
    def potential_map(self) -> Optional[np.ndarray]:
        """Current map, None until generate_potential_map() has run."""
        return self._pmap

    @property
    def map_goal(self) -> Optional[Tuple[float, float]]:
        """Goal the current map was generated for."""
        return self._map_goal

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------
    def contains(self, x: float, y: float) -> bool:
        return self._bounds.contains(x, y)

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        return (
            world_to_grid(x, self._bounds.minx, self.resolution),
            world_to_grid(y, self._bounds.miny, self.resolution),
        )

    def grid_to_world(self, ix: int, iy: int) -> Tuple[float, float]:
        return (
            grid_to_world(ix, self._bounds.minx, self.resolution),
            grid_to_world(iy, self._bounds.miny, self.resolution),
        )

    def in_grid(self, ix: int, iy: int) -> bool:
        xw, yw = self._grid_shape
        return 0 <= ix < xw and 0 <= iy < yw

    # ------------------------------------------------------------------
    # Potentials
    # ------------------------------------------------------------------
    def attractive_potential(self, x: float, y: float, gx: float, gy: float) -> float:
        """Goal attraction, 0.5 * kp * distance to the goal."""
        return 0.5 * self._config.kp * distance(x, y, gx, gy)

    def repulsive_potential(self, x: float, y: float) -> float:
        """
        Repulsion of the nearest obstacle

        Zero beyond robot_radius; inside it 0.5 * eta * (1/dq - 1/robot_radius)^2
        with dq floored at 0.1 so a point on an obstacle stays finite.
        """
        dq = math.inf
        for obs_x, obs_y in zip(self._ox, self._oy):
            d = distance(x, y, float(obs_x), float(obs_y))
            if d <= dq:
                dq = d

        rr = self._config.robot_radius
        if dq > rr:
            return 0.0
        dq = max(dq, REPULSION_DQ_FLOOR)
        return 0.5 * self._config.eta * (1.0 / dq - 1.0 / rr) ** 2

    def generate_potential_map(self, gx: float, gy: float) -> np.ndarray:
        """
        Build the potential map for a goal

        Args:
            gx: goal x
            gy: goal y

        Returns:
            float array of shape (xw, yw); also kept as the current map
        """
        xw, yw = self._grid_shape
        cfg = self._config

        xs = np.arange(xw, dtype=float) * cfg.resolution + self._bounds.minx
        ys = np.arange(yw, dtype=float) * cfg.resolution + self._bounds.miny
        wx, wy = np.meshgrid(xs, ys, indexing='ij')

        ug = 0.5 * cfg.kp * np.hypot(wx - gx, wy - gy)

        # exact nearest obstacle distance, one obstacle at a time
        dq = np.full((xw, yw), np.inf)
        for obs_x, obs_y in zip(self._ox, self._oy):
            np.minimum(dq, np.hypot(wx - obs_x, wy - obs_y), out=dq)

        inside = dq <= cfg.robot_radius
        dq_clamped = np.maximum(dq, REPULSION_DQ_FLOOR)
        uo = np.where(inside, 0.5 * cfg.eta * (1.0 / dq_clamped - 1.0 / cfg.robot_radius) ** 2, 0.0)

        pmap = ug + uo
        self._pmap = pmap
        self._map_goal = (float(gx), float(gy))

        logger.debug(
            f"Potential map generated: goal=({gx}, {gy}), shape={pmap.shape}, "
            f"min={float(pmap.min()):.3f}, max={float(pmap.max()):.3f}"
        )
        return pmap

    def normalized_potential_map(self) -> np.ndarray:
        """
        Current map scaled to [0, 1] for display

        Raises:
            InvalidInputError: no map has been generated yet
        """
        if self._pmap is None:
            raise InvalidInputError("potential map has not been generated")
        return normalize_potential(self._pmap)


def normalize_potential(pmap: np.ndarray) -> np.ndarray:
    """Scale finite values to [0, 1]; non-finite cells become 1, a flat map 0."""
    finite = np.isfinite(pmap)
    if not finite.any():
        return np.zeros_like(pmap, dtype=float)
    low = float(pmap[finite].min())
    high = float(pmap[finite].max())
    span = high - low
    if span <= 0:
        return np.zeros_like(pmap, dtype=float)
    normalized = np.where(finite, (pmap - low) / span, 1.0)
    return np.clip(normalized, 0.0, 1.0)
