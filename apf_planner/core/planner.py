#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Path planning module: greedy descent over the potential map
"""

# Standard library
import math
from typing import List, Optional, Tuple

# Third party
import numpy as np
from loguru import logger

# Local
from apf_planner.common.constants import ITERATION_CAP_FACTOR, MOTION_MODEL_8WAY
from apf_planner.common.exceptions import InvalidInputError, OutOfBoundsError, PlanningStalledError
from apf_planner.core.field_model import FieldModel
from apf_planner.core.geometry import distance
from apf_planner.core.interfaces import IFrameSink, NullFrameSink, obstacle_points
from apf_planner.core.stall_detector import OscillationDetector

Point = Tuple[float, float]


class PotentialFieldPlanner:
    """
    Potential field path planner

    Walks the grid one cell at a time, always moving to the neighbor with the
    lowest potential, until the robot is within one resolution of the goal.
    Neighbors are scanned in MOTION_MODEL_8WAY order and the first strict
    minimum wins. The planner keeps no state between plan() calls.

    Example:
        ```python
        planner = PotentialFieldPlanner(FieldModel(ox, oy, PlanningConfig()))
        path = planner.plan(0.0, 10.0, 30.0, 30.0)
        ```
    """

    def __init__(
        self,
        field_model: FieldModel,
        sink: Optional[IFrameSink] = None,
        max_iterations: Optional[int] = None,
        oscillation_window: Optional[int] = None,
    ):
        """
        Args:
            field_model: potential field to search
            sink: receives the partial path after every step
            max_iterations: step cap, overrides the config value
            oscillation_window: revisit window, overrides the config value

        Raises:
            InvalidInputError: non-positive max_iterations or negative oscillation_window
        """
        if max_iterations is not None and max_iterations <= 0:
            raise InvalidInputError(f"max_iterations must be greater than 0: {max_iterations}")
        if oscillation_window is not None and oscillation_window < 0:
            raise InvalidInputError(f"oscillation_window must not be negative: {oscillation_window}")

        self.field_ = field_model
        self.sink_: IFrameSink = sink if sink is not None else NullFrameSink()
        self.motion_model_ = MOTION_MODEL_8WAY

        cfg = field_model.config
        self.max_iterations_: int = (
            max_iterations or cfg.max_iterations or self.default_iteration_cap(field_model.grid_shape)
        )
        self.oscillation_window_: int = (
            oscillation_window if oscillation_window is not None else cfg.oscillation_window
        )

    @staticmethod
    def default_iteration_cap(grid_shape: Tuple[int, int]) -> int:
        """Cap proportional to the grid diagonal in cells."""
        xw, yw = grid_shape
        return max(1, int(math.ceil(ITERATION_CAP_FACTOR * math.hypot(xw, yw))))

    @property
    def max_iterations(self) -> int:
        return self.max_iterations_

    def plan(self, sx: float, sy: float, gx: float, gy: float) -> List[Point]:
        """
        Plan a path from start to goal

        Args:
            sx, sy: start world coordinate
            gx, gy: goal world coordinate

        Returns:
            waypoints in world coordinates; the goal itself is not appended and
            the list is empty when start is already within one resolution

        Raises:
            OutOfBoundsError: start or goal outside the planning region
            PlanningStalledError: no finite neighbor, iteration cap exceeded or
                oscillation detected
        """
        field = self.field_
        bounds = field.bounds
        if not field.contains(sx, sy):
            raise OutOfBoundsError(f"start ({sx}, {sy}) outside planning region {bounds}")
        if not field.contains(gx, gy):
            raise OutOfBoundsError(f"goal ({gx}, {gy}) outside planning region {bounds}")

        pmap = field.generate_potential_map(gx, gy)
        self.sink_.OnPotentialMap(pmap, bounds, field.resolution)

        reso = field.resolution
        goal = (float(gx), float(gy))
        obstacles = obstacle_points(*field.obstacles)

        ix, iy = field.world_to_grid(sx, sy)
        d = distance(sx, sy, gx, gy)

        detector = OscillationDetector(self.oscillation_window_)
        detector.update((ix, iy))

        logger.debug(
            f"[APF] start planning: start=({sx}, {sy}) -> cell ({ix}, {iy}), goal=({gx}, {gy}), "
            f"distance={d:.3f}, cap={self.max_iterations_}"
        )

        path: List[Point] = []
        iterations = 0
        while d >= reso:
            if iterations >= self.max_iterations_:
                error_msg = (
                    f"iteration cap {self.max_iterations_} exceeded, "
                    f"last position=({path[-1][0]:.2f}, {path[-1][1]:.2f}), distance={d:.3f}"
                )
                logger.warning(f"[APF] {error_msg}")
                raise PlanningStalledError(error_msg, path=path, iterations=iterations)

            next_cell, min_p = self._best_neighbor(pmap, ix, iy)
            if next_cell is None or not np.isfinite(min_p):
                error_msg = f"no neighbor with finite potential around cell ({ix}, {iy})"
                logger.warning(f"[APF] {error_msg}")
                raise PlanningStalledError(error_msg, path=path, iterations=iterations)

            ix, iy = next_cell
            xp, yp = field.grid_to_world(ix, iy)
            d = distance(gx, gy, xp, yp)
            path.append((xp, yp))
            iterations += 1
            self.sink_.RenderFrame(path, goal, obstacles)

            if d >= reso and detector.update((ix, iy)):
                error_msg = (
                    f"oscillation detected at ({xp:.2f}, {yp:.2f}) after {iterations} steps, "
                    f"distance={d:.3f}"
                )
                logger.warning(f"[APF] {error_msg}")
                raise PlanningStalledError(error_msg, path=path, iterations=iterations)

        logger.info(f"[APF] planning finished: waypoints={len(path)}, final distance={d:.3f}")
        return path

    def _best_neighbor(self, pmap: np.ndarray, ix: int, iy: int) -> Tuple[Optional[Tuple[int, int]], float]:
        """Lowest-potential neighbor, out of range cells count as +inf."""
        best: Optional[Tuple[int, int]] = None
        min_p = math.inf
        for dx, dy in self.motion_model_:
            inx, iny = ix + dx, iy + dy
            p = float(pmap[inx, iny]) if self.field_.in_grid(inx, iny) else math.inf
            if min_p > p:
                min_p = p
                best = (inx, iny)
        return best, min_p
