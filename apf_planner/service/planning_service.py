#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PathPlanningService

Middle layer:
- builds the FieldModel from the configured obstacles
- serializes planning calls (the potential map is replaced per goal)
- turns planner exceptions into PlanResult values
"""

import threading
from typing import Optional, Sequence

from loguru import logger

from apf_planner.common.exceptions import InvalidInputError, PlannerError, PlanningStalledError
from apf_planner.config.models import PlannerAppConfig
from apf_planner.core.field_model import FieldModel
from apf_planner.core.interfaces import IFrameSink
from apf_planner.core.planner import PotentialFieldPlanner
from apf_planner.service.plan_model import PlanRequest, PlanResult


class PathPlanningService:
    """
    Path planning service

    Lifecycle:

    1. pps = PathPlanningService(cfg)
    2. pps.load_obstacles(ox, oy), or load_scenario() for the configured ones
    3. pps.plan_path(PlanRequest(start, goal)) -> PlanResult
    """

    def __init__(self, cfg: Optional[PlannerAppConfig] = None) -> None:
        self.cfg = cfg if cfg is not None else PlannerAppConfig()
        self._field: Optional[FieldModel] = None
        self._lock = threading.Lock()
        self._plan_count: int = 0
        self._fail_count: int = 0

    @property
    def field_model(self) -> Optional[FieldModel]:
        return self._field

    # ------------------------------------------------------------------
    # Obstacles
    # ------------------------------------------------------------------
    def load_obstacles(self, ox: Sequence[float], oy: Sequence[float]) -> FieldModel:
        """
        Build the FieldModel for a new obstacle set

        Raises:
            InvalidInputError: obstacle arrays or parameters are invalid
        """
        field = FieldModel(ox, oy, self.cfg.planning)
        with self._lock:
            self._field = field
        logger.info(
            f"[PathPlanningService] obstacles loaded: count={len(ox)}, "
            f"bounds={field.bounds}, grid_shape={field.grid_shape}"
        )
        return field

    def load_scenario(self) -> FieldModel:
        """Build the FieldModel from the configured scenario obstacles."""
        scenario = self.cfg.scenario
        return self.load_obstacles(scenario.obstacle_x, scenario.obstacle_y)

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def plan_path(self, req: PlanRequest, sink: Optional[IFrameSink] = None) -> PlanResult:
        """
        Plan one request; failures come back as PlanResult(ok=False)

        Args:
            req: start and goal in world coordinates
            sink: optional frame sink for this request
        """
        with self._lock:
            if self._field is None:
                logger.error("[PathPlanningService] no obstacles loaded, call load_obstacles() first")
                return PlanResult(
                    ok=False,
                    reason="no obstacles loaded",
                    error=InvalidInputError.__name__,
                )

            self._plan_count += 1
            planner = PotentialFieldPlanner(self._field, sink=sink)
            sx, sy = req.start
            gx, gy = req.goal
            logger.info(f"[PathPlanningService] plan request #{self._plan_count}: start={req.start}, goal={req.goal}")

            try:
                path = planner.plan(sx, sy, gx, gy)
            except PlanningStalledError as e:
                self._fail_count += 1
                logger.warning(f"[PathPlanningService] planning stalled: {e}")
                return PlanResult(
                    ok=False,
                    path=e.path,
                    reason=str(e),
                    error=type(e).__name__,
                    iterations=e.iterations,
                )
            except PlannerError as e:
                self._fail_count += 1
                logger.warning(f"[PathPlanningService] planning failed: {e}")
                return PlanResult(ok=False, reason=str(e), error=type(e).__name__)

            logger.info(f"[PathPlanningService] plan succeeded: waypoints={len(path)}")
            return PlanResult(ok=True, path=path, reason="ok", iterations=len(path))

    def plan_scenario(self, sink: Optional[IFrameSink] = None) -> PlanResult:
        """Plan the configured start/goal, loading the scenario obstacles if needed."""
        if self._field is None:
            try:
                self.load_scenario()
            except InvalidInputError as e:
                logger.error(f"[PathPlanningService] invalid scenario: {e}")
                return PlanResult(ok=False, reason=str(e), error=type(e).__name__)
        scenario = self.cfg.scenario
        return self.plan_path(PlanRequest(start=scenario.start, goal=scenario.goal), sink=sink)

    def stats(self) -> dict:
        return {"plans": self._plan_count, "failures": self._fail_count}
