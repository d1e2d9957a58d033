#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Planner configuration models

Pydantic models for the planning parameters, the demo scenario, animation and
logging. Every section has defaults so an empty section is valid.

PlanningConfig only parses; its ranges are checked by check_values(), which
raises InvalidInputError. PlannerAppConfig runs that check while validating,
so a bad planning section in a file is a pydantic ValidationError.
"""

import math
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator, AliasChoices

from apf_planner.common.constants import (
    DEFAULT_RESOLUTION,
    DEFAULT_ROBOT_RADIUS,
    DEFAULT_KP,
    DEFAULT_ETA,
    DEFAULT_AREA_WIDTH,
    DEFAULT_OSCILLATION_WINDOW,
    DEMO_OBSTACLES_X,
    DEMO_OBSTACLES_Y,
    DEMO_START,
    DEMO_GOAL,
    DEFAULT_PLOT_RANGE,
    DEFAULT_ANIMATION_PATH,
    DEFAULT_ANIMATION_FPS,
    LOG_LEVELS,
)
from apf_planner.common.exceptions import InvalidInputError


class PlanningConfig(BaseModel):
    """Potential field parameters, immutable once built"""
    model_config = ConfigDict(frozen=True)

    resolution: float = Field(
        DEFAULT_RESOLUTION,
        description="Grid cell size",
        validation_alias=AliasChoices("resolution", "grid_size", "reso"),
    )
    robot_radius: float = Field(
        DEFAULT_ROBOT_RADIUS,
        description="Repulsion cutoff radius",
        validation_alias=AliasChoices("robot_radius", "rr"),
    )
    kp: float = Field(DEFAULT_KP, description="Attractive gain")
    eta: float = Field(DEFAULT_ETA, description="Repulsive gain")
    area_width: float = Field(
        DEFAULT_AREA_WIDTH,
        description="Margin added around the obstacle bounding box",
        validation_alias=AliasChoices("area_width", "area_margin"),
    )
    max_iterations: Optional[int] = Field(
        None,
        description="Search step cap; derived from the grid size when unset",
    )
    oscillation_window: int = Field(
        DEFAULT_OSCILLATION_WINDOW,
        description="Recent cells checked for revisits, 0 disables",
    )

    def check_values(self) -> None:
        """
        Check the parameter ranges

        Raises:
            InvalidInputError: non-positive resolution or robot_radius, negative
                gains or margin, non-positive max_iterations, negative window
        """
        if not (self.resolution > 0 and math.isfinite(self.resolution)):
            raise InvalidInputError(f"resolution must be positive: {self.resolution}")
        if not (self.robot_radius > 0 and math.isfinite(self.robot_radius)):
            raise InvalidInputError(f"robot_radius must be positive: {self.robot_radius}")
        if self.kp < 0 or self.eta < 0:
            raise InvalidInputError(f"gains must not be negative: kp={self.kp}, eta={self.eta}")
        if self.area_width < 0:
            raise InvalidInputError(f"area_width must not be negative: {self.area_width}")
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise InvalidInputError(f"max_iterations must be greater than 0: {self.max_iterations}")
        if self.oscillation_window < 0:
            raise InvalidInputError(f"oscillation_window must not be negative: {self.oscillation_window}")


class ScenarioConfig(BaseModel):
    """Obstacles, start and goal of a planning run"""
    obstacles: List[Tuple[float, float]] = Field(
        default_factory=lambda: list(zip(DEMO_OBSTACLES_X, DEMO_OBSTACLES_Y)),
        description="Obstacle positions [(x, y), ...]",
    )
    start: Tuple[float, float] = Field(DEMO_START, description="Start (x, y)")
    goal: Tuple[float, float] = Field(DEMO_GOAL, description="Goal (x, y)")

    @field_validator('obstacles')
    @classmethod
    def validate_obstacles(cls, v: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        if not v:
            raise ValueError("at least one obstacle is required")
        return v

    @property
    def obstacle_x(self) -> List[float]:
        return [p[0] for p in self.obstacles]

    @property
    def obstacle_y(self) -> List[float]:
        return [p[1] for p in self.obstacles]


class AnimationConfig(BaseModel):
    """Frame sink settings"""
    enable: bool = Field(False, description="Render frames while planning")
    output_path: Optional[str] = Field(DEFAULT_ANIMATION_PATH, description="GIF path, None for a live window")
    fps: int = Field(DEFAULT_ANIMATION_FPS, description="GIF frame rate")
    frame_interval: int = Field(1, description="Draw every N-th step")
    show_potential: bool = Field(False, description="Draw the potential map as background")
    xlim: Tuple[float, float] = Field(DEFAULT_PLOT_RANGE, description="Plot x range")
    ylim: Tuple[float, float] = Field(DEFAULT_PLOT_RANGE, description="Plot y range")

    @field_validator('fps', 'frame_interval')
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"value must be greater than 0: {v}")
        return v

    @field_validator('xlim', 'ylim')
    @classmethod
    def validate_range(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        low, high = v
        if high <= low:
            raise ValueError(f"range upper bound must exceed lower bound: {v}")
        return v


class LoggingConfig(BaseModel):
    """Logging settings"""
    level: str = Field("INFO", description="Log level")
    log_dir: str = Field("logs", description="Log file directory")
    to_file: bool = Field(False, description="Also write a daily log file")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level


class PlannerAppConfig(BaseModel):
    """Top level configuration"""
    planning: PlanningConfig = Field(default_factory=PlanningConfig, description="Potential field parameters")
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig, description="Planning scenario")
    animation: AnimationConfig = Field(default_factory=AnimationConfig, description="Animation settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    @model_validator(mode='after')
    def validate_planning(self) -> "PlannerAppConfig":
        """Parameter ranges; a single obstacle only spans a region when a margin is added."""
        self.planning.check_values()
        if self.planning.area_width == 0 and len(self.scenario.obstacles) == 1:
            raise ValueError("area_width must be positive when only one obstacle is given")
        return self
