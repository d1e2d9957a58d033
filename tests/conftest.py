"""Shared fixtures for the planner tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from apf_planner.common.constants import DEMO_GOAL, DEMO_OBSTACLES_X, DEMO_OBSTACLES_Y, DEMO_START
from apf_planner.config.models import PlanningConfig
from apf_planner.core.field_model import FieldModel
from apf_planner.core.planner import PotentialFieldPlanner


@pytest.fixture
def demo_config() -> PlanningConfig:
    """Resolution 0.5, robot radius 5.0, kp 5, eta 100, margin 20."""
    return PlanningConfig(resolution=0.5, robot_radius=5.0, kp=5.0, eta=100.0, area_width=20.0)


@pytest.fixture
def demo_field(demo_config: PlanningConfig) -> FieldModel:
    return FieldModel(DEMO_OBSTACLES_X, DEMO_OBSTACLES_Y, demo_config)


@pytest.fixture
def demo_planner(demo_field: FieldModel) -> PotentialFieldPlanner:
    return PotentialFieldPlanner(demo_field)


@pytest.fixture
def demo_start():
    return DEMO_START


@pytest.fixture
def demo_goal():
    return DEMO_GOAL


@pytest.fixture
def flat_field() -> FieldModel:
    """Single obstacle, zero gains: every cell has potential 0."""
    return FieldModel([0.0], [0.0], PlanningConfig(kp=0.0, eta=0.0))
