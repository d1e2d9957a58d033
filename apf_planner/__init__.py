#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
apf_planner

Artificial potential field path planning on a 2D grid.
"""

__version__ = "0.1.0"

from apf_planner.common.exceptions import (
    PlannerError,
    InvalidInputError,
    OutOfBoundsError,
    PlanningStalledError,
    ConfigurationError,
)
from apf_planner.config.models import PlanningConfig
from apf_planner.core.field_model import FieldModel
from apf_planner.core.planner import PotentialFieldPlanner

__all__ = [
    'PlannerError',
    'InvalidInputError',
    'OutOfBoundsError',
    'PlanningStalledError',
    'ConfigurationError',
    'PlanningConfig',
    'FieldModel',
    'PotentialFieldPlanner',
]
