#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Planner configuration module

Type-safe configuration models and the YAML loader.
"""

from apf_planner.config.models import (
    PlannerAppConfig,
    PlanningConfig,
    ScenarioConfig,
    AnimationConfig,
    LoggingConfig,
)
from apf_planner.config.loader import load_config, parse_config

__all__ = [
    'PlannerAppConfig',
    'PlanningConfig',
    'ScenarioConfig',
    'AnimationConfig',
    'LoggingConfig',
    'load_config',
    'parse_config',
]
