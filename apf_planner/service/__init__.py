#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Planning service: configuration driven planning with explicit results
"""

from apf_planner.service.plan_model import PlanRequest, PlanResult
from apf_planner.service.planning_service import PathPlanningService

__all__ = ['PlanRequest', 'PlanResult', 'PathPlanningService']
