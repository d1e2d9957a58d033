#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Custom exceptions for the potential field planner
"""

from typing import List, Optional, Tuple


class PlannerError(Exception):
    """Base exception of the planner package"""
    pass


class InvalidInputError(PlannerError, ValueError):
    """Obstacle arrays or planning parameters are unusable"""
    pass


class OutOfBoundsError(PlannerError):
    """Start or goal lies outside the planning region"""
    pass


class PlanningStalledError(PlannerError):
    """
    No feasible local path was found

    Raised when the robot has no finite-potential neighbor, the iteration cap
    is exceeded or the robot keeps revisiting the same cells.
    """

    def __init__(self, message: str, path: Optional[List[Tuple[float, float]]] = None, iterations: int = 0):
        super().__init__(message)
        self.path = list(path) if path else []
        self.iterations = iterations


class ConfigurationError(PlannerError):
    """Configuration file could not be loaded or validated"""
    pass
