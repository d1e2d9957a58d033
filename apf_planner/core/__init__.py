#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core planning module

Potential field synthesis and the greedy grid search.
"""

from apf_planner.core.field_model import FieldModel
from apf_planner.core.planner import PotentialFieldPlanner
from apf_planner.core.interfaces import IFrameSink, NullFrameSink
from apf_planner.core.geometry import Bounds

__all__ = ['FieldModel', 'PotentialFieldPlanner', 'IFrameSink', 'NullFrameSink', 'Bounds']
