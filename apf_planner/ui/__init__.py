#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Visualization sinks
"""

from apf_planner.ui.frame_sinks import MatplotlibFrameSink, RecordingFrameSink

__all__ = ['MatplotlibFrameSink', 'RecordingFrameSink']
