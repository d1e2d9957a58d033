#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Oscillation detector - flags a greedy search that keeps revisiting cells

Core logic:
- keep the last `window` visited grid cells
- a cell that is already in the window means the robot is bouncing around a
  local minimum and will not get closer to the goal
"""

from collections import deque
from typing import Deque, Tuple

from loguru import logger

from apf_planner.common.exceptions import InvalidInputError

Cell = Tuple[int, int]


class OscillationDetector:
    """Revisit detector over a sliding window of grid cells"""

    def __init__(self, window: int):
        if window < 0:
            raise InvalidInputError(f"window must not be negative: {window}")
        self.window_: int = window
        self._history: Deque[Cell] = deque(maxlen=window if window > 0 else None)

    @property
    def enabled(self) -> bool:
        return self.window_ > 0

    def update(self, cell: Cell) -> bool:
        """
        Record a visited cell

        Args:
            cell: grid index (ix, iy)

        Returns:
            True if the cell was visited within the window
        """
        if not self.enabled:
            return False

        revisited = cell in self._history
        self._history.append(cell)
        if revisited:
            logger.debug(f"Oscillation: cell {cell} revisited within {self.window_} steps")
        return revisited
