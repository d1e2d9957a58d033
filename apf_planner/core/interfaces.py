#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core interfaces: frame sink abstraction used by the planner
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

import numpy as np

from apf_planner.core.geometry import Bounds

Point = Tuple[float, float]


class IFrameSink(ABC):
    """Frame sink interface: receives planning progress after every accepted step"""

    @abstractmethod
    def RenderFrame(self, path: Sequence[Point], goal: Point, obstacles: Sequence[Point]) -> None:
        """
        Render or record one frame

        Args:
            path: path so far (the sink must copy it if it keeps it)
            goal: goal position (x, y)
            obstacles: obstacle positions [(x, y), ...]
        """
        pass

    def OnPotentialMap(self, potential_map: np.ndarray, bounds: Bounds, resolution: float) -> None:
        """Called once per plan after the potential map has been generated."""
        pass

    def Close(self) -> None:
        """Flush and release resources."""
        pass


class NullFrameSink(IFrameSink):
    """Discards every frame"""

    def RenderFrame(self, path: Sequence[Point], goal: Point, obstacles: Sequence[Point]) -> None:
        return None


def obstacle_points(ox: Sequence[float], oy: Sequence[float]) -> List[Point]:
    return [(float(x), float(y)) for x, y in zip(ox, oy)]
