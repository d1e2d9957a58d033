#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Frame sinks: record or draw planning progress
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import PillowWriter
from loguru import logger

from apf_planner.common.constants import DEFAULT_ANIMATION_FPS, DEFAULT_PLOT_RANGE
from apf_planner.core.field_model import normalize_potential
from apf_planner.core.geometry import Bounds
from apf_planner.core.interfaces import IFrameSink, Point


class RecordingFrameSink(IFrameSink):
    """Keeps a copy of every partial path in memory"""

    def __init__(self, max_frames: Optional[int] = None):
        if max_frames is not None and max_frames <= 0:
            raise ValueError(f"max_frames must be greater than 0: {max_frames}")
        self.max_frames_ = max_frames
        self.frames: List[List[Point]] = []
        self.goal: Optional[Point] = None
        self.obstacles: List[Point] = []
        self.potential_map: Optional[np.ndarray] = None
        self.closed: bool = False

    def RenderFrame(self, path: Sequence[Point], goal: Point, obstacles: Sequence[Point]) -> None:
        self.goal = goal
        self.obstacles = list(obstacles)
        if self.max_frames_ is not None and len(self.frames) >= self.max_frames_:
            self.frames.pop(0)
        self.frames.append(list(path))

    def OnPotentialMap(self, potential_map: np.ndarray, bounds: Bounds, resolution: float) -> None:
        self.potential_map = potential_map.copy()

    def Close(self) -> None:
        self.closed = True


class MatplotlibFrameSink(IFrameSink):
    """
    Draws path, goal and obstacles with matplotlib

    With output_path set every drawn frame goes into an animated GIF, otherwise
    the figure is shown in a live window.

    Example:
        ```python
        sink = MatplotlibFrameSink(output_path="animations/potential_field.gif")
        planner = PotentialFieldPlanner(field, sink=sink)
        planner.plan(0.0, 10.0, 30.0, 30.0)
        sink.Close()
        ```
    """

    def __init__(
        self,
        output_path: Optional[str] = None,
        fps: int = DEFAULT_ANIMATION_FPS,
        frame_interval: int = 1,
        show_potential: bool = False,
        xlim: Tuple[float, float] = DEFAULT_PLOT_RANGE,
        ylim: Tuple[float, float] = DEFAULT_PLOT_RANGE,
        pause: float = 0.001,
        dpi: int = 80,
    ):
        """
        Args:
            output_path: GIF file, None for a live window
            fps: GIF frame rate
            frame_interval: draw every N-th frame
            show_potential: draw the potential map behind the path
            xlim: plot x range
            ylim: plot y range
            pause: live window pause per frame (seconds)
            dpi: GIF resolution
        """
        if fps <= 0:
            raise ValueError(f"fps must be greater than 0: {fps}")
        if frame_interval <= 0:
            raise ValueError(f"frame_interval must be greater than 0: {frame_interval}")

        self.output_path_ = Path(output_path) if output_path else None
        self.frame_interval_ = frame_interval
        self.show_potential_ = show_potential
        self.xlim_ = xlim
        self.ylim_ = ylim
        self.pause_ = pause

        self._frame_count: int = 0
        self._drawn_count: int = 0
        self._last_frame: Optional[Tuple[List[Point], Point, List[Point]]] = None
        self._last_drawn: int = 0
        self._potential: Optional[Tuple[np.ndarray, Bounds, float]] = None
        self._closed: bool = False

        self._fig = plt.figure(figsize=(6, 6))
        self._ax = self._fig.add_subplot(1, 1, 1)
        self._writer: Optional[PillowWriter] = None
        if self.output_path_ is not None:
            self.output_path_.parent.mkdir(parents=True, exist_ok=True)
            self._writer = PillowWriter(fps=fps)
            self._writer.setup(self._fig, str(self.output_path_), dpi=dpi)
            logger.info(f"Recording animation to {self.output_path_}")
        else:
            plt.ion()

    @property
    def drawn_frames(self) -> int:
        return self._drawn_count

    def OnPotentialMap(self, potential_map: np.ndarray, bounds: Bounds, resolution: float) -> None:
        if self.show_potential_:
            self._potential = (potential_map.copy(), bounds, resolution)

    def RenderFrame(self, path: Sequence[Point], goal: Point, obstacles: Sequence[Point]) -> None:
        if self._closed:
            raise RuntimeError("frame sink is closed")
        self._frame_count += 1
        self._last_frame = (list(path), goal, list(obstacles))
        if (self._frame_count - 1) % self.frame_interval_ == 0:
            self._draw(*self._last_frame)

    def Close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            # the final step is always part of the output
            if self._last_frame is not None and self._last_drawn != self._frame_count:
                self._draw(*self._last_frame)
            if self._writer is not None:
                if self._drawn_count == 0:
                    logger.warning(f"No frames rendered, animation not written: {self.output_path_}")
                else:
                    self._writer.finish()
                    logger.info(f"Animation saved: {self.output_path_} ({self._drawn_count} frames)")
            else:
                plt.ioff()
        finally:
            plt.close(self._fig)

    def _draw(self, path: List[Point], goal: Point, obstacles: List[Point]) -> None:
        ax = self._ax
        ax.clear()

        if self._potential is not None:
            pmap, bounds, reso = self._potential
            xw, yw = pmap.shape
            # clip the repulsion spikes so the attractive slope stays visible
            display = normalize_potential(np.minimum(pmap, np.percentile(pmap, 95)))
            ax.imshow(
                display.T,
                origin='lower',
                extent=[bounds.minx, bounds.minx + xw * reso, bounds.miny, bounds.miny + yw * reso],
                cmap='viridis',
                vmin=0.0,
                vmax=1.0,
                alpha=0.6,
            )

        if obstacles:
            ox, oy = zip(*obstacles)
            ax.plot(ox, oy, "ok", markersize=10, label="obs")
        if path:
            px, py = zip(*path)
            ax.plot(px, py, "-r", linewidth=2, label="path")
        ax.plot(goal[0], goal[1], "xb", markersize=12, label="goal")

        ax.set_xlim(*self.xlim_)
        ax.set_ylim(*self.ylim_)
        ax.set_aspect('equal')
        ax.grid(True)
        ax.legend(loc="upper left")
        ax.set_title(f"Potential field planning - step {self._frame_count}")

        if self._writer is not None:
            self._writer.grab_frame()
        else:
            plt.pause(self.pause_)

        self._drawn_count += 1
        self._last_drawn = self._frame_count
