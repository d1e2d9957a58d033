"""Tests for the greedy potential field search."""

import math
from typing import List, Tuple

import pytest

from apf_planner.common.constants import MOTION_MODEL_8WAY
from apf_planner.common.exceptions import InvalidInputError, OutOfBoundsError, PlanningStalledError
from apf_planner.config.models import PlanningConfig
from apf_planner.core.field_model import FieldModel
from apf_planner.core.planner import PotentialFieldPlanner
from apf_planner.core.stall_detector import OscillationDetector


def nearest_obstacle_distance(field: FieldModel, x: float, y: float) -> float:
    ox, oy = field.obstacles
    return min(math.hypot(x - float(a), y - float(b)) for a, b in zip(ox, oy))


# --- Demo scenario ---


class TestDemoScenario:
    @pytest.fixture
    def path(self, demo_planner: PotentialFieldPlanner, demo_start, demo_goal) -> List[Tuple[float, float]]:
        return demo_planner.plan(demo_start[0], demo_start[1], demo_goal[0], demo_goal[1])

    def test_reaches_goal(self, path, demo_goal) -> None:
        assert path
        last = path[-1]
        assert math.hypot(last[0] - demo_goal[0], last[1] - demo_goal[1]) < 0.5

    def test_goal_not_appended_separately(self, path, demo_goal) -> None:
        # the last waypoint is a grid cell; here the goal lies exactly on one
        assert path[-1] == pytest.approx(demo_goal)
        assert path.count(path[-1]) == 1

    def test_steps_are_single_cells(self, path, demo_start) -> None:
        previous = demo_start
        for point in path:
            assert abs(point[0] - previous[0]) <= 0.5 + 1e-9
            assert abs(point[1] - previous[1]) <= 0.5 + 1e-9
            assert point != previous
            previous = point

    def test_within_iteration_cap(self, path, demo_planner: PotentialFieldPlanner) -> None:
        assert len(path) <= demo_planner.max_iterations

    def test_path_keeps_clear_of_obstacles(self, path, demo_field: FieldModel) -> None:
        # not robot_radius: with kp=5 and eta=100 the attraction outweighs the
        # repulsion within about 2.7 units, so the descent passes the (5, 15)
        # obstacle at roughly 2.2 and most waypoints sit inside the 5.0 radius
        margin = 2 * demo_field.resolution
        clear = [p for p in path if nearest_obstacle_distance(demo_field, *p) > margin]
        assert len(clear) >= 0.95 * len(path)

    def test_waypoints_inside_region(self, path, demo_field: FieldModel) -> None:
        for x, y in path:
            assert demo_field.contains(x, y)

    def test_deterministic(self, demo_planner: PotentialFieldPlanner, path, demo_start, demo_goal) -> None:
        again = demo_planner.plan(demo_start[0], demo_start[1], demo_goal[0], demo_goal[1])
        assert again == path

    def test_map_generated_for_goal(self, path, demo_field: FieldModel, demo_goal) -> None:
        assert demo_field.map_goal == demo_goal


# --- Edge cases ---


class TestEdgeCases:
    def test_start_equals_goal(self, demo_planner: PotentialFieldPlanner, demo_field: FieldModel) -> None:
        assert demo_planner.plan(30.0, 30.0, 30.0, 30.0) == []
        assert demo_field.map_goal == (30.0, 30.0)

    def test_start_within_one_resolution(self, demo_planner: PotentialFieldPlanner) -> None:
        assert demo_planner.plan(30.2, 30.0, 30.0, 30.0) == []

    def test_start_out_of_bounds(self, demo_planner: PotentialFieldPlanner, demo_field: FieldModel) -> None:
        with pytest.raises(OutOfBoundsError):
            demo_planner.plan(-50.0, 10.0, 30.0, 30.0)
        assert demo_field.potential_map is None

    def test_goal_out_of_bounds(self, demo_planner: PotentialFieldPlanner) -> None:
        with pytest.raises(OutOfBoundsError):
            demo_planner.plan(0.0, 10.0, 30.0, 100.0)

    def test_walled_in_start(self) -> None:
        # one cell map: every neighbor is out of range
        field = FieldModel([0.0], [0.0], PlanningConfig(resolution=0.5, area_width=0.5))
        assert field.grid_shape == (1, 1)
        planner = PotentialFieldPlanner(field)
        with pytest.raises(PlanningStalledError) as exc_info:
            planner.plan(-0.25, -0.25, 0.25, 0.25)
        assert exc_info.value.path == []
        assert exc_info.value.iterations == 0


# --- Stall handling ---


class TestStallHandling:
    def test_default_cap_scales_with_grid(self, demo_planner: PotentialFieldPlanner) -> None:
        assert demo_planner.max_iterations == math.ceil(4.0 * math.hypot(80, 62))

    def test_cap_from_config(self) -> None:
        field = FieldModel([0.0], [0.0], PlanningConfig(max_iterations=7))
        assert PotentialFieldPlanner(field).max_iterations == 7

    def test_cap_argument_overrides_config(self) -> None:
        field = FieldModel([0.0], [0.0], PlanningConfig(max_iterations=7))
        assert PotentialFieldPlanner(field, max_iterations=3).max_iterations == 3

    def test_invalid_arguments(self, demo_field: FieldModel) -> None:
        with pytest.raises(InvalidInputError):
            PotentialFieldPlanner(demo_field, max_iterations=0)
        with pytest.raises(InvalidInputError):
            PotentialFieldPlanner(demo_field, oscillation_window=-1)

    def test_detector_window(self) -> None:
        detector = OscillationDetector(3)
        assert not any(detector.update(cell) for cell in [(0, 0), (1, 0), (2, 0), (3, 0)])
        # (0, 0) has left the window, (2, 0) has not
        assert not detector.update((0, 0))
        assert detector.update((2, 0))

    def test_disabled_detector_never_fires(self) -> None:
        detector = OscillationDetector(0)
        assert not detector.enabled
        assert not detector.update((0, 0))
        assert not detector.update((0, 0))
        with pytest.raises(InvalidInputError):
            OscillationDetector(-1)

    def test_iteration_cap_exceeded(self, demo_field: FieldModel, demo_start, demo_goal) -> None:
        planner = PotentialFieldPlanner(demo_field, max_iterations=3, oscillation_window=0)
        with pytest.raises(PlanningStalledError) as exc_info:
            planner.plan(demo_start[0], demo_start[1], demo_goal[0], demo_goal[1])
        assert exc_info.value.iterations == 3
        assert len(exc_info.value.path) == 3

    def test_local_minimum_detected_by_oscillation(self) -> None:
        # obstacle on the goal: the robot settles on a ring around it
        field = FieldModel([0.0], [0.0], PlanningConfig())
        planner = PotentialFieldPlanner(field)
        with pytest.raises(PlanningStalledError) as exc_info:
            planner.plan(8.0, 0.0, 0.0, 0.0)
        assert exc_info.value.iterations < planner.max_iterations
        assert exc_info.value.path

    def test_local_minimum_hits_cap_without_oscillation_check(self) -> None:
        field = FieldModel([0.0], [0.0], PlanningConfig(oscillation_window=0))
        planner = PotentialFieldPlanner(field)
        with pytest.raises(PlanningStalledError) as exc_info:
            planner.plan(8.0, 0.0, 0.0, 0.0)
        assert exc_info.value.iterations == planner.max_iterations


# --- Tie-break ---


class TestTieBreak:
    def test_first_neighbor_in_motion_order_wins(self, flat_field: FieldModel) -> None:
        # flat potential: every neighbor ties, so (1, 0) is always taken
        assert MOTION_MODEL_8WAY[0] == (1, 0)
        path = PotentialFieldPlanner(flat_field).plan(0.0, 0.0, 5.0, 0.0)
        assert path == [(0.5 * i, 0.0) for i in range(1, 11)]

    def test_strictly_lower_neighbor_preferred(self) -> None:
        # goal straight up: (0, 1) beats the earlier (1, 0)
        field = FieldModel([0.0], [0.0], PlanningConfig(eta=0.0))
        path = PotentialFieldPlanner(field).plan(0.0, 0.0, 0.0, 2.0)
        assert path == [(0.0, 0.5), (0.0, 1.0), (0.0, 1.5), (0.0, 2.0)]
