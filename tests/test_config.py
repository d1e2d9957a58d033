"""Tests for the configuration models and the YAML loader."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from apf_planner.common.exceptions import ConfigurationError, InvalidInputError
from apf_planner.config.loader import load_config, parse_config
from apf_planner.config.models import AnimationConfig, LoggingConfig, PlannerAppConfig, PlanningConfig

REPO_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "potential_field.yaml"


class TestModels:
    def test_planning_defaults(self) -> None:
        cfg = PlanningConfig()
        assert cfg.resolution == 0.5
        assert cfg.robot_radius == 5.0
        assert cfg.kp == 5.0
        assert cfg.eta == 100.0
        assert cfg.area_width == 20.0
        assert cfg.max_iterations is None
        assert cfg.oscillation_window == 3

    def test_planning_config_is_frozen(self) -> None:
        cfg = PlanningConfig()
        with pytest.raises(ValidationError):
            cfg.resolution = 1.0

    def test_aliases(self) -> None:
        cfg = PlanningConfig(**{"grid_size": 1.0, "rr": 2.0, "area_margin": 4.0})
        assert (cfg.resolution, cfg.robot_radius, cfg.area_width) == (1.0, 2.0, 4.0)

    @pytest.mark.parametrize("field, value", [
        ("resolution", -0.5),
        ("robot_radius", 0.0),
        ("kp", -1.0),
        ("eta", -1.0),
        ("area_width", -1.0),
        ("max_iterations", 0),
        ("oscillation_window", -1),
    ])
    def test_rejects_invalid_planning_values(self, field: str, value) -> None:
        with pytest.raises(InvalidInputError):
            PlanningConfig(**{field: value}).check_values()
        with pytest.raises(ValidationError):
            PlannerAppConfig(planning={field: value})

    def test_zero_gains_allowed(self) -> None:
        cfg = PlanningConfig(kp=0.0, eta=0.0)
        assert cfg.kp == 0.0 and cfg.eta == 0.0

    def test_scenario_defaults(self) -> None:
        cfg = PlannerAppConfig()
        assert cfg.scenario.start == (0.0, 10.0)
        assert cfg.scenario.goal == (30.0, 30.0)
        assert cfg.scenario.obstacle_x == [15.0, 5.0, 20.0, 25.0]
        assert cfg.scenario.obstacle_y == [25.0, 15.0, 26.0, 25.0]

    def test_empty_obstacles_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlannerAppConfig(scenario={"obstacles": []})

    def test_single_obstacle_needs_margin(self) -> None:
        with pytest.raises(ValidationError):
            PlannerAppConfig(planning={"area_width": 0.0}, scenario={"obstacles": [[1.0, 1.0]]})

    def test_animation_range(self) -> None:
        with pytest.raises(ValidationError):
            AnimationConfig(xlim=(5.0, 1.0))

    def test_log_level_normalized(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")


class TestLoader:
    def test_load_repo_config(self) -> None:
        cfg = load_config(REPO_CONFIG)
        assert cfg.planning.resolution == 0.5
        assert cfg.planning.robot_radius == 5.0
        assert len(cfg.scenario.obstacles) == 4
        assert cfg.animation.enable is True
        assert cfg.animation.xlim == (0.0, 40.0)

    def test_relative_paths_resolved_against_project_root(self) -> None:
        cfg = load_config(REPO_CONFIG)
        expected = (REPO_CONFIG.parent.parent / "animations" / "potential_field.gif").resolve()
        assert Path(cfg.animation.output_path) == expected
        assert Path(cfg.logging.log_dir).is_absolute()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("planning: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_non_mapping_root(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_validation_error_wrapped(self, tmp_path) -> None:
        path = tmp_path / "invalid.yaml"
        path.write_text("planning:\n  resolution: -1.0\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_partial_config_uses_defaults(self, tmp_path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text("planning:\n  kp: 2.0\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.planning.kp == 2.0
        assert cfg.planning.eta == 100.0
        assert cfg.scenario.goal == (30.0, 30.0)

    def test_parse_config(self) -> None:
        cfg = parse_config({"scenario": {"start": [1.0, 2.0]}})
        assert cfg.scenario.start == (1.0, 2.0)
