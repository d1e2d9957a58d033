#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line entry point: plan the configured scenario and optionally
record the animation
"""

import argparse
from pathlib import Path
from typing import List, Optional

from loguru import logger

from apf_planner.common.constants import LOG_LEVELS
from apf_planner.common.exceptions import ConfigurationError
from apf_planner.config.loader import load_config
from apf_planner.config.models import PlannerAppConfig
from apf_planner.core.interfaces import IFrameSink
from apf_planner.service.planning_service import PathPlanningService
from apf_planner.utils.logger import SetupLogger

EXIT_OK = 0
EXIT_PLANNING_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Potential field path planner")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file (built-in demo scenario when omitted)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the animation to this GIF file"
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Show the animation in a window instead of writing a file"
    )
    parser.add_argument(
        "--no-animation",
        action="store_true",
        help="Do not render frames"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (overrides the configuration)"
    )
    return parser


def build_sink(cfg: PlannerAppConfig, args: argparse.Namespace) -> Optional[IFrameSink]:
    """Frame sink selected by the command line, falling back to the configuration."""
    if args.no_animation:
        return None
    anim = cfg.animation
    if not (args.live or args.output or anim.enable):
        return None

    # matplotlib is only imported when something is drawn
    from apf_planner.ui.frame_sinks import MatplotlibFrameSink

    output_path = None if args.live else (args.output or anim.output_path)
    return MatplotlibFrameSink(
        output_path=output_path,
        fps=anim.fps,
        frame_interval=anim.frame_interval,
        show_potential=anim.show_potential,
        xlim=anim.xlim,
        ylim=anim.ylim,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point, returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(Path(args.config)) if args.config else PlannerAppConfig()
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error(f"Cannot load configuration: {e}")
        return EXIT_CONFIG_ERROR

    level = (args.log_level or cfg.logging.level).upper()
    SetupLogger(level=level, log_dir=cfg.logging.log_dir, to_file=cfg.logging.to_file)

    service = PathPlanningService(cfg)
    sink = build_sink(cfg, args)
    try:
        result = service.plan_scenario(sink=sink)
    finally:
        if sink is not None:
            sink.Close()

    scenario = cfg.scenario
    if not result.ok:
        logger.error(f"Planning failed ({result.error}): {result.reason}")
        print(f"FAILED {result.error}: {result.reason}")
        return EXIT_PLANNING_FAILED

    last = result.path[-1] if result.path else scenario.start
    print(
        f"start={scenario.start} goal={scenario.goal} "
        f"waypoints={len(result.path)} last=({last[0]:.2f}, {last[1]:.2f})"
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
