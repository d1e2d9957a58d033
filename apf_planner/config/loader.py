#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration loader

Loads the YAML configuration and validates it with Pydantic.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from loguru import logger
from pydantic import ValidationError

from apf_planner.common.exceptions import ConfigurationError
from apf_planner.config.models import PlannerAppConfig


def load_config(config_path: Path, base_dir: Optional[Path] = None) -> PlannerAppConfig:
    """
    Load the configuration from a YAML file

    Args:
        config_path: configuration file path
        base_dir: directory used to resolve relative paths (defaults to the
            parent of the config directory)

    Returns:
        validated PlannerAppConfig

    Raises:
        FileNotFoundError: configuration file does not exist
        ConfigurationError: YAML syntax error, empty file or validation failure
    """
    config_path = Path(config_path)
    if base_dir is None:
        default_base = config_path.resolve().parent
        if default_base.name.lower() in ("config", "configs"):
            default_base = default_base.parent
        base_dir = default_base
    else:
        base_dir = Path(base_dir).resolve()

    if not config_path.exists():
        error_msg = f"Configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML syntax error: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    if raw_config is None:
        error_msg = f"Configuration file is empty: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)
    if not isinstance(raw_config, dict):
        error_msg = f"Configuration root must be a mapping: {config_path}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    _apply_relative_paths(raw_config, base_dir)

    config = parse_config(raw_config)
    logger.info(f"Configuration loaded: {config_path}")
    return config


def parse_config(raw_config: Dict[str, Any]) -> PlannerAppConfig:
    """Validate an already loaded mapping."""
    try:
        return PlannerAppConfig(**raw_config)
    except ValidationError as e:
        logger.error("Configuration validation failed:")
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error['loc'])
            logger.error(f"  {field_path}: {error['msg']}")
        raise ConfigurationError(f"Configuration validation failed:\n{e}") from e


def _resolve_path(value: Optional[str], base_dir: Path) -> Optional[str]:
    """Resolve a relative path against base_dir"""
    if value is None:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return str(path.resolve())


def _apply_relative_paths(raw_config: Dict[str, Any], base_dir: Path) -> None:
    """Turn relative path fields into absolute paths"""
    animation_cfg = raw_config.get('animation')
    if isinstance(animation_cfg, dict) and animation_cfg.get('output_path'):
        animation_cfg['output_path'] = _resolve_path(animation_cfg['output_path'], base_dir)

    logging_cfg = raw_config.get('logging')
    if isinstance(logging_cfg, dict) and logging_cfg.get('log_dir'):
        logging_cfg['log_dir'] = _resolve_path(logging_cfg['log_dir'], base_dir)
