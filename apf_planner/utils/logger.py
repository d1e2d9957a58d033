"""
Logging utilities
"""

import sys
from pathlib import Path
from typing import Optional
from loguru import logger


def SetupLogger(level: str = "INFO", log_dir: Optional[str] = "logs", to_file: bool = False):
    """
    Setup logger with console and optional file output

    Args:
        level: Logging level
        log_dir: Directory to save log files
        to_file: Also write a daily rotated log file
    """
    # Remove default handler
    logger.remove()

    # Console handler with colors
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        level=level,
        colorize=True
    )

    if to_file and log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "apf_planner_{time:YYYY-MM-DD}.log",
            rotation="00:00",  # Rotate at midnight
            retention="7 days",  # Keep logs for 7 days
            level=level,
            encoding="utf-8",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
        )

    return logger
