"""
mentor_matching/logger.py
─────────────────────────
Loguru-based logger configured once and imported across the package.
"""

import sys

from loguru import logger

from .config import LOG_LEVEL, LOG_FILE


def setup_logger(level: str = LOG_LEVEL, log_file: str | None = LOG_FILE) -> None:
    logger.remove()  # remove default stderr handler

    # Console handler: human-readable
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # File handler: JSON lines
    if log_file:
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="10 MB",
            retention="14 days",
            serialize=True,
        )


setup_logger()

__all__ = ["logger", "setup_logger"]
