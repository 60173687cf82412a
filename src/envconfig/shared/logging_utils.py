"""
@meta
name: shared_logging_utils
type: utility
domain: shared
responsibility:
  - Provide consistent loggers for the loader, collaborators and CLI
  - Honour ENVCONFIG_LOG_LEVEL as the default level
inputs:
  - Logger names
outputs:
  - Configured logger instances
tags:
  - utility
  - shared
  - logging
lifecycle:
  status: active
"""

"""Shared logging utilities for consistent logging across envconfig."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV_VAR = "ENVCONFIG_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _default_level() -> int:
    """Resolve the default level from the environment, falling back to INFO."""
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger with standardized formatting.

    Args:
        name: Logger name (typically __name__).
        level: Optional logging level (default: ENVCONFIG_LOG_LEVEL or INFO).

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure once; repeated calls must not stack handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

        if level is not None:
            logger.setLevel(level)
        elif logger.level == logging.NOTSET:
            logger.setLevel(_default_level())
    elif level is not None:
        logger.setLevel(level)

    return logger


def set_package_level(level: int) -> None:
    """Set ``level`` on every envconfig logger created so far."""
    for name, candidate in logging.Logger.manager.loggerDict.items():
        if name.startswith("envconfig") and isinstance(candidate, logging.Logger):
            candidate.setLevel(level)
