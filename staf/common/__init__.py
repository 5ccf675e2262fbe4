"""
================================================================================
STAF Common Utilities
================================================================================

Shared configuration access and logging setup for every STAF module.

Exports:
    - ConfigLoader: Singleton YAML + environment configuration
    - ConfigurationError: Raised on invalid configuration
    - get_config: Shortcut for ConfigLoader().get
    - init_logger: Configure loguru sinks from the `logging` section

Usage:
    from staf.common import get_config, init_logger

    init_logger()
    base_url = get_config("tictactoe.base_url", "https://learn.openapis.org")

================================================================================
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .config_loader import ConfigLoader, ConfigurationError


def get_config(key: str, default: Any = None) -> Any:
    """Configuration value by dot-notation key (see ConfigLoader.get)."""
    return ConfigLoader().get(key, default)


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure loguru for a STAF process.

    Settings not passed explicitly come from the `logging` config section
    (level, format, file, rotation, retention), so a profile such as
    config/dev.yaml can switch a whole run to DEBUG.

    Args:
        level: Sink level, e.g. "DEBUG"
        format_string: loguru format for both sinks
        log_file: Extra rotating file sink; parent directories are created
        force: Replace sinks even if the logger was configured already

    Example:
        init_logger()
        init_logger(level="DEBUG", log_file="logs/staf.log", force=True)
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    logger.remove()

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(sys.stderr, format=format_string, level=level, colorize=True)

    log_file = log_file or get_config("logging.file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
    "init_logger",
]
