"""Configuration for experiment run logging.

Holds the rendering options, the default logger that formatted lines are
written to, and the diagnostics logger used when a subscriber fails.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional

DIAGNOSTICS_LOGGER_NAME = "runlog.diagnostics"


@dataclass
class LogConfig:
    """Rendering options for experiment log lines.

    Attributes:
        colorize_logging: Whether to wrap output in ANSI color codes.
        slow_threshold_ms: Durations above this are rendered in red.
        warn_threshold_ms: Durations above this are rendered in yellow.
        run_key_length: Number of run key characters shown in the line prefix.

    Example:
        >>> # Plain output for log files
        >>> config = LogConfig(colorize_logging=False)
    """
    colorize_logging: bool = True
    slow_threshold_ms: float = 1000.0
    warn_threshold_ms: float = 500.0
    run_key_length: int = 8


_default_config: LogConfig = LogConfig()
_default_logger: Optional[logging.Logger] = logging.getLogger("runlog")


def get_default_config() -> LogConfig:
    """Get the default rendering configuration."""
    return _default_config


def set_default_config(config: LogConfig) -> None:
    """Set the default rendering configuration.

    Args:
        config: Configuration used by subscribers created without their own.
    """
    global _default_config
    _default_config = config


def get_default_logger() -> Optional[logging.Logger]:
    """Get the logger experiment lines are written to.

    Returns:
        The configured logger, or None when run logging is disabled.
    """
    return _default_logger


def set_default_logger(logger: Optional[logging.Logger]) -> None:
    """Set the logger experiment lines are written to.

    Passing None disables run logging entirely: subscribers skip all message
    building and formatting work.

    Args:
        logger: Logger to write to, or None.
    """
    global _default_logger
    _default_logger = logger


def get_diagnostics_logger() -> logging.Logger:
    """Get the logger used to report subscriber failures.

    The diagnostics logger writes straight to stderr and does not propagate,
    so a broken application logging setup cannot hide or recurse into it.
    """
    logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
