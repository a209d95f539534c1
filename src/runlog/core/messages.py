"""Log message records and builders.

A LogMessage is the intermediate result of classifying an event: the level,
the text, and which metadata the renderer should append.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from runlog.base.events import InstrumentEvent
from runlog.base.payloads import CallbackPayload


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        """The matching stdlib ``logging`` level."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass
class LogMessage:
    """A classified event, ready to be rendered.

    Attributes:
        level: Severity of the line.
        message: Message text, before colorizing.
        duration: Append the event duration.
        details: Append the event duration and allocation count.
        context: Append the experiment context (if the experiment opts in).
    """
    level: LogLevel
    message: str
    duration: bool = False
    details: bool = False
    context: bool = False


def build_message(level: LogLevel, message: str, **flags: bool) -> LogMessage:
    return LogMessage(level=level, message=message, **flags)


def callback_kind(event_name: str) -> str:
    """Human-readable callback kind for an event name.

    Example:
        >>> callback_kind("run_segment_callbacks.active_experiment")
        'segment callbacks'
    """
    family = event_name.split(".", 1)[0]
    return family.removeprefix("run_").replace("_", " ")


def build_callback_message(event: InstrumentEvent, payload: CallbackPayload) -> LogMessage:
    """Build the message for a callback phase that was not aborted."""
    kind = callback_kind(event.name)
    if payload.variant:
        return build_message(
            LogLevel.INFO, f"Resolved `{payload.variant}` variant in {kind}", duration=True
        )
    return build_message(LogLevel.DEBUG, f"Completed {kind}", duration=True)


def experiment_identifier(experiment: Any, run_key_length: int = 8) -> str:
    """Short identifier for an experiment run, e.g. ``MyExperiment[1a2b3c4d]``."""
    run_key = getattr(experiment, "run_key", None) or ""
    return f"{type(experiment).__name__}[{str(run_key)[:run_key_length]}]"


def opts_into_context(experiment: Optional[Any]) -> bool:
    """Whether an experiment wants its context included in log lines.

    ``log_context`` may be a plain attribute or a zero-argument method.
    """
    flag = getattr(experiment, "log_context", False)
    if callable(flag):
        flag = flag()
    return bool(flag)
