"""Rendering of classified messages into colorized log lines."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from runlog.base.colors import GREEN, RED, YELLOW, color
from runlog.base.config import LogConfig, get_default_config
from runlog.base.events import InstrumentEvent
from runlog.core.identity import format_context
from runlog.core.messages import LogLevel, LogMessage, experiment_identifier, opts_into_context


class Renderer:
    """Turns a LogMessage and its event into the final log line.

    A line is made of the experiment prefix, the message, and optionally the
    event duration, allocation details and experiment context::

          MyExperiment[1a2b3c4d]  Completed running control variant (Duration: 1.2ms | Allocations: 37)

    Args:
        config: Rendering configuration. Uses the default config if not provided.
    """

    def __init__(self, config: Optional[LogConfig] = None) -> None:
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config or get_default_config()

    def render(self, message: LogMessage, event: InstrumentEvent, experiment: Optional[Any]) -> str:
        parts = [self.prefix(experiment), self.message(message.message, message.level)]
        if message.duration:
            parts.append(self.duration(event, parens=True))
        if message.details:
            parts.append(self.details(event))
        if message.context:
            parts.append(self.context(experiment))
        return "".join(parts)

    def prefix(self, experiment: Optional[Any]) -> str:
        if experiment is None:
            return ""
        identifier = experiment_identifier(experiment, self.config.run_key_length)
        return color(f"  {identifier}  ", GREEN, config=self.config)

    def message(self, text: str, level: LogLevel = LogLevel.INFO) -> str:
        if level == LogLevel.ERROR:
            return color(text, RED, True, config=self.config)
        if level == LogLevel.WARN:
            return color(text, YELLOW, True, config=self.config)
        return text

    def details(self, event: InstrumentEvent) -> str:
        return f" (Duration:{self.duration(event, parens=False)} | Allocations: {event.allocations})"

    def duration(self, event: InstrumentEvent, parens: bool = True) -> str:
        config = self.config
        duration = _round_ms(event.duration)
        text = f"{duration}ms"
        if duration > config.slow_threshold_ms:
            text = color(text, RED, True, config=config)
        elif duration > config.warn_threshold_ms:
            text = color(text, YELLOW, True, config=config)
        return f" ({text})" if parens else f" {text}"

    def context(self, experiment: Optional[Any]) -> str:
        if not opts_into_context(experiment):
            return ""
        return f" with context: {format_context(getattr(experiment, 'context', None))!r}"


def _round_ms(duration: float) -> Decimal:
    """Round to one decimal place, halves away from zero (2.25 -> 2.3)."""
    return Decimal(str(duration)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
