"""Tests for log line rendering."""

import pytest
from colorama import Fore, Style

from runlog.base.config import LogConfig
from runlog.base.events import InstrumentEvent
from runlog.core.messages import LogLevel, LogMessage
from runlog.core.render import Renderer


def timed(duration, allocations=0):
    return InstrumentEvent(
        "run.active_experiment", time=0.0, end=duration, allocations=allocations
    )


def bold(code, text):
    return f"{Style.BRIGHT}{code}{text}{Style.RESET_ALL}"


@pytest.mark.parametrize(
    "duration, expected",
    [
        (1500.0, bold(Fore.RED, "1500.0ms")),
        (1000.04, bold(Fore.YELLOW, "1000.0ms")),
        (1000.0, bold(Fore.YELLOW, "1000.0ms")),
        (600.0, bold(Fore.YELLOW, "600.0ms")),
        (500.0, "500.0ms"),
        (100.0, "100.0ms"),
    ],
)
def test_duration_thresholds(duration, expected):
    renderer = Renderer(LogConfig())

    assert renderer.duration(timed(duration)) == f" ({expected})"


def test_duration_thresholds_are_configurable():
    renderer = Renderer(LogConfig(colorize_logging=False, slow_threshold_ms=10.0))

    assert renderer.duration(timed(12.345), parens=False) == " 12.3ms"


def test_details_include_allocations():
    renderer = Renderer(LogConfig(colorize_logging=False))

    assert renderer.details(timed(3.25, allocations=12)) == " (Duration: 3.3ms | Allocations: 12)"


def test_message_colors_by_level():
    renderer = Renderer(LogConfig())

    assert renderer.message("bad", LogLevel.ERROR) == bold(Fore.RED, "bad")
    assert renderer.message("hmm", LogLevel.WARN) == bold(Fore.YELLOW, "hmm")
    assert renderer.message("ok", LogLevel.INFO) == "ok"
    assert renderer.message("ok", LogLevel.DEBUG) == "ok"


def test_prefix_is_green(make_experiment):
    renderer = Renderer(LogConfig())

    assert renderer.prefix(make_experiment()) == (
        f"{Fore.GREEN}  FakeExperiment[1a2b3c4d]  {Style.RESET_ALL}"
    )
    assert renderer.prefix(None) == ""


def test_context_only_when_opted_in(make_experiment):
    renderer = Renderer(LogConfig(colorize_logging=False))

    assert renderer.context(make_experiment(context={"a": 1})) == ""
    assert renderer.context(make_experiment(context={"a": 1}, log_context=True)) == (
        " with context: {'a': 1}"
    )


def test_render_assembles_line(make_experiment):
    renderer = Renderer(LogConfig(colorize_logging=False))
    message = LogMessage(LogLevel.INFO, "Completed running red variant", details=True)

    line = renderer.render(message, timed(2.0, allocations=5), make_experiment())

    assert line == (
        "  FakeExperiment[1a2b3c4d]  Completed running red variant"
        " (Duration: 2.0ms | Allocations: 5)"
    )


@pytest.mark.parametrize(
    "duration, expected",
    [(2.25, " 2.3ms"), (0.05, " 0.1ms"), (499.96, " 500.0ms"), (7.0, " 7.0ms")],
)
def test_duration_rounds_half_up(duration, expected):
    renderer = Renderer(LogConfig(colorize_logging=False))

    assert renderer.duration(timed(duration), parens=False) == expected
