from runlog.base.colors import GREEN, RED, YELLOW, color
from runlog.base.config import (
    LogConfig,
    get_default_config,
    get_default_logger,
    get_diagnostics_logger,
    set_default_config,
    set_default_logger,
)
from runlog.base.events import InstrumentEvent
from runlog.base.payloads import CallbackPayload, ExperimentPayload
from runlog.base.stack import (
    EventStack,
    clear_execution_stack,
    current_experiment,
    get_execution_stack,
    pop_experiment,
    push_experiment,
)

__all__ = [
    # Colors
    "GREEN",
    "RED",
    "YELLOW",
    "color",
    # Config
    "LogConfig",
    "get_default_config",
    "set_default_config",
    "get_default_logger",
    "set_default_logger",
    "get_diagnostics_logger",
    # Events and payloads
    "InstrumentEvent",
    "ExperimentPayload",
    "CallbackPayload",
    # Context stacks
    "get_execution_stack",
    "push_experiment",
    "pop_experiment",
    "current_experiment",
    "clear_execution_stack",
    "EventStack",
]
