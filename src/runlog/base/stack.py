"""Context-local stacks used by log subscribers.

Two kinds of stacks are tracked per logical thread of control: the
experiments that are currently running (shared by every subscriber, for
nesting detection) and, for each subscriber, the instrumentation events that
have started but not yet finished (for parent/child linking).

Both are stored as tuples in context variables. Every push or pop installs a
new tuple, so threads and asyncio tasks never mutate each other's stacks.
"""

from contextvars import ContextVar
from typing import Any, Optional, Tuple

from runlog.base.events import InstrumentEvent

_execution_stack: ContextVar[Tuple[Any, ...]] = ContextVar(
    "runlog_execution_stack", default=()
)


def get_execution_stack() -> Tuple[Any, ...]:
    """Get the experiments currently running in this context, outermost first."""
    return _execution_stack.get()


def push_experiment(experiment: Any) -> None:
    _execution_stack.set(_execution_stack.get() + (experiment,))


def pop_experiment() -> Optional[Any]:
    """Remove and return the innermost running experiment.

    Returns:
        The popped experiment, or None if nothing is running.
    """
    stack = _execution_stack.get()
    if not stack:
        return None
    _execution_stack.set(stack[:-1])
    return stack[-1]


def current_experiment() -> Optional[Any]:
    stack = _execution_stack.get()
    return stack[-1] if stack else None


def clear_execution_stack() -> None:
    """Reset the execution stack for the current context."""
    _execution_stack.set(())


class EventStack:
    """In-flight events of one subscriber, isolated per context.

    Each instance owns its own context variable, so two subscribers attached
    to the same notifier never link or pop each other's events.

    Args:
        name: Name of the underlying context variable.
    """

    def __init__(self, name: str = "runlog_event_stack") -> None:
        self._events: ContextVar[Tuple[InstrumentEvent, ...]] = ContextVar(name, default=())

    def push(self, event: InstrumentEvent) -> None:
        self._events.set(self._events.get() + (event,))

    def pop(self) -> Optional[InstrumentEvent]:
        stack = self._events.get()
        if not stack:
            return None
        self._events.set(stack[:-1])
        return stack[-1]

    def current(self) -> Optional[InstrumentEvent]:
        stack = self._events.get()
        return stack[-1] if stack else None

    def clear(self) -> None:
        self._events.set(())
