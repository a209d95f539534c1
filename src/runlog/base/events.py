"""Instrumentation event records.

This module defines the event record consumed by log subscribers. An event
is created when an instrumented block starts, collects the events nested
inside it, and records timing and allocation counts when it finishes.
"""

import sys
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import uuid_utils as uuid


def _now_ms() -> float:
    return time.perf_counter() * 1000


@dataclass
class InstrumentEvent:
    """A single instrumentation notification.

    Attributes:
        name: Dotted event name, ``"<family>.<namespace>"``
            (e.g., ``"run.active_experiment"``).
        payload: Event payload. Known keys are ``experiment``,
            ``exception_object``, ``aborted`` and ``variant``.
        transaction_id: Identifier shared by the start and finish notifications.
        children: Events that started and finished while this one was running.
        time: Start boundary in milliseconds (monotonic clock).
        end: Finish boundary in milliseconds (monotonic clock).
        allocations: Net growth in live memory blocks while the event was
            running (``sys.getallocatedblocks()`` delta, clamped at zero).
            Objects allocated and freed inside the block are not counted.

    Example:
        >>> event = InstrumentEvent("run.active_experiment", time=0.0, end=12.5)
        >>> event.family, event.duration
        ('run', 12.5)
    """

    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    transaction_id: Optional[str] = None
    children: List["InstrumentEvent"] = field(default_factory=list)
    time: Optional[float] = None
    end: Optional[float] = None
    allocations: int = 0
    _allocation_start: Optional[int] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.transaction_id is None:
            self.transaction_id = uuid.uuid7().hex

    @property
    def family(self) -> str:
        """Event name with the namespace suffix stripped."""
        return self.name.split(".", 1)[0]

    @property
    def duration(self) -> float:
        """Elapsed milliseconds, or 0.0 when the event has not finished."""
        if self.time is None or self.end is None:
            return 0.0
        return self.end - self.time

    def start(self) -> None:
        self.time = _now_ms()
        self._allocation_start = sys.getallocatedblocks()

    def finish(self) -> None:
        self.end = _now_ms()
        if self._allocation_start is not None:
            self.allocations = max(0, sys.getallocatedblocks() - self._allocation_start)

    def add_child(self, event: "InstrumentEvent") -> None:
        self.children.append(event)
