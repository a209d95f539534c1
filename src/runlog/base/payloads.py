"""Payload models for experiment instrumentation events.

Payloads arrive as plain mappings. Each event family is validated into one of
these models before its handler runs, so handlers work with named, optional
fields instead of raw dictionary lookups.

Fields accept any value: ``aborted`` is read for truthiness and
``exception_object`` may be any object. A mapping payload must never fail
validation, since the ``run`` handler is what pops the execution stack.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ExperimentPayload(BaseModel):
    """Payload shared by every experiment event family.

    Attributes:
        experiment: The experiment being run (read-only view).
        exception_object: Exception raised inside the instrumented block.
        aborted: Truthy when the block was aborted by a callback.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="allow")

    experiment: Optional[Any] = None
    exception_object: Optional[Any] = None
    aborted: Optional[Any] = None

    @property
    def errored(self) -> bool:
        return self.exception_object is not None

    @property
    def was_aborted(self) -> bool:
        return bool(self.aborted)


class CallbackPayload(ExperimentPayload):
    """Payload for callback phases, which may resolve a variant.

    Attributes:
        variant: Variant resolved while the callbacks ran, if any.
    """
    variant: Optional[Any] = None
