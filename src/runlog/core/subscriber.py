"""Log subscriber for experiment instrumentation events.

The subscriber listens to the ``*.active_experiment`` notifications emitted
while an experiment runs, classifies each finished event, and writes at most
one colorized line per event to the configured logger.

Example:
    >>> subscriber = LogSubscriber.attach_to(notifier)
    >>> # ... run experiments ...
    >>> subscriber.detach_from(notifier)
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Type

from runlog.base.config import LogConfig, get_default_logger, get_diagnostics_logger
from runlog.base.events import InstrumentEvent
from runlog.base.payloads import CallbackPayload, ExperimentPayload
from runlog.base.stack import EventStack, get_execution_stack, pop_experiment, push_experiment
from runlog.core.messages import (
    LogLevel,
    LogMessage,
    build_callback_message,
    build_message,
    experiment_identifier,
    opts_into_context,
)
from runlog.core.render import Renderer

MessageBuilder = Callable[[Optional[Any]], LogMessage]
Handler = Callable[[InstrumentEvent, Any], None]
HandlerTable = Dict[str, Tuple[Type[ExperimentPayload], Handler]]


class Notifier(Protocol):
    """Protocol for the instrumentation bus a subscriber attaches to.

    Subscribed objects receive ``start(name, id, payload)`` and
    ``finish(name, id, payload)`` calls for every event whose name matches.
    """
    def subscribe(self, pattern: "re.Pattern[str]", subscriber: Any) -> Any:
        ...

    def unsubscribe(self, subscription: Any) -> None:
        ...


class LogSubscriber:
    """Translates experiment instrumentation events into log lines.

    Handlers are registered per event family (the event name without its
    namespace suffix). Start handlers run when an instrumented block begins,
    finish handlers run once it completes.

    Args:
        logger: Logger to write to. Uses the default logger if not provided.
        config: Rendering configuration. Uses the default config if not provided.

    Attributes:
        renderer: Renderer used to build log lines.
    """

    namespace = "active_experiment"

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        config: Optional[LogConfig] = None,
    ) -> None:
        self._logger = logger
        self.renderer = Renderer(config)
        self._events = EventStack(f"runlog_event_stack_{id(self):x}")
        self._subscriptions: List[Tuple[Any, Any]] = []
        self._start_handlers: HandlerTable = {
            "run": (ExperimentPayload, self.start_run),
        }
        self._finish_handlers: HandlerTable = {
            "run": (ExperimentPayload, self.run),
            "run_run_callbacks": (ExperimentPayload, self.run_run_callbacks),
            "run_segment_callbacks": (CallbackPayload, self.run_segment_callbacks),
            "run_variant_callbacks": (CallbackPayload, self.run_variant_callbacks),
            "run_variant_steps": (ExperimentPayload, self.run_variant_steps),
        }

    @property
    def logger(self) -> Optional[logging.Logger]:
        return self._logger or get_default_logger()

    @classmethod
    def attach_to(
        cls,
        notifier: Notifier,
        namespace: Optional[str] = None,
        subscriber: Optional["LogSubscriber"] = None,
    ) -> "LogSubscriber":
        """Subscribe to every ``*.<namespace>`` event published by a notifier.

        Args:
            notifier: Instrumentation bus to subscribe to.
            namespace: Event namespace. Defaults to ``active_experiment``.
            subscriber: Subscriber instance to attach. A new one is created if
                not provided.

        Returns:
            The attached subscriber.
        """
        subscriber = subscriber or cls()
        namespace = namespace or cls.namespace
        pattern = re.compile(rf"\.{re.escape(namespace)}$")
        subscriber._subscriptions.append((notifier, notifier.subscribe(pattern, subscriber)))
        return subscriber

    def detach_from(self, notifier: Notifier) -> None:
        """Remove every subscription this subscriber holds on a notifier."""
        remaining = []
        for owner, subscription in self._subscriptions:
            if owner is notifier:
                notifier.unsubscribe(subscription)
            else:
                remaining.append((owner, subscription))
        self._subscriptions = remaining

    # Notification entry points. None of these raise.

    def start(self, name: str, id: Optional[str], payload: Optional[Dict[str, Any]]) -> None:
        """Handle the start of an instrumented block.

        Args:
            name: Event name (e.g., ``"run.active_experiment"``).
            id: Transaction id shared with the matching finish call.
            payload: Payload known when the block starts.
        """
        try:
            event = InstrumentEvent(name, payload=dict(payload or {}), transaction_id=id)
            parent = self._events.current()
            if parent is not None:
                parent.add_child(event)
            self._events.push(event)
            event.start()
        except Exception as exc:
            log_exception(name, exc)
            return
        self._dispatch(self._start_handlers, event)

    def finish(self, name: str, id: Optional[str], payload: Optional[Dict[str, Any]]) -> None:
        """Handle the end of an instrumented block.

        Args:
            name: Event name.
            id: Transaction id shared with the matching start call.
            payload: Final payload; merged over the payload given at start.
        """
        try:
            event = self._events.pop()
            if event is None:
                get_diagnostics_logger().warning("Finished %r event that was never started", name)
                return
            event.finish()
            event.payload.update(payload or {})
        except Exception as exc:
            log_exception(name, exc)
            return
        self.call(event)

    def call(self, event: InstrumentEvent) -> None:
        """Handle an event that has already finished."""
        self._dispatch(self._finish_handlers, event)

    def _dispatch(self, handlers: HandlerTable, event: InstrumentEvent) -> None:
        entry = handlers.get(event.family)
        if entry is None:
            return
        model, handler = entry
        try:
            handler(event, model.model_validate(event.payload))
        except Exception as exc:
            log_exception(event.name, exc)

    # Handlers

    def start_run(self, event: InstrumentEvent, payload: ExperimentPayload) -> None:
        stack = get_execution_stack()
        if stack:
            nested_in = stack[-1]
            self._log(event, payload, lambda experiment: build_message(
                LogLevel.WARN, f"Nested within {self._identifier(nested_in)}"
            ))

        def running(experiment: Optional[Any]) -> LogMessage:
            push_experiment(experiment)
            info = [f"Run ID: {getattr(experiment, 'run_id', None)}"]
            variant = getattr(experiment, "variant", None)
            if variant:
                info.append(f"Variant: {variant}")
            return build_message(
                LogLevel.INFO,
                f"Running {getattr(experiment, 'name', None)} ({', '.join(info)})",
                context=opts_into_context(experiment),
            )

        self._log(event, payload, running)

    def run(self, event: InstrumentEvent, payload: ExperimentPayload) -> None:
        errored = payload.exception_object
        aborted = errored is None and any(child.payload.get("aborted") for child in event.children)

        def completed(experiment: Optional[Any]) -> LogMessage:
            pop_experiment()
            if errored is not None:
                return build_message(
                    LogLevel.ERROR, f"Run failed: {type(errored).__name__} ({errored})"
                )
            if aborted:
                return build_message(LogLevel.INFO, "Run aborted", details=True)
            variant = getattr(experiment, "variant", None)
            if variant and variant in (getattr(experiment, "variant_names", None) or ()):
                return build_message(
                    LogLevel.INFO, f"Completed running {variant} variant", details=True
                )
            if variant:
                return build_message(
                    LogLevel.ERROR, f"Run errored: unknown `{variant}` variant resolved", details=True
                )
            return build_message(LogLevel.ERROR, "Run errored: no variant resolved", details=True)

        self._log(event, payload, completed)

    def run_run_callbacks(self, event: InstrumentEvent, payload: ExperimentPayload) -> None:
        if payload.errored:
            return
        if payload.was_aborted:
            self._log(event, payload, lambda _: build_message(
                LogLevel.INFO, "Aborted run callbacks", duration=True
            ))
        else:
            self._log(event, payload, lambda _: build_message(
                LogLevel.DEBUG, "Completed run callbacks", duration=True
            ))

    def run_segment_callbacks(self, event: InstrumentEvent, payload: CallbackPayload) -> None:
        if payload.errored:
            return

        def segmented(experiment: Optional[Any]) -> LogMessage:
            if payload.was_aborted:
                variant = getattr(experiment, "variant", None)
                return build_message(
                    LogLevel.INFO, f"Segmented into the `{variant}` variant", duration=True
                )
            return build_callback_message(event, payload)

        self._log(event, payload, segmented)

    def run_variant_callbacks(self, event: InstrumentEvent, payload: CallbackPayload) -> None:
        if payload.errored:
            return

        def variant_callbacks(experiment: Optional[Any]) -> LogMessage:
            if payload.was_aborted:
                return build_message(LogLevel.WARN, "Aborted in variant callbacks", duration=True)
            return build_callback_message(event, payload)

        self._log(event, payload, variant_callbacks)

    def run_variant_steps(self, event: InstrumentEvent, payload: ExperimentPayload) -> None:
        if payload.errored or not payload.was_aborted:
            return
        self._log(event, payload, lambda experiment: build_message(
            LogLevel.WARN,
            f"Aborted running variant `{getattr(experiment, 'variant', None)}` steps",
            duration=True,
        ))

    def _log(self, event: InstrumentEvent, payload: ExperimentPayload, build: MessageBuilder) -> None:
        logger = self.logger
        if logger is None:
            return
        experiment = payload.experiment
        message = build(experiment)
        level = message.level.logging_level
        if not logger.isEnabledFor(level):
            return
        logger.log(level, self.renderer.render(message, event, experiment))

    def _identifier(self, experiment: Optional[Any]) -> str:
        if experiment is None:
            return "an unidentified run"
        return experiment_identifier(experiment, self.renderer.config.run_key_length)


def log_exception(name: str, exc: BaseException) -> None:
    """Report a subscriber failure on the diagnostics logger."""
    get_diagnostics_logger().error(
        "Could not log %r event. %s: %s", name, type(exc).__name__, exc, exc_info=exc
    )
