from runlog.core.identity import (
    GlobalIdentification,
    NotGloballyIdentifiable,
    default_global_id_resolver,
    format_context,
    get_global_id_resolver,
    set_global_id_resolver,
)
from runlog.core.messages import (
    LogLevel,
    LogMessage,
    build_callback_message,
    build_message,
    callback_kind,
    experiment_identifier,
    opts_into_context,
)
from runlog.core.render import Renderer
from runlog.core.subscriber import LogSubscriber, Notifier, log_exception

__all__ = [
    # Subscriber
    "LogSubscriber",
    "Notifier",
    "log_exception",
    # Messages
    "LogLevel",
    "LogMessage",
    "build_message",
    "build_callback_message",
    "callback_kind",
    "experiment_identifier",
    "opts_into_context",
    # Rendering
    "Renderer",
    # Global identifiers
    "GlobalIdentification",
    "NotGloballyIdentifiable",
    "default_global_id_resolver",
    "format_context",
    "get_global_id_resolver",
    "set_global_id_resolver",
]
