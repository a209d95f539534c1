"""Global identifier resolution for logged experiment context.

Experiment context often holds domain objects (users, accounts). When context
is logged, objects that support global identification are replaced by their
canonical identifier string so the log line stays short and resolvable.
"""

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class GlobalIdentification(Protocol):
    """Protocol for objects that expose a canonical global identifier."""
    def to_global_id(self) -> Any:
        """Return the object's global identifier (stringified when logged)."""
        ...


class NotGloballyIdentifiable(TypeError):
    """Raised when a value cannot be resolved to a global identifier."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"{type(value).__name__} does not support global identification")


def default_global_id_resolver(value: Any) -> str:
    """Resolve a value to its global identifier string.

    Args:
        value: Any object.

    Returns:
        The string form of ``value.to_global_id()``.

    Raises:
        NotGloballyIdentifiable: If the value does not implement ``to_global_id``.
    """
    if not isinstance(value, GlobalIdentification):
        raise NotGloballyIdentifiable(value)
    return str(value.to_global_id())


_resolver: Callable[[Any], str] = default_global_id_resolver


def get_global_id_resolver() -> Callable[[Any], str]:
    return _resolver


def set_global_id_resolver(resolver: Callable[[Any], str]) -> None:
    """Replace the function used to resolve global identifiers.

    Args:
        resolver: Callable returning an identifier string, raising for values
            it cannot identify.
    """
    global _resolver
    _resolver = resolver


def format_context(value: Any) -> Any:
    """Recursively replace identifiable objects with their global identifiers.

    Dicts keep their keys, lists and tuples keep their shape. Values that fail
    to resolve are kept as-is.

    Args:
        value: Structured context data.

    Returns:
        A copy of the data suitable for logging.
    """
    if isinstance(value, dict):
        return {key: format_context(item) for key, item in value.items()}
    if isinstance(value, list):
        return [format_context(item) for item in value]
    if isinstance(value, tuple):
        return tuple(format_context(item) for item in value)
    if isinstance(value, GlobalIdentification):
        try:
            return _resolver(value)
        except Exception:
            return value
    return value
