"""Exception types raised by :mod:`memoselect`."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, MutableMapping, Optional

__all__ = [
    "SelectorError",
    "InvalidSelectorInputError",
    "describe_types",
]


def _normalise_context(context: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not context:
        return {}
    payload: MutableMapping[str, Any] = {}
    for key, value in context.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        elif isinstance(value, (list, tuple)):
            payload[key] = [str(item) for item in value]
        else:
            payload[key] = str(value)
    return dict(payload)


def _describe(item: Any) -> str:
    if callable(item):
        return f"function {getattr(item, '__name__', None) or 'unnamed'}()"
    return type(item).__name__


def describe_types(items: Iterable[Any]) -> list[str]:
    """Return a human readable type description for each element of ``items``."""

    return [_describe(item) for item in items]


class SelectorError(Exception):
    """Base class for errors raised by the selector engine."""

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = _normalise_context(context)


class InvalidSelectorInputError(SelectorError, TypeError):
    """A selector was constructed from arguments of the wrong shape."""

    @classmethod
    def from_items(cls, message: str, items: Iterable[Any]) -> "InvalidSelectorInputError":
        received = describe_types(items)
        return cls(
            f"{message}[{', '.join(received)}]",
            context={"received": received},
        )
