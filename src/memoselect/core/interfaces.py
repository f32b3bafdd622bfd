"""Structural typing interfaces for the selector engine.

The engine never inspects the concrete type of a memoizer.  It only calls
it, so any callable matching :class:`Memoizer` can be plugged into either
cache tier.  The remaining protocols describe the optional hooks the engine
uses when they are present.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

__all__ = [
    "EqualityCheck",
    "Memoizer",
    "Selector",
    "SupportsClearCache",
    "SupportsCacheClear",
]


Selector = Callable[..., Any]


class EqualityCheck(Protocol):
    """Predicate deciding whether a new argument matches the cached one."""

    def __call__(self, new_value: Any, old_value: Any) -> bool:
        ...


class Memoizer(Protocol):
    """Wrap ``func`` so that repeated calls may be served from a cache."""

    def __call__(self, func: Callable[..., Any], *options: Any) -> Callable[..., Any]:
        ...


@runtime_checkable
class SupportsClearCache(Protocol):
    """Memoized callable produced by :func:`memoselect.default_memoize`."""

    def clear_cache(self) -> None:
        ...


@runtime_checkable
class SupportsCacheClear(Protocol):
    """Memoized callable following the :func:`functools.lru_cache` API."""

    def cache_clear(self) -> None:
        ...
