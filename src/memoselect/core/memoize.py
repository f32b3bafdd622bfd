"""Single-entry memoization gated by a pluggable equality check."""

from __future__ import annotations

from collections.abc import Mapping
from functools import update_wrapper
from typing import Any, Callable, Generic, TypeVar

from .interfaces import EqualityCheck

__all__ = [
    "MemoizedFunction",
    "default_memoize",
    "reference_equality_check",
    "shallow_equal",
]

_R = TypeVar("_R")


def reference_equality_check(new_value: Any, old_value: Any) -> bool:
    """Return ``True`` when both values are the same object."""

    return new_value is old_value


def shallow_equal(new_value: Any, old_value: Any) -> bool:
    """Compare mappings and sequences one level deep using identity.

    Values that are not both mappings, or not both lists/tuples, are compared
    by identity only.
    """

    if new_value is old_value:
        return True
    if isinstance(new_value, Mapping) and isinstance(old_value, Mapping):
        if len(new_value) != len(old_value):
            return False
        for key, value in new_value.items():
            if key not in old_value or old_value[key] is not value:
                return False
        return True
    if isinstance(new_value, (list, tuple)) and type(new_value) is type(old_value):
        if len(new_value) != len(old_value):
            return False
        return all(a is b for a, b in zip(new_value, old_value))
    return False


class MemoizedFunction(Generic[_R]):
    """Callable caching the result of the most recent successful call."""

    def __init__(
        self,
        func: Callable[..., _R],
        equality_check: EqualityCheck = reference_equality_check,
    ) -> None:
        if not callable(equality_check):
            raise TypeError(
                f"equality_check must be callable, instead received {type(equality_check).__name__}"
            )
        update_wrapper(self, func)
        self._func = func
        self._equality_check = equality_check
        self._last_args: tuple[Any, ...] = ()
        self._last_result: _R | None = None
        self._has_value = False

    @property
    def has_value(self) -> bool:
        """Return ``True`` when a cached result is available."""

        return self._has_value

    def _matches_last_args(self, args: tuple[Any, ...]) -> bool:
        last_args = self._last_args
        if len(args) != len(last_args):
            return False
        equals = self._equality_check
        for new_value, old_value in zip(args, last_args):
            if not equals(new_value, old_value):
                return False
        return True

    def __call__(self, *args: Any) -> _R:
        if self._has_value and self._matches_last_args(args):
            # Later calls compare against the most recent arguments.
            self._last_args = args
            return self._last_result  # type: ignore[return-value]
        # A raising call leaves the previous entry in place.
        result = self._func(*args)
        self._last_args = args
        self._last_result = result
        self._has_value = True
        return result

    def clear_cache(self) -> None:
        """Forget the cached call so the next invocation recomputes."""

        self._last_args = ()
        self._last_result = None
        self._has_value = False

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", None) or repr(self._func)
        return f"<MemoizedFunction {name} has_value={self._has_value}>"


def default_memoize(
    func: Callable[..., _R],
    equality_check: EqualityCheck = reference_equality_check,
) -> MemoizedFunction[_R]:
    """Wrap ``func`` with a cache of depth one.

    A call is served from the cache when it receives as many positional
    arguments as the previous successful call and ``equality_check`` accepts
    every argument.  The predicate receives ``(new_value, old_value)``.

    The default predicate is ``is``.  Equal values that are distinct objects,
    such as strings or large integers built at runtime, are cache misses; pass
    :func:`shallow_equal` or ``operator.eq`` to compare by value.
    """

    return MemoizedFunction(func, equality_check)
