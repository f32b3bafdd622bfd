"""Validation and normalisation of ``create_selector`` arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..errors import InvalidSelectorInputError
from .interfaces import Selector

__all__ = [
    "ResolvedDependencies",
    "assert_is_function",
    "assert_is_array_of_functions",
    "resolve_dependencies",
]


@dataclass(frozen=True, slots=True)
class ResolvedDependencies:
    """Input selectors and combiner extracted from ``create_selector`` arguments."""

    dependencies: tuple[Selector, ...]
    combiner: Callable[..., Any]


def assert_is_function(func: Any, message: str) -> None:
    """Raise :class:`InvalidSelectorInputError` unless ``func`` is callable."""

    if not callable(func):
        raise InvalidSelectorInputError.from_items(message, [func])


def assert_is_array_of_functions(items: Sequence[Any], message: str) -> None:
    """Raise :class:`InvalidSelectorInputError` unless every item is callable.

    The error message lists the type of every item, not only the offending
    ones, so the position of the bad input is easy to spot.
    """

    if not all(callable(item) for item in items):
        raise InvalidSelectorInputError.from_items(message, items)


def resolve_dependencies(raw_args: Sequence[Any]) -> ResolvedDependencies:
    """Split ``raw_args`` into input selectors and the trailing combiner.

    ``raw_args`` is either ``(selectors, combiner)`` where ``selectors`` is a
    list or tuple, or ``(selector_0, ..., selector_n, combiner)``.
    """

    if not raw_args:
        raise InvalidSelectorInputError(
            "create_selector expects input selectors followed by an output function"
        )
    *candidates, combiner = raw_args
    assert_is_function(
        combiner,
        "create_selector expects an output function after the inputs, but received: ",
    )

    if candidates and isinstance(candidates[0], (list, tuple)):
        dependencies = tuple(candidates[0])
    else:
        dependencies = tuple(candidates)

    if not dependencies:
        raise InvalidSelectorInputError(
            "create_selector expects at least one input selector",
            context={"received": []},
        )
    assert_is_array_of_functions(
        dependencies,
        "create_selector expects all input selectors to be functions, "
        "but received the following types: ",
    )
    return ResolvedDependencies(dependencies=dependencies, combiner=combiner)
