"""Selectors producing a dict from a mapping of key to input selector."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import InvalidSelectorInputError, describe_types
from .dependencies import assert_is_array_of_functions
from .interfaces import Selector
from .selector import OutputSelector, SelectorCreator, create_selector

__all__ = ["create_structured_selector"]


def create_structured_selector(
    shape: Mapping[str, Selector],
    selector_creator: SelectorCreator = create_selector,
) -> OutputSelector:
    """Return a selector mapping every key of ``shape`` to its selector's result.

    >>> select_point = create_structured_selector(
    ...     {"x": lambda state: state["a"], "y": lambda state: state["b"]}
    ... )
    >>> select_point({"a": 1, "b": 2})
    {'x': 1, 'y': 2}
    """

    if not isinstance(shape, Mapping):
        received = describe_types([shape])[0].split(" ", 1)[0]
        raise InvalidSelectorInputError(
            "create_structured_selector expects first argument to be a mapping "
            f"where each value is a selector, instead received a {received}",
            context={"received": [received]},
        )
    keys = tuple(shape)
    selectors = [shape[key] for key in keys]
    assert_is_array_of_functions(
        selectors,
        "create_selector expects all input selectors to be functions, "
        "but received the following types: ",
    )

    def combine_structure(*values: Any) -> dict[str, Any]:
        return dict(zip(keys, values))

    return selector_creator(selectors, combine_structure)
