from __future__ import annotations

from collections import OrderedDict

import pytest

from memoselect import (
    InvalidSelectorInputError,
    create_selector_creator,
    create_structured_selector,
    default_memoize,
)


def test_structured_selector() -> None:
    selector = create_structured_selector(
        {
            "x": lambda state: state["a"],
            "y": lambda state: state["b"],
        }
    )

    first_result = selector({"a": 1, "b": 2})
    assert first_result == {"x": 1, "y": 2}
    assert selector({"a": 1, "b": 2}) is first_result
    second_result = selector({"a": 2, "b": 2})
    assert second_result == {"x": 2, "y": 2}
    assert selector({"a": 2, "b": 2}) is second_result
    assert selector.recomputations() == 2


def test_structured_selector_preserves_key_order() -> None:
    shape = OrderedDict(
        [
            ("zeta", lambda state: state["z"]),
            ("alpha", lambda state: state["a"]),
        ]
    )
    selector = create_structured_selector(shape)

    assert list(selector({"z": 1, "a": 2})) == ["zeta", "alpha"]
    assert selector.dependencies == tuple(shape.values())


def test_structured_selector_passes_extra_arguments() -> None:
    selector = create_structured_selector(
        {
            "item": lambda state, key: state[key],
            "key": lambda state, key: key,
        }
    )

    assert selector({"k": 5}, "k") == {"item": 5, "key": "k"}


@pytest.mark.parametrize(
    "shape, received",
    [
        pytest.param(lambda state: state["a"], "function", id="function"),
        pytest.param([lambda state: state["a"]], "list", id="list"),
    ],
)
def test_structured_selector_requires_a_mapping(shape, received) -> None:
    with pytest.raises(
        InvalidSelectorInputError,
        match=f"expects first argument to be a mapping.*instead received a {received}",
    ):
        create_structured_selector(shape)  # type: ignore[arg-type]


def test_structured_selector_rejects_non_callable_values() -> None:
    with pytest.raises(
        InvalidSelectorInputError,
        match=r"input selectors to be functions.*\[function <lambda>\(\), str\]",
    ):
        create_structured_selector({"a": lambda state: state["b"], "c": "d"})  # type: ignore[dict-item]


def test_structured_selector_with_custom_selector_creator() -> None:
    custom_selector_creator = create_selector_creator(default_memoize, lambda a, b: a == b)
    selector = create_structured_selector(
        {
            "x": lambda state: state["a"],
            "y": lambda state: state["b"],
        },
        custom_selector_creator,
    )

    first_result = selector({"a": 1, "b": 2})
    assert first_result == {"x": 1, "y": 2}
    assert selector({"a": 1, "b": 2}) is first_result
    assert selector({"a": 2, "b": 2}) == {"x": 2, "y": 2}


def test_structured_selector_with_equal_but_distinct_values() -> None:
    value_selector = create_selector_creator(default_memoize, lambda a, b: a == b)
    selector = create_structured_selector({"items": lambda state: state["items"]}, value_selector)

    first_result = selector({"items": [1, 2]})
    assert selector({"items": [1, 2]}) is first_result
    assert selector.recomputations() == 1
