"""Tests for the equality-gated single-entry memoizer."""

from __future__ import annotations

import pytest

from memoselect import MemoizedFunction, default_memoize, reference_equality_check, shallow_equal


def test_default_memoize_caches_last_call() -> None:
    called = 0

    def select_a(state):
        nonlocal called
        called += 1
        return state["a"]

    memoized = default_memoize(select_a)
    o1 = {"a": 1}
    o2 = {"a": 2}

    assert memoized(o1) == 1
    assert memoized(o1) == 1
    assert called == 1
    assert memoized(o2) == 2
    assert called == 2


def test_default_memoize_only_remembers_the_previous_call() -> None:
    called = 0

    def identity(value):
        nonlocal called
        called += 1
        return value

    memoized = default_memoize(identity)
    first, second = object(), object()

    memoized(first)
    memoized(second)
    memoized(first)

    assert called == 3


def test_default_memoize_with_multiple_arguments() -> None:
    memoized = default_memoize(lambda *args: sum(args))

    assert memoized(1, 2) == 3
    assert memoized(1) == 1


def test_default_memoize_with_equality_override() -> None:
    called = 0

    def identity(value):
        nonlocal called
        called += 1
        return value

    # Deliberately loose: any two values of the same type are "equal".
    memoized = default_memoize(identity, lambda a, b: type(a) is type(b))

    assert memoized(1) == 1
    assert memoized(2) == 1
    assert called == 1
    assert memoized("A") == "A"
    assert called == 2


def test_default_memoize_passes_new_value_first_to_equality_check() -> None:
    fallthroughs = 0

    def counting_shallow_equal(new_value, old_value):
        nonlocal fallthroughs
        if new_value is old_value:
            return True
        fallthroughs += 1
        return shallow_equal(new_value, old_value)

    some_object = {"foo": "bar"}
    another_object = {"foo": "bar"}
    memoized = default_memoize(lambda value: value, counting_shallow_equal)

    # Nothing cached yet, so the predicate is not consulted.
    memoized(some_object)
    assert fallthroughs == 0

    memoized(another_object)
    assert fallthroughs == 1

    # The hit above recorded ``another_object`` as the latest argument, so
    # the identity shortcut applies and the shallow comparison is skipped.
    memoized(another_object)
    assert fallthroughs == 1

    seen: list[tuple[object, object]] = []

    def recording_equal(new_value, old_value):
        seen.append((new_value, old_value))
        return new_value is old_value

    recorder = default_memoize(lambda value: value, recording_equal)
    recorder(some_object)
    recorder(another_object)
    assert seen == [(another_object, some_object)]


def test_default_memoize_stops_comparing_at_first_mismatch() -> None:
    compared: list[object] = []

    def recording_equal(new_value, old_value):
        compared.append(new_value)
        return new_value is old_value

    a, b, c = object(), object(), object()
    memoized = default_memoize(lambda *args: len(args), recording_equal)
    memoized(a, b, c)
    memoized(object(), b, c)

    assert len(compared) == 1


def test_default_memoize_keeps_previous_entry_when_call_raises() -> None:
    called = 0

    def fragile(value):
        nonlocal called
        called += 1
        if value > 1:
            raise ValueError("too large")
        return value * 10

    memoized = default_memoize(fragile)

    assert memoized(1) == 10
    with pytest.raises(ValueError, match="too large"):
        memoized(2)
    assert memoized(1) == 10
    assert called == 2
    assert memoized.has_value


def test_default_memoize_does_not_cache_first_failure() -> None:
    attempts = 0

    def always_fails(value):
        nonlocal attempts
        attempts += 1
        raise RuntimeError("boom")

    memoized = default_memoize(always_fails)
    for _ in range(2):
        with pytest.raises(RuntimeError):
            memoized(1)

    assert attempts == 2
    assert not memoized.has_value


def test_clear_cache_forces_recomputation() -> None:
    called = 0

    def double(value):
        nonlocal called
        called += 1
        return value * 2

    memoized = default_memoize(double)
    memoized(3)
    assert memoized.has_value

    memoized.clear_cache()

    assert not memoized.has_value
    assert memoized(3) == 6
    assert called == 2


def test_memoized_function_preserves_metadata() -> None:
    def compute_total(a, b):
        """Add two numbers."""
        return a + b

    memoized = default_memoize(compute_total)

    assert isinstance(memoized, MemoizedFunction)
    assert memoized.__name__ == "compute_total"
    assert memoized.__doc__ == "Add two numbers."
    assert memoized.__wrapped__ is compute_total
    assert "compute_total" in repr(memoized)


def test_default_memoize_rejects_non_callable_equality_check() -> None:
    with pytest.raises(TypeError, match="equality_check must be callable"):
        default_memoize(lambda value: value, "not a predicate")  # type: ignore[arg-type]


def test_reference_equality_check_uses_identity() -> None:
    first = [1]
    assert reference_equality_check(first, first)
    assert not reference_equality_check(first, [1])


@pytest.mark.parametrize(
    "new_value, old_value, expected",
    [
        pytest.param({"a": 1, "b": 2}, {"a": 1, "b": 2}, True, id="equal-mappings"),
        pytest.param({"a": 1}, {"a": 1, "b": 2}, False, id="missing-key"),
        pytest.param({"a": 1, "c": 2}, {"a": 1, "b": 2}, False, id="different-key"),
        pytest.param({"a": [1]}, {"a": [1]}, False, id="nested-values-by-identity"),
        pytest.param((1, 2), (1, 2), True, id="equal-tuples"),
        pytest.param([1, 2], [1, 2, 3], False, id="different-length"),
        pytest.param([1, 2], (1, 2), False, id="list-vs-tuple"),
        pytest.param("abc", "abd", False, id="scalars-by-identity"),
    ],
)
def test_shallow_equal(new_value, old_value, expected) -> None:
    assert shallow_equal(new_value, old_value) is expected


def test_shallow_equal_treats_identical_objects_as_equal() -> None:
    value = {"a": object()}
    assert shallow_equal(value, value)
