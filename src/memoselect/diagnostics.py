"""Development-mode checks detecting selectors that defeat their own caches.

Both checks are advisory.  They log a warning through :mod:`logging` and
never raise, never touch the selector caches and never change the value a
selector returns.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from .core.interfaces import Memoizer
from .settings import DEFAULT_DIAGNOSTICS_LOGGER, DevModeCheckFrequency

__all__ = [
    "IDENTITY_FUNCTION_WARNING",
    "INPUT_STABILITY_WARNING",
    "collect_input_selector_results",
    "run_identity_function_check",
    "run_stability_check",
    "should_run_dev_mode_check",
]


INPUT_STABILITY_WARNING = (
    "An input selector returned a different result when passed same arguments. "
    "This means your output selector will likely run more frequently than intended. "
    "Avoid returning a new reference inside your input selector, e.g. "
    "`create_selector([lambda a, b: {'a': a, 'b': b}], lambda ab: ...)`"
)

IDENTITY_FUNCTION_WARNING = (
    "The result function returned its own inputs without modification, e.g. "
    "`create_selector([lambda state: state.todos], lambda todos: todos)`. "
    "This could lead to inefficient memoization. Ensure transformation logic "
    "is in the result function, and extraction logic is in the input selectors."
)


def should_run_dev_mode_check(frequency: DevModeCheckFrequency, first_run: bool) -> bool:
    """Return ``True`` when a check configured with ``frequency`` is due."""

    return frequency == "always" or (frequency == "once" and first_run)


def collect_input_selector_results(
    dependencies: Sequence[Callable[..., Any]], args: tuple[Any, ...]
) -> list[Any]:
    """Run every input selector with ``args`` in declaration order."""

    return [dependency(*args) for dependency in dependencies]


def run_stability_check(
    dependencies: Sequence[Callable[..., Any]],
    input_selector_results: Sequence[Any],
    args: tuple[Any, ...],
    *,
    memoize: Memoizer,
    memoize_options: Sequence[Any] = (),
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Re-run the input selectors and warn when their results are unstable.

    Both result lists go through a throwaway ``memoize`` wrapper so that the
    comparison uses the same equality semantics as the result cache.  Returns
    ``True`` when the results were judged stable.
    """

    target = logger or logging.getLogger(DEFAULT_DIAGNOSTICS_LOGGER)
    try:
        results_copy = collect_input_selector_results(dependencies, args)
        create_sentinel = memoize(lambda *_: object(), *memoize_options)
        stable = create_sentinel(*input_selector_results) is create_sentinel(*results_copy)
    except Exception:
        target.debug("Input stability check could not run", exc_info=True)
        return True
    if not stable:
        target.warning(
            INPUT_STABILITY_WARNING,
            extra={
                "event": "selector.dev_check",
                "check": "input_stability",
                "arguments": _summarise(args),
                "first_inputs": _summarise(input_selector_results),
                "second_inputs": _summarise(results_copy),
            },
        )
    return stable


def run_identity_function_check(
    result_func: Callable[..., Any],
    *,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Warn when ``result_func`` hands back its sole argument unchanged.

    Returns ``True`` when the combiner behaved as an identity function.
    """

    target = logger or logging.getLogger(DEFAULT_DIAGNOSTICS_LOGGER)
    sentinel: dict[str, Any] = {}
    try:
        is_identity = result_func(sentinel) is sentinel
    except Exception:
        is_identity = False
    if is_identity:
        target.warning(
            IDENTITY_FUNCTION_WARNING,
            extra={
                "event": "selector.dev_check",
                "check": "identity_function",
                "result_func": getattr(result_func, "__qualname__", repr(result_func)),
            },
        )
    return is_identity


def _summarise(values: Sequence[Any]) -> list[str]:
    return [repr(value) for value in values]
