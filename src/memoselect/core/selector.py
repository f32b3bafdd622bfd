"""Composition of input selectors and a combiner into cached output selectors.

An :class:`OutputSelector` owns two independent memoized callables:

* the *result* tier wraps the combiner and is keyed by the input selector
  results;
* the *argument* tier wraps the whole selector body and is keyed by the raw
  call arguments, so an argument hit skips the input selectors entirely.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..diagnostics import (
    collect_input_selector_results,
    run_identity_function_check,
    run_stability_check,
    should_run_dev_mode_check,
)
from ..errors import InvalidSelectorInputError
from ..settings import (
    DevModeCheckFrequency,
    DevModeChecks,
    get_global_dev_mode_checks,
    resolve_check_frequency,
)
from .dependencies import resolve_dependencies
from .interfaces import Memoizer, Selector, SupportsCacheClear, SupportsClearCache
from .memoize import default_memoize

__all__ = [
    "OutputSelector",
    "SelectorCreator",
    "create_selector",
    "create_selector_creator",
]


logger = logging.getLogger(__name__)


def _ensure_options(options: Any) -> tuple[Any, ...]:
    if options is None:
        return ()
    if isinstance(options, (list, tuple)):
        return tuple(options)
    return (options,)


def _check_frequency(value: Any, name: str) -> Optional[DevModeCheckFrequency]:
    if value is None:
        return None
    frequency = resolve_check_frequency(value, None)  # type: ignore[arg-type]
    if frequency is None:
        raise InvalidSelectorInputError(
            f"{name} expects one of 'always', 'once' or 'never', but received: {value!r}",
            context={"received": repr(value)},
        )
    return frequency


def _clear_memoized(memoized: Callable[..., Any]) -> None:
    if isinstance(memoized, SupportsClearCache):
        memoized.clear_cache()
    elif isinstance(memoized, SupportsCacheClear):
        memoized.cache_clear()


class OutputSelector:
    """Callable selector with a result cache and an argument cache."""

    def __init__(
        self,
        dependencies: Sequence[Selector],
        combiner: Callable[..., Any],
        *,
        memoize: Memoizer = default_memoize,
        memoize_options: Sequence[Any] = (),
        args_memoize: Memoizer = default_memoize,
        args_memoize_options: Sequence[Any] = (),
        input_stability_check: Optional[DevModeCheckFrequency] = None,
        identity_function_check: Optional[DevModeCheckFrequency] = None,
    ) -> None:
        self.dependencies: tuple[Selector, ...] = tuple(dependencies)
        self.result_func = combiner
        self.memoize = memoize
        self.args_memoize = args_memoize
        self._memoize_options = tuple(memoize_options)
        self._args_memoize_options = tuple(args_memoize_options)
        self._input_stability_check = _check_frequency(
            input_stability_check, "input_stability_check"
        )
        self._identity_function_check = _check_frequency(
            identity_function_check, "identity_function_check"
        )
        self._recomputations = 0
        self._last_result: Any = None
        self._first_run = True

        def _counting_combiner(*results: Any) -> Any:
            self._recomputations += 1
            return combiner(*results)

        self.memoized_result_func = memoize(_counting_combiner, *self._memoize_options)
        self._selector = args_memoize(self._select, *self._args_memoize_options)

    def __call__(self, *args: Any) -> Any:
        return self._selector(*args)

    def _select(self, *args: Any) -> Any:
        results = collect_input_selector_results(self.dependencies, args)
        self._last_result = self.memoized_result_func(*results)
        if __debug__:
            self._run_dev_mode_checks(results, args)
        return self._last_result

    def _run_dev_mode_checks(self, results: list[Any], args: tuple[Any, ...]) -> None:
        first_run = self._first_run
        self._first_run = False
        checks = self.dev_mode_checks
        if checks.input_stability_check == "never" and checks.identity_function_check == "never":
            return
        target = logging.getLogger(checks.logger_name)
        if should_run_dev_mode_check(checks.identity_function_check, first_run):
            run_identity_function_check(self.result_func, logger=target)
        if should_run_dev_mode_check(checks.input_stability_check, first_run):
            run_stability_check(
                self.dependencies,
                results,
                args,
                memoize=self.memoize,
                memoize_options=self._memoize_options,
                logger=target,
            )

    @property
    def dev_mode_checks(self) -> DevModeChecks:
        """Dev-mode check settings currently in effect for this selector."""

        return get_global_dev_mode_checks().merged(
            input_stability_check=self._input_stability_check,
            identity_function_check=self._identity_function_check,
        )

    def recomputations(self) -> int:
        """Return how many times the combiner has been invoked."""

        return self._recomputations

    def reset_recomputations(self) -> None:
        """Zero the counter and drop both cache tiers."""

        self._recomputations = 0
        _clear_memoized(self.memoized_result_func)
        _clear_memoized(self._selector)
        logger.debug("Reset recomputations for %r", self)

    def last_result(self) -> Any:
        """Return the value produced by the most recent selector body run."""

        return self._last_result

    def __repr__(self) -> str:
        name = getattr(self.result_func, "__qualname__", None) or repr(self.result_func)
        return f"<OutputSelector {name} dependencies={len(self.dependencies)}>"


SelectorCreator = Callable[..., OutputSelector]

_UNSET: Any = object()


def _resolve_tier(
    override: Any,
    override_options: Any,
    default: Memoizer,
    default_options: tuple[Any, ...],
) -> tuple[Memoizer, tuple[Any, ...]]:
    if override is _UNSET:
        if override_options is _UNSET:
            return default, default_options
        return default, _ensure_options(override_options)
    if override_options is _UNSET:
        return override, ()
    return override, _ensure_options(override_options)


def create_selector_creator(
    memoize: Memoizer = default_memoize,
    *memoize_options: Any,
    args_memoize: Memoizer = default_memoize,
    args_memoize_options: Any = (),
    input_stability_check: Optional[DevModeCheckFrequency] = None,
    identity_function_check: Optional[DevModeCheckFrequency] = None,
) -> SelectorCreator:
    """Return a ``create_selector`` bound to ``memoize`` and ``memoize_options``.

    Every keyword accepted here can be overridden per selector.  Overriding a
    memoizer without its options drops the creator's options for that tier.
    """

    creator_memoize = memoize
    creator_options = tuple(memoize_options)
    creator_args_memoize = args_memoize
    creator_args_options = _ensure_options(args_memoize_options)
    creator_stability_check = _check_frequency(input_stability_check, "input_stability_check")
    creator_identity_check = _check_frequency(
        identity_function_check, "identity_function_check"
    )

    def create_selector(
        *args: Any,
        memoize: Memoizer = _UNSET,
        memoize_options: Any = _UNSET,
        args_memoize: Memoizer = _UNSET,
        args_memoize_options: Any = _UNSET,
        input_stability_check: Optional[DevModeCheckFrequency] = None,
        identity_function_check: Optional[DevModeCheckFrequency] = None,
    ) -> OutputSelector:
        resolved = resolve_dependencies(args)
        result_memoize, result_options = _resolve_tier(
            memoize, memoize_options, creator_memoize, creator_options
        )
        call_memoize, call_options = _resolve_tier(
            args_memoize, args_memoize_options, creator_args_memoize, creator_args_options
        )
        return OutputSelector(
            resolved.dependencies,
            resolved.combiner,
            memoize=result_memoize,
            memoize_options=result_options,
            args_memoize=call_memoize,
            args_memoize_options=call_options,
            input_stability_check=(
                creator_stability_check
                if input_stability_check is None
                else input_stability_check
            ),
            identity_function_check=(
                creator_identity_check
                if identity_function_check is None
                else identity_function_check
            ),
        )

    return create_selector


create_selector = create_selector_creator(default_memoize)
