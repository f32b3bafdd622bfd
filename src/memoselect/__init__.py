"""Memoized selectors for deriving values from application state.

Input selectors read fragments of a state object, a combiner merges their
results, and two single-entry caches skip the work whenever the call
arguments or the extracted fragments did not change.
"""

import logging

from ._version import __version__
from .core.dependencies import ResolvedDependencies, resolve_dependencies
from .core.interfaces import EqualityCheck, Memoizer, Selector
from .core.memoize import (
    MemoizedFunction,
    default_memoize,
    reference_equality_check,
    shallow_equal,
)
from .core.selector import (
    OutputSelector,
    SelectorCreator,
    create_selector,
    create_selector_creator,
)
from .core.structured import create_structured_selector
from .errors import InvalidSelectorInputError, SelectorError
from .settings import (
    DevModeCheckFrequency,
    DevModeChecks,
    get_global_dev_mode_checks,
    reset_global_dev_mode_checks,
    set_global_dev_mode_checks,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DevModeCheckFrequency",
    "DevModeChecks",
    "EqualityCheck",
    "InvalidSelectorInputError",
    "MemoizedFunction",
    "Memoizer",
    "OutputSelector",
    "ResolvedDependencies",
    "Selector",
    "SelectorCreator",
    "SelectorError",
    "create_selector",
    "create_selector_creator",
    "create_structured_selector",
    "default_memoize",
    "get_global_dev_mode_checks",
    "reference_equality_check",
    "reset_global_dev_mode_checks",
    "resolve_dependencies",
    "set_global_dev_mode_checks",
    "shallow_equal",
    "__version__",
]
