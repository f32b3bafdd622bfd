"""Memoization and composition engine."""

from __future__ import annotations

from .dependencies import ResolvedDependencies, resolve_dependencies
from .interfaces import EqualityCheck, Memoizer, Selector
from .memoize import MemoizedFunction, default_memoize, reference_equality_check, shallow_equal
from .selector import OutputSelector, SelectorCreator, create_selector, create_selector_creator
from .structured import create_structured_selector

__all__ = [
    "EqualityCheck",
    "MemoizedFunction",
    "Memoizer",
    "OutputSelector",
    "ResolvedDependencies",
    "Selector",
    "SelectorCreator",
    "create_selector",
    "create_selector_creator",
    "create_structured_selector",
    "default_memoize",
    "reference_equality_check",
    "resolve_dependencies",
    "shallow_equal",
]
