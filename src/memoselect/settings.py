"""Runtime configuration for the development-mode selector checks."""

from __future__ import annotations

from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, replace
from typing import Any, Literal, Mapping, get_args

DevModeCheckFrequency = Literal["always", "once", "never"]

DEFAULT_CHECK_FREQUENCY: DevModeCheckFrequency = "once"
DEFAULT_IDENTITY_CHECK_FREQUENCY: DevModeCheckFrequency = "never"
DEFAULT_DIAGNOSTICS_LOGGER = "memoselect.diagnostics"

_FREQUENCIES: frozenset[str] = frozenset(get_args(DevModeCheckFrequency))


def resolve_check_frequency(value: Any, fallback: DevModeCheckFrequency) -> DevModeCheckFrequency:
    """Normalise ``value`` into one of ``'always'``, ``'once'`` or ``'never'``.

    Booleans map to ``'always'``/``'never'``; anything unrecognised yields
    ``fallback``.
    """

    if isinstance(value, bool):
        return "always" if value else "never"
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _FREQUENCIES:
            return lowered  # type: ignore[return-value]
    return fallback


@dataclass(frozen=True, slots=True)
class DevModeChecks:
    """Immutable frequencies for the development-mode checks."""

    input_stability_check: DevModeCheckFrequency = DEFAULT_CHECK_FREQUENCY
    identity_function_check: DevModeCheckFrequency = DEFAULT_IDENTITY_CHECK_FREQUENCY
    logger_name: str = DEFAULT_DIAGNOSTICS_LOGGER

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "DevModeChecks":
        """Coerce a raw configuration mapping into :class:`DevModeChecks`.

        The mapping typically comes from the ``[tool.memoselect.dev_mode_checks]``
        table.  Unknown keys are ignored and invalid values fall back to the
        defaults.
        """

        payload: Mapping[str, Any] = config if isinstance(config, ABCMapping) else {}
        logger_name = payload.get("logger_name")
        if not isinstance(logger_name, str) or not logger_name.strip():
            logger_name = DEFAULT_DIAGNOSTICS_LOGGER
        return cls(
            input_stability_check=resolve_check_frequency(
                payload.get("input_stability_check"), DEFAULT_CHECK_FREQUENCY
            ),
            identity_function_check=resolve_check_frequency(
                payload.get("identity_function_check"), DEFAULT_IDENTITY_CHECK_FREQUENCY
            ),
            logger_name=logger_name.strip(),
        )

    def merged(
        self,
        *,
        input_stability_check: DevModeCheckFrequency | None = None,
        identity_function_check: DevModeCheckFrequency | None = None,
    ) -> "DevModeChecks":
        """Return a copy with the non-``None`` overrides applied."""

        changes: dict[str, Any] = {}
        if input_stability_check is not None:
            changes["input_stability_check"] = resolve_check_frequency(
                input_stability_check, self.input_stability_check
            )
        if identity_function_check is not None:
            changes["identity_function_check"] = resolve_check_frequency(
                identity_function_check, self.identity_function_check
            )
        if not changes:
            return self
        return replace(self, **changes)


_GLOBAL_DEV_MODE_CHECKS = DevModeChecks()


def get_global_dev_mode_checks() -> DevModeChecks:
    """Return the process-wide defaults used by every selector."""

    return _GLOBAL_DEV_MODE_CHECKS


def set_global_dev_mode_checks(
    checks: DevModeChecks | None = None,
    *,
    input_stability_check: DevModeCheckFrequency | None = None,
    identity_function_check: DevModeCheckFrequency | None = None,
) -> DevModeChecks:
    """Replace or update the process-wide dev-mode check defaults.

    Selectors read these defaults on every call, so the change applies to
    existing selectors that did not override the frequencies themselves.
    """

    global _GLOBAL_DEV_MODE_CHECKS

    base = checks if checks is not None else _GLOBAL_DEV_MODE_CHECKS
    _GLOBAL_DEV_MODE_CHECKS = base.merged(
        input_stability_check=input_stability_check,
        identity_function_check=identity_function_check,
    )
    return _GLOBAL_DEV_MODE_CHECKS


def reset_global_dev_mode_checks() -> DevModeChecks:
    """Restore the built-in defaults."""

    global _GLOBAL_DEV_MODE_CHECKS

    _GLOBAL_DEV_MODE_CHECKS = DevModeChecks()
    return _GLOBAL_DEV_MODE_CHECKS


__all__ = [
    "DEFAULT_CHECK_FREQUENCY",
    "DEFAULT_DIAGNOSTICS_LOGGER",
    "DEFAULT_IDENTITY_CHECK_FREQUENCY",
    "DevModeCheckFrequency",
    "DevModeChecks",
    "get_global_dev_mode_checks",
    "reset_global_dev_mode_checks",
    "resolve_check_frequency",
    "set_global_dev_mode_checks",
]
