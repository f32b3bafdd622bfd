"""Helpers to load project-level configuration files."""

from __future__ import annotations

import logging
from collections.abc import Mapping as ABCMapping
from pathlib import Path
from typing import Any

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from .settings import DevModeChecks, set_global_dev_mode_checks

__all__ = [
    "configure_from_project",
    "load_project_config",
]


logger = logging.getLogger(__name__)

_PROJECT_FILENAME = "pyproject.toml"
_TOOL_SECTION = "memoselect"


def _as_dict(payload: ABCMapping[str, Any]) -> dict[str, Any]:
    """Recursively coerce TOML mappings into regular dictionaries."""

    result: dict[str, Any] = {}
    for key, value in payload.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            result[key_str] = _as_dict(value)
        elif isinstance(value, list):
            result[key_str] = [
                _as_dict(item) if isinstance(item, ABCMapping) else item for item in value
            ]
        else:
            result[key_str] = value
    return result


def _resolve_pyproject_path(candidate: Path) -> Path | None:
    """Return the concrete ``pyproject.toml`` path for ``candidate`` if possible."""

    candidate = candidate.expanduser()
    if candidate.name == _PROJECT_FILENAME:
        return candidate
    if candidate.suffix:
        return None
    return candidate / _PROJECT_FILENAME


def _load_toml_mapping(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if isinstance(data, ABCMapping):
        return _as_dict(data)
    return None


def load_project_config(path: Path | str) -> tuple[dict[str, Any], Path] | None:
    """Load the ``[tool.memoselect]`` section from ``pyproject.toml``.

    ``path`` may point at the file itself or at the directory holding it.
    Returns ``None`` when the file or the section is missing.
    """

    pyproject_path = _resolve_pyproject_path(Path(path))
    if pyproject_path is None:
        return None

    pyproject_path = pyproject_path.resolve(strict=False)
    pyproject_payload = _load_toml_mapping(pyproject_path)
    if not pyproject_payload:
        return None

    tool_section = pyproject_payload.get("tool")
    if not isinstance(tool_section, ABCMapping):
        return None

    section = tool_section.get(_TOOL_SECTION)
    if not isinstance(section, ABCMapping):
        return None

    return _as_dict(section), pyproject_path


def configure_from_project(path: Path | str) -> DevModeChecks | None:
    """Apply ``[tool.memoselect.dev_mode_checks]`` to the global defaults."""

    loaded = load_project_config(path)
    if loaded is None:
        return None

    config, source_path = loaded
    checks = DevModeChecks.from_config(config.get("dev_mode_checks"))
    logger.debug(
        "Loaded dev-mode checks from %s",
        source_path,
        extra={
            "event": "config.loaded",
            "input_stability_check": checks.input_stability_check,
            "identity_function_check": checks.identity_function_check,
        },
    )
    return set_global_dev_mode_checks(checks)
