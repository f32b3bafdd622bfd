"""Utilities for retrieving and validating the package version."""

from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path

from packaging.version import InvalidVersion, Version

_PACKAGE_NAME = "memoselect"


def _version_from_sources() -> str:
    """Return the version parsed from ``CHANGELOG.md``.

    This is a fallback for development checkouts where the distribution
    metadata has not been generated yet.
    """

    resolved = Path(__file__).resolve()
    candidates = [parent / "CHANGELOG.md" for parent in resolved.parents[1:3]]

    for changelog in candidates:
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = re.match(r"^## v(?P<version>\d+\.\d+\.\d+)\b", line)
            if match:
                return match.group("version")

    raise RuntimeError(
        f"Unable to determine the '{_PACKAGE_NAME}' version from package metadata or "
        "repository sources."
    )


def validate_version(raw_version: str) -> str:
    """Return ``raw_version`` if it is a ``MAJOR.MINOR.PATCH`` version."""

    try:
        parsed = Version(raw_version)
    except InvalidVersion as exc:
        raise RuntimeError(
            f"Invalid version string for '{_PACKAGE_NAME}': "
            f"{raw_version!r}. Expected a semantic version."
        ) from exc

    if len(parsed.release) != 3:
        raise RuntimeError(
            f"The '{_PACKAGE_NAME}' version must follow the MAJOR.MINOR.PATCH format. "
            f"Found: {raw_version!r}."
        )

    return raw_version


def _load_version() -> str:
    try:
        raw_version = metadata.version(_PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        raw_version = _version_from_sources()
    return validate_version(raw_version)


__version__ = _load_version()

__all__ = ["__version__", "validate_version"]
