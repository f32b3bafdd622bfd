from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent
from typing import Iterator

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from memoselect.settings import reset_global_dev_mode_checks  # noqa: E402


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture(autouse=True)
def _isolate_global_dev_mode_checks() -> Iterator[None]:
    reset_global_dev_mode_checks()
    yield
    reset_global_dev_mode_checks()


@pytest.fixture
def diagnostics_caplog(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """``caplog`` capturing warnings emitted by the dev-mode checks."""

    caplog.set_level(logging.DEBUG, logger="memoselect.diagnostics")
    return caplog
