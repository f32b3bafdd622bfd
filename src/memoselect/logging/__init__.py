"""Logging utilities for memoselect."""

from memoselect.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
