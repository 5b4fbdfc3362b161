"""Logging formatters, filters and handler setup."""

from fashionhub_e2e.logging.formatters import LevelRoutingFilter, MarkerFormatter
from fashionhub_e2e.logging.handlers import configure_logging, resolve_level

__all__ = ["LevelRoutingFilter", "MarkerFormatter", "configure_logging", "resolve_level"]
