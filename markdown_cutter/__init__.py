"""Markdown Cutter - truncate markup-bearing text without splitting resources."""

__version__ = "0.1.0"

from markdown_cutter.config import CutterSettings, get_settings
from markdown_cutter.core import (
    ConfigurationError,
    Dissection,
    LimitValidationError,
    MarkdownCutterError,
    Matcher,
    MatcherRegistry,
    Report,
    Resource,
)
from markdown_cutter.core.logging import configure_logging
from markdown_cutter.cutter import MarkdownCutter

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "CutterSettings",
    "get_settings",
    "configure_logging",
    # Errors
    "MarkdownCutterError",
    "ConfigurationError",
    "LimitValidationError",
    # Models
    "Resource",
    "Report",
    "Dissection",
    "Matcher",
    "MatcherRegistry",
    # Pipeline
    "MarkdownCutter",
]
