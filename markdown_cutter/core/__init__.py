"""Core engine components for Markdown Cutter."""

from markdown_cutter.core.assembler import assemble, compute_cut_points, split_by_points
from markdown_cutter.core.errors import (
    ConfigurationError,
    LimitValidationError,
    MarkdownCutterError,
)
from markdown_cutter.core.extractor import FILLER, MatchResult, analyze, match_occurrences
from markdown_cutter.core.matchers import (
    BUILTIN_MATCHERS,
    IMAGE_MATCHER,
    LINK_MATCHER,
    TRUNCATION_MARK,
    Matcher,
    MatcherRegistry,
    register,
)
from markdown_cutter.core.models import (
    TEXT_KEY,
    Dissection,
    Limits,
    Report,
    Resource,
    merge_limits,
    validate_limits,
)

__all__ = [
    # Errors
    "MarkdownCutterError",
    "ConfigurationError",
    "LimitValidationError",
    # Models
    "Resource",
    "Report",
    "Dissection",
    "Limits",
    "TEXT_KEY",
    "merge_limits",
    "validate_limits",
    # Matchers
    "Matcher",
    "MatcherRegistry",
    "register",
    "BUILTIN_MATCHERS",
    "IMAGE_MATCHER",
    "LINK_MATCHER",
    "TRUNCATION_MARK",
    # Engine
    "FILLER",
    "MatchResult",
    "match_occurrences",
    "analyze",
    "split_by_points",
    "compute_cut_points",
    "assemble",
]
