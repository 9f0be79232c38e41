"""Data models for Markdown Cutter."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from markdown_cutter.core.errors import LimitValidationError

TEXT_KEY = "text"
"""Reserved limits key holding the display-length budget."""

DEFAULT_TEXT_LIMIT = 140
"""Display-length budget used when a limits mapping has no ``text`` entry."""

DEFAULT_KIND_LIMIT = 1
"""Occurrence limit for a resource kind that has no limits entry."""

Limits = dict[str, int]

_LIMITS_ADAPTER: TypeAdapter[dict[str, int]] = TypeAdapter(dict[str, NonNegativeInt])


class Resource(BaseModel):
    """A matched span pulled out of the text during extraction."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Kind of the matcher that produced it")
    start_index: int = Field(..., ge=0, description="Offset in the placeholder string")
    raw_content: str = Field(..., description="Matched text, verbatim")
    raw_length: int = Field(..., ge=0, description="Length of the matched text")
    display_length: int | None = Field(
        default=None,
        ge=0,
        description="Visible length counted against the text budget; None means free",
    )

    @property
    def end_index(self) -> int:
        return self.start_index + self.raw_length


class Report(BaseModel):
    """Placeholder-bearing text plus the resources extracted from it."""

    model_config = ConfigDict(frozen=True)

    string: str
    resources: tuple[Resource, ...] = ()


class Dissection(BaseModel):
    """Result of a full pipeline run: the report (if any) and the output."""

    model_config = ConfigDict(frozen=True)

    report: Report | None = None
    content: str = ""


def validate_limits(limits: Mapping[str, int] | None) -> Limits:
    """Validate a limits mapping and return a plain dict copy.

    Raises:
        LimitValidationError: If a key is not a string or a value is not a
            non-negative integer.
    """
    if not limits:
        return {}
    try:
        return dict(_LIMITS_ADAPTER.validate_python(dict(limits), strict=True))
    except PydanticValidationError as e:
        raise LimitValidationError(f"Invalid limits: {e}", limits=limits) from e


def merge_limits(base: Mapping[str, int], overrides: Mapping[str, int] | None = None) -> Limits:
    """Overlay *overrides* onto *base*; keys absent from overrides keep base values."""
    merged = dict(base)
    merged.update(validate_limits(overrides))
    return merged


def limit_for(limits: Mapping[str, int], key: str, default: int = DEFAULT_KIND_LIMIT) -> int:
    """Limit for *key*, falling back to *default* when the mapping has no entry."""
    return limits.get(key, default)
