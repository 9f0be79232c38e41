"""Matcher definitions and the ordered matcher registry.

A matcher describes one kind of embedded resource: the pattern that finds
it and the optional capabilities used while cutting:

- ``get_display_length(raw)``: visible length counted against the text
  budget. Without it the resource is free.
- ``render(raw, available)``: output for the resource given the display
  length still available. Without it the raw match is emitted verbatim.
- ``on_overflow(raw)``: replacement for occurrences past the kind's limit.
  Without it those occurrences are removed.

The built-in ``image`` and ``link`` matchers are shared, immutable, and
always appended after caller matchers.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from markdown_cutter.core.errors import ConfigurationError
from markdown_cutter.core.models import DEFAULT_KIND_LIMIT

TRUNCATION_MARK = "..."
"""Appended to a link label that was shortened to fit the budget."""

IMAGE_PATTERN = re.compile(r"!\[.*?\]\(.*?\)")
LINK_PATTERN = re.compile(r"\[.*?\]\(.*?\)")
_LINK_LABEL_RE = re.compile(r"\[(.*?)\]\(.*?\)")


@dataclass(frozen=True)
class Matcher:
    """Capability record for one resource kind.

    ``pattern`` may be a compiled pattern or a string. A string matches
    itself literally; pass ``re.compile(...)`` for a regular expression. A
    matcher without a pattern is kept but skipped at extraction time.
    """

    key: str
    pattern: re.Pattern[str] | str | None = None
    limit_default: int = DEFAULT_KIND_LIMIT
    get_display_length: Callable[[str], int] | None = None
    render: Callable[[str, int], str] | None = None
    on_overflow: Callable[[str], str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ConfigurationError(f"Matcher key must be a non-empty string, got {self.key!r}")
        if self.limit_default < 0:
            raise ConfigurationError(f"Matcher {self.key!r}: limit_default must be >= 0")
        if self.pattern == "":
            object.__setattr__(self, "pattern", None)
        elif isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(re.escape(self.pattern)))
        for name in ("get_display_length", "render", "on_overflow"):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise ConfigurationError(f"Matcher {self.key!r}: {name} must be callable")

    @classmethod
    def coerce(cls, value: Matcher | Mapping[str, Any]) -> Matcher:
        """Accept a ``Matcher`` or a mapping of its fields."""
        if isinstance(value, Matcher):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(**value)
            except TypeError as e:
                raise ConfigurationError(f"Invalid matcher definition: {e}") from e
        raise ConfigurationError(f"Expected a Matcher or mapping, got {type(value).__name__}")


# ---------------------------------------------------------------------------
# Built-in matchers
# ---------------------------------------------------------------------------


def link_display_length(content: str) -> int:
    """Length of the bracketed label of a ``[label](url)`` link."""
    match = _LINK_LABEL_RE.search(content)
    return len(match.group(1)) if match else 0


def render_link(content: str, available: int) -> str:
    """Re-emit a link with its label cut to *available* characters."""
    match = _LINK_LABEL_RE.search(content)
    if match is None:
        return content
    label = match.group(1)
    if len(label) <= available:
        return content
    shortened = label[: max(available, 0)] + TRUNCATION_MARK
    return content[: match.start(1)] + shortened + content[match.end(1) :]


IMAGE_MATCHER = Matcher(key="image", pattern=IMAGE_PATTERN)

LINK_MATCHER = Matcher(
    key="link",
    pattern=LINK_PATTERN,
    get_display_length=link_display_length,
    render=render_link,
)

BUILTIN_MATCHERS: tuple[Matcher, ...] = (IMAGE_MATCHER, LINK_MATCHER)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def register(matchers: Iterable[Matcher | Mapping[str, Any]] = ()) -> tuple[Matcher, ...]:
    """Caller matchers first, then the built-ins. Earlier matchers claim text first."""
    return (*(Matcher.coerce(m) for m in matchers), *BUILTIN_MATCHERS)


class MatcherRegistry:
    """Ordered, read-only list of matchers with lookup by key."""

    def __init__(self, matchers: Iterable[Matcher | Mapping[str, Any]] = ()) -> None:
        self._matchers = register(matchers)

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self._matchers)

    def __len__(self) -> int:
        return len(self._matchers)

    def __repr__(self) -> str:
        return f"MatcherRegistry({[m.key for m in self._matchers]!r})"

    @property
    def keys(self) -> list[str]:
        return [m.key for m in self._matchers]

    def find(self, key: str) -> Matcher | None:
        """First matcher registered under *key*, or None."""
        for matcher in self._matchers:
            if matcher.key == key:
                return matcher
        return None
