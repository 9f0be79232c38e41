"""Resource extraction.

Each matcher runs in registry order against the output of the previous
one. Accepted occurrences are replaced by filler of the same length so
offsets recorded for them stay valid; occurrences past the kind's limit
are handed to ``on_overflow`` or dropped.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError

from markdown_cutter.core.errors import ConfigurationError
from markdown_cutter.core.logging import preview
from markdown_cutter.core.matchers import Matcher
from markdown_cutter.core.models import Report, Resource, limit_for

logger = logging.getLogger(__name__)

FILLER = "_"
"""Sentinel character written over accepted resource spans."""


@dataclass
class MatchResult:
    """Outcome of one matcher pass."""

    string: str
    resources: list[Resource] = field(default_factory=list)
    overflowed: int = 0
    # (offset in the pass input, characters removed); negative when the
    # overflow replacement is longer than the match
    shifts: list[tuple[int, int]] = field(default_factory=list)


def match_occurrences(
    text: str,
    matcher: Matcher,
    limit: int,
    already_accepted: int = 0,
) -> MatchResult | None:
    """Run one matcher over *text*.

    Args:
        text: Current placeholder-bearing string.
        matcher: The matcher to apply.
        limit: Maximum accepted occurrences for the matcher's key.
        already_accepted: Occurrences of the same key accepted by earlier
            passes.

    Returns:
        MatchResult with the rewritten string, or None if the matcher has
        no pattern.
    """
    pattern = matcher.pattern
    if not isinstance(pattern, re.Pattern):
        logger.warning("Matcher %r has no pattern; skipping", matcher.key)
        return None

    result = MatchResult(string=text)

    def _replace(match: re.Match[str]) -> str:
        content = match.group(0)
        if not content:
            return content
        if already_accepted + len(result.resources) < limit:
            display_length = None
            if matcher.get_display_length is not None:
                display_length = matcher.get_display_length(content)
            try:
                resource = Resource(
                    key=matcher.key,
                    start_index=match.start(),
                    raw_content=content,
                    raw_length=len(content),
                    display_length=display_length,
                )
            except PydanticValidationError as e:
                raise ConfigurationError(
                    f"Matcher {matcher.key!r}: invalid display length {display_length!r}"
                ) from e
            result.resources.append(resource)
            return FILLER * len(content)

        result.overflowed += 1
        replacement = matcher.on_overflow(content) if matcher.on_overflow is not None else ""
        if len(replacement) != len(content):
            result.shifts.append((match.start(), len(content) - len(replacement)))
        return replacement

    result.string = pattern.sub(_replace, text)
    return result


def _apply_shifts(resource: Resource, shifts: list[tuple[int, int]]) -> Resource:
    delta = sum(removed for offset, removed in shifts if offset < resource.start_index)
    if not delta:
        return resource
    return resource.model_copy(update={"start_index": resource.start_index - delta})


def analyze(text: str, matchers: Iterable[Matcher], limits: Mapping[str, int]) -> Report:
    """Extract resources from *text* with every matcher in order.

    Args:
        text: Input string (already prepared).
        matchers: Matchers in registry order.
        limits: Effective limits mapping.

    Returns:
        Report with the placeholder string and resources in discovery order.
    """
    counts: Counter[str] = Counter()
    resources: list[Resource] = []
    string = text

    for matcher in matchers:
        limit = limit_for(limits, matcher.key, matcher.limit_default)
        result = match_occurrences(string, matcher, limit, counts[matcher.key])
        if result is None:
            continue
        if result.shifts:
            # Later removals move resources found by earlier passes
            resources = [_apply_shifts(r, result.shifts) for r in resources]
        string = result.string
        counts[matcher.key] += len(result.resources)
        resources.extend(result.resources)
        logger.debug(
            "matcher %r accepted %d, overflowed %d",
            matcher.key,
            len(result.resources),
            result.overflowed,
        )

    logger.debug("analyze %s -> %d resources", preview(text), len(resources))
    return Report(string=string, resources=tuple(resources))
