"""Budget accounting and segment reassembly.

The placeholder string is split at resource boundaries into alternating
text and resource segments: even positions are text, odd positions are
resource placeholders. Duplicate cut points are kept on purpose, since
they produce the empty text segments that hold that alternation when a
resource starts the string or two resources touch.

Resource spans are granted their raw length for free when computing how
far into the placeholder string to look (``max_end``); the walk then
charges each text segment its length and each resource its display
length, if it has one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from operator import attrgetter

from markdown_cutter.core.logging import preview
from markdown_cutter.core.matchers import MatcherRegistry
from markdown_cutter.core.models import DEFAULT_TEXT_LIMIT, TEXT_KEY, Report, Resource

logger = logging.getLogger(__name__)


def _identity(text: str) -> str:
    return text


def split_by_points(string: str, points: Sequence[int] | None) -> list[str]:
    """Split *string* at the sorted *points*.

    A leading 0 is added when missing. Duplicate points yield empty
    segments.

    Example:
        >>> split_by_points("12345678", [1, 3, 2, 4])
        ['1', '2', '3', '4']
    """
    if not points:
        return [string]
    ordered = sorted(points)
    if ordered[0] != 0:
        ordered.insert(0, 0)
    return [string[start:end] for start, end in zip(ordered, ordered[1:])]


def compute_cut_points(resources: Sequence[Resource], max_end: int) -> list[int]:
    """Cut points for *resources* (sorted by start), clipped to *max_end*.

    The result always starts with 0 and ends with *max_end*. A resource
    straddling *max_end* contributes only its start.
    """
    points = [0]
    for resource in resources:
        if resource.start_index < max_end:
            points.append(resource.start_index)
        if resource.end_index < max_end:
            points.append(resource.end_index)
    points.append(max_end)
    return points


def assemble(
    report: Report | None,
    limits: Mapping[str, int],
    registry: MatcherRegistry,
    text_parse: Callable[[str], str] | None = None,
    suffix: str = "",
) -> str:
    """Rebuild the text from *report* within the ``text`` budget.

    Args:
        report: Extraction report; None or an empty string yields "".
        limits: Effective limits mapping.
        registry: Registry used to look up each resource's renderer.
        text_parse: Transform applied to each emitted plain-text segment.
        suffix: Appended when the output was truncated.

    Returns:
        The assembled string.
    """
    if report is None or not report.string:
        return ""

    string = report.string
    text_parse = text_parse or _identity
    text_limit = limits.get(TEXT_KEY, DEFAULT_TEXT_LIMIT)
    logger.debug(
        "assemble %s with %d resources, text limit %d",
        preview(string),
        len(report.resources),
        text_limit,
    )

    if not report.resources:
        output = text_parse(string[:text_limit])
        if len(string) > text_limit:
            output += suffix
        return output

    resources = sorted(report.resources, key=attrgetter("start_index"))
    ignore_len = sum(r.raw_length for r in resources)
    max_end = text_limit + ignore_len

    points = compute_cut_points(resources, max_end)
    suffix_required = max_end < len(string)
    segments = split_by_points(string, points)
    logger.debug("points %s, segments %d", points, len(segments))

    parts: list[str] = []
    consumed = 0
    cursor = 0
    for position, segment in enumerate(segments):
        quota = text_limit - consumed
        if quota <= 0:
            continue

        if position % 2:
            resource = resources[cursor]
            cursor += 1
            matcher = registry.find(resource.key)
            available = min(len(segment), quota)
            if matcher is not None and matcher.render is not None:
                rendered = matcher.render(resource.raw_content, available)
            else:
                rendered = resource.raw_content
            if resource.display_length is not None:
                consumed += resource.display_length
                suffix_required = False
            parts.append(rendered)
            continue

        if len(segment) > quota:
            segment = segment[:quota]
            suffix_required = True
        consumed += len(segment)
        if segment:
            parts.append(text_parse(segment))

    output = "".join(parts)
    logger.debug("suffix required: %s", suffix_required)
    if suffix_required:
        output += suffix
    return output
