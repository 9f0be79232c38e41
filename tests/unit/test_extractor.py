"""Unit tests for markdown_cutter.core.extractor.

Tests cover:
1. match_occurrences - filler replacement, limits, overflow handling
2. analyze - matcher ordering, shared per-key counts, offset correction
3. Skipped matchers - missing pattern logs a warning
"""

from __future__ import annotations

import logging
import re

import pytest
from pydantic import ValidationError

from markdown_cutter.core.errors import ConfigurationError
from markdown_cutter.core.extractor import FILLER, analyze, match_occurrences
from markdown_cutter.core.matchers import IMAGE_MATCHER, LINK_MATCHER, Matcher, MatcherRegistry
from markdown_cutter.core.models import Resource
from tests.conftest import SAMPLE_TEXT

# =============================================================================
# match_occurrences
# =============================================================================


@pytest.mark.unit
class TestMatchOccurrences:
    """A single matcher pass over the current string."""

    def test_image_match(self) -> None:
        result = match_occurrences("tes![image](url)t[link](xx)", IMAGE_MATCHER, 2)
        assert result is not None
        assert result.string == "tes" + FILLER * 13 + "t[link](xx)"
        assert result.resources == [
            Resource(key="image", start_index=3, raw_content="![image](url)", raw_length=13)
        ]

    def test_link_match_records_display_length(self) -> None:
        result = match_occurrences("test[link](xx)", LINK_MATCHER, 2)
        assert result is not None
        assert result.string == "test__________"
        assert result.resources == [
            Resource(
                key="link",
                start_index=4,
                raw_content="[link](xx)",
                raw_length=10,
                display_length=4,
            )
        ]

    def test_custom_pattern(self) -> None:
        result = match_occurrences("foo[link](xx)", Matcher(key="foo", pattern="foo"), 2)
        assert result is not None
        assert result.string == "___[link](xx)"
        assert result.resources[0].start_index == 0
        assert result.resources[0].display_length is None

    def test_custom_display_length(self) -> None:
        matcher = Matcher(key="foo", pattern="foo", get_display_length=lambda c: 1)
        result = match_occurrences("foo[link](xx)", matcher, 1)
        assert result is not None
        assert result.resources == [
            Resource(key="foo", start_index=0, raw_content="foo", raw_length=3, display_length=1)
        ]

    def test_negative_display_length_raises(self) -> None:
        matcher = Matcher(key="z", pattern="z", get_display_length=lambda c: -1)
        with pytest.raises(ConfigurationError, match="'z': invalid display length -1"):
            match_occurrences("azb", matcher, 1)

    def test_overflow_removed(self) -> None:
        result = match_occurrences("foo-foo-foo", Matcher(key="foo", pattern="foo"), 1)
        assert result is not None
        assert result.string == "___--"
        assert len(result.resources) == 1
        assert result.overflowed == 2
        assert result.shifts == [(4, 3), (8, 3)]

    def test_overflow_handler(self) -> None:
        matcher = Matcher(key="foo", pattern="foo", on_overflow=lambda c: "1")
        result = match_occurrences("foofoo[link](xx)", matcher, 1)
        assert result is not None
        assert result.string == "___1[link](xx)"
        assert result.shifts == [(3, 2)]

    def test_same_length_overflow_has_no_shift(self) -> None:
        matcher = Matcher(key="foo", pattern="foo", on_overflow=str.upper)
        result = match_occurrences("foofoo", matcher, 1)
        assert result is not None
        assert result.string == "___FOO"
        assert result.overflowed == 1
        assert result.shifts == []

    def test_zero_limit_removes_everything(self) -> None:
        result = match_occurrences("a![x](1)b![y](2)", IMAGE_MATCHER, 0)
        assert result is not None
        assert result.string == "ab"
        assert result.resources == []

    def test_already_accepted_counts_toward_limit(self) -> None:
        result = match_occurrences("foofoo", Matcher(key="foo", pattern="foo"), 2, already_accepted=1)
        assert result is not None
        assert result.string == "___"
        assert len(result.resources) == 1

    def test_limit_above_match_count(self) -> None:
        result = match_occurrences("foofoo", Matcher(key="foo", pattern="foo"), 10)
        assert result is not None
        assert result.string == "______"
        assert [r.start_index for r in result.resources] == [0, 3]

    def test_empty_matches_ignored(self) -> None:
        result = match_occurrences("ab", Matcher(key="x", pattern=re.compile("x*")), 5)
        assert result is not None
        assert result.string == "ab"
        assert result.resources == []

    def test_missing_pattern_returns_none(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="markdown_cutter"):
            result = match_occurrences("foo", Matcher(key="empty"), 1)
        assert result is None
        assert "'empty' has no pattern" in caplog.text


# =============================================================================
# analyze
# =============================================================================


@pytest.mark.unit
class TestAnalyze:
    """Matchers run in registry order over the cumulative string."""

    def test_default_image_limit(self) -> None:
        report = analyze(SAMPLE_TEXT, MatcherRegistry(), {"text": 140, "image": 1, "link": 1})
        assert len(report.resources) == 1
        assert report.resources[0].raw_content == "![image.png](测试图片0)"
        assert report.string == FILLER * 19 + "超人会不会飞我不知道，你肯定不会飞🫁dsadsadsa你好"

    def test_raised_image_limit(self) -> None:
        report = analyze(SAMPLE_TEXT, MatcherRegistry(), {"image": 4})
        assert [r.raw_content[-2] for r in report.resources] == ["0", "1", "2", "3"]
        assert len(report.string) == len(SAMPLE_TEXT)

    def test_missing_limit_defaults_to_matcher_default(self) -> None:
        matcher = Matcher(key="foo", pattern="foo", limit_default=2)
        report = analyze("foofoofoo", MatcherRegistry([matcher]), {})
        assert len(report.resources) == 2
        assert report.string == "______"

    def test_unlimited_kind_accepts_one(self) -> None:
        report = analyze("foofoofoo", MatcherRegistry([Matcher(key="foo", pattern="foo")]), {})
        assert [r.start_index for r in report.resources] == [0]
        assert report.string == "___"

    def test_image_claimed_before_link(self) -> None:
        report = analyze("![a](1)[b](2)", MatcherRegistry(), {"image": 1, "link": 1})
        assert [(r.key, r.start_index) for r in report.resources] == [("image", 0), ("link", 7)]
        assert report.string == FILLER * 13

    def test_resources_in_discovery_order(self) -> None:
        report = analyze("[b](2)![a](1)", MatcherRegistry(), {"image": 1, "link": 1})
        assert [r.key for r in report.resources] == ["image", "link"]
        assert [r.start_index for r in report.resources] == [6, 0]

    def test_caller_matcher_claims_first(self) -> None:
        mention = Matcher(key="at", pattern=re.compile(r"\[@\w+\]\(/\w+\)"))
        report = analyze("[@bob](/bob)", MatcherRegistry([mention]), {"at": 1, "link": 1})
        assert [r.key for r in report.resources] == ["at"]

    def test_same_key_shares_count(self) -> None:
        custom_image = Matcher(key="image", pattern="<img>")
        report = analyze("<img>![a](b)", MatcherRegistry([custom_image]), {"image": 1})
        assert [r.raw_content for r in report.resources] == ["<img>"]
        assert report.string == "_____"

    def test_later_removal_shifts_earlier_resources(self) -> None:
        report = analyze("[l0](u)[l1](u)![i](p)", MatcherRegistry(), {"image": 1, "link": 1})
        image, link = report.resources
        assert (image.key, image.start_index) == ("image", 7)
        assert (link.key, link.start_index) == ("link", 0)
        for resource in report.resources:
            span = report.string[resource.start_index : resource.end_index]
            assert span == FILLER * resource.raw_length

    def test_skips_matcher_without_pattern(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = MatcherRegistry([Matcher(key="empty")])
        with caplog.at_level(logging.WARNING, logger="markdown_cutter"):
            report = analyze("![a](1)", registry, {"image": 1})
        assert len(report.resources) == 1
        assert "skipping" in caplog.text

    def test_report_is_immutable(self) -> None:
        report = analyze("abc", MatcherRegistry(), {})
        with pytest.raises(ValidationError):
            report.string = "x"  # type: ignore[misc]
