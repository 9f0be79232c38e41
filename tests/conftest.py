"""Pytest fixtures for Markdown Cutter tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from markdown_cutter.config import CutterSettings, override_settings, reset_settings
from markdown_cutter.core.matchers import Matcher
from markdown_cutter.cutter import MarkdownCutter
from markdown_cutter.presets import mention_matcher, normalize_markup

# Four image references interleaved with plain text
SAMPLE_TEXT = (
    "![image.png](测试图片0)超人会不会飞我不知道，你肯定不会飞🫁"
    "![image.png](测试图片1)dsadsadsa![image.png](测试图片2)你![image.png](测试图片3)好"
)

EMOTICON = "![]([object Object]#height=18&width=18)"


def two_links() -> str:
    """``[link0](link_url:0)abc[link1](link_url:1)``"""
    return "abc".join(f"[link{i}](link_url:{i})" for i in range(2))


# ---------------------------------------------------------------------------
# Settings isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def test_settings() -> Generator[CutterSettings, None, None]:
    """Provide default settings that ignore the environment and .env files."""
    settings = CutterSettings(_env_file=None)
    override_settings(settings)
    yield settings
    reset_settings()


# ---------------------------------------------------------------------------
# Cutters
# ---------------------------------------------------------------------------


@pytest.fixture
def default_cutter() -> MarkdownCutter:
    """Cutter with no options: text=140, image=1, link=1, empty suffix."""
    return MarkdownCutter()


@pytest.fixture
def emoticon_matcher() -> Matcher:
    return Matcher(
        key="emoticon",
        pattern=EMOTICON,
        render=lambda content, available: "[表情]",
    )


@pytest.fixture
def cutter(emoticon_matcher: Matcher) -> MarkdownCutter:
    """Cutter with custom matchers, a prepare hook and a '...' suffix."""
    return MarkdownCutter(
        matches=[emoticon_matcher, mention_matcher()],
        limits={"text": 140, "link": 20},
        prepare=normalize_markup,
        suffix="...",
    )
