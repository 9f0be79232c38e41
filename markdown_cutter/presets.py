"""Ready-made hooks and matchers for common chat/comment markup.

None of these are installed by default; pass them to ``MarkdownCutter``::

    cutter = MarkdownCutter(
        prepare=normalize_markup,
        text_parse=escape_markup,
        matches=[mention_matcher()],
        suffix="...",
    )
"""

from __future__ import annotations

import re

from markdown_cutter.core.matchers import Matcher

# ---------------------------------------------------------------------------
# At-mentions: [@name(user.id)](/user.id)
# ---------------------------------------------------------------------------

MENTION_PATTERN = re.compile(r"\[@([^(]{1,100})\(([\w.-]{1,100})\)\]\(/[\w.-]{1,100}\)")


def _mention_text(content: str) -> str:
    match = MENTION_PATTERN.search(content)
    return f"@{match.group(1)}" if match else content


def mention_matcher(key: str = "at", limit_default: int = 20) -> Matcher:
    """Matcher rendering ``[@name(id)](/id)`` as ``@name``."""
    return Matcher(
        key=key,
        pattern=MENTION_PATTERN,
        limit_default=limit_default,
        get_display_length=lambda content: len(_mention_text(content)),
        render=lambda content, available: _mention_text(content),
    )


# ---------------------------------------------------------------------------
# Prepare: strip markup noise
# ---------------------------------------------------------------------------

_BR_RE = re.compile(r"<br\s/>")
_ANCHOR_RE = re.compile(r'<a\sname="\S+"></a>')
_HEADING_RE = re.compile(r"#+\s")
_BLANK_RUN_RE = re.compile(r"\n\n[\s\n]+")


def normalize_markup(text: str) -> str:
    """Turn breaks and anchors into newlines, drop heading marks and
    zero-width spaces, collapse runs of blank lines, and trim."""
    text = _BR_RE.sub("\n", text)
    text = _ANCHOR_RE.sub("\n", text)
    text = _HEADING_RE.sub("", text)
    text = text.replace("\u200b", "")
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


# ---------------------------------------------------------------------------
# Text parse: escape markup characters left in plain text
# ---------------------------------------------------------------------------

_ESCAPE_RE = re.compile(r"[!*\[\]<>`]")


def escape_markup(text: str) -> str:
    """Encode markup characters as hexadecimal character references."""
    return _ESCAPE_RE.sub(lambda m: f"&#x{ord(m.group(0)):X};", text)
