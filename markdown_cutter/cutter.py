"""The cutter pipeline: prepare, extract, assemble.

A ``MarkdownCutter`` holds fixed configuration (matchers, default limits,
suffix, hooks) and is safe to share between threads; every call builds its
own report and segment buffers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from markdown_cutter.config import CutterSettings, get_settings
from markdown_cutter.core import assembler, extractor
from markdown_cutter.core.errors import ConfigurationError
from markdown_cutter.core.matchers import Matcher, MatcherRegistry
from markdown_cutter.core.models import Dissection, Limits, Report, merge_limits

logger = logging.getLogger(__name__)

TextHook = Callable[[str], str]


class MarkdownCutter:
    """Truncate markdown-like text without splitting embedded resources.

    Args:
        prepare: Runs once on the raw input. A falsy result short-circuits
            the pipeline to "".
        text_parse: Runs on each emitted plain-text segment, never on
            rendered resources.
        suffix: Appended when truncation occurred. Defaults to the
            settings value.
        matches: Caller matchers, tried before the built-in ``image`` and
            ``link`` matchers.
        limits: Instance limits, overlaid on the settings defaults.
        settings: Settings to take defaults from. Defaults to
            ``get_settings()``.

    Input text must be a ``str``.

    Example:
        >>> cutter = MarkdownCutter(suffix="...")
        >>> cutter.cut("[link0](url)abc", {"text": 6})
        '[link0](url)a...'
    """

    def __init__(
        self,
        *,
        prepare: TextHook | None = None,
        text_parse: TextHook | None = None,
        suffix: str | None = None,
        matches: Iterable[Matcher | Mapping[str, Any]] = (),
        limits: Mapping[str, int] | None = None,
        settings: CutterSettings | None = None,
    ) -> None:
        for name, hook in (("prepare", prepare), ("text_parse", text_parse)):
            if hook is not None and not callable(hook):
                raise ConfigurationError(f"{name} must be callable")

        if settings is None:
            settings = get_settings()
        self.suffix = settings.suffix if suffix is None else suffix
        self.limits: Limits = merge_limits(settings.default_limits(), limits)
        self.registry = MatcherRegistry(matches)
        self._on_prepare = prepare
        self._on_text_parse = text_parse

    def __repr__(self) -> str:
        return f"MarkdownCutter(limits={self.limits!r}, suffix={self.suffix!r}, registry={self.registry!r})"

    @property
    def matches(self) -> tuple[Matcher, ...]:
        return tuple(self.registry)

    def effective_limits(self, overrides: Mapping[str, int] | None = None) -> Limits:
        """Instance limits with per-call *overrides* applied."""
        return merge_limits(self.limits, overrides)

    def find_in_matches(self, key: str) -> Matcher | None:
        return self.registry.find(key)

    def prepare(self, txt: str) -> str:
        if self._on_prepare is not None:
            return self._on_prepare(txt)
        return txt

    def text_parse(self, txt: str) -> str:
        if self._on_text_parse is not None:
            return self._on_text_parse(txt)
        return txt

    def analyze(self, text: str, limits: Mapping[str, int] | None = None) -> Report:
        """Extract resources from *text* (no prepare step)."""
        return extractor.analyze(text, self.registry, self.effective_limits(limits))

    def assemble(self, report: Report | None, limits: Mapping[str, int] | None = None) -> str:
        """Rebuild the cut text from an extraction report."""
        return assembler.assemble(
            report,
            self.effective_limits(limits),
            self.registry,
            text_parse=self.text_parse,
            suffix=self.suffix,
        )

    def dissect(self, text: str | None, limits: Mapping[str, int] | None = None) -> Dissection:
        """Run the full pipeline and return the report alongside the output.

        Args:
            text: Input text.
            limits: Per-call limit overrides.

        Returns:
            Dissection whose ``report`` is None when the input, or the
            prepared input, is empty.
        """
        if not text:
            return Dissection()
        text = self.prepare(text)
        if not text:
            logger.debug("prepare hook returned an empty value")
            return Dissection()
        effective = self.effective_limits(limits)
        report = extractor.analyze(text, self.registry, effective)
        content = assembler.assemble(
            report,
            effective,
            self.registry,
            text_parse=self.text_parse,
            suffix=self.suffix,
        )
        return Dissection(report=report, content=content)

    def cut(self, text: str | None, limits: Mapping[str, int] | None = None) -> str:
        """Cut *text* to the display budget and return only the output."""
        return self.dissect(text, limits).content
