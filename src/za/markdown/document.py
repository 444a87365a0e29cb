"""A daily note loaded from disk: raw text and the links in its body."""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

import frontmatter

from za.markdown.links import RawLink, extract_links

logger = logging.getLogger(__name__)


class Document:
    """Markdown note. The raw text is kept verbatim so edits can be applied to it."""

    def __init__(self, text: str, path: Path | None = None) -> None:
        self.text = text
        self.path = path
        self.body_start = self._body_offset(text)

    @classmethod
    def load(cls, path: str | Path) -> Document:
        path = Path(path)
        return cls(path.read_text(encoding="utf-8"), path)

    @classmethod
    def parse(cls, text: str, path: str | Path | None = None) -> Document:
        return cls(text, Path(path) if path is not None else None)

    def _body_offset(self, text: str) -> int:
        """Character offset where the body starts, past any frontmatter block."""
        if not frontmatter.checks(text):
            return 0
        handler = frontmatter.detect_format(text, frontmatter.handlers)
        try:
            _, content = handler.split(text)
        except ValueError:
            logger.debug("Unterminated frontmatter in %s, scanning whole file", self.path or "<text>")
            return 0
        return len(text) - len(content)

    @cached_property
    def links(self) -> list[RawLink]:
        return extract_links(self.text, self.body_start)
