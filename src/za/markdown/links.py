"""Inline markdown links and the destination-shape checks run on them."""

from __future__ import annotations

import re
from dataclasses import dataclass

from za.notes.types import NoteSeries

# [text](destination "optional title"), not preceded by "!" (images)
LINK_RE = re.compile(
    r"(?<!!)\[(?P<text>[^\[\]]*)\]"
    r"\(\s*(?P<dest><[^<>\n]*>|[^\s()<>]+)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
)
CODE_SPAN_RE = re.compile(r"(`+)(?:(?!\1).)+?\1")
FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
EMPHASIS_RE = re.compile(r"[*_`]+")

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
BARE_DATE_DEST_RE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:\.md)?$")
# ../<dir>/YYYY-MM-DD[.md], or a leading <series>/YYYY-MM-DD[.md]
PATH_DATE_DEST_RE = re.compile(
    r"(?:\.\./[^/]+|^(?:journal|standup))/\d{4}-\d{2}-\d{2}(?:\.md)?$", re.IGNORECASE
)
FINAL_DATE_RE = re.compile(r"(?:^|/)(\d{4}-\d{2}-\d{2})(?:\.md)?$")

URI_SCHEME_MARKER = "://"


@dataclass(frozen=True)
class RawLink:
    """A markdown link as written in the source document."""

    text: str
    destination: str
    line: int = 0
    source: str = ""  # exact "[...](...)" snippet, empty for hand-built links

    @property
    def markdown(self) -> str:
        return self.source or f"[{self.text}]({self.destination})"

    def with_destination(self, destination: str) -> str:
        """Return the markdown snippet with its destination swapped out."""
        if not self.source:
            return f"[{self.text}]({destination})"
        head, sep, tail = self.source.partition("](")
        return head + sep + tail.replace(self.destination, destination, 1)


# ── Destination checks ────────────────────────────────────────


def is_external(destination: str) -> bool:
    return URI_SCHEME_MARKER in destination


def is_date_link(destination: str) -> bool:
    """True for ``YYYY-MM-DD[.md]``, ``../<dir>/YYYY-MM-DD[.md]`` or ``<series>/YYYY-MM-DD[.md]``."""
    return bool(BARE_DATE_DEST_RE.match(destination) or PATH_DATE_DEST_RE.search(destination))


def date_from_destination(destination: str) -> str:
    """Return the ``YYYY-MM-DD`` a destination points at, or ``""``.

    The final path component wins; a date-like directory earlier in the
    path is only used when the last component holds no date.
    """
    m = FINAL_DATE_RE.search(destination)
    if m:
        return m.group(1)
    m = DATE_RE.search(destination)
    return m.group(0) if m else ""


def series_from_destination(destination: str) -> NoteSeries | None:
    dest = destination.lower()
    for series in NoteSeries:
        if f"/{series.value}/" in dest or dest.startswith(f"{series.value}/"):
            return series
    return None


# ── Extraction ────────────────────────────────────────────────


def _blank(m: re.Match) -> str:
    return " " * len(m.group(0))


def extract_links(text: str, body_start: int = 0) -> list[RawLink]:
    """Extract inline links from markdown text, in document order.

    Scanning begins on the line holding character offset ``body_start``
    (the end of any frontmatter). Links inside fenced code blocks and code
    spans are ignored. Links are assumed not to span lines.
    """
    links: list[RawLink] = []
    lines = text.splitlines()
    fence: str | None = None

    for idx in range(text.count("\n", 0, body_start), len(lines)):
        line = lines[idx]
        m = FENCE_RE.match(line)
        if fence is not None:
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
                fence = None
            continue
        if m:
            fence = m.group(1)
            continue

        # Blank out code spans so offsets in the original line stay valid
        scan = CODE_SPAN_RE.sub(_blank, line)
        for lm in LINK_RE.finditer(scan):
            dest = lm.group("dest")
            if dest.startswith("<") and dest.endswith(">"):
                dest = dest[1:-1]
            links.append(
                RawLink(
                    text=EMPHASIS_RE.sub("", lm.group("text")).strip(),
                    destination=dest,
                    line=idx + 1,
                    source=line[lm.start():lm.end()],
                )
            )
    return links
