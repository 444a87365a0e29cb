"""Classify markdown links by the role they play in a daily note.

Rules are tried in order and the first match wins:

1. ``://`` in the destination          -> external
2. destination is not a date link      -> other
3. text equals a "previous" synonym    -> temporal_previous
4. text equals a "next" synonym        -> temporal_next
5. text contains a cross-ref marker    -> cross_reference
6. anything else                       -> other

Synonyms are matched exactly (case-insensitive) and come from config;
cross-reference markers are a fixed vocabulary matched as substrings.
Substring matching must stay after the exact synonym checks.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from za.markdown.links import RawLink, is_date_link, is_external, series_from_destination
from za.notes.types import NoteSeries

if TYPE_CHECKING:
    from za.config import ZaConfig

CROSS_REFERENCE_MARKERS = ("standup", "journal", "daily", "daily log")


class LinkKind(str, Enum):
    TEMPORAL_PREVIOUS = "temporal_previous"
    TEMPORAL_NEXT = "temporal_next"
    CROSS_REFERENCE = "cross_reference"
    EXTERNAL = "external"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


FIXABLE_KINDS = frozenset(
    {LinkKind.TEMPORAL_PREVIOUS, LinkKind.TEMPORAL_NEXT, LinkKind.CROSS_REFERENCE}
)


@dataclass(frozen=True)
class ClassifiedLink:
    """A RawLink with its kind and, when the destination says so, target series."""

    link: RawLink
    kind: LinkKind
    target_series: NoteSeries | None = None

    @property
    def needs_fixing(self) -> bool:
        """Fixable kind and a date-shaped destination."""
        return self.kind in FIXABLE_KINDS and is_date_link(self.link.destination)

    @property
    def is_next_link(self) -> bool:
        return self.kind is LinkKind.TEMPORAL_NEXT


def _normalize(text: str) -> str:
    return text.strip().lower()


class Classifier:
    """Assigns a LinkKind to each link using the configured synonym lists."""

    def __init__(
        self,
        journal_previous: Iterable[str] = (),
        journal_next: Iterable[str] = (),
        standup_previous: Iterable[str] = (),
        standup_next: Iterable[str] = (),
    ) -> None:
        self._previous = {_normalize(t) for t in (*journal_previous, *standup_previous)}
        self._next = {_normalize(t) for t in (*journal_next, *standup_next)}

    @classmethod
    def from_config(cls, config: ZaConfig) -> Classifier:
        return cls(
            journal_previous=config.journal.link_previous_titles,
            journal_next=config.journal.link_next_titles,
            standup_previous=config.standup.link_previous_titles,
            standup_next=config.standup.link_next_titles,
        )

    def classify(self, link: RawLink) -> ClassifiedLink:
        dest = link.destination
        if is_external(dest):
            return ClassifiedLink(link, LinkKind.EXTERNAL)
        if not is_date_link(dest):
            return ClassifiedLink(link, LinkKind.OTHER)

        text = _normalize(link.text)
        if text in self._previous:
            return ClassifiedLink(link, LinkKind.TEMPORAL_PREVIOUS, series_from_destination(dest))
        if text in self._next:
            return ClassifiedLink(link, LinkKind.TEMPORAL_NEXT, series_from_destination(dest))
        if any(marker in text for marker in CROSS_REFERENCE_MARKERS):
            return ClassifiedLink(link, LinkKind.CROSS_REFERENCE, series_from_destination(dest))
        return ClassifiedLink(link, LinkKind.OTHER)

    def classify_all(self, links: Iterable[RawLink]) -> list[ClassifiedLink]:
        return [self.classify(link) for link in links]


def filter_by_kind(classified: Iterable[ClassifiedLink], kind: LinkKind) -> list[ClassifiedLink]:
    return [c for c in classified if c.kind is kind]
