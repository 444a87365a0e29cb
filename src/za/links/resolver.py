"""Resolve classified links to the notes they should point at.

One Resolver serves one document: it is built with the note's own date and
series, and every link in that note is resolved relative to them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from za.links.classifier import ClassifiedLink, LinkKind
from za.markdown.links import date_from_destination
from za.notes.finder import find_by_date, find_next, parse_date_from_filename
from za.notes.types import DateParseError, NoteFinderError, NoteNotFoundError, NoteSeries

if TYPE_CHECKING:
    from za.config import ZaConfig
    from za.markdown.links import RawLink
    from za.notes.finder import NoteStore

logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """A fixable link could not be resolved to an existing note."""


@dataclass(frozen=True)
class ResolvedLink:
    """Outcome of resolving one link. Holds either a resolved note or an error."""

    classified: ClassifiedLink
    resolved_path: Path | None = None
    resolved_date: date | None = None
    error: ResolutionError | None = None
    needs_update: bool = False
    suggested_destination: str = ""

    @property
    def link(self) -> RawLink:
        return self.classified.link


class Resolver:
    """Finds the actual target of temporal and cross-reference links."""

    def __init__(
        self,
        config: ZaConfig,
        current_date: date,
        current_series: NoteSeries | str,
        store: NoteStore | None = None,
    ) -> None:
        self.config = config
        self.current_date = current_date
        self.current_series = NoteSeries.parse(current_series)
        self._store = store
        self._handlers: dict[LinkKind, Callable[[NoteSeries], Path]] = {
            LinkKind.TEMPORAL_PREVIOUS: self._find_previous,
            LinkKind.TEMPORAL_NEXT: self._find_next,
            LinkKind.CROSS_REFERENCE: self._find_cross_reference,
        }
        self._stage = {
            LinkKind.TEMPORAL_PREVIOUS: "previous",
            LinkKind.TEMPORAL_NEXT: "next",
            LinkKind.CROSS_REFERENCE: "cross-reference",
        }

    # ── Lookups per kind ─────────────────────────────────────

    def _find_previous(self, series: NoteSeries) -> Path:
        if self.current_date == date.min:
            raise NoteNotFoundError(f"no {series} note can precede {self.current_date.isoformat()}")
        return find_by_date(
            self.current_date - timedelta(days=1),
            series,
            self.config.series_dir(series),
            self.config.search_window_days,
            self._store,
        )

    def _find_next(self, series: NoteSeries) -> Path:
        return find_next(
            self.current_date,
            series,
            self.config.series_dir(series),
            self.config.search_window_days,
            self._store,
        )

    def _find_cross_reference(self, series: NoteSeries) -> Path:
        # Same day, other series: never offset in time
        return find_by_date(
            self.current_date,
            series,
            self.config.series_dir(series),
            self.config.search_window_days,
            self._store,
        )

    def target_series(self, classified: ClassifiedLink) -> NoteSeries:
        if classified.target_series is not None:
            return classified.target_series
        if classified.kind is LinkKind.CROSS_REFERENCE:
            return self.current_series.opposite
        return self.current_series

    def format_destination(self, resolved: date, series: NoteSeries) -> str:
        """Canonical destination: bare date in-series, ``../<series>/<date>`` across."""
        day = resolved.isoformat()
        if series is self.current_series:
            return day
        return f"../{series.value}/{day}"

    # ── Resolution ───────────────────────────────────────────

    def resolve(self, classified: ClassifiedLink) -> ResolvedLink:
        if not classified.needs_fixing:
            return ResolvedLink(classified)

        handler = self._handlers.get(classified.kind)
        if handler is None:
            raise ValueError(f"no resolver for link kind: {classified.kind}")

        series = self.target_series(classified)
        try:
            path = handler(series)
        except NoteFinderError as exc:
            return self._failed(classified, f"failed to find {self._stage[classified.kind]} note: {exc}", exc)

        try:
            found = parse_date_from_filename(path)
        except DateParseError as exc:
            return self._failed(classified, f"failed to parse date from path: {exc}", exc)

        current = date_from_destination(classified.link.destination)
        if current == found.isoformat():
            return ResolvedLink(classified, resolved_path=path, resolved_date=found)

        suggested = self.format_destination(found, series)
        logger.debug(
            "Line %d: [%s](%s) -> %s", classified.link.line, classified.link.text,
            classified.link.destination, suggested,
        )
        return ResolvedLink(
            classified,
            resolved_path=path,
            resolved_date=found,
            needs_update=True,
            suggested_destination=suggested,
        )

    def _failed(self, classified: ClassifiedLink, message: str, cause: Exception) -> ResolvedLink:
        error = ResolutionError(message)
        error.__cause__ = cause
        logger.warning("Line %d: [%s] %s", classified.link.line, classified.link.text, message)
        return ResolvedLink(classified, error=error)

    def resolve_all(self, classified: Iterable[ClassifiedLink]) -> list[ResolvedLink]:
        return [self.resolve(c) for c in classified]


def filter_needs_update(resolved: Iterable[ResolvedLink]) -> list[ResolvedLink]:
    return [r for r in resolved if r.needs_update]
