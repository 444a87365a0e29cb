"""Locate daily notes on disk, tolerating gaps (weekends, holidays, sick days).

Notes are plain files named ``YYYY-MM-DD.md`` directly under a series
directory. Lookups probe one day at a time, so the cost of a search is
bounded by the window size rather than by the size of the directory.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Protocol, runtime_checkable

from za.notes.types import (
    DateParseError,
    DirectoryNotFoundError,
    InvalidWindowError,
    NoteNotFoundError,
    NoteSeries,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
NOTE_SUFFIX = ".md"


@runtime_checkable
class NoteStore(Protocol):
    """Existence oracle the finder probes. Never reads note contents."""

    def dir_exists(self, directory: Path) -> bool: ...

    def note_exists(self, directory: Path, filename: str) -> bool: ...


class FilesystemStore:
    """NoteStore backed by the real filesystem."""

    def dir_exists(self, directory: Path) -> bool:
        return directory.is_dir()

    def note_exists(self, directory: Path, filename: str) -> bool:
        # Directories named like notes don't count
        return (directory / filename).is_file()


_DEFAULT_STORE = FilesystemStore()


def build_filename(day: date) -> str:
    """Return the note filename for ``day``: ``YYYY-MM-DD.md``."""
    return day.isoformat() + NOTE_SUFFIX


def parse_date_from_filename(path: str | Path) -> date:
    """Parse the date from the first 10 characters of a note's base name."""
    base = Path(path).name
    if len(base) < 10:
        raise DateParseError(f"filename too short: {path}")
    try:
        return datetime.strptime(base[:10], DATE_FORMAT).date()
    except ValueError as exc:
        raise DateParseError(f"invalid date format in filename {path}: {exc}") from exc


def _validate(series: NoteSeries | str, directory: Path, window_days: int, store: NoteStore) -> NoteSeries:
    series = NoteSeries.parse(series)
    if window_days <= 0:
        raise InvalidWindowError(f"search window must be positive, got {window_days}")
    if not store.dir_exists(directory):
        raise DirectoryNotFoundError(f"directory does not exist: {directory}")
    return series


def _probe(directory: Path, day: date, store: NoteStore) -> Path | None:
    filename = build_filename(day)
    exists = store.note_exists(directory, filename)
    logger.debug("Checked %s: %s", directory / filename, "found" if exists else "missing")
    return directory / filename if exists else None


def find_by_date(
    target: date,
    series: NoteSeries | str,
    directory: str | Path,
    window_days: int,
    store: NoteStore | None = None,
) -> Path:
    """Find the note for ``target``, falling back to earlier days.

    Probes ``target`` itself first, then ``target - 1`` back to
    ``target - window_days``, returning the first note that exists.
    The search stops early at ``date.min``.
    """
    store = store or _DEFAULT_STORE
    directory = Path(directory)
    series = _validate(series, directory, window_days, store)

    for offset in range(min(window_days, (target - date.min).days) + 1):
        found = _probe(directory, target - timedelta(days=offset), store)
        if found is not None:
            if offset:
                logger.debug("No %s note for %s, fell back %d day(s) to %s", series, target, offset, found)
            return found

    raise NoteNotFoundError(
        f"no {series} note found for {target.isoformat()} "
        f"or within {window_days} days before"
    )


def find_next(
    target: date,
    series: NoteSeries | str,
    directory: str | Path,
    window_days: int,
    store: NoteStore | None = None,
) -> Path:
    """Find the first note strictly after ``target``, within ``window_days``.

    The search stops early at ``date.max``.
    """
    store = store or _DEFAULT_STORE
    directory = Path(directory)
    series = _validate(series, directory, window_days, store)

    for offset in range(1, min(window_days, (date.max - target).days) + 1):
        found = _probe(directory, target + timedelta(days=offset), store)
        if found is not None:
            logger.debug("Next %s note after %s is %s", series, target, found)
            return found

    raise NoteNotFoundError(
        f"no {series} note found after {target.isoformat()} "
        f"within {window_days} days"
    )
