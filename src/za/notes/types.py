"""Note series and the errors raised while looking notes up on disk."""

from __future__ import annotations

from enum import Enum


class NoteFinderError(Exception):
    """Base class for note lookup failures."""


class InvalidSeriesError(NoteFinderError, ValueError):
    """An unrecognised note series was supplied."""


class InvalidWindowError(NoteFinderError, ValueError):
    """Search window must be a positive number of days."""


class DirectoryNotFoundError(NoteFinderError, FileNotFoundError):
    """The series root directory does not exist."""


class NoteNotFoundError(NoteFinderError, FileNotFoundError):
    """No note exists within the search window."""


class DateParseError(NoteFinderError, ValueError):
    """A note filename does not start with YYYY-MM-DD."""


class NoteSeries(str, Enum):
    """The two parallel daily-note collections."""

    JOURNAL = "journal"
    STANDUP = "standup"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: NoteSeries | str) -> NoteSeries:
        """Return the series for ``value`` or raise InvalidSeriesError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidSeriesError(f"invalid note type: {value}") from None

    @property
    def opposite(self) -> NoteSeries:
        if self is NoteSeries.JOURNAL:
            return NoteSeries.STANDUP
        return NoteSeries.JOURNAL
