"""Daily note series and the gap-tolerant note finder.

Layout:
    <journal dir>/
    ├── 2025-01-06.md
    ├── 2025-01-07.md
    └── 2025-01-10.md      # 01-08, 01-09 skipped
    <standup dir>/
    └── 2025-01-07.md
"""

from za.notes.finder import (
    DATE_FORMAT,
    FilesystemStore,
    NoteStore,
    build_filename,
    find_by_date,
    find_next,
    parse_date_from_filename,
)
from za.notes.types import (
    DateParseError,
    DirectoryNotFoundError,
    InvalidSeriesError,
    InvalidWindowError,
    NoteFinderError,
    NoteNotFoundError,
    NoteSeries,
)

__all__ = [
    "DATE_FORMAT",
    "DateParseError",
    "DirectoryNotFoundError",
    "FilesystemStore",
    "InvalidSeriesError",
    "InvalidWindowError",
    "NoteFinderError",
    "NoteNotFoundError",
    "NoteSeries",
    "NoteStore",
    "build_filename",
    "find_by_date",
    "find_next",
    "parse_date_from_filename",
]
