"""Tests for the gap-tolerant note finder."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import pytest

from za.notes import (
    DateParseError,
    DirectoryNotFoundError,
    FilesystemStore,
    InvalidSeriesError,
    InvalidWindowError,
    NoteNotFoundError,
    NoteSeries,
    NoteStore,
    build_filename,
    find_by_date,
    find_next,
    parse_date_from_filename,
)

from conftest import DateSetStore, write_notes

NOTES = Path("/notes/journal")


class TestNoteSeries:
    @pytest.mark.parametrize("value", ["journal", "standup", NoteSeries.JOURNAL])
    def test_parse_valid(self, value):
        assert NoteSeries.parse(value).value == str(value)

    @pytest.mark.parametrize("value", ["invalid", "", "Journal"])
    def test_parse_invalid(self, value):
        with pytest.raises(InvalidSeriesError):
            NoteSeries.parse(value)

    def test_opposite(self):
        assert NoteSeries.JOURNAL.opposite is NoteSeries.STANDUP
        assert NoteSeries.STANDUP.opposite is NoteSeries.JOURNAL

    def test_formats_as_value(self):
        assert f"{NoteSeries.STANDUP}" == "standup"


class TestFilenames:
    def test_build_filename(self):
        assert build_filename(date(2025, 1, 6)) == "2025-01-06.md"
        assert build_filename(date(1, 1, 5)) == "0001-01-05.md"

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("2025-01-06.md", date(2025, 1, 6)),
            ("/path/to/2025-01-07.md", date(2025, 1, 7)),
            (Path("standup") / "2024-12-31.md", date(2024, 12, 31)),
        ],
    )
    def test_parse_date(self, filename, expected):
        assert parse_date_from_filename(filename) == expected

    @pytest.mark.parametrize("filename", ["invalid-date.md", "short.md", "2025-13-01.md", ""])
    def test_parse_date_invalid(self, filename):
        with pytest.raises(DateParseError):
            parse_date_from_filename(filename)

    def test_round_trip(self):
        for day in [date(2025, 1, 1), date(2024, 2, 29), date(1999, 12, 31)]:
            path = Path("/notes/standup") / build_filename(day)
            assert build_filename(parse_date_from_filename(path)) == f"{day:%Y-%m-%d}.md"


class TestFindByDateOnDisk:
    def test_exact(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-06", "2025-01-07", "2025-01-10"])
        assert find_by_date(date(2025, 1, 6), "journal", tmp_path, 30) == tmp_path / "2025-01-06.md"

    def test_fallback(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-06", "2025-01-07", "2025-01-08", "2025-01-10"])
        assert find_by_date(date(2025, 1, 9), "journal", tmp_path, 30) == tmp_path / "2025-01-08.md"

    def test_multi_day_gap(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-06", "2025-01-20"])
        found = find_by_date(date(2025, 1, 15), NoteSeries.JOURNAL, tmp_path, 30)
        assert found == tmp_path / "2025-01-06.md"

    def test_not_found(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-06"])
        with pytest.raises(NoteNotFoundError, match="within 30 days before"):
            find_by_date(date(2025, 3, 1), "journal", tmp_path, 30)

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(DirectoryNotFoundError):
            find_by_date(date(2025, 1, 6), "journal", tmp_path / "nope", 30)

    def test_invalid_series(self, tmp_path: Path):
        with pytest.raises(InvalidSeriesError):
            find_by_date(date(2025, 1, 6), "invalid", tmp_path, 30)

    def test_invalid_window(self, tmp_path: Path):
        with pytest.raises(InvalidWindowError):
            find_by_date(date(2025, 1, 6), "journal", tmp_path, 0)

    def test_directory_named_like_note_is_skipped(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-05"])
        (tmp_path / "2025-01-06.md").mkdir()
        assert find_by_date(date(2025, 1, 6), "journal", tmp_path, 30) == tmp_path / "2025-01-05.md"

    def test_idempotent(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-02"])
        first = find_by_date(date(2025, 1, 9), "standup", tmp_path, 30)
        assert find_by_date(date(2025, 1, 9), "standup", tmp_path, 30) == first


class TestFindNextOnDisk:
    @pytest.mark.parametrize(
        "start, expected",
        [
            (date(2025, 1, 6), "2025-01-07"),
            (date(2025, 1, 7), "2025-01-10"),
            (date(2025, 1, 10), "2025-01-13"),
        ],
    )
    def test_next(self, tmp_path: Path, start, expected):
        write_notes(tmp_path, ["2025-01-06", "2025-01-07", "2025-01-10", "2025-01-13"])
        assert find_next(start, "journal", tmp_path, 30) == tmp_path / f"{expected}.md"

    def test_no_next(self, tmp_path: Path):
        write_notes(tmp_path, ["2025-01-13"])
        with pytest.raises(NoteNotFoundError, match="after 2025-01-13 within 30 days"):
            find_next(date(2025, 1, 13), "journal", tmp_path, 30)

    def test_invalid_inputs(self, tmp_path: Path):
        with pytest.raises(InvalidSeriesError):
            find_next(date(2025, 1, 6), "invalid", tmp_path, 30)
        with pytest.raises(InvalidWindowError):
            find_next(date(2025, 1, 6), "journal", tmp_path, -1)
        with pytest.raises(DirectoryNotFoundError):
            find_next(date(2025, 1, 6), "journal", tmp_path / "nope", 30)


class TestInMemoryStore:
    def test_store_satisfies_protocol(self):
        assert isinstance(DateSetStore({}), NoteStore)
        assert isinstance(FilesystemStore(), NoteStore)

    def test_gap_scenario(self):
        store = DateSetStore({NOTES: ["2025-01-06", "2025-01-07", "2025-01-08", "2025-01-10"]})
        assert find_by_date(date(2025, 1, 9), "journal", NOTES, 30, store).name == "2025-01-08.md"
        assert find_next(date(2025, 1, 8), "journal", NOTES, 30, store).name == "2025-01-10.md"

    def test_exact_date_wins_regardless_of_window(self):
        store = DateSetStore({NOTES: ["2025-01-05", "2025-01-06"]})
        for window in (1, 30, 365):
            assert find_by_date(date(2025, 1, 6), "journal", NOTES, window, store).name == "2025-01-06.md"

    def test_window_boundary_is_inclusive(self):
        store = DateSetStore({NOTES: ["2025-01-01"]})
        assert find_by_date(date(2025, 1, 11), "journal", NOTES, 10, store).name == "2025-01-01.md"
        with pytest.raises(NoteNotFoundError):
            find_by_date(date(2025, 1, 12), "journal", NOTES, 10, store)

    def test_next_never_probes_start_date(self):
        store = DateSetStore({NOTES: ["2025-01-08"]})
        with pytest.raises(NoteNotFoundError):
            find_next(date(2025, 1, 8), "journal", NOTES, 3, store)
        assert store.probes == ["2025-01-09.md", "2025-01-10.md", "2025-01-11.md"]

    def test_probe_count_bounded_by_window(self):
        store = DateSetStore({NOTES: []})
        with pytest.raises(NoteNotFoundError):
            find_by_date(date(2025, 1, 8), "journal", NOTES, 5, store)
        assert len(store.probes) == 6

    def test_crosses_month_and_year(self):
        store = DateSetStore({NOTES: ["2024-12-30", "2025-02-03"]})
        assert find_by_date(date(2025, 1, 2), "journal", NOTES, 30, store).name == "2024-12-30.md"
        assert find_next(date(2025, 1, 31), "journal", NOTES, 30, store).name == "2025-02-03.md"

    def test_stops_at_earliest_date(self):
        store = DateSetStore({NOTES: []})
        with pytest.raises(NoteNotFoundError, match="0001-01-05 or within 1000 days before"):
            find_by_date(date(1, 1, 5), "journal", NOTES, 1000, store)
        assert store.probes == ["0001-01-05.md", "0001-01-04.md", "0001-01-03.md", "0001-01-02.md", "0001-01-01.md"]

    def test_stops_at_latest_date(self):
        store = DateSetStore({NOTES: ["9999-12-31"]})
        assert find_next(date(9999, 12, 28), "journal", NOTES, 1000, store).name == "9999-12-31.md"
        with pytest.raises(NoteNotFoundError, match="after 9999-12-31 within 1000 days"):
            find_next(date(9999, 12, 31), "journal", NOTES, 1000, store)

    def test_logs_every_lookup(self, caplog):
        caplog.set_level(logging.DEBUG, logger="za.notes.finder")
        store = DateSetStore({NOTES: ["2025-01-06"]})
        find_by_date(date(2025, 1, 8), "journal", NOTES, 30, store)
        checked = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Checked ")]
        assert len(checked) == len(store.probes) == 3
        assert checked[0].endswith("2025-01-08.md: missing")
        assert checked[-1].endswith("2025-01-06.md: found")
