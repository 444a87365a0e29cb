"""Shared fixtures: an in-memory note store and on-disk note trees."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest

from za.config import SeriesConfig, ZaConfig


class DateSetStore:
    """NoteStore backed by a set of YYYY-MM-DD strings per directory."""

    def __init__(self, notes: dict[Path, Iterable[str]]) -> None:
        self.notes = {Path(d): set(days) for d, days in notes.items()}
        self.probes: list[str] = []

    def dir_exists(self, directory: Path) -> bool:
        return Path(directory) in self.notes

    def note_exists(self, directory: Path, filename: str) -> bool:
        self.probes.append(filename)
        return filename.removesuffix(".md") in self.notes.get(Path(directory), set())


def write_notes(directory: Path, days: Iterable[str], content: str = "test") -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for day in days:
        (directory / f"{day}.md").write_text(content, encoding="utf-8")


@pytest.fixture
def make_config():
    def _make(journal_dir: Path | str, standup_dir: Path | str, window: int = 30) -> ZaConfig:
        return ZaConfig(
            journal=SeriesConfig(dir=str(journal_dir)),
            standup=SeriesConfig(dir=str(standup_dir)),
            search_window_days=window,
        )

    return _make
