"""Configuration loading from environment variables and za.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from za.notes.types import NoteSeries

_CONFIG_FILENAMES = ["za.toml", ".za.toml"]
_DEFAULT_PREVIOUS_TITLES = ["Yesterday", "Previous", "Last Week"]
_DEFAULT_NEXT_TITLES = ["Tomorrow", "Next", "Next Week"]
_DEFAULT_SEARCH_WINDOW_DAYS = 30


class ConfigError(ValueError):
    """Configuration file or values are invalid."""


@dataclass
class SeriesConfig:
    """Configuration for one note series (journal or standup)."""

    dir: str
    link_previous_titles: list[str] = field(default_factory=lambda: list(_DEFAULT_PREVIOUS_TITLES))
    link_next_titles: list[str] = field(default_factory=lambda: list(_DEFAULT_NEXT_TITLES))


@dataclass
class ZaConfig:
    """Top-level za configuration."""

    journal: SeriesConfig = field(default_factory=lambda: SeriesConfig(dir="./journal"))
    standup: SeriesConfig = field(default_factory=lambda: SeriesConfig(dir="./standup"))
    search_window_days: int = _DEFAULT_SEARCH_WINDOW_DAYS
    log_level: str = "INFO"
    source: Path | None = None  # file the values were read from, if any

    def series(self, series: NoteSeries | str) -> SeriesConfig:
        if NoteSeries.parse(series) is NoteSeries.JOURNAL:
            return self.journal
        return self.standup

    def series_dir(self, series: NoteSeries | str) -> Path:
        """Absolute root directory for a series (relative paths are against cwd)."""
        return Path(self.series(series).dir).expanduser().absolute()

    def validate(self) -> None:
        if not self.journal.dir:
            raise ConfigError("journal.dir is required")
        if not self.standup.dir:
            raise ConfigError("standup.dir is required")
        if self.search_window_days < 1:
            raise ConfigError(
                f"search_window_days must be positive, got {self.search_window_days}"
            )


def _candidate_paths() -> list[Path]:
    home = Path.home()
    return [Path.cwd() / name for name in _CONFIG_FILENAMES] + [
        home / ".za.toml",
        home / ".config" / "za" / "za.toml",
    ]


def _read_toml(path: Path) -> dict:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"error reading config file {path}: {exc}") from exc


def _as_int(name: str, value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _titles(name: str, value: object) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{name} must be a list of strings, got {value!r}")
    return list(value)


def _series_config(data: dict, series: str, env_dir: str, default_dir: str) -> SeriesConfig:
    return SeriesConfig(
        dir=os.getenv(env_dir, data.get("dir", default_dir)),
        link_previous_titles=_titles(
            f"{series}.link_previous_titles", data.get("link_previous_titles", _DEFAULT_PREVIOUS_TITLES)
        ),
        link_next_titles=_titles(f"{series}.link_next_titles", data.get("link_next_titles", _DEFAULT_NEXT_TITLES)),
    )


def load_config(config_path: Path | None = None) -> ZaConfig:
    """Load configuration from environment variables and optional za.toml.

    Priority: environment variables > za.toml > defaults.
    """
    file_data: dict = {}
    source: Path | None = None
    if config_path:
        if not config_path.exists():
            raise ConfigError(f"config file does not exist: {config_path}")
        file_data, source = _read_toml(config_path), config_path
    else:
        # Search current dir, then home
        for candidate in _candidate_paths():
            if candidate.exists():
                file_data, source = _read_toml(candidate), candidate
                break

    config = ZaConfig(
        journal=_series_config(file_data.get("journal", {}), "journal", "ZA_JOURNAL_DIR", "./journal"),
        standup=_series_config(file_data.get("standup", {}), "standup", "ZA_STANDUP_DIR", "./standup"),
        search_window_days=_as_int(
            "search_window_days",
            os.getenv(
                "ZA_SEARCH_WINDOW_DAYS",
                file_data.get("search_window_days", _DEFAULT_SEARCH_WINDOW_DAYS),
            ),
        ),
        log_level=os.getenv("ZA_LOG_LEVEL", file_data.get("log_level", "INFO")),
        source=source,
    )
    config.validate()
    return config
