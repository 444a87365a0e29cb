"""The fix-links workflow: find stale date links in a note and rewrite them.

Temporal links (Yesterday/Tomorrow and their synonyms) and cross-references
(Journal <-> Standup) are resolved against the notes that actually exist,
skipping weekends, holidays and other gaps.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from za.links.classifier import ClassifiedLink, Classifier
from za.links.resolver import ResolvedLink, Resolver, filter_needs_update
from za.markdown.document import Document
from za.notes.finder import parse_date_from_filename
from za.notes.types import DateParseError, InvalidSeriesError, NoteSeries

if TYPE_CHECKING:
    from za.config import ZaConfig
    from za.notes.finder import NoteStore

logger = logging.getLogger(__name__)


class FixLinksError(RuntimeError):
    """The note can't be processed at all (missing, undated, outside a series)."""


def determine_series(path: str | Path) -> NoteSeries:
    """Series of a note, from the first ``journal``/``standup`` path component."""
    normalized = str(path).replace("\\", "/")
    for component in normalized.split("/"):
        lowered = component.lower()
        for series in NoteSeries:
            if lowered == series.value:
                return series
    raise InvalidSeriesError(
        f"cannot determine note type from path: {path} "
        "(expected path to contain 'journal' or 'standup' directory)"
    )


@dataclass
class FixPlan:
    """Everything fix-links learned about one note."""

    path: Path
    document: Document
    fixable: list[ClassifiedLink] = field(default_factory=list)
    resolved: list[ResolvedLink] = field(default_factory=list)

    @property
    def updates(self) -> list[ResolvedLink]:
        return filter_needs_update(self.resolved)

    @property
    def errors(self) -> list[ResolvedLink]:
        return [r for r in self.resolved if r.error is not None]


def plan_fixes(path: str | Path, config: ZaConfig, store: NoteStore | None = None) -> FixPlan:
    """Classify and resolve every link in the note at ``path``. Reads only."""
    path = Path(path)
    if not path.is_file():
        raise FixLinksError(f"file does not exist: {path}")

    try:
        series = determine_series(path)
    except InvalidSeriesError as exc:
        raise FixLinksError(f"failed to determine note type: {exc}") from exc
    try:
        note_date = parse_date_from_filename(path)
    except DateParseError as exc:
        raise FixLinksError(f"failed to parse date from filename: {exc}") from exc

    try:
        document = Document.load(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise FixLinksError(f"failed to parse file: {exc}") from exc
    classified = Classifier.from_config(config).classify_all(document.links)
    fixable = [c for c in classified if c.needs_fixing]
    logger.info(
        "%s: %d link(s), %d fixable (%s %s)",
        path, len(classified), len(fixable), series, note_date,
    )

    resolver = Resolver(config, note_date, series, store)
    return FixPlan(path, document, fixable, resolver.resolve_all(fixable))


def apply_fixes(text: str, updates: Iterable[ResolvedLink]) -> str:
    """Rewrite the first occurrence of each stale link with its new destination."""
    for fix in updates:
        if fix.error is not None or not fix.needs_update:
            continue
        text = text.replace(fix.link.markdown, fix.link.with_destination(fix.suggested_destination), 1)
    return text


def _print_report(plan: FixPlan, out: TextIO) -> None:
    pending = [r for r in plan.resolved if r.needs_update or r.error is not None]
    updates = plan.updates
    if not updates and not plan.errors:
        print("All links are already correct!", file=out)
        return

    if updates:
        print(f"\n{len(updates)} links need updating:\n", file=out)
    for i, r in enumerate(pending, 1):
        link = r.link
        if r.error is not None:
            print(f"{i}. [{link.text}]({link.destination}) - ERROR: {r.error}", file=out)
            continue
        print(f"{i}. [{link.text}]({link.destination})", file=out)
        print(f"   → {r.suggested_destination}", file=out)
        print(f"   Type: {r.classified.kind}", file=out)


def fix_links(
    path: str | Path,
    config: ZaConfig,
    dry_run: bool = False,
    out: TextIO | None = None,
    store: NoteStore | None = None,
) -> FixPlan:
    """Fix relative date links in a note, printing what changes.

    The file is modified in place unless ``dry_run``. Links that fail to
    resolve are reported and left untouched.
    """
    out = out or sys.stdout
    plan = plan_fixes(path, config, store)

    if not plan.document.links:
        print("No links found in file", file=out)
        return plan
    if not plan.fixable:
        print("No fixable links found in file", file=out)
        return plan

    print(f"Found {len(plan.fixable)} fixable links", file=out)
    _print_report(plan, out)

    updates = plan.updates
    if not updates:
        return plan
    if dry_run:
        print("\n[DRY RUN] No changes made", file=out)
        return plan

    print("\nApplying changes...", file=out)
    new_text = apply_fixes(plan.document.text, updates)
    try:
        plan.path.write_text(new_text, encoding="utf-8")
    except OSError as exc:
        raise FixLinksError(f"failed to write file: {exc}") from exc
    logger.info("Wrote %d link fix(es) to %s", len(updates), plan.path)
    print(f"\n✓ Successfully updated {len(updates)} links in {plan.path}", file=out)
    return plan
