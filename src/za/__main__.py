"""Entry point: za [--config PATH] [--verbose] <command>

- fix-links <file> [--dry-run]: resolve stale Yesterday/Tomorrow/Standup links
- version:                      print the installed version
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from za import __version__
from za.config import ConfigError, load_config

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="za",
        description="Manage daily journal and standup notes.",
    )
    parser.add_argument("--config", type=Path, help="config file (default: za.toml, .za.toml or ~/.za.toml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    fix = sub.add_parser(
        "fix-links",
        help="Fix relative date links in a note file",
        description=(
            "Update temporal links (Yesterday, Tomorrow, ...) and cross-reference links "
            "(Standup, Journal, ...) to point at notes that actually exist, skipping gaps "
            "like weekends and holidays. The file is modified in place unless --dry-run."
        ),
    )
    fix.add_argument("file", type=Path)
    fix.add_argument("--dry-run", action="store_true", help="preview changes without modifying the file")

    sub.add_parser("version", help="Print the version information")
    return parser


def _run_fix_links(args: argparse.Namespace) -> int:
    from za.fix_links import FixLinksError, fix_links

    config = load_config(args.config)
    _setup_logging("DEBUG" if args.verbose else config.log_level)
    if config.source is not None:
        logger.info("Loaded config from %s", config.source)
    try:
        fix_links(args.file, config, dry_run=args.dry_run)
    except FixLinksError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "version":
        print(f"za version {__version__}")
        return 0
    if args.command == "fix-links":
        try:
            return _run_fix_links(args)
        except ConfigError as exc:
            print(f"Error loading config: {exc}", file=sys.stderr)
            return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
