"""Command-line runner for merging a partner catalog export into the master export.

Both exports are CSV files. Every differing field on a matched variant is shown
as a diff and resolved either automatically (`--accept-all`) or by prompting.
"""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path
from typing import IO

from rich.console import Console

from catalog_merger import CatalogMergeError, MergeSettings, MergeSummary, merge_catalogs, read_catalog, strategy_for
from catalog_merger.store import atomic_output, open_catalog

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("catalog_merge")


def run_merge(
    master_path: Path,
    partner_path: Path,
    result_path: Path,
    settings: MergeSettings,
    *,
    console: Console | None = None,
    stream: IO[str] | None = None,
) -> MergeSummary:
    """Merge two exports and write the result; the result file is only replaced on success."""

    console = console or Console()
    console.print(
        f"Merging master export '{master_path}' with partner export '{partner_path}' "
        f"to '{result_path}' (accept-all={str(settings.accept_all).lower()})",
        markup=False,
        highlight=False,
    )
    strategy = strategy_for(settings, console, stream)

    with open_catalog(master_path) as master_handle, open_catalog(partner_path) as partner_handle:
        master = read_catalog(master_handle, name=f"master export '{master_path}'", delimiter=settings.delimiter)
        partner = read_catalog(partner_handle, name=f"partner export '{partner_path}'", delimiter=settings.delimiter)
        with atomic_output(result_path) as output:
            return merge_catalogs(master, partner, output, strategy, settings=settings, console=console)


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("true", "yes", "1"):
        return True
    if normalized in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for a merge run."""

    parser = argparse.ArgumentParser(description="Merge a partner product export into the master export.")
    parser.add_argument("master", type=Path, help="CSV export of master project")
    parser.add_argument("partner", type=Path, help="CSV export of partner project")
    parser.add_argument("result", type=Path, help="Result CSV file")
    parser.add_argument(
        "--accept-all",
        type=_parse_bool,
        nargs="?",
        const=True,
        default=False,
        metavar="true|false",
        help=(
            "Accept all changes from partner project (default: false). "
            "Before the file arguments, spell it --accept-all=true."
        ),
    )
    parser.add_argument("--delimiter", default=",", help="Field delimiter of all CSV files")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for command-line execution."""

    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)
    settings = MergeSettings(accept_all=args.accept_all, delimiter=args.delimiter)

    try:
        summary = run_merge(args.master, args.partner, args.result, settings)
    except (CatalogMergeError, OSError, UnicodeDecodeError, csv.Error) as exc:
        logger.error("Merge failed: %s", exc)
        return 1

    logger.info("Wrote merged catalog %s (%d conflicts resolved)", args.result, summary.conflicts)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
