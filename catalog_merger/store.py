"""Delimited catalog reading and writing."""

from __future__ import annotations

import csv
import logging
import os
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from .models import Record

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Catalog:
    """Header row plus a lazy stream of records for one export."""

    name: str
    header: tuple[str, ...]
    rows: Iterator[Record]


def _iter_records(reader: Iterator[list[str]], header: tuple[str, ...]) -> Iterator[Record]:
    for cells in reader:
        if not cells:
            # The csv module yields an empty list for blank lines.
            continue
        yield Record.from_cells(header, cells)


def read_catalog(handle: IO[str], *, name: str = "catalog", delimiter: str = ",") -> Catalog:
    """Read the header row and return a catalog streaming the remaining rows.

    Rows may be shorter or longer than the header. Missing cells stay absent in
    the record and surplus cells are dropped.
    """

    reader = csv.reader(handle, delimiter=delimiter)
    header: tuple[str, ...] = ()
    for cells in reader:
        if cells:
            header = tuple(cells)
            break
    return Catalog(name=name, header=header, rows=_iter_records(reader, header))


class CatalogWriter:
    """Write records in header order, one line each."""

    def __init__(self, handle: IO[str], header: tuple[str, ...], *, delimiter: str = ",") -> None:
        self._writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
        self.header = header

    def write_header(self) -> None:
        self._writer.writerow(self.header)

    def write(self, record: Record) -> None:
        self._writer.writerow(record.to_row())


@contextmanager
def open_catalog(path: str | Path) -> Iterator[IO[str]]:
    """Open a catalog export for reading."""

    with Path(path).open("r", encoding="utf-8-sig", newline="") as handle:
        yield handle


def _output_mode(target: Path) -> int:
    """Mode for a new output file: the replaced file's mode, or what the umask allows."""

    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@contextmanager
def atomic_output(path: str | Path) -> Iterator[IO[str]]:
    """Yield a handle whose content replaces `path` only if the block succeeds."""

    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            yield handle
        os.chmod(tmp_name, _output_mode(target))
        os.replace(tmp_name, target)
        logger.debug("Moved %s into place at %s", tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
