"""CSV tokenizing for purchase-history exports.

Parsing follows RFC 4180 via the stdlib :mod:`csv` module. Rows come back as
plain ``dict[str, str]`` keyed by the header exactly as exported; no field
interpretation happens here.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from io import StringIO
from os import PathLike
from pathlib import Path
from typing import IO

from .logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CsvExport:
    """Header names in file order plus the non-blank data rows."""

    headers: tuple[str, ...]
    records: tuple[dict[str, str], ...]


def _read_rows(f: IO[str], *, source: str) -> CsvExport:
    reader = csv.DictReader(f)
    if not reader.fieldnames:
        raise csv.Error(f"CSV appears to have no header row: {source}")
    headers = tuple(reader.fieldnames)

    records: list[dict[str, str]] = []
    for row in reader:
        # DictReader collects surplus cells under a ``None`` key; drop it so
        # every record keeps the declared ``dict[str, str]`` shape.
        normalized = {k: (v if v is not None else "") for k, v in row.items() if k is not None}
        if all(v.strip() == "" for v in normalized.values()):
            continue
        records.append(normalized)

    logger.debug("Read %d rows with %d columns from %s", len(records), len(headers), source)
    return CsvExport(headers=headers, records=tuple(records))


def read_purchase_csv_text(csv_text: str) -> CsvExport:
    with StringIO(csv_text.lstrip("\ufeff")) as f:
        return _read_rows(f, source="<text>")


def read_purchase_csv(csv_path: str | PathLike[str]) -> CsvExport:
    """Read a purchase-history CSV file.

    Only ``.csv`` files are accepted (``ValueError`` otherwise). A UTF-8 byte
    order mark is tolerated. Raises ``csv.Error`` when the header row is
    missing and lets ``OSError`` propagate for unreadable paths.
    """

    p = Path(csv_path)
    if p.suffix.lower() != ".csv":
        raise ValueError(f"not a CSV file: {p.name}")
    with p.open(encoding="utf-8-sig", newline="") as f:
        return _read_rows(f, source=str(p))


__all__ = ["CsvExport", "read_purchase_csv", "read_purchase_csv_text"]
