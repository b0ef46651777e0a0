"""CSV ingestion for record files consumed by the word cloud commands."""
from __future__ import annotations

import csv
import logging
from pathlib import Path

from .records import Record

__all__ = ["load_records"]

logger = logging.getLogger(__name__)


def load_records(path: Path) -> tuple[Record, ...]:
    """Read a header-row CSV file into an ordered tuple of field mappings.

    Rows where every value is blank are skipped. Missing trailing cells are
    stored as empty strings so that every record carries the full header.
    """

    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Records file '{resolved}' does not exist")

    records: list[Record] = []
    with resolved.open("r", newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            return ()
        for row in reader:
            record = {
                str(key).strip(): (value or "")
                for key, value in row.items()
                if key is not None
            }
            if not any(value.strip() for value in record.values()):
                continue
            records.append(record)

    logger.debug("Loaded %d records from %s", len(records), resolved)
    return tuple(records)
