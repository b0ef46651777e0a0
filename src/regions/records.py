"""Typed accessors over ingested tabular records."""
from __future__ import annotations

from collections.abc import Iterable, Mapping

__all__ = ["Record", "collect_texts", "get_field"]

Record = Mapping[str, str]


def get_field(record: object, field_name: str) -> str | None:
    """Return the string stored under ``field_name`` or ``None``."""

    if not isinstance(record, Mapping):
        return None
    value = record.get(field_name)
    return value if isinstance(value, str) else None


def collect_texts(records: Iterable[Record], text_field: str) -> list[str | None]:
    return [get_field(record, text_field) for record in records]
