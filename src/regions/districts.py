"""Postcode district helpers used to filter records by selected map regions."""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

from .records import get_field

__all__ = [
    "extract_region_key",
    "extract_unique_region_keys",
    "group_districts_by_area",
]

# Leading district only: 1-2 area letters, 1-2 digits, optional trailing letter.
# Compact inputs such as "NE14ST" resolve to "NE14S"; the trailing letter is taken
# even when it belongs to the inward code.
_DISTRICT_PATTERN = re.compile(r"[A-Z]{1,2}[0-9]{1,2}[A-Z]?")
_AREA_PATTERN = re.compile(r"[A-Z]{1,2}")


def extract_region_key(raw: object) -> str | None:
    """Return the postcode district at the start of ``raw``.

    ``"NE1 4ST"`` and ``"ne1 4st"`` both yield ``"NE1"``; ``"TS16"`` is already a
    district and is returned unchanged. Inputs that are not strings, are blank, or do
    not begin with a letter+digit district yield ``None``.
    """

    if not isinstance(raw, str):
        return None
    candidate = raw.strip().upper()
    if not candidate:
        return None
    match = _DISTRICT_PATTERN.match(candidate)
    return match.group(0) if match else None


def extract_unique_region_keys(
    records: Sequence[Mapping[str, object]] | None,
    field_name: str = "postcode",
) -> set[str]:
    """Collect the distinct districts found in ``field_name`` across ``records``."""

    districts: set[str] = set()
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        return districts

    for record in records:
        district = extract_region_key(get_field(record, field_name))
        if district:
            districts.add(district)
    return districts


def group_districts_by_area(districts: Iterable[object]) -> dict[str, set[str]]:
    """Group districts under their letter-only area code (``NE1`` -> ``NE``)."""

    grouped: dict[str, set[str]] = {}
    if not isinstance(districts, Iterable) or isinstance(districts, (str, bytes)):
        return grouped

    for district in districts:
        if not isinstance(district, str):
            continue
        normalized = district.strip().upper()
        match = _AREA_PATTERN.match(normalized)
        if not match:
            continue
        grouped.setdefault(match.group(0), set()).add(normalized)
    return grouped
