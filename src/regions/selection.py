"""Filter record sequences down to the currently selected districts."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from .districts import extract_region_key
from .records import Record, get_field

__all__ = ["filter_records_by_regions", "normalize_selection"]


def normalize_selection(regions: Iterable[object] | None) -> frozenset[str]:
    """Canonicalize selected regions so they compare equal to record districts."""

    if not isinstance(regions, Iterable) or isinstance(regions, (str, bytes)):
        return frozenset()
    keys = (extract_region_key(region) for region in regions)
    return frozenset(key for key in keys if key)


def filter_records_by_regions(
    records: Sequence[Record] | None,
    selected_regions: Iterable[object] | None,
    region_field: str,
) -> tuple[Record, ...]:
    """Return the records whose district is part of the selection, in input order."""

    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        return ()
    selection = normalize_selection(selected_regions)
    if not selection:
        return ()

    selected: list[Record] = []
    for record in records:
        district = extract_region_key(get_field(record, region_field))
        if district is not None and district in selection:
            selected.append(record)
    return tuple(selected)
