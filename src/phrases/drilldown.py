"""Locate the source records behind a phrase selected in a word cloud."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.regions.records import Record, get_field
from src.regions.selection import filter_records_by_regions

from . import DrilldownMatch
from .normalization import normalize_phrase

__all__ = ["find_drilldown_matches"]


def find_drilldown_matches(
    records: Sequence[Record] | None,
    phrase: object,
    *,
    text_field: str,
    region_field: str | None = None,
    selected_regions: Iterable[object] | None = None,
) -> list[DrilldownMatch]:
    """Return records whose ``text_field`` contains ``phrase``, ignoring case.

    When ``selected_regions`` is supplied the records are first narrowed to that
    selection using ``region_field``, mirroring how the word cloud was built.
    """

    if not isinstance(phrase, str):
        return []
    needle = normalize_phrase(phrase)
    if not needle:
        return []
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        return []

    candidates: Sequence[Record] = records
    if selected_regions is not None:
        candidates = filter_records_by_regions(records, selected_regions, region_field or "postcode")

    matches: list[DrilldownMatch] = []
    for record in candidates:
        text = get_field(record, text_field)
        if text is None:
            continue
        if needle in normalize_phrase(text):
            matches.append(DrilldownMatch(record=record, matched_field=text_field))
    return matches
