"""Region keys and record access for map-selection filtering."""

from .districts import extract_region_key, extract_unique_region_keys, group_districts_by_area
from .ingest import load_records
from .records import Record, collect_texts, get_field
from .selection import filter_records_by_regions, normalize_selection

__all__ = [
    "Record",
    "collect_texts",
    "extract_region_key",
    "extract_unique_region_keys",
    "filter_records_by_regions",
    "get_field",
    "group_districts_by_area",
    "load_records",
    "normalize_selection",
]
