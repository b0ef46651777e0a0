"""Build ranked, coloured phrase clouds per data source and region selection."""
from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping, Sequence

from src.regions.records import Record, collect_texts
from src.regions.selection import filter_records_by_regions, normalize_selection

from . import DataSourceConfig, WordCloudResult
from .frequency import DEFAULT_LIMIT, count_phrase_frequencies, rank_top
from .palette import LIGHT_PALETTE, assign_colors
from .tagger import PhraseTagger

__all__ = ["build_word_cloud", "build_word_clouds"]

logger = logging.getLogger(__name__)


def build_word_cloud(
    records: Sequence[Record] | None,
    selected_regions: Iterable[object] | None,
    source: DataSourceConfig,
    *,
    limit: int = DEFAULT_LIMIT,
    palette: Sequence[str] = LIGHT_PALETTE,
    start: int = 0,
    tagger: PhraseTagger | None = None,
    stopwords: Collection[str] | None = None,
) -> WordCloudResult:
    """Rank the phrases of ``source`` records that fall inside the selection."""

    all_records: Sequence[Record] = records if isinstance(records, Sequence) else ()
    selected = filter_records_by_regions(all_records, selected_regions, source.region_field)
    texts = collect_texts(selected, source.text_field)

    frequencies = count_phrase_frequencies(texts, tagger=tagger, stopwords=stopwords)
    ranked = rank_top(frequencies, limit)
    entries = assign_colors(ranked, palette, start=start)

    logger.debug(
        "Word cloud '%s': %d of %d records selected, %d phrases ranked",
        source.id,
        len(selected),
        len(all_records),
        len(entries),
    )

    return WordCloudResult(
        source_id=source.id,
        label=source.label,
        entries=tuple(entries),
        metadata={
            "total_records": len(all_records),
            "selected_records": len(selected),
            "text_count": sum(1 for text in texts if text and text.strip()),
            "distinct_phrases": len(frequencies),
            "limit": limit,
        },
    )


def build_word_clouds(
    datasets: Mapping[str, Sequence[Record]],
    selected_regions: Iterable[object] | None,
    sources: Sequence[DataSourceConfig],
    *,
    limit: int = DEFAULT_LIMIT,
    palette: Sequence[str] = LIGHT_PALETTE,
    tagger: PhraseTagger | None = None,
    stopwords: Collection[str] | None = None,
) -> tuple[WordCloudResult, ...]:
    """Build one cloud per source, continuing the palette across clouds."""

    selection = normalize_selection(selected_regions)
    results: list[WordCloudResult] = []
    color_cursor = 0
    for source in sources:
        records = datasets.get(source.id)
        if records is None:
            logger.warning("No records loaded for data source '%s'", source.id)
        result = build_word_cloud(
            records,
            selection,
            source,
            limit=limit,
            palette=palette,
            start=color_cursor,
            tagger=tagger,
            stopwords=stopwords,
        )
        color_cursor += len(result.entries)
        results.append(result)
    return tuple(results)
