"""Weighted phrase frequency aggregation and top-N ranking."""
from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence

from . import RankedPhrase
from .extractor import is_significant, iter_phrase_occurrences
from .normalization import is_multi_word
from .tagger import PhraseTagger

__all__ = [
    "DEFAULT_LIMIT",
    "count_phrase_frequencies",
    "phrase_weight",
    "process_texts",
    "rank_top",
]

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MULTI_WORD_WEIGHT = 2
SINGLE_WORD_WEIGHT = 1


def phrase_weight(phrase: str) -> int:
    """Weight contributed by one occurrence of ``phrase``."""

    return MULTI_WORD_WEIGHT if is_multi_word(phrase) else SINGLE_WORD_WEIGHT


def _is_text_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def count_phrase_frequencies(
    texts: Sequence[str | None] | None,
    *,
    tagger: PhraseTagger | None = None,
    stopwords: Collection[str] | None = None,
) -> dict[str, int]:
    """Accumulate weighted counts of significant phrases across ``texts``.

    Texts are processed in order and the returned mapping keeps first-seen order,
    which is what :func:`rank_top` falls back on for equal weights.
    """

    frequencies: dict[str, int] = {}
    if not _is_text_sequence(texts):
        return frequencies

    verdicts: dict[str, bool] = {}
    processed = 0
    for text in texts:  # type: ignore[union-attr]
        if not isinstance(text, str) or not text.strip():
            continue
        processed += 1
        for phrase in iter_phrase_occurrences(text, tagger=tagger):
            significant = verdicts.get(phrase)
            if significant is None:
                significant = is_significant(phrase, tagger=tagger, stopwords=stopwords)
                verdicts[phrase] = significant
            if not significant:
                continue
            frequencies[phrase] = frequencies.get(phrase, 0) + phrase_weight(phrase)

    logger.debug(
        "Counted %d significant phrases from %d texts (%d candidates)",
        len(frequencies),
        processed,
        len(verdicts),
    )
    return frequencies


def rank_top(frequencies: Mapping[str, int] | None, limit: int = DEFAULT_LIMIT) -> list[RankedPhrase]:
    """Return at most ``limit`` phrases ordered by weight, heaviest first.

    Equal weights keep the mapping's iteration order. Malformed input (a non-mapping,
    non-integer weights, a non-positive or non-integer limit) yields an empty list.
    """

    if not isinstance(frequencies, Mapping):
        return []
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        return []

    entries: list[RankedPhrase] = []
    for phrase, weight in frequencies.items():
        if not isinstance(phrase, str) or isinstance(weight, bool) or not isinstance(weight, int):
            return []
        entries.append(RankedPhrase(phrase=phrase, weight=weight))

    entries.sort(key=lambda entry: -entry.weight)
    return entries[:limit]


def process_texts(
    texts: Sequence[str | None] | None,
    limit: int = DEFAULT_LIMIT,
    *,
    tagger: PhraseTagger | None = None,
    stopwords: Collection[str] | None = None,
) -> list[RankedPhrase]:
    """Extract, filter, weight and rank phrases from ``texts`` in one step."""

    frequencies = count_phrase_frequencies(texts, tagger=tagger, stopwords=stopwords)
    return rank_top(frequencies, limit)
