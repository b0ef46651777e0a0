"""Phrase extraction and significance filtering."""
from __future__ import annotations

import logging
from collections.abc import Collection

from . import TaggedText
from .normalization import normalize_phrase
from .stopwords import DEFAULT_STOPWORDS
from .tagger import PhraseTagger, TaggerError, get_default_tagger

__all__ = ["extract_phrases", "is_significant", "iter_phrase_occurrences"]

logger = logging.getLogger(__name__)


def _tag(text: str, tagger: PhraseTagger | None) -> TaggedText | None:
    active = tagger if tagger is not None else get_default_tagger()
    try:
        return active.analyze(text)
    except TaggerError as exc:
        logger.warning("Skipping text the tagger could not process: %s", exc)
        return None


def iter_phrase_occurrences(text: object, *, tagger: PhraseTagger | None = None) -> list[str]:
    """Return every phrase occurrence in ``text`` in document order.

    Each distinct character span contributes one entry, even when several phrase
    classes matched it. The same phrase found at two different spans appears twice.
    """

    if not isinstance(text, str) or not text.strip():
        return []
    tagged = _tag(text, tagger)
    if tagged is None:
        return []

    seen_spans: set[tuple[int, int]] = set()
    located: list[tuple[int, int, str]] = []
    for match in tagged.matches():
        span = (match.start_offset, match.end_offset)
        if span in seen_spans:
            continue
        phrase = normalize_phrase(match.text)
        if not phrase:
            continue
        seen_spans.add(span)
        located.append((match.start_offset, match.end_offset, phrase))

    located.sort(key=lambda item: (item[0], item[1]))
    return [phrase for _, _, phrase in located]


def extract_phrases(text: object, *, tagger: PhraseTagger | None = None) -> set[str]:
    """Return the distinct lowercase phrases the tagger finds in ``text``.

    The result is the union of adjective+noun runs, verb+noun runs, organization
    names and topics. Non-string or blank input yields an empty set.
    """

    return set(iter_phrase_occurrences(text, tagger=tagger))


def is_significant(
    phrase: object,
    *,
    tagger: PhraseTagger | None = None,
    stopwords: Collection[str] | None = None,
) -> bool:
    """Decide whether ``phrase`` is worth counting.

    The phrase is tagged on its own, without the sentence it came from, so a
    verdict depends only on the phrase text and the stop list.
    """

    if not isinstance(phrase, str):
        return False
    normalized = normalize_phrase(phrase)
    if not normalized:
        return False
    active_stopwords = DEFAULT_STOPWORDS if stopwords is None else stopwords
    if normalized in active_stopwords:
        return False

    tagged = _tag(normalized, tagger)
    return tagged is not None and tagged.found
