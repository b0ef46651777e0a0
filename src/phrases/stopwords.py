"""Stop lists applied before a phrase is checked for grammatical structure."""
from __future__ import annotations

from collections.abc import Iterable

__all__ = ["COMMON_WORDS", "DEFAULT_STOPWORDS", "NOISE_WORDS", "build_stopwords"]

# The hundred most common English words.
COMMON_WORDS: frozenset[str] = frozenset(
    {
        "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
        "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
        "this", "but", "his", "by", "from", "they", "we", "say", "her",
        "she", "or", "an", "will", "my", "one", "all", "would", "there",
        "their", "what", "so", "up", "out", "if", "about", "who", "get",
        "which", "go", "me", "when", "make", "can", "like", "time", "no",
        "just", "him", "know", "take", "people", "into", "year", "your",
        "good", "some", "could", "them", "see", "other", "than", "then",
        "now", "look", "only", "come", "its", "over", "think", "also",
        "back", "after", "use", "two", "how", "our", "work", "first",
        "well", "way", "even", "new", "want", "because", "any", "these",
        "give", "day", "most", "us",
    }
)

# Service-description jargon that appears in nearly every record.
NOISE_WORDS: frozenset[str] = frozenset(
    {
        "service", "services",
        "digital", "online",
        "help", "helped", "helping",
        "need", "needs", "needed",
        "use", "used", "using",
        "provide", "provides", "provided",
        "support", "supports", "supported",
    }
)

DEFAULT_STOPWORDS: frozenset[str] = COMMON_WORDS | NOISE_WORDS


def build_stopwords(extra: Iterable[object] = (), *, replace: bool = False) -> frozenset[str]:
    """Return the effective stop list, normalized to trimmed lowercase words."""

    normalized = {str(word).strip().lower() for word in extra}
    normalized.discard("")
    if replace:
        return frozenset(normalized)
    return DEFAULT_STOPWORDS | normalized
