"""Shared normalization helpers for phrase modules."""
from __future__ import annotations

import re

__all__ = ["is_multi_word", "normalize_phrase"]

_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_phrase(phrase: str) -> str:
    """Return ``phrase`` trimmed, lowercased, with whitespace runs collapsed."""

    if not phrase:
        return ""
    return _WHITESPACE_PATTERN.sub(" ", phrase).strip().lower()


def is_multi_word(phrase: str) -> bool:
    return _WHITESPACE_PATTERN.search(phrase.strip()) is not None
