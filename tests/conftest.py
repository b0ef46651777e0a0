"""Shared fixtures: a deterministic, lexicon-driven tagger for phrase tests."""
from __future__ import annotations

import re
from typing import Iterable, Mapping

import pytest

from src.phrases import TaggedText
from src.phrases.tagger import TaggedEntity, TaggedToken, TaggerError, build_tagged_text

_TOKEN_PATTERN = re.compile(r"[A-Za-z]+(?:['-][A-Za-z]+)*")

LEXICON: dict[str, str] = {
    **{
        word: "ADJ"
        for word in (
            "digital", "modern", "friendly", "new", "free", "local", "practical",
            "fast", "great", "warm", "useful", "patient", "online",
        )
    },
    **{
        word: "NOUN"
        for word in (
            "skills", "training", "support", "facilities", "access", "computers",
            "internet", "inclusion", "environment", "safety", "programs", "classes",
            "job", "search", "volunteers", "staff", "sessions", "place", "advisers",
            "vacancies", "welcome", "advice", "banking", "development", "services",
            "service", "community", "adults", "children", "help", "centre",
        )
    },
    **{word: "VERB" for word in ("providing", "accessing", "learning", "find", "offers", "running")},
}

ENTITIES: dict[str, str] = {
    "citizens advice": "ORG",
    "newcastle": "GPE",
}


class FakeTagger:
    """Tags words from a fixed lexicon and finds entities by case-insensitive lookup."""

    def __init__(
        self,
        lexicon: Mapping[str, str] | None = None,
        entities: Mapping[str, str] | None = None,
        *,
        fail_on: Iterable[str] = (),
        load_error: str | None = None,
    ) -> None:
        self.lexicon = dict(LEXICON if lexicon is None else lexicon)
        self.entities = dict(ENTITIES if entities is None else entities)
        self.fail_on = tuple(fail_on)
        self.load_error = load_error
        self.loaded = False
        self.calls: list[str] = []

    def load(self) -> None:
        if self.load_error is not None:
            raise TaggerError(self.load_error)
        self.loaded = True

    def analyze(self, text: str) -> TaggedText:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise TaggerError("cannot tag marker text")

        tokens = [
            TaggedToken(self.lexicon.get(match.group(0).lower(), "X"), match.start(), match.end())
            for match in _TOKEN_PATTERN.finditer(text)
        ]
        lowered = text.lower()
        entities: list[TaggedEntity] = []
        for name, label in self.entities.items():
            for match in re.finditer(rf"(?<!\w){re.escape(name)}(?!\w)", lowered):
                entities.append(TaggedEntity(label, match.start(), match.end()))
        entities.sort(key=lambda entity: entity.start)
        return build_tagged_text(text, tokens, entities)


@pytest.fixture
def fake_tagger() -> FakeTagger:
    return FakeTagger()


@pytest.fixture
def tagger_factory() -> type[FakeTagger]:
    return FakeTagger
