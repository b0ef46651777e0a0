"""Core data models for the phrase cloud toolkit."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

__all__ = [
    "ADJECTIVE_NOUN",
    "ORGANIZATION",
    "PHRASE_CLASSES",
    "TOPIC",
    "VERB_NOUN",
    "ColoredPhrase",
    "DataSourceConfig",
    "DrilldownMatch",
    "PhraseMatch",
    "RankedPhrase",
    "TaggedText",
    "WordCloudResult",
]

ADJECTIVE_NOUN = "adjective_noun"
VERB_NOUN = "verb_noun"
ORGANIZATION = "organization"
TOPIC = "topic"
PHRASE_CLASSES: tuple[str, ...] = (ADJECTIVE_NOUN, VERB_NOUN, ORGANIZATION, TOPIC)


@dataclass(frozen=True, slots=True)
class PhraseMatch:
    """A tagged span of text together with the pattern class that produced it."""

    text: str
    phrase_class: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True, slots=True)
class TaggedText:
    """Tagger output for one string, grouped by phrase class."""

    adjective_noun: tuple[PhraseMatch, ...] = ()
    verb_noun: tuple[PhraseMatch, ...] = ()
    organizations: tuple[PhraseMatch, ...] = ()
    topics: tuple[PhraseMatch, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.adjective_noun or self.verb_noun or self.organizations or self.topics)

    def matches(self) -> tuple[PhraseMatch, ...]:
        """All matches in class order: adjective/noun, verb/noun, organizations, topics."""

        return (*self.adjective_noun, *self.verb_noun, *self.organizations, *self.topics)


@dataclass(frozen=True, slots=True)
class RankedPhrase:
    """A phrase and its accumulated weight in a ranked result."""

    phrase: str
    weight: int

    def to_dict(self) -> dict[str, Any]:
        return {"phrase": self.phrase, "weight": self.weight}


@dataclass(frozen=True, slots=True)
class ColoredPhrase:
    """A ranked phrase with the display colour assigned to it."""

    phrase: str
    weight: int
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"phrase": self.phrase, "weight": self.weight, "color": self.color}


@dataclass(frozen=True, slots=True)
class DrilldownMatch:
    """A source record whose text field contains a selected phrase."""

    record: Mapping[str, str]
    matched_field: str

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.record)
        payload["source_field"] = self.matched_field
        return payload


@dataclass(frozen=True, slots=True)
class DataSourceConfig:
    """Describes which record fields feed one word cloud."""

    id: str
    label: str
    region_field: str = "postcode"
    text_field: str = "text"
    file: str | None = None


@dataclass(frozen=True, slots=True)
class WordCloudResult:
    """Ranked, coloured phrases for one data source and region selection."""

    source_id: str
    label: str
    entries: tuple[ColoredPhrase, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "label": self.label,
            "entries": [entry.to_dict() for entry in self.entries],
            "metadata": dict(self.metadata),
            "created_at": self.created_at.isoformat(),
        }
