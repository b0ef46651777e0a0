"""Part-of-speech and entity tagging behind a small protocol.

The extractor only needs four kinds of match from a tagger: adjective runs followed
by noun runs, a verb followed by a noun run, organization names, and topics (people,
places and organizations). :class:`SpacyTagger` supplies them from a spaCy pipeline.
Any other tagger only has to produce coarse POS tokens and labelled entity spans
and hand them to :func:`build_tagged_text`.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol, Sequence

import spacy

from . import ADJECTIVE_NOUN, ORGANIZATION, TOPIC, VERB_NOUN, PhraseMatch, TaggedText

__all__ = [
    "DEFAULT_MODEL",
    "PhraseTagger",
    "SpacyTagger",
    "TaggedEntity",
    "TaggedToken",
    "TaggerError",
    "build_tagged_text",
    "get_default_tagger",
]

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "en_core_web_sm"

NOUN_POS = frozenset({"NOUN", "PROPN"})
ADJECTIVE_POS = "ADJ"
VERB_POS = "VERB"
ORGANIZATION_LABELS = frozenset({"ORG"})
TOPIC_LABELS = frozenset({"PERSON", "ORG", "GPE", "LOC", "NORP", "FAC"})
_ADJECTIVES = frozenset({ADJECTIVE_POS})
# Components that contribute neither POS tags nor entities. Sentence boundaries come
# from the lighter "senter", which the shipped pipelines leave disabled.
_EXCLUDED_COMPONENTS = ("parser", "lemmatizer")
_SENTENCE_COMPONENT = "senter"


class TaggerError(RuntimeError):
    """Raised when a tagger cannot be loaded or cannot process a string."""


@dataclass(frozen=True, slots=True)
class TaggedToken:
    """A token's coarse (Universal Dependencies) POS tag and character span.

    ``sentence_start`` marks the first token of a sentence other than the first;
    phrase runs never continue across it.
    """

    pos: str
    start: int
    end: int
    sentence_start: bool = False


@dataclass(frozen=True, slots=True)
class TaggedEntity:
    """A named entity label and character span."""

    label: str
    start: int
    end: int


class PhraseTagger(Protocol):
    """Contract shared by all taggers used by the phrase extractor."""

    def load(self) -> None:
        """Prepare the tagger, raising :class:`TaggerError` if it cannot be used."""
        ...

    def analyze(self, text: str) -> TaggedText:
        ...


class SpacyTagger:
    """Tagger backed by a spaCy English pipeline, loaded on first use."""

    def __init__(self, model: str = DEFAULT_MODEL, *, nlp: Any | None = None) -> None:
        self.model = model
        self._nlp = nlp
        self._lock = threading.Lock()

    def _pipeline(self) -> Any:
        if self._nlp is None:
            with self._lock:
                if self._nlp is None:
                    self._nlp = _load_model(self.model)
        return self._nlp

    def load(self) -> None:
        self._pipeline()

    def analyze(self, text: str) -> TaggedText:
        nlp = self._pipeline()
        try:
            doc = nlp(text)
        except (ValueError, UnicodeError) as exc:
            raise TaggerError(f"spaCy could not tag text: {exc}") from exc

        tokens = _tokens_from_doc(doc)
        entities = [TaggedEntity(ent.label_, ent.start_char, ent.end_char) for ent in doc.ents]
        return build_tagged_text(text, tokens, entities)


def _tokens_from_doc(doc: Any) -> list[TaggedToken]:
    # Whitespace tokens ("\n", a second space) are dropped so runs join across them;
    # a sentence start found on one moves to the next word.
    tokens: list[TaggedToken] = []
    pending_start = False
    for token in doc:
        starts_sentence = token.i > 0 and token.is_sent_start is True
        if token.is_space:
            pending_start = pending_start or starts_sentence
            continue
        tokens.append(
            TaggedToken(
                token.pos_,
                token.idx,
                token.idx + len(token.text),
                sentence_start=bool(tokens) and (starts_sentence or pending_start),
            )
        )
        pending_start = False
    return tokens


def _load_model(model: str) -> Any:
    try:
        nlp = spacy.load(model, exclude=list(_EXCLUDED_COMPONENTS))
    except OSError as exc:
        raise TaggerError(
            f"spaCy model '{model}' is not installed. "
            f"Install it with: python -m spacy download {model}"
        ) from exc
    if _SENTENCE_COMPONENT in nlp.disabled:
        nlp.enable_pipe(_SENTENCE_COMPONENT)
    logger.debug("Loaded spaCy model %s with components %s", model, nlp.pipe_names)
    return nlp


@lru_cache(maxsize=None)
def get_default_tagger(model: str = DEFAULT_MODEL) -> SpacyTagger:
    """Return the process-wide tagger for ``model``."""

    return SpacyTagger(model)


def build_tagged_text(
    text: str,
    tokens: Sequence[TaggedToken],
    entities: Sequence[TaggedEntity] = (),
) -> TaggedText:
    """Collect the four phrase classes from POS-tagged tokens and entity spans."""

    return TaggedText(
        adjective_noun=tuple(_adjective_noun_matches(text, tokens)),
        verb_noun=tuple(_verb_noun_matches(text, tokens)),
        organizations=tuple(_entity_matches(text, entities, ORGANIZATION_LABELS, ORGANIZATION)),
        topics=tuple(_entity_matches(text, entities, TOPIC_LABELS, TOPIC)),
    )


def _run_end(tokens: Sequence[TaggedToken], start: int, accepted: frozenset[str]) -> int:
    """Extend a run from ``start`` over accepted tags without entering a new sentence."""

    end = start
    while end < len(tokens) and tokens[end].pos in accepted and not tokens[end].sentence_start:
        end += 1
    return end


def _span_match(
    text: str,
    tokens: Sequence[TaggedToken],
    first: int,
    stop: int,
    phrase_class: str,
) -> PhraseMatch:
    start_offset = tokens[first].start
    end_offset = tokens[stop - 1].end
    return PhraseMatch(
        text=text[start_offset:end_offset],
        phrase_class=phrase_class,
        start_offset=start_offset,
        end_offset=end_offset,
    )


def _adjective_noun_matches(text: str, tokens: Sequence[TaggedToken]) -> list[PhraseMatch]:
    # Greedy and non-overlapping: a whole adjective run plus the noun run after it.
    matches: list[PhraseMatch] = []
    index = 0
    while index < len(tokens):
        if tokens[index].pos != ADJECTIVE_POS:
            index += 1
            continue
        nouns_start = _run_end(tokens, index + 1, _ADJECTIVES)
        end = _run_end(tokens, nouns_start, NOUN_POS)
        if end > nouns_start:
            matches.append(_span_match(text, tokens, index, end, ADJECTIVE_NOUN))
            index = end
        else:
            index = nouns_start
    return matches


def _verb_noun_matches(text: str, tokens: Sequence[TaggedToken]) -> list[PhraseMatch]:
    matches: list[PhraseMatch] = []
    index = 0
    while index < len(tokens):
        if tokens[index].pos == VERB_POS:
            end = _run_end(tokens, index + 1, NOUN_POS)
            if end > index + 1:
                matches.append(_span_match(text, tokens, index, end, VERB_NOUN))
                index = end
                continue
        index += 1
    return matches


def _entity_matches(
    text: str,
    entities: Sequence[TaggedEntity],
    labels: frozenset[str],
    phrase_class: str,
) -> list[PhraseMatch]:
    return [
        PhraseMatch(
            text=text[entity.start:entity.end],
            phrase_class=phrase_class,
            start_offset=entity.start,
            end_offset=entity.end,
        )
        for entity in entities
        if entity.label in labels and entity.end > entity.start
    ]
