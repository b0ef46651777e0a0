"""Tests for phrase extraction and significance filtering."""
from __future__ import annotations

import logging

import pytest

from src.phrases.extractor import extract_phrases, is_significant, iter_phrase_occurrences
from src.phrases.normalization import is_multi_word, normalize_phrase
from src.phrases.stopwords import COMMON_WORDS, DEFAULT_STOPWORDS, build_stopwords


def test_extract_phrases_finds_adjective_noun_runs(fake_tagger) -> None:
    text = "Digital skills training and community support with modern facilities"

    assert extract_phrases(text, tagger=fake_tagger) == {"digital skills training", "modern facilities"}


def test_extract_phrases_finds_verb_noun_pairs(fake_tagger) -> None:
    text = "Providing access to computers and internet for digital inclusion"

    assert extract_phrases(text, tagger=fake_tagger) == {"providing access", "digital inclusion"}


def test_extract_phrases_multiple_adjectives_form_one_phrase(fake_tagger) -> None:
    text = "Friendly environment for learning new digital skills and online safety"

    phrases = extract_phrases(text, tagger=fake_tagger)

    assert phrases == {"friendly environment", "new digital skills", "online safety"}
    assert "digital skills" not in phrases


def test_extract_phrases_returns_distinct_phrases_only(fake_tagger) -> None:
    phrases = extract_phrases("digital skills digital skills training", tagger=fake_tagger)

    assert phrases == {"digital skills", "digital skills training"}


def test_extract_phrases_includes_organizations_and_topics(fake_tagger) -> None:
    phrases = extract_phrases("Citizens Advice offers help in Newcastle", tagger=fake_tagger)

    assert phrases == {"citizens advice", "offers help", "newcastle"}


def test_extract_phrases_output_is_lowercase_and_collapsed(fake_tagger) -> None:
    phrases = extract_phrases("MODERN   Facilities", tagger=fake_tagger)

    assert phrases == {"modern facilities"}
    assert all(phrase == phrase.lower() for phrase in phrases)


@pytest.mark.parametrize("text", [None, "", "   ", 42, ["digital skills"]])
def test_extract_phrases_invalid_input_yields_empty_set(fake_tagger, text: object) -> None:
    assert extract_phrases(text, tagger=fake_tagger) == set()
    assert fake_tagger.calls == []


def test_iter_phrase_occurrences_counts_repeats_and_merges_shared_spans(fake_tagger) -> None:
    repeated = "Digital skills for adults and digital skills for children"
    shared = "Citizens Advice offers help"

    assert iter_phrase_occurrences(repeated, tagger=fake_tagger) == ["digital skills", "digital skills"]
    # The organization span is also a topic span and is reported once.
    assert iter_phrase_occurrences(shared, tagger=fake_tagger) == ["citizens advice", "offers help"]


def test_extraction_recovers_from_tagger_failure(tagger_factory, caplog) -> None:
    tagger = tagger_factory(fail_on=("BROKEN",))

    with caplog.at_level(logging.WARNING, logger="src.phrases.extractor"):
        assert extract_phrases("BROKEN modern facilities", tagger=tagger) == set()

    assert "could not process" in caplog.text
    assert extract_phrases("modern facilities", tagger=tagger) == {"modern facilities"}


@pytest.mark.parametrize(
    "phrase",
    ["digital skills", "Modern Facilities", "providing access", "citizens advice", "newcastle"],
)
def test_is_significant_accepts_tagged_phrases(fake_tagger, phrase: str) -> None:
    assert is_significant(phrase, tagger=fake_tagger) is True


@pytest.mark.parametrize("phrase", ["the", "and", "people", "digital", "services", "THE", "  the  "])
def test_is_significant_rejects_stopwords(fake_tagger, phrase: str) -> None:
    assert is_significant(phrase, tagger=fake_tagger) is False


def test_is_significant_rejects_stopwords_before_tagging(fake_tagger) -> None:
    assert is_significant("service", tagger=fake_tagger) is False
    assert fake_tagger.calls == []


@pytest.mark.parametrize("phrase", [None, "", "   ", 123, ["digital skills"]])
def test_is_significant_rejects_invalid_input(fake_tagger, phrase: object) -> None:
    assert is_significant(phrase, tagger=fake_tagger) is False


def test_is_significant_requires_a_grammatical_match(fake_tagger) -> None:
    # A lone noun or an unknown word matches none of the phrase classes.
    assert is_significant("skills", tagger=fake_tagger) is False
    assert is_significant("xyzzy", tagger=fake_tagger) is False


def test_is_significant_honours_custom_stopwords(fake_tagger) -> None:
    stopwords = build_stopwords(["Modern Facilities"])

    assert is_significant("modern facilities", tagger=fake_tagger, stopwords=stopwords) is False
    assert is_significant("digital skills", tagger=fake_tagger, stopwords=stopwords) is True


def test_is_significant_is_false_when_tagger_fails(tagger_factory) -> None:
    tagger = tagger_factory(fail_on=("skills",))

    assert is_significant("digital skills", tagger=tagger) is False


def test_stop_lists() -> None:
    assert len(COMMON_WORDS) == 100
    assert COMMON_WORDS <= DEFAULT_STOPWORDS
    assert {"service", "digital"} <= DEFAULT_STOPWORDS
    assert build_stopwords([" Hub ", ""]) == DEFAULT_STOPWORDS | {"hub"}
    assert build_stopwords(["hub"], replace=True) == frozenset({"hub"})


def test_normalization_helpers() -> None:
    assert normalize_phrase("  Digital \n Skills ") == "digital skills"
    assert normalize_phrase("") == ""
    assert is_multi_word("digital skills") is True
    assert is_multi_word(" newcastle ") is False


def test_every_default_stopword_is_insignificant(fake_tagger) -> None:
    assert not [word for word in sorted(DEFAULT_STOPWORDS) if is_significant(word, tagger=fake_tagger)]
