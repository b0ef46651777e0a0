"""Tests for building per-source word clouds."""
from __future__ import annotations

import logging

from src.phrases import DataSourceConfig
from src.phrases.wordcloud import build_word_cloud, build_word_clouds

SERVICES = DataSourceConfig(id="services", label="Service Descriptions", text_field="text_summary")
FEEDBACK = DataSourceConfig(id="feedback", label="Feedback Text", text_field="feedback_text")
PALETTE = ("#a", "#b", "#c")

SERVICE_RECORDS = [
    {"postcode": "NE1 4ST", "text_summary": "Digital skills training and community support with modern facilities"},
    {"postcode": "NE6 1AA", "text_summary": "Providing access to computers and internet for digital inclusion"},
    {"postcode": "TS18 1AU", "text_summary": "Friendly environment for learning new digital skills"},
    {"postcode": "NE1 2AB", "text_summary": ""},
]

FEEDBACK_RECORDS = [
    {"postcode": "NE1 4ST", "feedback_text": "Patient staff and useful sessions"},
    {"postcode": "TS18 1AU", "feedback_text": "Friendly advisers"},
]


def test_build_word_cloud_filters_by_selected_regions(fake_tagger) -> None:
    result = build_word_cloud(SERVICE_RECORDS, ["NE1"], SERVICES, palette=PALETTE, tagger=fake_tagger)

    assert result.source_id == "services"
    assert result.label == "Service Descriptions"
    assert [(entry.phrase, entry.weight, entry.color) for entry in result.entries] == [
        ("digital skills training", 2, "#a"),
        ("modern facilities", 2, "#b"),
    ]
    assert result.metadata == {
        "total_records": 4,
        "selected_records": 2,
        "text_count": 1,
        "distinct_phrases": 2,
        "limit": 50,
    }


def test_build_word_cloud_empty_selection_has_no_entries(fake_tagger) -> None:
    result = build_word_cloud(SERVICE_RECORDS, [], SERVICES, tagger=fake_tagger)

    assert result.entries == ()
    assert result.metadata["selected_records"] == 0
    assert fake_tagger.calls == []


def test_build_word_cloud_respects_limit(fake_tagger) -> None:
    result = build_word_cloud(
        SERVICE_RECORDS,
        ["NE1", "NE6", "TS18"],
        SERVICES,
        limit=3,
        tagger=fake_tagger,
    )

    assert [entry.phrase for entry in result.entries] == [
        "digital skills training",
        "modern facilities",
        "providing access",
    ]
    assert result.metadata["distinct_phrases"] == 6


def test_build_word_cloud_to_dict(fake_tagger) -> None:
    payload = build_word_cloud(FEEDBACK_RECORDS, ["TS18"], FEEDBACK, palette=PALETTE, tagger=fake_tagger).to_dict()

    assert payload["source_id"] == "feedback"
    assert payload["entries"] == [{"phrase": "friendly advisers", "weight": 2, "color": "#a"}]
    assert "created_at" in payload


def test_build_word_clouds_continues_colors_across_sources(fake_tagger) -> None:
    results = build_word_clouds(
        {"services": SERVICE_RECORDS, "feedback": FEEDBACK_RECORDS},
        ["NE1"],
        [SERVICES, FEEDBACK],
        palette=PALETTE,
        tagger=fake_tagger,
    )

    assert [result.source_id for result in results] == ["services", "feedback"]
    assert [entry.color for entry in results[0].entries] == ["#a", "#b"]
    assert [(entry.phrase, entry.color) for entry in results[1].entries] == [
        ("patient staff", "#c"),
        ("useful sessions", "#a"),
    ]


def test_build_word_clouds_is_repeatable(fake_tagger) -> None:
    datasets = {"services": SERVICE_RECORDS, "feedback": FEEDBACK_RECORDS}

    first = build_word_clouds(datasets, ["NE1", "TS18"], [SERVICES, FEEDBACK], tagger=fake_tagger)
    second = build_word_clouds(datasets, ["NE1", "TS18"], [SERVICES, FEEDBACK], tagger=fake_tagger)

    assert [result.entries for result in first] == [result.entries for result in second]


def test_build_word_clouds_warns_on_missing_dataset(fake_tagger, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="src.phrases.wordcloud"):
        results = build_word_clouds({}, ["NE1"], [SERVICES], tagger=fake_tagger)

    assert results[0].entries == ()
    assert results[0].metadata["total_records"] == 0
    assert "No records loaded" in caplog.text


def test_build_word_clouds_unusable_selection_yields_empty_clouds(fake_tagger) -> None:
    results = build_word_clouds({"services": SERVICE_RECORDS}, 42, [SERVICES], tagger=fake_tagger)  # type: ignore[arg-type]

    assert results[0].entries == ()
    assert build_word_cloud(SERVICE_RECORDS, 42, SERVICES, tagger=fake_tagger).entries == ()  # type: ignore[arg-type]
    assert fake_tagger.calls == []
