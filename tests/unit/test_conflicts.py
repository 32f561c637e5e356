"""Unit tests for conflict detection."""

import math

import pytest

from folio.contexts.collaboration.conflicts import (
    ConflictRecord,
    detect_conflicts,
    format_value,
    summarize_conflict,
    values_conflict,
)
from folio.contexts.collaboration.settings import CollaborationSettings
from folio.contexts.templating.exceptions import DocumentTypeError


@pytest.fixture
def settings():
    return CollaborationSettings()


@pytest.fixture
def case_study():
    return {
        "id": "cs-1",
        "title": "Checkout Redesign",
        "description": "Faster checkout",
        "category": "ecommerce",
        "achievement": "+12% conversion",
        "rating": 5,
        "sections": {"hero": {"heading": "Checkout", "image": "hero.png"}},
        "updated_at": "2025-06-01T12:00:00+00:00",
    }


@pytest.mark.unit
def test_identical_documents_have_no_conflicts(case_study, settings):
    assert detect_conflicts(case_study, case_study, settings) == []


@pytest.mark.unit
def test_document_with_nan_does_not_conflict_with_itself(case_study, settings):
    case_study["rating"] = math.nan
    case_study["sections"]["hero"]["ratio"] = math.nan

    assert detect_conflicts(case_study, case_study, settings) == []
    conflicts = detect_conflicts(case_study, dict(case_study, rating=4), settings)
    assert [c.field for c in conflicts] == ["rating"]


@pytest.mark.unit
def test_key_order_does_not_cause_conflicts(case_study, settings):
    reordered = dict(reversed(list(case_study.items())))
    reordered["sections"] = {"hero": {"image": "hero.png", "heading": "Checkout"}}

    assert detect_conflicts(case_study, reordered, settings) == []


@pytest.mark.unit
def test_conflicts_in_watch_list_order(case_study, settings):
    server = dict(case_study, rating=4, title="Checkout v2", sections={"hero": {"heading": "New"}})

    conflicts = detect_conflicts(case_study, server, settings)

    assert [c.field for c in conflicts] == ["title", "rating", "sections"]
    assert conflicts[0] == ConflictRecord(
        field="title",
        local_value="Checkout Redesign",
        server_value="Checkout v2",
        label="Project Title",
    )


@pytest.mark.unit
def test_unwatched_fields_are_ignored(case_study, settings):
    server = dict(case_study, updated_at="2030-01-01T00:00:00+00:00", status="archived")
    assert detect_conflicts(case_study, server, settings) == []


@pytest.mark.unit
def test_missing_on_one_side_conflicts(case_study, settings):
    server = dict(case_study)
    del server["category"]

    conflicts = detect_conflicts(case_study, server, settings)

    assert [(c.field, c.local_value, c.server_value) for c in conflicts] == [
        ("category", "ecommerce", None)
    ]


@pytest.mark.unit
def test_missing_and_none_are_the_same(settings):
    assert detect_conflicts({"title": None}, {}, settings) == []


@pytest.mark.unit
def test_conflict_values_are_copies(case_study, settings):
    server = dict(case_study, sections={"hero": {"heading": "New"}})

    [conflict] = detect_conflicts(case_study, server, settings)
    conflict.local_value["hero"]["heading"] = "changed"

    assert case_study["sections"]["hero"]["heading"] == "Checkout"


@pytest.mark.unit
@pytest.mark.parametrize(
    "local, server, expected",
    [
        (None, None, False),
        (None, "x", True),
        ("", None, True),
        (5, 5.0, False),
        (5, "5", True),
        (True, 1, True),
        ({"a": [1]}, {"a": [1]}, False),
        ({"a": [1]}, {"a": [1, 2]}, True),
        ({"a": 1}, "text", True),
    ],
)
def test_values_conflict(local, server, expected):
    assert values_conflict(local, server) is expected


@pytest.mark.unit
def test_custom_watch_list():
    settings = CollaborationSettings(watched_fields={"status": "Status"})
    conflicts = detect_conflicts({"status": "a", "title": "x"}, {"status": "b", "title": "y"}, settings)

    assert [c.label for c in conflicts] == ["Status"]


@pytest.mark.unit
def test_detect_requires_mappings(settings):
    with pytest.raises(DocumentTypeError):
        detect_conflicts([], {}, settings)


@pytest.mark.unit
def test_summaries(settings):
    conflict = ConflictRecord("description", "x" * 150, None, "Project Description")

    summary = summarize_conflict(conflict, settings)

    assert summary.label == "Project Description"
    assert summary.local == "x" * 100 + "..."
    assert summary.server == "Empty"


@pytest.mark.unit
def test_format_value():
    assert format_value({"a": 1}) == "Complex data"
    assert format_value([1]) == "Complex data"
    assert format_value(4) == "4"
    assert format_value(False) == "false"
