"""
Integration test for the content editing flow.
Tests: template file → rendered content → applied to a case study →
concurrent edit detected → resolved.
"""

from pathlib import Path

import pytest

from folio.contexts.collaboration import ConflictResolver, Merge
from folio.contexts.templating import TemplateProcessor
from folio.utils.document_io import load_document, save_document

FIXTURES_PATH = Path(__file__).resolve().parents[1] / "fixtures"
APPLIED_AT = "2025-06-02T08:00:00+00:00"


@pytest.fixture
def template():
    return load_document(FIXTURES_PATH / "case_study_template.yaml")


@pytest.fixture
def variables():
    return load_document(FIXTURES_PATH / "variables.yaml")


@pytest.fixture
def case_study():
    return load_document(FIXTURES_PATH / "case_study.yaml")


@pytest.mark.integration
def test_render_template_file(template, variables):
    """Every construct in the fixture renders; unknown variables stay visible."""
    preview = TemplateProcessor().preview(template, variables)
    content = preview.content

    assert content["title"] == "Acme: Checkout Redesign"
    assert content["description"] == "A retail engagement. Delivered in 6 weeks."
    assert content["category"] == "{{category}}"
    assert content["sections"]["hero"] == {
        "heading": "Checkout Redesign",
        "subheading": "Live since 2025-03-01",
    }
    assert content["sections"]["results"] == {
        "items": "- Conversion: +12%\n- Drop-off: -30%\n",
        "summary": "",
    }
    assert content["sections"]["team"] == "0. Ada 1. Grace "

    assert preview.unresolved == ["category"]
    assert preview.validation.valid
    names = [definition.name for definition in preview.variables]
    assert names[:3] == ["client.name", "project", "client.industry"]
    assert "item.label" in names
    assert "metrics" not in names


@pytest.mark.integration
def test_apply_template_to_case_study(template, variables, case_study):
    """Applying fills gaps, keeps authored content and records the application."""
    updated = TemplateProcessor().apply(
        template,
        case_study,
        variables,
        section_mapping={"hero": "banner"},
        preserve_existing=True,
        template_id="tpl-7",
        template_name="Standard case study",
        timestamp=APPLIED_AT,
    )

    # Empty title filled, hand-written description and unrelated fields kept
    assert updated["title"] == "Acme: Checkout Redesign"
    assert updated["description"] == "Existing description written by hand"
    assert updated["category"] == "ecommerce"
    assert updated["rating"] == 4

    sections = updated["sections"]
    assert sections["gallery"] == case_study["sections"]["gallery"]
    assert sections["banner"] == sections["hero"]
    assert set(sections) == {"gallery", "hero", "banner", "results", "team"}

    applied = updated["metadata"]["template_applied"]
    assert applied["template_id"] == "tpl-7"
    assert applied["template_name"] == "Standard case study"
    assert applied["applied_at"] == APPLIED_AT
    assert applied["variables_used"] == variables
    assert applied["section_mapping"] == {"hero": "banner"}
    assert updated["updated_at"] == APPLIED_AT

    # Input untouched
    assert case_study["title"] == ""
    assert "metadata" not in case_study


@pytest.mark.integration
def test_applied_copy_conflicts_with_newer_server_copy(template, variables, case_study, tmp_path):
    """A teammate saved after the template was applied locally; merging keeps both."""
    local = TemplateProcessor().apply(
        template, case_study, variables, preserve_existing=True, timestamp=APPLIED_AT
    )
    local["updated_at"] = case_study["updated_at"]

    server = dict(case_study, rating=5, updated_at="2025-06-02T09:00:00+00:00")
    server["sections"] = {"gallery": {"images": ["after.png"]}, "faq": {"items": []}}

    resolver = ConflictResolver()
    assert resolver.has_concurrent_update(local, server)

    conflicts = resolver.detect(local, server)
    assert [conflict.field for conflict in conflicts] == ["title", "rating", "sections"]

    outcome = resolver.resolve(local, server, "merge", timestamp="2025-06-02T09:05:00+00:00")
    assert isinstance(outcome, Merge)

    merged = outcome.document
    assert merged["title"] == "Acme: Checkout Redesign"
    assert merged["rating"] == 4
    assert merged["sections"]["faq"] == {"items": []}
    assert merged["sections"]["gallery"] == {"images": ["before.png", "after.png"]}
    assert "hero" in merged["sections"]
    assert merged["created_at"] == case_study["created_at"]
    assert not resolver.has_concurrent_update(merged, server)

    # The resolved copy survives a trip through a saved snapshot
    path = save_document(merged, tmp_path / "resolved.yaml")
    assert resolver.compare(merged, load_document(path)).total_changes == 0
