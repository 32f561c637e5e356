"""
Template content merging.

Rules for laying processed template content onto an existing case study:
templates fill gaps, they never clobber authored content.

- sections: merged key by key, template sections replace same-named ones
- fill-only fields (title, description): taken from the template only when
  the existing content has no value
- every other template field is ignored
"""

from typing import Dict, Optional

from folio.contexts.templating.document import Document, copy_document, is_truthy
from folio.contexts.templating.exceptions import DocumentTypeError
from folio.contexts.templating.settings import TemplateSettings, get_template_settings


def _require_mapping(value: Document, name: str) -> None:
    if not isinstance(value, dict):
        raise DocumentTypeError(f"{name} must be a mapping", value_type=type(value).__name__)


def merge_content(
    existing: Document,
    incoming: Document,
    settings: Optional[TemplateSettings] = None,
) -> Document:
    """
    Merge processed template content into existing content.

    Args:
        existing: Current case-study content
        incoming: Processed template content
        settings: Field names (defaults to configured settings)

    Returns:
        New merged document; neither input is modified

    Raises:
        DocumentTypeError: If either side is not a mapping

    Example:
        >>> merge_content({"title": "Keep Me"}, {"title": "Default", "sections": {"hero": {"a": 1}}})
        {'title': 'Keep Me', 'sections': {'hero': {'a': 1}}}
    """
    settings = settings or get_template_settings()
    _require_mapping(existing, "Existing content")
    _require_mapping(incoming, "Template content")

    merged = copy_document(existing)
    incoming = copy_document(incoming)
    sections_field = settings.sections_field

    incoming_sections = incoming.get(sections_field)
    existing_sections = merged.get(sections_field)
    if isinstance(incoming_sections, dict) and isinstance(existing_sections, dict):
        merged[sections_field] = {**existing_sections, **incoming_sections}
    elif is_truthy(incoming_sections):
        merged[sections_field] = incoming_sections

    for field_name in settings.fill_only_fields:
        if not is_truthy(merged.get(field_name)) and is_truthy(incoming.get(field_name)):
            merged[field_name] = incoming[field_name]

    return merged


def apply_section_mapping(
    content: Document,
    section_mapping: Dict[str, str],
    settings: Optional[TemplateSettings] = None,
) -> Document:
    """
    Copy template sections onto differently named case-study sections.

    For each source -> target pair whose source section has content, the
    section is copied to target. Source sections are kept.

    Args:
        content: Processed template content
        section_mapping: Template section key -> case-study section key

    Returns:
        New document with mapped sections added
    """
    settings = settings or get_template_settings()
    _require_mapping(content, "Content")

    mapped = copy_document(content)
    sections = mapped.get(settings.sections_field)
    if not isinstance(sections, dict) or not sections or not section_mapping:
        return mapped

    new_sections = {
        target: sections[source]
        for source, target in section_mapping.items()
        if is_truthy(sections.get(source))
    }
    mapped[settings.sections_field] = {**sections, **new_sections}
    return mapped
