"""
Template content validation.

Advisory checks run before a template is saved or applied. A failing result
does not stop process_template(); callers decide what to do with it.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

from folio.contexts.templating.document import is_truthy
from folio.contexts.templating.settings import TemplateSettings, get_template_settings
from folio.contexts.templating.variables import extract_variable_names


def _iter_text(document: Any) -> Iterator[str]:
    """Yield every mapping key and string leaf, unescaped."""
    if isinstance(document, str):
        yield document
    elif isinstance(document, list):
        for item in document:
            yield from _iter_text(item)
    elif isinstance(document, dict):
        for key, value in document.items():
            yield str(key)
            yield from _iter_text(value)


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


def validate_template(document: Any, settings: Optional[TemplateSettings] = None) -> ValidationResult:
    """
    Check a template's structure.

    Problems reported:
    - content is not a mapping (reported alone)
    - a required field is missing or empty
    - the sections field is present but not a mapping
    - a variable is referenced more often than the configured limit, which
      usually means a template was pasted into itself

    Args:
        document: Template content
        settings: Field names and limits (defaults to configured settings)

    Returns:
        ValidationResult with every problem found
    """
    settings = settings or get_template_settings()

    if not isinstance(document, dict):
        return ValidationResult(valid=False, errors=["Template content must be a valid object"])

    errors = []

    for field_name in settings.required_fields:
        if not is_truthy(document.get(field_name)):
            errors.append(f"Missing required field: {field_name}")

    sections = document.get(settings.sections_field)
    if sections is not None and not isinstance(sections, dict):
        errors.append("Sections must be an object")

    texts = list(_iter_text(document))
    for name in extract_variable_names(document):
        pattern = re.compile(r"\{\{\s*" + re.escape(name) + r"\s*\}\}")
        occurrences = sum(len(pattern.findall(text)) for text in texts)
        if occurrences > settings.max_variable_occurrences:
            errors.append(f"Variable {name} appears too many times (possible circular reference)")

    return ValidationResult(valid=not errors, errors=errors)
