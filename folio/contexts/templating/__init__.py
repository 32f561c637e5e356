"""
Templating Context

Responsibilities:
- Parses the {{ }} template mini-language embedded in content documents
- Renders templates with variable values (loops, conditionals, substitution)
- Discovers and labels template variables
- Validates template structure
- Merges template output into existing case-study content

Owns: Template language, template rendering, template/content merging
Never: Reads or writes storage, resolves concurrent edits
"""

from folio.contexts.templating.document import (
    MISSING,
    Document,
    VariableMap,
    copy_document,
    documents_equal,
    is_document,
    lookup_path,
)
from folio.contexts.templating.exceptions import ConditionSyntaxError, DocumentTypeError
from folio.contexts.templating.merging import apply_section_mapping, merge_content
from folio.contexts.templating.processor import (
    TemplatePreview,
    TemplateProcessor,
    process_template,
)
from folio.contexts.templating.settings import TemplateSettings
from folio.contexts.templating.validator import ValidationResult, validate_template
from folio.contexts.templating.variables import (
    VariableDefinition,
    extract_variables,
    generate_variable_label,
)

__all__ = [
    # Document model
    "Document",
    "VariableMap",
    "MISSING",
    "copy_document",
    "documents_equal",
    "is_document",
    "lookup_path",
    # Processing
    "process_template",
    "TemplateProcessor",
    "TemplatePreview",
    "TemplateSettings",
    # Variables and validation
    "extract_variables",
    "generate_variable_label",
    "VariableDefinition",
    "validate_template",
    "ValidationResult",
    # Merging
    "merge_content",
    "apply_section_mapping",
    # Errors
    "DocumentTypeError",
    "ConditionSyntaxError",
]
