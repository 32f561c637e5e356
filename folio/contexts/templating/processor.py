"""
Template Processing

Turns a template document plus variable values into finished content.
Every string leaf of the (deep-copied) template goes through three passes,
in this order:

1. Loop expansion: {{#each list}}...{{/each}} repeats its body per element
   of a list or tuple, with `item` and `index` bound. Bodies only get
   variable substitution; nested #each/#if tags inside a loop body are
   emitted as written.
2. Conditional resolution: {{#if expr}}...{{/if}} keeps or drops its body.
3. Variable substitution: {{path}} becomes the value's display string.

References that do not resolve stay in the output as written, so authors can
see what is missing. Nothing in processing raises for missing variables or
malformed expressions; only a template that is not a document is an error.

Examples:
    >>> process_template("{{#each items}}[{{item}}]{{/each}}", {"items": ["a", "b", "c"]})
    '[a][b][c]'

    >>> process_template({"title": "Hi {{name}}"}, {})
    {'title': 'Hi {{name}}'}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from folio.contexts.templating.document import (
    MISSING,
    Document,
    VariableMap,
    copy_document,
    is_truthy,
    lookup_path,
    map_strings,
    to_display_string,
)
from folio.contexts.templating.exceptions import DocumentTypeError
from folio.contexts.templating.expressions import evaluate_condition
from folio.contexts.templating.logger import _log_debug, _log_info
from folio.contexts.templating.merging import apply_section_mapping, merge_content
from folio.contexts.templating.settings import TemplateSettings, get_template_settings
from folio.contexts.templating.syntax import Node, Text, Variable, parse
from folio.contexts.templating.validator import ValidationResult, validate_template
from folio.contexts.templating.variables import VariableDefinition, extract_variables
from folio.utils.timestamp import now_exact


def _substitute(nodes: List[Node], scope: VariableMap) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, Variable):
            value = lookup_path(scope, node.name)
            parts.append(node.raw if value is MISSING else to_display_string(value))
        else:
            parts.append(node.open_raw + _substitute(node.children, scope) + node.close_raw)
    return "".join(parts)


def _expand_loops(nodes: List[Node], variables: VariableMap) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, Variable):
            parts.append(node.raw)
        elif node.kind == "each":
            items = lookup_path(variables, node.argument)
            if isinstance(items, (list, tuple)):
                for index, item in enumerate(items):
                    scope = {**variables, "item": item, "index": index}
                    parts.append(_substitute(node.children, scope))
        else:
            parts.append(node.open_raw + _expand_loops(node.children, variables) + node.close_raw)
    return "".join(parts)


def _resolve_conditionals(nodes: List[Node], variables: VariableMap) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, Variable):
            parts.append(node.raw)
        elif node.kind == "if":
            if evaluate_condition(node.argument, variables):
                parts.append(_resolve_conditionals(node.children, variables))
        else:
            inner = _resolve_conditionals(node.children, variables)
            parts.append(node.open_raw + inner + node.close_raw)
    return "".join(parts)


def expand_loops(text: str, variables: VariableMap) -> str:
    """Expand every {{#each}} block in text."""
    if "{{" not in text:
        return text
    return _expand_loops(parse(text), variables)


def resolve_conditionals(text: str, variables: VariableMap) -> str:
    """Keep or drop every {{#if}} block in text."""
    if "{{" not in text:
        return text
    return _resolve_conditionals(parse(text), variables)


def substitute_variables(text: str, variables: VariableMap) -> str:
    """Replace every resolvable {{path}} reference in text."""
    if "{{" not in text:
        return text
    return _substitute(parse(text), variables)


def process_template(
    template: Document,
    variables: Optional[VariableMap] = None,
    preserve_existing: bool = False,
    existing_content: Optional[Document] = None,
    settings: Optional[TemplateSettings] = None,
) -> Document:
    """
    Render a template document with variable values.

    Args:
        template: Template content (any document: string, list or mapping)
        variables: Values keyed by name; nested values are reached with dotted paths
        preserve_existing: Merge the result into existing_content with merge_content()
        existing_content: Current case-study content, used with preserve_existing
        settings: Field names for the merge step (defaults to configured settings)

    Returns:
        New document; template and variables are not modified

    Raises:
        DocumentTypeError: If template is not a document or variables is not a mapping
    """
    if variables is None:
        variables = {}
    if not isinstance(variables, dict):
        raise DocumentTypeError("Variables must be a mapping", value_type=type(variables).__name__)

    processed = copy_document(template)
    processed = map_strings(processed, lambda text: expand_loops(text, variables))
    processed = map_strings(processed, lambda text: resolve_conditionals(text, variables))
    processed = map_strings(processed, lambda text: substitute_variables(text, variables))

    if preserve_existing and existing_content is not None:
        processed = merge_content(existing_content, processed, settings)

    return processed


@dataclass
class TemplatePreview:
    """
    Result of previewing a template without applying it.

    Attributes:
        content: Processed template content
        variables: Variables the template references
        validation: Advisory validation of the raw template
        unresolved: Variable names still unresolved in the processed content
    """

    content: Document
    variables: List[VariableDefinition] = field(default_factory=list)
    validation: Optional[ValidationResult] = None
    unresolved: List[str] = field(default_factory=list)


class TemplateProcessor:
    """
    Service object for template operations.

    Constructed once by the application and handed to whatever needs it;
    holds nothing but its settings, so one instance can serve every request.

    Example:
        processor = TemplateProcessor()
        preview = processor.preview(template, {"client": "Acme"})
        updated = processor.apply(template, case_study, {"client": "Acme"}, template_id="t1")
    """

    def __init__(self, settings: Optional[TemplateSettings] = None):
        self.settings = settings or get_template_settings()

    def process(
        self,
        template: Document,
        variables: Optional[VariableMap] = None,
        preserve_existing: bool = False,
        existing_content: Optional[Document] = None,
    ) -> Document:
        return process_template(
            template,
            variables,
            preserve_existing=preserve_existing,
            existing_content=existing_content,
            settings=self.settings,
        )

    def extract_variables(self, document: Document) -> List[VariableDefinition]:
        return extract_variables(document)

    def validate(self, document: Any) -> ValidationResult:
        return validate_template(document, self.settings)

    def merge_content(self, existing: Document, incoming: Document) -> Document:
        return merge_content(existing, incoming, self.settings)

    def preview(self, template: Document, variables: Optional[VariableMap] = None) -> TemplatePreview:
        """Process a template and report what it references and what is still missing."""
        content = self.process(template, variables)
        unresolved = [definition.name for definition in extract_variables(content)]
        if unresolved:
            _log_debug(f"Preview left {len(unresolved)} unresolved variable(s): {unresolved}")

        return TemplatePreview(
            content=content,
            variables=extract_variables(template),
            validation=self.validate(template),
            unresolved=unresolved,
        )

    def apply(
        self,
        template: Document,
        case_study: Document,
        variables: Optional[VariableMap] = None,
        section_mapping: Optional[Dict[str, str]] = None,
        preserve_existing: bool = False,
        template_id: Optional[str] = None,
        template_name: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> Document:
        """
        Build the updated case study that results from applying a template.

        The template is processed (optionally merged into the case study),
        sections are renamed per section_mapping, and the result's fill-only
        fields and sections replace the case study's where they have content.
        A record of the application is kept under metadata.template_applied.
        Persisting the returned document is the caller's job.

        Args:
            template: Template content
            case_study: Current case-study document
            variables: Variable values
            section_mapping: Template section key -> case-study section key
            preserve_existing: Merge into the case study instead of replacing
            template_id: Identifier recorded in metadata
            template_name: Name recorded in metadata
            timestamp: Application time (defaults to now)

        Returns:
            New case-study document

        Raises:
            DocumentTypeError: If template or case study is malformed
        """
        if not isinstance(case_study, dict):
            raise DocumentTypeError("Case study must be a mapping", value_type=type(case_study).__name__)

        variables = variables or {}
        section_mapping = section_mapping or {}
        applied_at = timestamp or now_exact()
        settings = self.settings

        content = self.process(
            template, variables, preserve_existing=preserve_existing, existing_content=case_study
        )
        if not isinstance(content, dict):
            raise DocumentTypeError("Processed template must be a mapping", value_type=type(content).__name__)
        if section_mapping:
            content = apply_section_mapping(content, section_mapping, settings)

        updated = copy_document(case_study)
        for field_name in [*settings.fill_only_fields, settings.sections_field]:
            value = content.get(field_name)
            if not is_truthy(value):
                value = case_study.get(field_name)
            if value is not None:
                updated[field_name] = copy_document(value)

        metadata = updated.get(settings.metadata_field)
        updated[settings.metadata_field] = {
            **(metadata if isinstance(metadata, dict) else {}),
            "template_applied": {
                "template_id": template_id,
                "template_name": template_name,
                "applied_at": applied_at,
                "variables_used": copy_document(variables),
                "section_mapping": dict(section_mapping),
            },
        }
        updated[settings.updated_at_field] = applied_at

        _log_info(f"Applied template {template_name or template_id or '<unnamed>'} to case study")
        return updated
