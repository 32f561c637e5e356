"""
Template variable discovery.

Scans every string leaf of a template for {{name}} references and turns the
unique names into form-ready variable definitions. Loop and conditional tags
are not variables; references inside their bodies are.
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from folio.contexts.templating.document import Document, copy_document, iter_strings
from folio.contexts.templating.syntax import iter_variables, parse

LABEL_SEPARATORS = re.compile(r"[._-]")


@dataclass(frozen=True)
class VariableDefinition:
    """
    Metadata for one template variable.

    Attributes:
        name: Dotted variable path as written in the template
        label: Human-readable label derived from the name
        description: Short help text
        required: Whether a value must be supplied
        default_value: Value used when none is supplied
        type: Input type hint for editors
    """

    name: str
    label: str
    description: str = ""
    required: bool = True
    default_value: str = ""
    type: str = "text"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def generate_variable_label(variable_name: str) -> str:
    """
    Build a label by splitting on ".", "_" and "-" and capitalising each part.

    >>> generate_variable_label("user.first_name")
    'User First Name'
    """
    return " ".join(word[:1].upper() + word[1:] for word in LABEL_SEPARATORS.split(variable_name))


def extract_variable_names(document: Document) -> List[str]:
    """Unique variable names in first-seen order."""
    names: Dict[str, None] = {}
    for text in iter_strings(document):
        if "{{" not in text:
            continue
        for variable in iter_variables(parse(text)):
            names.setdefault(variable.name, None)
    return list(names)


def extract_variables(document: Document) -> List[VariableDefinition]:
    """
    Discover the variables a template references.

    Args:
        document: Template content

    Returns:
        One VariableDefinition per unique name, in first-seen order

    Raises:
        DocumentTypeError: If document is not a valid document
    """
    copy_document(document)
    return [
        VariableDefinition(
            name=name,
            label=generate_variable_label(name),
            description=f"Variable: {name}",
        )
        for name in extract_variable_names(document)
    ]
