"""
Content Document Model

Case studies and templates are JSON-like documents:

    Document = None | bool | int | float | str | list[Document] | dict[str, Document]

This module holds the recursive helpers every other module builds on:
validation with copying, structural equality, string-leaf visitors, dotted
path lookup, and the truthiness / display rules the template language uses.
Those last two follow the browser client the documents were authored in, so
a template renders the same on either side.
"""

import json
import math
from typing import Any, Callable, Dict, Iterator, List, Union

from folio.contexts.templating.exceptions import DocumentTypeError

Document = Union[None, bool, int, float, str, List["Document"], Dict[str, "Document"]]
VariableMap = Dict[str, Any]


class _Missing:
    """Sentinel for a dotted path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

SCALAR_TYPES = (str, bool, int, float, type(None))


def _join_path(path: str, key: Union[str, int]) -> str:
    return f"{path}.{key}" if path else str(key)


def is_document(value: Any) -> bool:
    """Return True if value is a well-formed Document."""
    try:
        copy_document(value)
    except DocumentTypeError:
        return False
    return True


def copy_document(value: Any, path: str = "") -> Document:
    """
    Deep-copy a document, checking its shape on the way down.

    Args:
        value: Candidate document
        path: Location of value inside the outer document (for error messages)

    Returns:
        A copy sharing no containers with the input

    Raises:
        DocumentTypeError: If value (or anything nested in it) is not a Document
    """
    if isinstance(value, SCALAR_TYPES):
        return value

    if isinstance(value, list):
        return [copy_document(item, _join_path(path, i)) for i, item in enumerate(value)]

    if isinstance(value, dict):
        copied = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise DocumentTypeError(
                    "Document keys must be strings", path=path, value_type=type(key).__name__
                )
            copied[key] = copy_document(item, _join_path(path, key))
        return copied

    raise DocumentTypeError("Not a valid document value", path=path, value_type=type(value).__name__)


def documents_equal(left: Any, right: Any) -> bool:
    """
    Structural equality over documents.

    Maps compare by key set and values (key order ignored), lists element by
    element. Booleans never equal numbers, though 1 equals 1.0. NaN equals
    NaN, so a document always equals itself.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right

    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        if isinstance(left, float) and isinstance(right, float) and math.isnan(left):
            return math.isnan(right)
        return left == right

    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, str) and isinstance(right, str):
        return left == right

    if isinstance(left, dict) and isinstance(right, dict):
        if left.keys() != right.keys():
            return False
        return all(documents_equal(left[key], right[key]) for key in left)

    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(documents_equal(a, b) for a, b in zip(left, right))

    return False


def map_strings(document: Document, transform: Callable[[str], str]) -> Document:
    """
    Return a new document with transform applied to every string leaf.

    Lists are mapped element-wise and dicts value-wise; keys are untouched.
    """
    if isinstance(document, str):
        return transform(document)
    if isinstance(document, list):
        return [map_strings(item, transform) for item in document]
    if isinstance(document, dict):
        return {key: map_strings(value, transform) for key, value in document.items()}
    return document


def iter_strings(document: Document) -> Iterator[str]:
    """Yield every string leaf in document order."""
    if isinstance(document, str):
        yield document
    elif isinstance(document, list):
        for item in document:
            yield from iter_strings(item)
    elif isinstance(document, dict):
        for value in document.values():
            yield from iter_strings(value)


def is_truthy(value: Any) -> bool:
    """
    Truthiness as the template language sees it.

    None, False, 0, NaN and "" are false. Everything else is true,
    including empty lists and empty dicts.
    """
    if value is None or value is MISSING:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def lookup_path(variables: Any, path: str) -> Any:
    """
    Resolve a dotted path such as "user.name" or "items.0.title".

    Digit segments index into lists and tuples. Resolution stops as soon as an
    intermediate value is falsy or lacks the next key.

    Returns:
        The resolved value (which may be None), or MISSING
    """
    current = variables
    for key in path.split("."):
        if not is_truthy(current):
            return MISSING
        if isinstance(current, dict):
            current = current.get(key, MISSING)
        elif isinstance(current, (list, tuple)) and key.isdigit() and int(key) < len(current):
            current = current[int(key)]
        else:
            return MISSING
    return current


def to_display_string(value: Any) -> str:
    """
    String form of a variable value when substituted into text.

    >>> to_display_string(True)
    'true'
    >>> to_display_string(3.0)
    '3'
    >>> to_display_string(["a", "b"])
    'a,b'
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_display_string(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)
