"""Custom exceptions for the templating context."""

from typing import Optional


class DocumentTypeError(TypeError):
    """
    Exception raised when a value is not a valid content document.

    Documents are JSON-like: None, bool, int, float, str, lists of documents,
    and dicts with string keys. Anything else (sets, tuples, arbitrary
    objects, non-string keys) is rejected.

    Attributes:
        message: Error description
        path: Dotted location of the offending value (empty for the root)
        value_type: Name of the offending value's type
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        value_type: Optional[str] = None,
    ):
        self.message = message
        self.path = path
        self.value_type = value_type

        parts = [message]
        if path:
            parts.append(f"at '{path}'")
        if value_type:
            parts.append(f"(got {value_type})")

        super().__init__(" ".join(parts))


class ConditionSyntaxError(ValueError):
    """
    Exception raised when an {{#if ...}} expression cannot be parsed.

    Conditional resolution catches this and treats the block as false,
    so it never escapes process_template().

    Attributes:
        expression: The expression text as written in the template
        position: Character offset where parsing stopped
    """

    def __init__(self, message: str, expression: str, position: int = 0):
        self.expression = expression
        self.position = position
        super().__init__(f"{message} in condition '{expression}' (at {position})")
