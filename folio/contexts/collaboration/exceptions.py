"""Custom exceptions for the collaboration context."""

from typing import Iterable, Optional


class UnknownStrategyError(ValueError):
    """
    Exception raised when resolve() is given a strategy it does not know.

    This is a programming error in the caller, not a condition to retry.

    Attributes:
        strategy: The rejected strategy value
        allowed: Strategy names that are accepted
    """

    def __init__(self, strategy: object, allowed: Iterable[str]):
        self.strategy = strategy
        self.allowed = list(allowed)
        super().__init__(
            f"Unknown resolution strategy {strategy!r}. Expected one of: {', '.join(self.allowed)}"
        )


class ConcurrentUpdateError(Exception):
    """
    Exception raised by a persistence layer when a save finds the stored
    document newer than the copy being saved.

    Attributes:
        message: Error description
        document_id: Identifier of the contested document
        code: Machine-readable error code, always "CONCURRENT_UPDATE"
    """

    code = "CONCURRENT_UPDATE"

    def __init__(self, message: str = "Concurrent update detected", document_id: Optional[str] = None):
        self.message = message
        self.document_id = document_id
        super().__init__(message if document_id is None else f"{message} (document {document_id})")
