"""
Conflict Detection

Compares a locally edited case study with the copy currently on the server,
field by field over a fixed watch list (title, description, category,
achievement, rating, sections by default). Differences inside sections are
not itemised: the whole field is reported once.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from folio.contexts.collaboration.logger import log_conflicts
from folio.contexts.collaboration.settings import (
    CollaborationSettings,
    get_collaboration_settings,
)
from folio.contexts.templating.document import Document, copy_document, documents_equal
from folio.contexts.templating.exceptions import DocumentTypeError


@dataclass(frozen=True)
class ConflictRecord:
    field: str
    local_value: Any
    server_value: Any
    label: str = ""


@dataclass(frozen=True)
class ConflictSummary:
    """Display strings for one conflict."""

    label: str
    local: str
    server: str


def require_mapping(value: Any, name: str) -> None:
    if not isinstance(value, dict):
        raise DocumentTypeError(f"{name} must be a mapping", value_type=type(value).__name__)


def values_conflict(local_value: Any, server_value: Any) -> bool:
    """
    Decide whether two field values conflict.

    Both missing (None) is no conflict, exactly one missing is a conflict,
    otherwise the values conflict unless structurally equal.
    """
    if local_value is None and server_value is None:
        return False
    if local_value is None or server_value is None:
        return True
    return not documents_equal(local_value, server_value)


def detect_conflicts(
    local: Document,
    server: Document,
    settings: Optional[CollaborationSettings] = None,
) -> List[ConflictRecord]:
    """
    List the watched fields on which local and server disagree.

    Args:
        local: Case study as edited locally
        server: Case study as currently stored
        settings: Watch list and labels (defaults to configured settings)

    Returns:
        One ConflictRecord per conflicting field, in watch-list order

    Raises:
        DocumentTypeError: If either side is not a mapping
    """
    settings = settings or get_collaboration_settings()
    require_mapping(local, "Local document")
    require_mapping(server, "Server document")

    conflicts = []
    for field_name, label in settings.watched_fields.items():
        local_value = local.get(field_name)
        server_value = server.get(field_name)
        if values_conflict(local_value, server_value):
            conflicts.append(
                ConflictRecord(
                    field=field_name,
                    local_value=copy_document(local_value),
                    server_value=copy_document(server_value),
                    label=label or field_name,
                )
            )

    log_conflicts(conflicts)
    return conflicts


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_value(value: Any, max_length: int = 100) -> str:
    """Short display form of a conflicting value."""
    if value is None:
        return "Empty"
    if isinstance(value, (dict, list)):
        return "Complex data"
    if isinstance(value, bool):
        return "true" if value else "false"
    return truncate_text(str(value), max_length)


def summarize_conflict(
    conflict: ConflictRecord,
    settings: Optional[CollaborationSettings] = None,
) -> ConflictSummary:
    """Build the label and both display values for a conflict."""
    settings = settings or get_collaboration_settings()
    max_length = settings.summary_max_length
    return ConflictSummary(
        label=conflict.label or conflict.field,
        local=format_value(conflict.local_value, max_length),
        server=format_value(conflict.server_value, max_length),
    )
