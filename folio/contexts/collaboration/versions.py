"""
Version comparison for case-study history.

compare_documents() produces the field-level diff shown when two saved
versions are compared; next_version_number() numbers a new snapshot.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from folio.contexts.collaboration.conflicts import require_mapping
from folio.contexts.collaboration.settings import (
    CollaborationSettings,
    get_collaboration_settings,
)
from folio.contexts.templating.document import Document, copy_document, documents_equal


@dataclass(frozen=True)
class FieldChange:
    field: str
    old: Any = None
    new: Any = None


@dataclass
class DocumentDiff:
    """
    Field-level differences between two versions.

    Attributes:
        added: Fields only in the newer version (value in .new)
        removed: Fields only in the older version (value in .old)
        modified: Fields present in both with different values
        unchanged: Names of fields equal in both
    """

    added: List[FieldChange] = field(default_factory=list)
    removed: List[FieldChange] = field(default_factory=list)
    modified: List[FieldChange] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed) + len(self.modified)

    @property
    def change_percentage(self) -> float:
        compared = self.total_changes + len(self.unchanged)
        if compared == 0:
            return 0.0
        return round(self.total_changes / compared * 100, 1)


def compare_documents(
    old: Document,
    new: Document,
    ignore: Optional[Iterable[str]] = None,
    settings: Optional[CollaborationSettings] = None,
) -> DocumentDiff:
    """
    Diff two versions of a document at the top level.

    Args:
        old: Earlier version
        new: Later version
        ignore: Fields to skip (defaults to the configured timestamp fields)
        settings: Configured defaults

    Returns:
        DocumentDiff with fields in old-then-new key order
    """
    require_mapping(old, "Old version")
    require_mapping(new, "New version")
    if ignore is None:
        ignore = (settings or get_collaboration_settings()).diff_ignored_fields
    ignored = set(ignore)

    diff = DocumentDiff()
    fields = [key for key in old if key not in ignored]
    fields += [key for key in new if key not in old and key not in ignored]

    for name in fields:
        if name not in old:
            diff.added.append(FieldChange(name, new=copy_document(new[name])))
        elif name not in new:
            diff.removed.append(FieldChange(name, old=copy_document(old[name])))
        elif documents_equal(old[name], new[name]):
            diff.unchanged.append(name)
        else:
            diff.modified.append(
                FieldChange(name, old=copy_document(old[name]), new=copy_document(new[name]))
            )

    return diff


def next_version_number(existing: Iterable[int]) -> int:
    """Number for a new snapshot: one past the highest existing, starting at 1."""
    return max(existing, default=0) + 1
