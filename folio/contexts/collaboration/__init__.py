"""
Collaboration Context

Responsibilities:
- Detects field-level conflicts between a local edit and the stored copy
- Resolves conflicts (keep server, keep local, smart merge, cancel)
- Recognises optimistic-lock failures
- Diffs saved versions for history views

Owns: Concurrent-edit reconciliation, version comparison
Never: Persists documents, renders conflict dialogs
"""

from folio.contexts.collaboration.conflicts import (
    ConflictRecord,
    ConflictSummary,
    detect_conflicts,
    summarize_conflict,
    values_conflict,
)
from folio.contexts.collaboration.exceptions import ConcurrentUpdateError, UnknownStrategyError
from folio.contexts.collaboration.resolution import (
    Cancelled,
    Merge,
    ResolutionOutcome,
    ResolutionStrategy,
    UseLocal,
    UseServer,
    merge_sections,
    resolve,
)
from folio.contexts.collaboration.resolver import ConflictResolver
from folio.contexts.collaboration.settings import CollaborationSettings
from folio.contexts.collaboration.signals import has_concurrent_update, is_concurrent_update
from folio.contexts.collaboration.versions import (
    DocumentDiff,
    FieldChange,
    compare_documents,
    next_version_number,
)

__all__ = [
    # Detection
    "detect_conflicts",
    "values_conflict",
    "summarize_conflict",
    "ConflictRecord",
    "ConflictSummary",
    # Resolution
    "resolve",
    "merge_sections",
    "ResolutionStrategy",
    "ResolutionOutcome",
    "UseServer",
    "UseLocal",
    "Merge",
    "Cancelled",
    "ConflictResolver",
    "CollaborationSettings",
    # Optimistic locking
    "has_concurrent_update",
    "is_concurrent_update",
    "ConcurrentUpdateError",
    "UnknownStrategyError",
    # Version history
    "compare_documents",
    "next_version_number",
    "DocumentDiff",
    "FieldChange",
]
