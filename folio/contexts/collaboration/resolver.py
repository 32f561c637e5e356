"""
Conflict resolver service.

Bundles detection, resolution and the supporting helpers behind one object
built with explicit settings, for callers that keep services on an
application container rather than calling module functions.
"""

from typing import Iterable, List, Optional, Union

from folio.contexts.collaboration.conflicts import (
    ConflictRecord,
    ConflictSummary,
    detect_conflicts,
    summarize_conflict,
)
from folio.contexts.collaboration.resolution import (
    ResolutionOutcome,
    ResolutionStrategy,
    resolve,
)
from folio.contexts.collaboration.settings import (
    CollaborationSettings,
    get_collaboration_settings,
)
from folio.contexts.collaboration.signals import has_concurrent_update
from folio.contexts.collaboration.versions import DocumentDiff, compare_documents
from folio.contexts.templating.document import Document


class ConflictResolver:
    """
    Example:
        resolver = ConflictResolver()
        if resolver.has_concurrent_update(local, server):
            conflicts = resolver.detect(local, server)
            outcome = resolver.resolve(local, server, "merge")
    """

    def __init__(self, settings: Optional[CollaborationSettings] = None):
        self.settings = settings or get_collaboration_settings()

    def detect(self, local: Document, server: Document) -> List[ConflictRecord]:
        return detect_conflicts(local, server, self.settings)

    def summarize(self, conflicts: Iterable[ConflictRecord]) -> List[ConflictSummary]:
        return [summarize_conflict(conflict, self.settings) for conflict in conflicts]

    def resolve(
        self,
        local: Document,
        server: Document,
        strategy: Union[str, ResolutionStrategy],
        timestamp: Optional[str] = None,
    ) -> ResolutionOutcome:
        return resolve(local, server, strategy, timestamp=timestamp, settings=self.settings)

    def has_concurrent_update(self, local: Document, server: Document) -> bool:
        return has_concurrent_update(local, server, self.settings)

    def compare(self, old: Document, new: Document) -> DocumentDiff:
        return compare_documents(old, new, settings=self.settings)
