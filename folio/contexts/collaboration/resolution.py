"""
Conflict Resolution

Produces the outcome of a concurrent-edit conflict under one of four strategies:

- server: keep the stored copy as is
- local: keep the local copy, stamped as modified now so it reads as newer
  than the stored copy on the next optimistic-lock check
- merge: stored copy overlaid with every local field, sections merged one
  level deep, creation time from the stored copy, modification time now
- cancel: abandon the save; there is no document to persist

The edit session around this (editing, conflict detected, user choosing) is
the caller's. resolve() is only the transition out of "conflict detected".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union

from folio.contexts.collaboration.conflicts import require_mapping
from folio.contexts.collaboration.exceptions import UnknownStrategyError
from folio.contexts.collaboration.logger import _log_debug, _log_info
from folio.contexts.collaboration.settings import (
    CollaborationSettings,
    get_collaboration_settings,
)
from folio.contexts.templating.document import Document, copy_document, is_truthy
from folio.utils.timestamp import now_exact


class ResolutionStrategy(str, Enum):
    SERVER = "server"
    LOCAL = "local"
    MERGE = "merge"
    CANCEL = "cancel"


@dataclass(frozen=True)
class ResolutionOutcome:
    """Base class for resolution outcomes."""

    strategy: ClassVar[ResolutionStrategy]

    @property
    def cancelled(self) -> bool:
        return False


@dataclass(frozen=True)
class UseServer(ResolutionOutcome):
    strategy: ClassVar[ResolutionStrategy] = ResolutionStrategy.SERVER
    document: Dict[str, Any]


@dataclass(frozen=True)
class UseLocal(ResolutionOutcome):
    strategy: ClassVar[ResolutionStrategy] = ResolutionStrategy.LOCAL
    document: Dict[str, Any]
    updated_at: str


@dataclass(frozen=True)
class Merge(ResolutionOutcome):
    strategy: ClassVar[ResolutionStrategy] = ResolutionStrategy.MERGE
    document: Dict[str, Any]


@dataclass(frozen=True)
class Cancelled(ResolutionOutcome):
    strategy: ClassVar[ResolutionStrategy] = ResolutionStrategy.CANCEL

    @property
    def cancelled(self) -> bool:
        return True


def _coerce_strategy(strategy: Union[str, ResolutionStrategy]) -> ResolutionStrategy:
    try:
        return ResolutionStrategy(strategy)
    except ValueError:
        raise UnknownStrategyError(strategy, [s.value for s in ResolutionStrategy]) from None


def merge_sections(local_sections: Any, server_sections: Any) -> Any:
    """
    Merge section maps, preferring local content.

    Every server section is kept. Each local section that is not None
    replaces the server one; when both are mappings their fields are merged
    one level deep with local fields winning.

    >>> merge_sections({"a": 9}, {"a": 1, "b": 2})
    {'a': 9, 'b': 2}
    """
    if not is_truthy(local_sections) and not is_truthy(server_sections):
        return {}
    if not is_truthy(local_sections):
        return copy_document(server_sections)
    if not is_truthy(server_sections):
        return copy_document(local_sections)
    if not (isinstance(local_sections, dict) and isinstance(server_sections, dict)):
        return copy_document(local_sections)

    merged = copy_document(server_sections)
    for key, local_section in local_sections.items():
        if local_section is None:
            continue
        server_section = merged.get(key)
        if isinstance(local_section, dict) and isinstance(server_section, dict):
            merged[key] = {**server_section, **copy_document(local_section)}
        else:
            merged[key] = copy_document(local_section)

    return merged


def smart_merge(
    local: Document,
    server: Document,
    timestamp: str,
    settings: Optional[CollaborationSettings] = None,
) -> Dict[str, Any]:
    """Merge local edits over the stored copy (see module docstring)."""
    settings = settings or get_collaboration_settings()
    local = copy_document(local)
    server = copy_document(server)

    merged = {**server, **local}

    if settings.created_at_field in server:
        merged[settings.created_at_field] = server[settings.created_at_field]
    else:
        merged.pop(settings.created_at_field, None)
    merged[settings.updated_at_field] = timestamp

    merged[settings.sections_field] = merge_sections(
        local.get(settings.sections_field), server.get(settings.sections_field)
    )
    return merged


def resolve(
    local: Document,
    server: Document,
    strategy: Union[str, ResolutionStrategy],
    timestamp: Optional[str] = None,
    settings: Optional[CollaborationSettings] = None,
) -> ResolutionOutcome:
    """
    Resolve a conflict between a local edit and the stored copy.

    Args:
        local: Case study as edited locally
        server: Case study as currently stored
        strategy: "server", "local", "merge" or "cancel"
        timestamp: Value for the refreshed modification time (defaults to now)
        settings: Field names (defaults to configured settings)

    Returns:
        UseServer, UseLocal, Merge or Cancelled; documents share nothing with the inputs

    Raises:
        UnknownStrategyError: If strategy is not one of the four names
        DocumentTypeError: If either side is not a mapping
    """
    strategy = _coerce_strategy(strategy)
    settings = settings or get_collaboration_settings()
    require_mapping(local, "Local document")
    require_mapping(server, "Server document")

    _log_debug(f"Resolving conflict with strategy '{strategy.value}'")

    if strategy is ResolutionStrategy.CANCEL:
        _log_info("Conflict resolution cancelled")
        return Cancelled()

    if strategy is ResolutionStrategy.SERVER:
        return UseServer(document=copy_document(server))

    timestamp = timestamp or now_exact()

    if strategy is ResolutionStrategy.LOCAL:
        document = copy_document(local)
        document[settings.updated_at_field] = timestamp
        return UseLocal(document=document, updated_at=timestamp)

    return Merge(document=smart_merge(local, server, timestamp, settings))
