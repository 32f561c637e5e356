"""
Concurrent update signals.

Helpers for the optimistic-lock check a persistence layer performs before a
save, and for recognising the error it raises when that check fails.
"""

from typing import Optional

from folio.contexts.collaboration.conflicts import require_mapping
from folio.contexts.collaboration.exceptions import ConcurrentUpdateError
from folio.contexts.collaboration.settings import (
    CollaborationSettings,
    get_collaboration_settings,
)
from folio.contexts.templating.document import Document
from folio.utils.timestamp import parse_timestamp


def has_concurrent_update(
    local: Document,
    server: Document,
    settings: Optional[CollaborationSettings] = None,
) -> bool:
    """
    Return True if the stored copy was modified after the local copy was read.

    Both copies must carry a parseable modification time; otherwise there is
    nothing to compare and the save is allowed.
    """
    settings = settings or get_collaboration_settings()
    require_mapping(local, "Local document")
    require_mapping(server, "Server document")

    local_time = parse_timestamp(local.get(settings.updated_at_field))
    server_time = parse_timestamp(server.get(settings.updated_at_field))
    if local_time is None or server_time is None:
        return False
    return server_time > local_time


def is_concurrent_update(error: Optional[BaseException]) -> bool:
    """
    Recognise a concurrent-update failure from a persistence call.

    Matches errors whose code is "CONCURRENT_UPDATE" and errors whose message
    mentions a concurrent update.
    """
    if error is None:
        return False
    if getattr(error, "code", None) == ConcurrentUpdateError.code:
        return True
    return "concurrent update" in str(error).lower()
