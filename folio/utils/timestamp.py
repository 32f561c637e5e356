"""Timestamp formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def now() -> str:
    """Current UTC time to the second, e.g. "2025-11-13T18:45:40+00:00"."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def now_exact() -> str:
    """Current UTC time with microseconds, used for document update stamps."""
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp as stored on documents.

    Accepts a trailing "Z" (as written by the browser client) and treats
    naive timestamps as UTC so stamps from different writers compare.

    Args:
        value: ISO 8601 timestamp string, or None

    Returns:
        Timezone-aware datetime, or None if value is empty or unparseable

    Examples:
        parse_timestamp("2025-11-13T18:45:40.572Z")
        # datetime(2025, 11, 13, 18, 45, 40, 572000, tzinfo=timezone.utc)
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(iso_timestamp: str) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string

    Returns:
        "YYYY-MM-DD HH:MM:SS", or the input unchanged if it cannot be parsed
    """
    dt = parse_timestamp(iso_timestamp)
    if dt is None:
        return iso_timestamp
    return dt.strftime("%Y-%m-%d %H:%M:%S")
