"""
Collaboration settings.

Built from the "collaboration" section of folio/config/defaults.yaml (plus
any FOLIO_CONFIG_PATH override).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from folio.utils.config import load_settings


def _default_watched_fields() -> Dict[str, str]:
    return {
        "title": "Project Title",
        "description": "Project Description",
        "category": "Category",
        "achievement": "Achievement",
        "rating": "Rating",
        "sections": "Content Sections",
    }


@dataclass
class CollaborationSettings:
    """
    Field names used by conflict detection and resolution.

    Attributes:
        watched_fields: Field -> display label, compared in this order
        sections_field: Name of the keyed sections map
        created_at_field: Name of the creation timestamp
        updated_at_field: Name of the modification timestamp
        diff_ignored_fields: Fields left out of version comparisons
        summary_max_length: Truncation length for conflict summaries
    """

    watched_fields: Dict[str, str] = field(default_factory=_default_watched_fields)
    sections_field: str = "sections"
    created_at_field: str = "created_at"
    updated_at_field: str = "updated_at"
    diff_ignored_fields: List[str] = field(default_factory=lambda: ["created_at", "updated_at"])
    summary_max_length: int = 100

    @classmethod
    def from_config(cls, settings: Optional[Dict[str, Any]] = None) -> "CollaborationSettings":
        """Build settings from a load_settings() dict (loaded if not given)."""
        if settings is None:
            settings = load_settings()
        return cls(**settings["collaboration"])


_default_settings: Optional[CollaborationSettings] = None


def get_collaboration_settings() -> CollaborationSettings:
    """Return the process-wide settings, loading them on first use."""
    global _default_settings
    if _default_settings is None:
        _default_settings = CollaborationSettings.from_config()
    return _default_settings
