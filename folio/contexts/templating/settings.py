"""
Templating settings.

Built from the "templating" section of folio/config/defaults.yaml (plus any
FOLIO_CONFIG_PATH override). Functions that take an optional settings
argument fall back to get_template_settings().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from folio.utils.config import load_settings


@dataclass
class TemplateSettings:
    """
    Field names and limits used by template validation and application.

    Attributes:
        required_fields: Top-level fields a valid template must define
        max_variable_occurrences: Repeat count above which a variable is flagged
        fill_only_fields: Fields template content may fill but never overwrite
        sections_field: Name of the keyed sections map
        metadata_field: Name of the case-study metadata map
        updated_at_field: Name of the modification timestamp
    """

    required_fields: List[str] = field(default_factory=lambda: ["title"])
    max_variable_occurrences: int = 10
    fill_only_fields: List[str] = field(default_factory=lambda: ["title", "description"])
    sections_field: str = "sections"
    metadata_field: str = "metadata"
    updated_at_field: str = "updated_at"

    @classmethod
    def from_config(cls, settings: Optional[Dict[str, Any]] = None) -> "TemplateSettings":
        """Build settings from a load_settings() dict (loaded if not given)."""
        if settings is None:
            settings = load_settings()
        return cls(**settings["templating"])


_default_settings: Optional[TemplateSettings] = None


def get_template_settings() -> TemplateSettings:
    """Return the process-wide settings, loading them on first use."""
    global _default_settings
    if _default_settings is None:
        _default_settings = TemplateSettings.from_config()
    return _default_settings
