"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup
- Configuration loading
- Timestamps
"""

from folio.utils.config import load_settings
from folio.utils.timestamp import now, now_exact, parse_timestamp

__all__ = ["load_settings", "now", "now_exact", "parse_timestamp"]
