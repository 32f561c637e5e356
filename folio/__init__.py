"""
FOLIO - content core for a portfolio / case-study CMS

Turns reusable content templates into case-study documents and reconciles
concurrent edits to those documents. Storage, rendering and image hosting
live outside this package; everything here works on in-memory documents.

Architecture:
- Templating Context: Template parsing, variable substitution, template merging
- Collaboration Context: Conflict detection, resolution strategies, version diffs
"""

__version__ = "0.1.0"
