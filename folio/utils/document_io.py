"""
Reading and writing documents on disk.

Templates, variable files and case-study snapshots are kept as YAML (JSON
files load too, JSON being YAML). Interpolations are not resolved: "${...}"
in content is text, not an OmegaConf reference.
"""

from pathlib import Path
from typing import Any

from omegaconf import OmegaConf


def load_document(path: Path) -> Any:
    """
    Load a YAML/JSON document as plain Python containers.

    Raises:
        FileNotFoundError: If path does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return OmegaConf.to_container(OmegaConf.load(path), resolve=False)


def dump_document(document: Any) -> str:
    """Serialize a mapping or list document to YAML text."""
    return OmegaConf.to_yaml(OmegaConf.create(document)).rstrip() + "\n"


def save_document(document: Any, path: Path) -> Path:
    """Write a mapping or list document to path as YAML."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_document(document), encoding="utf-8")
    return path
