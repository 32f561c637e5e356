"""
Settings loading for FOLIO.

Defaults ship in folio/config/defaults.yaml. A deployment may point
FOLIO_CONFIG_PATH (environment or .env) at a YAML file; its keys are merged
over the defaults.

Examples:
    >>> settings = load_settings()
    >>> settings["templating"]["max_variable_occurrences"]
    10

    >>> settings = load_settings(Path("configs/folio.yaml"))
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"


def load_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load FOLIO settings as a plain dict.

    Args:
        config_path: Optional override file. Defaults to FOLIO_CONFIG_PATH
                     env variable; when neither is set only defaults are used.

    Returns:
        Nested dict with "templating" and "collaboration" sections

    Raises:
        FileNotFoundError: If an override path is given but does not exist
    """
    if config_path is None and os.getenv("FOLIO_CONFIG_PATH"):
        config_path = Path(os.getenv("FOLIO_CONFIG_PATH"))

    config = OmegaConf.load(DEFAULTS_PATH)

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"FOLIO config not found at {config_path}")
        config = OmegaConf.merge(config, OmegaConf.load(config_path))

    return OmegaConf.to_container(config, resolve=True)
