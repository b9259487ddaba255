"""
Packaged data tables.

Word lists, correction pairs, origin overrides and phrase tables ship as
YAML files in ``varnavinyas/data``. Each file is parsed once per process;
callers get the parsed structure and must treat it as read-only.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from varnavinyas.exceptions import VarnavinyasError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"


@lru_cache(maxsize=None)
def load_table(name: str) -> Any:
    """
    Load ``data/<name>.yaml``.

    Args:
        name: File stem, e.g. "corrections".

    Returns:
        The parsed YAML document.

    Raises:
        VarnavinyasError: If the file is missing or malformed.
    """
    path = DATA_DIR / f"{name}.yaml"
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise VarnavinyasError(f"data table not found: {path}") from e
    except yaml.YAMLError as e:
        raise VarnavinyasError(f"malformed data table {path}: {e}") from e

    if data is None:
        raise VarnavinyasError(f"data table is empty: {path}")
    logger.debug("Loaded data table %s", name)
    return data
