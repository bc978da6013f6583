"""
JSON record storage helpers for the filesystem repositories.

Records are written to a temporary sibling file and moved into place with
os.replace, so readers never observe a half-written record.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def write_json(path: Path, data: dict[str, Any]) -> None:
    """
    Atomically write a JSON record, creating parent directories.

    Raises:
        OSError: If the record cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(path: Path) -> Optional[dict[str, Any]]:
    """
    Read a JSON record.

    Returns:
        The record, or None if the file is missing or not a valid record
    """
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Skipping unreadable record {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Skipping malformed record {path}: not a JSON object")
        return None

    return data
