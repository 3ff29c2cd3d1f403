"""
JSON file helpers used by the repository.

Each collection lives in its own pretty-printed document; a write always
replaces the whole file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import json

from wishlist_api.core.logger import get_logger

logger = get_logger(__name__)


class StorageWriteError(RuntimeError):
    """Raised when a collection could not be written to disk."""

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"Could not write {path}: {cause}")
        self.path = path


def load(path: Path, default: Any) -> Any:
    """Read a JSON document; a missing or unreadable file yields ``default``."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Error reading %s, starting empty: %s", path, exc)
        return default
    if not isinstance(data, type(default)):
        logger.warning("Unexpected content in %s (%s), starting empty", path, type(data).__name__)
        return default
    return data


def save(path: Path, data: Any) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)
    except OSError as exc:
        logger.error("Error writing %s: %s", path, exc)
        raise StorageWriteError(path, exc) from exc
    logger.debug("Wrote %s", path)
