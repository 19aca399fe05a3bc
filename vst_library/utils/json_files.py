"""Atomic JSON file writes."""
import json
import logging
import os
import tempfile
from typing import Any

from vst_library.errors import StorageAccessError

logger = logging.getLogger(__name__)


def write_json_atomic(path: str, data: Any) -> None:
    """
    Write ``data`` as indented JSON, replacing ``path`` atomically.

    Creates the containing directory when missing.

    Raises:
        StorageAccessError: Directory or file cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    except OSError as exc:
        raise StorageAccessError(f"Cannot write {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.warning("Could not remove temporary file %s", tmp_path)
        raise StorageAccessError(f"Cannot write {path}: {exc}") from exc
