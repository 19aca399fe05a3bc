"""Derivation and storage encoding for plugin record fields."""
import json
import logging
import re
from typing import Any, List, Optional, Union

logger = logging.getLogger(__name__)

UNKNOWN_PLUGIN_NAME = "Unknown Plugin"

_PLUGIN_SUFFIX_RE = re.compile(r"\.vst3?$", re.IGNORECASE)
_PATH_SEPARATOR_RE = re.compile(r"[\\/]")
_QUOTED_RE = re.compile(r'"([^"]*)"')

PathValue = Union[str, List[str]]


def normalize_paths(value: Any) -> List[str]:
    """Coerce a scanner ``path`` value (string, list or missing) to a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return [str(value)]


def normalize_sub_categories(value: Any) -> List[str]:
    """
    Coerce a scanner ``subCategories`` value to a list of strings.

    Scanners report either a list or a single string; VST3 category strings
    use ``|`` between entries (``"Fx|EQ"``). A string holding a JSON array
    (as written by earlier exports) is decoded.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            return decode_sub_categories(text)
        if "|" in text:
            return [part.strip() for part in text.split("|") if part.strip()]
        return [text]
    return [str(value)]


def derive_plugin_id(
    explicit_id: Optional[str], cid: Optional[str], paths: List[str]
) -> Optional[str]:
    """Stable identity: explicit id, then cid, then the first path."""
    for candidate in (explicit_id, cid):
        if candidate is not None and str(candidate).strip():
            return str(candidate)
    if paths:
        return paths[0]
    return None


def derive_name(name: Optional[str], paths: List[str]) -> str:
    """Display name, falling back to the plugin file name without its extension."""
    if name and name.strip():
        return name
    if paths:
        segment = _PATH_SEPARATOR_RE.split(paths[0].rstrip("\\/"))[-1]
        stem = _PLUGIN_SUFFIX_RE.sub("", segment)
        if stem:
            return stem
    return UNKNOWN_PLUGIN_NAME


def encode_paths(paths: List[str]) -> Optional[str]:
    """Store one path as a plain string and several as a JSON array string."""
    if not paths:
        return None
    if len(paths) == 1:
        return paths[0]
    return json.dumps(list(paths), ensure_ascii=False)


def json_escape(text: str) -> str:
    """``text`` as it appears inside a stored JSON string (backslashes and quotes escaped)."""
    return json.dumps(text, ensure_ascii=False)[1:-1]


def decode_path(stored: Optional[str]) -> Optional[PathValue]:
    """
    Reverse ``encode_paths``.

    Rows written before multi-path support hold a plain string, which is
    returned unchanged. A one-element array collapses to its string.
    """
    if stored is None or not stored.startswith("["):
        return stored

    try:
        decoded = json.loads(stored)
    except ValueError:
        match = _QUOTED_RE.search(stored)
        logger.warning("Could not decode stored plugin path %r", stored)
        return match.group(1) if match else stored

    if not isinstance(decoded, list):
        return stored
    if len(decoded) == 1:
        return str(decoded[0])
    return [str(item) for item in decoded]


def encode_sub_categories(sub_categories: Optional[List[str]]) -> str:
    """JSON-encode sub-categories; an empty or missing list becomes ``"[]"``."""
    return json.dumps(list(sub_categories or []))


def decode_sub_categories(stored: Optional[str]) -> List[str]:
    """Decode stored sub-categories, defaulting to an empty list."""
    if not stored:
        return []
    try:
        decoded = json.loads(stored)
    except ValueError:
        logger.warning("Could not decode stored subCategories %r", stored)
        return []
    if not isinstance(decoded, list):
        logger.warning("Stored subCategories is not a list: %r", stored)
        return []
    return [str(item) for item in decoded]
