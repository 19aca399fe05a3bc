"""Plugin record model."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional

from vst_library.utils.plugin_fields import PathValue, decode_path, decode_sub_categories
from vst_library.utils.timestamps import isoformat, parse_timestamp


@dataclass
class PluginRecord:
    """
    One logical plugin, possibly installed at several paths.

    ``path`` holds the decoded value: a string for a single location or a
    list when the scanner reported several (e.g. per-architecture builds).
    """

    id: str
    name: str
    path: Optional[PathValue] = None
    vendor: Optional[str] = None
    version: Optional[str] = None
    category: Optional[str] = None
    sub_categories: List[str] = field(default_factory=list)
    sdk_version: Optional[str] = None
    cid: Optional[str] = None
    cardinality: Optional[int] = None
    flags: Optional[int] = None
    is_valid: bool = True
    error: Optional[str] = None
    key: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PluginRecord":
        """Build a record from a ``plugins`` row, decoding stored encodings."""
        is_valid = row.get("isValid")
        return cls(
            id=row["id"],
            name=row["name"],
            path=decode_path(row.get("path")),
            vendor=row.get("vendor"),
            version=row.get("version"),
            category=row.get("category"),
            sub_categories=decode_sub_categories(row.get("subCategories")),
            sdk_version=row.get("sdkVersion"),
            cid=row.get("cid"),
            cardinality=row.get("cardinality"),
            flags=row.get("flags"),
            is_valid=True if is_valid is None else bool(is_valid),
            error=row.get("error"),
            key=row.get("key"),
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at")),
        )

    @property
    def paths(self) -> List[str]:
        """All locations as a list."""
        if self.path is None:
            return []
        if isinstance(self.path, str):
            return [self.path]
        return list(self.path)

    def to_dict(self) -> dict:
        """Return the dictionary shape served to the UI and written on export."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "vendor": self.vendor,
            "version": self.version,
            "category": self.category,
            "subCategories": list(self.sub_categories),
            "sdkVersion": self.sdk_version,
            "cid": self.cid,
            "cardinality": self.cardinality,
            "flags": self.flags,
            "isValid": self.is_valid,
            "error": self.error,
            "key": self.key,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<PluginRecord {self.id} ({self.name})>"
