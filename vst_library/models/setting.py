"""Setting record model."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional

from vst_library.utils.timestamps import isoformat, parse_timestamp

VST_PATHS_KEY = "vst_paths"

# Default VST plugin paths for Windows
DEFAULT_VST_PATHS = ",".join(
    [
        "C:\\Program Files (x86)\\Steinberg\\VstPlugins",  # VST2, 32-bit on 64-bit Windows
        "C:\\Program Files\\VSTPlugins",  # VST2, 64-bit
        "C:\\Program Files\\Common Files\\VST2",
        "C:\\Program Files\\Common Files\\VST3",  # VST3, 64-bit
        "C:\\Program Files (x86)\\Common Files\\VST3",  # VST3, 32-bit on 64-bit Windows
    ]
)


@dataclass
class SettingRecord:
    """One key/value configuration entry."""

    key: str
    value: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SettingRecord":
        return cls(
            key=row["key"],
            value=row["value"],
            description=row.get("description"),
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at")),
        )

    def split_values(self) -> List[str]:
        """Comma-separated value as a list of trimmed, non-empty entries."""
        return [part.strip() for part in self.value.split(",") if part.strip()]

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "value": self.value,
            "description": self.description,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<SettingRecord {self.key}>"


DEFAULT_SETTINGS = [
    SettingRecord(
        key=VST_PATHS_KEY,
        value=DEFAULT_VST_PATHS,
        description="Comma-separated list of directories containing VST plugins",
    ),
]
