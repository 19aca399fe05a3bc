"""Setting repository implementation."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, insert, update

from vst_library.models.setting import SettingRecord
from vst_library.models.tables import settings_table
from vst_library.repositories.base import BaseRepository

_settings = settings_table.c


class SettingRepository(BaseRepository):
    """Repository for the ``settings`` key/value table."""

    def find_all(self) -> List[SettingRecord]:
        """All settings ordered by key."""
        rows = self._database.query(select(settings_table).order_by(_settings["key"]))
        return [SettingRecord.from_row(row) for row in rows]

    def find_by_key(self, key: str) -> Optional[SettingRecord]:
        """Find setting by key."""
        rows = self._database.query(select(settings_table).where(_settings["key"] == key))
        return SettingRecord.from_row(rows[0]) if rows else None

    def insert(
        self, key: str, value: str, description: Optional[str], now: datetime
    ) -> None:
        """Insert a new setting."""
        self._database.execute(
            insert(settings_table).values(
                key=key,
                value=value,
                description=description,
                created_at=now,
                updated_at=now,
            )
        )

    def update_value(
        self, key: str, value: str, now: datetime, description: Optional[str] = None
    ) -> int:
        """Update a setting's value (and description when given)."""
        values = {"value": value, "updated_at": now}
        if description is not None:
            values["description"] = description
        return self._database.execute(
            update(settings_table).where(_settings["key"] == key).values(**values)
        )
