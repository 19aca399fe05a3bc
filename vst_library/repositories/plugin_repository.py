"""Plugin repository implementation."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Text, select, insert, update, delete, and_, or_, func, case, true

from vst_library.models.plugin import PluginRecord
from vst_library.models.scan_entry import ScanEntry
from vst_library.models.tables import plugins_table
from vst_library.repositories.base import BaseRepository
from vst_library.utils.plugin_fields import encode_paths, encode_sub_categories, json_escape

_plugins = plugins_table.c


def _folded(column):
    """``casefold(column)``, registered on each SQLite connection by the store."""
    return func.casefold(column, type_=Text)


def _scanner_values(entry: ScanEntry) -> Dict[str, Any]:
    """Column values owned by the scanner (everything except key and timestamps)."""
    return {
        "name": entry.name,
        "vendor": entry.vendor,
        "version": entry.version,
        "category": entry.category,
        "subCategories": encode_sub_categories(entry.sub_categories),
        "sdkVersion": entry.sdk_version,
        "path": encode_paths(entry.paths),
        "cid": entry.cid,
        "cardinality": entry.cardinality,
        "flags": entry.flags,
        "isValid": entry.is_valid,
        "error": entry.error,
    }


class PluginRepository(BaseRepository):
    """Repository for the ``plugins`` table."""

    def ensure_schema(self) -> None:
        """Create the tables up front (before a bulk write)."""
        self._database.initialize()

    def find_all(self) -> List[PluginRecord]:
        """All plugins ordered by name."""
        rows = self._database.query(select(plugins_table).order_by(_plugins.name))
        return [PluginRecord.from_row(row) for row in rows]

    def search(self, term: str) -> List[PluginRecord]:
        """
        Plugins whose name, vendor or path contains ``term``, ignoring case.

        Case is folded with ``str.casefold``, so non-ASCII names match too.
        Multi-path rows hold a JSON array, so the path is also matched
        against the JSON-escaped term (a stored ``C:\\\\VST`` matches ``C:\\VST``).
        """
        folded = term.casefold()
        path = _folded(_plugins.path)
        statement = (
            select(plugins_table)
            .where(
                or_(
                    _folded(_plugins.name).contains(folded, autoescape=True),
                    _folded(_plugins.vendor).contains(folded, autoescape=True),
                    path.contains(folded, autoescape=True),
                    path.contains(json_escape(folded), autoescape=True),
                )
            )
            .order_by(_plugins.name)
        )
        return [PluginRecord.from_row(row) for row in self._database.query(statement)]

    def find_by_id(self, plugin_id: str) -> Optional[PluginRecord]:
        """Find plugin by id."""
        rows = self._database.query(select(plugins_table).where(_plugins.id == plugin_id))
        return PluginRecord.from_row(rows[0]) if rows else None

    def exists(self, plugin_id: str) -> bool:
        """Check if a plugin id is stored."""
        rows = self._database.query(select(_plugins.id).where(_plugins.id == plugin_id))
        return bool(rows)

    def insert_entry(self, entry: ScanEntry, now: datetime) -> None:
        """Insert a scanned plugin with both timestamps set to ``now``."""
        values = _scanner_values(entry)
        values.update(id=entry.id, key=entry.key, created_at=now, updated_at=now)
        self._database.execute(insert(plugins_table).values(**values))

    def update_entry(self, entry: ScanEntry, now: datetime) -> int:
        """
        Overwrite the scanner-owned fields of an existing plugin.

        ``created_at`` is never touched; ``key`` only when the entry carries one
        (an imported export), so user keys survive a re-scan.
        """
        values = _scanner_values(entry)
        values["updated_at"] = now
        if entry.key is not None:
            values["key"] = entry.key
        return self._database.execute(
            update(plugins_table).where(_plugins.id == entry.id).values(**values)
        )

    def update_columns(self, plugin_id: str, values: Dict[str, Any]) -> int:
        """Update raw column values (already storage-encoded)."""
        return self._database.execute(
            update(plugins_table).where(_plugins.id == plugin_id).values(**values)
        )

    def delete(self, plugin_id: str) -> int:
        """Delete plugin by id, returning the number of removed rows."""
        return self._database.execute(delete(plugins_table).where(_plugins.id == plugin_id))

    def delete_all(self) -> int:
        """Delete every plugin."""
        return self._database.execute(delete(plugins_table))

    def stats(self) -> Dict[str, Any]:
        """Aggregate counts over the table."""
        is_valid = case((_plugins.isValid == true(), 1), else_=0)
        has_key = case(
            (and_(_plugins["key"].is_not(None), _plugins["key"] != ""), 1), else_=0
        )
        statement = select(
            func.count().label("total"),
            func.coalesce(func.sum(is_valid), 0).label("valid"),
            func.coalesce(func.sum(has_key), 0).label("with_key"),
            func.count(func.distinct(_plugins.vendor)).label("vendors"),
            func.max(_plugins.updated_at).label("last_updated"),
        ).select_from(plugins_table)
        return self._database.query(statement)[0]
