"""Plugin query and command service."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from marshmallow import ValidationError

from vst_library.errors import InvalidArgumentError, NotFoundError
from vst_library.models.plugin import PluginRecord
from vst_library.repositories.plugin_repository import PluginRepository
from vst_library.schemas.request_schemas import PluginUpdateSchema
from vst_library.utils.plugin_fields import (
    encode_paths,
    encode_sub_categories,
    normalize_paths,
    normalize_sub_categories,
)
from vst_library.utils.timestamps import isoformat, parse_timestamp, utcnow

logger = logging.getLogger(__name__)

plugin_update_schema = PluginUpdateSchema()


def _require(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(message)
    return value


class PluginService:
    """
    Read, update and delete operations over stored plugins.

    Arguments are validated before the store is touched; missing plugins
    raise ``NotFoundError``.
    """

    def __init__(self, plugin_repository: PluginRepository):
        self._plugin_repository = plugin_repository

    def list(self) -> List[PluginRecord]:
        """All plugins ordered by name."""
        return self._plugin_repository.find_all()

    def search(self, term: Optional[str]) -> List[PluginRecord]:
        """Plugins whose name, vendor or path contains ``term`` (case-insensitive)."""
        _require(term, "Search query is required")
        return self._plugin_repository.search(term.strip())

    def get_by_id(self, plugin_id: Optional[str]) -> PluginRecord:
        """
        Get plugin by id.

        Raises:
            InvalidArgumentError: Empty id.
            NotFoundError: Unknown id.
        """
        _require(plugin_id, "Plugin ID is required")
        plugin = self._plugin_repository.find_by_id(plugin_id)
        if plugin is None:
            raise NotFoundError(f"Plugin {plugin_id} not found")
        return plugin

    def update(self, plugin_id: Optional[str], fields: Optional[Mapping[str, Any]]) -> PluginRecord:
        """
        Update plugin fields.

        ``fields`` uses the API's field names (``subCategories``,
        ``sdkVersion``, ``isValid``...). ``path`` and ``subCategories`` are
        re-encoded for storage.

        Raises:
            InvalidArgumentError: Empty id, empty or unknown fields.
            NotFoundError: Unknown id.
        """
        _require(plugin_id, "Plugin ID is required")
        if not fields:
            raise InvalidArgumentError("Update data is required")
        try:
            data = plugin_update_schema.load(fields)
        except ValidationError as err:
            raise InvalidArgumentError(f"Invalid update data: {err.messages}") from err

        if not self._plugin_repository.exists(plugin_id):
            raise NotFoundError(f"Plugin {plugin_id} not found")

        values: Dict[str, Any] = dict(data)
        if "path" in values:
            values["path"] = encode_paths(normalize_paths(values["path"]))
        if "subCategories" in values:
            values["subCategories"] = encode_sub_categories(
                normalize_sub_categories(values["subCategories"])
            )
        values["updated_at"] = utcnow()

        self._plugin_repository.update_columns(plugin_id, values)
        logger.info("Updated plugin %s (%s)", plugin_id, ", ".join(sorted(data)))
        return self.get_by_id(plugin_id)

    def delete_one(self, plugin_id: Optional[str]) -> bool:
        """
        Delete a plugin.

        Deleting an unknown id succeeds and returns False.
        """
        _require(plugin_id, "Plugin ID is required")
        deleted = self._plugin_repository.delete(plugin_id) > 0
        if deleted:
            logger.info("Deleted plugin %s", plugin_id)
        else:
            logger.info("Delete requested for unknown plugin %s", plugin_id)
        return deleted

    def delete_all(self) -> int:
        """Delete every plugin, returning how many were removed."""
        count = self._plugin_repository.delete_all()
        logger.info("Deleted all plugins (%d rows)", count)
        return count

    def save_key(self, plugin_id: Optional[str], key: Optional[str]) -> PluginRecord:
        """
        Attach a user-supplied key (license/activation) to a plugin.

        An empty string clears the key.

        Raises:
            InvalidArgumentError: Empty id or missing key.
            NotFoundError: Unknown id.
        """
        _require(plugin_id, "Plugin ID is required")
        if key is None:
            raise InvalidArgumentError("Key value is required")

        updated = self._plugin_repository.update_columns(
            plugin_id, {"key": key, "updated_at": utcnow()}
        )
        if not updated:
            raise NotFoundError(f"Plugin {plugin_id} not found")

        logger.info("Saved key for plugin %s", plugin_id)
        return self.get_by_id(plugin_id)

    def stats(self) -> Dict[str, Any]:
        """Library statistics for the dashboard."""
        row = self._plugin_repository.stats()
        total = int(row["total"] or 0)
        valid = int(row["valid"] or 0)
        return {
            "total": total,
            "valid": valid,
            "invalid": total - valid,
            "withKey": int(row["with_key"] or 0),
            "vendors": int(row["vendors"] or 0),
            "lastUpdated": isoformat(parse_timestamp(row["last_updated"])),
        }
