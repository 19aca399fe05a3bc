"""Export and import of the plugin library as JSON files."""
import logging
from typing import List, Optional

from vst_library.errors import InvalidArgumentError
from vst_library.repositories.plugin_repository import PluginRepository
from vst_library.schemas.scan_schemas import (
    extract_plugin_list,
    load_json_document,
    parse_scan_payload,
)
from vst_library.services.plugin_sync_service import PluginSyncService, SyncResult
from vst_library.utils.json_files import write_json_atomic

logger = logging.getLogger(__name__)


class TransferService:
    """Writes the library to ``exported-plugins.json`` and imports uploaded files."""

    def __init__(
        self,
        plugin_repository: PluginRepository,
        sync_service: PluginSyncService,
        exported_plugins_path: str,
    ):
        self._plugin_repository = plugin_repository
        self._sync_service = sync_service
        self._exported_plugins_path = exported_plugins_path

    def export_data(self) -> List[dict]:
        """Current plugins in their exported shape."""
        return [plugin.to_dict() for plugin in self._plugin_repository.find_all()]

    def export_plugins(self) -> str:
        """Write ``{"plugins": [...]}`` to the export file and return its path."""
        plugins = self.export_data()
        write_json_atomic(self._exported_plugins_path, {"plugins": plugins})
        logger.info("Exported %d plugins to %s", len(plugins), self._exported_plugins_path)
        return self._exported_plugins_path

    def import_file(self, filename: Optional[str], content: Optional[str]) -> SyncResult:
        """
        Import an uploaded JSON file.

        The file may hold a bare plugin list or ``{"plugins": [...]}``. Its
        plugins become the canonical scan-result file, which is then synced.

        Raises:
            InvalidArgumentError: No file, or not a ``.json`` file.
            MalformedPayloadError: Invalid JSON or no plugins list.
        """
        if not filename or content is None:
            raise InvalidArgumentError("No file provided")
        if not filename.lower().endswith(".json"):
            raise InvalidArgumentError("File must be a JSON file")

        document = load_json_document(content)
        parse_scan_payload(document)
        plugins = extract_plugin_list(document)

        scan_path = self._sync_service.scanned_plugins_path
        write_json_atomic(scan_path, {"plugins": plugins})
        logger.info("Imported %d plugins from %s", len(plugins), filename)
        return self._sync_service.sync_from_file(scan_path)
