"""Scan-result importer: merges scan payloads into the plugins table."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from vst_library.errors import MalformedPayloadError, StorageAccessError
from vst_library.models.scan_entry import ScanEntry
from vst_library.repositories.plugin_repository import PluginRepository
from vst_library.schemas.scan_schemas import load_json_document, parse_scan_payload
from vst_library.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Counts reported by one import."""

    inserted_count: int = 0
    updated_count: int = 0
    processed_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "insertedCount": self.inserted_count,
            "updatedCount": self.updated_count,
            "processedCount": self.processed_count,
        }


class PluginSyncService:
    """
    Reconciles scan payloads with the stored plugin set.

    Each entry is matched by its derived id: a known id is updated in
    place, an unseen id is inserted. Entries are processed one at a time,
    in payload order, and the first failing write aborts the import with
    its original error. There is no enclosing transaction, so entries
    processed before a failure stay written.
    """

    def __init__(self, plugin_repository: PluginRepository, scanned_plugins_path: str):
        self._plugin_repository = plugin_repository
        self._scanned_plugins_path = scanned_plugins_path

    @property
    def scanned_plugins_path(self) -> str:
        return self._scanned_plugins_path

    def sync_entries(self, entries: Iterable[ScanEntry]) -> SyncResult:
        """Upsert validated entries by id."""
        result = SyncResult()
        self._plugin_repository.ensure_schema()

        for entry in self._collapse_duplicates(entries):
            now = utcnow()
            if self._plugin_repository.exists(entry.id):
                self._plugin_repository.update_entry(entry, now)
                result.updated_count += 1
            else:
                self._plugin_repository.insert_entry(entry, now)
                result.inserted_count += 1
            result.processed_count += 1

        logger.info(
            "Synced %d plugins (%d inserted, %d updated)",
            result.processed_count,
            result.inserted_count,
            result.updated_count,
        )
        return result

    def sync_payload(self, document: Any) -> SyncResult:
        """Validate a decoded payload (list or ``{"plugins": [...]}``) and import it."""
        return self.sync_entries(parse_scan_payload(document))

    def sync_text(self, text: str) -> SyncResult:
        """Decode JSON text and import it."""
        return self.sync_payload(load_json_document(text))

    def sync_from_file(self, path: Optional[str] = None) -> SyncResult:
        """
        Import the scan-result file.

        A missing file means there is nothing to sync yet and returns an
        empty result.

        Raises:
            StorageAccessError: File exists but cannot be read.
            MalformedPayloadError: File content is not a valid payload.
        """
        path = path or self._scanned_plugins_path
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError:
            logger.info("No scan results at %s, nothing to sync", path)
            return SyncResult()
        except UnicodeDecodeError as exc:
            raise MalformedPayloadError(f"Scan results at {path} are not UTF-8 text") from exc
        except OSError as exc:
            raise StorageAccessError(f"Cannot read scan results at {path}: {exc}") from exc

        return self.sync_text(text)

    @staticmethod
    def _collapse_duplicates(entries: Iterable[ScanEntry]) -> List[ScanEntry]:
        """Keep one entry per id: the last one wins, at the first one's position."""
        by_id: Dict[str, ScanEntry] = {}
        for entry in entries:
            if entry.id in by_id:
                logger.debug("Duplicate plugin id %s in payload, keeping the later entry", entry.id)
            by_id[entry.id] = entry
        return list(by_id.values())
