"""Service layer."""
from vst_library.services.plugin_service import PluginService
from vst_library.services.plugin_sync_service import PluginSyncService, SyncResult
from vst_library.services.scan_service import (
    CallableScanner,
    ScannerBackend,
    ScanService,
    ScanSummary,
    SubprocessScanner,
)
from vst_library.services.settings_service import PathValidation, SettingsService
from vst_library.services.transfer_service import TransferService

__all__ = [
    "PluginService",
    "PluginSyncService",
    "SyncResult",
    "CallableScanner",
    "ScannerBackend",
    "ScanService",
    "ScanSummary",
    "SubprocessScanner",
    "PathValidation",
    "SettingsService",
    "TransferService",
]
