"""Dependency injection container."""
from dependency_injector import containers, providers

from vst_library.database import PluginDatabase
from vst_library.repositories.plugin_repository import PluginRepository
from vst_library.repositories.setting_repository import SettingRepository
from vst_library.services.plugin_service import PluginService
from vst_library.services.plugin_sync_service import PluginSyncService
from vst_library.services.scan_service import ScanService, SubprocessScanner
from vst_library.services.settings_service import SettingsService
from vst_library.services.transfer_service import TransferService


class Container(containers.DeclarativeContainer):
    """
    Application dependency injection container.

    The database is a singleton: one store, one connection, for the life of
    the process. Repositories and services are cheap factories over it.

    Usage:
        container = Container()
        container.paths.override(resolve_paths())
        container.config.from_dict({"database_url": None, "scanner_timeout": 300})

        plugin_service = container.plugin_service()
    """

    # Configuration
    config = providers.Configuration()

    # Resolved StoragePaths - must be overridden at startup
    paths = providers.Dependency()

    # ==================
    # Store
    # ==================

    database = providers.Singleton(
        PluginDatabase,
        database_path=paths.provided.database_path,
        url=config.database_url,
    )

    # ==================
    # Repositories
    # ==================

    plugin_repository = providers.Factory(
        PluginRepository,
        database=database
    )

    setting_repository = providers.Factory(
        SettingRepository,
        database=database
    )

    # ==================
    # Services
    # ==================

    plugin_service = providers.Factory(
        PluginService,
        plugin_repository=plugin_repository
    )

    settings_service = providers.Factory(
        SettingsService,
        setting_repository=setting_repository
    )

    plugin_sync_service = providers.Factory(
        PluginSyncService,
        plugin_repository=plugin_repository,
        scanned_plugins_path=paths.provided.scanned_plugins_path,
    )

    transfer_service = providers.Factory(
        TransferService,
        plugin_repository=plugin_repository,
        sync_service=plugin_sync_service,
        exported_plugins_path=paths.provided.exported_plugins_path,
    )

    # ==================
    # Scanning
    # ==================

    scanner = providers.Singleton(
        SubprocessScanner,
        executable=paths.provided.scanner_path,
        output_path_factory=paths.provided.temp_scan_path,
        timeout=config.scanner_timeout,
    )

    scan_service = providers.Factory(
        ScanService,
        scanner=scanner,
        settings_service=settings_service,
        sync_service=plugin_sync_service,
    )
