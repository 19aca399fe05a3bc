"""Domain models package."""
from vst_library.models.plugin import PluginRecord
from vst_library.models.scan_entry import ScanEntry
from vst_library.models.setting import (
    SettingRecord,
    DEFAULT_SETTINGS,
    DEFAULT_VST_PATHS,
    VST_PATHS_KEY,
)
from vst_library.models.tables import metadata, plugins_table, settings_table

__all__ = [
    # Records
    "PluginRecord",
    "ScanEntry",
    "SettingRecord",
    # Defaults
    "DEFAULT_SETTINGS",
    "DEFAULT_VST_PATHS",
    "VST_PATHS_KEY",
    # Tables
    "metadata",
    "plugins_table",
    "settings_table",
]
