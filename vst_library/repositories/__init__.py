"""Repository implementations."""
from vst_library.repositories.base import BaseRepository
from vst_library.repositories.plugin_repository import PluginRepository
from vst_library.repositories.setting_repository import SettingRepository

__all__ = [
    "BaseRepository",
    "PluginRepository",
    "SettingRepository",
]
