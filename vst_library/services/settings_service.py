"""Settings service: key/value configuration with default seeding."""
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from vst_library.errors import InvalidArgumentError, NotFoundError
from vst_library.models.setting import DEFAULT_SETTINGS, VST_PATHS_KEY, SettingRecord
from vst_library.repositories.setting_repository import SettingRepository
from vst_library.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

PATH_NOT_ACCESSIBLE = "Directory does not exist or is not accessible"


@dataclass
class PathValidation:
    """Result of checking one directory."""

    path: str
    exists: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {"path": self.path, "exists": self.exists}
        if self.error:
            result["error"] = self.error
        return result


class SettingsService:
    """Settings management service."""

    def __init__(self, setting_repository: SettingRepository):
        self._setting_repository = setting_repository

    def get_all(self) -> List[SettingRecord]:
        """All settings; an empty table is seeded with the defaults first."""
        settings = self._setting_repository.find_all()
        if settings:
            return settings

        logger.info("No settings found, creating default settings")
        now = utcnow()
        for default in DEFAULT_SETTINGS:
            self._setting_repository.insert(default.key, default.value, default.description, now)
        return self._setting_repository.find_all()

    def get_by_key(self, key: Optional[str]) -> SettingRecord:
        """
        Get setting by key.

        Raises:
            InvalidArgumentError: Empty key.
            NotFoundError: Unknown key.
        """
        if not key or not key.strip():
            raise InvalidArgumentError("Setting key is required")
        setting = self._setting_repository.find_by_key(key)
        if setting is None:
            raise NotFoundError(f"Setting {key} not found")
        return setting

    def set(
        self, key: Optional[str], value: Optional[str], description: Optional[str] = None
    ) -> SettingRecord:
        """
        Create or update a setting.

        Raises:
            InvalidArgumentError: Empty key or value.
        """
        if not key or not key.strip() or not value:
            raise InvalidArgumentError("Key and value are required")

        now = utcnow()
        if self._setting_repository.find_by_key(key) is not None:
            self._setting_repository.update_value(key, value, now, description=description)
            logger.info("Updated setting %s", key)
        else:
            self._setting_repository.insert(key, value, description, now)
            logger.info("Created setting %s", key)

        return self.get_by_key(key)

    def get_paths(self, key: str = VST_PATHS_KEY) -> List[str]:
        """Directories stored in a comma-separated path setting."""
        return self.get_by_key(key).split_values()

    def validate_paths(self, paths) -> List[PathValidation]:
        """
        Check that each directory exists and is readable.

        Never fails per path: an inaccessible path is reported with
        ``exists=False`` and an explanatory error.

        Raises:
            InvalidArgumentError: ``paths`` is not a list.
        """
        if not isinstance(paths, (list, tuple)):
            raise InvalidArgumentError("Paths array is required")

        results = [self._validate_path(path) for path in paths]
        logger.info("Validated %d paths", len(results))
        return results

    @staticmethod
    def _validate_path(path: str) -> PathValidation:
        candidate = str(path).strip()
        if candidate and os.path.isdir(candidate) and os.access(candidate, os.R_OK):
            return PathValidation(path=path, exists=True)
        return PathValidation(path=path, exists=False, error=PATH_NOT_ACCESSIBLE)
