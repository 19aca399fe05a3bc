"""Storage locations for the database, scan results and scanner executable."""
import os
import sys
import uuid
from dataclasses import dataclass
from typing import Optional

APP_NAME = "vst-library"
DATA_DIR_NAME = "data"
DATABASE_FILENAME = "plugins.db"
SCANNED_PLUGINS_FILENAME = "scanned-plugins.json"
EXPORTED_PLUGINS_FILENAME = "exported-plugins.json"
SCANNER_RELATIVE_PATH = os.path.join("tools", "vst_scanner.exe")


@dataclass(frozen=True)
class StoragePaths:
    """Resolved file locations used by the store and the scan pipeline."""

    data_dir: str
    database_path: str
    scanned_plugins_path: str
    exported_plugins_path: str
    scanner_path: str

    def temp_scan_path(self) -> str:
        """Unique output file for one scanner invocation."""
        return os.path.join(self.data_dir, f"temp-scan-{uuid.uuid4().hex}.json")


def default_user_data_dir(platform: Optional[str] = None) -> str:
    """Per-user application data directory for the packaged app."""
    platform = platform or sys.platform
    home = os.path.expanduser("~")

    if platform.startswith("win"):
        base = os.getenv("APPDATA") or os.path.join(home, "AppData", "Roaming")
    elif platform == "darwin":
        base = os.path.join(home, "Library", "Application Support")
    else:
        base = os.getenv("XDG_CONFIG_HOME") or os.path.join(home, ".config")

    return os.path.join(base, APP_NAME)


def default_resources_dir() -> str:
    """Resources directory shipped next to the packaged executable."""
    return os.path.join(os.path.dirname(os.path.abspath(sys.executable)), "resources")


def resolve_paths(
    data_dir: Optional[str] = None,
    packaged: bool = False,
    user_data_dir: Optional[str] = None,
    resources_dir: Optional[str] = None,
    scanner_path: Optional[str] = None,
    cwd: Optional[str] = None,
) -> StoragePaths:
    """
    Compute storage locations for the current runtime.

    Development runs keep everything under ``<cwd>/data`` and use the
    scanner from ``<cwd>/tools``. The packaged app stores data in the
    user data directory and ships the scanner in its resources directory.
    An explicit ``data_dir`` or ``scanner_path`` always wins.

    Args:
        data_dir: Explicit data directory override
        packaged: Whether the app runs from a packaged build
        user_data_dir: Packaged app's user data directory
        resources_dir: Packaged app's resources directory
        scanner_path: Explicit scanner executable override
        cwd: Base directory for development paths (defaults to os.getcwd())

    Returns:
        StoragePaths with absolute locations
    """
    cwd = cwd or os.getcwd()

    if data_dir is None:
        if packaged:
            data_dir = os.path.join(user_data_dir or default_user_data_dir(), DATA_DIR_NAME)
        else:
            data_dir = os.path.join(cwd, DATA_DIR_NAME)
    data_dir = os.path.abspath(data_dir)

    if scanner_path is None:
        if packaged:
            scanner_path = os.path.join(resources_dir or default_resources_dir(), SCANNER_RELATIVE_PATH)
        else:
            scanner_path = os.path.join(cwd, SCANNER_RELATIVE_PATH)

    return StoragePaths(
        data_dir=data_dir,
        database_path=os.path.join(data_dir, DATABASE_FILENAME),
        scanned_plugins_path=os.path.join(data_dir, SCANNED_PLUGINS_FILENAME),
        exported_plugins_path=os.path.join(data_dir, EXPORTED_PLUGINS_FILENAME),
        scanner_path=scanner_path,
    )


def paths_from_config(config) -> StoragePaths:
    """Resolve storage paths from a Flask config mapping."""
    return resolve_paths(
        data_dir=config.get("DATA_DIR"),
        packaged=bool(config.get("PACKAGED")),
        user_data_dir=config.get("USER_DATA_DIR"),
        resources_dir=config.get("RESOURCES_DIR"),
        scanner_path=config.get("SCANNER_PATH"),
    )
