"""External scan invoker: runs the native scanner per directory and imports the results."""
import json
import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from vst_library.errors import (
    ExternalToolError,
    InvalidArgumentError,
    MalformedPayloadError,
    NotFoundError,
)
from vst_library.schemas.scan_schemas import extract_plugin_list, parse_scan_payload
from vst_library.services.plugin_sync_service import PluginSyncService, SyncResult
from vst_library.services.settings_service import SettingsService
from vst_library.utils.json_files import write_json_atomic

logger = logging.getLogger(__name__)


class ScannerBackend(ABC):
    """Produces raw plugin descriptors for one directory."""

    @abstractmethod
    def scan_directory(self, directory: str) -> List[Any]:
        """
        Scan one directory.

        Raises:
            ExternalToolError: The scanner failed for this directory.
        """
        ...


class SubprocessScanner(ScannerBackend):
    """
    Runs the scanner executable as ``<scanner> <directory> -o <output>``.

    The scanner writes a scan-result JSON file to ``<output>``, which is read
    and removed after each run.
    """

    def __init__(
        self,
        executable: str,
        output_path_factory: Callable[[], str],
        timeout: float = 300,
    ):
        self._executable = executable
        self._output_path_factory = output_path_factory
        self._timeout = timeout

    def scan_directory(self, directory: str) -> List[Any]:
        output_path = self._output_path_factory()
        try:
            os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
        except OSError as exc:
            raise ExternalToolError(f"Cannot create scanner output directory: {exc}") from exc

        command = [self._executable, directory, "-o", output_path]
        logger.info("Executing scanner: %s", " ".join(command))

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            self._remove(output_path)
            raise ExternalToolError(
                f"Scanner timed out after {self._timeout}s for {directory}"
            ) from exc
        except OSError as exc:
            raise ExternalToolError(f"Cannot run scanner {self._executable}: {exc}") from exc

        try:
            if completed.stderr:
                logger.warning("Scanner stderr for %s: %s", directory, completed.stderr.strip())
            if completed.stdout:
                logger.debug("Scanner stdout for %s: %s", directory, completed.stdout.strip())
            if completed.returncode != 0:
                raise ExternalToolError(
                    f"Scanner exited with code {completed.returncode} for {directory}"
                )
            document = self._read_output(output_path, directory)
        finally:
            self._remove(output_path)

        try:
            return extract_plugin_list(document)
        except MalformedPayloadError as exc:
            raise ExternalToolError(f"Unexpected scanner output for {directory}: {exc}") from exc

    @staticmethod
    def _read_output(output_path: str, directory: str) -> Any:
        try:
            with open(output_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as exc:
            raise ExternalToolError(f"Scanner produced no output for {directory}") from exc
        except ValueError as exc:
            raise ExternalToolError(f"Scanner output for {directory} is not valid JSON") from exc

    @staticmethod
    def _remove(path: str) -> None:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Failed to clean up temp file %s: %s", path, exc)


class CallableScanner(ScannerBackend):
    """Wraps an in-process scanner returning a plugin list (or a payload mapping)."""

    def __init__(self, func: Callable[[str], Any]):
        self._func = func

    def scan_directory(self, directory: str) -> List[Any]:
        try:
            result = self._func(directory)
        except Exception as exc:
            raise ExternalToolError(f"Scanner failed for {directory}: {exc}") from exc

        try:
            return extract_plugin_list(result)
        except MalformedPayloadError as exc:
            raise ExternalToolError(f"Unexpected scanner output for {directory}: {exc}") from exc


@dataclass
class ScanSummary:
    """Outcome of scanning all configured directories."""

    scanned_directories: List[str] = field(default_factory=list)
    failed_directories: Dict[str, str] = field(default_factory=dict)
    total_plugins: int = 0
    valid_plugins: int = 0
    sync: SyncResult = field(default_factory=SyncResult)

    def to_dict(self) -> dict:
        return {
            "scannedDirectories": list(self.scanned_directories),
            "failedDirectories": dict(self.failed_directories),
            "totalPlugins": self.total_plugins,
            "validPlugins": self.valid_plugins,
            **self.sync.to_dict(),
        }


class ScanService:
    """
    Scans plugin directories and imports the combined result.

    A directory whose scan fails, or whose output holds an invalid entry,
    is logged and skipped; the remaining directories are still scanned.
    """

    def __init__(
        self,
        scanner: ScannerBackend,
        settings_service: SettingsService,
        sync_service: PluginSyncService,
    ):
        self._scanner = scanner
        self._settings_service = settings_service
        self._sync_service = sync_service

    def scan(self, directories: Optional[Sequence[str]] = None) -> ScanSummary:
        """
        Scan ``directories`` (default: the ``vst_paths`` setting) and sync.

        Raises:
            InvalidArgumentError: No directories configured.
        """
        if directories is None:
            directories = self._configured_directories()

        directories = [d.strip() for d in directories if d and d.strip()]
        if not directories:
            raise InvalidArgumentError(
                "No valid VST paths configured. Please set up paths in Settings first."
            )

        logger.info("Scanning %d VST directories", len(directories))
        summary = ScanSummary()
        plugins: List[Any] = []

        for directory in directories:
            try:
                found = self._scanner.scan_directory(directory)
                parse_scan_payload(found)
            except (ExternalToolError, MalformedPayloadError) as exc:
                logger.warning("Failed to scan directory %s: %s", directory, exc.message)
                summary.failed_directories[directory] = exc.message
                continue

            for plugin in found:
                if isinstance(plugin, dict):
                    plugin = {**plugin, "sourceDirectory": directory}
                plugins.append(plugin)
            summary.scanned_directories.append(directory)
            logger.info("Found %d plugins in %s", len(found), directory)

        summary.total_plugins = len(plugins)
        summary.valid_plugins = sum(
            1 for plugin in plugins if isinstance(plugin, dict) and plugin.get("isValid", True)
        )

        scan_path = self._sync_service.scanned_plugins_path
        write_json_atomic(
            scan_path,
            {
                "plugins": plugins,
                "totalPlugins": summary.total_plugins,
                "validPlugins": summary.valid_plugins,
            },
        )
        summary.sync = self._sync_service.sync_from_file(scan_path)
        return summary

    def _configured_directories(self) -> List[str]:
        self._settings_service.get_all()  # seeds vst_paths on first use
        try:
            return self._settings_service.get_paths()
        except NotFoundError as exc:
            raise InvalidArgumentError(
                "VST paths not configured. Please set up paths in Settings first."
            ) from exc
