"""Tests for TransferService export and import."""
import json

import pytest

from vst_library.errors import InvalidArgumentError, MalformedPayloadError
from vst_library.services.plugin_service import PluginService
from vst_library.services.plugin_sync_service import PluginSyncService
from vst_library.services.transfer_service import TransferService


@pytest.fixture
def sync_service(plugin_repository, data_dir):
    return PluginSyncService(plugin_repository, str(data_dir / "scanned-plugins.json"))


@pytest.fixture
def service(plugin_repository, sync_service, data_dir):
    return TransferService(
        plugin_repository=plugin_repository,
        sync_service=sync_service,
        exported_plugins_path=str(data_dir / "exported-plugins.json"),
    )


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class TestExport:

    def test_export_writes_plugins(self, service, sync_service, sample_plugins):
        sync_service.sync_payload(sample_plugins)

        path = service.export_plugins()

        exported = _read(path)["plugins"]
        assert [p["name"] for p in exported] == ["Pro-Q 3", "Serum"]
        assert exported[1]["path"] == ["C:/VST/Serum_x64.dll", "C:/VST/Serum.vst3"]
        assert exported[0]["subCategories"] == ["EQ"]

    def test_export_after_delete_all_is_empty(
        self, service, sync_service, plugin_repository, sample_plugins
    ):
        sync_service.sync_payload(sample_plugins)
        PluginService(plugin_repository).delete_all()

        assert _read(service.export_plugins()) == {"plugins": []}

    def test_exported_file_imports_back_with_keys(
        self, service, sync_service, plugin_repository, sample_plugins
    ):
        sync_service.sync_payload(sample_plugins)
        plugin_repository.update_columns("C:/VST/Serum_x64.dll", {"key": "SERIAL"})
        with open(service.export_plugins(), "r", encoding="utf-8") as f:
            content = f.read()
        plugin_repository.delete_all()

        result = service.import_file("exported-plugins.json", content)

        assert result.inserted_count == 2
        assert plugin_repository.find_by_id("C:/VST/Serum_x64.dll").key == "SERIAL"


class TestImport:

    def test_import_writes_canonical_scan_file(self, service, sync_service, sample_plugins):
        result = service.import_file("plugins.JSON", json.dumps(sample_plugins))

        assert result.inserted_count == 2
        assert _read(sync_service.scanned_plugins_path) == {"plugins": sample_plugins}

    def test_rejects_non_json_filename(self, service):
        with pytest.raises(InvalidArgumentError, match="JSON file"):
            service.import_file("plugins.txt", "[]")

    def test_rejects_missing_file(self, service):
        with pytest.raises(InvalidArgumentError):
            service.import_file(None, None)

    def test_rejects_invalid_json(self, service):
        with pytest.raises(MalformedPayloadError):
            service.import_file("plugins.json", "{oops")

    def test_rejects_payload_without_plugins(self, service, sync_service):
        with pytest.raises(MalformedPayloadError):
            service.import_file("plugins.json", '{"items": []}')

    def test_invalid_entries_leave_scan_file_untouched(self, service, sync_service, data_dir):
        with pytest.raises(MalformedPayloadError):
            service.import_file("plugins.json", '[{"name": "no identity"}]')

        assert not (data_dir / "scanned-plugins.json").exists()
