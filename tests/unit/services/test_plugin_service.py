"""Tests for PluginService."""
from datetime import datetime
from unittest.mock import Mock

import pytest

from vst_library.errors import InvalidArgumentError, NotFoundError
from vst_library.models.plugin import PluginRecord
from vst_library.services.plugin_service import PluginService
from vst_library.services.plugin_sync_service import PluginSyncService


class TestPluginServiceWithMocks:
    """Argument validation happens before the repository is used."""

    @pytest.fixture
    def mock_repo(self):
        return Mock()

    @pytest.fixture
    def service(self, mock_repo):
        return PluginService(plugin_repository=mock_repo)

    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_search_requires_term(self, service, mock_repo, term):
        with pytest.raises(InvalidArgumentError):
            service.search(term)
        mock_repo.search.assert_not_called()

    def test_search_strips_term(self, service, mock_repo):
        mock_repo.search.return_value = []

        service.search("  fab ")

        mock_repo.search.assert_called_once_with("fab")

    def test_get_by_id_not_found(self, service, mock_repo):
        mock_repo.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            service.get_by_id("missing")

    def test_get_by_id_requires_id(self, service, mock_repo):
        with pytest.raises(InvalidArgumentError):
            service.get_by_id("")
        mock_repo.find_by_id.assert_not_called()

    def test_update_requires_fields(self, service, mock_repo):
        with pytest.raises(InvalidArgumentError, match="Update data is required"):
            service.update("a", {})

    def test_update_rejects_unknown_field(self, service, mock_repo):
        with pytest.raises(InvalidArgumentError):
            service.update("a", {"createdAt": "2020-01-01"})
        mock_repo.update_columns.assert_not_called()

    def test_update_unknown_plugin(self, service, mock_repo):
        mock_repo.exists.return_value = False

        with pytest.raises(NotFoundError):
            service.update("missing", {"name": "X"})
        mock_repo.update_columns.assert_not_called()

    def test_update_encodes_path_and_sub_categories(self, service, mock_repo):
        mock_repo.exists.return_value = True
        mock_repo.find_by_id.return_value = PluginRecord(id="a", name="A")

        service.update("a", {"path": ["/x.vst3", "/y.vst3"], "subCategories": "Fx|EQ"})

        values = mock_repo.update_columns.call_args[0][1]
        assert values["path"] == '["/x.vst3", "/y.vst3"]'
        assert values["subCategories"] == '["Fx", "EQ"]'
        assert isinstance(values["updated_at"], datetime)

    def test_save_key_requires_key(self, service, mock_repo):
        with pytest.raises(InvalidArgumentError):
            service.save_key("a", None)

    def test_save_key_unknown_plugin(self, service, mock_repo):
        mock_repo.update_columns.return_value = 0

        with pytest.raises(NotFoundError):
            service.save_key("missing", "SERIAL")

    def test_delete_unknown_id_returns_false(self, service, mock_repo):
        mock_repo.delete.return_value = 0

        assert service.delete_one("missing") is False

    def test_stats(self, service, mock_repo):
        mock_repo.stats.return_value = {
            "total": 5,
            "valid": 4,
            "with_key": 2,
            "vendors": 3,
            "last_updated": "2024-05-01 12:00:00.000000",
        }

        stats = service.stats()

        assert stats == {
            "total": 5,
            "valid": 4,
            "invalid": 1,
            "withKey": 2,
            "vendors": 3,
            "lastUpdated": "2024-05-01T12:00:00",
        }


class TestPluginServiceWithStore:
    """End-to-end behaviour over a real database file."""

    @pytest.fixture
    def service(self, plugin_repository):
        return PluginService(plugin_repository)

    @pytest.fixture
    def synced(self, plugin_repository, data_dir, sample_plugins):
        sync = PluginSyncService(plugin_repository, str(data_dir / "scanned-plugins.json"))
        sync.sync_payload(sample_plugins)

    def test_list_on_fresh_database(self, service):
        assert service.list() == []

    def test_search_fab_returns_only_pro_q(self, service, synced):
        results = service.search("fab")

        assert [p.name for p in results] == ["Pro-Q 3"]

    def test_update_round_trips_paths(self, service, synced):
        plugin = service.update(
            "72C4DB717A4D459AB97E51745D84B39D",
            {"path": ["/a/x.vst3", "/a/y.vst3"], "subCategories": []},
        )

        assert plugin.path == ["/a/x.vst3", "/a/y.vst3"]
        assert plugin.sub_categories == []

        plugin = service.update("72C4DB717A4D459AB97E51745D84B39D", {"path": "/a/x.vst3"})
        assert plugin.path == "/a/x.vst3"

    def test_save_and_clear_key(self, service, synced):
        plugin = service.save_key("72C4DB717A4D459AB97E51745D84B39D", "SERIAL-1")
        assert plugin.key == "SERIAL-1"

        plugin = service.save_key("72C4DB717A4D459AB97E51745D84B39D", "")
        assert plugin.key == ""

    def test_delete_one(self, service, synced):
        assert service.delete_one("72C4DB717A4D459AB97E51745D84B39D") is True
        assert [p.name for p in service.list()] == ["Serum"]

    def test_delete_all(self, service, synced):
        assert service.delete_all() == 2
        assert service.list() == []
        assert service.stats()["total"] == 0

    def test_stats(self, service, synced):
        service.save_key("72C4DB717A4D459AB97E51745D84B39D", "SERIAL-1")

        stats = service.stats()

        assert stats["total"] == 2
        assert stats["valid"] == 2
        assert stats["invalid"] == 0
        assert stats["withKey"] == 1
        assert stats["vendors"] == 2
        assert stats["lastUpdated"] is not None
