"""Tests for PluginRepository against a temporary SQLite file."""
from datetime import datetime

from vst_library.models.scan_entry import ScanEntry


def _entry(plugin_id, name, **kwargs):
    return ScanEntry(id=plugin_id, name=name, **kwargs)


NOW = datetime(2024, 5, 1, 12, 0, 0)
LATER = datetime(2024, 5, 2, 8, 30, 0)


class TestPluginRepositoryWrites:

    def test_insert_and_find_by_id(self, plugin_repository):
        plugin_repository.insert_entry(
            _entry("a", "Pro-Q 3", vendor="FabFilter", paths=["/a/x.vst3", "/a/y.vst3"]),
            NOW,
        )

        plugin = plugin_repository.find_by_id("a")

        assert plugin.name == "Pro-Q 3"
        assert plugin.path == ["/a/x.vst3", "/a/y.vst3"]
        assert plugin.sub_categories == []
        assert plugin.created_at == NOW
        assert plugin.updated_at == NOW

    def test_single_path_reads_back_as_string(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "X", paths=["/a/x.vst3"]), NOW)

        assert plugin_repository.find_by_id("a").path == "/a/x.vst3"

    def test_update_entry_keeps_created_at_and_key(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "Old", key="LICENSE"), NOW)
        plugin_repository.update_entry(_entry("a", "New"), LATER)

        plugin = plugin_repository.find_by_id("a")

        assert plugin.name == "New"
        assert plugin.key == "LICENSE"
        assert plugin.created_at == NOW
        assert plugin.updated_at == LATER

    def test_update_entry_with_key_overwrites_key(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "Old", key="OLD"), NOW)
        plugin_repository.update_entry(_entry("a", "Old", key="NEW"), LATER)

        assert plugin_repository.find_by_id("a").key == "NEW"

    def test_update_columns_unknown_id(self, plugin_repository):
        plugin_repository.ensure_schema()
        assert plugin_repository.update_columns("missing", {"key": "x"}) == 0

    def test_delete_and_delete_all(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "A"), NOW)
        plugin_repository.insert_entry(_entry("b", "B"), NOW)
        plugin_repository.insert_entry(_entry("c", "C"), NOW)

        assert plugin_repository.delete("a") == 1
        assert plugin_repository.delete("a") == 0
        assert plugin_repository.delete_all() == 2
        assert plugin_repository.find_all() == []


class TestPluginRepositoryQueries:

    def test_find_all_on_fresh_database(self, plugin_repository):
        assert plugin_repository.find_all() == []

    def test_find_all_ordered_by_name(self, plugin_repository):
        plugin_repository.insert_entry(_entry("s", "Serum"), NOW)
        plugin_repository.insert_entry(_entry("d", "Diva"), NOW)

        assert [p.name for p in plugin_repository.find_all()] == ["Diva", "Serum"]

    def test_search_matches_name_vendor_and_path(self, plugin_repository):
        plugin_repository.insert_entry(
            _entry("q", "Pro-Q 3", vendor="FabFilter", paths=["/vst3/ProQ.vst3"]), NOW
        )
        plugin_repository.insert_entry(
            _entry("s", "Serum", vendor="Xfer Records", paths=["/vst3/Serum.vst3"]), NOW
        )

        assert [p.id for p in plugin_repository.search("fab")] == ["q"]
        assert [p.id for p in plugin_repository.search("SERUM")] == ["s"]
        assert [p.id for p in plugin_repository.search("/vst3/")] == ["q", "s"]

    def test_search_multi_path_windows_record(self, plugin_repository):
        plugin_repository.insert_entry(
            _entry("s", "Serum", paths=["C:\\VST\\Serum_x64.dll", "C:\\VST\\Serum.vst3"]), NOW
        )
        plugin_repository.insert_entry(_entry("t", "Other", paths=["C:\\VST\\Serum.dll"]), NOW)

        assert [p.id for p in plugin_repository.search("VST\\Serum")] == ["t", "s"]
        assert [p.id for p in plugin_repository.search("vst\\serum_X64")] == ["s"]

    def test_search_folds_non_ascii_case(self, plugin_repository):
        plugin_repository.insert_entry(_entry("u", "ÜBERDRIVE", vendor="Klangwerk Straße"), NOW)
        plugin_repository.insert_entry(_entry("d", "Diva", vendor="u-he"), NOW)

        assert [p.id for p in plugin_repository.search("überdrive")] == ["u"]
        assert [p.id for p in plugin_repository.search("STRASSE")] == ["u"]

    def test_search_treats_wildcards_literally(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "Pro-Q 3"), NOW)

        assert plugin_repository.search("%") == []
        assert plugin_repository.search("_") == []

    def test_exists(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "A"), NOW)

        assert plugin_repository.exists("a") is True
        assert plugin_repository.exists("b") is False

    def test_stats(self, plugin_repository):
        plugin_repository.insert_entry(_entry("a", "A", vendor="V1", key="K"), NOW)
        plugin_repository.insert_entry(_entry("b", "B", vendor="V1", key=""), LATER)
        plugin_repository.insert_entry(_entry("c", "C", vendor="V2", is_valid=False), NOW)

        stats = plugin_repository.stats()

        assert stats["total"] == 3
        assert stats["valid"] == 2
        assert stats["with_key"] == 1
        assert stats["vendors"] == 2

    def test_stats_on_empty_table(self, plugin_repository):
        stats = plugin_repository.stats()

        assert stats["total"] == 0
        assert stats["valid"] == 0
        assert stats["last_updated"] is None
