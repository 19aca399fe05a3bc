"""Tests for SettingsService."""
from unittest.mock import Mock

import pytest

from vst_library.errors import InvalidArgumentError, NotFoundError
from vst_library.models.setting import DEFAULT_VST_PATHS, VST_PATHS_KEY
from vst_library.services.settings_service import PATH_NOT_ACCESSIBLE, SettingsService


@pytest.fixture
def service(setting_repository):
    return SettingsService(setting_repository)


class TestDefaults:

    def test_get_all_seeds_defaults(self, service):
        settings = service.get_all()

        assert [s.key for s in settings] == [VST_PATHS_KEY]
        assert settings[0].value == DEFAULT_VST_PATHS

    def test_get_all_does_not_reseed(self, service):
        service.get_all()
        service.set(VST_PATHS_KEY, "D:/VST")

        assert service.get_all()[0].value == "D:/VST"

    def test_default_paths_split(self, service):
        service.get_all()

        paths = service.get_paths()

        assert len(paths) == 5
        assert paths[3] == "C:\\Program Files\\Common Files\\VST3"


class TestGetAndSet:

    def test_get_unknown_key(self, service):
        with pytest.raises(NotFoundError):
            service.get_by_key("missing")

    def test_get_requires_key(self, service):
        with pytest.raises(InvalidArgumentError):
            service.get_by_key(" ")

    def test_set_creates_then_updates(self, service):
        created = service.set("theme", "dark", "UI theme")
        updated = service.set("theme", "light")

        assert created.value == "dark"
        assert updated.value == "light"
        assert updated.description == "UI theme"

    @pytest.mark.parametrize("key,value", [("", "x"), ("k", ""), ("k", None)])
    def test_set_requires_key_and_value(self, key, value):
        repository = Mock()
        service = SettingsService(repository)

        with pytest.raises(InvalidArgumentError):
            service.set(key, value)
        repository.insert.assert_not_called()

    def test_paths_trim_and_skip_blanks(self, service):
        service.set(VST_PATHS_KEY, " C:/VST ,, D:/VST3 ")

        assert service.get_paths() == ["C:/VST", "D:/VST3"]


class TestValidatePaths:

    def test_reports_each_path(self, service, tmp_path):
        missing = str(tmp_path / "missing")

        results = service.validate_paths([str(tmp_path), missing])

        assert results[0].to_dict() == {"path": str(tmp_path), "exists": True}
        assert results[1].to_dict() == {
            "path": missing,
            "exists": False,
            "error": PATH_NOT_ACCESSIBLE,
        }

    def test_file_is_not_a_directory(self, service, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")

        assert service.validate_paths([str(target)])[0].exists is False

    def test_requires_list(self, service):
        with pytest.raises(InvalidArgumentError):
            service.validate_paths("C:/VST")
