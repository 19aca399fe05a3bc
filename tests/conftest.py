"""Shared fixtures."""
import json

import pytest

from vst_library.app import create_app
from vst_library.database import PluginDatabase
from vst_library.repositories.plugin_repository import PluginRepository
from vst_library.repositories.setting_repository import SettingRepository


@pytest.fixture
def data_dir(tmp_path):
    """Per-test data directory holding the database and JSON files."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def app(tmp_path, data_dir):
    """Application backed by a temporary SQLite file."""
    app = create_app({
        "TESTING": True,
        "DEBUG": False,
        "DATA_DIR": str(data_dir),
        "PACKAGED": False,
        "DATABASE_URL": None,
        "SCANNER_PATH": str(tmp_path / "tools" / "vst_scanner.exe"),
    })
    yield app
    app.container.database().close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def database(data_dir):
    """A store over a fresh, empty database file."""
    db = PluginDatabase(str(data_dir / "plugins.db"))
    yield db
    db.close()


@pytest.fixture
def plugin_repository(database):
    return PluginRepository(database)


@pytest.fixture
def setting_repository(database):
    return SettingRepository(database)


@pytest.fixture
def write_scan_file(data_dir):
    """Write a scan-result payload to ``scanned-plugins.json``."""

    def _write(payload, name="scanned-plugins.json"):
        path = data_dir / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def sample_plugins():
    return [
        {
            "name": "Pro-Q 3",
            "vendor": "FabFilter",
            "version": "3.21",
            "category": "Fx",
            "subCategories": ["EQ"],
            "path": "C:/Program Files/Common Files/VST3/FabFilter Pro-Q 3.vst3",
            "cid": "72C4DB717A4D459AB97E51745D84B39D",
            "isValid": True,
        },
        {
            "name": "Serum",
            "vendor": "Xfer Records",
            "version": "1.3",
            "category": "Instrument",
            "subCategories": "Instrument|Synth",
            "path": ["C:/VST/Serum_x64.dll", "C:/VST/Serum.vst3"],
            "isValid": True,
        },
    ]
