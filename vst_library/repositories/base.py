"""Base repository."""
from vst_library.database import PluginDatabase


class BaseRepository:
    """Repositories issue statements through the shared ``PluginDatabase``."""

    def __init__(self, database: PluginDatabase):
        self._database = database
