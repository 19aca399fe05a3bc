"""URL converters."""
from werkzeug.routing import PathConverter


class PluginIdConverter(PathConverter):
    """
    Matches a plugin id, slashes included.

    Ids derived from file paths may be absolute (``/Library/Audio/...``),
    which the ``path`` converter rejects because of the leading slash.
    """

    regex = ".+?"
    part_isolating = False
