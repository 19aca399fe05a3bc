"""Error taxonomy shared by the store, services and routes."""


class VstLibraryError(Exception):
    """Base class for errors surfaced to the API boundary."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageAccessError(VstLibraryError):
    """Filesystem or database file could not be read or written."""

    http_status = 500


class MalformedPayloadError(VstLibraryError):
    """Scan payload is not valid JSON or has no plugins list."""

    http_status = 400


class NotFoundError(VstLibraryError):
    """Requested plugin id or setting key does not exist."""

    http_status = 404


class InvalidArgumentError(VstLibraryError):
    """Required parameter missing or empty."""

    http_status = 400


class QueryError(VstLibraryError):
    """Store statement failed."""

    http_status = 500


class MissingTableError(QueryError):
    """Statement referenced a table that has not been created yet."""


class ExternalToolError(VstLibraryError):
    """Scanner subprocess failed, timed out or produced no usable output."""

    http_status = 502
