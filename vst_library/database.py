"""Durable store: the single SQLite connection and its schema bootstrap."""
import enum
import logging
import os
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import Executable

from vst_library.errors import (
    MissingTableError,
    QueryError,
    StorageAccessError,
    VstLibraryError,
)
from vst_library.models.tables import metadata

logger = logging.getLogger(__name__)

Statement = Union[str, Executable]
Params = Optional[Mapping[str, Any]]


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if isinstance(value, str) else value


def _register_functions(dbapi_connection, connection_record) -> None:
    """SQL functions used by queries: ``casefold(text)`` folds case beyond ASCII."""
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


class SchemaState(enum.Enum):
    """Schema bootstrap state."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class PluginDatabase:
    """
    Owns the one database connection used by the process.

    The engine is created on first use with a ``StaticPool`` so every
    statement runs on the same SQLite connection, and a re-entrant lock
    serializes statements issued from request threads.

    Tables are created lazily: a statement that fails because a table is
    missing while the store is ``UNINITIALIZED`` moves it through
    ``INITIALIZING`` to ``READY`` and is retried once. Any other failure,
    or a second failure, propagates.

    Usage:
        database = PluginDatabase("/path/to/plugins.db")
        rows = database.query("SELECT * FROM plugins WHERE id = :id", {"id": plugin_id})
        database.close()
    """

    def __init__(self, database_path: Optional[str] = None, url: Optional[str] = None):
        """
        Args:
            database_path: SQLite file path; created with its directory on first use
            url: SQLAlchemy URL used instead of ``database_path`` (e.g. ``sqlite://``)
        """
        if not database_path and not url:
            raise ValueError("database_path or url is required")

        self._database_path = database_path
        self._url = url or f"sqlite:///{database_path}"
        self._engine: Optional[Engine] = None
        self._lock = threading.RLock()
        self._state = SchemaState.UNINITIALIZED
        self._bootstrap_hooks: List[Callable[[], Any]] = []

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> SchemaState:
        return self._state

    def add_bootstrap_hook(self, hook: Callable[[], Any]) -> None:
        """
        Register a callable run after tables are created lazily.

        A hook that raises a library error is logged; the statement that
        triggered the bootstrap still runs.
        """
        self._bootstrap_hooks.append(hook)

    def initialize(self) -> None:
        """Create the plugins and settings tables if they do not exist."""
        with self._lock:
            if self._state is SchemaState.READY:
                return

            self._state = SchemaState.INITIALIZING
            try:
                metadata.create_all(self._get_engine())
            except SQLAlchemyError as exc:
                self._state = SchemaState.UNINITIALIZED
                raise self._classify(exc) from exc
            except StorageAccessError:
                self._state = SchemaState.UNINITIALIZED
                raise

            self._state = SchemaState.READY
            logger.info("Database schema ready at %s", self._url)

    def query(self, statement: Statement, params: Params = None) -> List[Dict[str, Any]]:
        """Run a statement and return its rows as dictionaries."""
        return self._run(statement, params, fetch=True)

    def execute(self, statement: Statement, params: Params = None) -> int:
        """Run a write statement and return the affected row count."""
        return self._run(statement, params, fetch=False)

    def close(self) -> None:
        """Dispose the engine; the next statement reopens the connection."""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
                logger.info("Database connection closed")
            self._state = SchemaState.UNINITIALIZED

    def _run(self, statement: Statement, params: Params, fetch: bool):
        with self._lock:
            try:
                return self._run_once(statement, params, fetch)
            except MissingTableError:
                if self._state is not SchemaState.UNINITIALIZED:
                    raise
                logger.info("Database tables missing, creating schema")

            self.initialize()
            for hook in self._bootstrap_hooks:
                try:
                    hook()
                except VstLibraryError as exc:
                    logger.error("Bootstrap hook failed: %s", exc.message)
            return self._run_once(statement, params, fetch)

    def _run_once(self, statement: Statement, params: Params, fetch: bool):
        if isinstance(statement, str):
            statement = text(statement)

        try:
            with self._get_engine().begin() as connection:
                result = connection.execute(statement, dict(params or {}))
                if fetch:
                    return [dict(row._mapping) for row in result]
                return result.rowcount
        except SQLAlchemyError as exc:
            raise self._classify(exc) from exc

    def _get_engine(self) -> Engine:
        if self._engine is None:
            self._ensure_directory()
            connect_args = {}
            if self._url.startswith("sqlite"):
                connect_args["check_same_thread"] = False
            self._engine = create_engine(
                self._url,
                poolclass=StaticPool,
                connect_args=connect_args,
                echo=False,
            )
            if self._url.startswith("sqlite"):
                event.listen(self._engine, "connect", _register_functions)
        return self._engine

    def _ensure_directory(self) -> None:
        if not self._database_path:
            return
        directory = os.path.dirname(os.path.abspath(self._database_path))
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as exc:
            raise StorageAccessError(
                f"Cannot create database directory {directory}: {exc}"
            ) from exc

    @staticmethod
    def _classify(exc: SQLAlchemyError) -> Exception:
        """Map a driver error onto the library's error types."""
        message = str(getattr(exc, "orig", None) or exc)
        if isinstance(exc, OperationalError):
            if message.startswith("no such table"):
                return MissingTableError(message)
            if "unable to open database file" in message:
                return StorageAccessError(message)
        return QueryError(message)
