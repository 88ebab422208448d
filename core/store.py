# core/store.py
"""
Document store handle.

One DocumentStore per process, created lazily by get_store() (the app config
warms it at startup) and closed by close_store() on shutdown. Operations call
ensure_healthy() before touching data and use atomic() where several
documents must change together.
"""
import logging
import threading

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections, transaction

from .exceptions import DependencyError

logger = logging.getLogger("hackathon.core")


class DocumentStore:
    """
    Owned handle over a configured database alias.

    Single-document writes are atomic on their own; atomic() opens the
    multi-document transaction scope.
    """

    def __init__(self, alias: str = DEFAULT_DB_ALIAS):
        self.alias = alias
        self._closed = False

    @property
    def connection(self):
        return connections[self.alias]

    @property
    def closed(self) -> bool:
        return self._closed

    def atomic(self):
        """Transaction scope: everything inside commits together or not at all."""
        return transaction.atomic(using=self.alias)

    def ensure_healthy(self) -> None:
        """
        Make sure a usable connection exists before an operation starts.

        Raises DependencyError if the store cannot be reached.
        """
        if self._closed:
            raise DependencyError("Document store is closed")
        try:
            self.connection.ensure_connection()
        except DatabaseError as e:
            logger.error(f"Document store unreachable ({self.alias}): {e}")
            raise DependencyError(f"Document store unreachable: {e}")

    def health_check(self) -> bool:
        """Connectivity probe for the health endpoint."""
        try:
            with self.connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            return True
        except DatabaseError as e:
            logger.error(f"Store health check failed: {e}")
            return False

    def close(self) -> None:
        self.connection.close()
        self._closed = True
        logger.info(f"Document store closed ({self.alias})")


_store = None
_store_lock = threading.Lock()


def get_store() -> DocumentStore:
    """
    Get the process-wide DocumentStore, creating it on first use.
    """
    global _store

    if _store is None or _store.closed:
        with _store_lock:
            if _store is None or _store.closed:
                _store = DocumentStore()
                logger.info("Document store initialized")
    return _store


def close_store() -> None:
    """Close the process-wide handle. A later get_store() opens a new one."""
    global _store

    with _store_lock:
        if _store is not None and not _store.closed:
            _store.close()
        _store = None
