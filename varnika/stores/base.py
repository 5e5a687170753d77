"""Base class for SQLite-backed stores."""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, List, Sequence, Union

from ..errors import StoreUnavailable

logger = logging.getLogger(__name__)


class SQLiteStore:
    """
    Owns one SQLite connection.

    The connection is shared by the engine's worker threads, so every
    statement runs under a per-handle lock. Any SQLite failure is raised as
    StoreUnavailable.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Open the store.

        Args:
            path: Path to the SQLite file.
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot open {self.path}: {e}") from e
        self._closed = False
        logger.debug(f"Opened {self.__class__.__name__} at {self.path}")

    def _query(self, sql: str, params: Sequence[Any] = ()) -> List[tuple]:
        """Run a read statement and return all rows."""
        with self._lock:
            self._check_open()
            try:
                return self._conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StoreUnavailable(f"Query failed on {self.path}: {e}") from e

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement in its own transaction; return lastrowid."""
        with self._lock:
            self._check_open()
            try:
                with self._conn:
                    return self._conn.execute(sql, params).lastrowid
            except sqlite3.Error as e:
                raise StoreUnavailable(f"Write failed on {self.path}: {e}") from e

    def _executescript(self, script: str) -> None:
        """Run several statements, e.g. schema creation."""
        with self._lock:
            self._check_open()
            try:
                with self._conn:
                    self._conn.executescript(script)
            except sqlite3.Error as e:
                raise StoreUnavailable(f"Script failed on {self.path}: {e}") from e

    def _ensure_schema(self, script: str) -> None:
        """Create missing tables; close the handle if the file is unusable."""
        try:
            self._executescript(script)
        except StoreUnavailable:
            self.close()
            raise

    def _check_open(self) -> None:
        if self._closed:
            raise StoreUnavailable(f"{self.__class__.__name__} at {self.path} is closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._conn.close()
            self._closed = True
        logger.debug(f"Closed {self.__class__.__name__} at {self.path}")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close the connection."""
        self.close()
