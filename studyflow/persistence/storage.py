"""
Storage slot backends: a single key holding a JSON blob.
"""

import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Dict, Optional

from ..core.enums import StorageType
from ..core.exceptions import PersistenceError, ConfigurationError
from ..core.interfaces import StorageSlot


class InMemoryStorage(StorageSlot):
    """In-memory storage slot, scoped to the process."""

    def __init__(self, key: str, initial: Optional[str] = None):
        self._key = key
        self._value = initial
        self._lock = threading.RLock()

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> Optional[str]:
        with self._lock:
            return self._value

    def write(self, data: str) -> None:
        with self._lock:
            self._value = data

    def clear(self) -> None:
        with self._lock:
            self._value = None


class FileStorage(StorageSlot):
    """File-based storage slot; one ``<key>.json`` file per slot."""

    def __init__(self, key: str, base_path: str = "data"):
        self._key = key
        self._base_path = base_path
        self._lock = threading.RLock()
        self._ensure_directory_exists()

    @property
    def key(self) -> str:
        return self._key

    @property
    def path(self) -> str:
        """Get the file path backing this slot."""
        return os.path.join(self._base_path, f"{self._key}.json")

    def _ensure_directory_exists(self) -> None:
        os.makedirs(self._base_path, exist_ok=True)

    def read(self) -> Optional[str]:
        with self._lock:
            if not os.path.exists(self.path):
                return None
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    return f.read()
            except OSError as e:
                raise PersistenceError(f"Failed to read slot {self._key}: {str(e)}") from e

    def write(self, data: str) -> None:
        with self._lock:
            tmp_path = f"{self.path}.tmp"
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(data)
                os.replace(tmp_path, self.path)
            except OSError as e:
                raise PersistenceError(f"Failed to write slot {self._key}: {str(e)}") from e

    def clear(self) -> None:
        with self._lock:
            if os.path.exists(self.path):
                os.remove(self.path)


class SQLiteStorage(StorageSlot):
    """SQLite-backed storage slot; all slots share one ``slots`` table."""

    def __init__(self, key: str, database_path: str = "studyflow.db"):
        self._key = key
        self._database_path = database_path
        self._lock = threading.RLock()
        self._initialize_database()

    @property
    def key(self) -> str:
        return self._key

    def _initialize_database(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper cleanup."""
        conn = None
        try:
            conn = sqlite3.connect(self._database_path, check_same_thread=False)
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            raise PersistenceError(f"Database error on slot {self._key}: {str(e)}") from e
        finally:
            if conn:
                conn.close()

    def read(self) -> Optional[str]:
        with self._lock, self._get_connection() as conn:
            row = conn.execute("SELECT value FROM slots WHERE key = ?", (self._key,)).fetchone()
            return row[0] if row else None

    def write(self, data: str) -> None:
        with self._lock, self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO slots (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                """,
                (self._key, data),
            )
            conn.commit()

    def clear(self) -> None:
        with self._lock, self._get_connection() as conn:
            conn.execute("DELETE FROM slots WHERE key = ?", (self._key,))
            conn.commit()


class StorageFactory:
    """Factory for creating storage slots."""

    _BACKENDS = {
        StorageType.MEMORY: InMemoryStorage,
        StorageType.FILE: FileStorage,
        StorageType.SQLITE: SQLiteStorage,
    }

    @staticmethod
    def create_storage(storage_type: str, key: str, **kwargs) -> StorageSlot:
        """Create a storage slot based on type."""
        try:
            backend = StorageFactory._BACKENDS[StorageType(storage_type.lower())]
        except ValueError:
            raise ConfigurationError(f"Unsupported storage type: {storage_type}")
        return backend(key, **kwargs)

    @staticmethod
    def create_slots(storage_type: str, keys, **kwargs) -> Dict[str, StorageSlot]:
        """Create one slot per key sharing the same backend settings."""
        return {key: StorageFactory.create_storage(storage_type, key, **kwargs) for key in keys}
