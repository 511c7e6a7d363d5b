import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable

from logdrop.errors import StorageError
from logdrop.models import LogMetadata
from logdrop.storage import LogStore


class SQLiteLogStore(LogStore):
    def __init__(self, db_path: str, clock: Callable[[], float] = time.time):
        self.db_path = db_path
        self.clock = clock

    @contextmanager
    def _connect(self):
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise StorageError(f"cannot open {self.db_path}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def init(self) -> None:
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    key TEXT PRIMARY KEY,
                    content BLOB NOT NULL,
                    metadata TEXT NOT NULL,
                    expires_at REAL NOT NULL
                );
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS logs_expires_at ON logs(expires_at);")

    def put(self, key: str, content: bytes, *, ttl_seconds: int, metadata: LogMetadata) -> None:
        expires_at = self.clock() + ttl_seconds
        with self._connect() as conn:
            conn.execute("DELETE FROM logs WHERE expires_at <= ?", (self.clock(),))
            conn.execute(
                """
                INSERT OR REPLACE INTO logs(key, content, metadata, expires_at)
                VALUES(?, ?, ?, ?)
                """,
                (key, sqlite3.Binary(content), metadata.model_dump_json(), expires_at),
            )

    def get_with_metadata(
        self, key: str, *, cache_ttl: int | None = None
    ) -> tuple[bytes | None, LogMetadata | None]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT content, metadata FROM logs WHERE key = ? AND expires_at > ?",
                (key, self.clock()),
            ).fetchone()
        if not row:
            return None, None
        return bytes(row["content"]), LogMetadata.model_validate_json(row["metadata"])

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM logs WHERE key = ?", (key,))

    def purge_expired(self) -> int:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM logs WHERE expires_at <= ?", (self.clock(),))
        return cursor.rowcount
