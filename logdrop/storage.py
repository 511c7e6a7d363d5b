import time
from abc import ABC, abstractmethod
from typing import Callable

from logdrop.models import LogMetadata


class LogStore(ABC):
    """Key-value store with per-key TTL expiry and attached metadata.

    Implementations own expiry: once ``ttl_seconds`` have elapsed after a
    ``put``, ``get_with_metadata`` must report the key as absent. Failures of
    the backend are raised as ``logdrop.errors.StorageError``.
    """

    def init(self) -> None:
        pass

    def purge_expired(self) -> int:
        """Reclaim expired entries eagerly. Returns how many were removed."""
        return 0

    @abstractmethod
    def put(self, key: str, content: bytes, *, ttl_seconds: int, metadata: LogMetadata) -> None: ...

    @abstractmethod
    def get_with_metadata(
        self, key: str, *, cache_ttl: int | None = None
    ) -> tuple[bytes | None, LogMetadata | None]:
        """Return ``(content, metadata)`` or ``(None, None)`` when absent or expired.

        ``cache_ttl`` is how stale a result the caller tolerates; backends
        without a read cache may ignore it.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""


class MemoryLogStore(LogStore):
    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._entries: dict[str, tuple[bytes, LogMetadata, float]] = {}

    def put(self, key: str, content: bytes, *, ttl_seconds: int, metadata: LogMetadata) -> None:
        self.purge_expired()
        self._entries[key] = (bytes(content), metadata.model_copy(), self.clock() + ttl_seconds)

    def get_with_metadata(
        self, key: str, *, cache_ttl: int | None = None
    ) -> tuple[bytes | None, LogMetadata | None]:
        entry = self._entries.get(key)
        if entry is None:
            return None, None
        content, metadata, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(key, None)
            return None, None
        return content, metadata.model_copy()

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def purge_expired(self) -> int:
        now = self.clock()
        expired = [key for key, (_, _, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
