"""Server-side registry of live refresh tokens, used for revocation on logout."""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from functools import lru_cache
from typing import NamedTuple

logger = logging.getLogger(__name__)


class RegistryEntry(NamedTuple):
    user_id: int
    expires_at: datetime


class RefreshTokenRegistry(ABC):
    """
    Mapping of refresh token -> owning user id.

    Expiry is enforced by token verification, not here; expires_at is kept only
    so purge_expired can drop stale entries. Implementations must make each
    operation atomic with respect to the others.
    """

    @abstractmethod
    def put(self, token: str, user_id: int, expires_at: datetime) -> None:
        """Register a freshly issued refresh token."""

    @abstractmethod
    def get(self, token: str) -> int | None:
        """Return the owning user id, or None if the token is not registered."""

    @abstractmethod
    def delete(self, token: str) -> None:
        """Remove a token if present. Removing an unknown token is not an error."""

    @abstractmethod
    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop entries whose expiry is at or before now; return how many were removed."""


class InMemoryRefreshTokenRegistry(RefreshTokenRegistry):
    """
    Process-local registry. Not durable: a restart logs out every refresh session,
    and multiple app instances do not share it.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        self._lock = threading.Lock()

    def put(self, token: str, user_id: int, expires_at: datetime) -> None:
        with self._lock:
            self._entries[token] = RegistryEntry(user_id=user_id, expires_at=expires_at)

    def get(self, token: str) -> int | None:
        with self._lock:
            entry = self._entries.get(token)
        return entry.user_id if entry is not None else None

    def delete(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)

    def purge_expired(self, now: datetime | None = None) -> int:
        now = now or datetime.now(UTC)
        with self._lock:
            stale = [t for t, e in self._entries.items() if e.expires_at <= now]
            for token in stale:
                del self._entries[token]
        if stale:
            logger.info("Refresh token sweep: removed=%s remaining=%s", len(stale), len(self))
        return len(stale)

    def __len__(self) -> int:
        """Number of registered tokens, stale ones included."""
        with self._lock:
            return len(self._entries)


@lru_cache
def get_refresh_registry() -> RefreshTokenRegistry:
    """Dependency returning the process-wide registry. Override to plug in a shared backend."""
    return InMemoryRefreshTokenRegistry()
