"""In-memory response cache with a fixed time-to-live."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cointracker.core.clock import epoch_ms

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 5 * 60 * 1000


@dataclass(frozen=True)
class CachedEntry:
    """A cached value and the time it was stored."""

    value: Any
    stored_at_ms: int


def cache_key(operation: str, *parts: Any) -> str:
    """
    Build a cache key from an operation name and its normalized parameters.

    List/tuple parts are joined with "_" so callers can pass pre-sorted id lists.
    """
    rendered = [operation]
    for part in parts:
        if isinstance(part, (list, tuple)):
            rendered.append("_".join(str(p) for p in part))
        else:
            rendered.append(str(part).lower() if isinstance(part, bool) else str(part))
    return ":".join(rendered)


class ResponseCache:
    """
    Key -> (value, timestamp) store shared by all market data callers.

    An entry is readable while its age is below the TTL. Expired entries are
    never deleted, only ignored, and are replaced by the next successful fetch.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = epoch_ms,
    ):
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._entries: dict[str, CachedEntry] = {}

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at_ms >= self._ttl_ms:
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous entry."""
        self._entries[key] = CachedEntry(value=value, stored_at_ms=self._clock())

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
