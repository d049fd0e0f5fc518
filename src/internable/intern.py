"""Intern cache protocol and the default thread-safe intern table.

An intern cache maps content to one canonical shared ``str``. Routing every
finished InternableString through it makes equal strings produced by the
tokenizer share one instance, so repeated names cost one allocation in total.

Thread Safety:
    InternTable guards its table with a lock; any number of threads may
    intern concurrently. set_intern_cache() should be called once at
    application startup, before concurrent tokenizing.

Example:
    >>> from internable import InternableString, InternTable
    >>> table = InternTable()
    >>> first = table.intern(InternableString.new_empty().append("Prop").append("erty"))
    >>> second = table.intern(InternableString.new_empty().append("Property"))
    >>> first is second
    True
"""

from __future__ import annotations

import threading
from itertools import islice
from typing import Protocol

from internable.config import get_intern_config
from internable.errors import InvalidArgumentError
from internable.statistics import InternStatistics
from internable.string import InternableString
from internable.utils.logger import get_logger

logger = get_logger(__name__)


class InternCache(Protocol):
    """Protocol for intern caches.

    Implementations compare by content, return the stored canonical string
    on a hit, and store the value's content on a miss. Must be safe to call
    from multiple threads.
    """

    def intern(self, value: InternableString | str) -> str:
        """Return the canonical string for ``value``'s content."""
        ...


class InternTable:
    """Content-keyed intern table guarded by a lock.

    Wrapped values are looked up by the string they wrap, so a hit
    allocates nothing. Buffered values are materialized once for the lookup;
    on a miss that string becomes the canonical instance.

    The table is bounded: once it holds ``max_entries`` strings, storing
    another evicts the oldest half.
    """

    __slots__ = ("_entries", "_lock", "_max_entries", "_max_length", "_statistics")

    def __init__(
        self,
        *,
        max_entries: int | None = None,
        max_length: int | None = None,
        statistics_enabled: bool | None = None,
    ) -> None:
        """Initialize an empty table.

        Args:
            max_entries: Size that triggers scavenging (None = config value)
            max_length: Longest value that is interned (None = config value)
            statistics_enabled: Collect InternStatistics (None = config value)

        Raises:
            InvalidArgumentError: If max_entries is less than 1
        """
        config = get_intern_config()
        self._max_entries = config.max_entries if max_entries is None else max_entries
        if self._max_entries < 1:
            raise InvalidArgumentError("max_entries", "must be at least 1")
        self._max_length = config.max_length if max_length is None else max_length
        if statistics_enabled is None:
            statistics_enabled = config.statistics_enabled
        self._statistics = InternStatistics() if statistics_enabled else None
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def intern(self, value: InternableString | str) -> str:
        """Return the canonical string equal to ``value``.

        Args:
            value: InternableString in either form, or a plain str

        Returns:
            The stored canonical instance, or ``value``'s content newly stored

        Raises:
            InvalidArgumentError: If value is neither a str nor an InternableString
        """
        if isinstance(value, str):
            value = InternableString(value)
        elif not isinstance(value, InternableString):
            raise InvalidArgumentError("value", "must be a str or InternableString")

        length = len(value)
        if self._max_length is not None and length > self._max_length:
            if self._statistics is not None:
                with self._lock:
                    self._statistics.record_bypass()
            return value.materialize()

        # No copy for wrapped values: materialize() hands back the wrapped str.
        key = value.materialize()
        with self._lock:
            canonical = self._entries.get(key)
            if canonical is not None:
                if self._statistics is not None:
                    self._statistics.record_hit(length, identity=value.is_same_instance(canonical))
                return canonical
            if len(self._entries) >= self._max_entries:
                self._scavenge()
            self._entries[key] = key
            if self._statistics is not None:
                self._statistics.record_miss()
            return key

    def _scavenge(self) -> None:
        # Caller holds the lock.
        total = len(self._entries)
        evict = max(1, total // 2)
        for key in list(islice(self._entries, evict)):
            del self._entries[key]
        if self._statistics is not None:
            self._statistics.record_eviction(evict)
        logger.debug("Scavenged intern table: evicted %d of %d entries", evict, total)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, value: object) -> bool:
        if isinstance(value, InternableString):
            value = value.materialize()
        if not isinstance(value, str):
            return False
        with self._lock:
            return value in self._entries

    def clear(self) -> None:
        """Drop every canonical string. Statistics are kept."""
        with self._lock:
            self._entries.clear()

    @property
    def statistics(self) -> InternStatistics | None:
        """Snapshot of the counters, or None when statistics are disabled."""
        if self._statistics is None:
            return None
        with self._lock:
            return self._statistics.copy()

    def log_statistics(self) -> None:
        """Write the statistics summary to the ``internable.intern`` logger at INFO."""
        stats = self.statistics
        if stats is None:
            logger.info("Intern table statistics are disabled")
            return
        logger.info(
            "Intern table: %d entries, %d lookups, hit ratio %.2f%% (%s)",
            len(self),
            stats.lookups,
            stats.hit_ratio * 100,
            stats.summary(),
        )


# Process-wide active cache with thread-safe replacement
_active_cache: InternCache | None = None
_cache_lock = threading.Lock()


def get_intern_cache() -> InternCache:
    """Get the process-wide intern cache, creating a default InternTable on first use.

    Thread Safety:
        Reads the cache reference without locking (GIL-protected simple
        read); creation of the default table is done under the lock.
    """
    global _active_cache
    cache = _active_cache
    if cache is not None:
        return cache
    with _cache_lock:
        if _active_cache is None:
            _active_cache = InternTable()
        return _active_cache


def set_intern_cache(cache: InternCache | None) -> None:
    """Replace the process-wide intern cache.

    Args:
        cache: Cache to use from now on. Pass None to start over with a
            fresh default InternTable on next use.

    Thread Safety:
        This function is thread-safe. However, for best performance,
        call it once at application startup before concurrent use.
    """
    global _active_cache
    with _cache_lock:
        _active_cache = cache


def intern_string(value: InternableString | str) -> str:
    """Intern ``value`` with the process-wide cache."""
    return get_intern_cache().intern(value)


__all__ = [
    "InternCache",
    "InternTable",
    "get_intern_cache",
    "intern_string",
    "set_intern_cache",
]
