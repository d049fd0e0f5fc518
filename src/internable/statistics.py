"""Interning statistics for diagnosing intern table effectiveness.

Counts what happened to every value routed through an InternTable:
- hits: content already had a canonical instance
- identity_hits: the value already wrapped that exact instance
- misses: content was stored as a new canonical instance
- bypassed: value was longer than the table's max_length
- evicted: entries dropped by scavenging

Disabled by default (InternTable.statistics returns None).

Example:
    from internable import InternConfig, InternTable

    table = InternTable(statistics_enabled=True)
    table.intern("foo")
    table.intern("foo")
    print(table.statistics.summary())
    # {"lookups": 2, "hits": 1, "identity_hits": 1, "misses": 1, ...}

"""

from dataclasses import dataclass, replace
from typing import Any


@dataclass
class InternStatistics:
    """Accumulated interning counters.

    Not synchronized. The owning InternTable only records while holding
    its lock.

    Attributes:
        hits: Lookups that found an existing canonical string.
        identity_hits: Hits where the value already wrapped the canonical instance.
        misses: Lookups that stored a new canonical string.
        bypassed: Values too long to be interned.
        evicted: Entries removed by scavenging.
        chars_saved: Code units of hit values that did not need a new string.

    """

    hits: int = 0
    identity_hits: int = 0
    misses: int = 0
    bypassed: int = 0
    evicted: int = 0
    chars_saved: int = 0

    def record_hit(self, length: int, *, identity: bool) -> None:
        """Record a lookup that found a canonical string.

        Args:
            length: Length of the value in code units.
            identity: True if the value already was the canonical instance.

        """
        self.hits += 1
        self.chars_saved += length
        if identity:
            self.identity_hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def record_bypass(self) -> None:
        self.bypassed += 1

    def record_eviction(self, count: int) -> None:
        self.evicted += count

    @property
    def lookups(self) -> int:
        """Lookups that reached the table (bypassed values excluded)."""
        return self.hits + self.misses

    @property
    def hit_ratio(self) -> float:
        """Fraction of lookups that hit, 0.0 before the first lookup."""
        lookups = self.lookups
        return self.hits / lookups if lookups else 0.0

    def copy(self) -> "InternStatistics":
        return replace(self)

    def summary(self) -> dict[str, Any]:
        """Get summary of interning counters.

        Returns:
            Dict with lookups, the raw counters and hit_ratio.

        """
        return {
            "lookups": self.lookups,
            "hits": self.hits,
            "identity_hits": self.identity_hits,
            "misses": self.misses,
            "bypassed": self.bypassed,
            "evicted": self.evicted,
            "chars_saved": self.chars_saved,
            "hit_ratio": round(self.hit_ratio, 4),
        }


__all__ = ["InternStatistics"]
