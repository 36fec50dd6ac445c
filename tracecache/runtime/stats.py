from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class StatsSnapshot:
    """Immutable end-of-run counters for one cache instance."""
    reads: int = 0
    writes: int = 0
    hits: int = 0
    misses: int = 0
    prefetch: bool = False

    @property
    def accesses(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.accesses if self.accesses else 0.0

    @property
    def miss_rate(self) -> float:
        return self.misses / self.accesses if self.accesses else 0.0

    @property
    def label(self) -> str:
        return "prefetch" if self.prefetch else "no_prefetch"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.update(accesses=self.accesses, hit_rate=self.hit_rate, miss_rate=self.miss_rate)
        return data


class CacheStats:
    """Monotonic hit/miss/traffic counters owned by one Cache.

    `reads` and `writes` count memory traffic, not accesses: every miss
    costs one read (demand or prefetch) and every write access is passed
    through to memory once.
    """
    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.reads = 0
        self.writes = 0

    def record_hit(self, write: bool = False):
        self.hits += 1
        if write:
            self.writes += 1

    def record_miss(self):
        self.misses += 1
        self.reads += 1

    def record_write(self):
        self.writes += 1

    def record_prefetch(self):
        self.reads += 1

    def snapshot(self, prefetch: bool = False) -> StatsSnapshot:
        return StatsSnapshot(reads=self.reads, writes=self.writes,
                             hits=self.hits, misses=self.misses, prefetch=prefetch)
