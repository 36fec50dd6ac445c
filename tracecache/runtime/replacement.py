from __future__ import annotations
from enum import Enum

from .cache_set import CacheSet


class ReplacementPolicy(str, Enum):
    """Victim selection policy. Both policies share one age counter per line."""
    FIFO = "fifo"
    LRU = "lru"

    def __str__(self) -> str:
        return self.value.upper()


def select_victim(cache_set: CacheSet) -> int:
    """Picks the way to fill on a miss.

    The lowest-indexed invalid way wins. In a full set the way with the
    largest age is chosen; among equal ages the lowest index is kept.
    """
    victim = 0
    max_age = -1
    for way, line in enumerate(cache_set.lines):
        if not line.valid:
            return way
        if line.age > max_age:
            max_age = line.age
            victim = way
    return victim


def _age_others(cache_set: CacheSet, way: int) -> None:
    for i, line in enumerate(cache_set.lines):
        if not line.valid:
            continue
        if i == way:
            line.age = 0
        else:
            line.age += 1


def install(cache_set: CacheSet, tag: int) -> int:
    """Installs `tag` into the victim way and ages the rest of the set."""
    way = select_victim(cache_set)
    line = cache_set.lines[way]
    line.valid = True
    line.tag = tag
    _age_others(cache_set, way)
    return way


def touch(cache_set: CacheSet, way: int, policy: ReplacementPolicy) -> None:
    """Marks a hit. Only LRU refreshes the line; FIFO keeps insertion order."""
    if policy is not ReplacementPolicy.LRU:
        return
    _age_others(cache_set, way)
