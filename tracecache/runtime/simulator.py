from __future__ import annotations
from typing import Iterable, List

from ..config import SimConfig
from ..trace.events import TraceEvent
from ..utils.logging import get_logger
from .cache import Cache
from .stats import StatsSnapshot

logger = get_logger(__name__)


def build_caches(config: SimConfig) -> List[Cache]:
    """Creates the two independent caches compared in a run: prefetch off, then on."""
    return [Cache(config.cache_config(prefetch=False)),
            Cache(config.cache_config(prefetch=True))]


def run(events: Iterable[TraceEvent], config: SimConfig) -> List[StatsSnapshot]:
    """
    Replays a trace against a non-prefetching and a prefetching cache.

    Every event is applied to both caches in trace order. Returns one
    snapshot per cache, prefetch off first.
    """
    caches = build_caches(config)
    count = 0
    for event in events:
        for cache in caches:
            cache.access(event.op, event.address)
        count += 1
    logger.debug("Replayed %d trace events", count)
    return [cache.snapshot() for cache in caches]
