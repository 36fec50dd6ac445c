from __future__ import annotations
from typing import List, Optional, Tuple

from ..trace.events import Op
from ..utils.logging import get_logger
from .address import DecomposedAddress, decompose
from .cache_config import CacheConfig
from .cache_set import CacheSet
from .prefetch import prefetch_next
from .replacement import install, touch
from .stats import CacheStats, StatsSnapshot

logger = get_logger(__name__)


class Cache:
    """
    A write-through, write-allocate cache that tracks contents and traffic only.

    Each instance owns its sets and its statistics, so a prefetching and a
    non-prefetching cache can replay the same trace side by side.
    """
    def __init__(self, config: CacheConfig):
        self.config = config
        self.sets: List[CacheSet] = [CacheSet(config.associativity) for _ in range(config.num_sets)]
        self.stats = CacheStats()
        logger.debug("Created cache: %s", config.describe())

    def decompose(self, address: int) -> DecomposedAddress:
        return decompose(address, self.config.block_offset_bits, self.config.set_index_bits)

    def find(self, address: int) -> Tuple[int, Optional[int]]:
        """Looks up an address. Returns (set_index, way), way is None on a miss."""
        tag, set_index, _ = self.decompose(address)
        return set_index, self.sets[set_index].find(tag)

    def load(self, address: int) -> int:
        """Installs the block holding `address`, evicting if the set is full.

        Must be called exactly once per miss. Returns the filled way.
        """
        tag, set_index, _ = self.decompose(address)
        return install(self.sets[set_index], tag)

    def touch(self, set_index: int, way: int) -> None:
        touch(self.sets[set_index], way, self.config.policy)

    def access(self, op: Op, address: int) -> bool:
        """Simulates one access. Returns True on a hit.

        `op` may be an Op or its trace letter; anything else raises ValueError.
        """
        op = Op(op)
        is_write = op is Op.WRITE
        set_index, way = self.find(address)

        if way is not None:
            self.stats.record_hit(write=is_write)
            self.touch(set_index, way)
            return True

        # Miss: fetch the block, then perform the write (write-allocate)
        self.stats.record_miss()
        self.load(address)
        if is_write:
            self.stats.record_write()
        if self.config.prefetch:
            prefetch_next(self, address)
        return False

    def read(self, address: int) -> bool:
        return self.access(Op.READ, address)

    def write(self, address: int) -> bool:
        return self.access(Op.WRITE, address)

    def contains(self, address: int) -> bool:
        _, way = self.find(address)
        return way is not None

    def snapshot(self) -> StatsSnapshot:
        return self.stats.snapshot(prefetch=self.config.prefetch)
