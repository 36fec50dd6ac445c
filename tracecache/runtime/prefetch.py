from __future__ import annotations
from typing import TYPE_CHECKING

from .address import block_address

if TYPE_CHECKING:
    from .cache import Cache


def prefetch_next(cache: Cache, address: int) -> bool:
    """Fetches the block after `address` if it is not already cached.

    A prefetch fill costs one memory read and never counts as a hit or miss.
    Returns True if a block was fetched.
    """
    decomposed = cache.decompose(address)
    next_address = block_address(decomposed.block_id + 1, cache.config.block_offset_bits)
    _, way = cache.find(next_address)
    if way is not None:
        return False
    cache.stats.record_prefetch()
    cache.load(next_address)
    return True
