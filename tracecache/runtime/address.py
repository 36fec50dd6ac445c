from __future__ import annotations
from typing import NamedTuple


class DecomposedAddress(NamedTuple):
    """An address split into the fields used for cache lookup."""
    tag: int
    set_index: int
    block_id: int


def decompose(address: int, block_offset_bits: int, set_index_bits: int) -> DecomposedAddress:
    """Splits an address into (tag, set_index, block_id).

    With zero index bits (fully associative) the mask is empty and every
    address maps to set 0.
    """
    block_id = address >> block_offset_bits
    set_index = block_id & ((1 << set_index_bits) - 1)
    tag = address >> (block_offset_bits + set_index_bits)
    return DecomposedAddress(tag, set_index, block_id)


def block_address(block_id: int, block_offset_bits: int) -> int:
    """Returns the first byte address of a block."""
    return block_id << block_offset_bits
