from __future__ import annotations
from dataclasses import dataclass, field

from .replacement import ReplacementPolicy


class ConfigError(ValueError):
    """Raised when a cache geometry or run setting is invalid."""


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def log2_int(n: int) -> int:
    """Exact log2 of a power of two."""
    return n.bit_length() - 1


@dataclass
class CacheConfig:
    """Geometry and behaviour of one simulated cache."""
    total_size: int = 32 * 1024
    associativity: int = 8
    block_size: int = 64
    policy: ReplacementPolicy = ReplacementPolicy.LRU
    prefetch: bool = False

    # Derived properties
    num_lines: int = field(init=False)
    num_sets: int = field(init=False)
    block_offset_bits: int = field(init=False)
    set_index_bits: int = field(init=False)

    def __post_init__(self):
        if not is_power_of_two(self.total_size):
            raise ConfigError(f"Cache size must be a power of two, got {self.total_size}.")
        if not is_power_of_two(self.block_size):
            raise ConfigError(f"Block size must be a power of two, got {self.block_size}.")
        if self.block_size > self.total_size:
            raise ConfigError("Block size cannot exceed the cache size.")

        self.num_lines = self.total_size // self.block_size
        if not is_power_of_two(self.associativity):
            raise ConfigError(f"Associativity must be a power of two, got {self.associativity}.")
        if self.associativity > self.num_lines:
            raise ConfigError(
                f"Associativity {self.associativity} exceeds the {self.num_lines} lines in the cache.")

        self.policy = ReplacementPolicy(self.policy)
        self.num_sets = self.num_lines // self.associativity
        self.block_offset_bits = log2_int(self.block_size)
        self.set_index_bits = log2_int(self.num_sets)

    @property
    def fully_associative(self) -> bool:
        return self.num_sets == 1

    @property
    def direct_mapped(self) -> bool:
        return self.associativity == 1

    def describe(self) -> str:
        if self.direct_mapped:
            kind = "direct-mapped"
        elif self.fully_associative:
            kind = "fully associative"
        else:
            kind = f"{self.associativity}-way set associative"
        return (f"{self.total_size} B {kind}, {self.block_size} B blocks, "
                f"{self.num_sets} sets, policy={self.policy}, prefetch={int(self.prefetch)}")
