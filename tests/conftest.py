import pytest
from pathlib import Path
from tracecache.runtime.cache import Cache
from tracecache.runtime.cache_config import CacheConfig
from tracecache.runtime.replacement import ReplacementPolicy


@pytest.fixture
def make_cache():
    """Factory for caches with small, easy-to-reason-about geometries."""
    def _make(total_size=64, associativity=2, block_size=16, policy="lru", prefetch=False):
        config = CacheConfig(total_size=total_size, associativity=associativity,
                             block_size=block_size, policy=ReplacementPolicy(policy),
                             prefetch=prefetch)
        return Cache(config)
    return _make


@pytest.fixture
def write_trace(tmp_path: Path):
    """Writes trace lines to a temporary file and returns its path."""
    def _write(lines, name="trace.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
