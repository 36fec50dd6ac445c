import pytest
from tracecache.runtime.cache import Cache
from tracecache.runtime.cache_config import CacheConfig, ConfigError
from tracecache.runtime.replacement import ReplacementPolicy
from tracecache.trace.events import Op

# 64 B, 2-way, 16 B blocks -> 2 sets; these three blocks all map to set 0
A, B, C = 0x00, 0x20, 0x40


@pytest.mark.parametrize("total_size, associativity, block_size", [
    (64, 1, 16), (64, 2, 16), (64, 4, 16), (1024, 8, 64), (32 * 1024, 8, 64), (16, 1, 16),
])
def test_geometry_invariant(total_size, associativity, block_size):
    config = CacheConfig(total_size=total_size, associativity=associativity, block_size=block_size)
    assert config.num_sets * config.associativity * config.block_size == config.total_size
    assert 1 << config.block_offset_bits == block_size
    assert 1 << config.set_index_bits == config.num_sets


def test_fully_associative_has_no_index_bits():
    config = CacheConfig(total_size=1024, associativity=16, block_size=64)
    assert config.num_sets == 1
    assert config.set_index_bits == 0
    assert config.fully_associative
    assert "fully associative" in config.describe()


@pytest.mark.parametrize("kwargs", [
    dict(total_size=100, associativity=1, block_size=16),
    dict(total_size=64, associativity=1, block_size=24),
    dict(total_size=64, associativity=3, block_size=16),
    dict(total_size=64, associativity=8, block_size=16),
    dict(total_size=16, associativity=1, block_size=32),
    dict(total_size=0, associativity=1, block_size=16),
])
def test_invalid_geometry_rejected(kwargs):
    with pytest.raises(ConfigError):
        CacheConfig(**kwargs)


def test_fresh_cache_is_empty(make_cache):
    cache = make_cache()
    snap = cache.snapshot()
    assert (snap.reads, snap.writes, snap.hits, snap.misses) == (0, 0, 0, 0)
    assert all(not line.valid for s in cache.sets for line in s.lines)
    assert len(cache.sets) == 2


def test_direct_mapped_repeat_is_miss_then_hit(make_cache):
    cache = make_cache(associativity=1)
    assert cache.read(0x1234) is False
    assert cache.read(0x1234) is True
    snap = cache.snapshot()
    assert (snap.hits, snap.misses, snap.reads) == (1, 1, 1)


def test_same_block_different_offset_hits(make_cache):
    cache = make_cache(associativity=1)
    cache.read(0x100)
    assert cache.read(0x10F) is True


def test_direct_mapped_conflict(make_cache):
    # 4 sets of one line; 0x00 and 0x40 both map to set 0
    cache = make_cache(associativity=1)
    for address in (0x00, 0x40, 0x00, 0x40):
        assert cache.read(address) is False
    assert cache.snapshot().misses == 4


def test_find_reports_set_and_way(make_cache):
    cache = make_cache()
    assert cache.find(0x10) == (1, None)
    cache.read(0x10)
    assert cache.find(0x10) == (1, 0)
    cache.read(0x30)
    assert cache.find(0x30) == (1, 1)


def test_lru_evicts_least_recently_used(make_cache):
    cache = make_cache(policy="lru")
    for address in (A, B, A, C):
        cache.read(address)
    assert cache.contains(A)
    assert not cache.contains(B)
    assert cache.contains(C)


def test_fifo_evicts_oldest_insertion(make_cache):
    cache = make_cache(policy="fifo")
    for address in (A, B, A, C):
        cache.read(address)
    assert not cache.contains(A)
    assert cache.contains(B)
    assert cache.contains(C)


@pytest.mark.parametrize("policy", ["fifo", "lru"])
def test_policies_count_the_same_until_they_diverge(make_cache, policy):
    cache = make_cache(policy=policy)
    for address in (A, B, A, C):
        cache.read(address)
    snap = cache.snapshot()
    assert (snap.hits, snap.misses, snap.reads, snap.writes) == (1, 3, 3, 0)


def test_write_miss_fetches_then_writes(make_cache):
    cache = make_cache()
    assert cache.write(0x10) is False
    snap = cache.snapshot()
    assert (snap.misses, snap.reads, snap.writes, snap.hits) == (1, 1, 1, 0)
    assert cache.contains(0x10)


def test_write_hit_counts_one_write(make_cache):
    cache = make_cache()
    cache.read(0x10)
    assert cache.write(0x10) is True
    snap = cache.snapshot()
    assert (snap.misses, snap.reads, snap.writes, snap.hits) == (1, 1, 1, 1)


def test_every_write_counted_exactly_once(make_cache):
    cache = make_cache()
    addresses = [0x00, 0x20, 0x00, 0x40, 0x60, 0x40, 0x00]
    for address in addresses:
        cache.access(Op.WRITE, address)
    snap = cache.snapshot()
    assert snap.writes == len(addresses)
    assert snap.hits + snap.misses == len(addresses)
    assert snap.reads == snap.misses


def test_fully_associative_holds_any_blocks(make_cache):
    cache = make_cache(total_size=64, associativity=4, block_size=16)
    addresses = [0x000, 0x100, 0x200, 0x300]
    for address in addresses:
        assert cache.read(address) is False
    for address in addresses:
        assert cache.read(address) is True


def test_lru_hit_does_not_change_counters_beyond_hit(make_cache):
    cache = make_cache(policy="lru")
    cache.read(A)
    before = cache.snapshot()
    cache.read(A)
    after = cache.snapshot()
    assert after.hits == before.hits + 1
    assert (after.misses, after.reads, after.writes) == (before.misses, before.reads, before.writes)


def test_caches_do_not_share_state():
    config = CacheConfig(total_size=64, associativity=2, block_size=16, policy=ReplacementPolicy.LRU)
    first, second = Cache(config), Cache(config)
    first.read(0x10)
    assert first.contains(0x10)
    assert not second.contains(0x10)
    assert second.snapshot().misses == 0


def test_access_accepts_trace_letters(make_cache):
    cache = make_cache()
    assert cache.access("W", 0x00) is False
    assert cache.access("R", 0x00) is True
    assert cache.access("W", 0x00) is True
    snap = cache.snapshot()
    assert (snap.misses, snap.reads, snap.writes, snap.hits) == (1, 1, 2, 2)


def test_access_rejects_unknown_op(make_cache):
    cache = make_cache()
    with pytest.raises(ValueError):
        cache.access("X", 0x00)
    assert cache.snapshot().misses == 0
