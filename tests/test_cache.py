from dwebapi.cache import GUILD_CACHE_TIMEOUT, GuildCache


def test_missing_guild(clock):
    cache = GuildCache(clock=clock)
    assert cache.get("1") is None
    assert "1" not in cache


def test_put_records_fetch_time(clock):
    cache = GuildCache(clock=clock)
    entry = cache.put("1", {"id": "1"})

    assert entry.last_updated == clock.now
    assert cache.entry("1") == entry
    assert len(cache) == 1


def test_fresh_at_exactly_the_timeout(clock):
    cache = GuildCache(clock=clock)
    cache.put("1", {"id": "1"})

    clock.advance(GUILD_CACHE_TIMEOUT)
    assert cache.get("1") == {"id": "1"}


def test_stale_just_after_the_timeout(clock):
    cache = GuildCache(clock=clock)
    cache.put("1", {"id": "1"})

    clock.advance(GUILD_CACHE_TIMEOUT + 1)
    assert cache.get("1") is None
    # stale entries are kept until overwritten
    assert "1" in cache


def test_put_overwrites(clock):
    cache = GuildCache(clock=clock)
    cache.put("1", {"id": "1", "name": "old"})
    clock.advance(5)
    cache.put("1", {"id": "1", "name": "new"})

    assert cache.get("1") == {"id": "1", "name": "new"}
    assert cache.entry("1").last_updated == clock.now


def test_ids_are_keyed_as_strings(clock):
    cache = GuildCache(clock=clock)
    cache.put(42, {"id": "42"})

    assert "42" in cache
    assert cache.get("42") == {"id": "42"}
    assert list(cache) == ["42"]


def test_default_timeout():
    assert GuildCache().timeout == 10000
