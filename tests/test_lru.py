import json
from datetime import datetime

from gost.lru import CacheStats, Item, LRUCache


class CacheValue:
    def __init__(self, size):
        self._size = size

    def size(self):
        return self._size


def test_initial_state():
    cache = LRUCache(5)
    stats = cache.stats()
    assert stats.length == 0
    assert stats.size == 0
    assert stats.capacity == 5
    assert stats.evictions == 0
    assert stats.oldest is None


def test_set_inserts_value():
    cache = LRUCache(100)
    data = CacheValue(0)
    cache.set("key", data)
    assert cache.get("key") is data
    assert cache.keys() == ["key"]
    items = cache.items()
    assert len(items) == 1
    assert items[0] == Item("key", data)


def test_set_if_absent():
    cache = LRUCache(100)
    data = CacheValue(0)
    cache.set_if_absent("key", data)
    assert cache.get("key") is data
    cache.set_if_absent("key", CacheValue(1))
    assert cache.get("key") is data


def test_get_value_with_equal_keys():
    cache = LRUCache(100)
    data = CacheValue(0)
    cache.set("key", data)
    assert cache.get("key") is data
    assert cache.get(bytes([ord("k"), ord("e"), ord("y")]).decode()) is data


def test_set_updates_size():
    cache = LRUCache(100)
    cache.set("key1", CacheValue(0))
    assert cache.stats().size == 0
    cache.set("key2", CacheValue(20))
    assert cache.stats().size == 20


def test_set_with_old_key_updates_value():
    cache = LRUCache(100)
    cache.set("key1", CacheValue(0))
    some_value = CacheValue(20)
    cache.set("key1", some_value)
    assert cache.get("key1") is some_value


def test_set_with_old_key_updates_size():
    cache = LRUCache(100)
    cache.set("key1", CacheValue(0))
    assert cache.stats().size == 0
    cache.set("key1", CacheValue(20))
    assert cache.stats().size == 20


def test_get_non_existent():
    cache = LRUCache(100)
    sentinel = object()
    assert cache.get("notthere", sentinel) is sentinel
    assert cache.get("notthere") is None


def test_peek():
    cache = LRUCache(2)
    val1 = CacheValue(1)
    val2 = CacheValue(1)
    cache.set("key1", val1)
    cache.set("key2", val2)
    cache.get("key1")
    assert cache.peek("key2") is val2
    cache.set("key3", CacheValue(1))
    assert cache.peek("key2") is None
    assert cache.peek("key1") is val1


def test_peek_keeps_order():
    cache = LRUCache(10)
    cache.set("a", CacheValue(1))
    cache.set("b", CacheValue(1))
    cache.peek("a")
    assert cache.keys() == ["b", "a"]
    cache.get("a")
    assert cache.keys() == ["a", "b"]


def test_delete():
    cache = LRUCache(100)
    assert cache.delete("key") is False
    cache.set("key", CacheValue(1))
    assert cache.delete("key") is True
    assert cache.stats().size == 0
    assert "key" not in cache
    assert cache.get("key") is None


def test_clear():
    cache = LRUCache(100)
    cache.set("key", CacheValue(1))
    cache.clear()
    assert cache.stats().size == 0
    assert len(cache) == 0


def test_capacity_is_obeyed():
    size = 3
    cache = LRUCache(100)
    cache.set_capacity(size)
    value = CacheValue(1)
    cache.set("key1", value)
    cache.set("key2", value)
    cache.set("key3", value)
    assert cache.stats().size == size
    cache.set("key4", value)
    stats = cache.stats()
    assert stats.size == size
    assert stats.evictions == 1

    data = json.loads(cache.stats_json())
    assert data["Size"] == size
    assert data["Length"] == size
    assert data["Capacity"] == size
    assert data["Evictions"] == 1

    assert len(cache) == size
    assert cache.size() == size
    assert cache.capacity() == size


def test_set_capacity_shrinks():
    cache = LRUCache(10)
    for name in ("a", "b", "c", "d"):
        cache.set(name, CacheValue(2))
    cache.set_capacity(4)
    assert cache.keys() == ["d", "c"]
    assert cache.evictions() == 2
    assert cache.size() == 4


def test_lru_is_evicted():
    cache = LRUCache(3)
    cache.set("key1", CacheValue(1))
    cache.set("key2", CacheValue(1))
    cache.set("key3", CacheValue(1))

    cache.get("key3")
    before_key2 = datetime.now()
    cache.get("key2")
    after_key2 = datetime.now()
    cache.get("key1")

    cache.set("key0", CacheValue(1))

    assert cache.get("key3") is None
    oldest = cache.oldest()
    assert before_key2 <= oldest <= after_key2
    assert cache.evictions() == 1
    assert cache.keys() == ["key0", "key1", "key2"]


def test_stats_type_and_json_of_empty_cache():
    cache = LRUCache(7)
    assert cache.stats() == CacheStats(0, 0, 7, 0, None)
    assert json.loads(cache.stats_json())["OldestAccess"] == ""