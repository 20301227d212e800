"""
Tests unitaires pour InMemoryResizeCache.

Ces tests verifient:
- Stockage et recuperation de valeurs
- Purge des entrees d'une affiche
- Invalidation complete
- Eviction LRU optionnelle
- Acces concurrents depuis plusieurs threads
"""

import threading

import pytest

from filmotheque.adapters.posters.resize_cache import InMemoryResizeCache
from filmotheque.core.ports.posters import IResizeCache


class TestInMemoryResizeCache:
    """Tests pour la classe InMemoryResizeCache."""

    def test_implements_interface(self, resize_cache: InMemoryResizeCache) -> None:
        assert isinstance(resize_cache, IResizeCache)

    def test_get_returns_none_for_missing_key(self, resize_cache: InMemoryResizeCache) -> None:
        assert resize_cache.get("resize:nope.jpg:1x1:contain") is None

    def test_put_and_get_round_trip(self, resize_cache: InMemoryResizeCache) -> None:
        resize_cache.put("resize:a.jpg:100x150:contain", "a.jpg", "a_100x150.jpg")

        assert resize_cache.get("resize:a.jpg:100x150:contain") == "a_100x150.jpg"

    def test_put_overwrites(self, resize_cache: InMemoryResizeCache) -> None:
        resize_cache.put("k", "a.jpg", 1)
        resize_cache.put("k", "a.jpg", 2)

        assert resize_cache.get("k") == 2
        assert len(resize_cache) == 1

    def test_discard(self, resize_cache: InMemoryResizeCache) -> None:
        resize_cache.put("k", "a.jpg", 1)

        resize_cache.discard("k")
        resize_cache.discard("k")

        assert resize_cache.get("k") is None

    def test_purge_removes_only_entries_of_asset(self, resize_cache: InMemoryResizeCache) -> None:
        resize_cache.put("download:http://x/a.jpg", "a.jpg", "result-a")
        resize_cache.put("resize:a.jpg:10x10:contain", "a.jpg", "a_10x10.jpg")
        resize_cache.put("resize:b.jpg:10x10:contain", "b.jpg", "b_10x10.jpg")

        purged = resize_cache.purge("a.jpg")

        assert purged == 2
        assert resize_cache.get("download:http://x/a.jpg") is None
        assert resize_cache.get("resize:a.jpg:10x10:contain") is None
        assert resize_cache.get("resize:b.jpg:10x10:contain") == "b_10x10.jpg"

    def test_purge_unknown_asset(self, resize_cache: InMemoryResizeCache) -> None:
        assert resize_cache.purge("unknown.jpg") == 0

    def test_invalidate_all(self, resize_cache: InMemoryResizeCache) -> None:
        resize_cache.put("k1", "a.jpg", 1)
        resize_cache.put("k2", "b.jpg", 2)

        resize_cache.invalidate_all()

        assert len(resize_cache) == 0
        assert resize_cache.get("k1") is None

    def test_invalidate_all_on_empty_cache(self, resize_cache: InMemoryResizeCache) -> None:
        resize_cache.invalidate_all()
        assert len(resize_cache) == 0

    def test_unbounded_by_default(self, resize_cache: InMemoryResizeCache) -> None:
        for i in range(1000):
            resize_cache.put(f"k{i}", "a.jpg", i)

        assert len(resize_cache) == 1000


class TestBoundedCache:
    """Tests du mode LRU (max_entries)."""

    def test_evicts_least_recently_used(self) -> None:
        cache = InMemoryResizeCache(max_entries=2)
        cache.put("k1", "a.jpg", 1)
        cache.put("k2", "a.jpg", 2)
        cache.get("k1")  # k1 devient le plus recent
        cache.put("k3", "a.jpg", 3)

        assert cache.get("k1") == 1
        assert cache.get("k2") is None
        assert cache.get("k3") == 3

    @pytest.mark.parametrize("max_entries", [0, -5])
    def test_rejects_invalid_limit(self, max_entries: int) -> None:
        with pytest.raises(ValueError):
            InMemoryResizeCache(max_entries=max_entries)


class TestThreadSafety:
    def test_concurrent_puts_are_all_recorded(self) -> None:
        cache = InMemoryResizeCache()

        def worker(offset: int) -> None:
            for i in range(200):
                cache.put(f"k{offset}-{i}", f"{offset}.jpg", i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 8 * 200
        assert cache.purge("3.jpg") == 200
