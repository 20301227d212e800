"""
Cache memoire des resultats d'ingestion et de redimensionnement.

Le cache n'est qu'une memoire du travail deja reflete sur le disque : il
n'est jamais persiste et n'est jamais la source de verite sur l'existence
d'une affiche. Sans limite par defaut ; max_entries active une eviction LRU.
"""

import threading
from collections import OrderedDict
from typing import Any, NamedTuple, Optional

from filmotheque.core.ports.posters import IResizeCache
from filmotheque.core.value_objects import AssetKey


class CacheEntry(NamedTuple):
    """Entree du cache : resultat et cle de l'affiche qu'il reference."""

    asset_key: AssetKey
    result: Any


class InMemoryResizeCache(IResizeCache):
    """
    Implementation de IResizeCache protegee par un verrou.

    Les cles de cache suivent le format "<operation>:<details>", par exemple
    "download:<url>", "store:<chemin>" ou "resize:<cle>:200x300:contain".

    Example:
        cache = InMemoryResizeCache()
        cache.put("resize:abc.jpg:200x300:contain", "abc.jpg", path)
        cache.get("resize:abc.jpg:200x300:contain")
        cache.purge("abc.jpg")
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        """
        Args:
            max_entries: Nombre maximum d'entrees (None = illimite)
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries doit etre >= 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, cache_key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is None:
                return None
            self._entries.move_to_end(cache_key)
            return entry.result

    def put(self, cache_key: str, asset_key: AssetKey, result: Any) -> None:
        with self._lock:
            self._entries[cache_key] = CacheEntry(asset_key, result)
            self._entries.move_to_end(cache_key)
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)

    def discard(self, cache_key: str) -> None:
        """Retire une entree si elle existe."""
        with self._lock:
            self._entries.pop(cache_key, None)

    def purge(self, asset_key: AssetKey) -> int:
        with self._lock:
            stale = [k for k, e in self._entries.items() if e.asset_key == asset_key]
            for cache_key in stale:
                del self._entries[cache_key]
            return len(stale)

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
