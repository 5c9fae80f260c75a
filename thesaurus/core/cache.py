from __future__ import annotations
"""Result cache for query rewrites, with tag based invalidation.

Adds:
 - LRU eviction bounded by max_entries (0 disables caching)
 - Tag index so all rewrites of a thesaurus index can be dropped at once
 - Per-instance stats (hits / misses) exposed via stats()
"""
from typing import Dict, Iterable, Optional, Protocol, Set
from collections import OrderedDict
import threading


class RewriteCache(Protocol):
    def load(self, key: str) -> Optional[Dict[str, float]]:
        ...

    def save(self, key: str, value: Dict[str, float], tags: Iterable[str]) -> None:
        ...

    def clean(self, tags: Iterable[str]) -> int:
        ...


class InMemoryRewriteCache:
    def __init__(self, max_entries: int = 1000):
        self._entries: "OrderedDict[str, Dict[str, float]]" = OrderedDict()
        self._tags: Dict[str, Set[str]] = {}
        self._max = max_entries
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def load(self, key: str) -> Optional[Dict[str, float]]:
        with self._lock:
            if key not in self._entries:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return dict(self._entries[key])

    def save(self, key: str, value: Dict[str, float], tags: Iterable[str]) -> None:
        if not self._max:
            return
        with self._lock:
            self._entries[key] = dict(value)
            self._entries.move_to_end(key)
            for tag in tags:
                self._tags.setdefault(tag, set()).add(key)
            while len(self._entries) > self._max:
                evicted, _ = self._entries.popitem(last=False)
                self._forget(evicted)

    def clean(self, tags: Iterable[str]) -> int:
        """Drop every entry saved with one of `tags`, returns the number dropped."""
        removed = 0
        with self._lock:
            for tag in list(tags):
                for key in self._tags.pop(tag, set()):
                    if self._entries.pop(key, None) is not None:
                        removed += 1
                    self._forget(key)
        return removed

    def _forget(self, key: str) -> None:
        for keys in self._tags.values():
            keys.discard(key)

    def stats(self) -> Dict[str, float]:
        lookups = (self._hits + self._misses) or 1
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups,
        }
