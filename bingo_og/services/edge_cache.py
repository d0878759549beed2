"""
Edge cache for rendered images, keyed by canonical request URL.

Entries are immutable once written; the only way out is eviction.
"""
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

from ..utils.debug import print_step


@dataclass(frozen=True)
class CacheEntry:
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    status_code: int = 200


class EdgeCache(Protocol):
    async def get(self, key: str) -> Optional[CacheEntry]:
        ...

    async def put(self, key: str, entry: CacheEntry) -> None:
        ...


class InMemoryEdgeCache:
    """
    Process-local edge cache with least-recently-used eviction.

    Args:
        max_entries: Capacity; the oldest entry is evicted past it
    """

    def __init__(self, max_entries: int = 512):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    async def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
        return entry

    async def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            print_step("Edge Cache Eviction", {"key": evicted}, "output")


async def put_best_effort(cache: EdgeCache, key: str, entry: CacheEntry) -> None:
    """Write to the cache from a background task; failures are logged, never raised."""
    try:
        await cache.put(key, entry)
    except Exception as e:
        print_step("Edge Cache Write Failed", {"key": key, "error": str(e)}, "error")
        return
    print_step("Edge Cache Stored", {"key": key, "bytes": len(entry.body)}, "output")
