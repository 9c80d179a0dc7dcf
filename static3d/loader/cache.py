"""In-memory asset cache keyed by manifest key and validated by content hash."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass
class CacheEntry:
    """A cached asset body together with the hash it was fetched for."""

    hash: str
    data: bytes


class AssetCache:
    """Holds fetched asset bodies; an entry is only valid for its recorded hash."""

    def __init__(self) -> None:
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str, hash: str) -> bytes | None:
        """Return the cached body if the key exists and its hash matches."""
        entry = self._store.get(key)
        if entry is None or entry.hash != hash:
            return None
        return entry.data

    def put(self, key: str, hash: str, data: bytes) -> None:
        """Store a body, replacing any earlier entry under the same key."""
        self._store[key] = CacheEntry(hash=hash, data=bytes(data))

    def evict(self, key: str) -> None:
        """Remove the entry for a key, if present."""
        self._store.pop(key, None)

    def evict_stale(self, current_hashes: Mapping[str, str]) -> None:
        """Drop every entry whose key is absent from, or whose hash differs from, `current_hashes`."""
        self._store = {
            key: entry
            for key, entry in self._store.items()
            if current_hashes.get(key) == entry.hash
        }

    def __len__(self) -> int:
        return len(self._store)