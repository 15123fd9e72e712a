"""
In-memory cache tier — the fast, volatile side of the adapter.

Simple dict keyed by cache string. No eviction: everything ever read or
written stays until removed or the process exits.
"""

from __future__ import annotations


class MemoryCache:
    """
    In-memory cache keyed by canonical cache strings.

    Usage:
        cache = MemoryCache(separator="/")
        await cache.put("ab12cd34/snap", b"value")
        assert await cache.get("ab12cd34/snap") == b"value"
        await cache.keys_with_prefix("ab12cd34")  # {"ab12cd34/snap"}
    """

    def __init__(self, separator: str = "/") -> None:
        self._sep = separator
        self._data: dict[str, bytes] = {}

    async def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            return True
        return False

    async def keys_with_prefix(self, prefix: str) -> set[str]:
        """Keys equal to ``prefix`` or nested below it, segment-aligned."""
        nested = prefix + self._sep
        return {k for k in self._data if k == prefix or k.startswith(nested)}

    async def delete_prefix(self, prefix: str) -> int:
        """Drop every key under ``prefix``. Returns how many were removed."""
        keys = await self.keys_with_prefix(prefix)
        for key in keys:
            del self._data[key]
        return len(keys)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
