"""
StorageAdapter interface.

Key-value store for opaque binary blobs under hierarchical keys, with
prefix-range queries and prefix-range deletion. This is the only surface
a document-sync engine sees; it knows nothing about files or paths.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shardstore.core.types import Chunk, KeyLike


class StorageAdapter(ABC):
    """
    Abstract base class for storage adapters.

    Keys are StorageKey values (or sequences of segments): ["ab12cd34", "snapshot"]
    Values are bytes (serialization is caller's responsibility).

    Implementations:
        FileSystemStorageAdapter — sharded directory tree + memory cache
    """

    @abstractmethod
    async def load(self, key: KeyLike) -> bytes | None:
        """Get a value by key. Returns None if not found."""
        ...

    @abstractmethod
    async def save(self, key: KeyLike, data: bytes) -> None:
        """Set a value. Overwrites if exists."""
        ...

    @abstractmethod
    async def remove(self, key: KeyLike) -> None:
        """Delete a key. Missing keys are a no-op."""
        ...

    @abstractmethod
    async def load_range(self, prefix: KeyLike) -> list[Chunk]:
        """Load every key under ``prefix``."""
        ...

    @abstractmethod
    async def remove_range(self, prefix: KeyLike) -> None:
        """Delete every key under ``prefix``."""
        ...

    async def close(self) -> None:
        """Release resources held by the adapter."""
        return None

    async def __aenter__(self) -> StorageAdapter:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
