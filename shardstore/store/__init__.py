"""Storage tiers and the adapter that composes them."""

from shardstore.store.base import StorageAdapter
from shardstore.store.codec import KeyCodec
from shardstore.store.disk import DiskStore
from shardstore.store.filesystem import FileSystemStorageAdapter
from shardstore.store.memory import MemoryCache

__all__ = [
    "StorageAdapter",
    "KeyCodec",
    "DiskStore",
    "FileSystemStorageAdapter",
    "MemoryCache",
]
