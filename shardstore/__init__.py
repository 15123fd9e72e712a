"""
shardstore — filesystem key-value storage with a sharded layout and a memory cache.

Public API:
    from shardstore import FileSystemStorageAdapter, StorageKey, Chunk
"""

__version__ = "0.1.0"

# Core
from shardstore.core.config import ShardStoreConfig
from shardstore.core.errors import (
    ConfigError,
    InvalidKeyError,
    PartialTierFailure,
    ShardStoreError,
    StorageError,
)
from shardstore.core.types import Chunk, StorageKey

# Paths
from shardstore.paths import PathMath, PosixPathMath, WindowsPathMath, detect_path_math

# Storage
from shardstore.store.base import StorageAdapter
from shardstore.store.filesystem import FileSystemStorageAdapter

__all__ = [
    # Core
    "ShardStoreConfig",
    "ShardStoreError",
    "ConfigError",
    "InvalidKeyError",
    "StorageError",
    "PartialTierFailure",
    "StorageKey",
    "Chunk",
    # Paths
    "PathMath",
    "PosixPathMath",
    "WindowsPathMath",
    "detect_path_math",
    # Storage
    "StorageAdapter",
    "FileSystemStorageAdapter",
]
