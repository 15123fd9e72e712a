"""
Filesystem storage adapter.

Two tiers: a MemoryCache in front of a DiskStore laid out by KeyCodec.
Reads are cache-first with read-through population; writes and removals
hit both tiers concurrently. There is no transaction across the tiers:
if one side fails the other is not rolled back, and the failure is
raised as PartialTierFailure.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

from shardstore.core.config import ShardStoreConfig
from shardstore.core.errors import InvalidKeyError, PartialTierFailure, StorageError
from shardstore.core.types import Chunk, KeyLike, StorageKey
from shardstore.paths.base import PathMath
from shardstore.paths.detect import detect_path_math
from shardstore.store.base import StorageAdapter
from shardstore.store.codec import KeyCodec
from shardstore.store.disk import DiskStore
from shardstore.store.memory import MemoryCache

logger = logging.getLogger(__name__)

DEFAULT_BASE_DIRECTORY = "shardstore-data"


class FileSystemStorageAdapter(StorageAdapter):
    """
    Sharded-directory storage with an in-memory cache.

    Usage:
        adapter = FileSystemStorageAdapter("~/.shardstore/data")

        await adapter.save(["ab12cd34", "snapshot"], b"...")
        data = await adapter.load(["ab12cd34", "snapshot"])
        chunks = await adapter.load_range(["ab12cd34"])
        await adapter.remove_range(["ab12cd34"])
    """

    def __init__(
        self,
        base_directory: str = DEFAULT_BASE_DIRECTORY,
        path_math: PathMath | None = None,
    ) -> None:
        self._path_math = path_math or detect_path_math()
        self._codec = KeyCodec(base_directory, self._path_math)
        self._cache = MemoryCache(separator=self._path_math.sep)
        self._disk = DiskStore(self._path_math)
        logger.debug(
            f"Storage adapter at {self._codec.base_directory} "
            f"({self._path_math.name})"
        )

    @classmethod
    def from_config(cls, config: ShardStoreConfig) -> FileSystemStorageAdapter:
        """Build an adapter from loaded configuration."""
        return cls(
            base_directory=str(config.get_base_directory()),
            path_math=detect_path_math(config.storage.platform),
        )

    @property
    def base_directory(self) -> str:
        return self._codec.base_directory

    @property
    def path_math(self) -> PathMath:
        return self._path_math

    @property
    def codec(self) -> KeyCodec:
        return self._codec

    @property
    def cache(self) -> MemoryCache:
        return self._cache

    @property
    def disk(self) -> DiskStore:
        return self._disk

    # ━━━ Single keys ━━━

    async def load(self, key: KeyLike) -> bytes | None:
        key = StorageKey.coerce(key)
        path = self._codec.encode(key)
        cache_key = self._codec.to_cache_string(key)

        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._disk.read(path)
        if data is not None:
            logger.debug(f"Cache miss, loaded from disk: {cache_key}")
            await self._cache.put(cache_key, data)
        return data

    async def save(self, key: KeyLike, data: bytes) -> None:
        key = StorageKey.coerce(key)
        path = self._codec.encode(key)
        cache_key = self._codec.to_cache_string(key)
        payload = bytes(data)

        await self._both_tiers(
            "save",
            cache_key,
            self._cache.put(cache_key, payload),
            self._disk.write(path, payload),
        )

    async def remove(self, key: KeyLike) -> None:
        key = StorageKey.coerce(key)
        path = self._codec.encode(key)
        cache_key = self._codec.to_cache_string(key)

        await self._both_tiers(
            "remove",
            cache_key,
            self._cache.delete(cache_key),
            self._disk.delete(path),
        )

    # ━━━ Ranges ━━━

    async def load_range(self, prefix: KeyLike) -> list[Chunk]:
        prefix = StorageKey.coerce(prefix)
        prefix_string = self._codec.to_cache_string(prefix)
        dir_path = self._codec.shard_directory(prefix)

        cached_keys = await self._cache.keys_with_prefix(prefix_string)
        disk_files = await self._disk.list_files_recursive(dir_path)
        disk_keys = self._decode_disk_keys(disk_files, prefix)

        # Same canonical string form on both sides, so a set union dedupes
        all_keys = sorted(cached_keys | disk_keys)
        logger.debug(
            f"Range {prefix_string}: {len(cached_keys)} cached, "
            f"{len(disk_keys)} on disk, {len(all_keys)} total"
        )

        keys = [self._codec.from_cache_string(k) for k in all_keys]
        payloads = await asyncio.gather(*(self.load(k) for k in keys))
        return [Chunk(key=k, data=data) for k, data in zip(keys, payloads)]

    async def remove_range(self, prefix: KeyLike) -> None:
        prefix = StorageKey.coerce(prefix)
        prefix_string = self._codec.to_cache_string(prefix)
        dir_path = self._codec.shard_directory(prefix)

        await self._both_tiers(
            "remove_range",
            prefix_string,
            self._cache.delete_prefix(prefix_string),
            self._disk.delete_tree(dir_path),
        )

    async def close(self) -> None:
        self._cache.clear()

    # ━━━ Internal ━━━

    def _decode_disk_keys(self, paths: list[str], prefix: StorageKey) -> set[str]:
        """Cache strings of the stored keys found at ``paths``."""
        keys: set[str] = set()
        for path in paths:
            try:
                key = self._codec.decode(path)
            except InvalidKeyError as e:
                logger.warning(f"Skipping unrecognised file in store: {e.message}")
                continue
            if key.has_prefix(prefix):
                keys.add(self._codec.to_cache_string(key))
        return keys

    async def _both_tiers(
        self,
        operation: str,
        target: str,
        cache_op: Awaitable[Any],
        disk_op: Awaitable[Any],
    ) -> None:
        """Run one operation on both tiers concurrently and report failures."""
        cache_result, disk_result = await asyncio.gather(
            cache_op, disk_op, return_exceptions=True
        )

        failures = {
            tier: result
            for tier, result in (("cache", cache_result), ("disk", disk_result))
            if isinstance(result, BaseException)
        }
        if not failures:
            return

        for result in failures.values():
            if not isinstance(result, Exception):
                raise result

        if len(failures) == 2:
            error = failures["disk"]
            if isinstance(error, StorageError):
                raise error
            raise StorageError(
                f"{operation} failed on both tiers for '{target}': {error}",
                details={"key": target},
            ) from error

        tier, error = next(iter(failures.items()))
        logger.warning(
            f"{operation} failed on {tier} tier for '{target}', "
            f"tiers may be inconsistent: {error}"
        )
        raise PartialTierFailure(
            f"{operation} failed on the {tier} tier for '{target}': {error}",
            operation=operation,
            failed_tier=tier,
            details={"key": target},
        ) from error
