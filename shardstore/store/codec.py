"""
KeyCodec — maps storage keys to sharded filesystem paths and back.

On-disk layout (a persisted format, do not change):

    <base>/<first[:2]>/<first[2:]>/<segment>/<segment>/...

Splitting the first segment keeps directory fan-out bounded when many
keys share an alphabet, e.g. hex or base58 document ids.
"""

from __future__ import annotations

from shardstore.core.errors import InvalidKeyError
from shardstore.core.types import SHARD_WIDTH, KeyLike, StorageKey
from shardstore.paths.base import PathMath


class KeyCodec:
    """
    Deterministic, reversible key <-> path mapping.

    Usage:
        codec = KeyCodec("/data/store", PosixPathMath())
        codec.encode(StorageKey(["ab12cd34", "snap"]))  # /data/store/ab/12cd34/snap
        codec.decode("/data/store/ab/12cd34/snap")      # StorageKey(["ab12cd34", "snap"])
    """

    def __init__(self, base_directory: str, path_math: PathMath) -> None:
        self._path_math = path_math
        self._base = path_math.resolve(base_directory)

    @property
    def base_directory(self) -> str:
        return self._base

    @property
    def sep(self) -> str:
        return self._path_math.sep

    def encode(self, key: KeyLike) -> str:
        """Path of the file that holds ``key``."""
        return self._shard_path(StorageKey.coerce(key))

    def shard_directory(self, prefix: KeyLike) -> str:
        """Directory that holds every key under ``prefix``."""
        return self._shard_path(StorageKey.coerce(prefix))

    def decode(self, path: str) -> StorageKey:
        """Recover the key stored at ``path`` (a file under the base directory)."""
        relative = self._path_math.relative(self._base, path)
        parts = self._path_math.split(relative)

        if (
            not parts
            or parts[0] == ".."
            or self._path_math.is_absolute(relative)
        ):
            raise InvalidKeyError(
                f"Path is not inside the store: {path}",
                details={"path": path, "base_directory": self._base},
            )
        if len(parts) < 2 or len(parts[0]) != SHARD_WIDTH:
            raise InvalidKeyError(
                f"Path is not a sharded key path: {path}",
                details={"path": path},
            )

        # Merge the shard prefix and suffix back into the first segment
        return StorageKey([parts[0] + parts[1], *parts[2:]])

    def to_cache_string(self, key: KeyLike) -> str:
        """Canonical joined form, shared by the cache and decoded disk keys."""
        return self.sep.join(StorageKey.coerce(key))

    def from_cache_string(self, text: str) -> StorageKey:
        return StorageKey.parse(text, self.sep)

    def _shard_path(self, key: StorageKey) -> str:
        first, *rest = key
        if len(first) <= SHARD_WIDTH:
            # An empty shard suffix is dropped by join, so ["ab", "x"] and
            # ["abx"] would land on the same file
            raise InvalidKeyError(
                f"First key segment must be longer than {SHARD_WIDTH} characters "
                f"to be sharded, got {first!r}"
            )
        return self._path_math.join(
            self._base,
            first[:SHARD_WIDTH],
            first[SHARD_WIDTH:],
            *rest,
        )
