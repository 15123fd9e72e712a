"""
shardstore shared types.

All types are frozen dataclasses. Keys are validated when they are built,
so a malformed key never reaches the path layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from shardstore.core.errors import InvalidKeyError

# Characters that would let a segment escape its directory level
FORBIDDEN_CHARS = ("/", "\\", "\x00")
RESERVED_SEGMENTS = (".", "..")

# First segment is split into <first[:2]>/<first[2:]> on disk
SHARD_WIDTH = 2


@dataclass(frozen=True, slots=True)
class StorageKey:
    """
    An ordered, non-empty sequence of path-safe string segments.

    A first segment of exactly 2 characters is a valid key value, but it
    cannot be stored or used as a range prefix: KeyCodec needs a non-empty
    shard suffix and raises InvalidKeyError for it.

    Usage:
        key = StorageKey(["ab12cd34", "snapshot"])
        key = StorageKey.parse("ab12cd34/snapshot")
        key.has_prefix(StorageKey(["ab12cd34"]))  # True
    """

    segments: tuple[str, ...]

    def __init__(self, segments: Iterable[str]) -> None:
        if isinstance(segments, str):
            raise InvalidKeyError(
                f"Storage key must be a sequence of segments, got string {segments!r}"
            )
        parts = tuple(segments)
        _validate(parts)
        object.__setattr__(self, "segments", parts)

    @staticmethod
    def parse(text: str, sep: str = "/") -> StorageKey:
        """Build a key from its joined form, e.g. "ab12cd34/snapshot"."""
        return StorageKey(text.split(sep))

    @staticmethod
    def coerce(value: KeyLike) -> StorageKey:
        """Accept a StorageKey or any sequence of strings."""
        if isinstance(value, StorageKey):
            return value
        return StorageKey(value)

    @property
    def first(self) -> str:
        return self.segments[0]

    def has_prefix(self, prefix: StorageKey) -> bool:
        """True if this key starts with every segment of ``prefix``."""
        n = len(prefix.segments)
        return self.segments[:n] == prefix.segments

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> str:
        return self.segments[index]

    def __str__(self) -> str:
        return "/".join(self.segments)


KeyLike = Union[StorageKey, Iterable[str]]


@dataclass(frozen=True, slots=True)
class Chunk:
    """A range-query result. ``data`` is None when the key could not be loaded."""

    key: StorageKey
    data: bytes | None


def _validate(parts: tuple[str, ...]) -> None:
    if not parts:
        raise InvalidKeyError("Storage key must have at least one segment")

    for index, segment in enumerate(parts):
        if not isinstance(segment, str):
            raise InvalidKeyError(
                f"Key segment {index} must be a string, got {type(segment).__name__}",
                details={"segment": index},
            )
        if not segment:
            raise InvalidKeyError(
                f"Key segment {index} is empty", details={"segment": index}
            )
        if segment in RESERVED_SEGMENTS:
            raise InvalidKeyError(
                f"Key segment {index} may not be '{segment}'",
                details={"segment": index},
            )
        for char in FORBIDDEN_CHARS:
            if char in segment:
                raise InvalidKeyError(
                    f"Key segment {index} contains forbidden character {char!r}",
                    details={"segment": index},
                )

    if len(parts[0]) < SHARD_WIDTH:
        raise InvalidKeyError(
            f"First key segment must be at least {SHARD_WIDTH} characters "
            f"to be sharded, got {parts[0]!r}"
        )
