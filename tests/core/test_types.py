"""Tests for StorageKey validation and helpers."""

import pytest

from shardstore.core.errors import InvalidKeyError
from shardstore.core.types import Chunk, StorageKey


def test_key_from_segments():
    key = StorageKey(["ab12cd34", "snapshot"])
    assert key.segments == ("ab12cd34", "snapshot")
    assert key.first == "ab12cd34"
    assert len(key) == 2
    assert list(key) == ["ab12cd34", "snapshot"]
    assert key[1] == "snapshot"
    assert str(key) == "ab12cd34/snapshot"


def test_key_equality_is_over_full_sequence():
    assert StorageKey(["ab12", "x"]) == StorageKey(("ab12", "x"))
    assert StorageKey(["ab12", "x"]) != StorageKey(["ab12"])
    assert len({StorageKey(["ab12", "x"]), StorageKey(["ab12", "x"])}) == 1


def test_parse():
    assert StorageKey.parse("ab12cd34/sync/h1") == StorageKey(["ab12cd34", "sync", "h1"])
    assert StorageKey.parse("ab12\\x", sep="\\") == StorageKey(["ab12", "x"])


def test_coerce_passes_keys_through():
    key = StorageKey(["ab12"])
    assert StorageKey.coerce(key) is key
    assert StorageKey.coerce(["ab12"]) == key


def test_has_prefix():
    key = StorageKey(["ab12cd34", "sync", "h1"])
    assert key.has_prefix(StorageKey(["ab12cd34"]))
    assert key.has_prefix(StorageKey(["ab12cd34", "sync"]))
    assert key.has_prefix(key)
    assert not key.has_prefix(StorageKey(["ab12cd3"]))
    assert not key.has_prefix(StorageKey(["ab12cd34", "sync", "h1", "more"]))


@pytest.mark.parametrize(
    "segments",
    [
        [],
        [""],
        ["ab12", ""],
        ["a"],
        ["ab12", "x/y"],
        ["ab12", "x\\y"],
        ["ab12", ".."],
        ["ab12", "."],
        ["ab12", "nul\x00"],
        ["ab12", 7],
    ],
)
def test_invalid_keys(segments):
    with pytest.raises(InvalidKeyError):
        StorageKey(segments)


def test_plain_string_is_rejected():
    """A bare string would otherwise be split into characters."""
    with pytest.raises(InvalidKeyError, match="sequence of segments"):
        StorageKey("ab12cd34")


def test_key_is_immutable():
    key = StorageKey(["ab12"])
    with pytest.raises(AttributeError):
        key.segments = ("cd34",)


def test_chunk():
    chunk = Chunk(key=StorageKey(["ab12"]), data=None)
    assert chunk.data is None


def test_two_character_first_segment_is_a_valid_value():
    """Valid as a key value; KeyCodec refuses to map it to disk."""
    key = StorageKey(["ab", "x"])
    assert key.first == "ab"
