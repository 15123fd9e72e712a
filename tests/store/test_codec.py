"""Tests for the key <-> path codec."""

import pytest

from shardstore.core.errors import InvalidKeyError
from shardstore.core.types import StorageKey
from shardstore.store.codec import KeyCodec


@pytest.fixture
def codec(posix):
    return KeyCodec("/data/store", posix)


def test_encode_shards_first_segment(codec):
    assert codec.encode(["ab12cd34", "snap"]) == "/data/store/ab/12cd34/snap"
    assert codec.encode(["ab12cd34"]) == "/data/store/ab/12cd34"
    assert codec.encode(["abc", "x", "y"]) == "/data/store/ab/c/x/y"


def test_shard_directory(codec):
    assert codec.shard_directory(["ab12cd34"]) == "/data/store/ab/12cd34"
    assert codec.shard_directory(["ab12cd34", "sync"]) == "/data/store/ab/12cd34/sync"


def test_two_character_first_segment_is_rejected(codec):
    """["ab", "x"] and ["abx"] would share a file."""
    with pytest.raises(InvalidKeyError, match="longer than 2"):
        codec.encode(["ab", "x"])
    with pytest.raises(InvalidKeyError):
        codec.shard_directory(["ab"])


def test_decode(codec):
    assert codec.decode("/data/store/ab/12cd34/snap") == StorageKey(["ab12cd34", "snap"])
    assert codec.decode("/data/store/ab/c") == StorageKey(["abc"])


@pytest.mark.parametrize(
    "key",
    [
        ["ab12cd34"],
        ["ab12cd34", "snapshot"],
        ["ab12cd34", "sync", "0f9e8d7c"],
        ["abc", "x"],
    ],
)
def test_round_trip(codec, key):
    decoded = codec.decode(codec.encode(key))
    assert codec.to_cache_string(decoded) == codec.to_cache_string(key)


def test_decode_relative_base(posix, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    codec = KeyCodec("store", posix)
    assert codec.base_directory == str(tmp_path / "store")
    path = str(tmp_path / "store" / "ab" / "12cd34" / "snap")
    assert codec.decode(path) == StorageKey(["ab12cd34", "snap"])


@pytest.mark.parametrize(
    "path",
    [
        "/data/store",
        "/data/other/ab/12cd34",
        "/data/store/ab",
        "/data/store/abc/def",
    ],
)
def test_decode_rejects_foreign_paths(codec, path):
    with pytest.raises(InvalidKeyError):
        codec.decode(path)


def test_cache_string(codec):
    assert codec.to_cache_string(["ab12cd34", "snap"]) == "ab12cd34/snap"
    assert codec.from_cache_string("ab12cd34/snap") == StorageKey(["ab12cd34", "snap"])


def test_windows_codec(windows):
    codec = KeyCodec("C:\\store", windows)

    path = codec.encode(["ab12cd34", "snap"])
    assert path == "C:\\store\\ab\\12cd34\\snap"
    assert codec.to_cache_string(["ab12cd34", "snap"]) == "ab12cd34\\snap"
    assert codec.decode(path) == StorageKey(["ab12cd34", "snap"])
    # Drive letters and directories compare case-insensitively
    assert codec.decode("c:\\STORE\\ab\\12cd34\\snap") == StorageKey(["ab12cd34", "snap"])


def test_windows_codec_rejects_other_drive(windows):
    codec = KeyCodec("C:\\store", windows)
    with pytest.raises(InvalidKeyError, match="not inside the store"):
        codec.decode("D:\\store\\ab\\12cd34")
