"""Tests for the disk tier."""

from pathlib import Path

import pytest

from shardstore.core.errors import StorageError
from shardstore.store.disk import DiskStore


@pytest.fixture
def disk(posix):
    return DiskStore(posix)


@pytest.mark.asyncio
async def test_write_creates_directories(disk, tmp_path: Path):
    target = tmp_path / "ab" / "12cd34" / "snap"
    await disk.write(str(target), b"\x01\x02\x03")

    assert target.read_bytes() == b"\x01\x02\x03"
    assert await disk.exists(str(target)) is True
    # No temp file left behind
    assert [p.name for p in target.parent.iterdir()] == ["snap"]


@pytest.mark.asyncio
async def test_read(disk, tmp_path: Path):
    target = tmp_path / "blob"
    target.write_bytes(b"data")
    assert await disk.read(str(target)) == b"data"


@pytest.mark.asyncio
async def test_read_missing(disk, tmp_path: Path):
    assert await disk.read(str(tmp_path / "missing")) is None
    assert await disk.exists(str(tmp_path / "missing")) is False


@pytest.mark.asyncio
async def test_read_directory_is_not_a_blob(disk, tmp_path: Path):
    (tmp_path / "dir").mkdir()
    assert await disk.read(str(tmp_path / "dir")) is None


@pytest.mark.asyncio
async def test_overwrite(disk, tmp_path: Path):
    target = str(tmp_path / "ab" / "cd")
    await disk.write(target, b"old")
    await disk.write(target, b"new")
    assert await disk.read(target) == b"new"


@pytest.mark.asyncio
async def test_write_failure_raises_storage_error(disk, tmp_path: Path):
    (tmp_path / "file").write_bytes(b"")
    with pytest.raises(StorageError, match="Failed to write") as exc_info:
        await disk.write(str(tmp_path / "file" / "child"), b"x")
    assert exc_info.value.details["path"] == str(tmp_path / "file" / "child")


@pytest.mark.asyncio
async def test_delete(disk, tmp_path: Path):
    target = tmp_path / "blob"
    target.write_bytes(b"data")
    assert await disk.delete(str(target)) is True
    assert not target.exists()
    assert await disk.delete(str(target)) is False


@pytest.mark.asyncio
async def test_delete_tree(disk, tmp_path: Path):
    await disk.write(str(tmp_path / "ab" / "12" / "a"), b"1")
    await disk.write(str(tmp_path / "ab" / "12" / "b" / "c"), b"2")

    assert await disk.delete_tree(str(tmp_path / "ab" / "12")) is True
    assert not (tmp_path / "ab" / "12").exists()
    assert (tmp_path / "ab").exists()
    assert await disk.delete_tree(str(tmp_path / "ab" / "12")) is False


@pytest.mark.asyncio
async def test_list_files_recursive(disk, tmp_path: Path):
    await disk.write(str(tmp_path / "ab" / "12" / "a"), b"1")
    await disk.write(str(tmp_path / "ab" / "12" / "b" / "c"), b"2")
    await disk.write(str(tmp_path / "ab" / "12" / "b" / "d" / "e"), b"3")

    files = await disk.list_files_recursive(str(tmp_path / "ab"))

    assert sorted(files) == sorted(
        [
            str(tmp_path / "ab" / "12" / "a"),
            str(tmp_path / "ab" / "12" / "b" / "c"),
            str(tmp_path / "ab" / "12" / "b" / "d" / "e"),
        ]
    )


@pytest.mark.asyncio
async def test_list_missing_directory(disk, tmp_path: Path):
    assert await disk.list_files_recursive(str(tmp_path / "missing")) == []


@pytest.mark.asyncio
async def test_list_skips_in_flight_writes(disk, tmp_path: Path):
    (tmp_path / "snap").write_bytes(b"done")
    (tmp_path / f".snap.{'0' * 32}.tmp").write_bytes(b"partial")

    assert await disk.list_files_recursive(str(tmp_path)) == [str(tmp_path / "snap")]


@pytest.mark.asyncio
async def test_delete_directory_is_not_a_blob(disk, tmp_path: Path):
    await disk.write(str(tmp_path / "ab" / "12" / "child"), b"1")

    assert await disk.delete(str(tmp_path / "ab" / "12")) is False
    assert (tmp_path / "ab" / "12" / "child").exists()


@pytest.mark.asyncio
async def test_delete_tree_on_a_file(disk, tmp_path: Path):
    target = tmp_path / "ab" / "12"
    await disk.write(str(target), b"blob")

    assert await disk.delete_tree(str(target)) is True
    assert not target.exists()


@pytest.mark.asyncio
async def test_list_files_on_a_file(disk, tmp_path: Path):
    target = tmp_path / "ab" / "12"
    await disk.write(str(target), b"blob")

    assert await disk.list_files_recursive(str(target)) == [str(target)]
