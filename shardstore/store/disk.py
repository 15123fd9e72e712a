"""
Disk tier — durable blob storage on the local filesystem.

Uses aiofiles for async file access. Writes go to a hidden temp file in
the target directory and are moved into place with a single replace, so
a concurrent reader sees either the old blob or the new one.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import re
import shutil
import uuid

import aiofiles
import aiofiles.os

from shardstore.core.errors import StorageError
from shardstore.paths.base import PathMath

logger = logging.getLogger(__name__)

# In-flight writes (.<name>.<32 hex>.tmp) are never reported as keys
_TEMP_NAME = re.compile(r"^\..+\.[0-9a-f]{32}\.tmp$")


class DiskStore:
    """
    Binary blob storage addressed by absolute paths.

    Usage:
        disk = DiskStore(PosixPathMath())
        await disk.write("/data/ab/12cd34/snap", b"...")
        data = await disk.read("/data/ab/12cd34/snap")
        files = await disk.list_files_recursive("/data/ab/12cd34")
    """

    def __init__(self, path_math: PathMath) -> None:
        self._path_math = path_math

    async def exists(self, path: str) -> bool:
        return await aiofiles.os.path.exists(path)

    async def read(self, path: str) -> bytes | None:
        """Contents of the file at ``path``, or None if there is no file."""
        try:
            if not await aiofiles.os.path.isfile(path):
                return None
            async with aiofiles.open(path, mode="rb") as f:
                return await f.read()
        except FileNotFoundError:
            # Removed between the check and the open
            return None
        except OSError as e:
            raise StorageError(
                f"Failed to read '{path}': {e}", details={"path": path}
            ) from e

    async def write(self, path: str, payload: bytes) -> None:
        """Write ``payload`` to ``path``, creating parent directories."""
        directory = self._path_math.dirname(path)
        name = self._path_math.basename(path)
        temp_path = self._path_math.join(
            directory, f".{name}.{uuid.uuid4().hex}.tmp"
        )

        try:
            await aiofiles.os.makedirs(directory, exist_ok=True)
            async with aiofiles.open(temp_path, mode="wb") as f:
                await f.write(payload)
            await aiofiles.os.replace(temp_path, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                await aiofiles.os.remove(temp_path)
            raise StorageError(
                f"Failed to write '{path}': {e}", details={"path": path}
            ) from e

        logger.debug(f"Wrote {len(payload)} bytes to {path}")

    async def delete(self, path: str) -> bool:
        """Delete the file at ``path``. Returns True if it existed."""
        try:
            if not await aiofiles.os.path.isfile(path):
                # A directory here holds other keys, not a blob
                return False
            await aiofiles.os.remove(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(
                f"Failed to delete '{path}': {e}", details={"path": path}
            ) from e

    async def delete_tree(self, dir_path: str) -> bool:
        """
        Recursively delete ``dir_path``. Returns True if it existed.

        A regular file at ``dir_path`` is deleted too: it is the blob of a
        key equal to the range prefix.
        """
        if await aiofiles.os.path.isfile(dir_path):
            return await self.delete(dir_path)
        if not await aiofiles.os.path.isdir(dir_path):
            return False

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, shutil.rmtree, dir_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(
                f"Failed to delete directory '{dir_path}': {e}",
                details={"path": dir_path},
            ) from e

        logger.debug(f"Deleted directory tree {dir_path}")
        return True

    async def list_files_recursive(self, dir_path: str) -> list[str]:
        """
        All files below ``dir_path``. Empty if the directory is missing.

        If ``dir_path`` is itself a regular file, it is the only result.
        """
        try:
            if await aiofiles.os.path.isfile(dir_path):
                if _TEMP_NAME.match(self._path_math.basename(dir_path)):
                    return []
                return [dir_path]
            if not await aiofiles.os.path.isdir(dir_path):
                return []
            names = await aiofiles.os.listdir(dir_path)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(
                f"Failed to list '{dir_path}': {e}", details={"path": dir_path}
            ) from e

        files: list[str] = []
        subdirs: list[str] = []
        for name in sorted(names):
            if _TEMP_NAME.match(name):
                continue
            entry = self._path_math.join(dir_path, name)
            if await aiofiles.os.path.isdir(entry):
                subdirs.append(entry)
            else:
                files.append(entry)

        nested = await asyncio.gather(
            *(self.list_files_recursive(subdir) for subdir in subdirs)
        )
        for sub_files in nested:
            files.extend(sub_files)
        return files
