"""Shared test fixtures for shardstore."""

import logging

import pytest

from shardstore.core.config import ShardStoreConfig
from shardstore.paths.posix import PosixPathMath
from shardstore.paths.windows import WindowsPathMath
from shardstore.store.filesystem import FileSystemStorageAdapter


@pytest.fixture
def config():
    """Create a default config without loading from disk."""
    return ShardStoreConfig()


@pytest.fixture
def posix():
    return PosixPathMath()


@pytest.fixture
def windows():
    return WindowsPathMath()


@pytest.fixture
def adapter(tmp_path):
    """Create an adapter rooted in a fresh temp directory."""
    return FileSystemStorageAdapter(str(tmp_path))


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logging.getLogger("shardstore").handlers = []
