"""
shardstore exception hierarchy.

Every error in the system inherits from ShardStoreError.
"Not found" is never an error: lookups return None instead.

Usage:
    try:
        await adapter.save(key, payload)
    except PartialTierFailure as e:
        # One tier has the write, the other does not
    except StorageError as e:
        # Filesystem failure
    except ShardStoreError as e:
        # Anything else from shardstore
"""


class ShardStoreError(Exception):
    """Base exception for all shardstore errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(ShardStoreError):
    """Configuration is invalid, missing, or malformed."""

    pass


class InvalidKeyError(ShardStoreError):
    """Storage key is structurally malformed and cannot be mapped to disk."""

    pass


class StorageError(ShardStoreError):
    """Filesystem failure: permission denied, disk full, path too long, etc."""

    pass


class PartialTierFailure(StorageError):
    """
    One tier of a dual-tier operation failed while the other succeeded.

    The tier that succeeded is not rolled back. Treat the key (or range)
    as possibly inconsistent until the next successful operation on it.
    """

    def __init__(
        self,
        message: str,
        operation: str = "",
        failed_tier: str = "",
        details: dict | None = None,
    ):
        self.operation = operation
        self.failed_tier = failed_tier
        super().__init__(message, details)
