"""
PathMath auto-detection — picks the path strategy for the current OS.
"""

from __future__ import annotations

import logging
import platform

from shardstore.paths.base import PathMath

logger = logging.getLogger(__name__)


def detect_path_math(preference: str = "auto") -> PathMath:
    """
    Detect and return the path strategy for this system.

    Args:
        preference: "auto", "posix", "windows"
                    "auto" picks the flavour of the current OS.

    Returns:
        An instantiated PathMath
    """
    if preference != "auto":
        return _create_by_name(preference)

    system = platform.system().lower()

    if system == "windows":
        logger.debug("Detected Windows — using Windows path math")
        from shardstore.paths.windows import WindowsPathMath

        return WindowsPathMath()
    else:
        logger.debug(f"Detected {system} — using POSIX path math")
        from shardstore.paths.posix import PosixPathMath

        return PosixPathMath()


def _create_by_name(name: str) -> PathMath:
    """Create a path strategy by name."""
    name = name.lower().strip()

    if name in ("windows", "win32", "nt"):
        from shardstore.paths.windows import WindowsPathMath

        return WindowsPathMath()
    elif name in ("posix", "linux", "darwin"):
        from shardstore.paths.posix import PosixPathMath

        return PosixPathMath()
    else:
        raise ValueError(
            f"Unknown path platform: '{name}'. "
            f"Available: auto, posix, windows"
        )
