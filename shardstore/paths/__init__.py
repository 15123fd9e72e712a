"""Platform-aware path arithmetic used to turn disk paths back into keys."""

from shardstore.paths.base import PathMath
from shardstore.paths.detect import detect_path_math
from shardstore.paths.posix import PosixPathMath
from shardstore.paths.windows import WindowsPathMath

__all__ = ["PathMath", "PosixPathMath", "WindowsPathMath", "detect_path_math"]
