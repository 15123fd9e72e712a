"""
POSIX relative-path computation.

Both inputs are resolved first, then compared character by character
to find the last separator they share. Everything in ``from`` past that
separator becomes a ".." and everything in ``to`` past it is appended.
"""

from __future__ import annotations

import posixpath

from shardstore.paths.base import PathMath

SEP = "/"


class PosixPathMath(PathMath):
    """
    Relative paths for "/"-separated filesystems.

    Usage:
        math = PosixPathMath()
        math.relative("/a/b", "/a/b/c")  # "c"
        math.relative("/a/x", "/a/y")    # "../y"
    """

    name = "posix"
    _flavour = posixpath

    def relative(self, from_path: str, to_path: str) -> str:
        if from_path == to_path:
            return ""

        from_path = self.resolve(from_path)
        to_path = self.resolve(to_path)

        if from_path == to_path:
            return ""

        # Skip the leading "/" of both absolute paths
        from_start = 1
        from_end = len(from_path)
        from_len = from_end - from_start
        to_start = 1
        to_len = len(to_path) - to_start

        # Longest common path from root
        length = min(from_len, to_len)
        last_common_sep = -1
        i = 0
        while i < length:
            char = from_path[from_start + i]
            if char != to_path[to_start + i]:
                break
            if char == SEP:
                last_common_sep = i
            i += 1

        if i == length:
            if to_len > length:
                if to_path[to_start + i] == SEP:
                    # from is an ancestor of to: /foo/bar -> /foo/bar/baz
                    return to_path[to_start + i + 1 :]
                if i == 0:
                    # from is the root: / -> /foo
                    return to_path[to_start + i :]
            elif from_len > length:
                if from_path[from_start + i] == SEP:
                    # to is an ancestor of from: /foo/bar/baz -> /foo/bar
                    last_common_sep = i
                elif i == 0:
                    # to is the root: /foo/bar -> /
                    last_common_sep = 0

        # One ".." for every component of from past the common prefix
        ups = [
            ".."
            for j in range(from_start + last_common_sep + 1, from_end + 1)
            if j == from_end or from_path[j] == SEP
        ]

        return SEP.join(ups) + to_path[to_start + last_common_sep :]
