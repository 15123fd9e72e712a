"""
Windows relative-path computation.

Same walk as the POSIX variant, with three differences: comparison is
case-insensitive, the separator is a backslash, and drive roots such as
``C:\\`` count as a two-character common prefix. Paths on different
drives have no relative form, so the resolved ``to`` is returned as-is.
"""

from __future__ import annotations

import ntpath

from shardstore.paths.base import PathMath

SEP = "\\"


class WindowsPathMath(PathMath):
    """
    Relative paths for drive-letter, backslash-separated filesystems.

    Usage:
        math = WindowsPathMath()
        math.relative("C:\\\\a\\\\b", "C:\\\\a\\\\b\\\\c")  # "c"
        math.relative("C:\\\\A", "C:\\\\a\\\\c")          # "c"
    """

    name = "windows"
    _flavour = ntpath

    def relative(self, from_path: str, to_path: str) -> str:
        if from_path == to_path:
            return ""

        from_orig = self.resolve(from_path)
        to_orig = self.resolve(to_path)

        # Compare lowered copies, slice output from the original
        frm = from_orig.lower()
        to = to_orig.lower()

        if frm == to:
            return ""

        from_start, from_end = _trim_separators(frm)
        from_len = from_end - from_start
        to_start, to_end = _trim_separators(to)
        to_len = to_end - to_start

        length = min(from_len, to_len)
        last_common_sep = -1
        i = 0
        while i < length:
            char = frm[from_start + i]
            if char != to[to_start + i]:
                break
            if char == SEP:
                last_common_sep = i
            i += 1

        if i != length:
            # Mismatch before any shared separator, e.g. another drive
            if last_common_sep == -1:
                return to_orig
        else:
            if to_len > length:
                if to[to_start + i] == SEP:
                    # from is an ancestor of to: C:\foo\bar -> C:\foo\bar\baz
                    return to_orig[to_start + i + 1 :]
                if i == 2:
                    # from is the drive root: C:\ -> C:\foo
                    return to_orig[to_start + i :]
            if from_len > length:
                if frm[from_start + i] == SEP:
                    # to is an ancestor of from: C:\foo\bar -> C:\foo
                    last_common_sep = i
                elif i == 2:
                    # to is the drive root: C:\foo\bar -> C:\
                    last_common_sep = 3
            if last_common_sep == -1:
                last_common_sep = 0

        ups = [
            ".."
            for j in range(from_start + last_common_sep + 1, from_end + 1)
            if j == from_end or frm[j] == SEP
        ]

        to_start += last_common_sep

        if ups:
            return SEP.join(ups) + to_orig[to_start:to_end]

        if to_orig[to_start : to_start + 1] == SEP:
            to_start += 1
        return to_orig[to_start:to_end]


def _trim_separators(path: str) -> tuple[int, int]:
    """Bounds of ``path`` without leading and (UNC) trailing backslashes."""
    start = 0
    while start < len(path) and path[start] == SEP:
        start += 1

    end = len(path)
    while end - 1 > start and path[end - 1] == SEP:
        end -= 1

    return start, end
