"""
PathMath interface.

A PathMath strategy bundles the path primitives of one platform flavour
(join, dirname, resolve, separator) with a pure relative-path computation.
No method touches the disk except ``resolve``, which may consult the
current working directory for relative input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import ModuleType


class PathMath(ABC):
    """
    Abstract base class for platform path strategies.

    Implementations:
        PosixPathMath — "/" separated, case-sensitive
        WindowsPathMath — "\\" separated, case-insensitive, drive roots
    """

    name: str = ""
    _flavour: ModuleType

    @property
    def sep(self) -> str:
        return self._flavour.sep

    def join(self, *parts: str) -> str:
        return self._flavour.join(*parts)

    def dirname(self, path: str) -> str:
        return self._flavour.dirname(path)

    def basename(self, path: str) -> str:
        return self._flavour.basename(path)

    def resolve(self, path: str) -> str:
        """Absolute, normalized form of ``path``."""
        return self._flavour.abspath(path)

    def is_absolute(self, path: str) -> bool:
        return self._flavour.isabs(path)

    def split(self, path: str) -> list[str]:
        """Split a relative path into its non-empty components."""
        return [part for part in path.split(self.sep) if part]

    @abstractmethod
    def relative(self, from_path: str, to_path: str) -> str:
        """
        Shortest relative path that leads from ``from_path`` to ``to_path``.

        Returns "" when both resolve to the same location.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
