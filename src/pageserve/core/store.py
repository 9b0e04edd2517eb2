"""File store backing the page cache.

Reads raw page content relative to a content root directory.
"""

from pathlib import Path
from typing import Protocol


class FileStore(Protocol):
    """Source of page content.

    Implementations raise OSError when content cannot be produced.
    """

    def read(self, path: str) -> bytes: ...


class DiskFileStore:
    """File store reading from the local filesystem."""

    def __init__(self, root: Path) -> None:
        """Initialize store.

        Args:
            root: Content root; relative paths are resolved against it
        """
        self._root = root

    @property
    def root(self) -> Path:
        """Content root directory."""
        return self._root

    def read(self, path: str) -> bytes:
        """Read content at path.

        Args:
            path: Path relative to root (e.g., "docs/intro.html")

        Returns:
            Raw file content

        Raises:
            OSError: If the file is missing or unreadable
        """
        return (self._root / path).read_bytes()
