"""
Filesystem capability - The only place the search touches the disk.

The pipeline asks for a handful of operations (existence, child listing,
path arithmetic) through this interface so tests can swap in an
in-memory tree.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from loguru import logger


class FileSystem(ABC):
    """Read-only view of a directory tree."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        ...

    @abstractmethod
    def list_dirs(self, path: str) -> list[str]:
        """Names of the immediate child directories, in listing order."""
        ...

    @abstractmethod
    def join(self, base: str, *parts: str) -> str:
        ...

    @abstractmethod
    def parent(self, path: str) -> Optional[str]:
        """Parent directory, or None when path is a filesystem root."""
        ...

    @abstractmethod
    def name(self, path: str) -> str:
        """Final path component."""
        ...

    @abstractmethod
    def anchor(self, path: str) -> str:
        """Root of the drive holding path (e.g. C:\\ or /)."""
        ...

    @abstractmethod
    def absolute(self, path: str) -> str:
        """Absolute, normalized form of path."""
        ...

    @abstractmethod
    def key(self, path: str) -> str:
        """Identity used to deduplicate candidates."""
        ...


class RealFileSystem(FileSystem):
    """FileSystem backed by os and os.path."""

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_dirs(self, path: str) -> list[str]:
        names = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    # is_dir() follows symlinks and junctions
                    try:
                        if entry.is_dir():
                            names.append(entry.name)
                    except OSError:
                        continue
        except OSError as e:
            logger.debug(f"Cannot list {path}: {e}")
            return []
        # scandir order is arbitrary; sort for stable ambiguity reports
        return sorted(names, key=str.casefold)

    def join(self, base: str, *parts: str) -> str:
        return os.path.join(base, *parts)

    def parent(self, path: str) -> Optional[str]:
        normalized = os.path.normpath(path)
        parent = os.path.dirname(normalized)
        if parent == normalized:
            return None
        return parent

    def name(self, path: str) -> str:
        return os.path.basename(os.path.normpath(path))

    def anchor(self, path: str) -> str:
        return Path(os.path.abspath(path)).anchor

    def absolute(self, path: str) -> str:
        return os.path.abspath(path)

    def key(self, path: str) -> str:
        return os.path.normcase(os.path.realpath(path))
