"""
Shared test fixtures for the NCD test suite.

Provides an in-memory directory tree (Windows-flavoured paths, so
C:\\Projects style tests run on any OS), a factory for Environment
snapshots, and real temporary trees and settings files for the
RealFileSystem and CLI tests.
"""

from pathlib import PurePosixPath, PureWindowsPath

import pytest
import toml
from loguru import logger

from ncd.environment import Environment
from ncd.services.filesystem import FileSystem
from ncd.services.roots import RootRegistry, Strategy


class FakeFileSystem(FileSystem):
    """Directory tree held in memory. Children keep insertion order."""

    def __init__(self, dirs=(), flavour=PureWindowsPath):
        self.flavour = flavour
        self._dirs = set()
        self._children = {}
        for path in dirs:
            self.add(path)

    def _fold(self, path) -> str:
        text = str(path)
        return text.casefold() if self.flavour is PureWindowsPath else text

    def add(self, path: str) -> None:
        p = self.flavour(path)
        chain = [p, *p.parents]
        for child, parent in zip(reversed(chain[:-1]), reversed(chain[1:])):
            self._dirs.add(self._fold(parent))
            names = self._children.setdefault(self._fold(parent), [])
            if child.name not in names:
                names.append(child.name)
        self._dirs.add(self._fold(p))

    def is_dir(self, path: str) -> bool:
        return self._fold(self.absolute(path)) in self._dirs

    def list_dirs(self, path: str) -> list[str]:
        return list(self._children.get(self._fold(self.absolute(path)), []))

    def join(self, base: str, *parts: str) -> str:
        return str(self.flavour(base).joinpath(*parts))

    def parent(self, path: str):
        p = self.flavour(self.absolute(path))
        return None if p.parent == p else str(p.parent)

    def name(self, path: str) -> str:
        return self.flavour(path).name

    def anchor(self, path: str) -> str:
        return self.flavour(path).anchor

    def absolute(self, path: str) -> str:
        p = self.flavour(path)
        parts = []
        for part in p.parts[1:] if p.anchor else p.parts:
            if part == "..":
                if parts:
                    parts.pop()
            elif part != ".":
                parts.append(part)
        return str(self.flavour(p.anchor, *parts))

    def key(self, path: str) -> str:
        return self._fold(self.absolute(path))


@pytest.fixture
def fake_fs():
    """
    A small Windows-style tree:

        C:\\Projects\\Alpha\\src
        C:\\Projects\\Beta
        C:\\Work\\Project
        C:\\Work\\Profile
        C:\\Work\\current\\deep\\deeper
        C:\\Users\\me
    """
    return FakeFileSystem([
        r"C:\Projects\Alpha\src",
        r"C:\Projects\Beta",
        r"C:\Work\Project",
        r"C:\Work\Profile",
        r"C:\Work\current\deep\deeper",
        r"C:\Users\me",
    ])


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks that point at a finished test's captured stderr."""
    yield
    logger.remove()


@pytest.fixture
def fs_factory():
    """Build a FakeFileSystem from a list of directories."""
    return FakeFileSystem


@pytest.fixture
def posix_fs():
    return FakeFileSystem(["/home/me/code/app", "/srv/data"], flavour=PurePosixPath)


@pytest.fixture
def make_env():
    """Factory for Environment snapshots with sensible defaults."""

    def _make(cwd=r"C:\Work", roots=(), strategy=Strategy.ORIGIN, **kwargs):
        registry = RootRegistry(roots, default=strategy)
        return Environment(cwd=cwd, registry=registry, strategy=strategy, **kwargs)

    return _make


@pytest.fixture
def tmp_tree(tmp_path):
    """Create a real directory tree under tmp_path and return its root."""
    for rel in [
        "work/Project",
        "work/Profile",
        "work/current/src",
        "roots/a/shared",
        "roots/a/only_a",
        "roots/b/shared",
        "roots/b/only_b",
    ]:
        (tmp_path / rel).mkdir(parents=True)
    (tmp_path / "work" / "notes.txt").write_text("not a directory")
    return tmp_path


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"strategy": "hybrid", "fuzzy": False, "exact": False, "parallel_roots": False},
        "roots": [{"path": str(tmp_path / "bookmarks"), "strategy": "target"}],
        "suggest": {"enabled": True, "limit": 2, "threshold": 50},
        "logging": {"level": "ERROR"},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path
