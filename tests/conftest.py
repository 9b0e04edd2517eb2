"""Shared test fixtures."""

import threading
from pathlib import Path

import pytest
from pageserve.config import Config, PagesConfig, ServerConfig


class CountingStore:
    """In-memory file store that records every read."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.reads: list[str] = []
        self._lock = threading.Lock()

    def read(self, path: str) -> bytes:
        with self._lock:
            self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path].encode("utf-8")

    def count(self, path: str) -> int:
        with self._lock:
            return self.reads.count(path)


@pytest.fixture
def store() -> CountingStore:
    """Create a counting store holding the docs index page."""
    return CountingStore({"defaults/docs.html": "<p>Docs index</p>"})


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create a content root with a docs category."""
    root = tmp_path / "content"
    (root / "defaults").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "defaults" / "docs.html").write_text("<p>Docs index</p>")
    (root / "docs" / "intro.html").write_text("<p>Introduction</p>")
    return root


@pytest.fixture
def test_config(content_dir: Path) -> Config:
    """Create a test configuration serving the docs category from content_dir."""
    return Config(
        server=ServerConfig(),
        pages=PagesConfig(
            root=content_dir,
            default="docs",
            index={"docs": "defaults/docs.html"},
        ),
    )
