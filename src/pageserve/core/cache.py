"""In-memory read-through page cache.

Cache structure:
    {
        "docs": Page(title="docs", ...),          # seeded at startup
        "docs/intro": Page(title="intro", ...),   # filled on first lookup
    }

Seeded entries come from the configured index pages. Other entries are
loaded from "<category>/<subpath>.html" through the file store on the first
successful lookup and kept for the lifetime of the process.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from pageserve.core.locks import RWLock
from pageserve.core.page import LookupResult, NotFound, Page
from pageserve.core.store import FileStore
from pageserve.core.types import CacheKey, make_key

logger = logging.getLogger(__name__)

PAGE_SUFFIX = ".html"


class SeedError(RuntimeError):
    """Raised when a seeded page cannot be loaded at startup."""

    def __init__(self, key: str, path: str, reason: str) -> None:
        self.key = key
        self.path = path
        super().__init__(f"Cannot load page for '{key}' from {path}: {reason}")


class PageCache:
    """Read-through cache of pages keyed by category and sub-path.

    The map is guarded by a reader/writer lock held only around the dict
    access itself. File store reads happen outside the lock, so a slow
    or failing read never blocks unrelated lookups.

    A miss returns its page without waiting for the write lock. The insert
    is handed to a single background filler thread; until it lands, the
    page is visible to lookups through a pending map guarded by a plain
    mutex that is never held while waiting on the reader/writer lock.

    Concurrent misses for the same key are not de-duplicated: each loads
    the file and inserts its own Page. The pages are equal in content, so
    whichever insert lands last is kept.
    """

    def __init__(self, store: FileStore) -> None:
        """Initialize an empty cache.

        Args:
            store: File store used to load pages on a miss
        """
        self._store = store
        self._pages: dict[CacheKey, Page] = {}
        self._lock = RWLock()
        self._pending: dict[CacheKey, Page] = {}
        self._pending_lock = threading.Lock()
        self._filler = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pageserve-fill")

    @property
    def store(self) -> FileStore:
        """File store backing this cache."""
        return self._store

    def seed(self, key: str, path: str) -> Page:
        """Load a page eagerly and store it under key.

        Args:
            key: Top-level category the page is served under
            path: Store path of the page content

        Returns:
            The seeded Page

        Raises:
            SeedError: If the store cannot produce the content
        """
        try:
            body = self._read(path)
        except OSError as e:
            raise SeedError(key, path, str(e)) from e

        page = Page(title=key, body=body)
        self._insert(CacheKey(key), page)
        logger.info(f"Seeded '{key}' from {path}")
        return page

    def lookup(self, category: str, subpath: str = "") -> LookupResult:
        """Return the page for a category and optional sub-path.

        On a miss the page is returned as soon as it is loaded; the cache
        insert completes in the background.

        Args:
            category: Top-level category (must have been seeded)
            subpath: Page name within the category, empty for the index page

        Returns:
            Cached or freshly loaded Page, or NotFound if the backing file
            cannot be read

        Raises:
            KeyError: If subpath is empty and category was never seeded
        """
        if not subpath:
            with self._lock.read_locked():
                return self._pages[CacheKey(category)]

        key = make_key(category, subpath)
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}")
        path = f"{key}{PAGE_SUFFIX}"
        try:
            body = self._read(path)
        except OSError as e:
            logger.warning(f"Cannot load {path}: {e}")
            return NotFound(key)

        page = Page(title=subpath, body=body)
        with self._pending_lock:
            self._pending[key] = page
        self._filler.submit(self._fill, key, page)
        return page

    def get(self, key: str) -> Page | None:
        """Return the cached page for key without touching the store.

        Args:
            key: Cache key (e.g., "docs" or "docs/intro")

        Returns:
            Cached Page, or None if absent
        """
        # Pending first: the filler writes the map before clearing pending
        with self._pending_lock:
            page = self._pending.get(CacheKey(key))
        if page is not None:
            return page
        with self._lock.read_locked():
            return self._pages.get(CacheKey(key))

    def flush(self) -> None:
        """Block until every insert handed to the filler has landed."""
        self._filler.submit(lambda: None).result()

    def keys(self) -> list[CacheKey]:
        """Snapshot of cached keys in insertion order."""
        with self._pending_lock:
            pending = list(self._pending)
        with self._lock.read_locked():
            keys = list(self._pages)
        return keys + [key for key in pending if key not in keys]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self.keys())

    def _read(self, path: str) -> str:
        # Bytes are served as-is; undecodable sequences don't make a page missing
        return self._store.read(path).decode("utf-8", errors="replace")

    def _fill(self, key: CacheKey, page: Page) -> None:
        self._insert(key, page)
        with self._pending_lock:
            if self._pending.get(key) is page:
                del self._pending[key]
        logger.debug(f"Cached {key} ({len(page.body)} chars)")

    def _insert(self, key: CacheKey, page: Page) -> None:
        with self._lock.write_locked():
            self._pages[key] = page
