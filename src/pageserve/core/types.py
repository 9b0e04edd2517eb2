"""Core type definitions."""

from typing import NewType

# Cache key: "category" or "category/subpath"
# Distinct from filesystem paths to catch type mismatches
CacheKey = NewType("CacheKey", str)

KEY_SEPARATOR = "/"


def make_key(category: str, subpath: str = "") -> CacheKey:
    """Build the cache key for a category and optional sub-path."""
    if not subpath:
        return CacheKey(category)
    return CacheKey(f"{category}{KEY_SEPARATOR}{subpath}")
