"""Page content and lookup results."""

from dataclasses import dataclass

from pageserve.core.types import CacheKey

NOT_FOUND_TITLE = "Resource not found"
NOT_FOUND_BODY = "<h1> 404, resource not found </h1>"


@dataclass(frozen=True)
class Page:
    """A unit of servable content."""

    title: str
    body: str


NOT_FOUND_PAGE = Page(title=NOT_FOUND_TITLE, body=NOT_FOUND_BODY)


@dataclass(frozen=True)
class NotFound:
    """Lookup result for a key whose backing file could not be loaded.

    Never stored in the cache. Carries the placeholder page so the
    caller can still render a response.
    """

    key: CacheKey

    @property
    def page(self) -> Page:
        """Placeholder page shown in place of the missing content."""
        return NOT_FOUND_PAGE


LookupResult = Page | NotFound
