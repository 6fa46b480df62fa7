"""Collections of pages."""

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

from flatwiki.core.page import Page
from flatwiki.core.site import SiteContext

logger = logging.getLogger(__name__)


class PageCollection:
    """An ordered, immutable list of pages.

    Filtering and sorting return new collections.
    """

    def __init__(self, pages: Iterable[Page] = ()):
        self._pages: list[Page] = list(pages)

    @classmethod
    def from_path(cls, directory: Path | str, site: SiteContext) -> "PageCollection":
        """Build a collection from the page directories inside a directory.

        Subdirectories are visited in name order. Hidden directories and
        directories without a content file are skipped. Errors raised
        while resolving a page propagate.
        """
        directory = Path(directory)
        pages = []
        if not directory.is_dir():
            return cls()
        for path in sorted(directory.iterdir(), key=lambda p: p.name):
            if not path.is_dir() or path.name.startswith("."):
                continue
            page = Page(path, site)
            if page.is_empty():
                logger.debug("Skipping %s: no content file", path)
                continue
            pages.append(page)
        return cls(pages)

    def remove(self, page: Page) -> "PageCollection":
        """Return the collection without the given page."""
        return PageCollection(p for p in self._pages if p.path != page.path)

    def filter(self, predicate: Callable[[Page], bool]) -> "PageCollection":
        return PageCollection(p for p in self._pages if predicate(p))

    def sort_by(
        self, key: Callable[[Page], Any], reverse: bool = False
    ) -> "PageCollection":
        return PageCollection(sorted(self._pages, key=key, reverse=reverse))

    def published(self) -> "PageCollection":
        return self.filter(lambda p: p.published)

    def visible(self) -> "PageCollection":
        return self.filter(lambda p: p.visible)

    def routes(self) -> list[str]:
        return [p.route for p in self._pages]

    def first(self) -> Page | None:
        return self._pages[0] if self._pages else None

    def is_empty(self) -> bool:
        return not self._pages

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page: object) -> bool:
        return isinstance(page, Page) and any(p.path == page.path for p in self._pages)

    def __repr__(self) -> str:
        return f"PageCollection({self.routes()!r})"
