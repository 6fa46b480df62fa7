"""Flatwiki - a flat-file content engine.

Pages are directories on disk holding a content file (YAML front matter
plus a Markdown body) and asset files. The engine resolves a directory
into a :class:`~flatwiki.core.page.Page` exposing metadata, publication
state, language variants and rendered output.
"""

from flatwiki.core.collection import PageCollection
from flatwiki.core.exceptions import (
    FlatwikiError,
    InvalidLanguageError,
    MalformedContentError,
)
from flatwiki.core.page import Page, resolve_page
from flatwiki.core.site import SiteContext

__version__ = "0.1.0"

__all__ = [
    "FlatwikiError",
    "InvalidLanguageError",
    "MalformedContentError",
    "Page",
    "PageCollection",
    "SiteContext",
    "resolve_page",
]
