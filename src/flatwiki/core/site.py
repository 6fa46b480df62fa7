"""Site-wide context handed to page resolution."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from flatwiki.config import Settings
from flatwiki.core.templates import TemplateRegistry

if TYPE_CHECKING:
    from flatwiki.core.page import Page

# Ordering prefix of a page directory: "03-about" -> "03"
NUM_PATTERN = re.compile(r"^(\d+)-")


def normalize_uri(uri: str) -> str:
    """Normalize a URI path to have exactly one leading and trailing slash."""
    uri = uri.strip("/")
    return f"/{uri}/" if uri else "/"


def normalize_path(path: Path | str) -> str:
    """Return an absolute directory path with a trailing separator."""
    return os.path.join(os.path.abspath(path), "")


@dataclass
class SiteContext:
    """Everything page resolution needs to know about the site.

    Passed explicitly to pages and collections instead of being looked
    up globally.
    """

    content_dir: Path
    templates: TemplateRegistry
    content_extension: str = ".md"
    allowed_extensions: list[str] = field(default_factory=list)
    index_page: str = "index"
    error_page: str = "404"
    languages: list[str] = field(default_factory=list)
    current_language: str | None = None
    base_uri: str = "/"
    date_format: str = "%Y-%m-%d"
    title: str = "Flatwiki"
    metadata: dict[str, Any] = field(default_factory=dict)
    current_page: "Page | None" = None

    @classmethod
    def from_settings(
        cls, settings: Settings, metadata: dict[str, Any] | None = None
    ) -> "SiteContext":
        """Build a context from application settings.

        The current language is the configured default language, or the
        first configured language when no default is set.
        """
        current_language = settings.default_language
        if current_language is None and settings.languages:
            current_language = settings.languages[0]
        return cls(
            content_dir=settings.content_dir,
            templates=TemplateRegistry(settings.templates_dir, settings.schemes_dir),
            content_extension=settings.content_extension,
            allowed_extensions=list(settings.allowed_extensions),
            index_page=settings.index_page,
            error_page=settings.error_page,
            languages=list(settings.languages),
            current_language=current_language,
            base_uri=settings.base_uri,
            date_format=settings.date_format,
            title=settings.site_title,
            metadata=dict(metadata or {}),
        )

    @property
    def content_path(self) -> str:
        """Absolute content directory with a trailing separator."""
        return normalize_path(self.content_dir)

    def has_template(self, name: str) -> bool:
        return name in self.templates

    def is_content_root(self, path: Path | str) -> bool:
        return normalize_path(path) == self.content_path

    def route_of(self, path: Path | str) -> tuple[str, str]:
        """Return ``(relative_path, route)`` for a page directory.

        The route drops the ordering prefix of every path segment.

        Raises:
            ValueError: If the path is outside the content directory.
        """
        relative = Path(normalize_path(path)).relative_to(self.content_path)
        relative_path = normalize_uri("/".join(relative.parts))
        route = normalize_uri(
            "/".join(NUM_PATTERN.sub("", part) for part in relative.parts)
        )
        return relative_path, route

    def uri(self, route: str) -> str:
        """Join the base URI and a route."""
        return self.base_uri.rstrip("/") + route
