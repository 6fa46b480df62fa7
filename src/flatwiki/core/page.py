"""Pages: directories resolved into content, metadata and state.

Resolution is a pure function of the page directory, the site context,
the requested language and the current time (:func:`resolve_page`). A
:class:`Page` holds the resulting :class:`PageState`; ``reload`` and
``set_language`` replace the whole state and drop every memoized value
at once.
"""

import copy
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from flatwiki.core.dates import format_date
from flatwiki.core.exceptions import (
    FlatwikiError,
    InvalidLanguageError,
    MalformedContentError,
)
from flatwiki.core.files import Files
from flatwiki.core.frontmatter import ParsedContent, parse_content
from flatwiki.core.locator import locate, select_content_file
from flatwiki.core.models import ENGINE_DEFAULTS, DerivedState, PageData, PageStatus
from flatwiki.core.site import NUM_PATTERN, SiteContext, normalize_path
from flatwiki.core.status import resolve_status
from flatwiki.core.templates import Template, TemplateScheme

if TYPE_CHECKING:
    from flatwiki.core.collection import PageCollection

logger = logging.getLogger(__name__)

T = TypeVar("T")


def page_num(page_id: str) -> int | None:
    """Return the ordering prefix of a page id, or None."""
    match = NUM_PATTERN.match(page_id)
    return int(match.group(1)) if match else None


def page_defaults(scheme: TemplateScheme, num: int | None) -> dict[str, Any]:
    """Engine defaults overridden by the scheme's default field values.

    Pages without an ordering prefix are hidden by default.
    """
    defaults = copy.deepcopy(ENGINE_DEFAULTS)
    defaults.update(copy.deepcopy(scheme.default_field_values()))
    if num is None:
        defaults["visible"] = False
    return defaults


@dataclass(frozen=True)
class PageState:
    """Everything resolved for a page in one pass."""

    path: str
    relative_path: str
    route: str
    id: str
    slug: str
    files: Files = field(default_factory=Files)
    available_languages: tuple[str, ...] = ()
    language: str | None = None
    filename: str | None = None
    template: Template | None = None
    frontmatter: dict[str, Any] = field(default_factory=dict)
    raw_content: str | None = None
    summary: str | None = None
    content: str | None = None
    data: PageData = field(default_factory=PageData)
    derived: DerivedState | None = None

    @property
    def is_empty(self) -> bool:
        return self.filename is None


def _merge_data(
    scheme: TemplateScheme, num: int | None, frontmatter: dict[str, Any]
) -> PageData:
    try:
        return PageData.merge(page_defaults(scheme, num), frontmatter)
    except ValidationError as e:
        raise MalformedContentError(f"Invalid page data: {e}") from e


def resolve_page(
    path: Path | str,
    site: SiteContext,
    language: str | None = None,
    now: datetime | None = None,
) -> PageState:
    """Resolve a page directory into a PageState.

    Args:
        path: Page directory inside the site's content directory.
        site: Site context.
        language: Requested language; falls back to the site's current
            language, then to the first available one.
        now: Reference time for the publish window, read from the clock
            when omitted.

    Returns:
        PageState. A directory without a content file gives an empty
        state (no filename, template, content or derived flags).

    Raises:
        MalformedContentError: If the content file cannot be parsed.
    """
    path = normalize_path(path)
    relative_path, route = site.route_of(path)
    page_id = os.path.basename(path.rstrip(os.sep))
    slug = route.strip("/").rpartition("/")[2]

    located = locate(
        path, site.templates, site.content_extension, site.allowed_extensions
    )
    identity = dict(
        path=path,
        relative_path=relative_path,
        route=route,
        id=page_id,
        slug=slug,
        files=Files.from_path(Path(path), located.asset_files),
        available_languages=tuple(located.available_languages),
    )

    selected = select_content_file(
        located.content_files, language, site.current_language
    )
    if selected is None:
        logger.debug("No content file in %s", path)
        return PageState(**identity)

    content_file, resolved_language = selected
    template = site.templates.get(content_file.template)
    content_path = Path(path) / content_file.filename
    num = page_num(page_id)
    is_error_page = route.strip("/") == site.error_page
    if now is None:
        now = datetime.now()

    try:
        parsed: ParsedContent = parse_content(
            content_path.read_bytes(), base_route=route
        )
        data = _merge_data(template.scheme, num, parsed.frontmatter)
        derived = resolve_status(
            data,
            ordering_kind=template.scheme.get("num"),
            has_numeric_prefix=num is not None,
            is_error_page=is_error_page,
            now=now,
        )
    except MalformedContentError as e:
        logger.debug("Failed to parse %s: %s", content_path, e.message)
        if e.path is None:
            raise MalformedContentError(e.message, path=content_path) from e
        raise

    logger.debug(
        "Resolved page %s (language=%s, template=%s, status=%s)",
        route,
        resolved_language,
        template.name,
        derived.status.value,
    )
    return PageState(
        **identity,
        language=resolved_language,
        filename=content_file.filename,
        template=template,
        frontmatter=parsed.frontmatter,
        raw_content=parsed.raw_content,
        summary=parsed.summary,
        content=parsed.content,
        data=data,
        derived=derived,
    )


class Page:
    """A page backed by a directory in the content tree."""

    def __init__(
        self,
        path: Path | str,
        site: SiteContext,
        language: str | None = None,
        *,
        now: datetime | None = None,
    ):
        self.site = site
        self._state = resolve_page(path, site, language, now=now)
        self._cache: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _replace_state(self, state: PageState) -> None:
        self._state = state
        self._cache = {}

    def _cached(self, key: str, factory: Callable[[], T]) -> T:
        if key not in self._cache:
            self._cache[key] = factory()
        return self._cache[key]

    def reload(self, *, now: datetime | None = None) -> "Page":
        """Resolve the page again from disk, keeping its language."""
        logger.debug("Reloading page %s", self.route)
        self._replace_state(
            resolve_page(self.path, self.site, self.language, now=now)
        )
        return self

    def set_language(self, language: str, *, now: datetime | None = None) -> "Page":
        """Switch to another language variant and resolve the page again.

        Raises:
            InvalidLanguageError: If the page has no content in that
                language. The page is left unchanged.
        """
        if not self.has_language(language):
            raise InvalidLanguageError(language, list(self.available_languages))
        self._replace_state(resolve_page(self.path, self.site, language, now=now))
        return self

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._state.path

    @property
    def relative_path(self) -> str:
        return self._state.relative_path

    @property
    def route(self) -> str:
        return self._state.route

    @property
    def id(self) -> str:
        return self._state.id

    @property
    def slug(self) -> str:
        return self._state.slug

    @property
    def num(self) -> int | None:
        return page_num(self.id)

    @property
    def uri(self) -> str:
        return self.site.uri(self.route)

    @property
    def language(self) -> str | None:
        return self._state.language

    @property
    def available_languages(self) -> tuple[str, ...]:
        return self._state.available_languages

    def has_language(self, language: str) -> bool:
        return language in self._state.available_languages

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return self._state.is_empty

    @property
    def filename(self) -> str | None:
        return self._state.filename

    @property
    def template(self) -> Template | None:
        return self._state.template

    @property
    def frontmatter(self) -> dict[str, Any]:
        return self._state.frontmatter

    @property
    def raw_content(self) -> str | None:
        return self._state.raw_content

    @property
    def summary(self) -> str | None:
        return self._state.summary

    @property
    def content(self) -> str | None:
        return self._state.content

    @property
    def data(self) -> PageData:
        return self._state.data

    def has(self, key: str) -> bool:
        return self._state.data.has(key)

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._state.data.set(key, value)

    @property
    def title(self) -> str:
        """Return the title field or derive it from the slug."""
        return self.get("title") or self.slug

    @property
    def headers(self) -> dict[str, Any]:
        return self.get("headers", {})

    @property
    def response_status(self) -> int | None:
        return self.get("response_status")

    def metadata(self) -> dict[str, Any]:
        """Site metadata overlaid with the page's ``metadata`` field."""

        def build() -> dict[str, Any]:
            metadata = dict(self.site.metadata)
            metadata.update(self.get("metadata", {}))
            return metadata

        return self._cached("metadata", build)

    def files(self) -> Files:
        return self._state.files

    def images(self) -> Files:
        return self._state.files.filter_by_type("image")

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def status(self) -> PageStatus | None:
        derived = self._state.derived
        return derived.status if derived is not None else None

    @property
    def published(self) -> bool:
        derived = self._state.derived
        return derived is not None and derived.published

    @property
    def routable(self) -> bool:
        derived = self._state.derived
        return derived is not None and derived.routable

    @property
    def visible(self) -> bool:
        derived = self._state.derived
        return derived is not None and derived.visible

    @property
    def sortable(self) -> bool:
        derived = self._state.derived
        return derived is not None and derived.sortable

    def is_current(self) -> bool:
        current = self.site.current_page
        return current is not None and current.path == self.path

    def is_site(self) -> bool:
        return self.site.is_content_root(self.path)

    def is_index_page(self) -> bool:
        return self.route.strip("/") == self.site.index_page

    def is_error_page(self) -> bool:
        return self.route.strip("/") == self.site.error_page

    def is_deletable(self) -> bool:
        if (
            self.has_children()
            or self.is_site()
            or self.is_index_page()
            or self.is_error_page()
        ):
            return False
        return True

    # ------------------------------------------------------------------
    # Tree navigation
    # ------------------------------------------------------------------

    def parent(self) -> "Page | None":
        """Return the page of the parent directory, None for the site root."""

        def build() -> "Page | None":
            if self.is_site():
                return None
            return Page(os.path.dirname(self.path.rstrip(os.sep)), self.site)

        return self._cached("parent", build)

    def children(self) -> "PageCollection":
        from flatwiki.core.collection import PageCollection

        return self._cached(
            "children", lambda: PageCollection.from_path(self.path, self.site)
        )

    def has_children(self) -> bool:
        return not self.children().is_empty()

    def siblings(self) -> "PageCollection":
        """Return the other pages in the same parent directory."""
        from flatwiki.core.collection import PageCollection

        def build() -> PageCollection:
            if self.is_site():
                return PageCollection()
            parent_path = os.path.dirname(self.path.rstrip(os.sep))
            return PageCollection.from_path(parent_path, self.site).remove(self)

        return self._cached("siblings", build)

    def has_siblings(self) -> bool:
        return not self.siblings().is_empty()

    def level(self) -> int:
        """Depth of the page below the site root."""

        def build() -> int:
            route = self.route.strip("/")
            return len(route.split("/")) if route else 0

        return self._cached("level", build)

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def last_modified_time(self) -> datetime:
        """Newest modification time of the directory and content file."""

        def build() -> datetime:
            mtime = os.path.getmtime(self.path)
            if self.filename is not None:
                content_file = os.path.join(self.path, self.filename)
                mtime = max(mtime, os.path.getmtime(content_file))
            return datetime.fromtimestamp(mtime)

        return self._cached("last_modified_time", build)

    def date(self, fmt: str | None = None) -> str:
        """Return the publish date, or the last modified time, formatted."""
        if fmt is None:
            fmt = self.site.date_format
        publish_date = self.get("publish-date")
        if publish_date is not None:
            return format_date(publish_date, fmt)
        return self.last_modified_time().strftime(fmt)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self, **variables: Any) -> str:
        """Render the page with its template.

        Raises:
            FlatwikiError: If the page is empty and has no template.
        """
        if self.template is None:
            raise FlatwikiError(f"Cannot render empty page {self.route}")
        return self.template.render(self, self.site, **variables)

    def to_dict(self) -> dict[str, Any]:
        """Return a serializable summary of the page."""
        return {
            "route": self.route,
            "uri": self.uri,
            "id": self.id,
            "slug": self.slug,
            "template": self.template.name if self.template is not None else None,
            "num": self.num,
            "data": self.data.to_dict(),
        }

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Page({self.route!r})"
