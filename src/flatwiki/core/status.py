"""Derivation of page publication state."""

from collections.abc import Callable
from datetime import datetime

from flatwiki.core.dates import to_timestamp
from flatwiki.core.models import DerivedState, PageData, PageStatus

# Scheme "num" option marking date-based ordering
DATE_ORDERING = "date"

ERROR_RESPONSE_STATUS = 404

# Evaluated in order, the last matching rule decides the status
STATUS_RULES: tuple[tuple[Callable[[bool, bool], bool], PageStatus], ...] = (
    (lambda published, routable: published, PageStatus.PUBLISHED),
    (lambda published, routable: not routable, PageStatus.NOT_ROUTABLE),
    (lambda published, routable: not published, PageStatus.NOT_PUBLISHED),
)


def composite_status(published: bool, routable: bool) -> PageStatus:
    """Combine the published and routable flags into one status.

    Not published beats not routable, which beats published.
    """
    status = PageStatus.PUBLISHED
    for matches, candidate in STATUS_RULES:
        if matches(published, routable):
            status = candidate
    return status


def is_published(data: PageData, now: datetime) -> bool:
    """Apply the publish window to the declared ``published`` flag."""
    published = data.published
    timestamp = now.timestamp()
    publish_date = data.get("publish-date")
    unpublish_date = data.get("unpublish-date")
    # An empty date leaves that side of the window open
    if publish_date is not None:
        published = published and to_timestamp(publish_date) < timestamp
    if unpublish_date is not None:
        published = published and to_timestamp(unpublish_date) > timestamp
    return published


def resolve_status(
    data: PageData,
    ordering_kind: str | None,
    has_numeric_prefix: bool,
    is_error_page: bool,
    now: datetime,
) -> DerivedState:
    """Compute the published, routable, visible and sortable flags.

    Args:
        data: Merged page data. For the error page without an explicit
            ``response_status`` the field is set to 404.
        ordering_kind: The template scheme's ``num`` option.
        has_numeric_prefix: Whether the page id carries an ordering prefix.
        is_error_page: Whether the page is the configured error page.
        now: Reference time for the publish window.

    Returns:
        DerivedState with the flags and the composite status.
    """
    published = is_published(data, now)
    routable = data.routable
    visible = data.visible and published
    sortable = data.sortable
    if not has_numeric_prefix or ordering_kind == DATE_ORDERING:
        sortable = False

    if is_error_page and not data.has("response_status"):
        data.set("response_status", ERROR_RESPONSE_STATUS)

    return DerivedState(
        published=published,
        routable=routable,
        visible=visible,
        sortable=sortable,
        status=composite_status(published, routable),
    )
