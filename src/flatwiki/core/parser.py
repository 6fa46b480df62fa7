"""Markdown parser with page-relative link resolution."""

from urllib.parse import urljoin, urlsplit
from xml.etree.ElementTree import Element

from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from markdown.treeprocessors import Treeprocessor


# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"

# Element tag -> attribute holding a URI
URI_ATTRIBUTES = {"a": "href", "img": "src"}


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


def resolve_relative_uri(uri: str, base_route: str) -> str:
    """Resolve a relative link or image URI against a page route.

    Absolute paths, fragments, query-only references and URIs with a
    scheme or host are returned unchanged.

    Args:
        uri: URI as written in the content.
        base_route: Route of the page the content belongs to.

    Returns:
        The resolved URI.
    """
    if not uri or uri.startswith(("/", "#", "?")):
        return uri
    parts = urlsplit(uri)
    if parts.scheme or parts.netloc:
        return uri
    if not base_route.endswith("/"):
        base_route += "/"
    return urljoin(base_route, uri)


class BaseRouteTreeprocessor(Treeprocessor):
    """Rewrite relative link and image URIs to the page route."""

    def __init__(self, md: Markdown, base_route: str):
        super().__init__(md)
        self.base_route = base_route

    def run(self, root: Element) -> None:
        for el in root.iter():
            attribute = URI_ATTRIBUTES.get(el.tag)
            if attribute is None:
                continue
            uri = el.get(attribute)
            if uri is not None:
                el.set(attribute, resolve_relative_uri(uri, self.base_route))


class BaseRouteExtension(Extension):
    """Markdown extension resolving relative URIs against a base route."""

    def __init__(self, base_route: str = "/", **kwargs):
        self.base_route = base_route
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        # Runs after the inline processor (priority 20) has built links
        md.treeprocessors.register(
            BaseRouteTreeprocessor(md, self.base_route),
            "base_route",
            15,
        )


def create_parser(base_route: str = "/") -> Markdown:
    """Create a Markdown parser for page content.

    Args:
        base_route: Route used to resolve relative links and images.

    Returns:
        Configured Markdown parser instance.
    """
    return Markdown(
        extensions=[
            # Core formatting
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "smarty",
            "toc",
            # PyMdown extensions
            "pymdownx.tasklist",
            # Custom extensions
            StrikethroughExtension(),
            BaseRouteExtension(base_route=base_route),
        ]
    )


def render_markdown(text: str, base_route: str = "/") -> str:
    """Render Markdown text to HTML.

    Args:
        text: Markdown source.
        base_route: Route used to resolve relative links and images.

    Returns:
        HTML string.
    """
    parser = create_parser(base_route)
    return parser.convert(text)
