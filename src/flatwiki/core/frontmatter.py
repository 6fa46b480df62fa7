"""Content file parsing: front matter, summary and body.

A content file looks like::

    ---
    title: Hello
    ---
    Summary text

    ===

    Body text

The summary block and its ``===`` fence are optional. The front matter
block is YAML, summary and body are Markdown.
"""

import re
from dataclasses import dataclass
from typing import Any

import yaml

from flatwiki.core.exceptions import MalformedContentError
from flatwiki.core.parser import render_markdown

CONTENT_PATTERN = re.compile(
    r"(?:\s|^)-{3}\s*(.+?)\s*-{3}\s*(?:(.+?)\s+={3}\s+)?(.*?)\s*$",
    re.DOTALL,
)

SUMMARY_SEPARATOR = "\n\n===\n\n"


@dataclass(frozen=True)
class ContentParts:
    """Unprocessed blocks of a content file."""

    frontmatter_text: str
    summary_text: str | None
    body_text: str

    @property
    def raw_content(self) -> str:
        """Summary and body joined by the canonical separator."""
        if self.summary_text:
            return self.summary_text + SUMMARY_SEPARATOR + self.body_text
        return self.body_text


@dataclass(frozen=True)
class ParsedContent:
    """A content file turned into front matter fields and HTML."""

    frontmatter: dict[str, Any]
    summary: str | None
    content: str
    raw_content: str


def split_content(raw: bytes | str) -> ContentParts:
    """Split raw file contents into front matter, summary and body.

    Raises:
        MalformedContentError: If the front matter fences are missing.
    """
    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    text = text.replace("\r\n", "\n")
    match = CONTENT_PATTERN.search(text)
    if match is None:
        raise MalformedContentError("Invalid page format")
    frontmatter_text, summary_text, body_text = match.groups()
    return ContentParts(
        frontmatter_text=frontmatter_text,
        summary_text=summary_text or None,
        body_text=body_text,
    )


def parse_front_matter(text: str) -> dict[str, Any]:
    """Parse a YAML front matter block into a mapping.

    Raises:
        MalformedContentError: On invalid YAML or a non-mapping document.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedContentError(f"Invalid front matter: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedContentError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data


def parse_content(raw: bytes | str, base_route: str = "/") -> ParsedContent:
    """Parse a content file into front matter fields and rendered HTML.

    Args:
        raw: File contents.
        base_route: Route of the owning page, for relative links.

    Returns:
        ParsedContent with the rendered summary (None when the file has
        no summary block) and the full content (summary + body HTML).
    """
    parts = split_content(raw)
    frontmatter = parse_front_matter(parts.frontmatter_text)

    summary = None
    if parts.summary_text:
        summary = render_markdown(parts.summary_text, base_route=base_route)
    body = render_markdown(parts.body_text, base_route=base_route)

    return ParsedContent(
        frontmatter=frontmatter,
        summary=summary,
        content=(summary or "") + body,
        raw_content=parts.raw_content,
    )
