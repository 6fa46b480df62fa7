"""Discovery of content and asset files inside a page directory.

Content files are named ``<template>[.<language>]<extension>``, for
example ``page.md`` or ``blog.it.md``. Asset files are any files whose
extension is on the allow-list.
"""

import logging
import re
from collections.abc import Container, Iterable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Two-segment base name: "<name>.<language>"
LANGUAGE_PATTERN = re.compile(r"([\w-]+)\.([a-z]+)")


@dataclass(frozen=True)
class ContentFile:
    """A content file candidate and the template it selects."""

    filename: str
    template: str


@dataclass
class LocatedFiles:
    """Result of scanning a page directory."""

    content_files: dict[str | None, ContentFile] = field(default_factory=dict)
    asset_files: list[str] = field(default_factory=list)
    available_languages: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.content_files


def split_language(name: str) -> tuple[str, str | None]:
    """Split a base name into template name and optional language.

    >>> split_language("page.en")
    ('page', 'en')
    >>> split_language("page")
    ('page', None)
    """
    match = LANGUAGE_PATTERN.fullmatch(name)
    if match is None:
        return name, None
    return match.group(1), match.group(2)


def locate(
    directory: Path | str,
    template_names: Container[str],
    content_extension: str,
    allowed_extensions: Iterable[str],
) -> LocatedFiles:
    """Scan a directory for content candidates and asset files.

    Only regular files directly inside the directory are considered, in
    name order. When two files resolve to the same language the later
    one wins.

    Args:
        directory: Page directory.
        template_names: Known template names.
        content_extension: Extension of content files, e.g. ``".md"``.
        allowed_extensions: Extensions of asset files.

    Returns:
        LocatedFiles with content candidates keyed by language (None for
        files without a language segment).
    """
    directory = Path(directory)
    allowed = set(allowed_extensions)
    located = LocatedFiles()

    if not directory.is_dir():
        logger.debug("Page directory not found: %s", directory)
        return located

    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if not path.is_file():
            continue
        name, extension = path.stem, path.suffix

        if extension == content_extension:
            template, language = split_language(name)
            if template not in template_names:
                logger.debug("Ignoring %s: no template named %s", path.name, template)
                continue
            if language in located.content_files:
                logger.warning(
                    "Duplicate content file for language %s in %s, using %s",
                    language,
                    directory,
                    path.name,
                )
            located.content_files[language] = ContentFile(
                filename=path.name, template=template
            )
            if language is not None and language not in located.available_languages:
                located.available_languages.append(language)
        elif extension in allowed:
            located.asset_files.append(path.name)

    return located


def _sort_key(language: str | None) -> tuple[bool, str]:
    # Files without a language sort first
    return language is not None, language or ""


def select_content_file(
    content_files: dict[str | None, ContentFile],
    requested: str | None = None,
    fallback: str | None = None,
) -> tuple[ContentFile, str | None] | None:
    """Pick the content file to use and the language it resolves to.

    The requested language wins when present, then the fallback (the
    current site language), then the first language in sorted order.

    Returns:
        ``(content_file, language)``, or None when there are no content
        files.
    """
    if not content_files:
        return None
    current = requested or fallback
    if current in content_files:
        key = current
    else:
        key = sorted(content_files, key=_sort_key)[0]
    return content_files[key], key
