"""Exceptions raised while resolving pages."""

from pathlib import Path


class FlatwikiError(Exception):
    """Base exception for all flatwiki errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class MalformedContentError(FlatwikiError):
    """Raised when a content file cannot be parsed into a page.

    Covers a missing front matter fence, front matter that is not a
    YAML mapping and known fields holding values of the wrong type.
    """

    def __init__(self, message: str, path: Path | str | None = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class InvalidLanguageError(FlatwikiError):
    """Raised when a page is asked for a language it has no content for."""

    def __init__(self, language: str, available: list[str] | None = None):
        self.language = language
        self.available = list(available or [])
        super().__init__(f'Invalid page language "{language}"')
