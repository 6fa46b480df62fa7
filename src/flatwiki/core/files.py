"""Asset files stored alongside page content."""

import mimetypes
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

# Mime type prefix or exact type -> file type
FILE_TYPES = {
    "image/": "image",
    "video/": "video",
    "audio/": "audio",
    "text/": "text",
    "application/pdf": "pdf",
}


@dataclass(frozen=True)
class File:
    """A single asset file."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        """Extension including the leading dot, lowercased."""
        return self.path.suffix.lower()

    @property
    def mime_type(self) -> str:
        mime_type, _ = mimetypes.guess_type(self.path.name)
        return mime_type or "application/octet-stream"

    @property
    def type(self) -> str | None:
        """Coarse file type (image, video, audio, text, pdf) or None."""
        mime_type = self.mime_type
        for prefix, file_type in FILE_TYPES.items():
            if mime_type.startswith(prefix):
                return file_type
        return None

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    @property
    def last_modified_time(self) -> datetime:
        return datetime.fromtimestamp(self.path.stat().st_mtime)


class Files:
    """Ordered collection of asset files keyed by filename."""

    def __init__(self, files: Iterable[File] = ()):
        self._files: dict[str, File] = {f.name: f for f in files}

    @classmethod
    def from_path(cls, directory: Path, filenames: Iterable[str]) -> "Files":
        """Build a collection from filenames inside a directory."""
        directory = Path(directory)
        return cls(File(directory / name) for name in filenames)

    def has(self, name: str) -> bool:
        return name in self._files

    def get(self, name: str) -> File | None:
        return self._files.get(name)

    def filter_by_type(self, file_type: str) -> "Files":
        """Return a new collection with only files of the given type."""
        return Files(f for f in self._files.values() if f.type == file_type)

    def names(self) -> list[str]:
        return list(self._files)

    def is_empty(self) -> bool:
        return not self._files

    def __iter__(self) -> Iterator[File]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, name: object) -> bool:
        return name in self._files
