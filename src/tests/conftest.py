"""Pytest fixtures for Flatwiki tests."""

from datetime import datetime
from pathlib import Path

import pytest

from flatwiki.core.site import SiteContext
from flatwiki.core.templates import TemplateRegistry

# Fixed reference time for publish window checks
NOW = datetime(2026, 1, 15, 12, 0, 0)

TEMPLATES = {
    "page": "<h1>{{ page.title }}</h1>\n{{ page.content | safe }}",
    "blog": "<article>{{ page.content | safe }}</article>",
}

BLOG_SCHEME = """\
title: Blog post
num: date
fields:
  title:
    type: text
  author:
    default: Anonymous
  visible:
    default: true
"""


@pytest.fixture
def site(tmp_path):
    """Site with a content directory, two templates and a blog scheme."""
    content_dir = tmp_path / "content"
    templates_dir = tmp_path / "templates"
    schemes_dir = tmp_path / "schemes"
    for directory in (content_dir, templates_dir, schemes_dir):
        directory.mkdir()
    for name, source in TEMPLATES.items():
        (templates_dir / f"{name}.html").write_text(source, encoding="utf-8")
    (schemes_dir / "blog.yaml").write_text(BLOG_SCHEME, encoding="utf-8")

    return SiteContext(
        content_dir=content_dir,
        templates=TemplateRegistry(templates_dir, schemes_dir),
        allowed_extensions=[".jpg", ".png", ".pdf"],
        metadata={"author": "Site Author", "description": "A flat-file site"},
    )


@pytest.fixture
def write_page(site):
    """Create a page directory under the content root with the given files.

    Returns a function ``(relative_dir, {filename: text}) -> Path``.
    """

    def _write(relative: str, files: dict[str, str] | None = None) -> Path:
        directory = site.content_dir / relative
        directory.mkdir(parents=True, exist_ok=True)
        for name, text in (files or {}).items():
            (directory / name).write_text(text, encoding="utf-8")
        return directory

    return _write


@pytest.fixture
def now():
    return NOW
