"""Tests for the site context."""

import pytest

from flatwiki.config import Settings
from flatwiki.core.site import SiteContext, normalize_uri


class TestNormalizeUri:
    @pytest.mark.parametrize(
        "uri, expected",
        [
            ("", "/"),
            ("/", "/"),
            ("blog", "/blog/"),
            ("/blog/post/", "/blog/post/"),
            ("//blog//", "/blog/"),
        ],
    )
    def test_normalize(self, uri, expected):
        assert normalize_uri(uri) == expected


class TestRoutes:
    def test_root(self, site):
        assert site.route_of(site.content_dir) == ("/", "/")

    def test_numeric_prefix_stripped_per_segment(self, site, write_page):
        path = write_page("02-blog/10-first-post")
        relative_path, route = site.route_of(path)
        assert relative_path == "/02-blog/10-first-post/"
        assert route == "/blog/first-post/"

    def test_non_leading_digits_kept(self, site, write_page):
        path = write_page("2026")
        assert site.route_of(path) == ("/2026/", "/2026/")

    def test_outside_content_dir(self, site, tmp_path):
        with pytest.raises(ValueError):
            site.route_of(tmp_path / "elsewhere")

    def test_is_content_root(self, site, write_page):
        assert site.is_content_root(site.content_dir)
        assert site.is_content_root(str(site.content_dir) + "/")
        assert not site.is_content_root(write_page("about"))


class TestUri:
    def test_default_base(self, site):
        assert site.uri("/blog/") == "/blog/"

    def test_custom_base(self, site):
        site.base_uri = "/docs/"
        assert site.uri("/blog/") == "/docs/blog/"
        assert site.uri("/") == "/docs/"


class TestFromSettings:
    def test_from_settings(self, tmp_path):
        settings = Settings(
            content_dir=tmp_path / "content",
            templates_dir=tmp_path / "templates",
            languages=["en", "it"],
            default_language="en",
            site_title="Docs",
        )
        site = SiteContext.from_settings(settings, metadata={"author": "Someone"})
        assert site.content_dir == tmp_path / "content"
        assert site.languages == ["en", "it"]
        assert site.current_language == "en"
        assert site.title == "Docs"
        assert site.metadata == {"author": "Someone"}
        assert site.has_template("page") is False
