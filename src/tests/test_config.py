"""Unit tests for application configuration."""

from pathlib import Path
from unittest.mock import patch

from flatwiki.config import Settings
from flatwiki.core.site import SiteContext


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings()
            assert s.content_dir == Path("content")
            assert s.content_extension == ".md"
            assert s.index_page == "index"
            assert s.error_page == "404"
            assert s.languages == []
            assert s.default_language is None
            assert ".jpg" in s.allowed_extensions

    def test_from_env(self):
        env = {
            "FLATWIKI_CONTENT_DIR": "/tmp/site/content",
            "FLATWIKI_CONTENT_EXTENSION": ".txt",
            "FLATWIKI_LANGUAGES": '["en", "it"]',
            "FLATWIKI_DEFAULT_LANGUAGE": "it",
            "FLATWIKI_ERROR_PAGE": "not-found",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings()
            assert s.content_dir == Path("/tmp/site/content")
            assert s.content_extension == ".txt"
            assert s.languages == ["en", "it"]
            assert s.default_language == "it"
            assert s.error_page == "not-found"

    def test_site_title_from_env(self):
        with patch.dict("os.environ", {"FLATWIKI_SITE_TITLE": "Handbook"}, clear=True):
            s = Settings()
            assert s.site_title == "Handbook"


class TestSiteFromSettings:
    def test_copies_settings(self, tmp_path):
        env = {
            "FLATWIKI_CONTENT_DIR": str(tmp_path / "content"),
            "FLATWIKI_TEMPLATES_DIR": str(tmp_path / "templates"),
            "FLATWIKI_DEFAULT_LANGUAGE": "en",
            "FLATWIKI_BASE_URI": "/docs/",
        }
        with patch.dict("os.environ", env, clear=True):
            site = SiteContext.from_settings(Settings(), metadata={"author": "me"})
        assert site.content_dir == tmp_path / "content"
        assert site.templates.templates_dir == tmp_path / "templates"
        assert site.current_language == "en"
        assert site.base_uri == "/docs/"
        assert site.metadata == {"author": "me"}
        assert site.current_page is None

    def test_first_language_is_default(self):
        env = {"FLATWIKI_LANGUAGES": '["it", "en"]'}
        with patch.dict("os.environ", env, clear=True):
            site = SiteContext.from_settings(Settings())
        assert site.languages == ["it", "en"]
        assert site.current_language == "it"

    def test_no_languages(self):
        with patch.dict("os.environ", {}, clear=True):
            site = SiteContext.from_settings(Settings())
        assert site.current_language is None
