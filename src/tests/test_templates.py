"""Tests for template lookup and schemes."""

import pytest

from flatwiki.core.templates import TemplateRegistry, TemplateScheme


@pytest.fixture
def registry(site):
    return site.templates


class TestTemplateRegistry:
    def test_names(self, registry):
        assert registry.names() == ["blog", "page"]

    def test_contains(self, registry):
        assert "page" in registry
        assert "missing" not in registry
        assert 42 not in registry

    def test_get(self, registry):
        template = registry.get("blog")
        assert template.name == "blog"
        assert template.scheme.title == "Blog post"

    def test_get_unknown(self, registry):
        with pytest.raises(KeyError):
            registry.get("missing")

    def test_missing_templates_dir(self, tmp_path):
        registry = TemplateRegistry(tmp_path / "nope")
        assert registry.names() == []
        assert "page" not in registry

    def test_non_html_files_ignored(self, tmp_path):
        (tmp_path / "page.html").write_text("", encoding="utf-8")
        (tmp_path / "partial.txt").write_text("", encoding="utf-8")
        assert TemplateRegistry(tmp_path).names() == ["page"]


class TestTemplateScheme:
    def test_default_field_values(self, registry):
        scheme = registry.scheme("blog")
        assert scheme.default_field_values() == {"author": "Anonymous", "visible": True}

    def test_option(self, registry):
        assert registry.scheme("blog").get("num") == "date"
        assert registry.scheme("blog").get("missing", "x") == "x"

    def test_missing_scheme_is_empty(self, registry):
        scheme = registry.scheme("page")
        assert scheme.default_field_values() == {}
        assert scheme.get("num") is None
        assert scheme.title == "page"

    def test_scheme_cached(self, registry):
        assert registry.scheme("blog") is registry.scheme("blog")

    def test_registry_without_schemes_dir(self, tmp_path):
        registry = TemplateRegistry(tmp_path)
        assert registry.scheme("page").fields == {}

    def test_from_file_rejects_sequence(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            TemplateScheme.from_file("bad", path)

    def test_fields_without_defaults(self):
        scheme = TemplateScheme(
            name="x",
            options={"fields": {"title": {"type": "text"}, "tags": {"default": []}}},
        )
        assert scheme.default_field_values() == {"tags": []}
