"""Tests for page asset files."""

import pytest

from flatwiki.core.files import File, Files


@pytest.fixture
def asset_dir(tmp_path):
    (tmp_path / "photo.JPG").write_bytes(b"\xff\xd8\xff")
    (tmp_path / "diagram.png").write_bytes(b"\x89PNG")
    (tmp_path / "manual.pdf").write_bytes(b"%PDF-1.4")
    return tmp_path


class TestFile:
    def test_image(self, asset_dir):
        f = File(asset_dir / "diagram.png")
        assert f.name == "diagram.png"
        assert f.extension == ".png"
        assert f.mime_type == "image/png"
        assert f.type == "image"
        assert f.size == 4

    def test_extension_lowercased(self, asset_dir):
        assert File(asset_dir / "photo.JPG").extension == ".jpg"

    def test_pdf(self, asset_dir):
        assert File(asset_dir / "manual.pdf").type == "pdf"

    def test_unknown_type(self, tmp_path):
        f = File(tmp_path / "data.unknownext")
        assert f.mime_type == "application/octet-stream"
        assert f.type is None


class TestFiles:
    def test_from_path(self, asset_dir):
        files = Files.from_path(asset_dir, ["diagram.png", "manual.pdf"])
        assert len(files) == 2
        assert files.has("manual.pdf")
        assert "diagram.png" in files
        assert files.get("manual.pdf").path == asset_dir / "manual.pdf"
        assert files.get("missing") is None

    def test_filter_by_type(self, asset_dir):
        files = Files.from_path(asset_dir, ["diagram.png", "manual.pdf"])
        images = files.filter_by_type("image")
        assert images.names() == ["diagram.png"]
        assert len(files) == 2

    def test_empty(self):
        files = Files()
        assert files.is_empty()
        assert list(files) == []
