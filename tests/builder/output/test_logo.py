"""
Unit tests for logo embedding.
"""

import base64
import io
import logging

from PIL import Image

from paper_toolkit.builder.config import RenderOptions
from paper_toolkit.builder.output.logo import logo_data_uri, resolve_logo_src


class TestLogoDataUri:
    """Tests for logo_data_uri function."""

    def test_data_uri_when_large_image_then_thumbnailed_png(self, sample_image):
        # Act
        uri = logo_data_uri(sample_image, max_size_px=50)

        # Assert
        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        with Image.open(io.BytesIO(base64.b64decode(uri[len(prefix):]))) as img:
            assert img.format == "PNG"
            assert img.size == (50, 25)

    def test_data_uri_when_palette_image_then_converted(self, tmp_path):
        path = tmp_path / "logo.gif"
        Image.new("P", (10, 10)).save(path)

        uri = logo_data_uri(path)

        with Image.open(io.BytesIO(base64.b64decode(uri.split(",", 1)[1]))) as img:
            assert img.mode == "RGBA"


class TestResolveLogoSrc:
    """Tests for resolve_logo_src function."""

    def test_resolve_when_no_logo_then_none(self):
        assert resolve_logo_src(RenderOptions()) is None

    def test_resolve_when_url_only_then_url(self):
        options = RenderOptions(logo_url="https://example.org/logo.png")

        assert resolve_logo_src(options) == "https://example.org/logo.png"

    def test_resolve_when_hidden_then_none(self, sample_image):
        assert resolve_logo_src(RenderOptions(logo_path=sample_image, show_logo=False)) is None

    def test_resolve_when_file_unreadable_then_warns_and_falls_back(self, tmp_path, caplog):
        """A broken logo never stops the paper from rendering."""
        bad = tmp_path / "logo.png"
        bad.write_text("not an image")

        with caplog.at_level(logging.WARNING):
            src = resolve_logo_src(RenderOptions(logo_path=bad))

        assert src is None
        assert "Could not load logo" in caplog.text
