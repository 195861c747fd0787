"""Tests for content-based image format detection."""

from steamgrid.utils.image_format import sniff_extension


class TestSniffExtension:
    """Tests for sniff_extension()."""

    def test_jpeg(self, jpeg_bytes):
        assert sniff_extension(jpeg_bytes) == ".jpg"

    def test_png(self, png_bytes):
        assert sniff_extension(png_bytes) == ".png"

    def test_gif(self, make_image):
        assert sniff_extension(make_image("GIF")) == ".gif"

    def test_empty_and_none(self):
        assert sniff_extension(b"") == ""
        assert sniff_extension(None) == ""

    def test_not_an_image(self):
        assert sniff_extension(b"<html>404 not found</html>") == ""

    def test_unsupported_format(self, make_image):
        assert sniff_extension(make_image("TIFF")) == ""
