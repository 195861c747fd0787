# steamgrid/utils/image_format.py

"""Image format detection from encoded bytes.

File names and HTTP content types are not trusted; the extension of a grid
image is always derived from what Pillow recognizes in the data itself.
"""

from __future__ import annotations

from io import BytesIO

from PIL import Image, UnidentifiedImageError

__all__ = ["EXTENSION_BY_FORMAT", "SUPPORTED_EXTENSIONS", "sniff_extension"]

# Pillow format name -> extension Steam accepts in the grid folder
EXTENSION_BY_FORMAT: dict[str, str] = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "GIF": ".gif",
    "WEBP": ".webp",
    "BMP": ".bmp",
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")


def sniff_extension(data: bytes | None) -> str:
    """Returns the file extension matching the encoded image, or "" if unknown.

    Args:
        data: Raw image bytes.

    Returns:
        An extension such as ".jpg" or ".png", or an empty string when the data
        is empty, not an image, or in a format grids do not support.
    """
    if not data:
        return ""
    try:
        with Image.open(BytesIO(data)) as img:
            return EXTENSION_BY_FORMAT.get(img.format or "", "")
    except (UnidentifiedImageError, OSError, ValueError):
        return ""
