"""Stamps category overlays onto grid images.

The overlay is stretched to the exact size of the grid image and blended on top
of it with Pillow's straight-alpha "over" operator. Compositing always starts
from the clean image, so a lossy image is re-encoded at most once.
"""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from steamgrid.core.game import Game
from steamgrid.core.overlay_catalog import Overlay, find_overlay
from steamgrid.core.stage_result import StageResult
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.compositor")

__all__ = ["apply_overlay", "composite"]

JPEG_QUALITY = 95

# Formats without an alpha channel are flattened back to RGB before saving
_RGB_ONLY_FORMATS = {"JPEG", "BMP"}


def composite(background_bytes: bytes, overlay_bytes: bytes) -> bytes:
    """Blends an overlay over a background and re-encodes in the background's format.

    Args:
        background_bytes: Encoded grid image.
        overlay_bytes: Encoded overlay, usually a PNG with transparency.

    Returns:
        The encoded composite.

    Raises:
        UnidentifiedImageError: If either input is not a decodable image.
        OSError: On decode or encode failures.
        ValueError: If the background format cannot be written back.
    """
    with Image.open(BytesIO(background_bytes)) as background, Image.open(BytesIO(overlay_bytes)) as overlay:
        fmt = background.format
        if not fmt:
            raise ValueError("unknown background format")

        base = background.convert("RGBA")
        layer = overlay.convert("RGBA")
        if layer.size != base.size:
            layer = layer.resize(base.size, Image.Resampling.LANCZOS)

        blended = Image.alpha_composite(base, layer)

    if fmt in _RGB_ONLY_FORMATS:
        blended = blended.convert("RGB")

    out = BytesIO()
    if fmt == "JPEG":
        blended.save(out, format=fmt, quality=JPEG_QUALITY)
    else:
        blended.save(out, format=fmt)
    return out.getvalue()


def apply_overlay(game: Game, overlays: dict[str, Overlay]) -> StageResult:
    """Applies the overlay matching the game's category.

    Args:
        game: Game with a clean image.
        overlays: Catalog from load_overlays.

    Returns:
        UNCHANGED if the category has no overlay (or the game has no image),
        UPDATED with overlay_image set on success, or a recoverable FAILED
        result carrying the error text; the game itself is never modified on failure.
    """
    overlay = find_overlay(overlays, game.category)
    if overlay is None or not game.clean_image:
        return StageResult.unchanged(game)

    try:
        data = composite(game.clean_image, overlay.image_bytes)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning(t("logs.compositor.failed", name=game.display_name, error=e))
        return StageResult.failed(game, str(e))

    logger.debug("Applied overlay %s to %s", overlay.category, game.app_id)
    return StageResult.updated(game.with_overlay(data))
