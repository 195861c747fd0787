# steamgrid/core/overlay_catalog.py

"""
Loads the category overlays users drop into "overlays by category".

Each image file in the folder becomes one overlay; its lower-cased file stem is
the Steam category it applies to (e.g. "favorite.png" tags every favorite).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from steamgrid.core.errors import OverlayDirectoryError
from steamgrid.utils.image_format import SUPPORTED_EXTENSIONS, sniff_extension
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.overlays")

__all__ = ["Overlay", "find_overlay", "load_overlays"]


@dataclass(frozen=True)
class Overlay:
    """A translucent image stamped onto every grid image of one category."""

    category: str
    image_bytes: bytes


def load_overlays(directory: Path) -> dict[str, Overlay]:
    """
    Reads every overlay image in a directory.

    A missing directory is treated like an empty one. Files that cannot be read
    or decoded are skipped with a warning.

    Args:
        directory (Path): Folder holding "<category>.<ext>" images.

    Returns:
        dict[str, Overlay]: Overlays keyed by lower-cased category name.

    Raises:
        OverlayDirectoryError: If the directory exists but cannot be listed.
    """
    overlays: dict[str, Overlay] = {}
    if not directory.exists():
        logger.info(t("logs.overlays.no_directory", path=directory))
        return overlays

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise OverlayDirectoryError(t("logs.overlays.read_error", path=directory, error=e)) from e

    for entry in entries:
        if not entry.is_file() or entry.suffix.lower() not in SUPPORTED_EXTENSIONS:
            continue

        try:
            data = entry.read_bytes()
        except OSError as e:
            logger.warning(t("logs.overlays.file_error", name=entry.name, error=e))
            continue

        if not sniff_extension(data):
            logger.warning(t("logs.overlays.not_an_image", name=entry.name))
            continue

        category = entry.stem.lower()
        overlays[category] = Overlay(category=category, image_bytes=data)
        logger.debug("Loaded overlay %s from %s", category, entry.name)

    logger.info(t("logs.overlays.loaded", count=len(overlays)))
    return overlays


def find_overlay(overlays: dict[str, Overlay], category: str) -> Overlay | None:
    """Case-insensitive overlay lookup; None for an empty or unknown category."""
    if not category:
        return None
    return overlays.get(category.lower())
