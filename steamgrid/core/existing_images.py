# steamgrid/core/existing_images.py

"""
Recovers images that are already on disk before anything is downloaded.

Search order for a game, first match wins:
1. A user override in the "games" folder, named by app ID.
2. The clean backup a previous run left in grid/originals/.
3. The published grid image itself, only when no backup exists. It is taken
   as clean, which lets SteamGrid adopt a grid folder it did not create.
"""

from __future__ import annotations

import logging
from pathlib import Path

from steamgrid.core.game import Game
from steamgrid.core.stage_result import StageResult
from steamgrid.utils.image_format import SUPPORTED_EXTENSIONS, sniff_extension
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.existing")

__all__ = ["ORIGINALS_DIRNAME", "find_image_file", "load_existing"]

ORIGINALS_DIRNAME = "originals"


def find_image_file(directory: Path, app_id: str) -> list[Path]:
    """Returns the files in ``directory`` named ``<app_id>.<supported ext>``.

    Args:
        directory: Folder to look in; a missing folder yields no candidates.
        app_id: Steam app ID used as the file stem.

    Returns:
        Existing candidate paths in extension preference order. A folder that
        cannot be inspected yields no candidates.
    """
    try:
        if not directory.is_dir():
            return []
        return [directory / f"{app_id}{ext}" for ext in SUPPORTED_EXTENSIONS if (directory / f"{app_id}{ext}").is_file()]
    except OSError as e:
        logger.warning(t("logs.existing.probe_error", path=directory, error=e))
        return []


def _read_candidate(path: Path) -> tuple[bytes, str] | None:
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning(t("logs.existing.read_error", path=path, error=e))
        return None

    ext = sniff_extension(data)
    if not ext:
        logger.warning(t("logs.existing.unknown_format", path=path))
        return None
    return data, ext


def load_existing(override_dir: Path, grid_dir: Path, game: Game) -> StageResult:
    """
    Seeds a game with an image already present on disk.

    Never raises: unreadable or unidentifiable files are logged and the next
    candidate is tried.

    Args:
        override_dir (Path): Folder with user-pinned images.
        grid_dir (Path): The live Steam grid folder of the profile.
        game (Game): The game to look up.

    Returns:
        StageResult: UPDATED with the image and its path as source, or UNCHANGED
        when nothing usable was found.
    """
    backups = find_image_file(grid_dir / ORIGINALS_DIRNAME, game.app_id)

    candidates = find_image_file(override_dir, game.app_id)
    candidates += backups
    # A published image with a backup next to it carries the old overlay
    if not backups:
        candidates += find_image_file(grid_dir, game.app_id)

    for path in candidates:
        found = _read_candidate(path)
        if found is None:
            continue
        data, ext = found
        logger.debug("Loaded existing image for %s from %s", game.app_id, path)
        return StageResult.updated(game.with_image(data, ext, str(path)))

    return StageResult.unchanged(game)
