"""Publishes a profile's grid images through a staging directory.

Layout while a profile is processed::

    grid new/originals/<app_id><ext>   clean images, read back by the next run
    grid new/<app_id><ext>             the image Steam displays

Once every game is written the staging directory replaces the live one. The
old directory is first moved aside to "grid old" and only deleted after the
staging directory is in place, so a failed swap can always be rolled back.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from steamgrid.core.errors import PublishError, UnknownImageFormatError
from steamgrid.core.existing_images import ORIGINALS_DIRNAME
from steamgrid.core.game import Game
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.publisher")

__all__ = ["GridPublisher"]


class GridPublisher:
    """Builds and swaps in a new grid directory for one Steam profile.

    Attributes:
        grid_dir: The live grid directory Steam reads.
        staging_dir: "<grid_dir> new", filled before the swap.
        retired_dir: "<grid_dir> old", holds the previous grid during the swap.
    """

    def __init__(self, grid_dir: Path):
        self.grid_dir = grid_dir
        self.staging_dir = grid_dir.with_name(grid_dir.name + " new")
        self.retired_dir = grid_dir.with_name(grid_dir.name + " old")

    @property
    def originals_dir(self) -> Path:
        return self.staging_dir / ORIGINALS_DIRNAME

    def recover(self) -> bool:
        """Rolls back a swap that was interrupted between its two renames.

        Returns:
            True if a retired grid was moved back into place.

        Raises:
            PublishError: If the retired grid exists but cannot be restored.
        """
        if not self.retired_dir.exists():
            return False

        try:
            if self.grid_dir.exists():
                # The swap got as far as the second rename; only the cleanup is missing
                shutil.rmtree(self.retired_dir)
                return False
            self.retired_dir.rename(self.grid_dir)
        except OSError as e:
            raise PublishError(t("logs.publisher.recover_error", path=self.retired_dir, error=e)) from e

        logger.warning(t("logs.publisher.recovered", path=self.grid_dir))
        return True

    def prepare(self) -> None:
        """Creates an empty staging directory, discarding leftovers of an aborted run.

        Raises:
            PublishError: If the staging directory cannot be cleaned or created.
        """
        self.recover()
        try:
            if self.staging_dir.exists():
                shutil.rmtree(self.staging_dir)
            self.originals_dir.mkdir(parents=True)
        except OSError as e:
            raise PublishError(t("logs.publisher.staging_error", path=self.staging_dir, error=e)) from e

    def backup_game(self, game: Game) -> Path:
        """Writes the clean image to staging/originals/<app_id><ext>.

        Raises:
            UnknownImageFormatError: If the game has no image extension.
            OSError: If the file cannot be written; nothing is left behind in staging.
        """
        return self._write(self.originals_dir / self._file_name(game), game.clean_image)

    def write_game(self, game: Game) -> Path:
        """Writes the published image (overlaid, else clean) to staging/<app_id><ext>.

        Raises:
            UnknownImageFormatError: If the game has no image extension.
            OSError: If the file cannot be written; nothing is left behind in staging.
        """
        return self._write(self.staging_dir / self._file_name(game), game.published_image)

    def swap(self) -> None:
        """Replaces the live grid with the fully written staging directory.

        Raises:
            PublishError: If a rename fails. The live grid is restored first
                          when possible.
        """
        had_live = self.grid_dir.exists()
        try:
            if self.retired_dir.exists():
                shutil.rmtree(self.retired_dir)
            if had_live:
                self.grid_dir.rename(self.retired_dir)
        except OSError as e:
            raise PublishError(t("logs.publisher.retire_error", path=self.grid_dir, error=e)) from e

        try:
            self.staging_dir.rename(self.grid_dir)
        except OSError as e:
            if had_live:
                try:
                    self.retired_dir.rename(self.grid_dir)
                except OSError as restore_error:
                    logger.error(t("logs.publisher.recover_error", path=self.retired_dir, error=restore_error))
            raise PublishError(t("logs.publisher.rename_error", path=self.staging_dir, error=e)) from e

        if had_live:
            try:
                shutil.rmtree(self.retired_dir)
            except OSError as e:
                # The new grid is live; a leftover "grid old" is cleaned by the next recover()
                logger.warning(t("logs.publisher.cleanup_error", path=self.retired_dir, error=e))

        logger.info(t("logs.publisher.swapped", path=self.grid_dir))

    @staticmethod
    def _write(path: Path, data: bytes) -> Path:
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError:
            # A truncated file would be published by swap()
            path.unlink(missing_ok=True)
            raise
        return path

    @staticmethod
    def _file_name(game: Game) -> str:
        if not game.image_ext:
            raise UnknownImageFormatError(t("logs.publisher.unknown_format", name=game.display_name))
        return f"{game.app_id}{game.image_ext}"
