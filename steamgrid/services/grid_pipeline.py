"""Orchestrates the grid pipeline for every Steam profile.

Per profile: load everything already on disk, build a staging directory, then
per game acquire, overlay and write; finally swap the staging directory in.
Stage results decide whether a problem is recorded in the summary or ends the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from steamgrid.core.errors import AcquisitionError, PublishError
from steamgrid.core.existing_images import load_existing
from steamgrid.core.game import Game, UserProfile
from steamgrid.core.overlay_catalog import Overlay
from steamgrid.core.stage_result import StageStatus
from steamgrid.core.steam_library import GameSource
from steamgrid.services.grid_publisher import GridPublisher
from steamgrid.services.image_acquirer import ImageAcquirer
from steamgrid.services.overlay_compositor import apply_overlay
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.pipeline")

__all__ = ["GridPipeline", "RunSummary"]


@dataclass
class RunSummary:
    """What happened to every game during a run.

    Attributes:
        downloaded: Number of images fetched from the network.
        overlays_applied: Number of images that received an overlay.
        searched: Games whose image came from the name search and may be wrong.
        not_found: Games no source had an image for.
        overlay_failed: Games with an image that could not be overlaid, with the error.
        write_failed: Games whose grid file could not be written, with the error.
    """

    downloaded: int = 0
    overlays_applied: int = 0
    searched: list[Game] = field(default_factory=list)
    not_found: list[Game] = field(default_factory=list)
    overlay_failed: list[tuple[Game, str]] = field(default_factory=list)
    write_failed: list[tuple[Game, str]] = field(default_factory=list)


class GridPipeline:
    """Runs the load, acquire, overlay and publish stages.

    Attributes:
        source: Supplies profiles and games.
        acquirer: Downloads missing images.
        overlays: Category overlays from load_overlays.
        override_dir: Folder with user-pinned images.
    """

    def __init__(
        self,
        source: GameSource,
        acquirer: ImageAcquirer,
        overlays: dict[str, Overlay],
        override_dir: Path,
    ):
        self.source = source
        self.acquirer = acquirer
        self.overlays = overlays
        self.override_dir = override_dir

    def run(self) -> RunSummary:
        """Processes every profile in turn.

        Raises:
            FatalError: Any setup, publish or transport failure; profiles swapped
                        before the failure keep their new grid.
        """
        summary = RunSummary()
        for user in self.source.get_users():
            self.process_user(user, summary)
        return summary

    def process_user(self, user: UserProfile, summary: RunSummary) -> list[Game]:
        """Rebuilds the grid directory of one profile.

        Returns:
            The games as published, without the ones that had no image.
        """
        logger.info(t("logs.pipeline.loading_games", user=user.name))
        grid_dir = user.grid_dir
        publisher = GridPublisher(grid_dir)

        # An interrupted swap leaves the previous grid in "grid old"; restore it before reading
        publisher.recover()

        # Everything worth keeping is read into memory before the grid can be replaced
        games = [load_existing(self.override_dir, grid_dir, game).game for game in self.source.get_games(user)]

        publisher.prepare()

        published = []
        for index, game in enumerate(games, start=1):
            logger.info(t("logs.pipeline.processing", name=game.display_name, index=index, total=len(games)))
            result = self.process_game(game, publisher, summary)
            if result is not None:
                published.append(result)

        publisher.swap()
        return published

    def process_game(self, game: Game, publisher: GridPublisher, summary: RunSummary) -> Game | None:
        """Acquires, overlays and writes a single game.

        Returns:
            The published game, or None when no image was found.

        Raises:
            AcquisitionError: If the image provider could not be reached.
            PublishError: If the clean backup cannot be written.
            UnknownImageFormatError: If the game has no image extension.
        """
        if not game.has_image:
            result, from_search = self.acquirer.download_image(game)
            if result.is_fatal:
                raise AcquisitionError(t("logs.pipeline.acquisition_failed", name=game.display_name, error=result.reason))

            game = result.game
            if not game.has_image:
                logger.info(t("logs.pipeline.not_found", name=game.display_name))
                summary.not_found.append(game)
                return None

            summary.downloaded += 1
            if from_search:
                summary.searched.append(game)

        logger.info(t("logs.pipeline.found", name=game.display_name, source=game.image_source))

        result = apply_overlay(game, self.overlays)
        if not result.ok:
            summary.overlay_failed.append((game, result.reason))
        elif result.status is StageStatus.UPDATED:
            summary.overlays_applied += 1
        game = result.game

        try:
            publisher.backup_game(game)
        except OSError as e:
            raise PublishError(t("logs.pipeline.backup_failed", name=game.display_name, error=e)) from e

        try:
            publisher.write_game(game)
        except OSError as e:
            logger.error(t("logs.pipeline.write_failed", name=game.display_name, error=e))
            summary.write_failed.append((game, str(e)))

        return game
