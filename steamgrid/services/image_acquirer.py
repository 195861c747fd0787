"""Service for acquiring grid images that are not on disk yet.

Tries the provider's official lookup by app ID first and falls back to a search
by display name. Hits are tagged with their provenance so the summary can flag
images that came from the less reliable search.
"""

from __future__ import annotations

import logging

import requests

from steamgrid.core.game import SOURCE_OFFICIAL, SOURCE_SEARCH, Game
from steamgrid.core.stage_result import Severity, StageResult
from steamgrid.integrations.image_provider import ImageProvider
from steamgrid.utils.image_format import sniff_extension
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.acquirer")

__all__ = ["ImageAcquirer"]


class ImageAcquirer:
    """Downloads missing grid images through an ImageProvider.

    Attributes:
        provider: Source of official and searched images.
    """

    def __init__(self, provider: ImageProvider):
        self.provider = provider

    def download_image(self, game: Game) -> tuple[StageResult, bool]:
        """Fetches an image for a game that has none yet.

        Args:
            game: The game; left untouched when it already has an image source.

        Returns:
            The stage result and whether the image came from the search fallback.
            A game nobody has an image for comes back UNCHANGED with an empty
            source. Transport errors yield a FATAL failure.
        """
        if game.image_source:
            return StageResult.unchanged(game), False

        try:
            data = self.provider.fetch_official(game.app_id)
            ext = sniff_extension(data)
            if ext:
                return StageResult.updated(game.with_image(data, ext, SOURCE_OFFICIAL)), False
            if data:
                logger.warning(t("logs.acquirer.not_an_image", app_id=game.app_id, source=SOURCE_OFFICIAL))

            if not game.name:
                return StageResult.unchanged(game), False

            data = self.provider.search(game.name)
            ext = sniff_extension(data)
            if ext:
                return StageResult.updated(game.with_image(data, ext, SOURCE_SEARCH)), True
            if data:
                logger.warning(t("logs.acquirer.not_an_image", app_id=game.app_id, source=SOURCE_SEARCH))

        except requests.RequestException as e:
            logger.error(t("logs.acquirer.transport_error", name=game.display_name, error=e))
            return StageResult.failed(game, str(e), Severity.FATAL), False

        return StageResult.unchanged(game), False
