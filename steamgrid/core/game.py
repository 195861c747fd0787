# steamgrid/core/game.py

"""Game and user profile records for the grid pipeline.

Games are immutable snapshots. Every pipeline stage returns an updated copy
instead of mutating the record it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

__all__ = ["Game", "UserProfile", "SOURCE_OFFICIAL", "SOURCE_SEARCH"]

SOURCE_OFFICIAL = "official"
SOURCE_SEARCH = "search"


@dataclass(frozen=True)
class Game:
    """A single library entry and the images collected for it.

    Attributes:
        app_id: Stable Steam app ID, also used as the grid file name.
        name: Display name, may be empty for games Steam knows only by ID.
        category: Steam category used to pick an overlay, empty if none.
        clean_image: Encoded image without any overlay.
        overlay_image: Encoded image after compositing, None if no overlay was applied.
        image_ext: File extension sniffed from the image content (".jpg", ".png", ...).
        image_source: "" while unresolved, "official", "search" or a local file path.
    """

    app_id: str
    name: str = ""
    category: str = ""
    clean_image: bytes | None = None
    overlay_image: bytes | None = None
    image_ext: str = ""
    image_source: str = ""

    def __post_init__(self):
        if self.image_source and not self.clean_image:
            raise ValueError(f"Game {self.app_id} has image source {self.image_source!r} but no image")

    @property
    def display_name(self) -> str:
        """Returns the name, or a placeholder naming the app ID."""
        return self.name or f"unknown game with id {self.app_id}"

    @property
    def has_image(self) -> bool:
        return bool(self.image_source)

    @property
    def published_image(self) -> bytes | None:
        """Returns the bytes that end up in the live grid.

        The overlaid image wins, the clean image is the fallback when no overlay
        was applied or compositing failed.
        """
        return self.overlay_image if self.overlay_image is not None else self.clean_image

    def with_image(self, data: bytes, ext: str, source: str) -> Game:
        """Returns a copy carrying a new clean image and no overlay."""
        return replace(self, clean_image=data, image_ext=ext, image_source=source, overlay_image=None)

    def with_overlay(self, data: bytes) -> Game:
        return replace(self, overlay_image=data)


@dataclass(frozen=True)
class UserProfile:
    """A local Steam account.

    Attributes:
        account_id: The short account ID (the userdata folder name).
        name: Persona name, or the account ID when it is unknown.
        directory: The account's userdata folder.
    """

    account_id: str
    name: str
    directory: Path

    @property
    def grid_dir(self) -> Path:
        return self.directory / "config" / "grid"

    def __str__(self) -> str:
        return f"{self.account_id} ({self.name})"
