# steamgrid/core/errors.py

"""Exception hierarchy for SteamGrid.

Everything derived from FatalError aborts the whole run. Per-game problems are
not raised at all; they travel as failed StageResults.
"""

from __future__ import annotations

__all__ = [
    "SteamGridError",
    "FatalError",
    "OverlayDirectoryError",
    "SteamInstallationError",
    "NoUsersError",
    "PublishError",
    "UnknownImageFormatError",
    "AcquisitionError",
]


class SteamGridError(Exception):
    """Base class for all SteamGrid errors."""


class FatalError(SteamGridError):
    """An error that terminates the run after being reported."""


class OverlayDirectoryError(FatalError):
    """The overlay directory exists but could not be read."""


class SteamInstallationError(FatalError):
    """No Steam installation was found."""


class NoUsersError(FatalError):
    """The Steam installation has no user profiles."""


class PublishError(FatalError):
    """Creating, removing or swapping a grid directory failed."""


class UnknownImageFormatError(FatalError):
    """A game reached publication without a known image extension."""


class AcquisitionError(FatalError):
    """The image provider could not be reached."""
