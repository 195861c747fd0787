# steamgrid/core/steam_library.py

"""
Enumerates Steam user profiles and their games from local Steam files.

- Users are the numeric folders under <steam>/userdata.
- Games and their categories come from each user's sharedconfig.vdf.
- Display names come from appmanifest_*.acf files in every library folder.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import vdf

from steamgrid.core.errors import NoUsersError, SteamInstallationError
from steamgrid.core.game import Game, UserProfile
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.library")

__all__ = ["GameSource", "SteamLibrary", "find_steam_installation"]


class GameSource(Protocol):
    """Supplies the profiles to process and the games of each profile."""

    def get_users(self) -> list[UserProfile]:
        ...

    def get_games(self, user: UserProfile) -> list[Game]:
        ...


def find_steam_installation(steam_path: Path | None) -> Path:
    """
    Validates a Steam installation directory.

    Args:
        steam_path (Path | None): Configured or auto-detected Steam path.

    Returns:
        Path: The installation directory.

    Raises:
        SteamInstallationError: If no directory with a userdata folder was found.
    """
    if steam_path is None or not (steam_path / "userdata").is_dir():
        raise SteamInstallationError(t("logs.library.no_installation", path=steam_path or "-"))
    logger.info(t("logs.library.installation", path=steam_path))
    return steam_path


def _get_ci(data: dict, key: str) -> dict:
    """Case-insensitive nested section lookup; Steam is inconsistent about "Apps" vs "apps"."""
    if not isinstance(data, dict):
        return {}
    for k, v in data.items():
        if k.lower() == key.lower() and isinstance(v, dict):
            return v
    return {}


def _load_vdf(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return vdf.load(f)
    except (OSError, SyntaxError, ValueError) as e:
        logger.warning(t("logs.library.vdf_error", path=path, error=e))
        return {}


class SteamLibrary:
    """
    GameSource backed by a local Steam installation.
    """

    def __init__(self, steam_path: Path):
        """
        Initializes the library.

        Args:
            steam_path (Path): Path to the Steam installation directory.
        """
        self.steam_path = steam_path
        self._names: dict[str, str] | None = None

    def get_users(self) -> list[UserProfile]:
        """
        Lists the local Steam accounts.

        Returns:
            list[UserProfile]: Profiles sorted by account ID.

        Raises:
            NoUsersError: If userdata holds no account folders.
        """
        userdata = self.steam_path / "userdata"
        users = []
        if userdata.is_dir():
            for account_dir in sorted(userdata.iterdir()):
                # "0" is Steam's anonymous placeholder account
                if not account_dir.is_dir() or not account_dir.name.isdigit() or account_dir.name == "0":
                    continue
                users.append(
                    UserProfile(
                        account_id=account_dir.name,
                        name=self._persona_name(account_dir) or account_dir.name,
                        directory=account_dir,
                    )
                )

        if not users:
            raise NoUsersError(t("logs.library.no_users", path=userdata))

        logger.info(t("logs.library.users_found", count=len(users)))
        return users

    def get_games(self, user: UserProfile) -> list[Game]:
        """
        Lists the games of a profile with their display name and category.

        Games known from sharedconfig.vdf come first, then installed games the
        profile has not categorized.

        Args:
            user (UserProfile): The profile to read.

        Returns:
            list[Game]: One fresh Game per app ID.
        """
        names = self._installed_names()
        games: dict[str, Game] = {}

        for app_id, app_data in self._shared_apps(user).items():
            if not app_id.isdigit():
                continue
            games[app_id] = Game(app_id=app_id, name=names.get(app_id, ""), category=self._first_tag(app_data))

        for app_id, name in names.items():
            if app_id not in games:
                games[app_id] = Game(app_id=app_id, name=name)

        logger.info(t("logs.library.games_found", user=user.name, count=len(games)))
        return list(games.values())

    def _shared_apps(self, user: UserProfile) -> dict:
        path = user.directory / "7" / "remote" / "sharedconfig.vdf"
        if not path.exists():
            logger.info(t("logs.library.no_sharedconfig", path=path))
            return {}

        data = _load_vdf(path)
        root = next(iter(data.values()), {}) if data else {}
        steam = _get_ci(_get_ci(_get_ci(root, "Software"), "Valve"), "Steam")
        return _get_ci(steam, "Apps")

    @staticmethod
    def _first_tag(app_data: dict) -> str:
        tags = _get_ci(app_data, "tags")
        ordered = sorted(tags.items(), key=lambda item: int(item[0]) if item[0].isdigit() else 0)
        for _, tag in ordered:
            if isinstance(tag, str) and tag:
                return tag
        return ""

    @staticmethod
    def _persona_name(account_dir: Path) -> str:
        path = account_dir / "config" / "localconfig.vdf"
        if not path.exists():
            return ""
        root = _load_vdf(path).get("UserLocalConfigStore", {})
        name = _get_ci(root, "friends").get("PersonaName", "")
        return name if isinstance(name, str) else ""

    def _installed_names(self) -> dict[str, str]:
        """Maps app ID to display name for every installed game, cached per instance."""
        if self._names is not None:
            return self._names

        names: dict[str, str] = {}
        for lib_path in self.get_library_folders():
            steamapps = lib_path / "steamapps"
            if not steamapps.is_dir():
                continue
            for manifest in sorted(steamapps.glob("appmanifest_*.acf")):
                app_state = _load_vdf(manifest).get("AppState", {})
                app_id = str(app_state.get("appid", ""))
                if app_id.isdigit() and app_state.get("name"):
                    names[app_id] = app_state["name"]

        self._names = names
        return names

    def get_library_folders(self) -> list[Path]:
        """
        Finds all Steam library folders based on libraryfolders.vdf.

        Returns:
            list[Path]: The installation directory followed by every existing extra library.
        """
        folders = [self.steam_path]

        for candidate in (
            self.steam_path / "steamapps" / "libraryfolders.vdf",
            self.steam_path / "config" / "libraryfolders.vdf",
        ):
            if not candidate.exists():
                continue

            data = _load_vdf(candidate)
            library_data = _get_ci(data, "libraryfolders") or data
            for value in library_data.values():
                # Old format maps index -> path string, new format index -> {"path": ...}
                path_str = value.get("path") if isinstance(value, dict) else value
                if not isinstance(path_str, str) or not path_str:
                    continue
                path_obj = Path(path_str)
                if path_obj.is_dir() and path_obj not in folders:
                    folders.append(path_obj)
            break

        return folders
