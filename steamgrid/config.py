"""
Configuration - Windows & Linux Auto-Detection.

Resolves the folders SteamGrid reads from (overlays, per-game overrides), the
Steam installation and the optional SteamGridDB API key.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("steamgrid.config")


__all__ = ["Config", "config", "default_app_dir"]


def default_app_dir() -> Path:
    """Returns the folder holding the executable, where users drop overlays and overrides."""
    return Path(sys.argv[0]).resolve().parent


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, the Steam location, API keys and the HTTP timeout.
    """

    APP_DIR: Path = None
    OVERLAYS_DIR: Path = None
    OVERRIDES_DIR: Path = None
    SETTINGS_FILE: Path = None
    LOG_FILE: Path | None = None

    UI_LANGUAGE: str = "en"

    STEAMGRIDDB_API_KEY: str | None = None
    STEAM_PATH: Path | None = None

    # Seconds to wait for an image endpoint to start responding
    HTTP_TIMEOUT: float = 10.0

    def __post_init__(self):
        """Fill derived paths, then apply settings file and environment."""
        if self.APP_DIR is None:
            self.APP_DIR = default_app_dir()
        if self.OVERLAYS_DIR is None:
            self.OVERLAYS_DIR = self.APP_DIR / "overlays by category"
        if self.OVERRIDES_DIR is None:
            self.OVERRIDES_DIR = self.APP_DIR / "games"
        if self.SETTINGS_FILE is None:
            self.SETTINGS_FILE = self.APP_DIR / "steamgrid.json"

        self._load_settings()

        load_dotenv()
        env_key = os.getenv("STEAMGRIDDB_API_KEY")
        if env_key:
            self.STEAMGRIDDB_API_KEY = env_key
        env_steam = os.getenv("STEAM_PATH")
        if env_steam:
            self.STEAM_PATH = Path(env_steam)

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        from steamgrid.utils.i18n import t

        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)

            self.UI_LANGUAGE = data.get("ui_language", self.UI_LANGUAGE)
            self.STEAMGRIDDB_API_KEY = data.get("steamgriddb_api_key", self.STEAMGRIDDB_API_KEY)
            self.HTTP_TIMEOUT = float(data.get("http_timeout", self.HTTP_TIMEOUT))

            steam_path = data.get("steam_path")
            if steam_path:
                self.STEAM_PATH = Path(steam_path)
            log_file = data.get("log_file")
            if log_file:
                self.LOG_FILE = Path(log_file)

        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error(t("logs.config.load_error", error=e))

    def resolve_steam_path(self) -> Path | None:
        """Returns the configured Steam path, auto-detecting it when unset."""
        if self.STEAM_PATH and self.STEAM_PATH.exists():
            return self.STEAM_PATH
        return self._find_steam_path()

    @staticmethod
    def _find_steam_path() -> Path | None:
        """Auto-detect Steam path on Linux, macOS and Windows."""
        system = platform.system()

        if system == "Windows":
            try:
                import winreg

                key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Software\Valve\Steam")
                path_str, _ = winreg.QueryValueEx(key, "SteamPath")
                path = Path(path_str)
                if path.exists():
                    return path
            except OSError:
                # Fallback to standard paths if registry fails
                common_paths = [Path(r"C:\Program Files (x86)\Steam"), Path(r"C:\Program Files\Steam")]
                for p in common_paths:
                    if p.exists():
                        return p

        else:
            paths = [
                Path.home() / ".steam" / "steam",
                Path.home() / ".local" / "share" / "Steam",
                Path.home() / "Library" / "Application Support" / "Steam",
            ]
            for p in paths:
                if p.exists():
                    return p.resolve() if p.is_symlink() else p

        return None


# Global instance
config = Config()
