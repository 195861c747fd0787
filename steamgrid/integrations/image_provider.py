# steamgrid/integrations/image_provider.py

"""
Remote sources for grid images.

The official source is the Steam CDN, addressed by app ID. The fallback is a
name search on SteamGridDB, which is only available with an API key.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote

from steamgrid.integrations.http_client import HttpClient
from steamgrid.utils.i18n import t

logger = logging.getLogger("steamgrid.provider")

__all__ = ["ImageProvider", "SteamGridDB", "SteamImageProvider"]


class ImageProvider(Protocol):
    """Anything able to look up grid images by app ID and by name."""

    def fetch_official(self, app_id: str) -> Optional[bytes]:
        ...

    def search(self, name: str) -> Optional[bytes]:
        ...


class SteamGridDB:
    """
    Minimal SteamGridDB API client used for the name search fallback.

    Only grids in Steam's horizontal capsule dimensions are considered.
    """

    # Secure HTTPS URL
    BASE_URL = "https://www.steamgriddb.com/api/v2"
    DIMENSIONS = "460x215,920x430"

    def __init__(self, http: HttpClient, api_key: Optional[str]):
        """
        Initializes the client.

        Args:
            http (HttpClient): Client used for every request.
            api_key (Optional[str]): SteamGridDB API key; without one every lookup misses.
        """
        self.http = http
        self.api_key = api_key or ""
        self.headers = {"Authorization": f"Bearer {self.api_key}"}

    def search_game_id(self, term: str) -> Optional[int]:
        """Returns the SteamGridDB game ID of the best autocomplete match."""
        data = self.http.get_json(f"{self.BASE_URL}/search/autocomplete/{quote(term, safe='')}", headers=self.headers)
        return self._first(data, "id")

    def first_grid_url(self, game_id: int) -> Optional[str]:
        """Returns the URL of the top-rated static grid for a SteamGridDB game."""
        params: Dict[str, Any] = {"dimensions": self.DIMENSIONS, "types": "static"}
        data = self.http.get_json(f"{self.BASE_URL}/grids/game/{game_id}", headers=self.headers, params=params)
        return self._first(data, "url")

    @staticmethod
    def _first(data: Any, field: str) -> Any:
        if not isinstance(data, dict) or not data.get("success"):
            return None
        items = data.get("data") or []
        if not items or not isinstance(items[0], dict):
            return None
        return items[0].get(field)


class SteamImageProvider:
    """
    Default ImageProvider: Steam CDN first, SteamGridDB search second.

    Transport errors are not caught here; the caller decides what they mean.
    """

    CDN_URL = "https://cdn.cloudflare.steamstatic.com/steam/apps/{app_id}/header.jpg"

    def __init__(self, http: HttpClient, steamgrid_api_key: Optional[str] = None):
        self.http = http
        self.steamgrid = SteamGridDB(http, steamgrid_api_key)

    def fetch_official(self, app_id: str) -> Optional[bytes]:
        return self.http.download(self.CDN_URL.format(app_id=app_id))

    def search(self, name: str) -> Optional[bytes]:
        """
        Searches SteamGridDB by display name and downloads the first grid.

        Args:
            name (str): The game's display name.

        Returns:
            Optional[bytes]: Encoded image, or None if search is unavailable or finds nothing.
        """
        if not self.steamgrid.api_key:
            logger.debug("Skipping search for %s, no SteamGridDB API key configured", name)
            return None

        game_id = self.steamgrid.search_game_id(name)
        if game_id is None:
            return None

        url = self.steamgrid.first_grid_url(game_id)
        if not url:
            return None

        logger.info(t("logs.provider.search_hit", name=name, url=url))
        return self.http.download(url)
