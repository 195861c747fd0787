from __future__ import annotations

__all__: list[str] = ["HttpClient", "ImageProvider", "SteamImageProvider"]

from steamgrid.integrations.http_client import HttpClient
from steamgrid.integrations.image_provider import ImageProvider, SteamImageProvider
