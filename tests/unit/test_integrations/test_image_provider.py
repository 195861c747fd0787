"""Tests for the Steam CDN / SteamGridDB image provider."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from steamgrid.integrations.http_client import HttpClient
from steamgrid.integrations.image_provider import SteamGridDB, SteamImageProvider


@pytest.fixture
def http() -> MagicMock:
    return MagicMock(spec=HttpClient)


class TestOfficial:
    """Tests for SteamImageProvider.fetch_official()."""

    def test_downloads_cdn_header(self, http: MagicMock) -> None:
        http.download.return_value = b"image"

        result = SteamImageProvider(http).fetch_official("42")

        assert result == b"image"
        http.download.assert_called_once_with("https://cdn.cloudflare.steamstatic.com/steam/apps/42/header.jpg")

    def test_miss(self, http: MagicMock) -> None:
        http.download.return_value = None
        assert SteamImageProvider(http).fetch_official("42") is None


class TestSearch:
    """Tests for SteamImageProvider.search()."""

    def test_no_api_key_skips_network(self, http: MagicMock) -> None:
        assert SteamImageProvider(http).search("Foo") is None
        http.get_json.assert_not_called()
        http.download.assert_not_called()

    def test_search_downloads_first_grid(self, http: MagicMock) -> None:
        http.get_json.side_effect = [
            {"success": True, "data": [{"id": 7, "name": "Foo"}]},
            {"success": True, "data": [{"url": "https://cdn.example/grid.png"}]},
        ]
        http.download.return_value = b"grid"

        result = SteamImageProvider(http, "key").search("Foo Bar")

        assert result == b"grid"
        search_url = http.get_json.call_args_list[0].args[0]
        assert search_url.endswith("/search/autocomplete/Foo%20Bar")
        assert http.get_json.call_args_list[0].kwargs["headers"] == {"Authorization": "Bearer key"}
        assert http.get_json.call_args_list[1].args[0].endswith("/grids/game/7")
        http.download.assert_called_once_with("https://cdn.example/grid.png")

    def test_no_search_match(self, http: MagicMock) -> None:
        http.get_json.return_value = {"success": True, "data": []}
        assert SteamImageProvider(http, "key").search("Foo") is None
        http.download.assert_not_called()

    def test_game_without_grids(self, http: MagicMock) -> None:
        http.get_json.side_effect = [{"success": True, "data": [{"id": 7}]}, {"success": False}]
        assert SteamImageProvider(http, "key").search("Foo") is None


def test_steamgriddb_first_tolerates_garbage() -> None:
    assert SteamGridDB._first(None, "id") is None
    assert SteamGridDB._first({"success": True, "data": ["x"]}, "id") is None
    assert SteamGridDB._first({"success": True, "data": [{"id": 3}]}, "id") == 3
