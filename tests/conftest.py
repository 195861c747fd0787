# tests/conftest.py
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
import vdf
from PIL import Image

from steamgrid.core.overlay_catalog import Overlay


def _encode(fmt: str, size: tuple[int, int], color: tuple[int, ...], mode: str = "RGB") -> bytes:
    img = Image.new(mode, size, color)
    out = BytesIO()
    if fmt == "JPEG":
        img.save(out, format=fmt, quality=90)
    else:
        img.save(out, format=fmt)
    return out.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory producing encoded solid-color images."""

    def factory(fmt: str = "JPEG", size: tuple[int, int] = (46, 22), color=(200, 40, 40), mode: str = "RGB") -> bytes:
        return _encode(fmt, size, color, mode)

    return factory


@pytest.fixture
def jpeg_bytes(make_image) -> bytes:
    return make_image("JPEG")


@pytest.fixture
def png_bytes(make_image) -> bytes:
    return make_image("PNG", color=(20, 120, 220))


@pytest.fixture
def overlay_bytes(make_image) -> bytes:
    """Half-transparent green PNG at a different size than the grid images."""
    return make_image("PNG", size=(92, 44), color=(0, 255, 0, 128), mode="RGBA")


@pytest.fixture
def overlays(overlay_bytes) -> dict[str, Overlay]:
    return {"indie": Overlay(category="indie", image_bytes=overlay_bytes)}


class FakeProvider:
    """In-memory ImageProvider recording every call."""

    def __init__(self, official: dict[str, bytes] | None = None, searched: dict[str, bytes] | None = None):
        self.official = official or {}
        self.searched = searched or {}
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    def fetch_official(self, app_id: str) -> bytes | None:
        self.calls.append(("official", app_id))
        if self.error is not None:
            raise self.error
        return self.official.get(app_id)

    def search(self, name: str) -> bytes | None:
        self.calls.append(("search", name))
        if self.error is not None:
            raise self.error
        return self.searched.get(name)


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def steam_install(tmp_path) -> Path:
    """Minimal Steam installation with one user, two categorized games and one installed game.

    Returns:
        The Steam root; the user is 12345678 ("Tester").
    """
    steam = tmp_path / "Steam"
    user_dir = steam / "userdata" / "12345678"
    (user_dir / "config").mkdir(parents=True)
    (user_dir / "7" / "remote").mkdir(parents=True)
    (steam / "userdata" / "0").mkdir()

    (user_dir / "config" / "localconfig.vdf").write_text(
        vdf.dumps({"UserLocalConfigStore": {"friends": {"PersonaName": "Tester"}}}), encoding="utf-8"
    )
    (user_dir / "7" / "remote" / "sharedconfig.vdf").write_text(
        vdf.dumps(
            {
                "UserRoamingConfigStore": {
                    "Software": {
                        "Valve": {
                            "Steam": {
                                "apps": {
                                    "42": {"tags": {"1": "Action", "0": "Indie"}},
                                    "440": {"tags": {"0": "favorite"}},
                                    "70": {"Hidden": "1"},
                                }
                            }
                        }
                    }
                }
            }
        ),
        encoding="utf-8",
    )

    steamapps = steam / "steamapps"
    steamapps.mkdir()
    for app_id, name in (("42", "Foo"), ("440", "Team Fortress 2"), ("620", "Portal 2")):
        (steamapps / f"appmanifest_{app_id}.acf").write_text(
            vdf.dumps({"AppState": {"appid": app_id, "name": name, "installdir": name}}), encoding="utf-8"
        )

    return steam
