# tests/unit/test_core/test_existing_images.py

"""Tests for recovering images already on disk."""

from pathlib import Path
from unittest.mock import patch

import pytest

from steamgrid.core.existing_images import find_image_file, load_existing
from steamgrid.core.game import Game
from steamgrid.core.stage_result import StageStatus


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    override_dir = tmp_path / "games"
    grid_dir = tmp_path / "grid"
    override_dir.mkdir()
    (grid_dir / "originals").mkdir(parents=True)
    return override_dir, grid_dir


class TestLoadExisting:
    """Tests for load_existing() search order."""

    def test_nothing_found(self, dirs):
        override_dir, grid_dir = dirs
        game = Game(app_id="42")

        result = load_existing(override_dir, grid_dir, game)

        assert result.status is StageStatus.UNCHANGED
        assert result.game is game

    def test_override_beats_backup(self, dirs, jpeg_bytes, png_bytes):
        override_dir, grid_dir = dirs
        (override_dir / "42.png").write_bytes(png_bytes)
        (grid_dir / "originals" / "42.jpg").write_bytes(jpeg_bytes)

        result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.status is StageStatus.UPDATED
        assert result.game.clean_image == png_bytes
        assert result.game.image_ext == ".png"
        assert result.game.image_source == str(override_dir / "42.png")

    def test_backup_beats_published_image(self, dirs, jpeg_bytes, png_bytes):
        override_dir, grid_dir = dirs
        (grid_dir / "originals" / "42.jpg").write_bytes(jpeg_bytes)
        (grid_dir / "42.jpg").write_bytes(png_bytes)

        result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.game.clean_image == jpeg_bytes

    def test_published_image_used_without_backup(self, dirs, png_bytes):
        override_dir, grid_dir = dirs
        (grid_dir / "42.png").write_bytes(png_bytes)

        result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.game.clean_image == png_bytes
        assert result.game.image_source == str(grid_dir / "42.png")

    def test_extension_sniffed_from_content(self, dirs, png_bytes):
        override_dir, grid_dir = dirs
        (override_dir / "42.jpg").write_bytes(png_bytes)

        result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.game.image_ext == ".png"

    def test_corrupt_candidate_falls_through(self, dirs, jpeg_bytes):
        override_dir, grid_dir = dirs
        (override_dir / "42.png").write_bytes(b"garbage")
        (grid_dir / "originals" / "42.jpg").write_bytes(jpeg_bytes)

        result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.game.clean_image == jpeg_bytes

    def test_missing_directories(self, tmp_path: Path):
        result = load_existing(tmp_path / "a", tmp_path / "b", Game(app_id="42"))
        assert result.status is StageStatus.UNCHANGED

    def test_other_games_ignored(self, dirs, jpeg_bytes):
        override_dir, grid_dir = dirs
        (override_dir / "420.jpg").write_bytes(jpeg_bytes)

        result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.status is StageStatus.UNCHANGED

    def test_unreadable_override_folder_falls_through(self, dirs, jpeg_bytes):
        override_dir, grid_dir = dirs
        (grid_dir / "originals" / "42.jpg").write_bytes(jpeg_bytes)
        real_is_dir = type(override_dir).is_dir

        def is_dir(path):
            if path == override_dir:
                raise PermissionError(13, "Permission denied")
            return real_is_dir(path)

        with patch.object(type(override_dir), "is_dir", is_dir):
            result = load_existing(override_dir, grid_dir, Game(app_id="42"))

        assert result.status is StageStatus.UPDATED
        assert result.game.clean_image == jpeg_bytes


def test_find_image_file_lists_all_extensions(tmp_path: Path):
    (tmp_path / "42.png").write_bytes(b"x")
    (tmp_path / "42.jpg").write_bytes(b"x")
    (tmp_path / "42.txt").write_bytes(b"x")

    assert find_image_file(tmp_path, "42") == [tmp_path / "42.png", tmp_path / "42.jpg"]
