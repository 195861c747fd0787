"""Smoke tests – verify all modules are importable and free of syntax errors.

This is an infrastructure test (not a unit test), so it lives in the tests
root rather than under ``tests/unit/``.
"""

from __future__ import annotations

import importlib

import pytest

MODULES: list[str] = [
    "steamgrid.config",
    "steamgrid.version",
    "steamgrid.main",
    "steamgrid.core.errors",
    "steamgrid.core.existing_images",
    "steamgrid.core.game",
    "steamgrid.core.logging",
    "steamgrid.core.overlay_catalog",
    "steamgrid.core.stage_result",
    "steamgrid.core.steam_library",
    "steamgrid.integrations",
    "steamgrid.integrations.http_client",
    "steamgrid.integrations.image_provider",
    "steamgrid.services",
    "steamgrid.services.grid_pipeline",
    "steamgrid.services.grid_publisher",
    "steamgrid.services.image_acquirer",
    "steamgrid.services.overlay_compositor",
    "steamgrid.utils.i18n",
    "steamgrid.utils.image_format",
    "steamgrid.utils.paths",
]


@pytest.mark.parametrize("module_name", MODULES)
def test_module_importable(module_name: str) -> None:
    """Each module must import without errors."""
    importlib.import_module(module_name)
