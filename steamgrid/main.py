#!/usr/bin/env python3
"""SteamGrid - Main Entry Point.

Downloads missing Steam grid images, applies category overlays and republishes
the grid folder of every local Steam profile.
"""

from __future__ import annotations

import sys

import psutil

from steamgrid.config import config
from steamgrid.core.errors import FatalError
from steamgrid.core.logging import logger, setup_logging
from steamgrid.core.overlay_catalog import load_overlays
from steamgrid.core.steam_library import SteamLibrary, find_steam_installation
from steamgrid.integrations.http_client import HttpClient
from steamgrid.integrations.image_provider import SteamImageProvider
from steamgrid.services.grid_pipeline import GridPipeline, RunSummary
from steamgrid.services.image_acquirer import ImageAcquirer
from steamgrid.utils.i18n import init_i18n, t
from steamgrid.version import __app_name__, __version__

__all__ = ["main", "print_summary", "run"]


def check_steam_running() -> bool:
    """Check if Steam is currently running using psutil.

    Returns:
        True if Steam is running, False otherwise.
    """
    for proc in psutil.process_iter(["name"]):
        try:
            proc_name = (proc.info["name"] or "").lower()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if proc_name in ("steam", "steam.exe", "steam_osx"):
            return True
    return False


def wait_for_enter() -> None:
    """Keeps a double-clicked console window open until the user reads it."""
    if sys.stdin is not None and sys.stdin.isatty():
        try:
            input()
        except EOFError:
            pass


def print_summary(summary: RunSummary) -> None:
    """Prints the end-of-run report."""
    print()
    print(t("cli.summary.totals", downloaded=summary.downloaded, overlays=summary.overlays_applied))
    print()

    if summary.searched:
        print(t("cli.summary.searched", count=len(summary.searched)))
        for game in summary.searched:
            print(t("cli.summary.game_line", bullet="*", name=game.name, app_id=game.app_id))
        print()

    if summary.not_found:
        print(t("cli.summary.not_found", count=len(summary.not_found)))
        for game in summary.not_found:
            print(t("cli.summary.game_line", bullet="-", name=game.display_name, app_id=game.app_id))
        print()

    if summary.overlay_failed:
        print(t("cli.summary.overlay_failed", count=len(summary.overlay_failed)))
        for game, error in summary.overlay_failed:
            print(t("cli.summary.game_error_line", name=game.display_name, app_id=game.app_id, error=error))
        print()

    if summary.write_failed:
        print(t("cli.summary.write_failed", count=len(summary.write_failed)))
        for game, error in summary.write_failed:
            print(t("cli.summary.game_error_line", name=game.display_name, app_id=game.app_id, error=error))
        print()


def run() -> RunSummary:
    """Wires the pipeline from the global config and runs it.

    Raises:
        FatalError: On any error that ends the run.
    """
    logger.info(t("logs.main.loading_overlays"))
    overlays = load_overlays(config.OVERLAYS_DIR)
    if overlays:
        print(t("cli.overlays.loaded", count=len(overlays)))
    else:
        print(t("cli.overlays.none", path=config.OVERLAYS_DIR))

    steam_path = find_steam_installation(config.resolve_steam_path())
    library = SteamLibrary(steam_path)

    http = HttpClient(timeout=config.HTTP_TIMEOUT)
    try:
        provider = SteamImageProvider(http, config.STEAMGRIDDB_API_KEY)
        pipeline = GridPipeline(library, ImageAcquirer(provider), overlays, config.OVERRIDES_DIR)
        return pipeline.run()
    finally:
        http.close()


def main() -> int:
    """Entry point of the steamgrid console script.

    Returns:
        0 on success, 1 after a fatal error.
    """
    setup_logging(log_file=config.LOG_FILE)
    init_i18n(config.UI_LANGUAGE)
    logger.info(t("logs.main.starting", app=__app_name__, version=__version__))

    try:
        summary = run()
    except FatalError as e:
        print(str(e))
        wait_for_enter()
        return 1

    print_summary(summary)
    if check_steam_running():
        print(t("cli.steam_running"))
    print(t("cli.done"))
    wait_for_enter()
    return 0


if __name__ == "__main__":
    sys.exit(main())
