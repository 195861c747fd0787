"""Centralized path resolution for application resources.

Provides a single source of truth for locating the resources directory,
whether running from source, installed via pip, or bundled next to an executable.
"""

from __future__ import annotations

import sys
from pathlib import Path

__all__ = ["get_resources_dir"]

_resources_dir: Path | None = None


def get_resources_dir() -> Path:
    """Get the path to the resources directory.

    Checks multiple locations to support different installation methods:
    1. Development and pip install: steamgrid/resources/
    2. Bundled executable: resources/ next to the interpreter prefix

    Returns:
        Path to the resources directory.

    Raises:
        FileNotFoundError: If resources directory cannot be found.
    """
    global _resources_dir
    if _resources_dir is not None:
        return _resources_dir

    # paths.py is at steamgrid/utils/paths.py → parent.parent = steamgrid/
    candidate = Path(__file__).resolve().parent.parent / "resources"
    if candidate.is_dir():
        _resources_dir = candidate
        return _resources_dir

    candidate = Path(sys.prefix) / "resources"
    if candidate.is_dir():
        _resources_dir = candidate
        return _resources_dir

    raise FileNotFoundError(
        "Could not locate resources directory. Searched: steamgrid/resources/, sys.prefix/resources/"
    )
