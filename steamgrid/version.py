"""
Central version management for SteamGrid.
"""

from __future__ import annotations

__all__ = ["__app_name__", "__version__", "__release_date__", "__license__"]

__app_name__ = "SteamGrid"
__version__ = "3.0.0"
__release_date__ = "2026-10-18"
__license__ = "MIT"
