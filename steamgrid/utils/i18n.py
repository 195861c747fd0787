"""
Message catalog for log lines and console output.

Strings are looked up by dot-notation keys and loaded from JSON files:
1. Shared files from resources/i18n/*.json (log messages)
2. Locale-specific files from resources/i18n/{locale}/*.json (console text)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

__all__ = ["I18n", "init_i18n", "t"]

logger = logging.getLogger("steamgrid.i18n")


def _deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Returns a new dict with ``update`` merged recursively over ``base``."""
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class I18n:
    """Loaded message catalog for one locale, with English as fallback."""

    def __init__(self, locale: str = "en", root: Path | None = None) -> None:
        """Initialize the catalog.

        Args:
            locale: Locale directory to load on top of the English strings.
            root: Catalog directory, defaults to resources/i18n.
        """
        if root is None:
            from steamgrid.utils.paths import get_resources_dir

            root = get_resources_dir() / "i18n"

        self.locale = locale
        self.root = root

        messages = _deep_merge(self._load_directory(root), self._load_directory(root / "en"))
        if locale != "en":
            messages = _deep_merge(messages, self._load_directory(root / locale))
        self.messages: dict[str, Any] = messages

    @staticmethod
    def _load_directory(directory: Path) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        if not directory.is_dir():
            return merged
        for file_path in sorted(directory.glob("*.json")):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    merged = _deep_merge(merged, json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.error("Error loading i18n file %s: %s", file_path.name, e)
        return merged

    def t(self, key: str, **kwargs: Any) -> str:
        """Retrieve a message by dot-notation key.

        Args:
            key: Dot-separated key path (e.g. 'logs.publisher.swapped').
            **kwargs: Format arguments for string interpolation.

        Returns:
            The formatted message, or '[key]' if the key is unknown.
        """
        value: Any = self.messages
        for part in key.split("."):
            value = value.get(part) if isinstance(value, dict) else None

        if not isinstance(value, str):
            return f"[{key}]"

        if kwargs:
            try:
                return value.format(**kwargs)
            except (ValueError, KeyError, IndexError):
                return value

        return value


_i18n_instance: I18n | None = None


def init_i18n(locale: str = "en") -> I18n:
    """Initialize the global catalog for a locale and return it."""
    global _i18n_instance
    _i18n_instance = I18n(locale)
    return _i18n_instance


def t(key: str, **kwargs: Any) -> str:
    """Retrieve a message using the global catalog, loading English on first use."""
    if _i18n_instance is None:
        init_i18n()
    return _i18n_instance.t(key, **kwargs)
