"""Settings management for the readingmode extraction engine."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "settings.yaml"
ENV_SETTINGS_PATH = "READINGMODE_SETTINGS"

DEFAULT_MIN_TEXT_LENGTH = 500
DEFAULT_REQUEST_TIMEOUT = 8
DEFAULT_USER_AGENT = "ReadingModeBot/0.1"


@dataclass(frozen=True)
class CleaningOptions:
    """Caller-tunable knobs for a single extraction."""

    min_text_length: int = DEFAULT_MIN_TEXT_LENGTH


@dataclass
class ThumbnailSettings:
    """Configuration for the thumbnail selector's page fallback."""

    fetch_pages: bool = True
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class AppSettings:
    """Top-level settings loaded from YAML."""

    cleaning: CleaningOptions = field(default_factory=CleaningOptions)
    thumbnails: ThumbnailSettings = field(default_factory=ThumbnailSettings)


class SettingsError(RuntimeError):
    """Raised when there is an issue loading settings."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise SettingsError(f"Settings file not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise SettingsError("Settings file must define a mapping at the root level")
    return data


def _parse_cleaning(entry: Dict[str, Any]) -> CleaningOptions:
    if not isinstance(entry, dict):
        raise SettingsError("'cleaning' must be a mapping of configuration values")

    try:
        min_text_length = int(entry.get("min_text_length", DEFAULT_MIN_TEXT_LENGTH))
    except (TypeError, ValueError) as exc:
        raise SettingsError("'cleaning.min_text_length' must be an integer") from exc
    if min_text_length < 0:
        raise SettingsError("'cleaning.min_text_length' must not be negative")
    return CleaningOptions(min_text_length=min_text_length)


def _parse_thumbnails(entry: Dict[str, Any]) -> ThumbnailSettings:
    if not isinstance(entry, dict):
        raise SettingsError("'thumbnails' must be a mapping of configuration values")

    try:
        timeout = float(entry.get("request_timeout", DEFAULT_REQUEST_TIMEOUT))
    except (TypeError, ValueError) as exc:
        raise SettingsError("'thumbnails.request_timeout' must be a number") from exc
    if timeout <= 0:
        raise SettingsError("'thumbnails.request_timeout' must be positive")

    return ThumbnailSettings(
        fetch_pages=bool(entry.get("fetch_pages", True)),
        request_timeout=timeout,
        user_agent=str(entry.get("user_agent", DEFAULT_USER_AGENT)),
    )


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """Load settings from YAML into ``AppSettings``.

    ``path`` defaults to the value of the ``READINGMODE_SETTINGS`` environment
    variable and falls back to ``config/settings.yaml`` relative to the project root.
    """

    if path is None:
        env_path = os.environ.get(ENV_SETTINGS_PATH)
        if env_path:
            path = Path(env_path)
        else:
            path = DEFAULT_SETTINGS_PATH

    data = _load_yaml(path)

    cleaning_raw = data.get("cleaning", {})
    cleaning = _parse_cleaning(cleaning_raw) if cleaning_raw else CleaningOptions()

    thumbnails_raw = data.get("thumbnails", {})
    thumbnails = _parse_thumbnails(thumbnails_raw) if thumbnails_raw else ThumbnailSettings()

    return AppSettings(cleaning=cleaning, thumbnails=thumbnails)


__all__ = [
    "AppSettings",
    "CleaningOptions",
    "DEFAULT_MIN_TEXT_LENGTH",
    "SettingsError",
    "ThumbnailSettings",
    "load_settings",
]
