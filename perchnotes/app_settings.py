from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings

from perchnotes.settings import (
    DEFAULT_BASE_FONT_SIZE,
    MAX_BASE_FONT_SIZE,
    MIN_BASE_FONT_SIZE,
)


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    BASE_FONT_SIZE: str = "editor/base_font_size"
    MARKDOWN_PASTE: str = "editor/markdown_paste"


def get_float(settings: QSettings, key: str, default: float) -> float:
    try:
        return float(settings.value(key, default))
    except Exception:
        return default


def get_bool(settings: QSettings, key: str, default: bool) -> bool:
    # QSettings returns "true"/"false" strings from INI/plist backends
    try:
        val = settings.value(key, default)
    except Exception:
        return default
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        lowered = val.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    return default


def normalize_font_size(value: float | int | str | None) -> float:
    try:
        size = float(value)
    except Exception:
        return DEFAULT_BASE_FONT_SIZE
    if size != size:  # NaN
        return DEFAULT_BASE_FONT_SIZE
    return min(MAX_BASE_FONT_SIZE, max(MIN_BASE_FONT_SIZE, size))


def safe_set_setting(settings: QSettings, key: str, value) -> None:
    """Best-effort write to QSettings; never breaks the UI."""
    try:
        settings.setValue(key, value)
    except Exception:
        pass
