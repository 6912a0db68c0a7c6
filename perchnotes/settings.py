from __future__ import annotations
from pathlib import Path

APP_NAME = "perchnotes"
LOG_DIR = Path.home() / f".{APP_NAME}" / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"

DEFAULT_BASE_FONT_SIZE = 14.0
MIN_BASE_FONT_SIZE = 9.0
MAX_BASE_FONT_SIZE = 36.0

# spaces inserted/removed by indent and outdent
INDENT_WIDTH = 4
