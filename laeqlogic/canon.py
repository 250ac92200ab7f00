from __future__ import annotations
from typing import Final

INDEX_NAME: Final[str] = "time"
REQUIRED_COLS: Final[list[str]] = ["cell_id", "level_db"]
DEFAULT_TZ: Final[str] = "Asia/Bangkok"
DEFAULT_CELL_ID: Final[str] = "cell"
DEFAULT_MAX_POINTS: Final[int] = 100

COMMON_TIMESTAMP_NAMES = ("time", "timestamp", "ts", "datetime", "date")
COMMON_LEVEL_NAMES = ("level_db", "noise_level", "laeq", "level", "db", "value")
COMMON_CELL_NAMES = ("cell_id", "hex_id", "cell")
