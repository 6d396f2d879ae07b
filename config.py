"""
Configuration options for the ACPI Battery Tray.

This module contains the defaults and fixed settings for the battery tray
application. Runtime options come from the command line; modify these
values to change the defaults.
"""

from typing import Dict, Tuple

APP_NAME: str = "acpi-battery-tray"
APP_VERSION: str = "1.0.0"
APP_DESCRIPTION: str = "A small system tray battery indicator driven by acpi output."

# Status command and polling
DEFAULT_COMMAND: str = "acpi"
DEFAULT_INTERVAL: int = 2  # seconds between polls
MIN_INTERVAL: int = 1  # GLib.timeout_add_seconds cannot go below one second
COMMAND_TIMEOUT: float = 5.0  # capped to the poll interval at runtime

# Icon level thresholds
BATTERY_FULL_THRESHOLD: int = 80  # >= this = full icon
BATTERY_GOOD_THRESHOLD: int = 40  # >= this = good icon
BATTERY_LOW_THRESHOLD: int = 20  # >= this = low icon
# Below low threshold = caution icon

# Icon themes: prefix, level suffixes (full, good, low, caution), charging suffix
ICON_THEMES: Dict[str, Dict[str, str]] = {
    "default": {
        "prefix": "notification-battery",
        "full": "-100",
        "good": "-060",
        "low": "-020",
        "caution": "-low",
        "charging": "-plugged",
        "missing": "-missing",
    },
    "alternate": {
        "prefix": "battery",
        "full": "-full",
        "good": "-good",
        "low": "-low",
        "caution": "-caution",
        "charging": "-charging",
        "missing": "-missing",
    },
}

# Text mode colors (RGB, 0.0-1.0)
TEXT_COLOR_DEFAULT: Tuple[float, float, float] = (1.0, 1.0, 1.0)
TEXT_COLOR_LOW: Tuple[float, float, float] = (0.9, 0.1, 0.1)
TEXT_COLOR_HIGH: Tuple[float, float, float] = (0.1, 0.8, 0.2)
TEXT_COLOR_LOW_THRESHOLD: int = 20  # < this = red
TEXT_COLOR_HIGH_THRESHOLD: int = 80  # > this = green
TEXT_FONT_FACE: str = "Sans"
TEXT_PADDING: int = 2  # pixels around the rendered label

# Logging
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
