"""
Icon and tooltip selection for the battery tray.

Pure functions that map a :class:`~battery_status.BatteryReading` and the
runtime :class:`DisplayConfig` to a :class:`DisplayDescriptor`, which the
tray icon then shows.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import config
from battery_status import BatteryReading, BatteryState

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class DisplayConfig:
    """Options resolved once from the command line."""

    interval: int = config.DEFAULT_INTERVAL
    verbose: bool = False
    alt_theme: bool = False
    text_size: Optional[int] = None
    colors: bool = False
    command: str = config.DEFAULT_COMMAND

    def __post_init__(self) -> None:
        if self.interval < config.MIN_INTERVAL:
            raise ValueError(
                f"interval must be at least {config.MIN_INTERVAL} second(s), got {self.interval}"
            )
        if self.text_size is not None and self.text_size <= 0:
            raise ValueError(f"text size must be positive, got {self.text_size}")
        if not self.command.strip():
            raise ValueError("status command must not be empty")

    @property
    def text_mode(self) -> bool:
        return self.text_size is not None

    @property
    def theme(self) -> str:
        return "alternate" if self.alt_theme else "default"

    @property
    def command_timeout(self) -> float:
        """Command timeout, never longer than the poll interval."""
        return min(config.COMMAND_TIMEOUT, float(self.interval))


class DisplayDescriptor(NamedTuple):
    """What the tray should show: an icon name or a text label, plus a tooltip."""

    icon_name: Optional[str]
    text: Optional[str]
    color: Color
    tooltip: str


def get_icon_name(percentage: int, state: BatteryState, theme: str = "default") -> str:
    """
    Determine the icon name for a battery level and state.

    Args:
        percentage: Battery percentage (0-100).
        state: Charging state.
        theme: Key into ``config.ICON_THEMES``.

    Returns:
        Icon name for the desktop icon theme.
    """
    names = config.ICON_THEMES[theme]
    if state is BatteryState.UNKNOWN:
        return names["prefix"] + names["missing"]

    if percentage >= config.BATTERY_FULL_THRESHOLD:
        level = names["full"]
    elif percentage >= config.BATTERY_GOOD_THRESHOLD:
        level = names["good"]
    elif percentage >= config.BATTERY_LOW_THRESHOLD:
        level = names["low"]
    else:
        level = names["caution"]

    icon_name = names["prefix"] + level
    if state is BatteryState.CHARGING:
        icon_name += names["charging"]
    return icon_name


def get_tooltip_text(reading: BatteryReading, verbose: bool = False) -> str:
    """Tooltip in the form ``"Discharging (55%) 01:30:00 remaining"``."""
    detail = reading.detail if verbose else " "
    return f"{reading.state.label} ({reading.percentage}%) {detail}"


def get_text_color(percentage: int, colors: bool = False) -> Color:
    """Red below 20%, green above 80% when colors are on."""
    if colors:
        if percentage < config.TEXT_COLOR_LOW_THRESHOLD:
            return config.TEXT_COLOR_LOW
        if percentage > config.TEXT_COLOR_HIGH_THRESHOLD:
            return config.TEXT_COLOR_HIGH
    return config.TEXT_COLOR_DEFAULT


def select_display(reading: BatteryReading, display_config: DisplayConfig) -> DisplayDescriptor:
    """Build the descriptor for a successful poll."""
    tooltip = get_tooltip_text(reading, display_config.verbose)

    if display_config.text_mode:
        if reading.state is BatteryState.UNKNOWN:
            text = "?"
            color = config.TEXT_COLOR_DEFAULT
        else:
            text = f"{reading.percentage}%"
            color = get_text_color(reading.percentage, display_config.colors)
        return DisplayDescriptor(None, text, color, tooltip)

    icon_name = get_icon_name(reading.percentage, reading.state, display_config.theme)
    return DisplayDescriptor(icon_name, None, config.TEXT_COLOR_DEFAULT, tooltip)


def select_error_display(error: Exception, display_config: DisplayConfig) -> DisplayDescriptor:
    """Build the degraded descriptor shown when a poll fails."""
    tooltip = f"{BatteryState.UNKNOWN.label}: {error}"
    if display_config.text_mode:
        return DisplayDescriptor(None, "?", config.TEXT_COLOR_DEFAULT, tooltip)
    icon_name = get_icon_name(0, BatteryState.UNKNOWN, display_config.theme)
    return DisplayDescriptor(icon_name, None, config.TEXT_COLOR_DEFAULT, tooltip)
