"""
Poll, parse and push the result to the tray icon.

:class:`StatusUpdater` is the body of the periodic timer. It owns the last
shown descriptor and talks to the tray through four methods
(``set_icon``, ``set_pixmap``, ``set_tooltip``, ``set_visible``), so it can
run against a fake tray in tests.
"""

import logging
from typing import Callable, Optional, Protocol

import battery_status
from battery_status import BatteryReading, BatteryStatusError
from display import DisplayConfig, DisplayDescriptor, select_display, select_error_display
from text_icon import render_text_icon

logger = logging.getLogger(__name__)


class TrayHost(Protocol):
    def set_icon(self, name: str) -> None: ...

    def set_pixmap(self, png_data: bytes) -> None: ...

    def set_tooltip(self, text: str) -> None: ...

    def set_visible(self, visible: bool) -> None: ...


class StatusUpdater:
    """Runs one poll per call and updates the tray when something changed."""

    def __init__(self, display_config: DisplayConfig, tray: TrayHost,
                 run_command: Callable[..., str] = battery_status.run_status_command,
                 render_text: Callable[..., bytes] = render_text_icon) -> None:
        self.config = display_config
        self.tray = tray
        self._run_command = run_command
        self._render_text = render_text
        self._busy: bool = False
        self._last_descriptor: Optional[DisplayDescriptor] = None
        self._last_error: Optional[str] = None
        self.last_reading: Optional[BatteryReading] = None

    def poll(self) -> BatteryReading:
        """Run the status command and parse it; errors propagate."""
        output = self._run_command(self.config.command, timeout=self.config.command_timeout)
        return battery_status.parse_acpi_output(output)

    def start(self, schedule: Callable[[int, Callable[[], bool]], int]) -> int:
        """
        Show the first reading now, then poll every interval.

        Args:
            schedule: Repeating timer, e.g. ``GLib.timeout_add_seconds``.

        Returns:
            Whatever ``schedule`` returns, normally the GLib source id.
        """
        self.update()
        source_id = schedule(self.config.interval, self.update)
        logger.debug("Polling '%s' every %d s", self.config.command, self.config.interval)
        return source_id

    def update(self) -> bool:
        """
        Poll once and refresh the tray.

        Returns:
            True, so the GLib timeout keeps running.
        """
        if self._busy:
            logger.debug("Poll already running, skipping")
            return True

        self._busy = True
        try:
            try:
                reading = self.poll()
            except BatteryStatusError as e:
                self._report_error(e)
                self.last_reading = None
                descriptor = select_error_display(e, self.config)
            else:
                if self._last_error is not None:
                    logger.info("Battery status available again")
                    self._last_error = None
                self.last_reading = reading
                descriptor = select_display(reading, self.config)
            self.show(descriptor)
        finally:
            self._busy = False
        return True

    def show(self, descriptor: DisplayDescriptor) -> None:
        """Push a descriptor to the tray, skipping parts that did not change."""
        last = self._last_descriptor
        if last is None or (descriptor.icon_name, descriptor.text, descriptor.color) != (
                last.icon_name, last.text, last.color):
            if descriptor.text is not None:
                size = self.config.text_size or 0
                self.tray.set_pixmap(self._render_text(descriptor.text, size, descriptor.color))
            else:
                self.tray.set_icon(descriptor.icon_name)
        if last is None or descriptor.tooltip != last.tooltip:
            self.tray.set_tooltip(descriptor.tooltip)
        if last is None:
            self.tray.set_visible(True)
        self._last_descriptor = descriptor

    def _report_error(self, error: BatteryStatusError) -> None:
        message = str(error)
        if message != self._last_error:
            logger.warning("Battery status unavailable: %s", message)
            self._last_error = message
        else:
            logger.debug("Battery status still unavailable: %s", message)
