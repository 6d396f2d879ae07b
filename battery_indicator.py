#!/usr/bin/env python3
"""
ACPI Battery Tray

A lightweight system tray battery indicator for Linux using GTK3 and AppIndicator3.
Polls the ``acpi`` command and shows the battery level as an icon or as text.
"""

import logging
import os
import shutil
import sys
import tempfile
from typing import Optional

import gi
gi.require_version('Gtk', '3.0')
gi.require_version('AppIndicator3', '0.1')
from gi.repository import Gtk, GLib, AppIndicator3

import cli
import config
from display import DisplayConfig
from updater import StatusUpdater

logger = logging.getLogger(__name__)


class TrayIcon:
    """
    Tray host backed by an AppIndicator3 indicator.

    AppIndicator has no real tooltip, so the text is set as the indicator
    title and shown as the first, insensitive menu item.
    """

    def __init__(self, menu: Gtk.Menu, tooltip_item: Gtk.MenuItem) -> None:
        self.indicator = AppIndicator3.Indicator.new(
            config.APP_NAME,
            "battery-missing",
            AppIndicator3.IndicatorCategory.HARDWARE
        )
        self.indicator.set_status(AppIndicator3.IndicatorStatus.PASSIVE)
        self.indicator.set_title(config.APP_NAME)
        self.indicator.set_menu(menu)
        self.tooltip_item = tooltip_item
        self.tooltip: str = config.APP_NAME
        self.icon_name: Optional[str] = None

        # Rendered text icons live here; the file name alternates so the
        # indicator sees a new icon on every change
        self._pixmap_dir: Optional[str] = None
        self._pixmap_serial: int = 0

    def set_icon(self, name: str) -> None:
        """Show a named icon from the desktop icon theme."""
        self.icon_name = name
        self.indicator.set_icon_full(name, self.tooltip)

    def set_pixmap(self, png_data: bytes) -> None:
        """Show rendered PNG data as the icon."""
        if self._pixmap_dir is None:
            self._pixmap_dir = tempfile.mkdtemp(prefix=f"{config.APP_NAME}-")
            self.indicator.set_icon_theme_path(self._pixmap_dir)

        self._pixmap_serial = (self._pixmap_serial + 1) % 2
        icon_name = f"battery-text-{self._pixmap_serial}"
        path = os.path.join(self._pixmap_dir, f"{icon_name}.png")
        with open(path, 'wb') as f:
            f.write(png_data)
        self.icon_name = icon_name
        self.indicator.set_icon_full(icon_name, self.tooltip)

    def set_tooltip(self, text: str) -> None:
        """Update the indicator title and the tooltip menu item."""
        self.tooltip = text
        self.indicator.set_title(text)
        self.tooltip_item.set_label(text)
        if self.icon_name is not None:
            # Keep the accessible description in step with the title
            self.indicator.set_icon_full(self.icon_name, text)

    def set_visible(self, visible: bool) -> None:
        """Show or hide the indicator."""
        if visible:
            self.indicator.set_status(AppIndicator3.IndicatorStatus.ACTIVE)
        else:
            self.indicator.set_status(AppIndicator3.IndicatorStatus.PASSIVE)

    def cleanup(self) -> None:
        """Remove rendered icon files."""
        if self._pixmap_dir is not None:
            shutil.rmtree(self._pixmap_dir, ignore_errors=True)
            self._pixmap_dir = None


class BatteryIndicator:
    """
    System tray battery indicator that polls the status command on a
    fixed interval.
    """

    def __init__(self, display_config: DisplayConfig) -> None:
        """
        Initialize the battery indicator.

        Args:
            display_config: Options resolved from the command line.
        """
        self.config = display_config
        self.update_source_id: Optional[int] = None

        # Build the menu and the tray icon
        self.menu = self._build_menu()
        self.tray = TrayIcon(self.menu, self.tooltip_item)
        self.updater = StatusUpdater(display_config, self.tray)

        # Initial update, then periodic updates
        self.update_source_id = self.updater.start(GLib.timeout_add_seconds)

    def _build_menu(self) -> Gtk.Menu:
        """
        Build the dropdown menu for the indicator.

        Returns:
            A Gtk.Menu with the status line and controls.
        """
        menu = Gtk.Menu()

        # Tooltip text, refreshed on every update
        self.tooltip_item = Gtk.MenuItem(label=config.APP_NAME)
        self.tooltip_item.set_sensitive(False)
        menu.append(self.tooltip_item)

        menu.append(Gtk.SeparatorMenuItem())

        refresh_item = Gtk.MenuItem(label="Refresh")
        refresh_item.connect("activate", self._on_refresh_clicked)
        menu.append(refresh_item)

        about_item = Gtk.MenuItem(label="About")
        about_item.connect("activate", self._on_about_clicked)
        menu.append(about_item)

        quit_item = Gtk.MenuItem(label="Quit")
        quit_item.connect("activate", self._on_quit_clicked)
        menu.append(quit_item)

        menu.show_all()
        return menu

    def _on_refresh_clicked(self, widget: Gtk.MenuItem) -> None:
        """Handle refresh button click."""
        self.updater.update()

    def _on_about_clicked(self, widget: Gtk.MenuItem) -> None:
        """Handle about button click."""
        about = Gtk.AboutDialog()
        about.set_program_name(config.APP_NAME)
        about.set_version(config.APP_VERSION)
        about.set_comments(config.APP_DESCRIPTION)
        about.set_logo_icon_name("battery-full")
        about.set_license_type(Gtk.License.MIT_X11)
        about.run()
        about.destroy()

    def _on_quit_clicked(self, widget: Gtk.MenuItem) -> None:
        """Handle quit button click."""
        self.tray.cleanup()
        Gtk.main_quit()


def main() -> None:
    """Main entry point for the battery tray application."""
    parser = cli.build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
    )

    if args.info:
        print(cli.info_text())
        sys.exit(0)

    try:
        display_config = cli.config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    # Check if running on a system with a display
    if not os.environ.get('DISPLAY') and not os.environ.get('WAYLAND_DISPLAY'):
        logger.error("No display server found. This application requires X11 or Wayland.")
        sys.exit(1)

    indicator = None
    try:
        indicator = BatteryIndicator(display_config)
        Gtk.main()
    except KeyboardInterrupt:
        logger.info("Exiting...")
        sys.exit(0)
    finally:
        if indicator is not None:
            indicator.tray.cleanup()


if __name__ == "__main__":
    main()
