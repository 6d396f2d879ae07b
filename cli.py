"""Command-line options for the battery tray."""

import argparse
import logging
from typing import List, Optional

import config
from display import DisplayConfig

logger = logging.getLogger(__name__)


def _int_at_least(value: str, minimum: int) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < minimum:
        raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {number}")
    return number


def _interval(value: str) -> int:
    return _int_at_least(value, config.MIN_INTERVAL)


def _font_size(value: str) -> int:
    return _int_at_least(value, 1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=config.APP_NAME,
        description=config.APP_DESCRIPTION,
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="tray icon's tooltip will display extra info")
    parser.add_argument("-c", "--change-icon", dest="alt_theme", action="store_true",
                        help="change tray icon theme (use if the default icons are missing)")
    parser.add_argument("-t", "--interval", type=_interval, default=config.DEFAULT_INTERVAL,
                        metavar="SECONDS",
                        help=f"time between updates in seconds (default: {config.DEFAULT_INTERVAL})")
    parser.add_argument("--text-mode", dest="text_size", type=_font_size, default=None,
                        metavar="FONT_SIZE",
                        help="show the percentage as text with the given font size")
    parser.add_argument("--colors", action="store_true",
                        help="color the text red when low and green when high (needs --text-mode)")
    parser.add_argument("--command", default=config.DEFAULT_COMMAND,
                        help=f"battery status command (default: {config.DEFAULT_COMMAND})")
    parser.add_argument("-i", "--info", action="store_true",
                        help="show info about this application and exit")
    parser.add_argument("--debug", action="store_true",
                        help="enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> DisplayConfig:
    """Build the immutable display configuration from parsed arguments."""
    colors = args.colors
    if colors and args.text_size is None:
        logger.warning("--colors only works together with --text-mode, ignoring it")
        colors = False

    return DisplayConfig(
        interval=args.interval,
        verbose=args.verbose,
        alt_theme=args.alt_theme,
        text_size=args.text_size,
        colors=colors,
        command=args.command,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def info_text() -> str:
    return f"{config.APP_NAME} {config.APP_VERSION}\n{config.APP_DESCRIPTION}"
