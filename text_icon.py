"""Render the battery percentage as a small PNG label with cairo."""

import io
import math
from typing import Tuple

import cairo

import config


def render_text_icon(text: str, font_size: int,
                     color: Tuple[float, float, float] = config.TEXT_COLOR_DEFAULT) -> bytes:
    """
    Draw ``text`` on a transparent surface sized to fit it.

    Args:
        text: Label to draw, e.g. ``"55%"``.
        font_size: Font size in pixels.
        color: RGB color, each component in 0.0-1.0.

    Returns:
        PNG image data.
    """
    if font_size <= 0:
        raise ValueError(f"font size must be positive, got {font_size}")

    # Measure on a scratch surface first
    scratch = cairo.ImageSurface(cairo.FORMAT_ARGB32, 1, 1)
    ctx = cairo.Context(scratch)
    ctx.select_font_face(config.TEXT_FONT_FACE, cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_BOLD)
    ctx.set_font_size(font_size)
    extents = ctx.text_extents(text)
    font_extents = ctx.font_extents()

    pad = config.TEXT_PADDING
    width = max(1, int(math.ceil(extents.x_advance)) + 2 * pad)
    height = max(1, int(math.ceil(font_extents[0] + font_extents[1])) + 2 * pad)

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    ctx = cairo.Context(surface)
    ctx.set_operator(cairo.OPERATOR_CLEAR)
    ctx.paint()
    ctx.set_operator(cairo.OPERATOR_OVER)

    ctx.select_font_face(config.TEXT_FONT_FACE, cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_BOLD)
    ctx.set_font_size(font_size)
    ctx.set_source_rgb(*color)
    ctx.move_to(pad, pad + font_extents[0])
    ctx.show_text(text)
    surface.flush()

    buf = io.BytesIO()
    surface.write_to_png(buf)
    return buf.getvalue()
