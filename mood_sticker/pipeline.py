"""The sticker composition pipeline.

Stages run in a fixed order and hand the canvas from one to the next::

    render_background -> draw_emoji -> draw_caption -> finish_frame -> encode_png

Every stage after the first takes the canvas, draws onto it in place and
returns it; nothing else keeps a reference in between. No stage reads a clock
or a random source, so equal requests always encode to equal bytes.
"""

from __future__ import annotations

import base64
import hashlib
import io
import logging
import math
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageOps

from .colors import adjust_brightness, mood_base_color, parse_hex_color, with_alpha
from .config import CANVAS_SIZE, DEFAULT_EMOJI, StickerRequest
from .effects import TextEffect, build_effect
from .errors import EncodingFailure
from .fonts import EMOJI_FONT_SIZE, FontSet, load_fonts

logger = logging.getLogger(__name__)

GRADIENT_CENTER: Tuple[int, int] = (256, 256)
GRADIENT_RADIUS = 300
BACKGROUND_DARKEN = -20

EMOJI_CENTER: Tuple[int, int] = (256, 256)
EMOJI_SHADOW_OFFSET: Tuple[int, int] = (2, 2)
EMOJI_SHADOW_OPACITY = 0.2

CAPTION_ANCHOR: Tuple[int, int] = (256, 400)

FRAME_WIDTH = 4
FRAME_OPACITY = 0.3


def _radial_ramp(size: Tuple[int, int], center: Tuple[int, int], radius: float) -> Image.Image:
    """Coverage map of distance from ``center``: 0 at the centre, 255 from ``radius`` out.

    Distances are measured to pixel centres.
    """
    width, height = size
    cx, cy = center
    values = [
        min(255, round(255 * math.hypot(x + 0.5 - cx, y + 0.5 - cy) / radius))
        for y in range(height)
        for x in range(width)
    ]
    ramp = Image.new("L", size)
    ramp.putdata(values)
    return ramp


def render_background(mood: str, size: Tuple[int, int] = CANVAS_SIZE) -> Image.Image:
    base = mood_base_color(mood)
    secondary = adjust_brightness(base, BACKGROUND_DARKEN)
    ramp = _radial_ramp(size, GRADIENT_CENTER, GRADIENT_RADIUS)
    return ImageOps.colorize(ramp, parse_hex_color(base), parse_hex_color(secondary)).convert("RGBA")


def _glyph_tile(emoji: str, fonts: FontSet) -> Image.Image:
    em = fonts.emoji_size
    tile = Image.new("RGBA", (em * 2, em * 2), (0, 0, 0, 0))
    ImageDraw.Draw(tile).text(
        (em, em),
        emoji,
        font=fonts.emoji,
        fill=(0, 0, 0, 255),
        anchor="mm",
        embedded_color=True,
    )
    if em != EMOJI_FONT_SIZE:
        side = round(tile.width * fonts.emoji_scale)
        tile = tile.resize((side, side), Image.LANCZOS)
    return tile


def draw_emoji(canvas: Image.Image, emoji: str, fonts: FontSet) -> Image.Image:
    """Draw ``emoji`` centred on the canvas above a faint black drop shadow."""
    tile = _glyph_tile(emoji, fonts)
    left = EMOJI_CENTER[0] - tile.width // 2
    top = EMOJI_CENTER[1] - tile.height // 2

    opacity = with_alpha("#000000", EMOJI_SHADOW_OPACITY)[3]
    shadow = Image.new("RGBA", tile.size, (0, 0, 0, 0))
    shadow.putalpha(tile.getchannel("A").point(lambda value: value * opacity // 255))
    canvas.alpha_composite(shadow, dest=(left + EMOJI_SHADOW_OFFSET[0], top + EMOJI_SHADOW_OFFSET[1]))
    canvas.alpha_composite(tile, dest=(left, top))
    return canvas


def draw_caption(canvas: Image.Image, text: str, effect: TextEffect, fonts: FontSet) -> Image.Image:
    caption = text.strip()
    if not caption:
        return canvas
    effect.render(canvas, caption, fonts.text, CAPTION_ANCHOR)
    return canvas


def finish_frame(canvas: Image.Image) -> Image.Image:
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    ImageDraw.Draw(layer).rectangle(
        (0, 0, canvas.width - 1, canvas.height - 1),
        outline=with_alpha("#FFFFFF", FRAME_OPACITY),
        width=FRAME_WIDTH,
    )
    canvas.alpha_composite(layer)
    return canvas


def encode_png(canvas: Image.Image) -> bytes:
    buffer = io.BytesIO()
    try:
        canvas.save(buffer, format="PNG")
    except (OSError, ValueError, MemoryError) as exc:
        raise EncodingFailure(f"Failed to encode sticker as PNG: {exc}") from exc
    return buffer.getvalue()


def render_sticker(request: StickerRequest, fonts: Optional[FontSet] = None) -> Image.Image:
    """Run every drawing stage for ``request`` and return the finished canvas.

    The caption color and effect are validated before any pixel is drawn, so an
    invalid request fails without producing a partial image.
    """
    effect = build_effect(request.effect, request.text_color)
    fonts = fonts or load_fonts()
    logger.debug("Composing %s sticker with effect %s", request.mood, request.effect)

    canvas = render_background(request.mood)
    canvas = draw_emoji(canvas, request.emoji or DEFAULT_EMOJI, fonts)
    canvas = draw_caption(canvas, request.text, effect, fonts)
    return finish_frame(canvas)


def compose_sticker(request: StickerRequest, fonts: Optional[FontSet] = None) -> bytes:
    return encode_png(render_sticker(request, fonts))


def sticker_id(png: bytes) -> str:
    return f"chatmood-sticker-{hashlib.sha256(png).hexdigest()[:12]}"


def encode_base64(png: bytes) -> str:
    return base64.b64encode(png).decode("ascii")
