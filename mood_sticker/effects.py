"""Caption styles.

Each style is a small frozen dataclass holding only the colors it needs.
``build_effect`` turns an effect name and the caption color into one of these
variants, and the renderer calls ``render`` on it exactly once. All drawing goes
through 8-bit coverage masks composited onto the canvas, so translucent fills
blend with the background instead of replacing it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple, Union

from PIL import Image, ImageChops, ImageDraw, ImageFilter, ImageOps

from .colors import RAINBOW_PALETTE, RGBA, adjust_brightness, parse_hex_color, to_hex, with_alpha
from .errors import InvalidRequest
from .fonts import TEXT_FONT_SIZE, Font

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def text_mask(size: Tuple[int, int], text: str, font: Font, xy: Point, stroke_width: int = 0) -> Image.Image:
    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).text(xy, text, font=font, fill=255, anchor="mm", stroke_width=stroke_width)
    return mask


def fill_mask(canvas: Image.Image, mask: Image.Image, fill: RGBA) -> None:
    """Composite ``fill`` onto ``canvas`` wherever ``mask`` has coverage."""
    r, g, b, a = fill
    layer = Image.new("RGBA", canvas.size, (r, g, b, 0))
    if a < 255:
        mask = mask.point(lambda value: value * a // 255)
    layer.putalpha(mask)
    canvas.alpha_composite(layer)


@dataclass(frozen=True)
class NoEffect:
    color: str

    def render(self, canvas: Image.Image, text: str, font: Font, anchor: Point) -> None:
        fill_mask(canvas, text_mask(canvas.size, text, font, anchor), with_alpha(self.color, 1.0))


@dataclass(frozen=True)
class ShadowEffect:
    color: str
    offset: Tuple[int, int] = (3, 3)
    opacity: float = 0.5

    def render(self, canvas: Image.Image, text: str, font: Font, anchor: Point) -> None:
        x, y = anchor
        shadow_at = (x + self.offset[0], y + self.offset[1])
        fill_mask(canvas, text_mask(canvas.size, text, font, shadow_at), with_alpha("#000000", self.opacity))
        fill_mask(canvas, text_mask(canvas.size, text, font, anchor), with_alpha(self.color, 1.0))


@dataclass(frozen=True)
class GlowEffect:
    color: str
    blur_radius: int = 10

    def render(self, canvas: Image.Image, text: str, font: Font, anchor: Point) -> None:
        mask = text_mask(canvas.size, text, font, anchor)
        # A blur radius spans two standard deviations of the gaussian.
        halo = mask.filter(ImageFilter.GaussianBlur(self.blur_radius / 2))
        fill = with_alpha(self.color, 1.0)
        fill_mask(canvas, halo, fill)
        fill_mask(canvas, mask, fill)


@dataclass(frozen=True)
class OutlineEffect:
    color: str
    width: int = 4

    def render(self, canvas: Image.Image, text: str, font: Font, anchor: Point) -> None:
        half = self.width // 2
        outer = text_mask(canvas.size, text, font, anchor, stroke_width=half)
        inner = text_mask(canvas.size, text, font, anchor).filter(ImageFilter.MinFilter(half * 2 + 1))
        fill_mask(canvas, ImageChops.subtract(outer, inner), with_alpha(self.color, 1.0))


@dataclass(frozen=True)
class GradientEffect:
    top: str
    bottom: str
    height: int = TEXT_FONT_SIZE

    def band(self, anchor: Point) -> Tuple[int, int]:
        """Rows the ramp spans: one font size, centred on the anchor."""
        top_y = round(anchor[1] - self.height / 2)
        return top_y, top_y + self.height

    def render(self, canvas: Image.Image, text: str, font: Font, anchor: Point) -> None:
        top_y, bottom_y = self.band(anchor)
        top_rgb = parse_hex_color(self.top)
        bottom_rgb = parse_hex_color(self.bottom)
        ramp = Image.linear_gradient("L").resize((canvas.width, self.height), Image.BILINEAR)
        # Rows above the band keep the top color, rows below it the bottom color.
        layer = Image.new("RGBA", canvas.size, top_rgb + (255,))
        if bottom_y < canvas.height:
            layer.paste(bottom_rgb + (255,), (0, bottom_y, canvas.width, canvas.height))
        layer.paste(ImageOps.colorize(ramp, top_rgb, bottom_rgb).convert("RGBA"), (0, top_y))
        layer.putalpha(text_mask(canvas.size, text, font, anchor))
        canvas.alpha_composite(layer)


@dataclass(frozen=True)
class RainbowEffect:
    palette: Tuple[str, ...] = RAINBOW_PALETTE

    def layout(self, text: str, font: Font, anchor: Point) -> List[Tuple[str, Point, str]]:
        """Place each character in an equal-width slot across the measured text.

        Slots split the whole caption width evenly, which only approximates
        proportional advances but keeps the block centred on ``anchor``.
        """
        chars = list(text)
        if not chars:
            return []
        x, y = anchor
        total_width = font.getlength(text)
        slot = total_width / len(chars)
        start_x = x - total_width / 2
        return [
            (char, (start_x + index * slot + slot / 2, y), self.palette[index % len(self.palette)])
            for index, char in enumerate(chars)
        ]

    def render(self, canvas: Image.Image, text: str, font: Font, anchor: Point) -> None:
        for char, xy, color in self.layout(text, font, anchor):
            fill_mask(canvas, text_mask(canvas.size, char, font, xy), with_alpha(color, 1.0))


TextEffect = Union[NoEffect, ShadowEffect, GlowEffect, OutlineEffect, GradientEffect, RainbowEffect]

_BUILDERS: Dict[str, Callable[[str], TextEffect]] = {
    "none": NoEffect,
    "shadow": ShadowEffect,
    "glow": GlowEffect,
    "outline": lambda color: OutlineEffect(adjust_brightness(color, -40)),
    "gradient": lambda color: GradientEffect(color, adjust_brightness(color, -30)),
    "rainbow": lambda _color: RainbowEffect(),
}


def build_effect(name: str, text_color: str) -> TextEffect:
    """Validate ``text_color`` and return the variant for ``name``."""
    color = to_hex(parse_hex_color(text_color))
    try:
        builder = _BUILDERS[name]
    except (KeyError, TypeError):
        raise InvalidRequest(f"Unsupported effect: {name!r}") from None
    effect = builder(color)
    logger.debug("Caption effect %s -> %r", name, effect)
    return effect
