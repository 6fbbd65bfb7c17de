"""Color tables and brightness helpers shared by every rendering stage."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import InvalidColorFormat

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]

DEFAULT_BASE_COLOR = "#FFE066"

MOOD_PALETTE: Mapping[str, str] = MappingProxyType(
    {
        "happy": "#FFE066",
        "sad": "#87CEEB",
        "angry": "#FF6B6B",
        "excited": "#FF8E53",
        "calm": "#9ECAE1",
        "love": "#FFB6C1",
        "cool": "#98FB98",
        "tired": "#DDA0DD",
    }
)

RAINBOW_PALETTE: Tuple[str, ...] = (
    "#FF0000",
    "#FF7F00",
    "#FFFF00",
    "#00FF00",
    "#0000FF",
    "#4B0082",
    "#9400D3",
)


def parse_hex_color(value: str) -> RGB:
    """Parse ``#RRGGBB`` (or ``#RGB``) into an ``(r, g, b)`` tuple."""
    if not isinstance(value, str):
        raise InvalidColorFormat(value)
    raw = value.strip()
    if not raw.startswith("#"):
        raise InvalidColorFormat(value)
    raw = raw[1:]
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        raise InvalidColorFormat(value)
    try:
        return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))
    except ValueError:
        raise InvalidColorFormat(value) from None


def to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def with_alpha(value: str, opacity: float) -> RGBA:
    r, g, b = parse_hex_color(value)
    return (r, g, b, int(round(255 * opacity)))


def adjust_brightness(color: str, amount: int) -> str:
    """Shift every channel of ``color`` by ``amount``, saturating at 0 and 255.

    >>> adjust_brightness("#FFFFFF", -50)
    '#cdcdcd'
    >>> adjust_brightness("#000000", 300)
    '#ffffff'
    """
    r, g, b = parse_hex_color(color)
    return to_hex(tuple(max(0, min(255, channel + amount)) for channel in (r, g, b)))  # type: ignore[arg-type]


def mood_base_color(mood: str) -> str:
    try:
        return MOOD_PALETTE[mood]
    except (KeyError, TypeError):
        logger.debug("Unknown mood %r, using default base color", mood)
        return DEFAULT_BASE_COLOR
