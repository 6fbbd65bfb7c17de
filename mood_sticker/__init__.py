"""Compose square mood stickers from a mood, an emoji and a styled caption."""

from .colors import MOOD_PALETTE, RAINBOW_PALETTE, adjust_brightness
from .config import GenerationConfig, StickerRequest, load_config
from .effects import build_effect
from .errors import EncodingFailure, InvalidColorFormat, InvalidRequest, StickerError
from .fonts import FontSet, load_fonts
from .generator import StickerGenerator
from .pipeline import compose_sticker, encode_base64, render_sticker, sticker_id

__all__ = [
    "EncodingFailure",
    "FontSet",
    "GenerationConfig",
    "InvalidColorFormat",
    "InvalidRequest",
    "MOOD_PALETTE",
    "RAINBOW_PALETTE",
    "StickerError",
    "StickerGenerator",
    "StickerRequest",
    "adjust_brightness",
    "build_effect",
    "compose_sticker",
    "encode_base64",
    "load_config",
    "load_fonts",
    "render_sticker",
    "sticker_id",
]
