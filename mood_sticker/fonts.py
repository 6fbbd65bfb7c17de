from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

EMOJI_FONT_SIZE = 200
TEXT_FONT_SIZE = 48

# Color bitmap fonts only load at one of their native strikes.
BITMAP_EMOJI_STRIKES = (109, 160)

BOLD_FONT_CANDIDATES: Sequence[Path] = (
    Path("C:/Windows/Fonts/arialbd.ttf"),
    Path("C:/Windows/Fonts/segoeuib.ttf"),
    Path("/System/Library/Fonts/Supplemental/Arial Bold.ttf"),
    Path("/Library/Fonts/Arial Bold.ttf"),
    Path("/usr/share/fonts/truetype/roboto/unhinted/RobotoTTF/Roboto-Bold.ttf"),
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    Path("/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf"),
)

EMOJI_FONT_CANDIDATES: Sequence[Path] = (
    Path("C:/Windows/Fonts/seguiemj.ttf"),
    Path("/System/Library/Fonts/Apple Color Emoji.ttc"),
    Path("/usr/share/fonts/truetype/noto/NotoColorEmoji.ttf"),
    Path("/usr/share/fonts/noto/NotoColorEmoji.ttf"),
    Path("/usr/share/fonts/google-noto-emoji/NotoColorEmoji.ttf"),
)


@dataclass(frozen=True, slots=True)
class FontSet:
    """Fonts used by one composition, plus the emoji scale they need."""

    text: Font
    emoji: Font
    emoji_size: int

    @property
    def emoji_scale(self) -> float:
        return EMOJI_FONT_SIZE / self.emoji_size


def _first_existing(candidates: Sequence[Path]) -> Optional[Path]:
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _default_font(size: int) -> Font:
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _load_text_font(path: Optional[Path]) -> Font:
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=TEXT_FONT_SIZE)
        except OSError as exc:
            raise RuntimeError(f"Failed to load font '{path}': {exc}") from exc
    found = _first_existing(BOLD_FONT_CANDIDATES)
    if found is not None:
        logger.debug("Using caption font %s", found)
        return ImageFont.truetype(str(found), size=TEXT_FONT_SIZE)
    logger.warning("No bold TrueType font found, falling back to Pillow's default font")
    return _default_font(TEXT_FONT_SIZE)


def _open_emoji_font(path: Path) -> tuple[Font, int]:
    error: Optional[OSError] = None
    for size in (EMOJI_FONT_SIZE, *BITMAP_EMOJI_STRIKES):
        try:
            return ImageFont.truetype(str(path), size=size), size
        except OSError as exc:
            error = exc
    raise OSError(f"no usable size for {path}") from error


@lru_cache(maxsize=16)
def _load_emoji_font(path: Optional[Path]) -> tuple[Font, int]:
    if path is not None:
        try:
            return _open_emoji_font(path)
        except OSError as exc:
            raise RuntimeError(f"Failed to load emoji font '{path}': {exc}") from exc
    found = _first_existing(EMOJI_FONT_CANDIDATES)
    if found is not None:
        try:
            logger.debug("Using emoji font %s", found)
            return _open_emoji_font(found)
        except OSError as exc:
            logger.warning("Could not open emoji font %s: %s", found, exc)
    logger.warning("No emoji font found, falling back to Pillow's default font")
    return _default_font(EMOJI_FONT_SIZE), EMOJI_FONT_SIZE


def load_fonts(
    font_path: Optional[Path | str] = None,
    emoji_font_path: Optional[Path | str] = None,
) -> FontSet:
    """Resolve the caption and emoji fonts, preferring explicit paths.

    Loaded fonts are cached per path and only read afterwards, so one
    ``FontSet`` can serve any number of compositions.
    """
    text_path = Path(font_path) if font_path else None
    emoji_path = Path(emoji_font_path) if emoji_font_path else None
    if text_path is not None and not text_path.exists():
        raise FileNotFoundError(f"Font not found: {text_path}")
    if emoji_path is not None and not emoji_path.exists():
        raise FileNotFoundError(f"Emoji font not found: {emoji_path}")
    emoji_font, emoji_size = _load_emoji_font(emoji_path)
    return FontSet(text=_load_text_font(text_path), emoji=emoji_font, emoji_size=emoji_size)
