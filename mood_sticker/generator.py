from __future__ import annotations

import logging
import unicodedata
from pathlib import Path
from typing import List, Optional

from .config import GenerationConfig, StickerRequest
from .fonts import FontSet, load_fonts
from .pipeline import compose_sticker, sticker_id

logger = logging.getLogger(__name__)


def _slugify(source: str) -> str:
    normalized = unicodedata.normalize("NFKD", source)
    ascii_only = []
    for char in normalized:
        if char.isascii() and char.isalnum():
            ascii_only.append(char.lower())
        elif char in (" ", "-", "_"):
            ascii_only.append("-")
    slug = "".join(ascii_only)
    while "--" in slug:
        slug = slug.replace("--", "-")
    return slug.strip("-_ ")


class StickerGenerator:
    """Writes one PNG per configured sticker into the output directory."""

    def __init__(self, config: GenerationConfig, base_dir: Optional[Path] = None) -> None:
        self.config = config
        self.base_dir = Path(base_dir or Path.cwd())
        self.output_dir = (self.base_dir / self.config.output_dir).resolve()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.fonts: FontSet = load_fonts(
            self._resolve_path(config.font_path) if config.font_path else None,
            self._resolve_path(config.emoji_font_path) if config.emoji_font_path else None,
        )

    def generate_all(self) -> List[Path]:
        written: List[Path] = []
        for request in self.config.stickers:
            written.append(self.generate(request))
        return written

    def generate(self, request: StickerRequest) -> Path:
        png = compose_sticker(request, self.fonts)
        output_path = self.output_dir / f"{self._ensure_slug(request, png)}.png"
        output_path.write_bytes(png)
        logger.info("Wrote %s (%d bytes)", output_path, len(png))
        return output_path

    def _ensure_slug(self, request: StickerRequest, png: bytes) -> str:
        if request.slug:
            slug = _slugify(request.slug)
            if slug:
                return slug
        identifier = sticker_id(png)
        derived = _slugify(request.text)
        if derived:
            return f"{derived}-{identifier.rsplit('-', 1)[-1][:8]}"
        return identifier

    def _resolve_path(self, maybe_path: Optional[str | Path]) -> Path:
        if maybe_path is None:
            raise ValueError("Expected a path but received None")
        path = Path(maybe_path)
        if not path.is_absolute():
            path = (self.base_dir / path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Asset not found: {path}")
        return path
