from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .colors import parse_hex_color
from .errors import InvalidRequest

CANVAS_SIZE: Tuple[int, int] = (512, 512)
MAX_TEXT_LENGTH = 20
DEFAULT_EMOJI = "\U0001F60A"
DEFAULT_TEXT_COLOR = "#000000"
EFFECT_NAMES: Tuple[str, ...] = ("none", "shadow", "glow", "outline", "gradient", "rainbow")


def _as_str(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, (str, int, float)):
        raise InvalidRequest(f"{key} must be a string, got {type(value).__name__}")
    return str(value)


@dataclass(frozen=True, slots=True)
class StickerRequest:
    mood: str = "happy"
    emoji: str = DEFAULT_EMOJI
    text: str = ""
    text_color: str = DEFAULT_TEXT_COLOR
    effect: str = "none"
    slug: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "StickerRequest":
        """Validate an untrusted mapping the way the editor boundary does.

        Text longer than ``MAX_TEXT_LENGTH`` characters is rejected rather than
        cut. Unknown moods are kept: the renderer falls back to the default
        background color for them.
        """
        if not isinstance(raw, dict):
            raise InvalidRequest("sticker entry must be a mapping")
        data = dict(raw)
        text = _as_str(data, "text", "")
        if len(text) > MAX_TEXT_LENGTH:
            raise InvalidRequest(f"text must be at most {MAX_TEXT_LENGTH} characters, got {len(text)}")
        effect = _as_str(data, "effect", "none").lower()
        if effect not in EFFECT_NAMES:
            raise InvalidRequest(f"Unsupported effect: {effect}")
        text_color = _as_str(data, "text_color", data.get("textColor") or DEFAULT_TEXT_COLOR)
        parse_hex_color(text_color)
        emoji = _as_str(data, "emoji", DEFAULT_EMOJI) or DEFAULT_EMOJI
        slug = data.get("slug")
        return cls(
            mood=_as_str(data, "mood", "happy").lower(),
            emoji=emoji,
            text=text,
            text_color=text_color,
            effect=effect,
            slug=str(slug) if slug is not None else None,
        )


@dataclass(slots=True)
class GenerationConfig:
    stickers: List[StickerRequest] = field(default_factory=list)
    output_dir: Path = Path("build/stickers")
    font_path: Optional[Path] = None
    emoji_font_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if isinstance(self.output_dir, (str, Path)):
            self.output_dir = Path(self.output_dir)
        if isinstance(self.font_path, str):
            self.font_path = Path(self.font_path)
        if isinstance(self.emoji_font_path, str):
            self.emoji_font_path = Path(self.emoji_font_path)


def _load_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("YAML support requires installing PyYAML") from exc
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    if not isinstance(loaded, dict):
        raise ValueError("YAML configuration must be a mapping at the top level")
    return loaded


def load_config(path: Path | str) -> Tuple[GenerationConfig, Path]:
    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"Config file not found: {path_obj}")
    suffix = path_obj.suffix.lower()
    if suffix == ".json":
        raw_config = _load_json(path_obj)
    elif suffix in (".yaml", ".yml"):
        raw_config = _load_yaml(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping at the top level")
    if "stickers" not in raw_config or not isinstance(raw_config["stickers"], list):
        raise ValueError("Config must define a list named 'stickers'")

    unknown = set(raw_config) - {"stickers", "output_dir", "font_path", "emoji_font_path"}
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    stickers = [StickerRequest.from_dict(entry) for entry in raw_config["stickers"]]
    cfg_kwargs: Dict[str, Any] = {key: value for key, value in raw_config.items() if key != "stickers"}
    cfg_kwargs["stickers"] = stickers
    config = GenerationConfig(**cfg_kwargs)
    return config, path_obj.parent.resolve()
