from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mood_sticker.catalog import EFFECTS, EMOJI_CATEGORIES, MOODS, TEXT_COLORS
from mood_sticker.config import DEFAULT_EMOJI, DEFAULT_TEXT_COLOR, StickerRequest, load_config
from mood_sticker.errors import StickerError
from mood_sticker.fonts import load_fonts
from mood_sticker.generator import StickerGenerator
from mood_sticker.pipeline import compose_sticker, encode_base64, sticker_id


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compose mood stickers from a config file or from flags.")
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to a sticker batch configuration (JSON or YAML). Omit to compose one sticker from flags.",
    )
    parser.add_argument("--font", dest="font", help="Override the bold caption font.")
    parser.add_argument("--emoji-font", dest="emoji_font", help="Override the emoji font.")
    parser.add_argument(
        "--output",
        dest="output",
        help="Output directory in batch mode, output PNG file in single-sticker mode.",
    )
    parser.add_argument("--mood", default="happy", help="Mood driving the background color.")
    parser.add_argument("--emoji", default=DEFAULT_EMOJI, help="Emoji drawn in the middle of the sticker.")
    parser.add_argument("--text", default="", help="Caption, at most 20 characters.")
    parser.add_argument("--color", default=DEFAULT_TEXT_COLOR, help="Caption color as #RRGGBB.")
    parser.add_argument("--effect", default="none", help="Caption effect.")
    parser.add_argument(
        "--base64",
        action="store_true",
        help="Print the single sticker as base64 instead of writing a file.",
    )
    parser.add_argument("--list-options", action="store_true", help="Print the available moods, emoji, colors and effects.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _print_options() -> None:
    print("Moods:")
    for mood in MOODS:
        print(f"  {mood.id:<8} {mood.emoji}  {mood.label}")
    print("Effects: " + ", ".join(effect_id for effect_id, _ in EFFECTS))
    print("Text colors: " + " ".join(TEXT_COLORS))
    for category, emoji in EMOJI_CATEGORIES.items():
        print(f"Emoji ({category}): " + " ".join(emoji))


def _run_batch(args: argparse.Namespace) -> int:
    config, base_dir = load_config(args.config)
    if args.font:
        config.font_path = Path(args.font)
    if args.emoji_font:
        config.emoji_font_path = Path(args.emoji_font)
    if args.output:
        config.output_dir = Path(args.output)

    generator = StickerGenerator(config, base_dir=base_dir)
    generator.generate_all()
    print(f"Generated {len(config.stickers)} stickers in '{generator.output_dir}'")
    return 0


def _run_single(args: argparse.Namespace) -> int:
    request = StickerRequest.from_dict(
        {
            "mood": args.mood,
            "emoji": args.emoji,
            "text": args.text,
            "text_color": args.color,
            "effect": args.effect,
        }
    )
    png = compose_sticker(request, load_fonts(args.font, args.emoji_font))
    identifier = sticker_id(png)
    if args.base64:
        print(encode_base64(png))
        return 0
    output = Path(args.output) if args.output else Path(f"{identifier}.png")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(png)
    print(f"Generated sticker {identifier} in '{output}'")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_options:
        _print_options()
        return 0

    try:
        if args.config:
            return _run_batch(args)
        return _run_single(args)
    except StickerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
