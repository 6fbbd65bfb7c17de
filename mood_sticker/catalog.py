"""Choices offered by the sticker editor."""

from __future__ import annotations

from typing import Dict, NamedTuple, Tuple

from .config import EFFECT_NAMES


class MoodOption(NamedTuple):
    id: str
    emoji: str
    label: str


MOODS: Tuple[MoodOption, ...] = (
    MoodOption("happy", "😊", "Happy"),
    MoodOption("sad", "😢", "Sad"),
    MoodOption("angry", "😠", "Angry"),
    MoodOption("excited", "🤩", "Excited"),
    MoodOption("calm", "😌", "Calm"),
    MoodOption("love", "😍", "Love"),
    MoodOption("cool", "😎", "Cool"),
    MoodOption("tired", "😴", "Tired"),
)

EMOJI_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "faces": (
        "😀", "😃", "😄", "😁", "😆", "😅", "😂", "🤣", "😊", "😇", "🙂", "🙃", "😉", "😌", "😍", "🥰",
        "😘", "😗", "😙", "😚", "😋", "😛", "😝", "😜", "🤪", "🤨", "🧐", "🤓", "😎", "🤩", "🥳",
    ),
    "emotions": (
        "😏", "😒", "😞", "😔", "😟", "😕", "🙁", "☹️", "😣", "😖", "😫", "😩", "🥺", "😢", "😭",
        "😤", "😠", "😡", "🤬", "🤯", "😳", "🥵", "🥶", "😱", "😨", "😰", "😥", "😓", "🤗", "🤔",
    ),
    "gestures": (
        "🤭", "🤫", "🤥", "😶", "😐", "😑", "😬", "🙄", "😯", "😦", "😧", "😮", "😲", "🥱", "😴",
        "🤤", "😪", "😵", "🤐", "🥴", "🤢", "🤮", "🤧", "😷", "🤒", "🤕", "🤑", "🤠",
    ),
}

TEXT_COLORS: Tuple[str, ...] = (
    "#000000", "#FFFFFF", "#FF0000", "#00FF00", "#0000FF", "#FFFF00",
    "#FF00FF", "#00FFFF", "#FFA500", "#800080", "#FFC0CB", "#A52A2A",
    "#808080", "#000080", "#008000", "#800000", "#FF6B6B", "#4ECDC4",
)

EFFECTS: Tuple[Tuple[str, str], ...] = tuple((name, name.capitalize()) for name in EFFECT_NAMES)
