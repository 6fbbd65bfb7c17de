"""Shared test fixtures."""

import pytest
from PIL import Image, ImageFont

from mood_sticker.fonts import FontSet, load_fonts


@pytest.fixture(scope="session")
def fonts():
    """Fonts resolved the same way the pipeline resolves them by default."""
    return load_fonts()


@pytest.fixture(scope="session")
def big_font():
    """A large font so glyph stems are wide enough to have an interior."""
    return ImageFont.load_default(size=160)


@pytest.fixture(scope="session")
def letter_fonts(fonts):
    """Font set whose 'emoji' font draws plain letters at emoji size."""
    return FontSet(text=fonts.text, emoji=ImageFont.load_default(size=200), emoji_size=200)


@pytest.fixture
def white_canvas():
    return Image.new("RGBA", (512, 512), (255, 255, 255, 255))


@pytest.fixture
def black_canvas():
    return Image.new("RGBA", (512, 512), (0, 0, 0, 255))
