"""Tests for the batch generator."""

import pytest
from PIL import Image

from mood_sticker.config import GenerationConfig, StickerRequest
from mood_sticker.generator import StickerGenerator, _slugify
from mood_sticker.pipeline import compose_sticker, sticker_id


class TestSlugify:
    """Tests for _slugify."""

    def test_plain(self):
        assert _slugify("Party Time!") == "party-time"

    def test_collapses_separators(self):
        assert _slugify("a  -- b__c") == "a-b-c"

    def test_strips_accents(self):
        assert _slugify("Café") == "cafe"

    def test_emoji_only(self):
        assert _slugify("🎉🎉") == ""


class TestStickerGenerator:
    """Tests for StickerGenerator."""

    def test_writes_one_png_per_sticker(self, tmp_path):
        config = GenerationConfig(
            stickers=[
                StickerRequest(mood="happy", text="Party!", effect="glow", slug="party"),
                StickerRequest(mood="sad", text="Meh", effect="shadow"),
                StickerRequest(mood="cool"),
            ],
            output_dir="out",
        )
        generator = StickerGenerator(config, base_dir=tmp_path)
        written = generator.generate_all()

        assert generator.output_dir == (tmp_path / "out").resolve()
        assert len(written) == 3
        assert written[0].name == "party.png"
        assert written[1].name.startswith("meh-")
        assert written[2].name.startswith("chatmood-sticker-")
        for path in written:
            assert path.exists()
            with Image.open(path) as image:
                assert image.size == (512, 512)

    def test_file_matches_compose(self, tmp_path):
        request = StickerRequest(mood="love", text="Hugs", effect="rainbow")
        generator = StickerGenerator(GenerationConfig(stickers=[request]), base_dir=tmp_path)
        path = generator.generate(request)
        expected = compose_sticker(request, generator.fonts)
        assert path.read_bytes() == expected
        assert path.stem == f"hugs-{sticker_id(expected)[-12:][:8]}"

    def test_missing_font(self, tmp_path):
        config = GenerationConfig(font_path="fonts/missing.ttf")
        with pytest.raises(FileNotFoundError):
            StickerGenerator(config, base_dir=tmp_path)
