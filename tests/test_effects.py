"""Tests for the caption effects."""

import pytest
from PIL import Image, ImageChops, ImageFilter

from mood_sticker.colors import RAINBOW_PALETTE, adjust_brightness
from mood_sticker.effects import (
    GlowEffect,
    GradientEffect,
    NoEffect,
    OutlineEffect,
    RainbowEffect,
    ShadowEffect,
    build_effect,
    text_mask,
)
from mood_sticker.errors import InvalidColorFormat, InvalidRequest
from mood_sticker.pipeline import CAPTION_ANCHOR, draw_caption


def changed_bbox(before, after):
    return ImageChops.difference(before.convert("RGB"), after.convert("RGB")).getbbox()


def render(effect, canvas, text, font, anchor=CAPTION_ANCHOR):
    effect.render(canvas, text, font, anchor)
    return canvas


class TestBuildEffect:
    """Tests for build_effect."""

    def test_none(self):
        assert build_effect("none", "#FF0000") == NoEffect("#ff0000")

    def test_shadow(self):
        effect = build_effect("shadow", "#123456")
        assert isinstance(effect, ShadowEffect)
        assert effect.offset == (3, 3)
        assert effect.opacity == 0.5

    def test_glow(self):
        effect = build_effect("glow", "#00FF00")
        assert effect == GlowEffect("#00ff00", 10)

    def test_outline_is_darkened(self):
        effect = build_effect("outline", "#808080")
        assert effect == OutlineEffect(adjust_brightness("#808080", -40), 4)
        assert effect.color == "#585858"

    def test_gradient_stops(self):
        effect = build_effect("gradient", "#FFFFFF")
        assert effect == GradientEffect("#ffffff", "#e1e1e1")

    def test_rainbow_carries_no_color(self):
        effect = build_effect("rainbow", "#FFFFFF")
        assert isinstance(effect, RainbowEffect)
        assert not hasattr(effect, "color")

    def test_unknown_effect(self):
        with pytest.raises(InvalidRequest):
            build_effect("sparkle", "#000000")

    @pytest.mark.parametrize("name", ["none", "rainbow", "outline"])
    def test_color_is_validated_for_every_effect(self, name):
        with pytest.raises(InvalidColorFormat):
            build_effect(name, "#XYZXYZ")


class TestRainbowLayout:
    """Tests for the per-character rainbow placement."""

    def test_two_characters(self, fonts):
        placements = RainbowEffect().layout("AB", fonts.text, (256, 400))
        assert [char for char, _, _ in placements] == ["A", "B"]
        assert [color for _, _, color in placements] == list(RAINBOW_PALETTE[:2])
        (x0, y0), (x1, y1) = placements[0][1], placements[1][1]
        assert y0 == y1 == 400
        assert x0 < 256 < x1
        assert (x0 + x1) / 2 == pytest.approx(256)

    def test_even_slots(self, fonts):
        placements = RainbowEffect().layout("Hello", fonts.text, (256, 400))
        xs = [xy[0] for _, xy, _ in placements]
        steps = {round(b - a, 6) for a, b in zip(xs, xs[1:])}
        assert len(steps) == 1
        total = fonts.text.getlength("Hello")
        assert xs[0] == pytest.approx(256 - total / 2 + total / 10)

    def test_color_cycle_repeats(self, fonts):
        placements = RainbowEffect().layout("ABCDEFGHI", fonts.text, (256, 400))
        colors = [color for _, _, color in placements]
        assert colors[7] == RAINBOW_PALETTE[0]
        assert colors[8] == RAINBOW_PALETTE[1]

    def test_iterates_code_points(self, fonts):
        placements = RainbowEffect().layout("héllo", fonts.text, (256, 400))
        assert len(placements) == 5

    def test_colors_sit_on_their_side(self, fonts, white_canvas):
        canvas = render(RainbowEffect(), white_canvas, "AB", fonts.text)
        left_red = left_orange = right_red = right_orange = 0
        for y in range(340, 460):
            for x in range(160, 352):
                r, g, b, _ = canvas.getpixel((x, y))
                red = r > 200 and g < 60 and b < 60
                orange = r > 200 and 90 < g < 170 and b < 60
                if x <= 250:
                    left_red += red
                    left_orange += orange
                elif x >= 262:
                    right_red += red
                    right_orange += orange
        assert left_red > 0
        assert right_orange > 0
        assert right_red == 0
        assert left_orange == 0


class TestEffectRendering:
    """Pixel-level checks of each effect."""

    def test_none_draws_near_anchor(self, fonts, white_canvas):
        before = white_canvas.copy()
        bbox = changed_bbox(before, render(NoEffect("#000000"), white_canvas, "Hi", fonts.text))
        assert bbox is not None
        left, top, right, bottom = bbox
        assert top > 340 and bottom < 460
        assert left < 256 < right

    def test_shadow_extends_down_right(self, fonts, white_canvas):
        plain = changed_bbox(white_canvas, render(NoEffect("#ff0000"), white_canvas.copy(), "Hi", fonts.text))
        shadowed = changed_bbox(white_canvas, render(ShadowEffect("#ff0000"), white_canvas.copy(), "Hi", fonts.text))
        assert shadowed[0] == plain[0]
        assert shadowed[1] == plain[1]
        assert shadowed[2] > plain[2]
        assert shadowed[3] > plain[3]

    def test_glow_halo_surrounds_text(self, fonts, white_canvas):
        plain = changed_bbox(white_canvas, render(NoEffect("#0000ff"), white_canvas.copy(), "Hi", fonts.text))
        glowing = changed_bbox(white_canvas, render(GlowEffect("#0000ff"), white_canvas.copy(), "Hi", fonts.text))
        assert glowing[0] < plain[0]
        assert glowing[1] < plain[1]
        assert glowing[2] > plain[2]
        assert glowing[3] > plain[3]

    def test_glow_does_not_leak_into_later_draws(self, fonts, white_canvas):
        """A plain draw after a glow matches a plain draw on the same base."""
        glowing = render(GlowEffect("#0000ff"), white_canvas.copy(), "Hi", fonts.text)
        expected = render(NoEffect("#000000"), glowing.copy(), "Yo", fonts.text, (256, 100))
        baseline = render(NoEffect("#000000"), white_canvas.copy(), "Yo", fonts.text, (256, 100))
        assert ImageChops.difference(expected.crop((0, 0, 512, 200)), baseline.crop((0, 0, 512, 200))).getbbox() is None

    def test_outline_leaves_interior_untouched(self, big_font, white_canvas):
        canvas = render(OutlineEffect("#ff0000"), white_canvas, "I", big_font, (256, 256))
        core = text_mask(canvas.size, "I", big_font, (256, 256)).filter(ImageFilter.MinFilter(9))
        interior = [(x, y) for y in range(512) for x in range(512) if core.getpixel((x, y)) == 255]
        assert interior
        assert all(canvas.getpixel(point) == (255, 255, 255, 255) for point in interior)
        assert any(canvas.getpixel((x, y)) == (255, 0, 0, 255) for y in range(512) for x in range(200, 312))

    def test_gradient_runs_top_to_bottom(self, big_font, white_canvas):
        canvas = render(GradientEffect("#ff0000", "#0000ff"), white_canvas, "I", big_font, (256, 256))
        mask = text_mask(canvas.size, "I", big_font, (256, 256))
        _, top, _, bottom = mask.getbbox()
        solid = [(x, y) for y in (top + 4, bottom - 5) for x in range(512) if mask.getpixel((x, y)) == 255]
        upper = [canvas.getpixel(p) for p in solid if p[1] == top + 4]
        lower = [canvas.getpixel(p) for p in solid if p[1] == bottom - 5]
        assert upper and lower
        assert all(r > b for r, _, b, _ in upper)
        assert all(b > r for r, _, b, _ in lower)

    def test_gradient_band_is_one_font_size_around_anchor(self):
        assert GradientEffect("#ff0000", "#0000ff").band(CAPTION_ANCHOR) == (376, 424)

    def test_gradient_is_solid_outside_band(self, big_font, white_canvas):
        canvas = render(GradientEffect("#ff0000", "#0000ff"), white_canvas, "I", big_font)
        mask = text_mask(canvas.size, "I", big_font, CAPTION_ANCHOR)
        _, top, _, bottom = mask.getbbox()
        assert top < 376 and bottom > 424

        def solid(rows):
            return [canvas.getpixel((x, y)) for y in rows for x in range(512) if mask.getpixel((x, y)) == 255]

        above, middle, below = solid(range(top, 376)), solid([400]), solid(range(424, bottom))
        assert above and middle and below
        assert all(pixel == (255, 0, 0, 255) for pixel in above)
        assert all(pixel == (0, 0, 255, 255) for pixel in below)
        assert all(60 < r < 200 and 60 < b < 200 for r, _, b, _ in middle)

    def test_lowercase_caption_starts_inside_band(self, fonts, white_canvas):
        """Short glyphs begin below the band top, so their top rows are already shaded."""
        canvas = render(GradientEffect("#808080", "#626262"), white_canvas, "ace", fonts.text)
        mask = text_mask(canvas.size, "ace", fonts.text, CAPTION_ANCHOR)
        solid = [(x, y) for y in range(512) for x in range(512) if mask.getpixel((x, y)) == 255]
        first_row = min(y for _, y in solid)
        assert first_row > 376
        assert all(canvas.getpixel((x, y))[0] < 0x80 for x, y in solid if y == first_row)

    def test_translucent_fill_blends(self, fonts, black_canvas):
        """Shadow copies blend with the canvas instead of punching holes in it."""
        canvas = render(ShadowEffect("#ffffff"), black_canvas, "Hi", fonts.text)
        assert canvas.getextrema()[3] == (255, 255)


class TestDrawCaption:
    """Tests for the caption stage."""

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_text_is_a_no_op(self, fonts, white_canvas, text):
        before = white_canvas.copy()
        result = draw_caption(white_canvas, text, GlowEffect("#ff0000"), fonts)
        assert result is white_canvas
        assert ImageChops.difference(before, result).getbbox() is None

    def test_text_is_trimmed(self, fonts, white_canvas):
        padded = draw_caption(white_canvas.copy(), "  Hi  ", NoEffect("#000000"), fonts)
        trimmed = draw_caption(white_canvas.copy(), "Hi", NoEffect("#000000"), fonts)
        assert ImageChops.difference(padded, trimmed).getbbox() is None

    def test_returns_same_canvas(self, fonts, white_canvas):
        assert draw_caption(white_canvas, "Hi", NoEffect("#000000"), fonts) is white_canvas
