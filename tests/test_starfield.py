"""Tests for deterministic star generation and layer transforms."""

import math

import pytest

from orbital.scene.starfield import (
    DEFAULT_PALETTE,
    LAYER_SPECS,
    Star,
    TWINKLE_PROFILES,
    generate_layer,
    generate_layers,
    get_twinkle_profile,
    seeded_unit,
)


class TestSeededUnit:

    def test_range(self):
        values = [seeded_unit(l, i, s) for l in range(4) for i in range(50) for s in range(1, 7)]
        assert all(0.0 <= v < 1.0 for v in values)

    def test_deterministic(self):
        assert seeded_unit(2, 17, 3) == seeded_unit(2, 17, 3)

    def test_keys_differ(self):
        assert seeded_unit(0, 1, 2) != seeded_unit(0, 1, 3)
        assert seeded_unit(0, 1, 2) != seeded_unit(1, 1, 2)

    def test_roughly_uniform(self):
        values = [seeded_unit(0, i, 2) for i in range(1000)]
        mean = sum(values) / len(values)
        assert 0.4 < mean < 0.6


class TestGeneration:

    def test_layer_order_and_counts(self):
        layers = generate_layers(800, 600)
        assert [l.name for l in layers] == ["background", "far", "mid", "near"]
        assert [len(l.stars) for l in layers] == [60, 80, 100, 40]
        assert [l.parallax_factor for l in layers] == [0.1, 0.3, 0.7, 1.0]
        assert [l.rotation_factor for l in layers] == [0.05, 0.15, 0.4, 0.8]

    def test_regeneration_is_identical(self):
        first = generate_layers(1024, 768)
        second = generate_layers(1024, 768)
        assert [l.stars for l in first] == [l.stars for l in second]

    def test_size_change_changes_positions(self):
        small = generate_layers(400, 300)
        large = generate_layers(800, 600)
        assert small[0].stars[0].x != large[0].stars[0].x
        # Everything except position is keyed only by layer and index
        assert small[0].stars[0].size == large[0].stars[0].size

    def test_field_is_expanded_and_centered(self):
        width, height = 800, 600
        for layer in generate_layers(width, height):
            for star in layer.stars:
                assert -200 <= star.x < 1000
                assert -150 <= star.y < 750

    @pytest.mark.parametrize("index", range(len(LAYER_SPECS)))
    def test_fields_within_layer_ranges(self, index):
        spec = LAYER_SPECS[index]
        layer = generate_layer(index, spec, 640, 480)
        for star in layer.stars:
            assert spec.size_range[0] <= star.size <= spec.size_range[1]
            assert spec.opacity_range[0] <= star.base_opacity <= spec.opacity_range[1]
            assert star.opacity == star.base_opacity
            assert 0.0005 <= star.twinkle_speed < 0.0035
            assert star.color in DEFAULT_PALETTE

    def test_custom_palette(self):
        layers = generate_layers(100, 100, palette=["#ffffff"])
        assert {s.color for l in layers for s in l.stars} == {"#ffffff"}

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            generate_layer(0, LAYER_SPECS[0], 100, 100, palette=[])


class TestTransform:

    def test_identity_at_rest(self):
        layer = generate_layers(200, 100)[2]
        assert layer.transform(30, 40, 0, 0, 0, (100, 50)) == pytest.approx((30, 40))

    def test_translation_scales_with_parallax(self):
        near = generate_layers(200, 100)[3]
        background = generate_layers(200, 100)[0]
        assert near.transform(0, 0, 100, 50, 0, (100, 50)) == pytest.approx((-100, -50))
        assert background.transform(0, 0, 100, 50, 0, (100, 50)) == pytest.approx((-10, -5))

    def test_rotation_about_center(self):
        near = generate_layers(200, 200)[3]  # rotation factor 0.8
        x, y = near.transform(200, 100, 0, 0, 112.5, (100, 100))
        # 0.8 * 112.5 = 90 degrees clockwise on screen
        assert (x, y) == pytest.approx((100, 200))
        assert math.hypot(x - 100, y - 100) == pytest.approx(100)


class TestTwinkle:

    def _star(self, base):
        return Star(0, 0, 1, base, base, twinkle_speed=0.001, color="#ffffff")

    def test_profiles(self):
        assert TWINKLE_PROFILES["enhanced"].amplitude == 0.15
        assert TWINKLE_PROFILES["tranquil"].amplitude == 0.3

    def test_sinusoid_around_base(self):
        profile = get_twinkle_profile("enhanced")
        star = self._star(0.5)
        quarter = (math.pi / 2) / star.twinkle_speed
        assert profile.opacity(star, 0) == pytest.approx(0.5)
        assert profile.opacity(star, quarter) == pytest.approx(0.65)
        assert profile.opacity(star, 3 * quarter) == pytest.approx(0.35)

    def test_clamped_to_bounds(self):
        profile = get_twinkle_profile("tranquil")
        quarter = (math.pi / 2) / 0.001
        assert profile.opacity(self._star(0.9), quarter) == 1.0
        assert profile.opacity(self._star(0.2), 3 * quarter) == 0.1

    def test_unknown_profile(self):
        with pytest.raises(ValueError):
            get_twinkle_profile("sparkly")
