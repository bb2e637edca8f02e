"""Tests for the parallax renderer and nebula backdrop."""

import logging

import numpy as np
import pytest

from orbital.config.theme import NebulaCloud
from orbital.core.camera import CameraPose
from orbital.graphics.primitives import new_buffer
from orbital.graphics.surface import BufferSurface
from orbital.scene.nebula import cloud_center, cloud_stops, draw_nebula
from orbital.scene.renderer import ParallaxRenderer


@pytest.fixture
def renderer(camera, clock, theme):
    return ParallaxRenderer(camera, clock, theme=theme)


class TestMount:

    def test_mount_draws_first_frame(self, renderer, surface):
        renderer.mount(surface)
        assert renderer.mounted
        assert surface.present_count == 1
        assert surface.frame.shape == (120, 160, 3)
        assert surface.frame.any()

    def test_draws_every_frame_until_unmounted(self, renderer, surface, clock):
        renderer.mount(surface)
        clock.run_frames(3)
        assert surface.present_count == 4

        renderer.unmount()
        clock.run_frames(3)
        assert surface.present_count == 4
        assert not renderer.mounted

    def test_layers_sized_to_surface(self, renderer, surface):
        renderer.mount(surface)
        assert renderer.size == (160, 120)
        assert sum(len(l.stars) for l in renderer.layers) == 280

    def test_unknown_twinkle_variant_rejected(self, camera, clock):
        with pytest.raises(ValueError):
            ParallaxRenderer(camera, clock, twinkle="disco")


class TestFallback:

    def test_unavailable_surface_shows_static_backdrop(self, renderer, clock, caplog):
        surface = BufferSurface(80, 60, available=False)
        with caplog.at_level(logging.WARNING):
            renderer.mount(surface)
        assert renderer.degraded
        assert surface.static_frame is not None
        assert surface.present_count == 0
        assert "unavailable" in caplog.text

        clock.run_frames(5)
        assert surface.present_count == 0

    def test_surface_lost_mid_run(self, renderer, surface, clock):
        renderer.mount(surface)
        surface.available = False
        clock.advance(16)
        assert renderer.degraded
        assert surface.static_frame is not None

    def test_backdrop_center_is_violet(self, renderer):
        buf = renderer.backdrop(101, 101)
        r, g, b = buf[50, 50]
        assert b > r > g


class TestDrawing:

    def test_resize_regenerates_and_redraws(self, renderer, surface):
        renderer.mount(surface)
        before = [s.x for s in renderer.layers[0].stars]

        surface.resize(320, 200)
        renderer.resize(320, 200)
        after = [s.x for s in renderer.layers[0].stars]

        assert renderer.size == (320, 200)
        assert before != after
        assert surface.present_count == 2
        assert surface.frame.shape == (200, 320, 3)

    def test_resize_to_same_size_is_noop(self, renderer, surface):
        renderer.mount(surface)
        layers = renderer.layers
        renderer.resize(160, 120)
        assert renderer.layers is layers

    def test_far_camera_culls_every_star(self, renderer, surface, camera):
        renderer.mount(surface)
        assert renderer.stars_drawn > 0
        camera.set_target(CameraPose(100000, 100000, 0, 0), smooth=False)
        renderer.draw_frame(0)
        assert renderer.stars_drawn == 0

    def test_twinkle_updates_opacity(self, renderer, surface, clock):
        renderer.mount(surface)
        clock.advance(500)
        visible = [s for l in renderer.layers for s in l.stars if s.opacity != s.base_opacity]
        assert visible

    def test_overlays_drawn_on_top(self, renderer, surface):
        calls = []

        def overlay(buffer, now_ms):
            buffer[0, 0] = (1.0, 1.0, 1.0)
            calls.append(now_ms)

        renderer.add_overlay(overlay)
        renderer.mount(surface)
        assert calls == [0.0]
        assert tuple(surface.frame[0, 0]) == (255, 255, 255)

        renderer.remove_overlay(overlay)
        renderer.draw_frame(10)
        assert calls == [0.0]

    def test_renderer_never_moves_camera(self, renderer, surface, camera, clock):
        renderer.mount(surface)
        clock.run_frames(5)
        assert camera.get_pose() == CameraPose()


class TestNebula:

    CLOUD = NebulaCloud((-200.0, -100.0), 400.0, ("#4e2a5b", "#6e4e8d"), 0.12)

    def test_stops(self):
        stops = cloud_stops(self.CLOUD)
        assert [s[0] for s in stops] == [0.0, 0.4, 0.7, 1.0]
        assert [s[2] for s in stops] == pytest.approx([0.12, 0.084, 0.036, 0.0])

    def test_center_follows_camera_slowly(self):
        at_rest = cloud_center(self.CLOUD, CameraPose(), 800, 600)
        assert at_rest == pytest.approx((200, 200))
        moved = cloud_center(self.CLOUD, CameraPose(x=1000, y=-400), 800, 600)
        assert moved == pytest.approx((150, 220))

    def test_draw_tints_buffer(self):
        buf = new_buffer(200, 150)
        draw_nebula(buf, [self.CLOUD], CameraPose())
        assert buf.any()
        assert np.all(buf <= 1.0)
