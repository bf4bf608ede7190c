"""Tests for the frame renderer.

Tests cover:
- Buffer shape, dtype and row order
- Quantization: clamping, truncation and NaN policy
- Determinism and read-only rendering
- The orbit scene's sky and center pixels
- Parameter validation
"""

import math

import numpy as np
import pytest

SKY_PIXEL = (51, 76, 127)


def _ground_only_scene():
    from orbitrace.materials.material import Material
    from orbitrace.scene.scene import Scene

    scene = Scene(max_spheres=1, max_planes=1)
    scene.add_plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), Material((0.5, 0.5, 0.5)))
    scene.set_light((0.0, 10.0, 0.0))
    return scene


class TestRenderSettings:
    """Tests for RenderSettings."""

    def test_defaults(self):
        """Test the default configuration."""
        from orbitrace.core.renderer import RenderSettings

        settings = RenderSettings()
        assert (settings.width, settings.height) == (800, 600)
        assert settings.fov_degrees == 90.0
        assert settings.max_depth == 5
        assert settings.time_step == 0.02
        settings.validate()

    @pytest.mark.parametrize(
        "overrides",
        [{"width": 0}, {"height": -5}, {"width": 100000}, {"max_depth": -1}, {"fov_degrees": 0.0}],
    )
    def test_validate_rejects(self, overrides):
        """Test out-of-range settings."""
        from orbitrace.core.renderer import RenderSettings

        with pytest.raises(ValueError):
            RenderSettings(**overrides).validate()


class TestQuantizeColor:
    """Tests for the Python quantization helper."""

    def test_truncates(self):
        """Test int(c * 255) truncation."""
        from orbitrace.core.renderer import quantize_color

        assert quantize_color((0.5, 0.25, 1.0)) == (127, 63, 255)
        assert quantize_color((0.2, 0.3, 0.5)) == SKY_PIXEL

    def test_clamps(self):
        """Test values outside [0, 1] are clamped."""
        from orbitrace.core.renderer import quantize_color

        assert quantize_color((-0.5, 1.5, 100.0)) == (0, 255, 255)

    def test_nan_becomes_zero(self):
        """Test NaN channels map to 0."""
        from orbitrace.core.renderer import quantize_color

        assert quantize_color((math.nan, 0.5, math.nan)) == (0, 127, 0)


class TestFrameRenderer:
    """Tests for FrameRenderer and render_frame."""

    def test_shape_and_dtype(self, orbit_scene):
        """Test the buffer is (height, width, 3) uint8."""
        from orbitrace.core.renderer import render_frame

        frame = render_frame(orbit_scene, 40, 30, fov_degrees=90.0, max_depth=2)
        assert frame.shape == (30, 40, 3)
        assert frame.dtype == np.uint8

    def test_single_pixel_matte(self, matte_scene):
        """Test a 1x1 frame looks straight ahead at the lit wall."""
        from orbitrace.core.renderer import render_frame

        frame = render_frame(matte_scene, 1, 1, fov_degrees=90.0, max_depth=5)
        assert tuple(frame[0, 0]) == (127, 63, 255)

    def test_negative_and_overbright_channels_clamped(self):
        """Test the pixel write clamps channels to [0, 255]."""
        from orbitrace.core.renderer import render_frame
        from orbitrace.materials.material import Material
        from orbitrace.scene.scene import Scene

        scene = Scene(max_spheres=1, max_planes=1, camera_position=(0.0, 0.0, 0.0))
        scene.add_plane((0.0, 0.0, -5.0), (0.0, 0.0, 1.0), Material((-1.0, 0.5, 2.0)))
        scene.set_light((0.0, 0.0, 10.0))

        frame = render_frame(scene, 1, 1, fov_degrees=90.0, max_depth=1)
        assert tuple(frame[0, 0]) == (0, 127, 255)

    def test_depth_zero_is_black(self, orbit_scene):
        """Test max_depth 0 renders an all-black frame."""
        from orbitrace.core.renderer import render_frame

        frame = render_frame(orbit_scene, 16, 12, max_depth=0)
        assert not frame.any()

    def test_top_row_first(self):
        """Test row 0 is the top of the image."""
        from orbitrace.core.renderer import render_frame

        frame = render_frame(_ground_only_scene(), 1, 2, fov_degrees=90.0, max_depth=1)
        assert tuple(frame[0, 0]) == SKY_PIXEL
        assert tuple(frame[1, 0]) != SKY_PIXEL

    def test_deterministic_across_scenes(self):
        """Test two identical scenes at the same time render identically."""
        from orbitrace.core.renderer import render_frame
        from orbitrace.scene.layout import create_orbit_scene

        first = create_orbit_scene()
        second = create_orbit_scene()
        first.set_time(0.42)
        second.set_time(0.42)

        frame_a = render_frame(first, 64, 48)
        frame_b = render_frame(second, 64, 48)
        assert np.array_equal(frame_a, frame_b)

    def test_render_does_not_modify_scene(self, orbit_scene):
        """Test rendering leaves time and positions untouched."""
        from orbitrace.core.renderer import render_frame

        orbit_scene.set_time(0.3)
        before = [orbit_scene.get_sphere_center(s) for s in range(112)]
        light = orbit_scene.get_light_position()

        first = render_frame(orbit_scene, 32, 24)
        second = render_frame(orbit_scene, 32, 24)

        assert orbit_scene.time == 0.3
        assert [orbit_scene.get_sphere_center(s) for s in range(112)] == before
        assert orbit_scene.get_light_position() == light
        assert np.array_equal(first, second)

    def test_returned_buffers_are_independent(self, matte_scene):
        """Test each call returns a fresh array."""
        from orbitrace.core.renderer import render_frame

        first = render_frame(matte_scene, 2, 2)
        first[:] = 0
        second = render_frame(matte_scene, 2, 2)
        assert second.any()

    def test_get_renderer_reuses_instances(self):
        """Test one FrameRenderer per frame size."""
        from orbitrace.core.renderer import get_renderer

        assert get_renderer(10, 10) is get_renderer(10, 10)
        assert get_renderer(10, 10) is not get_renderer(10, 11)

    def test_invalid_dimensions_raise(self):
        """Test non-positive and oversized frames are rejected."""
        from orbitrace.core.renderer import MAX_IMAGE_WIDTH, FrameRenderer

        with pytest.raises(ValueError, match="positive"):
            FrameRenderer(0, 10)
        with pytest.raises(ValueError, match="exceed"):
            FrameRenderer(MAX_IMAGE_WIDTH + 1, 10)

    def test_invalid_depth_and_fov_raise(self, matte_scene):
        """Test render parameters are validated."""
        from orbitrace.core.renderer import render_frame

        with pytest.raises(ValueError, match="depth"):
            render_frame(matte_scene, 4, 4, max_depth=-1)
        with pytest.raises(ValueError, match="Field of view"):
            render_frame(matte_scene, 4, 4, fov_degrees=180.0)


class TestOrbitSceneFrame:
    """End-to-end checks on the orbit scene at the default resolution."""

    def test_top_corners_show_sky(self, orbit_scene):
        """Test upward rays escape to the sky color."""
        from orbitrace.core.renderer import render_frame

        orbit_scene.set_time(0.0)
        frame = render_frame(orbit_scene, 80, 60)
        assert tuple(frame[0, 0]) == SKY_PIXEL
        assert tuple(frame[0, 79]) == SKY_PIXEL

    def test_center_pixel_hits_geometry(self, orbit_scene):
        """Test the center pixel of an 800x600 frame is not sky."""
        from orbitrace.core.renderer import render_frame

        orbit_scene.set_time(0.0)
        frame = render_frame(orbit_scene, 800, 600, fov_degrees=90.0, max_depth=5)
        assert frame.shape == (600, 800, 3)
        assert tuple(frame[300, 400]) != SKY_PIXEL

    def test_frame_has_varied_content(self, orbit_scene):
        """Test the frame contains sky, shaded geometry and colors."""
        from orbitrace.core.renderer import render_frame

        orbit_scene.advance(0.02)
        frame = render_frame(orbit_scene, 160, 120)
        pixels = {tuple(p) for p in frame.reshape(-1, 3)}
        assert SKY_PIXEL in pixels
        assert len(pixels) > 50
