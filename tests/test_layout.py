"""Tests for the procedural orbit scene layout.

Tests cover:
- Primitive counts and index ranges
- Large, medium and small sphere placement and materials
- hue_to_rgb color wheel
- Ground plane, light and camera defaults
- Parameter validation
"""

import math

import pytest


def _close(a, b, tol=1e-5):
    return all(abs(x - y) < tol for x, y in zip(a, b))


class TestHueToRgb:
    """Tests for hue_to_rgb."""

    @pytest.mark.parametrize(
        ("hue", "expected"),
        [
            (0.0, (1.0, 0.0, 0.0)),
            (1.0 / 6.0, (1.0, 1.0, 0.0)),
            (1.0 / 3.0, (0.0, 1.0, 0.0)),
            (0.5, (0.0, 1.0, 1.0)),
            (2.0 / 3.0, (0.0, 0.0, 1.0)),
            (5.0 / 6.0, (1.0, 0.0, 1.0)),
        ],
    )
    def test_key_hues(self, hue, expected):
        """Test the piecewise-linear formula at its breakpoints."""
        from orbitrace.scene.layout import hue_to_rgb

        assert _close(hue_to_rgb(hue), expected, 1e-9)

    def test_channels_clamped(self):
        """Test every channel stays in [0, 1] across the wheel."""
        from orbitrace.scene.layout import hue_to_rgb

        for i in range(100):
            rgb = hue_to_rgb(i / 100.0)
            assert all(0.0 <= c <= 1.0 for c in rgb)

    def test_medium_sphere_hue(self):
        """Test hue 0.1 (second medium sphere)."""
        from orbitrace.scene.layout import hue_to_rgb

        # r = |0.6 - 3| - 1 = 1.4 -> 1, g = 2 - |0.6 - 2| = 0.6, b = 2 - 3.4 -> 0
        assert _close(hue_to_rgb(0.1), (1.0, 0.6, 0.0), 1e-9)


class TestOrbitSceneCounts:
    """Tests for the overall structure of the orbit scene."""

    def test_counts(self, orbit_scene):
        """Test 112 spheres, 1 plane and one material per primitive."""
        assert orbit_scene.get_sphere_count() == 112
        assert orbit_scene.get_plane_count() == 1
        assert orbit_scene.get_material_count() == 113

    def test_params_sphere_count(self):
        """Test the derived sphere count."""
        from orbitrace.scene.layout import OrbitSceneParams

        assert OrbitSceneParams().sphere_count == 112
        assert OrbitSceneParams(medium_count=4, small_count=8, layer_count=2).sphere_count == 14

    def test_custom_counts(self):
        """Test a smaller layout."""
        from orbitrace.scene.layout import OrbitSceneParams, create_orbit_scene

        scene = create_orbit_scene(OrbitSceneParams(medium_count=3, small_count=8, layer_count=2))
        assert scene.get_sphere_count() == 13

    def test_indivisible_small_count_raises(self):
        """Test small spheres must split evenly across layers."""
        from orbitrace.scene.layout import OrbitSceneParams, create_orbit_scene

        with pytest.raises(ValueError, match="divisible"):
            create_orbit_scene(OrbitSceneParams(small_count=10, layer_count=4))

    def test_negative_count_raises(self):
        """Test negative counts are rejected."""
        from orbitrace.scene.layout import OrbitSceneParams, create_orbit_scene

        with pytest.raises(ValueError, match="Invalid"):
            create_orbit_scene(OrbitSceneParams(medium_count=-1))


class TestOrbitSceneSpheres:
    """Tests for individual spheres of the orbit scene."""

    def test_large_spheres(self, orbit_scene):
        """Test the two large spheres."""
        from orbitrace.materials.material import Material

        assert _close(orbit_scene.get_sphere_center(0), (-1.0, 0.0, -3.0))
        assert _close(orbit_scene.get_sphere_center(1), (1.0, 0.0, -3.0))
        assert orbit_scene.get_sphere_radius(0) == 1.0
        assert orbit_scene.get_sphere_material(0) == Material((0.8, 0.8, 0.8), 0.9, 0.1)
        assert orbit_scene.get_sphere_material(1) == Material((0.8, 0.6, 0.2), 0.7, 0.3)

    def test_medium_spheres(self, orbit_scene):
        """Test medium sphere ring placement and material ramp."""
        from orbitrace.scene.layout import hue_to_rgb

        for i in range(10):
            angle = 2.0 * math.pi * i / 10
            expected = (2.5 * math.cos(angle), 0.0, -3.0 + 2.5 * math.sin(angle))
            assert _close(orbit_scene.get_sphere_center(2 + i), expected)
            assert abs(orbit_scene.get_sphere_radius(2 + i) - 0.25) < 1e-7

            material = orbit_scene.get_sphere_material(2 + i)
            assert material.color == hue_to_rgb(i / 10)
            assert abs(material.metallic - (0.3 + 0.6 * i / 10)) < 1e-12
            assert abs(material.roughness - (0.1 + 0.4 * i / 10)) < 1e-12

    def test_small_spheres(self, orbit_scene):
        """Test small sphere rings: radius, height and rotation per layer."""
        for layer in range(4):
            for i in (0, 7, 24):
                s = 12 + 25 * layer + i
                angle = 2.0 * math.pi * i / 25 + layer * math.pi / 4
                ring = 3.5 + 0.8 * layer
                expected = (
                    ring * math.cos(angle),
                    -0.5 + 0.4 * layer,
                    -3.0 + ring * math.sin(angle),
                )
                assert _close(orbit_scene.get_sphere_center(s), expected)
                assert abs(orbit_scene.get_sphere_radius(s) - 0.2) < 1e-7

    def test_small_sphere_materials(self, orbit_scene):
        """Test metallic, roughness and hue use the global sphere index."""
        from orbitrace.scene.layout import hue_to_rgb

        layer, i = 2, 5
        s = 12 + 25 * layer + i
        angle = 2.0 * math.pi * i / 25 + layer * math.pi / 4
        material = orbit_scene.get_sphere_material(s)
        assert abs(material.metallic - (0.3 + 0.6 * s / 100)) < 1e-12
        assert abs(material.roughness - (0.1 + 0.3 * (math.sin(angle) * 0.5 + 0.5))) < 1e-12
        assert material.color == hue_to_rgb((s / 100 + layer * 0.25) % 1.0)

    def test_every_sphere_is_reflective(self, orbit_scene):
        """Test all sphere materials have metallic > 0."""
        for s in range(orbit_scene.get_sphere_count()):
            assert orbit_scene.get_sphere_material(s).metallic > 0.0


class TestOrbitSceneEnvironment:
    """Tests for the plane, light, camera and sky."""

    def test_ground_plane(self, orbit_scene):
        """Test the ground plane under the camera."""
        from orbitrace.geometry.hit import PrimitiveKind
        from orbitrace.scene.layout import GROUND_MATERIAL

        info = orbit_scene.intersect((0.0, 5.0, 20.0), (0.0, -1.0, 0.0))
        assert info.kind == PrimitiveKind.PLANE
        assert abs(info.point[1] + 1.0) < 1e-5
        assert _close(info.normal, (0.0, 1.0, 0.0))
        assert orbit_scene.get_material(info.material_id) == GROUND_MATERIAL
        assert GROUND_MATERIAL.metallic == 0.0

    def test_base_pose_light_and_camera(self, orbit_scene):
        """Test light, camera and sky before any animation."""
        assert _close(orbit_scene.get_light_position(), (5.0, 5.0, 5.0))
        assert _close(orbit_scene.get_camera_position(), (0.0, 1.0, 3.0))
        assert _close(orbit_scene.get_sky_color(), (0.2, 0.3, 0.5))

    def test_layout_is_deterministic(self, orbit_scene):
        """Test two builds produce identical sphere data."""
        from orbitrace.scene.layout import create_orbit_scene

        other = create_orbit_scene()
        for s in range(orbit_scene.get_sphere_count()):
            assert orbit_scene.get_sphere_center(s) == other.get_sphere_center(s)
            assert orbit_scene.get_sphere_material(s) == other.get_sphere_material(s)
