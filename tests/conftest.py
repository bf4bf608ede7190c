"""Pytest configuration for orbitrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def orbit_scene():
    """A freshly built orbit scene in its base pose."""
    from orbitrace.scene.layout import create_orbit_scene

    return create_orbit_scene()


@pytest.fixture
def matte_scene():
    """A minimal scene: one camera-facing wall lit head-on.

    The camera sits at the origin looking down -z, the wall is the plane
    z = -5 and the light is straight behind the camera, so the diffuse term
    at the wall's center is exactly 1.
    """
    from orbitrace.materials.material import Material
    from orbitrace.scene.scene import Scene

    scene = Scene(max_spheres=4, max_planes=1, camera_position=(0.0, 0.0, 0.0))
    scene.add_plane((0.0, 0.0, -5.0), (0.0, 0.0, 1.0), Material(color=(0.5, 0.25, 1.0)))
    scene.set_light((0.0, 0.0, 10.0))
    return scene
