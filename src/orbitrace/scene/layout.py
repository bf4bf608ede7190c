"""Procedural orbit scene.

This module builds the deterministic demo scene: a ring arrangement of
reflective spheres over a gray ground plane, lit by a point light that orbits
the origin.

The layout consists of:
- 2 large spheres (radius 1) side by side in front of the camera, one near
  white and glossy, one gold and rougher; both sway on small circles
- 10 medium spheres (radius 0.25) evenly spaced on a ring of radius 2.5,
  colored around the hue wheel; they bob up and down out of phase
- 100 small spheres (radius 0.2) on 4 concentric rings of 25, each ring
  wider, higher and rotated by pi/4 * layer; a traveling wave runs over them
- an infinite ground plane at y = -1
- a point light orbiting at radius 8, height 5

Every ring is centered on (0, y, RING_CENTER_Z). Sphere indices are fixed:
0-1 large, 2-11 medium, 12-111 small.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orbitrace.scene.layout import create_orbit_scene
    >>> scene = create_orbit_scene()
    >>> scene.get_sphere_count()
    112
"""

import math
from dataclasses import dataclass

from orbitrace.materials.material import Material
from orbitrace.scene.animation import LightMotion, Motion, MotionParams, group_phase
from orbitrace.scene.scene import DEFAULT_MAX_PLANES, Scene

# =============================================================================
# Layout Constants
# =============================================================================

RING_CENTER_Z = -3.0

LARGE_SPHERE_RADIUS = 1.0
LARGE_SPHERE_CENTERS = ((-1.0, 0.0, -3.0), (1.0, 0.0, -3.0))
LARGE_SPHERE_MATERIALS = (
    Material(color=(0.8, 0.8, 0.8), metallic=0.9, roughness=0.1),
    Material(color=(0.8, 0.6, 0.2), metallic=0.7, roughness=0.3),
)
LARGE_SWAY_AMPLITUDE = 0.2

MEDIUM_SPHERE_RADIUS = 0.25
MEDIUM_RING_RADIUS = 2.5
MEDIUM_BOB_AMPLITUDE = 0.15
MEDIUM_BOB_FREQUENCY = 2.0

SMALL_SPHERE_RADIUS = 0.2
SMALL_BASE_RING_RADIUS = 3.5
SMALL_RING_SPACING = 0.8
SMALL_BASE_HEIGHT = -0.5
SMALL_HEIGHT_SPACING = 0.4
SMALL_WAVE_AMPLITUDE = 0.1
SMALL_WAVE_FREQUENCY = 3.0

GROUND_MATERIAL = Material(color=(0.5, 0.5, 0.5), metallic=0.0, roughness=0.2)


# =============================================================================
# Orbit Scene Parameters
# =============================================================================


@dataclass
class OrbitSceneParams:
    """Parameters for configuring the orbit scene.

    All defaults reproduce the reference layout.

    Attributes:
        medium_count: Number of medium spheres on the inner ring.
        small_count: Number of small spheres, split evenly across layers.
        layer_count: Number of concentric rings of small spheres.
        camera_position: Fixed camera position.
        sky_color: Color of rays that escape the scene.
        ground_height: y coordinate of the ground plane.
        light_position: Light position before the first animation step.
        light_color: Light color.
        light_intensity: Scalar applied to the diffuse term.
        light_orbit_radius: Radius of the light's orbit around the y axis.
        light_orbit_height: Height of the light's orbit.
    """

    medium_count: int = 10
    small_count: int = 100
    layer_count: int = 4
    camera_position: tuple[float, float, float] = (0.0, 1.0, 3.0)
    sky_color: tuple[float, float, float] = (0.2, 0.3, 0.5)
    ground_height: float = -1.0
    light_position: tuple[float, float, float] = (5.0, 5.0, 5.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    light_intensity: float = 1.0
    light_orbit_radius: float = 8.0
    light_orbit_height: float = 5.0

    @property
    def sphere_count(self) -> int:
        """Total number of spheres the layout creates."""
        return len(LARGE_SPHERE_CENTERS) + self.medium_count + self.small_count


# =============================================================================
# Color Helpers
# =============================================================================


def hue_to_rgb(hue: float) -> tuple[float, float, float]:
    """Map a hue in [0, 1) to a fully saturated RGB color.

    Piecewise-linear rainbow sweep:

        r = |6h - 3| - 1
        g = 2 - |6h - 2|
        b = 2 - |6h - 4|

    each clamped to [0, 1].

    Args:
        hue: Hue in [0, 1).

    Returns:
        The (r, g, b) color.
    """
    r = abs(hue * 6.0 - 3.0) - 1.0
    g = 2.0 - abs(hue * 6.0 - 2.0)
    b = 2.0 - abs(hue * 6.0 - 4.0)
    return (
        max(0.0, min(1.0, r)),
        max(0.0, min(1.0, g)),
        max(0.0, min(1.0, b)),
    )


# =============================================================================
# Orbit Scene Factory
# =============================================================================


def _add_large_spheres(scene: Scene) -> None:
    # The second sphere swaps sin/cos, a quarter turn out of step with the first
    motions = (Motion.SWAY, Motion.SWAY_QUARTER)
    for center, material, kind in zip(LARGE_SPHERE_CENTERS, LARGE_SPHERE_MATERIALS, motions):
        scene.add_sphere(
            center=center,
            radius=LARGE_SPHERE_RADIUS,
            material=material,
            motion=MotionParams(kind=kind, amplitude=LARGE_SWAY_AMPLITUDE),
        )


def _add_medium_spheres(scene: Scene, count: int) -> None:
    for i in range(count):
        angle = 2.0 * math.pi * i / count
        center = (
            MEDIUM_RING_RADIUS * math.cos(angle),
            0.0,
            RING_CENTER_Z + MEDIUM_RING_RADIUS * math.sin(angle),
        )
        material = Material(
            color=hue_to_rgb(i / count),
            metallic=0.3 + 0.6 * i / count,
            roughness=0.1 + 0.4 * i / count,
        )
        scene.add_sphere(
            center=center,
            radius=MEDIUM_SPHERE_RADIUS,
            material=material,
            motion=MotionParams(
                kind=Motion.BOB,
                amplitude=MEDIUM_BOB_AMPLITUDE,
                frequency=MEDIUM_BOB_FREQUENCY,
                phase=group_phase(i, count),
            ),
        )


def _add_small_spheres(scene: Scene, count: int, layer_count: int, first_index: int) -> None:
    per_layer = count // layer_count
    for layer in range(layer_count):
        ring_radius = SMALL_BASE_RING_RADIUS + layer * SMALL_RING_SPACING
        height = SMALL_BASE_HEIGHT + layer * SMALL_HEIGHT_SPACING

        for i in range(per_layer):
            # Per-layer rotation keeps spheres of adjacent rings out of line
            angle = 2.0 * math.pi * i / per_layer + layer * math.pi / layer_count
            center = (
                ring_radius * math.cos(angle),
                height,
                RING_CENTER_Z + ring_radius * math.sin(angle),
            )

            sphere_index = first_index + layer * per_layer + i
            group_index = sphere_index - first_index
            hue = (sphere_index / count + layer * 0.25) % 1.0
            material = Material(
                color=hue_to_rgb(hue),
                metallic=0.3 + 0.6 * (sphere_index / count),
                roughness=0.1 + 0.3 * (math.sin(angle) * 0.5 + 0.5),
            )
            scene.add_sphere(
                center=center,
                radius=SMALL_SPHERE_RADIUS,
                material=material,
                motion=MotionParams(
                    kind=Motion.WAVE,
                    amplitude=SMALL_WAVE_AMPLITUDE,
                    frequency=SMALL_WAVE_FREQUENCY,
                    phase=group_phase(group_index, count),
                ),
            )


def create_orbit_scene(params: OrbitSceneParams | None = None) -> Scene:
    """Create the orbit scene.

    The scene is built in its base pose (light at params.light_position,
    spheres at their base centers). Call advance() or set_time() to apply
    the motion laws.

    Args:
        params: Optional OrbitSceneParams. If None, uses defaults.

    Returns:
        A populated Scene.

    Raises:
        ValueError: If small_count is not divisible by layer_count, or a
            count is negative.
    """
    if params is None:
        params = OrbitSceneParams()

    if params.medium_count < 0 or params.small_count < 0 or params.layer_count <= 0:
        raise ValueError(
            f"Invalid sphere counts (medium={params.medium_count}, "
            f"small={params.small_count}, layers={params.layer_count})"
        )
    if params.small_count % params.layer_count != 0:
        raise ValueError(
            f"small_count ({params.small_count}) must be divisible by "
            f"layer_count ({params.layer_count})"
        )

    scene = Scene(
        max_spheres=max(params.sphere_count, 1),
        max_planes=DEFAULT_MAX_PLANES,
        camera_position=params.camera_position,
        sky_color=params.sky_color,
    )

    _add_large_spheres(scene)
    _add_medium_spheres(scene, params.medium_count)
    _add_small_spheres(
        scene,
        params.small_count,
        params.layer_count,
        first_index=len(LARGE_SPHERE_CENTERS) + params.medium_count,
    )

    scene.add_plane(
        point=(0.0, params.ground_height, 0.0),
        normal=(0.0, 1.0, 0.0),
        material=GROUND_MATERIAL,
    )

    scene.set_light(
        params.light_position,
        params.light_color,
        params.light_intensity,
        motion=LightMotion.ORBIT,
        orbit_radius=params.light_orbit_radius,
        orbit_height=params.light_orbit_height,
    )

    return scene
