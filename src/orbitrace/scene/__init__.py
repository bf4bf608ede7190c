"""Scene module: scene container, motion laws and the procedural layout.

Components:
    scene: Scene container holding primitives, materials, light and camera,
        with the nearest-hit scan and the trace function
    animation: Closed-form motion laws evaluated from elapsed time
    layout: Deterministic orbit scene and the hue-to-RGB helper

Scene data is organized for Taichi kernels:
    - Structure-of-Arrays layout for sphere and plane data
    - One material per primitive, indexed by material_id
    - Base positions kept next to animated positions for stateless replay
"""

from .animation import (
    WAVE_SPATIAL_FREQUENCY,
    LightMotion,
    Motion,
    MotionParams,
    group_phase,
)
from .layout import OrbitSceneParams, create_orbit_scene, hue_to_rgb
from .scene import (
    DEFAULT_CAMERA_POSITION,
    DEFAULT_SKY_COLOR,
    REFLECTION_EPSILON,
    HitInfo,
    Scene,
)

__all__ = [
    # Scene container
    "Scene",
    "HitInfo",
    "REFLECTION_EPSILON",
    "DEFAULT_SKY_COLOR",
    "DEFAULT_CAMERA_POSITION",
    # Animation
    "Motion",
    "MotionParams",
    "LightMotion",
    "WAVE_SPATIAL_FREQUENCY",
    "group_phase",
    # Layout
    "OrbitSceneParams",
    "create_orbit_scene",
    "hue_to_rgb",
]
