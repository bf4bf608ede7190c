"""Closed-form motion laws for animated scene objects.

Every animated position is a pure function of elapsed time ``t`` and the
object's fixed base position, so the scene state for any ``t`` can be
reproduced directly without stepping through earlier frames.

Motion kinds (phase ``p`` and frequency ``f`` are per object):

    STATIC        base
    SWAY          base + A * (sin(f (t + p)), cos(f (t + p)), 0)
    SWAY_QUARTER  base + A * (cos(f (t + p)), sin(f (t + p)), 0)
    BOB           base + (0, A * sin(f (t + p)), 0)
    WAVE          base + (0, A * sin(f (t + p) + k * base.x), 0)

where ``k`` is WAVE_SPATIAL_FREQUENCY. The light moves on a horizontal circle:

    ORBIT         (R cos(t), H, R sin(t))
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import taichi as ti

from orbitrace.core.vector import vec3

# Spatial term of the traveling wave, per unit of base x
WAVE_SPATIAL_FREQUENCY = 0.5


class Motion(IntEnum):
    """Motion law applied to a sphere center."""

    STATIC = 0
    SWAY = 1
    SWAY_QUARTER = 2
    BOB = 3
    WAVE = 4


class LightMotion(IntEnum):
    """Motion law applied to the point light."""

    STATIC = 0
    ORBIT = 1


@dataclass(frozen=True)
class MotionParams:
    """Per-sphere motion description.

    Attributes:
        kind: Which motion law to apply.
        amplitude: Displacement amplitude in world units.
        frequency: Angular frequency multiplier applied to (t + phase).
        phase: Time offset added to t before scaling by frequency.
    """

    kind: Motion = Motion.STATIC
    amplitude: float = 0.0
    frequency: float = 1.0
    phase: float = 0.0


STATIC_MOTION = MotionParams()


@ti.func
def animate_center(
    kind: ti.i32,
    base: vec3,
    amplitude: ti.f32,
    frequency: ti.f32,
    phase: ti.f32,
    t: ti.f32,
) -> vec3:
    """Evaluate a sphere motion law at time t.

    Args:
        kind: Motion kind (see Motion).
        base: The sphere's base center.
        amplitude: Displacement amplitude.
        frequency: Angular frequency multiplier.
        phase: Time offset.
        t: Elapsed simulation time.

    Returns:
        The animated center. Unknown kinds leave the base untouched.
    """
    angle = frequency * (t + phase)
    center = base

    if kind == int(Motion.SWAY):
        center = base + amplitude * vec3(ti.sin(angle), ti.cos(angle), 0.0)
    elif kind == int(Motion.SWAY_QUARTER):
        center = base + amplitude * vec3(ti.cos(angle), ti.sin(angle), 0.0)
    elif kind == int(Motion.BOB):
        center = base + vec3(0.0, amplitude * ti.sin(angle), 0.0)
    elif kind == int(Motion.WAVE):
        wave = ti.sin(angle + WAVE_SPATIAL_FREQUENCY * base.x)
        center = base + vec3(0.0, amplitude * wave, 0.0)

    return center


@ti.func
def animate_light(
    kind: ti.i32,
    base: vec3,
    orbit_radius: ti.f32,
    orbit_height: ti.f32,
    t: ti.f32,
) -> vec3:
    """Evaluate the light motion law at time t."""
    position = base
    if kind == int(LightMotion.ORBIT):
        position = vec3(orbit_radius * ti.cos(t), orbit_height, orbit_radius * ti.sin(t))
    return position


def group_phase(index: int, count: int) -> float:
    """Evenly spaced phase offset 2*pi*index/count for a group of objects."""
    return 2.0 * math.pi * index / count
