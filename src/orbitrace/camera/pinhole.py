"""Pinhole camera ray generation.

The camera sits at the scene's camera position and looks down -z with +y up.
It has no orientation parameters. The image plane lies at unit distance, and
the field of view sets its half-height to tan(fov / 2).

For pixel (x, y) of a width x height image (y = 0 is the top row):

    rx = (2 * (x + 0.5) / width - 1) * tan(fov / 2) * width / height
    ry = (1 - 2 * (y + 0.5) / height) * tan(fov / 2)
    direction = normalize(rx, ry, -1)

Example:
    >>> from orbitrace.camera.pinhole import pixel_direction
    >>> pixel_direction(400, 300, 800, 600, 90.0)  # just below the image center
"""

import math

import taichi as ti

from orbitrace.core.ray import Ray, make_ray
from orbitrace.core.vector import vec3


def fov_scale(fov_degrees: float) -> float:
    """Half-height of the image plane at unit distance, tan(fov / 2).

    Args:
        fov_degrees: Vertical field of view in degrees.

    Returns:
        The image plane scale.

    Raises:
        ValueError: If the field of view is not in (0, 180).
    """
    if not 0.0 < fov_degrees < 180.0:
        raise ValueError(f"Field of view must be in (0, 180) degrees, got {fov_degrees}")
    return math.tan(math.radians(fov_degrees * 0.5))


@ti.func
def primary_direction(
    pixel_x: ti.i32,
    pixel_y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    scale: ti.f32,
) -> vec3:
    """Unnormalized camera-space direction through a pixel center.

    Args:
        pixel_x: Pixel column (0 = left).
        pixel_y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        scale: Image plane scale from fov_scale().

    Returns:
        The direction (rx, ry, -1).
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    aspect = w / h
    rx = (2.0 * ((ti.cast(pixel_x, ti.f32) + 0.5) / w) - 1.0) * scale * aspect
    ry = (1.0 - 2.0 * ((ti.cast(pixel_y, ti.f32) + 0.5) / h)) * scale
    return vec3(rx, ry, -1.0)


@ti.func
def primary_ray(
    origin: vec3,
    pixel_x: ti.i32,
    pixel_y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    scale: ti.f32,
) -> Ray:
    """Camera ray through a pixel center, starting at origin."""
    return make_ray(origin, primary_direction(pixel_x, pixel_y, width, height, scale))


def pixel_direction(
    pixel_x: int,
    pixel_y: int,
    width: int,
    height: int,
    fov_degrees: float,
) -> tuple[float, float, float]:
    """Normalized camera ray direction through a pixel, computed in Python.

    Useful for debugging and for picking rays to probe with
    Scene.intersect() or Scene.trace_ray().

    Returns:
        The unit direction (x, y, z).
    """
    scale = fov_scale(fov_degrees)
    aspect = width / height
    rx = (2.0 * ((pixel_x + 0.5) / width) - 1.0) * scale * aspect
    ry = (1.0 - 2.0 * ((pixel_y + 0.5) / height)) * scale
    norm = math.sqrt(rx * rx + ry * ry + 1.0)
    return (rx / norm, ry / norm, -1.0 / norm)
