"""Camera module for primary ray generation.

Components:
    pinhole: Fixed-orientation pinhole camera looking down -z

Ray generation maps pixel centers to normalized device coordinates,
aspect-corrected and scaled by tan(fov / 2). Pixel rows run top to bottom.
"""

from .pinhole import fov_scale, pixel_direction, primary_direction, primary_ray

__all__ = [
    "fov_scale",
    "pixel_direction",
    "primary_direction",
    "primary_ray",
]
