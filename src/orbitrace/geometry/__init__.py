"""Geometry module for shape primitives.

Components:
    hit: HitRecord, PrimitiveKind tag and the miss record
    sphere: Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection

All intersection routines are Taichi functions (@ti.func). Intersection is a
plain linear scan over primitives; there is no acceleration structure.
"""

from .hit import HitRecord, PrimitiveKind, make_miss_record
from .plane import PARALLEL_EPSILON, Plane, hit_plane
from .sphere import Sphere, hit_sphere, make_sphere

__all__ = [
    "HitRecord",
    "PrimitiveKind",
    "make_miss_record",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "Plane",
    "hit_plane",
    "PARALLEL_EPSILON",
]
