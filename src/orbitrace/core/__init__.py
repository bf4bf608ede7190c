"""Core rendering module.

Components:
    vector: vec3 alias and vector utilities (Taichi functions)
    ray: Ray data structure and construction helpers
    renderer: Frame renderer producing W x H RGB buffers
    animator: Fixed time-step animation driver (advance, then render)

The renderer and animator are NOT imported here because they depend on the
scene package. Import them directly from orbitrace.core.renderer and
orbitrace.core.animator.
"""

from .ray import Ray, make_ray, ray_at
from .vector import add, dot, length, mul, normalize, reflect, sub, vec3

__all__ = [
    "Ray",
    "make_ray",
    "ray_at",
    "vec3",
    "add",
    "sub",
    "mul",
    "dot",
    "length",
    "normalize",
    "reflect",
]
