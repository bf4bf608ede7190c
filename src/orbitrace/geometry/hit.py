"""Hit record shared by all primitive intersection routines.

A hit record is either a miss (``hit == 0`` and ``t == +inf``) or a hit with
distance, point, unit normal and the material id of the struck primitive.
The primitive kind and index form a tagged reference to the primitive, so
callers can tell spheres and planes apart without a separate lookup.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from orbitrace.core.vector import vec3


class PrimitiveKind(IntEnum):
    """Tag identifying which primitive table a hit came from."""

    NONE = -1
    SPHERE = 0
    PLANE = 1


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: 1 if the ray intersected a primitive, 0 on a miss.
        t: Distance along the ray to the intersection. +inf on a miss.
        point: The intersection point. Only valid if hit == 1.
        normal: The unit surface normal at the point. Only valid if hit == 1.
        material_id: Index of the primitive's material, -1 on a miss.
        kind: PrimitiveKind of the struck primitive, -1 on a miss.
        index: Index of the primitive within its kind's table, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material_id: ti.i32
    kind: ti.i32
    index: ti.i32


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection.

    Returns:
        A HitRecord with hit=0, t=+inf and -1 references.
    """
    return HitRecord(
        hit=0,
        t=tm.inf,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material_id=-1,
        kind=int(PrimitiveKind.NONE),
        index=-1,
    )
