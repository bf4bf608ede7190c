"""Infinite plane primitive with ray-plane intersection.

A plane is a point on the plane plus a unit normal. Unlike a quad it has no
bounds: any ray that is not parallel to it and points toward it hits it.

    t = dot(point - origin, normal) / dot(direction, normal)

Rays with |dot(direction, normal)| <= PARALLEL_EPSILON are treated as
parallel and miss.
"""

import taichi as ti

from orbitrace.core.ray import Ray, ray_at
from orbitrace.core.vector import dot, vec3

from .hit import HitRecord, PrimitiveKind, make_miss_record

# Below this |dot(direction, normal)| a ray counts as parallel to the plane
PARALLEL_EPSILON = 1e-6


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        point: Any point lying on the plane (vec3).
        normal: The unit plane normal (vec3).
        material_id: Index of the material owned by this plane.
    """

    point: vec3
    normal: vec3
    material_id: ti.i32


@ti.func
def hit_plane(ray: Ray, plane: Plane, index: ti.i32) -> HitRecord:
    """Test for ray-plane intersection.

    Args:
        ray: The ray to test (unit direction).
        plane: The plane to test against.
        index: The plane's index in the scene, stored in the record.

    Returns:
        A HitRecord. The normal is the plane normal as stored, regardless of
        which side the ray arrives from.
    """
    result = make_miss_record()
    denom = dot(plane.normal, ray.direction)

    if ti.abs(denom) > PARALLEL_EPSILON:
        t = dot(plane.point - ray.origin, plane.normal) / denom
        if t >= 0.0:
            result = HitRecord(
                hit=1,
                t=t,
                point=ray_at(ray, t),
                normal=plane.normal,
                material_id=plane.material_id,
                kind=int(PrimitiveKind.PLANE),
                index=index,
            )

    return result
