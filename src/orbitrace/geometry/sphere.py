"""Sphere primitive with ray-sphere intersection.

The intersection solves the textbook quadratic obtained by substituting the
ray into the sphere equation:

    |origin + t * direction - center|^2 = radius^2

    a = dot(direction, direction)
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The near root is preferred; if it lies behind the origin the far root is
used, which lets a ray that starts inside the sphere hit the far wall. When
both roots are negative the sphere is entirely behind the ray and it misses.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orbitrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -3), radius=1.0, material_id=0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from orbitrace.core.ray import Ray, ray_at
from orbitrace.core.vector import dot, normalize, vec3

from .hit import HitRecord, PrimitiveKind, make_miss_record


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        material_id: Index of the material owned by this sphere.
    """

    center: vec3
    radius: ti.f32
    material_id: ti.i32


@ti.func
def make_sphere(center: vec3, radius: ti.f32, material_id: ti.i32) -> Sphere:
    """Create a sphere from center, radius and material id."""
    return Sphere(center=center, radius=radius, material_id=material_id)


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, index: ti.i32) -> HitRecord:
    """Test for ray-sphere intersection.

    Args:
        ray: The ray to test (unit direction).
        sphere: The sphere to test against.
        index: The sphere's index in the scene, stored in the record.

    Returns:
        A HitRecord. On a hit the normal points away from the center, even
        when the ray starts inside the sphere.
    """
    oc = ray.origin - sphere.center
    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c

    result = make_miss_record()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t = (-b - sqrt_d) / (2.0 * a)
        valid = 1
        if t < 0.0:
            t = (-b + sqrt_d) / (2.0 * a)
            if t < 0.0:
                valid = 0

        if valid == 1:
            point = ray_at(ray, t)
            result = HitRecord(
                hit=1,
                t=t,
                point=point,
                normal=normalize(point - sphere.center),
                material_id=sphere.material_id,
                kind=int(PrimitiveKind.SPHERE),
                index=index,
            )

    return result
