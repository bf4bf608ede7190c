"""Vector utilities for use inside Taichi kernels.

Vectors are ``taichi.math.vec3`` values. Every function returns a new value
and never mutates its inputs.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orbitrace.core.vector import normalize, reflect, vec3
    >>> @ti.kernel
    ... def bounce() -> vec3:
    ...     return reflect(normalize(vec3(1.0, -1.0, 0.0)), vec3(0.0, 1.0, 0.0))
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return a + b


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return a - b


@ti.func
def mul(v: vec3, s: ti.f32) -> vec3:
    """Scale a vector by a scalar."""
    return v * s


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The length is divided out directly. A zero-length input is a caller
    error: the components become NaN/Inf and propagate.

    Args:
        v: The input vector (must be non-zero).

    Returns:
        A unit vector in the same direction as v.
    """
    return v / ti.sqrt(tm.dot(v, v))


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes ``incident - normal * 2 (incident . normal)``. The normal must
    be unit length; a non-unit normal silently gives a wrong reflection.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The reflected direction vector.
    """
    return incident - normal * (2.0 * tm.dot(incident, normal))
