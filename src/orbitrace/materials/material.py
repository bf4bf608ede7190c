"""Surface material used by the shading kernel.

A material is a base color plus two scalars:

- metallic: fraction of the final color taken from the mirror reflection
- roughness: damps that fraction

The blend weight applied by the tracer is the reflectivity

    reflectivity = metallic * (1 - roughness)

Values are not validated. Channels above 1 or metallic/roughness outside
[0, 1] still produce well-defined (if odd looking) colors.

Example:
    >>> from orbitrace.materials.material import Material
    >>> gold = Material(color=(0.8, 0.6, 0.2), metallic=0.7, roughness=0.3)
    >>> round(gold.reflectivity, 2)
    0.49
"""

from dataclasses import dataclass

import taichi as ti


@dataclass(frozen=True)
class Material:
    """Immutable material description.

    Attributes:
        color: Base RGB color, channels nominally in [0, 1].
        metallic: Reflective contribution in [0, 1].
        roughness: Reflection damping in [0, 1].
    """

    color: tuple[float, float, float]
    metallic: float = 0.0
    roughness: float = 0.0

    @property
    def reflectivity(self) -> float:
        """Blend weight of the reflected color."""
        return self.metallic * (1.0 - self.roughness)


@ti.func
def reflectivity(metallic: ti.f32, roughness: ti.f32) -> ti.f32:
    """Blend weight of the reflected color, for use inside kernels."""
    return metallic * (1.0 - roughness)
