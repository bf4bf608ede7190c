"""Materials module.

Only one material model exists: a base color blended with a mirror
reflection according to metallic and roughness.
"""

from .material import Material, reflectivity

__all__ = ["Material", "reflectivity"]
