"""Animated Whitted-style raytracer built on Taichi.

This package renders a procedurally animated scene of reflective spheres over
a ground plane, producing one RGB frame per animation tick:
- Vector algebra and rays usable inside Taichi kernels
- Sphere and infinite plane primitives with a linear nearest-hit scan
- Recursive diffuse + metallic reflection shading bounded by a max depth
- Closed-form animation of spheres and the light from elapsed time

Subpackages:
    core: Vector utilities, rays, frame renderer and animation driver
    geometry: Primitive records and intersection routines
    materials: Surface material values
    scene: Scene container, procedural layout and motion laws
    camera: Pinhole camera ray generation
    preview: PNG export and interactive preview window
"""

__version__ = "0.1.0"
