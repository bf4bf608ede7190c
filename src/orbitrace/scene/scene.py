"""Scene container: primitives, light, camera and simulation time.

A Scene owns every piece of mutable state the renderer reads. Its primitive
data lives in Taichi fields (Structure-of-Arrays layout) allocated per
instance, so several scenes can coexist in one process and be rendered or
animated independently.

The scene provides the two Taichi functions the renderer is built from:

- closest_hit(ray): linear scan over every sphere, then every plane,
  keeping the strictly nearest hit
- trace(ray, depth): direct diffuse lighting plus mirror reflection for
  metallic surfaces, bounded by depth

No shadow rays are cast. The light always contributes its full diffuse term,
whatever lies between the surface and the light.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orbitrace.materials.material import Material
    >>> from orbitrace.scene.scene import Scene
    >>> scene = Scene(max_spheres=4, max_planes=1)
    >>> scene.add_sphere((0.0, 0.0, -3.0), 1.0, Material((0.8, 0.8, 0.8), 0.9, 0.1))
    0
    >>> scene.set_light((5.0, 5.0, 5.0))
    >>> scene.trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), depth=5)
"""

import math
from dataclasses import dataclass

import taichi as ti

from orbitrace.core.ray import Ray, make_ray
from orbitrace.core.vector import dot, normalize, reflect, vec3
from orbitrace.geometry.hit import HitRecord, PrimitiveKind, make_miss_record
from orbitrace.geometry.plane import Plane, hit_plane
from orbitrace.geometry.sphere import Sphere, hit_sphere
from orbitrace.materials.material import Material, reflectivity
from orbitrace.scene.animation import (
    STATIC_MOTION,
    LightMotion,
    MotionParams,
    animate_center,
    animate_light,
)

# Default capacities (the procedural orbit scene uses 112 spheres, 1 plane)
DEFAULT_MAX_SPHERES = 128
DEFAULT_MAX_PLANES = 4

# Reflected rays start this far along their direction to avoid self-hits
REFLECTION_EPSILON = 1e-3

DEFAULT_SKY_COLOR = (0.2, 0.3, 0.5)
DEFAULT_CAMERA_POSITION = (0.0, 1.0, 3.0)


@dataclass
class HitInfo:
    """Python-side copy of a HitRecord.

    Attributes:
        hit: Whether anything was hit.
        distance: Distance along the ray, math.inf on a miss.
        point: Intersection point (zeros on a miss).
        normal: Unit surface normal (zeros on a miss).
        material_id: Material index, -1 on a miss.
        kind: PrimitiveKind of the struck primitive.
        index: Index of the primitive within its kind, -1 on a miss.
    """

    hit: bool
    distance: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    material_id: int
    kind: PrimitiveKind
    index: int


def _as_tuple(v) -> tuple[float, float, float]:
    return (float(v[0]), float(v[1]), float(v[2]))


@ti.data_oriented
class Scene:
    """Spheres, planes, one point light, a camera position and a clock.

    Each primitive registers its own material; materials are never shared
    between primitives and never change after registration.

    Attributes:
        time: Accumulated simulation time (read-only, see advance/set_time).
        animated: Whether a motion law has been applied yet. A freshly built
            scene reports time 0.0 but sits in its base pose, which differs
            from the pose set_time(0.0) computes.
    """

    def __init__(
        self,
        max_spheres: int = DEFAULT_MAX_SPHERES,
        max_planes: int = DEFAULT_MAX_PLANES,
        *,
        camera_position: tuple[float, float, float] = DEFAULT_CAMERA_POSITION,
        sky_color: tuple[float, float, float] = DEFAULT_SKY_COLOR,
    ) -> None:
        """Allocate scene storage.

        Args:
            max_spheres: Sphere capacity.
            max_planes: Plane capacity.
            camera_position: Fixed camera position in world space.
            sky_color: Color returned for rays that hit nothing.

        Raises:
            ValueError: If a capacity is not positive.
        """
        if max_spheres <= 0 or max_planes <= 0:
            raise ValueError(
                f"Scene capacities must be positive (spheres={max_spheres}, planes={max_planes})"
            )

        self._max_spheres = max_spheres
        self._max_planes = max_planes
        self._max_materials = max_spheres + max_planes
        self._materials: list[Material] = []
        self._time = 0.0
        self._animated = False

        # Sphere storage: animated centers plus the base centers they derive from
        self.sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=max_spheres)
        self.sphere_base_centers = ti.Vector.field(3, dtype=ti.f32, shape=max_spheres)
        self.sphere_radii = ti.field(dtype=ti.f32, shape=max_spheres)
        self.sphere_material_ids = ti.field(dtype=ti.i32, shape=max_spheres)
        self.sphere_motion_kinds = ti.field(dtype=ti.i32, shape=max_spheres)
        self.sphere_motion_amplitudes = ti.field(dtype=ti.f32, shape=max_spheres)
        self.sphere_motion_frequencies = ti.field(dtype=ti.f32, shape=max_spheres)
        self.sphere_motion_phases = ti.field(dtype=ti.f32, shape=max_spheres)
        self.num_spheres = ti.field(dtype=ti.i32, shape=())

        # Plane storage
        self.plane_points = ti.Vector.field(3, dtype=ti.f32, shape=max_planes)
        self.plane_normals = ti.Vector.field(3, dtype=ti.f32, shape=max_planes)
        self.plane_material_ids = ti.field(dtype=ti.i32, shape=max_planes)
        self.num_planes = ti.field(dtype=ti.i32, shape=())

        # Material storage, indexed by material_id
        self.material_colors = ti.Vector.field(3, dtype=ti.f32, shape=self._max_materials)
        self.material_metallic = ti.field(dtype=ti.f32, shape=self._max_materials)
        self.material_roughness = ti.field(dtype=ti.f32, shape=self._max_materials)

        # Point light
        self.light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.light_base_position = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.light_color = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.light_intensity = ti.field(dtype=ti.f32, shape=())
        self.light_motion = ti.field(dtype=ti.i32, shape=())
        self.light_orbit_radius = ti.field(dtype=ti.f32, shape=())
        self.light_orbit_height = ti.field(dtype=ti.f32, shape=())

        self.camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.sky_color = ti.Vector.field(3, dtype=ti.f32, shape=())

        # Single-element buffers used by the Python-side probes
        self._probe_hit = HitRecord.field(shape=())
        self._probe_color = ti.Vector.field(3, dtype=ti.f32, shape=())

        self.camera_position[None] = list(camera_position)
        self.sky_color[None] = list(sky_color)
        self.set_light((0.0, 0.0, 0.0), intensity=0.0)

    # =========================================================================
    # Construction
    # =========================================================================

    def _add_material(self, material: Material) -> int:
        idx = len(self._materials)
        if idx >= self._max_materials:
            raise RuntimeError(f"Maximum number of materials ({self._max_materials}) exceeded")
        self.material_colors[idx] = list(material.color)
        self.material_metallic[idx] = material.metallic
        self.material_roughness[idx] = material.roughness
        self._materials.append(material)
        return idx

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: Material,
        motion: MotionParams = STATIC_MOTION,
    ) -> int:
        """Add a sphere with its own material.

        Args:
            center: Base center of the sphere. The animated center starts here.
            radius: Sphere radius.
            material: Material owned by this sphere.
            motion: Motion law applied by advance()/set_time().

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the sphere capacity is exceeded.
        """
        idx = self.num_spheres[None]
        if idx >= self._max_spheres:
            raise RuntimeError(f"Maximum number of spheres ({self._max_spheres}) exceeded")
        material_id = self._add_material(material)
        self.sphere_centers[idx] = list(center)
        self.sphere_base_centers[idx] = list(center)
        self.sphere_radii[idx] = radius
        self.sphere_material_ids[idx] = material_id
        self.sphere_motion_kinds[idx] = int(motion.kind)
        self.sphere_motion_amplitudes[idx] = motion.amplitude
        self.sphere_motion_frequencies[idx] = motion.frequency
        self.sphere_motion_phases[idx] = motion.phase
        self.num_spheres[None] = idx + 1
        return idx

    def add_plane(
        self,
        point: tuple[float, float, float],
        normal: tuple[float, float, float],
        material: Material,
    ) -> int:
        """Add an infinite plane with its own material.

        Args:
            point: Any point on the plane.
            normal: Plane normal; normalized before storage.
            material: Material owned by this plane.

        Returns:
            The index of the added plane.

        Raises:
            ValueError: If the normal has zero length.
            RuntimeError: If the plane capacity is exceeded.
        """
        norm = math.sqrt(normal[0] ** 2 + normal[1] ** 2 + normal[2] ** 2)
        if norm == 0.0:
            raise ValueError("Plane normal must be non-zero")
        idx = self.num_planes[None]
        if idx >= self._max_planes:
            raise RuntimeError(f"Maximum number of planes ({self._max_planes}) exceeded")
        material_id = self._add_material(material)
        self.plane_points[idx] = list(point)
        self.plane_normals[idx] = [normal[0] / norm, normal[1] / norm, normal[2] / norm]
        self.plane_material_ids[idx] = material_id
        self.num_planes[None] = idx + 1
        return idx

    def set_light(
        self,
        position: tuple[float, float, float],
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
        intensity: float = 1.0,
        *,
        motion: LightMotion = LightMotion.STATIC,
        orbit_radius: float = 0.0,
        orbit_height: float = 0.0,
    ) -> None:
        """Configure the point light.

        Args:
            position: Initial light position.
            color: Light color (kept for reference; shading uses intensity).
            intensity: Scalar applied to the diffuse term.
            motion: STATIC keeps the light at position; ORBIT moves it on a
                circle of orbit_radius around the y axis at orbit_height.
            orbit_radius: Orbit radius for LightMotion.ORBIT.
            orbit_height: Orbit height for LightMotion.ORBIT.
        """
        self.light_position[None] = list(position)
        self.light_base_position[None] = list(position)
        self.light_color[None] = list(color)
        self.light_intensity[None] = intensity
        self.light_motion[None] = int(motion)
        self.light_orbit_radius[None] = orbit_radius
        self.light_orbit_height[None] = orbit_height

    # =========================================================================
    # Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return int(self.num_spheres[None])

    def get_plane_count(self) -> int:
        """Get the number of planes in the scene."""
        return int(self.num_planes[None])

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self._materials)

    def get_material(self, material_id: int) -> Material:
        """Get the material registered under material_id."""
        return self._materials[material_id]

    def get_sphere_center(self, index: int) -> tuple[float, float, float]:
        """Current (animated) center of a sphere."""
        return _as_tuple(self.sphere_centers[index])

    def get_sphere_base_center(self, index: int) -> tuple[float, float, float]:
        """Base center of a sphere, as registered."""
        return _as_tuple(self.sphere_base_centers[index])

    def get_sphere_radius(self, index: int) -> float:
        """Radius of a sphere."""
        return float(self.sphere_radii[index])

    def get_sphere_material(self, index: int) -> Material:
        """Material owned by a sphere."""
        return self._materials[int(self.sphere_material_ids[index])]

    def get_light_position(self) -> tuple[float, float, float]:
        """Current (animated) light position."""
        return _as_tuple(self.light_position[None])

    def get_camera_position(self) -> tuple[float, float, float]:
        """Camera position."""
        return _as_tuple(self.camera_position[None])

    def get_sky_color(self) -> tuple[float, float, float]:
        """Color returned for rays that escape the scene."""
        return _as_tuple(self.sky_color[None])

    # =========================================================================
    # Animation
    # =========================================================================

    @property
    def time(self) -> float:
        """Accumulated simulation time.

        Reads 0.0 both for a fresh scene and after set_time(0.0); use
        `animated` to tell the base pose from the t = 0 pose.
        """
        return self._time

    @property
    def animated(self) -> bool:
        """True once advance() or set_time() has positioned the scene."""
        return self._animated

    def advance(self, dt: float) -> None:
        """Advance simulation time by dt and update animated positions.

        Positions depend only on the accumulated time, never on the previous
        positions.

        Args:
            dt: Time step to add to the clock.
        """
        self.set_time(self._time + dt)

    def set_time(self, t: float) -> None:
        """Jump the clock to t and recompute every animated position.

        Args:
            t: Absolute simulation time.
        """
        self._time = t
        self._animated = True
        self._animate(t)

    @ti.kernel
    def _animate(self, t: ti.f32):
        self.light_position[None] = animate_light(
            self.light_motion[None],
            self.light_base_position[None],
            self.light_orbit_radius[None],
            self.light_orbit_height[None],
            t,
        )
        for i in range(self.num_spheres[None]):
            self.sphere_centers[i] = animate_center(
                self.sphere_motion_kinds[i],
                self.sphere_base_centers[i],
                self.sphere_motion_amplitudes[i],
                self.sphere_motion_frequencies[i],
                self.sphere_motion_phases[i],
                t,
            )

    # =========================================================================
    # Intersection and shading (Taichi functions)
    # =========================================================================

    @ti.func
    def closest_hit(self, ray: Ray) -> HitRecord:
        """Find the nearest intersection among all primitives.

        Spheres are tested first, then planes. A later hit replaces the
        current one only when strictly nearer.

        Args:
            ray: The ray to test.

        Returns:
            The nearest HitRecord, or a miss record.
        """
        closest = make_miss_record()

        for i in range(self.num_spheres[None]):
            sphere = Sphere(
                center=self.sphere_centers[i],
                radius=self.sphere_radii[i],
                material_id=self.sphere_material_ids[i],
            )
            rec = hit_sphere(ray, sphere, i)
            if rec.hit == 1 and rec.t < closest.t:
                closest = rec

        for i in range(self.num_planes[None]):
            plane = Plane(
                point=self.plane_points[i],
                normal=self.plane_normals[i],
                material_id=self.plane_material_ids[i],
            )
            rec = hit_plane(ray, plane, i)
            if rec.hit == 1 and rec.t < closest.t:
                closest = rec

        return closest

    @ti.func
    def shade_local(self, rec: HitRecord) -> vec3:
        """Diffuse color at a hit: material color * max(0, n.l) * intensity."""
        light_dir = normalize(self.light_position[None] - rec.point)
        diffuse = ti.max(0.0, dot(rec.normal, light_dir)) * self.light_intensity[None]
        return self.material_colors[rec.material_id] * diffuse

    @ti.func
    def trace(self, ray: Ray, depth: ti.i32) -> vec3:
        """Compute the color seen along a ray.

        Equivalent to the recursion

            trace(ray, 0)     = black
            trace(ray, depth) = sky                                   on a miss
                              = local                                 if metallic == 0
                              = local * (1 - r) + r * trace(bounce, depth - 1)

        with r = metallic * (1 - roughness) and bounce the mirror reflection
        starting REFLECTION_EPSILON along the reflected direction. Taichi
        functions cannot recurse, so the recursion is unrolled: each bounce
        adds its local term weighted by the product of the reflectivities of
        the surfaces before it.

        Args:
            ray: The ray to trace.
            depth: Maximum number of surface interactions. depth <= 0 yields
                black.

        Returns:
            The unclamped RGB color.
        """
        color = vec3(0.0, 0.0, 0.0)
        weight = 1.0
        current = ray
        active = 1

        for _ in range(depth):
            if active == 1:
                rec = self.closest_hit(current)

                if rec.hit == 0:
                    color += weight * self.sky_color[None]
                    active = 0
                else:
                    local = self.shade_local(rec)
                    metallic = self.material_metallic[rec.material_id]

                    if metallic > 0.0:
                        r = reflectivity(metallic, self.material_roughness[rec.material_id])
                        color += weight * (1.0 - r) * local
                        weight *= r
                        reflected = reflect(current.direction, rec.normal)
                        current = make_ray(rec.point + reflected * REFLECTION_EPSILON, reflected)
                    else:
                        color += weight * local
                        active = 0

        return color

    # =========================================================================
    # Python-side probes
    # =========================================================================

    @ti.kernel
    def _intersect_kernel(self, origin: vec3, direction: vec3):
        # Single-iteration outer loop keeps the scan loops serial
        for _ in range(1):
            self._probe_hit[None] = self.closest_hit(make_ray(origin, direction))

    @ti.kernel
    def _trace_kernel(self, origin: vec3, direction: vec3, depth: ti.i32):
        for _ in range(1):
            self._probe_color[None] = self.trace(make_ray(origin, direction), depth)

    def intersect(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
    ) -> HitInfo:
        """Find the nearest hit for a single ray.

        Args:
            origin: Ray origin.
            direction: Ray direction (normalized internally, must be non-zero).

        Returns:
            A HitInfo describing the nearest hit or the miss.
        """
        self._intersect_kernel(vec3(*origin), vec3(*direction))
        probe = self._probe_hit
        return HitInfo(
            hit=bool(probe.hit[None]),
            distance=float(probe.t[None]),
            point=_as_tuple(probe.point[None]),
            normal=_as_tuple(probe.normal[None]),
            material_id=int(probe.material_id[None]),
            kind=PrimitiveKind(int(probe.kind[None])),
            index=int(probe.index[None]),
        )

    def trace_ray(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
        depth: int,
    ) -> tuple[float, float, float]:
        """Trace a single ray and return its unclamped color.

        Args:
            origin: Ray origin.
            direction: Ray direction (normalized internally, must be non-zero).
            depth: Maximum number of surface interactions.

        Returns:
            The (r, g, b) color.
        """
        self._trace_kernel(vec3(*origin), vec3(*direction), depth)
        return _as_tuple(self._probe_color[None])

    def __repr__(self) -> str:
        """Return a string representation of the scene state."""
        return (
            f"Scene(spheres={self.get_sphere_count()}, planes={self.get_plane_count()}, "
            f"time={self._time:.3f}, animated={self._animated})"
        )
