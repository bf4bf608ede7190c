"""Frame renderer: one camera ray per pixel into an 8-bit RGB buffer.

For every pixel the renderer builds the pinhole camera ray, traces it through
the scene at the configured maximum depth and quantizes the color:

    NaN -> 0, clamp to [0, 1], int(c * 255)   (truncation)

The output is a NumPy uint8 array of shape (height, width, 3) in row-major
order, top row first. Rendering reads the scene and never modifies it; the
per-pixel loop runs as one parallel Taichi kernel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orbitrace.core.renderer import render_frame
    >>> from orbitrace.scene.layout import create_orbit_scene
    >>>
    >>> scene = create_orbit_scene()
    >>> scene.advance(0.02)
    >>> frame = render_frame(scene, 800, 600, fov_degrees=90.0, max_depth=5)
    >>> frame.shape
    (600, 800, 3)
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from orbitrace.camera.pinhole import fov_scale, primary_ray
from orbitrace.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Largest supported frame (pixel buffers are allocated per frame size)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Integer range of one output channel
MAX_CHANNEL_VALUE = 255

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_FOV_DEGREES = 90.0
DEFAULT_MAX_DEPTH = 5
DEFAULT_TIME_STEP = 0.02


@dataclass
class RenderSettings:
    """Render and animation configuration.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Vertical field of view in degrees.
        max_depth: Maximum number of surface interactions per camera ray.
        time_step: Simulation time added per animation tick.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fov_degrees: float = DEFAULT_FOV_DEGREES
    max_depth: int = DEFAULT_MAX_DEPTH
    time_step: float = DEFAULT_TIME_STEP

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If any value is out of range.
        """
        _check_dimensions(self.width, self.height)
        _check_depth(self.max_depth)
        fov_scale(self.fov_degrees)


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


def _check_depth(max_depth: int) -> None:
    if max_depth < 0:
        raise ValueError(f"Maximum depth must be non-negative, got {max_depth}")


# =============================================================================
# Quantization
# =============================================================================


@ti.func
def quantize_channel(value: ti.f32) -> ti.i32:
    """Convert a linear channel value to an integer in [0, 255].

    NaN maps to 0; values are clamped to [0, 1] and then truncated.
    """
    v = value
    if tm.isnan(v):
        v = 0.0
    v = ti.min(ti.max(v, 0.0), 1.0)
    return ti.cast(v * MAX_CHANNEL_VALUE, ti.i32)


def quantize_color(color: tuple[float, float, float]) -> tuple[int, int, int]:
    """Python counterpart of quantize_channel applied to an RGB triple.

    Args:
        color: Linear (r, g, b) color, e.g. from Scene.trace_ray().

    Returns:
        The (r, g, b) integer channels in [0, 255].
    """
    result = []
    for value in color:
        if math.isnan(value):
            value = 0.0
        value = min(max(value, 0.0), 1.0)
        result.append(int(value * MAX_CHANNEL_VALUE))
    return (result[0], result[1], result[2])


# =============================================================================
# Rendering Kernel
# =============================================================================


@ti.kernel
def _render_kernel(
    scene: ti.template(),
    pixels: ti.template(),
    width: ti.i32,
    height: ti.i32,
    scale: ti.f32,
    max_depth: ti.i32,
):
    for y, x in ti.ndrange(height, width):
        ray = primary_ray(scene.camera_position[None], x, y, width, height, scale)
        color = scene.trace(ray, max_depth)
        pixels[y, x] = ti.Vector(
            [
                quantize_channel(color[0]),
                quantize_channel(color[1]),
                quantize_channel(color[2]),
            ]
        )


# =============================================================================
# Frame Renderer
# =============================================================================


class FrameRenderer:
    """Renders scenes into a fixed-size pixel buffer.

    The Taichi pixel field is allocated once per renderer and reused for
    every frame.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the pixel buffer.

        Args:
            width: Image width in pixels (max MAX_IMAGE_WIDTH).
            height: Image height in pixels (max MAX_IMAGE_HEIGHT).

        Raises:
            ValueError: If dimensions are not positive or exceed the maximum.
        """
        _check_dimensions(width, height)
        self._width = width
        self._height = height
        self._pixels = ti.Vector.field(3, dtype=ti.i32, shape=(height, width))

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    def render(
        self,
        scene: Scene,
        fov_degrees: float = DEFAULT_FOV_DEGREES,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> npt.NDArray[np.uint8]:
        """Render the scene's current state.

        Args:
            scene: The scene to render. It is not modified.
            fov_degrees: Vertical field of view in degrees.
            max_depth: Maximum number of surface interactions per ray.

        Returns:
            uint8 array of shape (height, width, 3), top row first.

        Raises:
            ValueError: If the field of view or depth is out of range.
        """
        _check_depth(max_depth)
        scale = fov_scale(fov_degrees)
        _render_kernel(scene, self._pixels, self._width, self._height, scale, max_depth)
        return self._pixels.to_numpy().astype(np.uint8)

    def __repr__(self) -> str:
        """Return a string representation of the renderer."""
        return f"FrameRenderer(width={self.width}, height={self.height})"


# Renderers reused by render_frame(), keyed by (width, height)
_renderers: dict[tuple[int, int], FrameRenderer] = {}


def get_renderer(width: int, height: int) -> FrameRenderer:
    """Get a shared FrameRenderer for the given frame size."""
    key = (width, height)
    if key not in _renderers:
        _renderers[key] = FrameRenderer(width, height)
    return _renderers[key]


def render_frame(
    scene: Scene,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    fov_degrees: float = DEFAULT_FOV_DEGREES,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> npt.NDArray[np.uint8]:
    """Render the current state of a scene into a new RGB buffer.

    Args:
        scene: The scene to render. It is not modified.
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Vertical field of view in degrees.
        max_depth: Maximum number of surface interactions per ray.

    Returns:
        uint8 array of shape (height, width, 3), top row first.

    Raises:
        ValueError: If any parameter is out of range.
    """
    return get_renderer(width, height).render(scene, fov_degrees, max_depth)
