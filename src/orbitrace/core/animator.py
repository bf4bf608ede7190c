"""Fixed time-step animation driver.

An AnimationLoop owns a scene and a frame renderer and produces one frame per
tick: it advances the scene clock by the configured time step, then renders
the new state. Frame N therefore shows the scene at time N * time_step
(counting from the scene's time when the loop was created).

The loop supports:
- Single ticks for interactive front ends
- Batch runs with a per-frame callback
- A generator interface for iterative processing

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orbitrace.core.animator import AnimationLoop
    >>> from orbitrace.core.renderer import RenderSettings
    >>> from orbitrace.scene.layout import create_orbit_scene
    >>>
    >>> loop = AnimationLoop(create_orbit_scene(), RenderSettings(width=320, height=240))
    >>> for index, frame in loop.frames(10):
    ...     print(index, loop.scene.time)
"""

from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from orbitrace.core.renderer import FrameRenderer, RenderSettings
from orbitrace.scene.scene import Scene

# Type alias for frame callback
# Callback receives (frame_index, frame_buffer)
FrameCallback = Callable[[int, npt.NDArray[np.uint8]], None]


class AnimationLoop:
    """Advance-then-render loop over a single scene.

    Attributes:
        scene: The animated scene.
        settings: Render and time-step configuration.
        frame_count: Number of frames produced so far.
    """

    def __init__(self, scene: Scene, settings: RenderSettings | None = None) -> None:
        """Initialize the loop.

        Args:
            scene: Scene to animate and render.
            settings: Optional RenderSettings. If None, uses defaults.

        Raises:
            ValueError: If the settings are out of range.
        """
        if settings is None:
            settings = RenderSettings()
        settings.validate()

        self._scene = scene
        self._settings = settings
        self._renderer = FrameRenderer(settings.width, settings.height)
        self._frame_count = 0

    @property
    def scene(self) -> Scene:
        """Get the animated scene."""
        return self._scene

    @property
    def settings(self) -> RenderSettings:
        """Get the render settings."""
        return self._settings

    @property
    def frame_count(self) -> int:
        """Get the number of frames produced so far."""
        return self._frame_count

    def render_current(self) -> npt.NDArray[np.uint8]:
        """Render the scene's current state without advancing time."""
        return self._renderer.render(
            self._scene,
            fov_degrees=self._settings.fov_degrees,
            max_depth=self._settings.max_depth,
        )

    def tick(self) -> npt.NDArray[np.uint8]:
        """Advance the scene by one time step and render it.

        Returns:
            The new frame as a uint8 array of shape (height, width, 3).
        """
        self._scene.advance(self._settings.time_step)
        frame = self.render_current()
        self._frame_count += 1
        return frame

    def run(
        self,
        num_frames: int,
        callback: FrameCallback | None = None,
    ) -> npt.NDArray[np.uint8] | None:
        """Produce several frames in sequence.

        Args:
            num_frames: Number of ticks to run.
            callback: Optional function called after each frame with
                (frame_index, frame). frame_index counts from the loop's
                creation (or last reset).

        Returns:
            The last frame, or None if num_frames <= 0.
        """
        frame = None
        for index, frame in self.frames(num_frames):
            if callback is not None:
                callback(index, frame)
        return frame

    def frames(
        self, num_frames: int
    ) -> Generator[tuple[int, npt.NDArray[np.uint8]], None, None]:
        """Produce frames lazily, yielding after each tick.

        Args:
            num_frames: Number of ticks to run.

        Yields:
            Tuple of (frame_index, frame).
        """
        for _ in range(max(num_frames, 0)):
            frame = self.tick()
            yield (self._frame_count - 1, frame)

    def reset(self, t: float = 0.0) -> None:
        """Jump the scene clock to t and restart the frame counter.

        Args:
            t: Absolute simulation time to resume from.
        """
        self._scene.set_time(t)
        self._frame_count = 0

    def __repr__(self) -> str:
        """Return a string representation of the loop state."""
        return (
            f"AnimationLoop(width={self._settings.width}, height={self._settings.height}, "
            f"frames={self._frame_count}, time={self._scene.time:.3f})"
        )
