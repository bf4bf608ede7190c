"""Interactive preview window using Taichi GGUI.

This module shows animation frames in a window as they are produced, using
Taichi's ti.ui.Window and canvas system.

Features:
    - Live display of frames from an AnimationLoop
    - Support for updating the display from uint8 or float NumPy arrays
    - Pause, time-step and export controls in a GUI panel
    - Headless detection for test and CI environments

Example:
    >>> import numpy as np
    >>> from orbitrace.preview.interactive import InteractivePreview
    >>>
    >>> preview = InteractivePreview(800, 600)
    >>> preview.update_image(np.zeros((600, 800, 3), dtype=np.uint8))
    >>> preview.run()

Animation Example:
    >>> from orbitrace.core.animator import AnimationLoop
    >>> from orbitrace.scene.layout import create_orbit_scene
    >>>
    >>> loop = AnimationLoop(create_orbit_scene())
    >>> preview = InteractivePreview(800, 600)
    >>> preview.run_animation(loop)  # Ticks until the window is closed
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from orbitrace.preview.export import frame_to_float, save_png

if TYPE_CHECKING:
    import numpy.typing as npt

    from orbitrace.core.animator import AnimationLoop

# Range of the time-step slider
MIN_TIME_STEP = 0.0
MAX_TIME_STEP = 0.2


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    This class wraps ti.ui.Window to display rendered frames in real time.
    It manages the window, canvas and display buffer.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Orbit Scene - Interactive Preview",
    ) -> None:
        """Initialize the preview.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.

        Note:
            Taichi must be initialized first. The window itself is created
            lazily, so a preview can be constructed in headless environments.
        """
        self.width = width
        self.height = height
        self._title = title
        self._is_initialized = False
        self._paused = False
        self._last_frame: npt.NDArray[np.uint8] | None = None

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Taichi canvases index images as (x, y) with y pointing up
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    @property
    def paused(self) -> bool:
        """Whether run_animation() is holding the current frame."""
        return self._paused

    @property
    def last_frame(self) -> npt.NDArray[np.uint8] | None:
        """The most recent uint8 frame passed to update_image()."""
        return self._last_frame

    def update_image(self, image: npt.NDArray[np.uint8] | npt.NDArray[np.float32]) -> None:
        """Update the display image from a NumPy array.

        Args:
            image: Array of shape (height, width, 3), top row first. Either a
                uint8 frame from the renderer or float32 values in [0, 1].

        Raises:
            ValueError: If image shape doesn't match (height, width, 3).
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(f"Image shape {image.shape} doesn't match expected {expected_shape}")

        if image.dtype == np.uint8:
            self._last_frame = image
            image = frame_to_float(image)

        # NumPy frames are (row, column) from the top; flip and transpose to (x, y)
        image_transposed = np.ascontiguousarray(
            np.transpose(np.flipud(image), (1, 0, 2)), dtype=np.float32
        )
        self.display_image.from_numpy(image_transposed)

    def is_running(self) -> bool:
        """Check if the window is still open."""
        return self.window.running

    def show_frame(self) -> None:
        """Present the current display image.

        Call this in a loop for continuous updates.
        """
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Show the current display image until the window is closed."""
        self._initialize_window()

        while self.is_running():
            self.show_frame()

    def close(self) -> None:
        """Close the preview window.

        After calling this, the window cannot be reopened.
        """
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        # On macOS, display is always available if not in SSH
        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            if ssh_connection and not display:
                return False
            return True

        if display or wayland:
            return True

        if os.name == "nt":
            return True

        return False

    # =========================================================================
    # Animation Support
    # =========================================================================

    def run_animation(self, loop: AnimationLoop, max_frames: int | None = None) -> int:
        """Tick an animation loop and display every frame.

        Each iteration of the window loop advances the scene by the loop's
        time step and renders it, unless the preview is paused. Blocks until
        the window is closed or max_frames frames have been produced.

        GUI Controls:
            - Pause checkbox
            - Time step slider (MIN_TIME_STEP to MAX_TIME_STEP)
            - Export PNG button

        Args:
            loop: The AnimationLoop to drive. Its settings must match the
                preview size.
            max_frames: Optional frame limit.

        Returns:
            The number of frames produced.

        Raises:
            ValueError: If the loop's frame size differs from the preview.
        """
        settings = loop.settings
        if (settings.width, settings.height) != (self.width, self.height):
            raise ValueError(
                f"Loop frame size {settings.width}x{settings.height} doesn't match "
                f"preview size {self.width}x{self.height}"
            )

        self._initialize_window()
        self.update_image(loop.render_current())

        produced = 0
        while self.is_running():
            if max_frames is not None and produced >= max_frames:
                break

            if not self._paused:
                self.update_image(loop.tick())
                produced += 1

            self._draw_gui_panel(loop)
            self.show_frame()

        return produced

    def _draw_gui_panel(self, loop: AnimationLoop) -> None:
        with self.window.GUI.sub_window("Animation", 0.02, 0.02, 0.28, 0.18) as gui:
            gui.text(f"t = {loop.scene.time:.2f}  frame {loop.frame_count}")
            self._paused = gui.checkbox("Paused", self._paused)
            loop.settings.time_step = gui.slider_float(
                "Time step",
                loop.settings.time_step,
                minimum=MIN_TIME_STEP,
                maximum=MAX_TIME_STEP,
            )
            if gui.button("Export PNG"):
                self._export_png(loop)

    def _export_png(self, loop: AnimationLoop) -> None:
        """Export the displayed frame to a timestamped PNG file.

        Generates a filename in the format orbit_YYYYMMDD_HHMMSS.png.
        """
        if self._last_frame is None:
            print("Error: No frame available for export")
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"orbit_{timestamp}.png"
        save_png(self._last_frame, filename)
        print(f"Exported: {filename} (t = {loop.scene.time:.3f})")
