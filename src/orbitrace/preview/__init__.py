"""Preview module for frame output and visualization.

Components:
    export: PNG and frame-sequence export utilities (Pillow)
    interactive: Taichi GGUI-based interactive preview window

Frames arrive as uint8 RGB arrays of shape (height, width, 3) from the
renderer, so export writes them unchanged and the preview only converts them
to the canvas layout.

Example:
    >>> from orbitrace.preview import save_png, save_frame_sequence
    >>> save_png(frame, "frame.png")
    >>> save_frame_sequence(loop.frames(50), "out/")

For the interactive GGUI preview:
    >>> from orbitrace.preview import InteractivePreview
    >>> preview = InteractivePreview(800, 600)
    >>> preview.run_animation(loop)
"""

from orbitrace.preview.export import (
    frame_filename,
    frame_to_float,
    load_png,
    save_frame_sequence,
    save_png,
)
from orbitrace.preview.interactive import InteractivePreview

__all__ = [
    # Interactive preview
    "InteractivePreview",
    # Export functions
    "save_png",
    "load_png",
    "save_frame_sequence",
    "frame_filename",
    "frame_to_float",
]
