"""Image export utilities for rendered frames.

Frames produced by the renderer are already quantized 8-bit RGB, so export is
a direct write through Pillow with no tone mapping or gamma correction.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from orbitrace.core.renderer import render_frame
    >>> from orbitrace.preview.export import save_png
    >>>
    >>> frame = render_frame(scene, 800, 600)
    >>> save_png(frame, "frame.png")
"""

from collections.abc import Iterable
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_frame(buffer: npt.NDArray[np.uint8]) -> None:
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ValueError(f"Frame must have shape (height, width, 3), got {buffer.shape}")
    if buffer.dtype != np.uint8:
        raise ValueError(f"Frame must have dtype uint8, got {buffer.dtype}")


def save_png(buffer: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a rendered frame as a PNG file.

    Args:
        buffer: Frame of shape (height, width, 3) with dtype uint8, top row
            first.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the buffer shape or dtype is wrong.
    """
    _check_frame(buffer)
    pil_image = PILImage.fromarray(np.ascontiguousarray(buffer))
    pil_image.save(filepath)


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load a PNG written by save_png back into a frame buffer.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.
    """
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)


def frame_filename(index: int, prefix: str = "frame") -> str:
    """Zero-padded file name for frame number index, e.g. frame_0007.png."""
    return f"{prefix}_{index:04d}.png"


def save_frame_sequence(
    frames: Iterable[tuple[int, npt.NDArray[np.uint8]]],
    directory: str | Path,
    *,
    prefix: str = "frame",
) -> list[Path]:
    """Save a sequence of frames as numbered PNG files.

    Accepts the (frame_index, frame) pairs yielded by AnimationLoop.frames().
    The output directory is created if needed.

    Args:
        frames: Iterable of (frame_index, frame) pairs.
        directory: Output directory.
        prefix: File name prefix.

    Returns:
        Paths of the written files, in order.

    Example:
        >>> loop = AnimationLoop(create_orbit_scene())
        >>> save_frame_sequence(loop.frames(50), "out/")
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for index, frame in frames:
        path = out_dir / frame_filename(index, prefix)
        save_png(frame, path)
        written.append(path)
    return written


def frame_to_float(buffer: npt.NDArray[np.uint8]) -> npt.NDArray[np.float32]:
    """Convert an 8-bit frame to float32 values in [0, 1].

    Raises:
        ValueError: If the buffer shape or dtype is wrong.
    """
    _check_frame(buffer)
    return buffer.astype(np.float32) / 255.0
