#!/usr/bin/env python3
"""Render frames of the animated orbit scene to PNG files.

This script builds the procedural orbit scene, advances it with a fixed time
step and writes every frame as a numbered PNG. With --frames 1 a single image
is written to --output; otherwise --output names a directory.

Usage:
    python examples/render_orbit_scene.py [options]

Options:
    --width WIDTH         Image width in pixels (default: 800)
    --height HEIGHT       Image height in pixels (default: 600)
    --fov DEGREES         Vertical field of view (default: 90)
    --depth DEPTH         Maximum trace depth (default: 5)
    --frames N            Number of frames to render (default: 1)
    --time-step DT        Simulation time per frame (default: 0.02)
    --start-time T        Scene time before the first frame (default: 0)
    --output PATH         Output file or directory (default: orbit_scene.png)
    --quiet               Suppress progress output

Example:
    python examples/render_orbit_scene.py --frames 100 --output frames/
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Ensure the package sources are importable for direct execution
_src_root = Path(__file__).parent.parent / "src"
if str(_src_root) not in sys.path:
    sys.path.insert(0, str(_src_root))

import taichi as ti  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render frames of the animated orbit scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=90.0,
        help="Vertical field of view in degrees (default: 90)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Maximum trace depth (default: 5)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of frames to render (default: 1)",
    )
    parser.add_argument(
        "--time-step",
        type=float,
        default=0.02,
        help="Simulation time per frame (default: 0.02)",
    )
    parser.add_argument(
        "--start-time",
        type=float,
        default=0.0,
        help="Scene time before the first frame (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="orbit_scene.png",
        help="Output file (single frame) or directory (default: orbit_scene.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_orbit_scene(
    width: int = 800,
    height: int = 600,
    fov_degrees: float = 90.0,
    max_depth: int = 5,
    num_frames: int = 1,
    time_step: float = 0.02,
    start_time: float = 0.0,
    output_path: str = "orbit_scene.png",
    quiet: bool = False,
) -> list[Path]:
    """Render frames of the orbit scene and save them.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Vertical field of view in degrees.
        max_depth: Maximum trace depth.
        num_frames: Number of frames to render.
        time_step: Simulation time added before each frame.
        start_time: Scene time the animation starts from.
        output_path: Output PNG (one frame) or directory (several frames).
        quiet: If True, suppress progress output.

    Returns:
        Paths of the saved images.
    """
    # Lazy imports to allow Taichi initialization first
    from orbitrace.core.animator import AnimationLoop
    from orbitrace.core.renderer import RenderSettings
    from orbitrace.preview.export import save_frame_sequence, save_png
    from orbitrace.scene.layout import create_orbit_scene

    if num_frames <= 0:
        raise ValueError(f"Number of frames must be positive, got {num_frames}")

    if not quiet:
        print(f"Creating orbit scene ({width}x{height})...")

    scene = create_orbit_scene()
    scene.set_time(start_time)

    settings = RenderSettings(
        width=width,
        height=height,
        fov_degrees=fov_degrees,
        max_depth=max_depth,
        time_step=time_step,
    )
    loop = AnimationLoop(scene, settings)

    if not quiet:
        print(f"Rendering {num_frames} frame(s) at depth {max_depth}...")

    start = time.time()

    def report_progress(frames):
        for index, frame in frames:
            if not quiet:
                elapsed = time.time() - start
                fps = (index + 1) / elapsed if elapsed > 0 else 0
                print(
                    f"\r  Progress: {index + 1}/{num_frames} frames "
                    f"(t = {scene.time:.3f}) - {fps:.1f} fps",
                    end="",
                    flush=True,
                )
            yield index, frame

    frames = report_progress(loop.frames(num_frames))
    target = Path(output_path)
    if num_frames == 1:
        _, frame = next(frames)
        save_png(frame, target)
        written = [target]
    else:
        written = save_frame_sequence(frames, target)

    if not quiet:
        print()  # Newline after progress

    total_time = time.time() - start
    if not quiet:
        print(f"Saved to: {target.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return written


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_orbit_scene(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            max_depth=args.depth,
            num_frames=args.frames,
            time_step=args.time_step,
            start_time=args.start_time,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
