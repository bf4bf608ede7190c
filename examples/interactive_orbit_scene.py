#!/usr/bin/env python3
"""Interactive orbit scene animation.

This script opens a preview window and animates the procedural orbit scene
live: every window frame advances the scene by the time step and renders it.

Usage:
    python examples/interactive_orbit_scene.py [--width W] [--height H] [--depth D]

Controls:
    - Paused: Hold the current frame
    - Time step: Simulation time per frame (0 to 0.2)
    - Export PNG: Save the displayed frame with a timestamp
"""

from __future__ import annotations

import argparse
import platform
import sys
from pathlib import Path

# Ensure the package sources are importable for direct execution
_src_root = Path(__file__).parent.parent / "src"
if str(_src_root) not in sys.path:
    sys.path.insert(0, str(_src_root))

import taichi as ti  # noqa: E402


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    On macOS, prefers Metal. Falls back to CPU if GPU is unavailable.

    Returns:
        Name of the backend being used.
    """
    system = platform.system()

    if system == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except Exception:
            pass

    # Try generic GPU (CUDA on Linux/Windows, Vulkan as fallback)
    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except Exception:
        pass

    ti.init(arch=ti.cpu)
    return "CPU"


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Animate the orbit scene in a window.")
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--fov", type=float, default=90.0, help="Field of view (default: 90)")
    parser.add_argument("--depth", type=int, default=5, help="Maximum trace depth (default: 5)")
    parser.add_argument(
        "--time-step", type=float, default=0.02, help="Time per frame (default: 0.02)"
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point for the interactive orbit scene.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    # Initialize Taichi first (before importing modules that use ti.kernel)
    backend = initialize_taichi()
    print(f"Taichi backend: {backend}")

    from orbitrace.core.animator import AnimationLoop
    from orbitrace.core.renderer import RenderSettings
    from orbitrace.preview.interactive import InteractivePreview
    from orbitrace.scene.layout import create_orbit_scene

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("This script requires a graphical display environment.")
        return 1

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            max_depth=args.depth,
            time_step=args.time_step,
        )
        loop = AnimationLoop(create_orbit_scene(), settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Creating interactive preview window ({args.width}x{args.height})...")
    preview = InteractivePreview(args.width, args.height)

    print("Starting animation...")
    print("  - Toggle 'Paused' to hold the current frame")
    print("  - Click 'Export PNG' to save the displayed frame")
    print("  - Close window to exit")
    print()

    try:
        frames = preview.run_animation(loop)
        print(f"Rendered {frames} frames (t = {loop.scene.time:.3f})")
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print("Preview window closed.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
