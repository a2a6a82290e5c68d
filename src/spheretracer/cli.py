"""Command line interface: render a JSON scene to a PNG file.

Usage:
    spheretracer -i SCENE.json -o OUTPUT.png [options]
    python -m spheretracer -i SCENE.json -o OUTPUT.png [options]

Options:
    -j, --jobs JOBS         Number of image bands rendered in parallel
    -l, --loop LOOP         Number of renders, for timing runs (default: 1)
    --cpuprofile PATH       Write cProfile statistics of the render loop
    --arch ARCH             Taichi backend (default: cpu)
    -v, --verbose           Debug logging
    -q, --quiet             Suppress progress output

Example:
    spheretracer -i examples/scenes/three_spheres.json -o spheres.png -j 4
"""

from __future__ import annotations

import argparse
import cProfile
import logging
import sys
import time
from pathlib import Path

from spheretracer.config import SUPPORTED_ARCHS, RenderConfig, init_taichi


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="spheretracer",
        description="Render a JSON sphere scene to a PNG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--input", required=True, help="Input scene file (JSON)")
    parser.add_argument("-o", "--output", required=True, help="Output image file (PNG)")
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=defaults.parallelism,
        help=f"Number of parallel jobs (default: {defaults.parallelism})",
    )
    parser.add_argument(
        "-l",
        "--loop",
        type=int,
        default=1,
        help="Number of rendering loops, for profiling (default: 1)",
    )
    parser.add_argument(
        "--cpuprofile",
        type=str,
        default=None,
        help="Write cProfile statistics of the render loop to this file",
    )
    parser.add_argument(
        "--arch",
        choices=SUPPORTED_ARCHS,
        default=defaults.arch,
        help=f"Taichi backend (default: {defaults.arch})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def render_file(
    input_path: str,
    output_path: str,
    jobs: int = 1,
    loop: int = 1,
    cpuprofile: str | None = None,
    quiet: bool = False,
) -> Path:
    """Load a scene, render it ``loop`` times and save the last image.

    Taichi must already be initialized.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so that Taichi fields are created after initialization
    from spheretracer.core.renderer import render
    from spheretracer.output.export import save_png
    from spheretracer.scene.loader import load_scene

    scene = load_scene(input_path)
    width, height = scene.image_size
    if not quiet:
        print(f"Rendering {input_path} ({width}x{height}, {len(scene.objects)} objects)...")

    profiler = cProfile.Profile() if cpuprofile else None
    start_time = time.time()
    if profiler is not None:
        profiler.enable()
    try:
        image = render(scene, jobs)
        for _ in range(max(1, loop) - 1):
            image = render(scene, jobs)
    finally:
        if profiler is not None:
            profiler.disable()
            profiler.dump_stats(cpuprofile)
    total_time = time.time() - start_time

    output_file = Path(output_path)
    save_png(image, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    try:
        config = RenderConfig.from_env()
        config.arch = args.arch
        init_taichi(config)
        render_file(
            input_path=args.input,
            output_path=args.output,
            jobs=args.jobs,
            loop=args.loop,
            cpuprofile=args.cpuprofile,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
