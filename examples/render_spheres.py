#!/usr/bin/env python3
"""Render a three-sphere scene.

This script demonstrates end-to-end rendering through the Python API: it
builds the scene in code, renders it in parallel bands and saves a PNG. The
same scene is available as examples/scenes/three_spheres.json for the
command line tool.

Usage:
    python examples/render_spheres.py [options]

Options:
    --scale SCALE       Scene scale; the image is (32 * SCALE) x (24 * SCALE) (default: 20)
    --jobs JOBS         Number of bands rendered in parallel (default: 4)
    --output OUTPUT     Output file path (default: spheres.png)
    --save-scene PATH   Also write the scene description as JSON
    --quiet             Suppress progress output

Example:
    python examples/render_spheres.py --scale 40 --jobs 8
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from spheretracer.config import RenderConfig, init_taichi
from spheretracer.scene.model import (
    Color,
    ColoredSphere,
    Frustum,
    Plane2d,
    Point,
    Point2d,
    Scene,
    SphereShape,
)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a three-sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=20.0,
        help="Scene scale (default: 20)",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=4,
        help="Number of bands rendered in parallel (default: 4)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--save-scene",
        type=str,
        default=None,
        help="Also write the scene description as JSON",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def create_three_spheres_scene(scale: float = 20.0) -> Scene:
    """Three spheres under a point light, seen through a widening frustum.

    The near plane is 32x24 units before scaling, so the image is
    (32 * scale) x (24 * scale) pixels.
    """

    def point(x: float, y: float, z: float) -> Point:
        return Point(x * scale, y * scale, z * scale)

    def plane(half_width: float, half_height: float, z: float) -> Plane2d:
        return Plane2d(
            tl=Point2d(-half_width * scale, half_height * scale),
            br=Point2d(half_width * scale, -half_height * scale),
            z=z * scale,
        )

    objects = (
        ColoredSphere(SphereShape(point(0, 0, 30), 8 * scale), Color(0.9, 0.2, 0.2)),
        ColoredSphere(SphereShape(point(-14, 6, 40), 6 * scale), Color(0.2, 0.8, 0.3)),
        ColoredSphere(SphereShape(point(12, 14, 18), 3 * scale), Color(0.3, 0.3, 1.0)),
    )
    return Scene(
        frustum=Frustum(near=plane(16, 12, 0), far=plane(48, 36, 60)),
        light=point(20, 40, -10),
        objects=objects,
        background=Color(0.1, 0.1, 0.3),
        kd=0.7,
    )


def render_spheres(
    scale: float = 20.0,
    jobs: int = 4,
    output_path: str = "spheres.png",
    scene_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render the three-sphere scene and save to file.

    Args:
        scale: Scene scale, see create_three_spheres_scene.
        jobs: Number of bands rendered in parallel.
        output_path: Output file path (PNG).
        scene_path: If given, the scene is also saved there as JSON.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretracer.core.renderer import render
    from spheretracer.output.export import save_png
    from spheretracer.scene.loader import save_scene

    scene = create_three_spheres_scene(scale)
    width, height = scene.image_size
    if scene_path is not None:
        save_scene(scene, scene_path)
        if not quiet:
            print(f"Scene written to: {Path(scene_path).absolute()}")

    if not quiet:
        print(f"Rendering {width}x{height} image in {jobs} bands...")

    start_time = time.time()
    image = render(scene, parallelism=jobs)

    output_file = Path(output_path)
    save_png(image, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    config = RenderConfig.from_env()
    init_taichi(config)

    try:
        render_spheres(
            scale=args.scale,
            jobs=args.jobs,
            output_path=args.output,
            scene_path=args.save_scene,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
