"""Taichi-based ray caster for scenes of spheres under a single point light.

Scenes are rendered with closed-form ray-sphere intersection and analytic
diffuse+ambient shading, one ray per pixel, no sampling and no global
illumination. The image is split into horizontal bands rendered in parallel.

Subpackages:
    core: Line and vector utilities, per-pixel shading, band renderer
    geometry: Sphere primitive and intersection
    camera: Frustum camera and primary ray generation
    scene: Scene model, validation, loading, and GPU-side scene storage
    output: PNG export

Taichi must be initialized (see spheretracer.config.init_taichi) before
anything that declares Taichi fields is imported, so this package only
imports the pure-Python parts eagerly.

Example:
    >>> from spheretracer.config import init_taichi
    >>> init_taichi()
    >>> import spheretracer
    >>> scene = spheretracer.load_scene("examples/scenes/three_spheres.json")
    >>> image = spheretracer.render(scene, parallelism=4)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spheretracer.errors import ConfigurationError, SceneFormatError
from spheretracer.scene.loader import load_scene, scene_from_dict, scene_to_dict
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

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

__version__ = "0.1.0"


def render(scene: Scene, parallelism: int = 1) -> npt.NDArray[np.uint8]:
    """Validate and render a scene. See spheretracer.core.renderer.render."""
    from spheretracer.core.renderer import render as _render

    return _render(scene, parallelism)


__all__ = [
    "render",
    "load_scene",
    "scene_from_dict",
    "scene_to_dict",
    "ConfigurationError",
    "SceneFormatError",
    "Scene",
    "Frustum",
    "Plane2d",
    "Point2d",
    "Point",
    "Color",
    "SphereShape",
    "ColoredSphere",
]
