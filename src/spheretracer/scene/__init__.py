"""Scene module for scene description and ray-scene queries.

Components:
    model: Scene dataclasses and structural validation
    loader: Dictionary/JSON (de)serialization
    intersection: Sphere storage in Taichi fields, nearest-hit and
        any-hit ray queries

Only the pure-Python parts are imported here. The intersection module
declares Taichi fields and must be imported explicitly after ti.init().
"""

from .loader import load_scene, save_scene, scene_from_dict, scene_to_dict
from .model import (
    Color,
    ColoredSphere,
    Frustum,
    Plane2d,
    Point,
    Point2d,
    Scene,
    SphereShape,
    validate_scene,
)

__all__ = [
    "Scene",
    "Frustum",
    "Plane2d",
    "Point2d",
    "Point",
    "Color",
    "SphereShape",
    "ColoredSphere",
    "validate_scene",
    "load_scene",
    "save_scene",
    "scene_from_dict",
    "scene_to_dict",
]
