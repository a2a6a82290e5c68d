"""Scene (de)serialization to plain dictionaries and JSON files.

The dictionary layout is:

    {
        "frustum": {
            "near": {"tl": [x, y], "br": [x, y], "z": z},
            "far":  {"tl": [x, y], "br": [x, y], "z": z}
        },
        "light": [x, y, z],
        "objects": [{"center": [x, y, z], "radius": r, "color": [r, g, b]}],
        "background": [r, g, b],
        "kd": 0.5
    }

Loading only checks the shape of the description. Range checks (negative
radius, channels outside [0, 1], ...) are left to Scene.validate, which
render always runs.

Example:
    >>> from spheretracer.scene.loader import load_scene
    >>> scene = load_scene("examples/scenes/three_spheres.json")
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from spheretracer.errors import SceneFormatError
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


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise SceneFormatError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise SceneFormatError(f"{where}: missing key {key!r}")
    return data[key]


def _floats(value: Any, count: int, where: str) -> list[float]:
    if not isinstance(value, (list, tuple)) or len(value) != count:
        raise SceneFormatError(f"{where}: expected a list of {count} numbers, got {value!r}")
    return [_float(v, where) for v in value]


def _float(value: Any, where: str) -> float:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _plane_from_dict(data: dict[str, Any], where: str) -> Plane2d:
    tl = _floats(_require(data, "tl", where), 2, f"{where}.tl")
    br = _floats(_require(data, "br", where), 2, f"{where}.br")
    z = _float(_require(data, "z", where), f"{where}.z")
    return Plane2d(tl=Point2d(*tl), br=Point2d(*br), z=z)


def _color_from_list(value: Any, where: str) -> Color:
    return Color(*_floats(value, 3, where))


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Build a Scene from its dictionary description.

    Args:
        data: Dictionary with 'frustum', 'light', 'objects', 'background'
            and 'kd' keys.

    Returns:
        The (not yet validated) scene.

    Raises:
        SceneFormatError: If a key is missing or a value is badly shaped.
    """
    frustum_data = _require(data, "frustum", "scene")
    frustum = Frustum(
        near=_plane_from_dict(_require(frustum_data, "near", "frustum"), "frustum.near"),
        far=_plane_from_dict(_require(frustum_data, "far", "frustum"), "frustum.far"),
    )

    light = Point(*_floats(_require(data, "light", "scene"), 3, "light"))

    objects_data = _require(data, "objects", "scene")
    if not isinstance(objects_data, list):
        raise SceneFormatError(f"objects: expected a list, got {type(objects_data).__name__}")
    objects = []
    for i, obj in enumerate(objects_data):
        where = f"objects[{i}]"
        center = Point(*_floats(_require(obj, "center", where), 3, f"{where}.center"))
        radius = _float(_require(obj, "radius", where), f"{where}.radius")
        color = _color_from_list(_require(obj, "color", where), f"{where}.color")
        objects.append(ColoredSphere(sphere=SphereShape(center=center, radius=radius), color=color))

    background = _color_from_list(_require(data, "background", "scene"), "background")
    kd = _float(_require(data, "kd", "scene"), "kd")

    return Scene(
        frustum=frustum,
        light=light,
        objects=tuple(objects),
        background=background,
        kd=kd,
    )


def _plane_to_dict(plane: Plane2d) -> dict[str, Any]:
    return {"tl": [plane.tl.x, plane.tl.y], "br": [plane.br.x, plane.br.y], "z": plane.z}


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization)."""
    return {
        "frustum": {
            "near": _plane_to_dict(scene.frustum.near),
            "far": _plane_to_dict(scene.frustum.far),
        },
        "light": list(scene.light.as_tuple()),
        "objects": [
            {
                "center": list(obj.sphere.center.as_tuple()),
                "radius": obj.sphere.radius,
                "color": list(obj.color.as_tuple()),
            }
            for obj in scene.objects
        ],
        "background": list(scene.background.as_tuple()),
        "kd": scene.kd,
    }


def load_scene(path: str | Path) -> Scene:
    """Load a scene from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        SceneFormatError: If the file is not valid JSON or not a valid
            scene description.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneFormatError(f"can not parse scene file {path}: {e}") from e
    return scene_from_dict(data)


def save_scene(scene: Scene, path: str | Path) -> None:
    """Write a scene to a JSON file."""
    Path(path).write_text(json.dumps(scene_to_dict(scene), indent=2) + "\n", encoding="utf-8")
