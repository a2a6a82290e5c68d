"""Scene-level ray queries over the sphere list.

The scene's spheres are mirrored into Taichi fields (Structure of Arrays
layout) so kernels can scan them. There is no acceleration structure: every
query is a linear scan in scene order.

Two queries are provided:
    - ``cast_ray``: nearest intersection (smallest t, first object wins ties)
    - ``ray_hits_any_object``: existence test, stops at the first intersection

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from spheretracer.scene.intersection import add_sphere, clear_scene, vec3
    >>> clear_scene()
    >>> add_sphere((7.0, 5.0, 0.0), 2.0, color=(1.0, 0.0, 0.0))
    >>> # Use cast_ray within a Taichi kernel
"""

import taichi as ti

from spheretracer.core.ray import T_MAX, Line, vec3
from spheretracer.geometry.sphere import Sphere, sphere_line_intersection


@ti.dataclass
class RayHit:
    """Nearest object hit by a ray.

    Attributes:
        index: Scene index of the object, or -1 if the ray hits nothing.
        point: The intersection point. Only valid if index >= 0.
    """

    index: ti.i32
    point: vec3


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres.

    Only the count is reset; stale field data is overwritten by later
    add_sphere calls.
    """
    num_spheres[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    color: tuple[float, float, float] = (1.0, 1.0, 1.0),
) -> int:
    """Append a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        color: The sphere color as (R, G, B), each in [0, 1].

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_colors[idx] = [color[0], color[1], color[2]]
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Get the sphere stored at index."""
    return Sphere(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def get_sphere_color(index: ti.i32) -> vec3:
    """Get the color of the sphere stored at index."""
    return sphere_colors[index]


@ti.func
def cast_ray(line: Line) -> RayHit:
    """Find the object nearest to the line origin along the line.

    Nearest means smallest intersection parameter t. Negative t values take
    part in the comparison like any other. On equal t the object that comes
    first in scene order is kept.

    Args:
        line: The ray to cast.

    Returns:
        A RayHit with index -1 if no object intersects the line.
    """
    t_min = T_MAX
    index = -1
    point = vec3(0.0, 0.0, 0.0)

    for i in range(num_spheres[None]):
        rec = sphere_line_intersection(get_sphere(i), line)
        if rec.found == 1 and rec.t < t_min:
            t_min = rec.t
            index = i
            point = rec.point

    return RayHit(index=index, point=point)


@ti.func
def ray_hits_any_object(line: Line) -> ti.i32:
    """Test if the line intersects any object (shadow existence query).

    Args:
        line: The ray to test.

    Returns:
        1 if any sphere intersects the line, 0 otherwise.
    """
    hit_any = 0

    for i in range(num_spheres[None]):
        if hit_any == 0:
            rec = sphere_line_intersection(get_sphere(i), line)
            if rec.found == 1:
                hit_any = 1

    return hit_any
