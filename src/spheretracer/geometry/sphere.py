"""Sphere primitive with closed-form ray-sphere intersection.

The intersection substitutes the parametric line equation

    P(t) = origin + t * (target - origin)

into the sphere equation |P - center|^2 = radius^2, which gives a quadratic
a*t^2 + b*t + c = 0 with

    d = target - origin
    a = dot(d, d)
    b = 2 * dot(d, origin - center)
    c = |center|^2 + |origin|^2 - 2 * dot(center, origin) - radius^2

Only the nearer root is ever used: rays are assumed to start outside every
object, so the entry point is the visible one.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from spheretracer.geometry.sphere import Sphere, sphere_line_intersection
    >>> # Use sphere_line_intersection within a Taichi kernel
"""

import taichi as ti

from spheretracer.core.ray import T_MAX, Line, unit_vector, vec3, vector_between


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (non-negative).
    """

    center: vec3
    radius: ti.f64


@ti.dataclass
class Intersection:
    """Result of a line-sphere intersection test.

    Attributes:
        found: 1 if the line intersects the sphere, 0 otherwise.
        t: Line parameter of the nearer intersection. May be negative when
            the sphere lies behind the line origin. T_MAX when found == 0.
        point: The intersection point, or the origin (0, 0, 0) when
            found == 0.
    """

    found: ti.i32
    t: ti.f64
    point: vec3


@ti.func
def sphere_line_intersection(sphere: Sphere, line: Line) -> Intersection:
    """Intersect a line with a sphere.

    Args:
        sphere: The sphere to test.
        line: The line to test. Its origin is t = 0, its target t = 1.

    Returns:
        An Intersection. ``found`` is 1 whenever the discriminant is
        non-negative, including when the nearer root is behind the origin.
    """
    o = line.origin
    center = sphere.center
    dx = line.target.x - o.x
    dy = line.target.y - o.y
    dz = line.target.z - o.z

    a = dx * dx + dy * dy + dz * dz
    b = 2.0 * dx * (o.x - center.x) + 2.0 * dy * (o.y - center.y) + 2.0 * dz * (o.z - center.z)
    c = (
        center.x * center.x
        + center.y * center.y
        + center.z * center.z
        + o.x * o.x
        + o.y * o.y
        + o.z * o.z
        - 2.0 * (center.x * o.x + center.y * o.y + center.z * o.z)
        - sphere.radius * sphere.radius
    )

    discriminant = b * b - 4.0 * a * c

    found = 0
    t = T_MAX
    point = vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        found = 1
        t = (-b - ti.sqrt(discriminant)) / (2.0 * a)
        point = vec3(o.x + t * dx, o.y + t * dy, o.z + t * dz)

    return Intersection(found=found, t=t, point=point)


@ti.func
def sphere_normal_at(sphere: Sphere, point: vec3) -> vec3:
    """Unit normal of the sphere at a surface point.

    Computed as ``vector_between(point, center)``; the shading formula is
    written against this head/tail order.

    Args:
        sphere: The sphere.
        point: A point on the surface. Must not coincide with the center.

    Returns:
        A unit vector.
    """
    return unit_vector(vector_between(point, sphere.center))
