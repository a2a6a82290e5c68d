"""Per-pixel visibility and shading.

For every pixel a primary ray is cast through the frustum. What happens next
depends on whether it hits an object:

    - Miss: a ray from the far-plane end of the primary ray toward the light
      decides whether the background is in shadow. Shadowed background is
      drawn at half intensity.
    - Hit: a shadow ray is cast from the light to the hit point. If the
      nearest object along it is a different object, the hit point is in its
      shadow and gets the flat color (1 - kd) * object_color. Otherwise the
      point is lit and shaded by shade_hit.

shade_hit blends a diffuse term (weighted by kd) with an ambient term
(weighted by 1 - kd), both attenuated by the cosine between the surface
normal and the direction to the light:

    color = factor * kd * object_color + factor * (1 - kd)

The two shadow formulas are deliberately different.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from spheretracer.core.shading import setup_lighting
    >>> setup_lighting(light=(0, 10, -10), background=(0, 0, 0.2), kd=0.5)
    >>> # Inside a kernel:
    >>> # color = render_pixel(x, y)
"""

import taichi as ti

from spheretracer.camera.frustum import primary_ray
from spheretracer.core.ray import Line, dot_product, unit_vector, vec3, vector_between
from spheretracer.geometry.sphere import sphere_normal_at
from spheretracer.scene.intersection import (
    cast_ray,
    get_sphere,
    get_sphere_color,
    ray_hits_any_object,
)

# Background intensity scale for pixels whose background is shadowed
BACKGROUND_SHADOW_SCALE = 0.5

# =============================================================================
# Lighting Configuration
# =============================================================================

_light_position = ti.Vector.field(3, dtype=ti.f64, shape=())
_background = ti.Vector.field(3, dtype=ti.f64, shape=())
_kd = ti.field(dtype=ti.f64, shape=())


def setup_lighting(
    light: tuple[float, float, float],
    background: tuple[float, float, float],
    kd: float,
) -> None:
    """Configure the point light, background color and diffuse coefficient.

    Args:
        light: Position of the point light.
        background: Background color (R, G, B), each in [0, 1].
        kd: Diffuse coefficient in [0, 1].
    """
    _light_position[None] = [light[0], light[1], light[2]]
    _background[None] = [background[0], background[1], background[2]]
    _kd[None] = kd


# =============================================================================
# Shading
# =============================================================================


@ti.func
def diffuse_shading(factor: ti.f64, kd: ti.f64, channel):
    """Blend diffuse and ambient contributions for a channel (or a vec3).

    Args:
        factor: Cosine between surface normal and light direction, >= 0.
        kd: Diffuse coefficient. The ambient coefficient is 1 - kd.
        channel: Object color channel value, or a whole color.
    """
    ka = 1.0 - kd
    return factor * kd * channel + factor * ka


@ti.func
def shade_hit(index: ti.i32, point: vec3) -> vec3:
    """Color of a lit point on the surface of object ``index``.

    Light arriving from behind the surface contributes nothing.
    """
    normal = sphere_normal_at(get_sphere(index), point)
    light = unit_vector(vector_between(_light_position[None], point))
    factor = ti.max(dot_product(light, normal), 0.0)
    return diffuse_shading(factor, _kd[None], get_sphere_color(index))


@ti.func
def render_pixel(x: ti.f64, y: ti.f64) -> vec3:
    """Compute the color seen through the near-plane position (x, y).

    Args:
        x: Near-plane x coordinate.
        y: Near-plane y coordinate.

    Returns:
        The pixel color, each channel in [0, 1].
    """
    ray = primary_ray(x, y)
    hit = cast_ray(ray)
    light = _light_position[None]
    kd = _kd[None]

    color = vec3(0.0, 0.0, 0.0)
    if hit.index >= 0:
        # Is the hit point shadowed by another object?
        shadow = cast_ray(Line(origin=light, target=hit.point))
        if shadow.index >= 0 and shadow.index != hit.index:
            color = (1.0 - kd) * get_sphere_color(hit.index)
        else:
            color = shade_hit(hit.index, hit.point)
    else:
        background = _background[None]
        if ray_hits_any_object(Line(origin=ray.target, target=light)) == 1:
            color = background * BACKGROUND_SHADOW_SCALE
        else:
            color = background

    return color
