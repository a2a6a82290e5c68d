"""Frustum camera: primary ray generation from near-plane positions.

The camera is the viewing frustum between two planes orthogonal to the
z-axis. A near-plane position (x, y) is extrapolated to the far plane by
scaling each coordinate with the ratio of the plane extents:

    xfar = x * far.dx / near.dx
    yfar = y * far.dy / near.dy

and the primary ray runs from (x, y, near.z) to (xfar, yfar, far.z). Equal
planes give an orthographic projection; a larger far plane widens the field
of view.

Image pixel (px, py), with row py counted from the top, sits at near-plane
position (near.tl.x + px, near.tl.y - py), so the image always covers the
near plane itself, wherever it sits. Rows deliberately start at near.tl.y
rather than at -near.br.y, and y is scaled by the height ratio rather than
by far.dy / near.dx. The alternatives agree only for square near planes
centered on y = 0.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from spheretracer.camera.frustum import setup_frustum, primary_ray
    >>> setup_frustum(scene.frustum)
    >>> # Inside a kernel:
    >>> # line = primary_ray(0.0, 0.0)
"""

import taichi as ti

from spheretracer.core.ray import Line, vec3
from spheretracer.scene.model import Frustum

# =============================================================================
# Taichi Fields for Frustum State
# =============================================================================

# Near plane top-left corner and extents (dx, dy)
_near_tl = ti.Vector.field(2, dtype=ti.f64, shape=())
_near_extent = ti.Vector.field(2, dtype=ti.f64, shape=())
_near_z = ti.field(dtype=ti.f64, shape=())

# Far plane extents (dx, dy); its corners do not enter the projection
_far_extent = ti.Vector.field(2, dtype=ti.f64, shape=())
_far_z = ti.field(dtype=ti.f64, shape=())


def setup_frustum(frustum: Frustum) -> None:
    """Load the frustum planes into the camera fields.

    The frustum must have been validated: degenerate planes would make the
    extrapolation divide by zero.

    Args:
        frustum: The viewing frustum of the scene.
    """
    near, far = frustum.near, frustum.far
    _near_tl[None] = [near.tl.x, near.tl.y]
    _near_extent[None] = [near.dx, near.dy]
    _near_z[None] = near.z
    _far_extent[None] = [far.dx, far.dy]
    _far_z[None] = far.z


@ti.func
def pixel_position(px: ti.i32, py: ti.i32):
    """Near-plane coordinates of an image pixel.

    Returns:
        A tuple (x, y).
    """
    tl = _near_tl[None]
    return tl.x + ti.cast(px, ti.f64), tl.y - ti.cast(py, ti.f64)


@ti.func
def far_point(x: ti.f64, y: ti.f64) -> vec3:
    """Extrapolate a near-plane position onto the far plane."""
    near = _near_extent[None]
    far = _far_extent[None]
    xfar = x * far.x / near.x
    yfar = y * far.y / near.y
    return vec3(xfar, yfar, _far_z[None])


@ti.func
def primary_ray(x: ti.f64, y: ti.f64) -> Line:
    """Ray from the near-plane position (x, y) to its far-plane counterpart."""
    return Line(origin=vec3(x, y, _near_z[None]), target=far_point(x, y))
