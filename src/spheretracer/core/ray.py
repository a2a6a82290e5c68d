"""Line data structure and vector utilities for ray casting.

This module provides the Line dataclass used for both primary and shadow
rays, and the point/vector arithmetic the intersection and shading code is
built on. Points and vectors share the same ``vec3`` type; a vector is
derived from two points as ``head - tail``.

All functions are Taichi functions and must be called from within kernels.
Everything is computed in 64-bit floats.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from spheretracer.core.ray import Line, vec3, vector_between
    >>> # Inside a kernel:
    >>> # line = Line(origin=vec3(0, 0, 0), target=vec3(4, 2, 0))
    >>> # v = vector_between(line.target, line.origin)
"""

import sys

import taichi as ti

# 64-bit 3D vector used for both points and vectors
vec3 = ti.types.vector(3, ti.f64)

# Parameter reported for lines that miss every object
T_MAX = sys.float_info.max


@ti.dataclass
class Line:
    """A line segment from origin toward target.

    The segment also stands for the infinite line through both points:
    intersection parameters outside [0, 1] are still reported.

    Attributes:
        origin: The point the line starts at (t = 0).
        target: The point the line passes through at t = 1.
    """

    origin: vec3
    target: vec3


@ti.func
def line_at(line: Line, t: ti.f64) -> vec3:
    """Compute the point at parameter t along the line."""
    return line.origin + t * (line.target - line.origin)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def vector_between(head: vec3, tail: vec3) -> vec3:
    """Vector pointing from tail to head (``head - tail``)."""
    return head - tail


@ti.func
def dot_product(a: vec3, b: vec3) -> ti.f64:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def magnitude(v: vec3) -> ti.f64:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(dot_product(v, v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The input must not be zero-length; unlike ``tm.normalize`` there is no
    guard, a zero vector yields NaN components.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    m = magnitude(v)
    return vec3(v.x / m, v.y / m, v.z / m)


# =============================================================================
# Equality Helpers
# =============================================================================


@ti.func
def floats_equal(a: ti.f64, b: ti.f64, epsilon: ti.f64) -> ti.i32:
    """Return 1 if a and b differ by less than epsilon."""
    return ti.abs(a - b) < epsilon


@ti.func
def points_equal(a: vec3, b: vec3, epsilon: ti.f64) -> ti.i32:
    """Return 1 if all components of a and b are within epsilon."""
    return (
        floats_equal(a.x, b.x, epsilon)
        and floats_equal(a.y, b.y, epsilon)
        and floats_equal(a.z, b.z, epsilon)
    )


@ti.func
def vectors_equal(a: vec3, b: vec3, epsilon: ti.f64) -> ti.i32:
    """Return 1 if all components of a and b are within epsilon."""
    return points_equal(a, b, epsilon)
