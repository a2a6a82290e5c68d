"""Core rendering module.

Components:
    ray: Line data structure and vector utilities
    shading: Visibility tests and diffuse/ambient shading per pixel
    renderer: Band-parallel rasterizer and the render() entry point

All per-ray math runs in Taichi functions in 64-bit floats.
"""

from .ray import (
    T_MAX,
    Line,
    dot_product,
    floats_equal,
    line_at,
    magnitude,
    points_equal,
    unit_vector,
    vec3,
    vector_between,
    vectors_equal,
)

# Note: shading and renderer are NOT imported here because they declare
# Taichi fields, which must only be created after ti.init(). Import them
# directly from spheretracer.core.shading / spheretracer.core.renderer.

__all__ = [
    "Line",
    "line_at",
    "vec3",
    "T_MAX",
    "vector_between",
    "dot_product",
    "magnitude",
    "unit_vector",
    "floats_equal",
    "points_equal",
    "vectors_equal",
]
