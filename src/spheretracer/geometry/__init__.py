"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with closed-form line-sphere intersection

Intersection routines are Taichi functions (@ti.func) meant to be called
from kernels.
"""

from .sphere import Intersection, Sphere, sphere_line_intersection, sphere_normal_at

__all__ = [
    "Sphere",
    "Intersection",
    "sphere_line_intersection",
    "sphere_normal_at",
]
