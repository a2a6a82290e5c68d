"""Pytest configuration for spheretracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and a few
reference scenes.

Modules that declare Taichi fields are imported inside tests and fixtures,
after the session fixture has initialized Taichi.
"""

import pytest
import taichi as ti

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


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Calling ti.init() again would reset the runtime and invalidate the
    module-level fields, so tests must never re-initialize.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_scene_data():
    """Clear sphere storage before and after each test."""
    from spheretracer.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


def make_grid_scene(
    objects=(),
    background=Color(0.0, 0.0, 1.0),
    light=Point(7.0, 5.0, -20.0),
    kd=0.5,
):
    """Orthographic 10x10 scene: pixel (px, py) looks along +z at (px, 10 - py)."""
    frustum = Frustum(
        near=Plane2d(tl=Point2d(0.0, 10.0), br=Point2d(10.0, 0.0), z=-10.0),
        far=Plane2d(tl=Point2d(0.0, 10.0), br=Point2d(10.0, 0.0), z=10.0),
    )
    return Scene(frustum=frustum, light=light, objects=tuple(objects), background=background, kd=kd)


@pytest.fixture
def red_sphere():
    """Red sphere of radius 2 centered at (7, 5, 0)."""
    return ColoredSphere(SphereShape(Point(7.0, 5.0, 0.0), 2.0), Color(1.0, 0.0, 0.0))


@pytest.fixture
def single_sphere_scene(red_sphere):
    """Orthographic 10x10 scene holding only the red sphere."""
    return make_grid_scene(objects=(red_sphere,))


@pytest.fixture
def perspective_scene():
    """Three spheres seen through a widening frustum."""
    frustum = Frustum(
        near=Plane2d(tl=Point2d(-16.0, 12.0), br=Point2d(16.0, -12.0), z=0.0),
        far=Plane2d(tl=Point2d(-48.0, 36.0), br=Point2d(48.0, -36.0), z=60.0),
    )
    objects = (
        ColoredSphere(SphereShape(Point(0.0, 0.0, 30.0), 8.0), Color(0.9, 0.2, 0.2)),
        ColoredSphere(SphereShape(Point(-14.0, 6.0, 40.0), 6.0), Color(0.2, 0.8, 0.3)),
        ColoredSphere(SphereShape(Point(12.0, 14.0, 18.0), 3.0), Color(0.3, 0.3, 1.0)),
    )
    return Scene(
        frustum=frustum,
        light=Point(20.0, 40.0, -10.0),
        objects=objects,
        background=Color(0.1, 0.1, 0.3),
        kd=0.7,
    )


@pytest.fixture
def grid_scene():
    """Factory for orthographic 10x10 scenes, see make_grid_scene."""
    return make_grid_scene
