"""Unit tests for per-pixel shading.

Tests cover:
- Diffuse/ambient blend
- Lit points facing, grazing and facing away from the light
- Points shadowed by another object
- Background, shadowed and unshadowed
"""

import math

import pytest
import taichi as ti

from spheretracer.scene.model import Color, ColoredSphere, Point, SphereShape


def _make_pixel_kernel():
    """Build a kernel evaluating render_pixel at one near-plane position."""
    from spheretracer.core.shading import render_pixel

    result = ti.Vector.field(3, dtype=ti.f64, shape=())

    @ti.kernel
    def shade(x: ti.f64, y: ti.f64):
        result[None] = render_pixel(x, y)

    def run(x, y):
        shade(x, y)
        return tuple(result[None])

    return run


def _assert_color(actual, expected, tol=1e-12):
    for a, e in zip(actual, expected):
        assert abs(a - e) < tol, f"{actual} != {expected}"


class TestDiffuseShading:
    """Tests for diffuse_shading."""

    @pytest.mark.parametrize(
        "factor,kd,channel,expected",
        [
            (0.5, 0.7, 0.4, 0.5 * 0.7 * 0.4 + 0.5 * 0.3),
            (1.0, 0.5, 1.0, 1.0),
            (1.0, 0.0, 0.2, 1.0),
            (1.0, 1.0, 0.2, 0.2),
            (0.0, 0.5, 0.9, 0.0),
        ],
    )
    def test_blend(self, factor, kd, channel, expected):
        from spheretracer.core.shading import diffuse_shading

        result = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel(f: ti.f64, k: ti.f64, c: ti.f64):
            result[None] = diffuse_shading(f, k, c)

        test_kernel(factor, kd, channel)
        assert abs(result[None] - expected) < 1e-12


class TestLitHits:
    """Tests for points lit directly by the light."""

    def test_facing_the_light(self, single_sphere_scene):
        """Test a point whose normal points at the light gets factor 1."""
        from spheretracer.core.renderer import upload_scene

        upload_scene(single_sphere_scene)
        shade = _make_pixel_kernel()
        # Hit at (7, 5, -2); normal and light direction are both (0, 0, -1)
        _assert_color(shade(7.0, 5.0), (1.0, 0.5, 0.5))

    def test_oblique_hit(self, single_sphere_scene):
        """Test an off-center hit against the cosine law."""
        from spheretracer.core.renderer import upload_scene

        upload_scene(single_sphere_scene)
        shade = _make_pixel_kernel()

        z = -math.sqrt(3.0)
        normal = (0.5, 0.0, z / 2.0)
        to_light = (7.0 - 8.0, 0.0, -20.0 - z)
        length = math.sqrt(sum(c * c for c in to_light))
        factor = sum(n * c / length for n, c in zip(normal, to_light))
        expected = (factor, factor * 0.5, factor * 0.5)

        _assert_color(shade(8.0, 5.0), expected, tol=1e-9)

    def test_light_behind_surface(self, grid_scene, red_sphere):
        """Test light arriving from behind the surface contributes nothing."""
        from spheretracer.core.renderer import upload_scene

        upload_scene(grid_scene(objects=(red_sphere,), light=Point(7.0, 5.0, 20.0)))
        shade = _make_pixel_kernel()
        _assert_color(shade(7.0, 5.0), (0.0, 0.0, 0.0))

    def test_diffuse_coefficient_weights(self, grid_scene, red_sphere):
        """Test kd moves weight between object color and ambient white."""
        from spheretracer.core.renderer import upload_scene

        shade = _make_pixel_kernel()
        upload_scene(grid_scene(objects=(red_sphere,), kd=1.0))
        _assert_color(shade(7.0, 5.0), (1.0, 0.0, 0.0))
        upload_scene(grid_scene(objects=(red_sphere,), kd=0.0))
        _assert_color(shade(7.0, 5.0), (1.0, 1.0, 1.0))


class TestShadowedHits:
    """Tests for points shadowed by another object."""

    def test_shadowed_point_uses_flat_color(self, grid_scene, red_sphere):
        """Test a point behind an occluder gets (1 - kd) * object color."""
        from spheretracer.core.renderer import upload_scene

        # Light straight above the hit point (7, 5, -2), occluder in between.
        # The occluder is 7 units off the primary ray, so the ray misses it.
        occluder = ColoredSphere(SphereShape(Point(7.0, 12.0, -2.0), 1.0), Color(0.0, 1.0, 0.0))
        scene = grid_scene(
            objects=(red_sphere, occluder), light=Point(7.0, 25.0, -2.0), kd=0.5
        )
        upload_scene(scene)
        shade = _make_pixel_kernel()
        _assert_color(shade(7.0, 5.0), (0.5, 0.0, 0.0))

    def test_same_scene_without_occluder(self, grid_scene, red_sphere):
        """Test the unshadowed counterpart is shaded by the cosine law."""
        from spheretracer.core.renderer import upload_scene

        upload_scene(grid_scene(objects=(red_sphere,), light=Point(7.0, 25.0, -2.0)))
        shade = _make_pixel_kernel()
        # Light direction is orthogonal to the normal: factor 0
        _assert_color(shade(7.0, 5.0), (0.0, 0.0, 0.0))


class TestBackground:
    """Tests for pixels whose primary ray misses every object."""

    def test_unshadowed_background(self, single_sphere_scene):
        from spheretracer.core.renderer import upload_scene

        upload_scene(single_sphere_scene)
        shade = _make_pixel_kernel()
        _assert_color(shade(1.0, 1.0), (0.0, 0.0, 1.0))

    def test_shadowed_background_is_halved(self, single_sphere_scene):
        """Test the background behind the sphere, as seen from the light, is dimmed."""
        from spheretracer.core.renderer import upload_scene

        upload_scene(single_sphere_scene)
        shade = _make_pixel_kernel()
        # The primary ray at (7, 8) passes 3 units from the center, but the line
        # from (7, 8, 10) to the light at (7, 5, -20) crosses the sphere
        _assert_color(shade(7.0, 8.0), (0.0, 0.0, 0.5))

    def test_empty_scene_is_background(self, grid_scene):
        from spheretracer.core.renderer import upload_scene

        upload_scene(grid_scene(background=Color(0.25, 0.5, 0.75)))
        shade = _make_pixel_kernel()
        for x, y in [(0.0, 0.0), (7.0, 5.0), (9.0, 10.0)]:
            _assert_color(shade(x, y), (0.25, 0.5, 0.75))
