"""Band-parallel rasterizer: the public rendering entry point.

``render`` validates the scene, mirrors it into the Taichi fields used by
the shading functions, and launches a single kernel whose outermost loop
runs over horizontal bands of the image. Taichi parallelizes that outermost
loop, so every band is an independent task; each band writes only its own
rows of the shared output array and the kernel returning is the only join
point.

Band layout for ``height`` rows and ``n`` bands: every band gets
``height // n`` rows and the last band also takes the remainder, so no row
is left unrendered whatever the parallelism.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from spheretracer.core.renderer import render
    >>> image = render(scene, parallelism=4)
    >>> image.shape  # (height, width, 3), dtype uint8
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti

from spheretracer.camera.frustum import pixel_position, setup_frustum
from spheretracer.core.shading import render_pixel, setup_lighting
from spheretracer.errors import ConfigurationError
from spheretracer.scene.intersection import MAX_SPHERES, add_sphere, clear_scene
from spheretracer.scene.model import Scene, validate_scene

logger = logging.getLogger(__name__)


def band_bounds(height: int, num_bands: int) -> list[tuple[int, int]]:
    """Split ``height`` rows into ``num_bands`` contiguous half-open ranges.

    Args:
        height: Number of image rows.
        num_bands: Number of bands. Values below 1 are clamped to 1.

    Returns:
        A list of (start_row, end_row) pairs covering [0, height) in order.
        The last band absorbs the rows left over by the integer division.
    """
    num_bands = max(1, num_bands)
    band_height = height // num_bands
    bounds = []
    for n in range(num_bands):
        start = band_height * n
        end = height if n == num_bands - 1 else start + band_height
        bounds.append((start, end))
    return bounds


def upload_scene(scene: Scene) -> None:
    """Copy a validated scene into the Taichi fields read by the kernels."""
    clear_scene()
    for obj in scene.objects:
        add_sphere(obj.sphere.center.as_tuple(), obj.sphere.radius, obj.color.as_tuple())
    setup_lighting(scene.light.as_tuple(), scene.background.as_tuple(), scene.kd)
    setup_frustum(scene.frustum)


@ti.func
def _to_channel8(value: ti.f64) -> ti.u8:
    # Truncate, do not round: 0.2 -> 51
    return ti.cast(ti.cast(value * 255.0, ti.i32), ti.u8)


@ti.kernel
def _render_bands(
    image: ti.types.ndarray(dtype=ti.u8, ndim=3),
    bands: ti.types.ndarray(dtype=ti.i32, ndim=2),
):
    """Render every band; the outermost loop runs one band per task."""
    ti.loop_config(block_dim=1)
    for b in range(bands.shape[0]):
        for py in range(bands[b, 0], bands[b, 1]):
            for px in range(image.shape[1]):
                x, y = pixel_position(px, py)
                color = render_pixel(x, y)
                for c in ti.static(range(3)):
                    image[py, px, c] = _to_channel8(color[c])


def render(scene: Scene, parallelism: int = 1) -> npt.NDArray[np.uint8]:
    """Validate and render a scene.

    Args:
        scene: The scene to render. It is not modified.
        parallelism: Number of horizontal bands rendered concurrently.
            Values below 1 are clamped to 1. The result does not depend on it.

    Returns:
        RGB image array of shape (height, width, 3) with dtype uint8, where
        width and height are the near plane extents truncated to integers.

    Raises:
        ConfigurationError: If the scene is invalid. Nothing is rendered.
    """
    if parallelism < 1:
        parallelism = 1

    validate_scene(scene)
    if len(scene.objects) > MAX_SPHERES:
        raise ConfigurationError(
            f"too many scene objects: {len(scene.objects)} (maximum {MAX_SPHERES})"
        )

    width, height = scene.image_size
    bounds = band_bounds(height, parallelism)
    logger.debug("Rendering %dx%d image in %d bands: %s", width, height, len(bounds), bounds)

    start_time = time.perf_counter()
    upload_scene(scene)

    image = np.zeros((height, width, 3), dtype=np.uint8)
    if width > 0 and height > 0:
        _render_bands(image, np.array(bounds, dtype=np.int32))

    logger.info(
        "Rendered %dx%d image (%d objects, %d bands) in %.3fs",
        width,
        height,
        len(scene.objects),
        len(bounds),
        time.perf_counter() - start_time,
    )
    return image
