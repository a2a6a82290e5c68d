"""Tests for image export."""

import numpy as np
import pytest
from PIL import Image

from spheretracer.output.export import save_png, to_pil_image


@pytest.fixture
def gradient_image():
    """Small (H, W, 3) uint8 image with distinct pixels."""
    image = np.zeros((4, 6, 3), dtype=np.uint8)
    image[..., 0] = np.arange(6, dtype=np.uint8) * 40
    image[..., 1] = (np.arange(4, dtype=np.uint8) * 60)[:, None]
    image[..., 2] = 200
    return image


class TestToPilImage:
    """Tests for to_pil_image."""

    def test_rgb_image(self, gradient_image):
        pil = to_pil_image(gradient_image)
        assert pil.mode == "RGB"
        assert pil.size == (6, 4)
        assert pil.getpixel((5, 3)) == (200, 180, 200)

    def test_wrong_dtype(self, gradient_image):
        with pytest.raises(ValueError, match="uint8"):
            to_pil_image(gradient_image.astype(np.float32))

    @pytest.mark.parametrize("shape", [(4, 6), (4, 6, 4), (4, 6, 3, 1)])
    def test_wrong_shape(self, shape):
        with pytest.raises(ValueError, match="Expected an"):
            to_pil_image(np.zeros(shape, dtype=np.uint8))


class TestSavePng:
    """Tests for save_png."""

    def test_pixels_preserved(self, tmp_path, gradient_image):
        path = tmp_path / "out.png"
        save_png(gradient_image, path)

        with Image.open(path) as reloaded:
            assert reloaded.format == "PNG"
            assert reloaded.mode == "RGB"
            assert np.array_equal(np.asarray(reloaded), gradient_image)

    def test_string_path(self, tmp_path, gradient_image):
        path = tmp_path / "out.png"
        save_png(gradient_image, str(path))
        assert path.exists()

    def test_rendered_image(self, tmp_path, single_sphere_scene):
        from spheretracer.core.renderer import render

        image = render(single_sphere_scene, parallelism=2)
        path = tmp_path / "sphere.png"
        save_png(image, path)

        with Image.open(path) as reloaded:
            assert reloaded.size == (10, 10)
            assert np.array_equal(np.asarray(reloaded), image)
