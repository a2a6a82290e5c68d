"""Image export utilities for rendered images.

The renderer produces 8-bit RGB arrays of shape (H, W, 3), so no tone
mapping or gamma correction happens here: pixels are written as they are.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from spheretracer.core.renderer import render
    >>> from spheretracer.output.export import save_png
    >>> image = render(scene, parallelism=4)
    >>> save_png(image, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def to_pil_image(image: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap a rendered image in a Pillow image.

    Args:
        image: RGB image array of shape (H, W, 3) with dtype uint8.

    Returns:
        An RGB Pillow image.

    Raises:
        ValueError: If the array is not an (H, W, 3) uint8 array.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 image, got dtype {image.dtype}")
    # (H, W, 3) uint8 arrays map to RGB
    return PILImage.fromarray(image)


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a rendered image as a PNG file.

    Args:
        image: RGB image array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path (should end in .png).
    """
    to_pil_image(image).save(filepath, format="PNG")
