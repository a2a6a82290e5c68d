"""Output module: writing rendered images to files.

Components:
    export: PNG export via Pillow
"""

from .export import save_png, to_pil_image

__all__ = [
    "save_png",
    "to_pil_image",
]
