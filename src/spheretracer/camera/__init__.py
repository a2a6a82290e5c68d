"""Camera module.

Components:
    frustum: Frustum camera mapping near-plane positions to primary rays

The frustum module declares Taichi fields and is not imported here; use
``from spheretracer.camera.frustum import setup_frustum``.
"""
