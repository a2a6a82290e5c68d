"""Exceptions raised by spheretracer.

Only configuration problems are ever surfaced: once a scene has been
validated, rendering it cannot fail.
"""


class ConfigurationError(ValueError):
    """A scene (or one of its sub-entities) violates a structural invariant.

    Raised for negative sphere radii, color channels outside [0, 1], a
    diffuse coefficient outside [0, 1], degenerate frustum planes, and scenes
    holding more objects than the sphere storage can hold.
    """


class SceneFormatError(ConfigurationError):
    """A scene description is missing keys or holds badly shaped values."""
