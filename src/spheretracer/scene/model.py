"""In-memory scene description and structural validation.

A Scene is built once (by hand or by ``spheretracer.scene.loader``),
validated, and then only read while it is being rendered. Every
sub-entity is a frozen dataclass owned by value by the scene.

Validation is fail-fast: the first violated invariant raises a
ConfigurationError whose message names the offending sub-entity, e.g.

    invalid scene object 1: invalid sphere color: color out-of-range: ...

Example:
    >>> scene = Scene(
    ...     frustum=Frustum(
    ...         near=Plane2d(Point2d(-5, 5), Point2d(5, -5), z=0.0),
    ...         far=Plane2d(Point2d(-10, 10), Point2d(10, -10), z=20.0),
    ...     ),
    ...     light=Point(0.0, 10.0, -10.0),
    ...     objects=(ColoredSphere(SphereShape(Point(0, 0, 10), 2.0), Color(1, 0, 0)),),
    ...     background=Color(0.0, 0.0, 0.2),
    ...     kd=0.5,
    ... )
    >>> scene.validate()
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from spheretracer.errors import ConfigurationError


def floats_equal(a: float, b: float, epsilon: float) -> bool:
    """Return True if a and b differ by less than epsilon."""
    return abs(a - b) < epsilon


def _is_unit_interval(value: float) -> bool:
    return 0.0 <= value <= 1.0


@dataclass(frozen=True)
class Point:
    """A 3-dimensional point."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def points_equal(a: Point, b: Point, epsilon: float) -> bool:
    """Return True if all components of a and b are within epsilon."""
    return (
        floats_equal(a.x, b.x, epsilon)
        and floats_equal(a.y, b.y, epsilon)
        and floats_equal(a.z, b.z, epsilon)
    )


@dataclass(frozen=True)
class Point2d:
    """A point on a plane orthogonal to the z-axis."""

    x: float
    y: float


@dataclass(frozen=True)
class Plane2d:
    """A bounded plane orthogonal to the z-axis.

    Attributes:
        tl: Top-left corner.
        br: Bottom-right corner.
        z: Depth of the plane.
    """

    tl: Point2d
    br: Point2d
    z: float

    @property
    def dx(self) -> float:
        """Width of the plane."""
        return self.br.x - self.tl.x

    @property
    def dy(self) -> float:
        """Height of the plane."""
        return self.tl.y - self.br.y

    def validate(self) -> None:
        """Check the plane has positive width and height.

        Raises:
            ConfigurationError: If tl.x >= br.x or tl.y <= br.y.
        """
        if self.tl.x >= self.br.x or self.tl.y <= self.br.y:
            raise ConfigurationError(f"negative or null plane width or height: {self!r}")


@dataclass(frozen=True)
class Frustum:
    """A pyramidal viewing frustum orthogonal to the z-axis.

    The scene is projected onto the near plane, whose extents also give the
    image size in pixels. The size ratio between the near and far planes
    determines the field of view.
    """

    near: Plane2d
    far: Plane2d

    def validate(self) -> None:
        try:
            self.near.validate()
        except ConfigurationError as e:
            raise ConfigurationError(f"invalid near frustum plane: {e}") from e
        try:
            self.far.validate()
        except ConfigurationError as e:
            raise ConfigurationError(f"invalid far frustum plane: {e}") from e


@dataclass(frozen=True)
class Color:
    """A red/green/blue triplet with channels in [0, 1]."""

    r: float
    g: float
    b: float

    def validate(self) -> None:
        if not all(_is_unit_interval(c) for c in (self.r, self.g, self.b)):
            raise ConfigurationError(f"color out-of-range: {self!r}")

    def to_rgb8(self) -> tuple[int, int, int]:
        """Convert to 8-bit channels, truncating ``channel * 255``."""
        return (
            math.floor(self.r * 255),
            math.floor(self.g * 255),
            math.floor(self.b * 255),
        )

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class SphereShape:
    """Geometry of a sphere: center point and radius."""

    center: Point
    radius: float

    def validate(self) -> None:
        if self.radius < 0:
            raise ConfigurationError(f"invalid sphere: negative radius {self.radius}")


@dataclass(frozen=True)
class ColoredSphere:
    """A sphere object of the scene together with its color."""

    sphere: SphereShape
    color: Color

    def validate(self) -> None:
        self.sphere.validate()
        try:
            self.color.validate()
        except ConfigurationError as e:
            raise ConfigurationError(f"invalid sphere color: {e}") from e


@dataclass(frozen=True)
class Scene:
    """The scene to render.

    Attributes:
        frustum: The viewing frustum.
        light: Position of the single point light.
        objects: Spheres to render, in scene order. Order matters for
            tie-breaking between objects hit at the same distance.
        background: Color of pixels whose ray hits nothing.
        kd: Diffuse coefficient in [0, 1]. The ambient coefficient is 1 - kd.
    """

    frustum: Frustum
    light: Point
    objects: tuple[ColoredSphere, ...] = field(default_factory=tuple)
    background: Color = Color(0.0, 0.0, 0.0)
    kd: float = 0.5

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.objects, tuple):
            object.__setattr__(self, "objects", tuple(self.objects))

    def validate(self) -> None:
        """Validate every sub-entity, failing on the first violation.

        Checks, in order: each object, the background color, the diffuse
        coefficient and the frustum.

        Raises:
            ConfigurationError: Describing the first invalid sub-entity.
        """
        for i, obj in enumerate(self.objects):
            try:
                obj.validate()
            except ConfigurationError as e:
                raise ConfigurationError(f"invalid scene object {i}: {e}") from e
        try:
            self.background.validate()
        except ConfigurationError as e:
            raise ConfigurationError(f"invalid scene background: {e}") from e
        if not _is_unit_interval(self.kd):
            raise ConfigurationError(f"invalid scene diffuse coefficient: {self.kd}")
        try:
            self.frustum.validate()
        except ConfigurationError as e:
            raise ConfigurationError(f"invalid scene frustum: {e}") from e

    @property
    def image_size(self) -> tuple[int, int]:
        """Image (width, height) in pixels, truncated from the near plane extents."""
        near = self.frustum.near
        return int(near.dx), int(near.dy)


def validate_scene(scene: Scene) -> None:
    """Validate a scene. See Scene.validate."""
    scene.validate()
