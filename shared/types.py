"""Value types for the floorplan editor and the map alignment."""
import math
from typing import NamedTuple

import numpy as np


class Vector2(NamedTuple):
    """A displacement in the plane."""
    dx: float
    dy: float

    def plus(self, other: "Vector2") -> "Vector2":
        return Vector2(self.dx + other.dx, self.dy + other.dy)

    def scaled(self, k: float) -> "Vector2":
        return Vector2(self.dx * k, self.dy * k)

    def dot(self, other: "Vector2") -> float:
        return self.dx * other.dx + self.dy * other.dy

    def cross(self, other: "Vector2") -> float:
        """Z component of the 3D cross product (signed parallelogram area)."""
        return self.dx * other.dy - self.dy * other.dx

    def sqnorm(self) -> float:
        return self.dx * self.dx + self.dy * self.dy

    def norm(self) -> float:
        return math.hypot(self.dx, self.dy)

    def angle(self) -> "Angle2":
        return Angle2(math.atan2(self.dy, self.dx))

    def rotated(self, angle: "Angle2") -> "Vector2":
        return Vector2(self.dx * angle.cos - self.dy * angle.sin,
                       self.dx * angle.sin + self.dy * angle.cos)


class Point2(NamedTuple):
    """A location: floorplan pixels, or (lng, lat) on the world map."""
    x: float
    y: float

    def to(self, other: "Point2") -> Vector2:
        """Vector from this point to *other*."""
        return Vector2(other.x - self.x, other.y - self.y)

    def plus(self, v: Vector2) -> "Point2":
        return Point2(self.x + v.dx, self.y + v.dy)

    def scaled(self, k: float) -> "Point2":
        return Point2(self.x * k, self.y * k)

    def distance(self, other: "Point2") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def clamped(self, width: float, height: float) -> "Point2":
        """Clamp into the [0, width] x [0, height] rectangle."""
        return Point2(min(max(self.x, 0.0), width), min(max(self.y, 0.0), height))


class Angle2:
    """An angle in radians with its cosine and sine computed once."""
    __slots__ = ("radians", "cos", "sin")

    def __init__(self, radians: float):
        self.radians = radians
        self.cos = math.cos(radians)
        self.sin = math.sin(radians)

    def rounded(self, step: float = math.pi / 4) -> "Angle2":
        """Nearest multiple of *step* (45 degrees by default)."""
        return Angle2(round(self.radians / step) * step)

    def __eq__(self, other):
        return isinstance(other, Angle2) and self.radians == other.radians

    def __hash__(self):
        return hash(self.radians)

    def __repr__(self):
        return f"Angle2({self.radians!r})"


class Matrix2(NamedTuple):
    """Row-major 2x2 matrix [[a, b], [c, d]]."""
    a: float
    b: float
    c: float
    d: float

    def applied_to(self, v: Vector2) -> Vector2:
        return Vector2(self.a * v.dx + self.b * v.dy, self.c * v.dx + self.d * v.dy)

    def det(self) -> float:
        return self.a * self.d - self.b * self.c

    def as_array(self) -> np.ndarray:
        return np.array([[self.a, self.b], [self.c, self.d]], dtype=float)


class AffineMap(NamedTuple):
    """Linear map plus translation: apply(p) = M.p + t."""
    matrix: Matrix2
    offset: Vector2

    def apply(self, p: Point2) -> Point2:
        v = self.matrix.applied_to(Vector2(p[0], p[1]))
        return Point2(v.dx + self.offset.dx, v.dy + self.offset.dy)

    def apply_all(self, points) -> list[Point2]:
        """Apply the map to a batch of (x, y) points."""
        arr = np.asarray(points, dtype=float).reshape(-1, 2)
        out = arr @ self.matrix.as_array().T + np.asarray(self.offset, dtype=float)
        return [Point2(float(x), float(y)) for x, y in out]

    def inverse(self, eps: float = 1e-12) -> "AffineMap | None":
        """Inverse map, or None when the linear part is singular."""
        if abs(self.matrix.det()) < eps:
            return None
        inv = np.linalg.inv(self.matrix.as_array())
        t = -inv @ np.asarray(self.offset, dtype=float)
        return AffineMap(Matrix2(*(float(v) for v in inv.ravel())),
                         Vector2(float(t[0]), float(t[1])))


class Ray2(NamedTuple):
    """Half-line starting at *source* and passing through *through*."""
    source: Point2
    through: Point2

    def direction(self) -> Vector2:
        return self.source.to(self.through)


class BoundingBox2(NamedTuple):
    """Axis-aligned box given by its min and max corners."""
    min: Point2
    max: Point2

    @classmethod
    def of_points(cls, points) -> "BoundingBox2":
        xs = [p[0] for p in points]; ys = [p[1] for p in points]
        return cls(Point2(min(xs), min(ys)), Point2(max(xs), max(ys)))

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def contains_point(self, p: Point2) -> bool:
        return self.min.x <= p.x <= self.max.x and self.min.y <= p.y <= self.max.y

    def contains(self, other: "BoundingBox2") -> bool:
        """True if *other* lies inside this box (edges inclusive)."""
        return self.contains_point(other.min) and self.contains_point(other.max)
