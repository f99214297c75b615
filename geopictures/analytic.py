"""Floating-point points, lines and circles with tolerance-based equality.

Every comparison in this module goes through :func:`rounded`, so two objects
are equal exactly when their canonical coordinates agree to
``ROUNDING_DECIMALS`` places.  Hashing uses the same rounded values, which is
what lets analytic objects key the dictionaries of a
:class:`~geopictures.picture.Picture`.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple, Union

import numpy as np

ROUNDING_DECIMALS = 8


class AnalyticException(Exception):
    """Raised when a geometrically illogical object is requested."""


def rounded(value: float) -> float:
    result = round(value, ROUNDING_DECIMALS)
    # -0.0 and 0.0 must hash identically
    return result + 0.0


class Point:
    __slots__ = ("x", "y", "_key")

    def __init__(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self._key = (rounded(self.x), rounded(self.y))

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(("point",) + self._key)

    def __repr__(self) -> str:
        return f"Point({self.x:.6g}, {self.y:.6g})"

    def rounded(self) -> Tuple[float, float]:
        return self._key

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    def reflected_by(self, center: "Point") -> "Point":
        return Point(2.0 * center.x - self.x, 2.0 * center.y - self.y)

    def rotate(self, center: "Point", angle_degrees: float) -> "Point":
        angle = math.radians(angle_degrees)
        dx, dy = self.x - center.x, self.y - center.y
        return Point(
            center.x + dx * math.cos(angle) - dy * math.sin(angle),
            center.y + dx * math.sin(angle) + dy * math.cos(angle),
        )


class Line:
    """Line ``a*x + b*y + c = 0`` with ``a^2 + b^2 = 1`` and a fixed sign."""

    __slots__ = ("a", "b", "c", "_key")

    def __init__(self, point1: Point, point2: Point) -> None:
        if point1 == point2:
            raise AnalyticException("A line cannot be constructed from two equal points")
        a = point2.y - point1.y
        b = point1.x - point2.x
        c = -(a * point1.x + b * point1.y)
        self._set_coefficients(a, b, c)

    @classmethod
    def from_coefficients(cls, a: float, b: float, c: float) -> "Line":
        if rounded(a) == 0 and rounded(b) == 0:
            raise AnalyticException("Line coefficients a, b cannot both be zero")
        line = cls.__new__(cls)
        line._set_coefficients(a, b, c)
        return line

    def _set_coefficients(self, a: float, b: float, c: float) -> None:
        norm = math.hypot(a, b)
        a, b, c = a / norm, b / norm, c / norm
        if rounded(a) < 0 or (rounded(a) == 0 and b < 0):
            a, b, c = -a, -b, -c
        self.a = a
        self.b = b
        self.c = c
        self._key = (rounded(a), rounded(b), rounded(c))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(("line",) + self._key)

    def __repr__(self) -> str:
        return f"Line({self.a:.6g}x + {self.b:.6g}y + {self.c:.6g} = 0)"

    def contains(self, point: Point) -> bool:
        return rounded(self.a * point.x + self.b * point.y + self.c) == 0

    def is_parallel_to(self, other: "Line") -> bool:
        return rounded(self.a * other.b - self.b * other.a) == 0

    def is_perpendicular_to(self, other: "Line") -> bool:
        return rounded(self.a * other.a + self.b * other.b) == 0

    def intersection_with(self, other: "Line") -> Optional[Point]:
        determinant = self.a * other.b - self.b * other.a
        if rounded(determinant) == 0:
            return None
        x = (self.b * other.c - other.b * self.c) / determinant
        y = (other.a * self.c - self.a * other.c) / determinant
        return Point(x, y)

    def projection_of(self, point: Point) -> Point:
        distance = self.a * point.x + self.b * point.y + self.c
        return Point(point.x - distance * self.a, point.y - distance * self.b)

    def perpendicular_through(self, point: Point) -> "Line":
        return Line.from_coefficients(self.b, -self.a, self.a * point.y - self.b * point.x)

    def parallel_through(self, point: Point) -> "Line":
        return Line.from_coefficients(self.a, self.b, -(self.a * point.x + self.b * point.y))

    def some_points(self) -> Tuple[Point, Point]:
        """Return the foot of the origin and a point one unit along the line."""

        foot = Point(-self.c * self.a, -self.c * self.b)
        return foot, Point(foot.x - self.b, foot.y + self.a)


class Circle:
    __slots__ = ("center", "radius", "_key")

    def __init__(self, center: Point, radius: float) -> None:
        if rounded(radius) <= 0:
            raise AnalyticException("A circle must have a positive radius")
        self.center = center
        self.radius = float(radius)
        self._key = center.rounded() + (rounded(self.radius),)

    @classmethod
    def through(cls, point1: Point, point2: Point, point3: Point) -> "Circle":
        if are_collinear(point1, point2, point3):
            raise AnalyticException("A circle cannot be constructed from collinear points")
        bisector1 = perpendicular_bisector(point1, point2)
        bisector2 = perpendicular_bisector(point2, point3)
        center = bisector1.intersection_with(bisector2)
        if center is None:
            raise AnalyticException("The perpendicular bisectors of the points are parallel")
        return cls(center, center.distance_to(point1))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circle):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(("circle",) + self._key)

    def __repr__(self) -> str:
        return f"Circle(center={self.center!r}, radius={self.radius:.6g})"

    def contains(self, point: Point) -> bool:
        return rounded(self.center.distance_to(point) - self.radius) == 0

    def invert(self, point: Point) -> Point:
        if point == self.center:
            raise AnalyticException("The center of a circle cannot be inverted")
        dx, dy = point.x - self.center.x, point.y - self.center.y
        factor = self.radius * self.radius / (dx * dx + dy * dy)
        return Point(self.center.x + factor * dx, self.center.y + factor * dy)


AnalyticObject = Union[Point, Line, Circle]


def lies_on(line_or_circle: AnalyticObject, point: Point) -> bool:
    if isinstance(line_or_circle, (Line, Circle)):
        return line_or_circle.contains(point)
    raise AnalyticException(f"Cannot test incidence with {type(line_or_circle).__name__}")


def are_collinear(*points: Point) -> bool:
    if len(points) < 3:
        return True
    line = Line(points[0], points[1])
    return all(line.contains(point) for point in points[2:])


def perpendicular_bisector(point1: Point, point2: Point) -> Line:
    midpoint = point1.midpoint(point2)
    return Line(midpoint, point1.rotate(midpoint, 90))


def internal_angle_bisector(vertex: Point, ray_point1: Point, ray_point2: Point) -> Line:
    # X on segment [ray_point1, ray_point2] with X1 / X2 = |V1| / |V2|
    distance1 = vertex.distance_to(ray_point1)
    distance2 = vertex.distance_to(ray_point2)
    if rounded(distance1 + distance2) == 0:
        raise AnalyticException("Cannot construct the angle bisector using equal points")
    foot = ray_point1 + (ray_point2 - ray_point1) * (distance1 / (distance1 + distance2))
    return Line(vertex, foot)


def random_scalene_acute_triangle(rng: np.random.Generator) -> Tuple[Point, Point, Point]:
    """Return a triangle with angles pairwise at least 5 degrees apart.

    With A = (0, 0) and B = (1, 0), alpha is drawn from (60 + d, 90 - d) and
    beta from ((180 + d - alpha) / 2, alpha - d).  C is then the intersection
    of the rays from A and B with slopes tan(alpha) and tan(180 - beta).
    """

    d = 5.0
    alpha = rng.uniform(60 + d, 90 - d)
    beta = rng.uniform((180 + d - alpha) / 2, alpha - d)
    tan_alpha = math.tan(math.radians(alpha))
    tan_beta = math.tan(math.radians(180 - beta))
    x = tan_beta / (tan_beta - tan_alpha)
    y = tan_alpha * tan_beta / (tan_beta - tan_alpha)
    return Point(0.0, 0.0), Point(1.0, 0.0), Point(x, y)


def random_point(rng: np.random.Generator, low: float = -1.0, high: float = 2.0) -> Point:
    x, y = rng.uniform(low, high, size=2)
    return Point(float(x), float(y))


__all__ = [
    "ROUNDING_DECIMALS",
    "AnalyticException",
    "AnalyticObject",
    "Circle",
    "Line",
    "Point",
    "are_collinear",
    "internal_angle_bisector",
    "lies_on",
    "perpendicular_bisector",
    "random_point",
    "random_scalene_acute_triangle",
    "rounded",
]
