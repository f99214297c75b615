import math

import numpy as np
import pytest

from geopictures.analytic import (
    AnalyticException,
    Circle,
    Line,
    Point,
    are_collinear,
    internal_angle_bisector,
    lies_on,
    perpendicular_bisector,
    random_point,
    random_scalene_acute_triangle,
    rounded,
)


def _angle(vertex, p, q):
    v1 = (p.x - vertex.x, p.y - vertex.y)
    v2 = (q.x - vertex.x, q.y - vertex.y)
    dot = v1[0] * v2[0] + v1[1] * v2[1]
    return math.degrees(math.acos(dot / (math.hypot(*v1) * math.hypot(*v2))))


def test_points_equal_within_rounding_share_a_hash():
    p = Point(0.1 + 0.2, 1.0)
    q = Point(0.3, 1.0)

    assert p == q
    assert hash(p) == hash(q)
    assert Point(0.3, 1.00001) != q
    assert {p, q} == {q}


def test_negative_zero_is_normalized():
    assert rounded(-0.0) == 0.0
    assert math.copysign(1.0, rounded(-1e-12)) == 1.0
    assert Point(-0.0, 0.0) == Point(0.0, -0.0)
    assert hash(Point(-0.0, 0.0)) == hash(Point(0.0, 0.0))


def test_point_arithmetic_helpers():
    a = Point(1.0, 2.0)
    b = Point(3.0, -2.0)

    assert a + b == Point(4.0, 0.0)
    assert b - a == Point(2.0, -4.0)
    assert a * 2 == Point(2.0, 4.0)
    assert a.midpoint(b) == Point(2.0, 0.0)
    assert a.reflected_by(b) == Point(5.0, -6.0)
    assert a.distance_to(b) == pytest.approx(math.hypot(2.0, 4.0))
    assert Point(1.0, 0.0).rotate(Point(0.0, 0.0), 90) == Point(0.0, 1.0)
    with pytest.raises(TypeError):
        a / 2


def test_line_is_normalized_regardless_of_point_order():
    p, q = Point(0.3, -1.2), Point(2.5, 0.7)

    assert Line(p, q) == Line(q, p)
    assert hash(Line(p, q)) == hash(Line(q, p))
    assert Line(p, q) == Line(p, p + (q - p) * 3.7)
    line = Line(p, q)
    assert line.a ** 2 + line.b ** 2 == pytest.approx(1.0)
    assert Line.from_coefficients(2.0, 0.0, -2.0) == Line(Point(1.0, 0.0), Point(1.0, 5.0))
    assert Line.from_coefficients(-2.0, 0.0, 2.0) == Line(Point(1.0, 0.0), Point(1.0, 5.0))


def test_line_requires_distinct_points():
    with pytest.raises(AnalyticException):
        Line(Point(1.0, 1.0), Point(1.0, 1.0))
    with pytest.raises(AnalyticException):
        Line.from_coefficients(0.0, 0.0, 1.0)


def test_line_relations():
    x_axis = Line(Point(0.0, 0.0), Point(1.0, 0.0))
    shifted = Line(Point(0.0, 2.0), Point(3.0, 2.0))
    y_axis = Line(Point(0.0, 0.0), Point(0.0, 1.0))

    assert x_axis.is_parallel_to(shifted)
    assert x_axis.is_perpendicular_to(y_axis)
    assert x_axis.intersection_with(shifted) is None
    assert x_axis.intersection_with(y_axis) == Point(0.0, 0.0)
    assert shifted.projection_of(Point(1.5, -4.0)) == Point(1.5, 2.0)
    assert x_axis.perpendicular_through(Point(2.0, 3.0)) == Line(Point(2.0, 0.0), Point(2.0, 1.0))
    assert x_axis.parallel_through(Point(2.0, 2.0)) == shifted
    first, second = shifted.some_points()
    assert shifted.contains(first) and shifted.contains(second)
    assert first != second


def test_circle_through_three_points():
    circle = Circle.through(Point(1.0, 0.0), Point(0.0, 1.0), Point(-1.0, 0.0))

    assert circle == Circle(Point(0.0, 0.0), 1.0)
    assert circle.contains(Point(0.0, -1.0))
    assert not circle.contains(Point(0.0, -1.01))
    assert Circle.through(Point(0.0, 1.0), Point(-1.0, 0.0), Point(1.0, 0.0)) == circle


def test_circle_through_collinear_points_is_inconstructible():
    with pytest.raises(AnalyticException):
        Circle.through(Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 2.0))
    with pytest.raises(AnalyticException):
        Circle(Point(0.0, 0.0), 0.0)


def test_inversion():
    circle = Circle(Point(0.0, 0.0), 2.0)

    assert circle.invert(Point(1.0, 0.0)) == Point(4.0, 0.0)
    assert circle.invert(Point(0.0, 2.0)) == Point(0.0, 2.0)
    with pytest.raises(AnalyticException):
        circle.invert(Point(0.0, 0.0))


def test_lies_on_and_collinearity():
    line = Line(Point(0.0, 0.0), Point(1.0, 1.0))
    circle = Circle(Point(0.0, 0.0), 5.0)

    assert lies_on(line, Point(3.0, 3.0))
    assert lies_on(circle, Point(3.0, 4.0))
    assert not lies_on(circle, Point(3.0, 3.0))
    assert are_collinear(Point(0.0, 0.0), Point(1.0, 2.0), Point(2.0, 4.0))
    assert not are_collinear(Point(0.0, 0.0), Point(1.0, 2.0), Point(2.0, 4.1))
    with pytest.raises(AnalyticException):
        lies_on(Point(0.0, 0.0), Point(0.0, 0.0))


def test_perpendicular_bisector_is_equidistant():
    p, q = Point(0.2, 1.1), Point(3.0, -0.4)
    bisector = perpendicular_bisector(p, q)

    for point in bisector.some_points():
        assert point.distance_to(p) == pytest.approx(point.distance_to(q))


def test_internal_angle_bisector_splits_the_angle():
    vertex, p, q = Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 1.0)
    bisector = internal_angle_bisector(vertex, p, q)

    assert bisector == Line(vertex, Point(1.0, 1.0))


@pytest.mark.parametrize("seed", range(10))
def test_random_triangle_is_scalene_and_acute(seed):
    a, b, c = random_scalene_acute_triangle(np.random.default_rng(seed))
    angles = [_angle(a, b, c), _angle(b, a, c), _angle(c, a, b)]

    assert sum(angles) == pytest.approx(180.0)
    assert all(angle < 90.0 for angle in angles)
    for first in range(3):
        for second in range(first + 1, 3):
            assert abs(angles[first] - angles[second]) >= 5.0 - 1e-6


def test_random_point_stays_in_range():
    rng = np.random.default_rng(0)
    for _ in range(20):
        point = random_point(rng)
        assert -1.0 <= point.x <= 2.0
        assert -1.0 <= point.y <= 2.0
