import pytest

from geopictures import (
    Configuration,
    ConstructionMetrics,
    ConstructorError,
    ContextualPicture,
    InconsistentCollinearityException,
    InconsistentConcyclityException,
    InconsistentEqualityException,
    InconsistentIncidenceException,
    InconstructibleContextualPicture,
    Line,
    LooseObjectLayout,
    ObjectsFilter,
    Picture,
    PicturesOfConfiguration,
    Point,
    PredefinedConstructionType as T,
    construct_analytic_object,
    create_contextual_picture,
    loose_line,
    loose_point,
)


TRIANGLES = [
    (Point(0.0, 0.0), Point(1.0, 0.0), Point(0.3, 0.8)),
    (Point(0.1, 0.2), Point(2.0, 0.5), Point(1.1, 1.9)),
    (Point(-1.0, 0.0), Point(1.0, 0.3), Point(0.2, 1.4)),
]


def _pictures(configuration, *loose_coordinates):
    pictures = []
    for coordinates in loose_coordinates:
        picture = Picture()
        for configuration_object, analytic_object in zip(configuration.loose_objects, coordinates):
            picture.add(configuration_object, analytic_object)
        for configuration_object in configuration.constructed_objects:
            picture.add(configuration_object, construct_analytic_object(configuration_object, picture))
        pictures.append(picture)
    return PicturesOfConfiguration(configuration, pictures)


def _triangle():
    A, B, C = loose_point("A"), loose_point("B"), loose_point("C")
    return Configuration(LooseObjectLayout.TRIANGLE, [A, B, C]), (A, B, C)


def _names(geometric_objects):
    return {str(geometric_object) for geometric_object in geometric_objects}


def _point_names(contextual_picture, line_or_circle):
    return _names(contextual_picture.points_of(line_or_circle))


def test_triangle_has_three_lines_and_an_implicit_circumcircle():
    configuration, _ = _triangle()
    contextual_picture = ContextualPicture(_pictures(configuration, *TRIANGLES))

    assert _names(contextual_picture.points()) == {"A", "B", "C"}
    assert len(contextual_picture.lines()) == 3
    assert len(contextual_picture.circles()) == 1

    circle = contextual_picture.circles()[0]
    assert circle.configuration_object is None
    assert not circle.is_explicit
    assert _point_names(contextual_picture, circle) == {"A", "B", "C"}
    for line in contextual_picture.lines():
        assert line.configuration_object is None
        assert len(contextual_picture.points_of(line)) == 2


def test_from_scratch_build_marks_only_the_last_object_as_new():
    configuration, (A, B, C) = _triangle()
    contextual_picture = ContextualPicture(_pictures(configuration, *TRIANGLES))

    assert _names(contextual_picture.points(ObjectsFilter.NEW)) == {"C"}
    assert _names(contextual_picture.points(ObjectsFilter.OLD)) == {"A", "B"}
    new_lines = contextual_picture.lines(ObjectsFilter.NEW)
    assert len(new_lines) == 2
    assert all("C" in _point_names(contextual_picture, line) for line in new_lines)
    (old_line,) = contextual_picture.lines(ObjectsFilter.OLD)
    assert _point_names(contextual_picture, old_line) == {"A", "B"}
    assert len(contextual_picture.circles(ObjectsFilter.NEW)) == 1
    assert contextual_picture.is_new(contextual_picture.get_geometric_object(C))
    assert not contextual_picture.is_new(contextual_picture.get_geometric_object(A))


def test_enumerations_are_ordered_by_handle():
    configuration, _ = _triangle()
    contextual_picture = ContextualPicture(_pictures(configuration, *TRIANGLES))

    for objects in (
        contextual_picture.points(),
        contextual_picture.lines(),
        contextual_picture.circles(),
        contextual_picture.lines_and_circles(ObjectsFilter.NEW),
    ):
        handles = [geometric_object.handle for geometric_object in objects]
        assert handles == sorted(handles)


def test_adjacency_is_symmetric():
    configuration, _ = _triangle()
    contextual_picture = ContextualPicture(_pictures(configuration, *TRIANGLES))

    for point in contextual_picture.points():
        for line in contextual_picture.lines_of(point):
            assert point.handle in {p.handle for p in contextual_picture.points_of(line)}
        for circle in contextual_picture.circles_of(point):
            assert point.handle in {p.handle for p in contextual_picture.points_of(circle)}
        assert len(contextual_picture.lines_of(point)) == 2
        assert len(contextual_picture.circles_of(point)) == 1


def test_analytic_objects_are_reported_per_picture():
    configuration, (A, B, C) = _triangle()
    pictures = _pictures(configuration, *TRIANGLES)
    contextual_picture = ContextualPicture(pictures)

    point_a = contextual_picture.get_geometric_object(A)
    for picture, triangle in zip(pictures, TRIANGLES):
        assert contextual_picture.get_analytic_object(point_a, picture) == triangle[0]

    (line_ab,) = contextual_picture.lines(ObjectsFilter.OLD)
    assert contextual_picture.get_analytic_object(line_ab, pictures[1]) == Line(TRIANGLES[1][0], TRIANGLES[1][1])


def test_collinearity_seen_in_one_picture_only_is_reported():
    configuration, _ = _triangle()
    pictures = _pictures(
        configuration,
        (Point(0.0, 0.0), Point(1.0, 0.0), Point(2.0, 0.0)),
        TRIANGLES[1],
    )

    with pytest.raises(InconstructibleContextualPicture) as info:
        create_contextual_picture(pictures)

    inner = info.value.inner_exception
    assert isinstance(inner, InconsistentCollinearityException)
    assert info.value.__cause__ is inner
    assert _names(inner.points) == {"A", "B", "C"}


def test_collinearity_disagreement_does_not_depend_on_picture_order():
    configuration, _ = _triangle()
    pictures = _pictures(
        configuration,
        TRIANGLES[1],
        (Point(0.0, 0.0), Point(1.0, 0.0), Point(2.0, 0.0)),
    )

    with pytest.raises(InconsistentCollinearityException) as info:
        ContextualPicture(pictures)

    assert _names(info.value.points) == {"A", "B", "C"}


def test_concyclity_seen_in_one_picture_only_is_reported():
    A, B, C, D = (loose_point(name) for name in "ABCD")
    configuration = Configuration(LooseObjectLayout.QUADRILATERAL, [A, B, C, D])
    pictures = _pictures(
        configuration,
        (Point(1.0, 0.0), Point(0.0, 1.0), Point(-1.0, 0.0), Point(0.0, -1.0)),
        (Point(1.0, 0.0), Point(0.0, 1.0), Point(-1.0, 0.0), Point(0.0, -1.5)),
    )

    with pytest.raises(InconstructibleContextualPicture) as info:
        create_contextual_picture(pictures)

    inner = info.value.inner_exception
    assert isinstance(inner, InconsistentConcyclityException)
    assert _names(inner.points) == {"A", "B", "C", "D"}


def test_incidence_seen_in_one_picture_only_is_reported():
    l, P, Q = loose_line("l"), loose_point("P"), loose_point("Q")
    configuration = Configuration(LooseObjectLayout.LINE_AND_TWO_POINTS, [l, P, Q])
    x_axis = Line(Point(0.0, 0.0), Point(1.0, 0.0))
    pictures = _pictures(
        configuration,
        (x_axis, Point(0.5, 0.0), Point(0.2, 1.0)),
        (x_axis, Point(0.5, 0.7), Point(0.2, 1.0)),
    )

    with pytest.raises(InconsistentIncidenceException) as info:
        ContextualPicture(pictures)

    assert str(info.value.point) == "P"
    assert str(info.value.line_or_circle) == "l"


def test_equality_seen_in_one_picture_only_is_reported():
    l, P, Q = loose_line("l"), loose_point("P"), loose_point("Q")
    m = T.PARALLEL_LINE(P, l, name="m")
    configuration = Configuration(LooseObjectLayout.LINE_AND_TWO_POINTS, [l, P, Q], [m])
    x_axis = Line(Point(0.0, 0.0), Point(1.0, 0.0))
    pictures = _pictures(
        configuration,
        (x_axis, Point(0.0, 1.0), Point(2.0, 1.0)),
        (x_axis, Point(0.0, 1.0), Point(2.0, 1.5)),
    )

    with pytest.raises(InconstructibleContextualPicture) as info:
        create_contextual_picture(pictures)

    inner = info.value.inner_exception
    assert isinstance(inner, InconsistentEqualityException)
    assert inner.configuration_object is m
    (equal_line,) = inner.equal_objects
    assert equal_line.configuration_object is None


def test_explicit_line_through_two_points_attaches_to_the_implied_line():
    configuration, (A, B, C) = _triangle()
    l = T.LINE_FROM_POINTS(A, B, name="l")
    configuration = configuration.derive(l)
    metrics = ConstructionMetrics()

    contextual_picture = ContextualPicture(_pictures(configuration, *TRIANGLES), metrics)

    line = contextual_picture.get_geometric_object(l)
    assert line.configuration_object is l
    assert _point_names(contextual_picture, line) == {"A", "B"}
    assert len(contextual_picture.lines()) == 3
    assert not contextual_picture.is_new(line)
    assert contextual_picture.lines_and_circles(ObjectsFilter.NEW) == []
    assert metrics.counters["explicit_objects_attached"] == 1


def test_explicit_circumcircle_attaches_to_the_implied_circle():
    configuration, (A, B, C) = _triangle()
    circumcircle = T.CIRCUMCIRCLE(A, B, C, name="c")
    contextual_picture = ContextualPicture(_pictures(configuration.derive(circumcircle), *TRIANGLES))

    (circle,) = contextual_picture.circles()
    assert circle.configuration_object is circumcircle
    assert contextual_picture.get_geometric_object(circumcircle) is circle


def test_explicit_line_picks_up_points_lying_on_it():
    l, P = loose_line("l"), loose_point("P")
    F = T.PERPENDICULAR_PROJECTION(P, l, name="F")
    p = T.PERPENDICULAR_LINE(P, l, name="p")
    configuration = Configuration(LooseObjectLayout.LINE_AND_POINT, [l, P], [F, p])
    pictures = _pictures(
        configuration,
        (Line(Point(0.0, 0.0), Point(1.0, 0.0)), Point(0.3, 1.0)),
        (Line(Point(0.0, 0.5), Point(1.0, 1.5)), Point(2.0, 0.0)),
    )

    contextual_picture = ContextualPicture(pictures)

    line_l = contextual_picture.get_geometric_object(l)
    line_p = contextual_picture.get_geometric_object(p)
    assert _point_names(contextual_picture, line_l) == {"F"}
    assert _point_names(contextual_picture, line_p) == {"P", "F"}
    # p coincides with the line PF implied by its points
    assert len(contextual_picture.lines()) == 2
    assert contextual_picture.circles() == []


def test_building_from_an_incomplete_bundle_is_rejected():
    configuration, (A, B, C) = _triangle()
    picture = Picture()
    picture.add(A, TRIANGLES[0][0])
    picture.add(B, TRIANGLES[0][1])

    with pytest.raises(ValueError):
        ContextualPicture(PicturesOfConfiguration(configuration, [picture]))


def test_adding_an_already_attached_object_again_is_a_programming_error():
    configuration, (A, B, C) = _triangle()
    l = T.LINE_FROM_POINTS(A, B, name="l")
    contextual_picture = ContextualPicture(_pictures(configuration.derive(l), *TRIANGLES))

    with pytest.raises(ConstructorError):
        contextual_picture._add(l, is_new=True)


def test_metrics_are_recorded_per_phase():
    configuration, _ = _triangle()
    metrics = ConstructionMetrics()

    ContextualPicture(_pictures(configuration, *TRIANGLES), metrics)

    assert metrics.counters["lines_created"] == 3
    assert metrics.counters["circles_created"] == 1
    assert {"lines", "circles", "incidences"} <= set(metrics.timings)
    assert "lines_created=3" in metrics.summary()


def test_pictures_of_a_built_graph_are_frozen():
    configuration, (A, B, C) = _triangle()
    contextual_picture = ContextualPicture(_pictures(configuration, *TRIANGLES))
    picture = contextual_picture.pictures[0]
    D = T.MIDPOINT(A, B, name="D")

    assert all(p.is_frozen for p in contextual_picture.pictures)
    with pytest.raises(RuntimeError):
        picture.add(D, construct_analytic_object(D, picture))
    assert D not in picture
    assert len(contextual_picture.points()) == 3

    clone = picture.clone()
    clone.add(D, construct_analytic_object(D, clone))
    assert not clone.is_frozen
    assert clone.get(D) == Point(0.5, 0.0)


def test_failed_build_leaves_pictures_unfrozen():
    configuration, (A, B, C) = _triangle()
    collinear = (Point(0.0, 0.0), Point(1.0, 0.0), Point(2.0, 0.0))
    pictures = _pictures(configuration, TRIANGLES[0], collinear)

    with pytest.raises(InconsistentCollinearityException):
        ContextualPicture(pictures)
    assert not any(p.is_frozen for p in pictures)
