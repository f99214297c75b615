import pytest

from geopictures import (
    Configuration,
    ConfigurationError,
    ConfigurationObjectType,
    ConstructedConfigurationObject,
    LooseObjectLayout,
    PredefinedConstructionType as T,
    loose_line,
    loose_point,
)


def _triangle():
    A, B, C = loose_point("A"), loose_point("B"), loose_point("C")
    return Configuration(LooseObjectLayout.TRIANGLE, [A, B, C]), (A, B, C)


def test_objects_compare_by_identity():
    first = loose_point("A")
    second = loose_point("A")

    assert first != second
    assert first == first
    assert len({first, second}) == 2
    assert first.id != second.id


def test_constructed_object_takes_its_type_from_the_construction():
    A, B = loose_point("A"), loose_point("B")

    line = T.LINE_FROM_POINTS(A, B, name="l")
    midpoint = ConstructedConfigurationObject(T.MIDPOINT, [A, B])

    assert line.object_type is ConfigurationObjectType.LINE
    assert line.arguments == (A, B)
    assert str(line) == "l"
    assert repr(line) == "l=LINE_FROM_POINTS(A, B)"
    assert midpoint.object_type is ConfigurationObjectType.POINT
    assert str(midpoint).startswith("point#")


def test_constructed_object_checks_argument_types():
    A, B, l = loose_point("A"), loose_point("B"), loose_line("l")

    with pytest.raises(ConfigurationError):
        T.PERPENDICULAR_LINE(l, A)
    with pytest.raises(ConfigurationError):
        T.MIDPOINT(A)
    with pytest.raises(ConfigurationError):
        T.CIRCUMCIRCLE(A, B, l)


def test_constructions_with_equal_signatures_stay_distinct():
    assert T.MIDPOINT is not T.POINT_REFLECTION
    assert T.MIDPOINT.input_types == T.POINT_REFLECTION.input_types
    assert T.PERPENDICULAR_LINE is not T.PARALLEL_LINE
    assert len(list(T)) == 12


def test_layout_must_match_loose_objects():
    with pytest.raises(ConfigurationError):
        Configuration(LooseObjectLayout.TRIANGLE, [loose_point("A"), loose_point("B")])
    with pytest.raises(ConfigurationError):
        Configuration(LooseObjectLayout.LINE_AND_POINT, [loose_point("A"), loose_line("l")])


def test_objects_must_be_defined_before_use():
    configuration, (A, B, C) = _triangle()
    D = loose_point("D")

    with pytest.raises(ConfigurationError):
        configuration.derive(T.MIDPOINT(A, D))


def test_objects_cannot_repeat():
    A = loose_point("A")
    with pytest.raises(ConfigurationError):
        Configuration(LooseObjectLayout.LINE_SEGMENT, [A, A])

    configuration, (A, B, C) = _triangle()
    M = T.MIDPOINT(A, B)
    with pytest.raises(ConfigurationError):
        configuration.derive(M).derive(M)


def test_derive_extends_by_one_object():
    configuration, (A, B, C) = _triangle()
    M = T.MIDPOINT(A, B, name="M")
    N = T.MIDPOINT(B, C, name="N")

    extended = configuration.derive(M)
    twice = extended.derive(N)

    assert configuration.last_constructed_object is C
    assert extended.last_constructed_object is M
    assert extended.all_objects == [A, B, C, M]
    assert len(twice) == 5
    assert extended.extends(configuration)
    assert twice.extends(extended)
    assert not twice.extends(configuration)
    assert not configuration.extends(extended)
    assert len(configuration) == 3
