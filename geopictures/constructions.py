"""Predefined constructions and their numeric formulas."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple

from .analytic import (
    AnalyticException,
    AnalyticObject,
    Circle,
    Line,
    Point,
    internal_angle_bisector,
)
from .configuration import ConfigurationObjectType, ConstructedConfigurationObject

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .picture import Picture

logger = logging.getLogger(__name__)

_P = ConfigurationObjectType.POINT
_L = ConfigurationObjectType.LINE
_C = ConfigurationObjectType.CIRCLE


class PredefinedConstructionType(Enum):
    """Constructions with a formula implemented directly in code.

    Each value is ``(label, input types, output type)``; the label keeps
    constructions with equal signatures from aliasing each other.
    """

    LINE_FROM_POINTS = ("line", (_P, _P), _L)
    CIRCUMCIRCLE = ("circumcircle", (_P, _P, _P), _C)
    CIRCLE_WITH_CENTER_THROUGH_POINT = ("circle_center_through", (_P, _P), _C)
    CENTER_OF_CIRCLE = ("center", (_C,), _P)
    INTERSECTION_OF_LINES = ("intersection", (_L, _L), _P)
    MIDPOINT = ("midpoint", (_P, _P), _P)
    POINT_REFLECTION = ("reflection", (_P, _P), _P)
    PERPENDICULAR_PROJECTION = ("projection", (_P, _L), _P)
    PERPENDICULAR_LINE = ("perpendicular", (_P, _L), _L)
    PARALLEL_LINE = ("parallel", (_P, _L), _L)
    INTERNAL_ANGLE_BISECTOR = ("angle_bisector", (_P, _P, _P), _L)
    INVERSION_OF_POINT = ("inversion", (_P, _C), _P)

    def __init__(
        self,
        label: str,
        input_types: Tuple[ConfigurationObjectType, ...],
        output_type: ConfigurationObjectType,
    ) -> None:
        self.label = label
        self.input_types = input_types
        self.output_type = output_type

    def __call__(self, *arguments, name: Optional[str] = None) -> ConstructedConfigurationObject:
        """Shorthand: ``MIDPOINT(A, B, name="M")`` builds the constructed object."""

        return ConstructedConfigurationObject(self, arguments, name)


Formula = Callable[[Sequence[AnalyticObject]], AnalyticObject]


def _line_from_points(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    return Line(inputs[0], inputs[1])


def _circumcircle(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    return Circle.through(inputs[0], inputs[1], inputs[2])


def _circle_with_center_through_point(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    center, point = inputs
    return Circle(center, center.distance_to(point))


def _center_of_circle(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    return inputs[0].center


def _intersection_of_lines(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    intersection = inputs[0].intersection_with(inputs[1])
    if intersection is None:
        raise AnalyticException("The lines are parallel")
    return intersection


def _midpoint(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    return inputs[0].midpoint(inputs[1])


def _point_reflection(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    return inputs[0].reflected_by(inputs[1])


def _perpendicular_projection(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    point, line = inputs
    return line.projection_of(point)


def _perpendicular_line(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    point, line = inputs
    return line.perpendicular_through(point)


def _parallel_line(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    point, line = inputs
    return line.parallel_through(point)


def _internal_angle_bisector(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    return internal_angle_bisector(inputs[0], inputs[1], inputs[2])


def _inversion_of_point(inputs: Sequence[AnalyticObject]) -> AnalyticObject:
    point, circle = inputs
    return circle.invert(point)


FORMULAS: Dict[PredefinedConstructionType, Formula] = {
    PredefinedConstructionType.LINE_FROM_POINTS: _line_from_points,
    PredefinedConstructionType.CIRCUMCIRCLE: _circumcircle,
    PredefinedConstructionType.CIRCLE_WITH_CENTER_THROUGH_POINT: _circle_with_center_through_point,
    PredefinedConstructionType.CENTER_OF_CIRCLE: _center_of_circle,
    PredefinedConstructionType.INTERSECTION_OF_LINES: _intersection_of_lines,
    PredefinedConstructionType.MIDPOINT: _midpoint,
    PredefinedConstructionType.POINT_REFLECTION: _point_reflection,
    PredefinedConstructionType.PERPENDICULAR_PROJECTION: _perpendicular_projection,
    PredefinedConstructionType.PERPENDICULAR_LINE: _perpendicular_line,
    PredefinedConstructionType.PARALLEL_LINE: _parallel_line,
    PredefinedConstructionType.INTERNAL_ANGLE_BISECTOR: _internal_angle_bisector,
    PredefinedConstructionType.INVERSION_OF_POINT: _inversion_of_point,
}


def construct_analytic_object(
    configuration_object: ConstructedConfigurationObject, picture: "Picture"
) -> Optional[AnalyticObject]:
    """Evaluate ``configuration_object`` in ``picture``.

    Returns ``None`` when the object is inconstructible there.  Missing
    arguments are a programming error and raise ``KeyError``.
    """

    inputs = [picture.get(argument) for argument in configuration_object.arguments]
    formula = FORMULAS[configuration_object.construction]
    try:
        return formula(inputs)
    except AnalyticException as exc:
        logger.debug("Construction of %r failed: %s", configuration_object, exc)
        return None


__all__ = [
    "FORMULAS",
    "PredefinedConstructionType",
    "construct_analytic_object",
]
