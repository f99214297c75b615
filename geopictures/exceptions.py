"""Exceptions raised while realizing configurations and building their graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .configuration import ConfigurationObject
    from .geometric_objects import DefinableByPoints, GeometricObject, PointObject


def _describe(objects: Iterable["GeometricObject"]) -> str:
    return ", ".join(str(obj) for obj in objects)


class InconsistentPicturesException(Exception):
    """The pictures of one configuration disagree about a geometric fact.

    Either the configuration is numerically extremely sensitive or a logic
    defect was hit.  The candidate configuration should be discarded; the
    library never retries internally.
    """


class InconsistentCollinearityException(InconsistentPicturesException):
    def __init__(self, points: Iterable["PointObject"]) -> None:
        self.points: Tuple["PointObject", ...] = tuple(points)
        super().__init__(f"Pictures disagree on the collinearity of points {_describe(self.points)}")


class InconsistentConcyclityException(InconsistentPicturesException):
    def __init__(self, points: Iterable["PointObject"]) -> None:
        self.points: Tuple["PointObject", ...] = tuple(points)
        super().__init__(f"Pictures disagree on the concyclity of points {_describe(self.points)}")


class InconsistentIncidenceException(InconsistentPicturesException):
    def __init__(self, point: "PointObject", line_or_circle: "DefinableByPoints") -> None:
        self.point = point
        self.line_or_circle = line_or_circle
        super().__init__(f"Pictures disagree on whether {point} lies on {line_or_circle}")


class InconsistentEqualityException(InconsistentPicturesException):
    def __init__(
        self,
        configuration_object: "ConfigurationObject",
        equal_objects: Iterable["GeometricObject"],
    ) -> None:
        self.configuration_object = configuration_object
        self.equal_objects: Tuple["GeometricObject", ...] = tuple(equal_objects)
        super().__init__(
            f"Pictures disagree on which object equals {configuration_object}: "
            f"[{_describe(self.equal_objects)}]"
        )


class InconstructibleContextualPicture(Exception):
    """A contextual picture could not be built because its pictures disagree."""

    def __init__(self, inner_exception: InconsistentPicturesException) -> None:
        self.inner_exception = inner_exception
        super().__init__(f"The contextual picture could not be constructed: {inner_exception}")


class ConstructorError(RuntimeError):
    """Broken invariant inside graph construction; indicates a bug."""


class GeometryConstructionException(Exception):
    """Pictures could not be drawn consistently within the retry budgets."""


__all__ = [
    "ConstructorError",
    "GeometryConstructionException",
    "InconsistentCollinearityException",
    "InconsistentConcyclityException",
    "InconsistentEqualityException",
    "InconsistentIncidenceException",
    "InconsistentPicturesException",
    "InconstructibleContextualPicture",
]
