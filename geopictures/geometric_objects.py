"""Symbolic points, lines and circles connected by incidence.

Nodes live in a :class:`GeometricObjectGraph` arena and refer to each other
by integer handles only.  A point stores the handles of the lines and
circles through it; a line or circle stores the handles of its points.  The
arena is the single owner of every node.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, FrozenSet, Iterable, List, Optional, Set

from .configuration import ConfigurationObject, ConfigurationObjectType
from .exceptions import ConstructorError


class GeometricObjectKind(Enum):
    POINT = "point"
    LINE = "line"
    CIRCLE = "circle"

    @classmethod
    def of(cls, object_type: ConfigurationObjectType) -> "GeometricObjectKind":
        return _KIND_BY_TYPE[object_type]


_KIND_BY_TYPE = {
    ConfigurationObjectType.POINT: GeometricObjectKind.POINT,
    ConfigurationObjectType.LINE: GeometricObjectKind.LINE,
    ConfigurationObjectType.CIRCLE: GeometricObjectKind.CIRCLE,
}


class GeometricObject:
    """Node of the arena.

    Handles and configuration objects are read-only from outside this
    module; the graph owns every mutation.
    """

    kind: ClassVar[GeometricObjectKind]

    __slots__ = ("_handle", "_configuration_object")

    def __init__(self, handle: int, configuration_object: Optional[ConfigurationObject] = None) -> None:
        self._handle = handle
        self._configuration_object = configuration_object

    @property
    def handle(self) -> int:
        return self._handle

    @property
    def configuration_object(self) -> Optional[ConfigurationObject]:
        return self._configuration_object

    @property
    def is_definable_by_points(self) -> bool:
        return False

    def __str__(self) -> str:
        if self._configuration_object is not None:
            return str(self._configuration_object)
        return f"{self.kind.value}#{self._handle}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handle={self._handle}, object={self._configuration_object})"


class PointObject(GeometricObject):
    kind = GeometricObjectKind.POINT

    __slots__ = ("_line_handles", "_circle_handles")

    def __init__(self, handle: int, configuration_object: Optional[ConfigurationObject] = None) -> None:
        super().__init__(handle, configuration_object)
        self._line_handles: Set[int] = set()
        self._circle_handles: Set[int] = set()

    @property
    def line_handles(self) -> FrozenSet[int]:
        return frozenset(self._line_handles)

    @property
    def circle_handles(self) -> FrozenSet[int]:
        return frozenset(self._circle_handles)


class DefinableByPoints(GeometricObject):
    """Capability shared by lines and circles: a set of points lying on them."""

    needed_points: ClassVar[int]

    __slots__ = ("_point_handles",)

    def __init__(self, handle: int, configuration_object: Optional[ConfigurationObject] = None) -> None:
        super().__init__(handle, configuration_object)
        self._point_handles: Set[int] = set()

    @property
    def point_handles(self) -> FrozenSet[int]:
        return frozenset(self._point_handles)

    @property
    def is_definable_by_points(self) -> bool:
        return True

    @property
    def is_explicit(self) -> bool:
        """``True`` when the object was constructed, not only implied by points."""

        return self._configuration_object is not None

    def contains_point(self, point: PointObject) -> bool:
        return point.handle in self._point_handles


class LineObject(DefinableByPoints):
    kind = GeometricObjectKind.LINE
    needed_points = 2
    __slots__ = ()


class CircleObject(DefinableByPoints):
    kind = GeometricObjectKind.CIRCLE
    needed_points = 3
    __slots__ = ()


class GeometricObjectGraph:
    """Arena owning every geometric object of one contextual picture."""

    def __init__(self) -> None:
        self._objects: List[GeometricObject] = []

    def _register(self, geometric_object: GeometricObject) -> None:
        self._objects.append(geometric_object)

    def new_object(
        self, kind: GeometricObjectKind, configuration_object: Optional[ConfigurationObject] = None
    ) -> GeometricObject:
        handle = len(self._objects)
        if kind is GeometricObjectKind.POINT:
            geometric_object: GeometricObject = PointObject(handle, configuration_object)
        elif kind is GeometricObjectKind.LINE:
            geometric_object = LineObject(handle, configuration_object)
        elif kind is GeometricObjectKind.CIRCLE:
            geometric_object = CircleObject(handle, configuration_object)
        else:  # pragma: no cover - closed enumeration
            raise ConstructorError(f"Unhandled geometric object kind: {kind}")
        self._register(geometric_object)
        return geometric_object

    def new_point(self, configuration_object: Optional[ConfigurationObject] = None) -> PointObject:
        return self.new_object(GeometricObjectKind.POINT, configuration_object)  # type: ignore[return-value]

    def new_line(self, points: Iterable[PointObject] = (), configuration_object: Optional[ConfigurationObject] = None) -> LineObject:
        line = self.new_object(GeometricObjectKind.LINE, configuration_object)
        for point in points:
            self.link(point, line)  # type: ignore[arg-type]
        return line  # type: ignore[return-value]

    def new_circle(self, points: Iterable[PointObject] = (), configuration_object: Optional[ConfigurationObject] = None) -> CircleObject:
        circle = self.new_object(GeometricObjectKind.CIRCLE, configuration_object)
        for point in points:
            self.link(point, circle)  # type: ignore[arg-type]
        return circle  # type: ignore[return-value]

    def link(self, point: PointObject, line_or_circle: DefinableByPoints) -> None:
        """Record that ``point`` lies on ``line_or_circle`` on both ends."""

        if line_or_circle.kind is GeometricObjectKind.LINE:
            point._line_handles.add(line_or_circle.handle)
        elif line_or_circle.kind is GeometricObjectKind.CIRCLE:
            point._circle_handles.add(line_or_circle.handle)
        else:
            raise ConstructorError(f"Cannot link a point to {line_or_circle!r}")
        line_or_circle._point_handles.add(point.handle)

    def attach(self, geometric_object: GeometricObject, configuration_object: ConfigurationObject) -> None:
        """Give an implied node the configuration object that constructs it."""

        if geometric_object._configuration_object is not None:
            raise ConstructorError(
                f"{geometric_object!r} already represents {geometric_object._configuration_object}"
            )
        geometric_object._configuration_object = configuration_object

    def __getitem__(self, handle: int) -> GeometricObject:
        return self._objects[handle]

    def __iter__(self):
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def points_of(self, line_or_circle: DefinableByPoints) -> List[PointObject]:
        return [self._objects[handle] for handle in sorted(line_or_circle.point_handles)]  # type: ignore[misc]

    def lines_of(self, point: PointObject) -> List[LineObject]:
        return [self._objects[handle] for handle in sorted(point.line_handles)]  # type: ignore[misc]

    def circles_of(self, point: PointObject) -> List[CircleObject]:
        return [self._objects[handle] for handle in sorted(point.circle_handles)]  # type: ignore[misc]

    def clone(self) -> "GeometricObjectGraph":
        """Copy every node under a fresh identity, keeping handles and adjacency."""

        clone = GeometricObjectGraph()
        for geometric_object in self._objects:
            copy = type(geometric_object)(geometric_object.handle, geometric_object.configuration_object)
            if geometric_object.kind is GeometricObjectKind.POINT:
                copy._line_handles = set(geometric_object._line_handles)  # type: ignore[attr-defined]
                copy._circle_handles = set(geometric_object._circle_handles)  # type: ignore[attr-defined]
            else:
                copy._point_handles = set(geometric_object._point_handles)  # type: ignore[attr-defined]
            clone._register(copy)
        return clone


__all__ = [
    "CircleObject",
    "DefinableByPoints",
    "GeometricObject",
    "GeometricObjectGraph",
    "GeometricObjectKind",
    "LineObject",
    "PointObject",
]
