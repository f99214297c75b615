"""Consistency-checked incidence graph built jointly from all pictures of a configuration.

A :class:`ContextualPicture` turns the analytic objects of every picture of a
:class:`~geopictures.picture.PicturesOfConfiguration` into one graph of
:mod:`geometric objects <geopictures.geometric_objects>`: the explicit points,
lines and circles of the configuration plus every line through two points and
every circle through three points.  Every geometric judgement (equality,
collinearity, concyclity, incidence) is made in each picture separately and
must come out the same in all of them; otherwise a subclass of
:class:`~geopictures.exceptions.InconsistentPicturesException` is raised.

Objects are partitioned into *old* ones (known before the last configuration
object was added) and *new* ones (discovered while adding it).  Extending a
configuration by one object is done with :meth:`ContextualPicture.construct_by_cloning`,
which copies the graph and only examines the added object.
"""

from __future__ import annotations

import logging
from enum import Enum
from itertools import combinations
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from .analytic import AnalyticException, AnalyticObject, Circle, Line, are_collinear, lies_on
from .configuration import Configuration, ConfigurationObject
from .exceptions import (
    ConstructorError,
    InconsistentCollinearityException,
    InconsistentConcyclityException,
    InconsistentEqualityException,
    InconsistentIncidenceException,
    InconsistentPicturesException,
    InconstructibleContextualPicture,
)
from .geometric_objects import (
    CircleObject,
    DefinableByPoints,
    GeometricObject,
    GeometricObjectGraph,
    GeometricObjectKind,
    LineObject,
    PointObject,
)
from .logging_utils import apply_debug_logging
from .metrics import ConstructionMetrics
from .picture import Picture, PicturesOfConfiguration
from .utils import BidirectionalMap

logger = logging.getLogger(__name__)

_POINT = GeometricObjectKind.POINT
_LINE = GeometricObjectKind.LINE
_CIRCLE = GeometricObjectKind.CIRCLE

ObjectMap = BidirectionalMap[int, AnalyticObject]


class ObjectsFilter(Enum):
    ALL = "all"
    OLD = "old"
    NEW = "new"


class ContextualPicture:
    """Incidence graph of points, lines and circles shared by all pictures.

    Building from scratch adds every object of the configuration in order;
    only the last one counts as new.  Raises an
    :class:`InconsistentPicturesException` subclass when the pictures
    disagree.
    """

    def __init__(self, pictures: PicturesOfConfiguration, metrics: Optional[ConstructionMetrics] = None) -> None:
        if not pictures.is_complete:
            raise ValueError("Cannot build a contextual picture from an incompletely constructed bundle")
        self._initialize(pictures, metrics)

        objects = pictures.configuration.all_objects
        for index, configuration_object in enumerate(objects):
            self._add(configuration_object, is_new=index == len(objects) - 1)
        self._freeze_pictures()

        logger.debug(
            "Built contextual picture: %d points, %d lines, %d circles from %d pictures",
            len(self.points()),
            len(self.lines()),
            len(self.circles()),
            len(pictures),
        )

    def _initialize(self, pictures: PicturesOfConfiguration, metrics: Optional[ConstructionMetrics]) -> None:
        self._pictures = pictures
        self._metrics = metrics if metrics is not None else ConstructionMetrics()
        self._graph = GeometricObjectGraph()
        # one map per picture, positionally aligned with the bundle
        self._maps: List[ObjectMap] = [BidirectionalMap() for _ in pictures]
        self._handles: Dict[ConfigurationObject, int] = {}
        self._old: Dict[GeometricObjectKind, Set[int]] = {kind: set() for kind in GeometricObjectKind}
        self._new: Dict[GeometricObjectKind, Set[int]] = {kind: set() for kind in GeometricObjectKind}

    # ------------------------------------------------------------------
    # Cloning

    def construct_by_cloning(
        self, new_pictures: PicturesOfConfiguration, metrics: Optional[ConstructionMetrics] = None
    ) -> "ContextualPicture":
        """Return a copy of this picture extended by the last object of ``new_pictures``.

        ``new_pictures`` must be this bundle with each picture extended by
        exactly one object (picture ``i`` of the new bundle continues picture
        ``i`` of this one).  Every current object becomes old in the copy.
        """

        self._verify_extension(new_pictures)
        clone = ContextualPicture.__new__(ContextualPicture)
        clone._initialize(new_pictures, metrics)

        with clone._metrics.measure("cloning"):
            clone._graph = self._graph.clone()
            clone._maps = [object_map.copy() for object_map in self._maps]
            clone._handles = dict(self._handles)
            for kind in GeometricObjectKind:
                clone._old[kind] = self._old[kind] | self._new[kind]

        clone._add(new_pictures.configuration.last_constructed_object, is_new=True)
        clone._freeze_pictures()
        logger.debug(
            "Cloned contextual picture with %s: %d new lines, %d new circles",
            new_pictures.configuration.last_constructed_object,
            len(clone._new[_LINE]),
            len(clone._new[_CIRCLE]),
        )
        return clone

    def _freeze_pictures(self) -> None:
        for picture in self._pictures:
            picture.freeze()

    def _verify_extension(self, new_pictures: PicturesOfConfiguration) -> None:
        if len(new_pictures) != len(self._pictures):
            raise ValueError(
                f"Expected a bundle of {len(self._pictures)} pictures, got {len(new_pictures)}"
            )
        if not new_pictures.configuration.extends(self._pictures.configuration):
            raise ValueError("The new configuration must extend the current one by exactly one object")
        if not new_pictures.is_complete:
            raise ValueError("Cannot clone into an incompletely constructed bundle")
        for old_picture, new_picture in zip(self._pictures, new_pictures):
            for configuration_object, analytic_object in old_picture.items():
                if new_picture.get(configuration_object) != analytic_object:
                    raise ValueError(
                        "The new pictures are not positional extensions of the current ones "
                        f"(object {configuration_object} moved)"
                    )

    # ------------------------------------------------------------------
    # Adding objects

    def _add(self, configuration_object: ConfigurationObject, is_new: bool) -> None:
        existing = self._find_geometric_object(configuration_object, lambda picture: picture.get(configuration_object))

        if existing is not None:
            if existing.configuration_object is not None:
                raise ConstructorError(f"An attempt to add the existing object {configuration_object}")
            # an implicit line/circle gets its explicit definition; it stays in its partition
            self._graph.attach(existing, configuration_object)
            self._handles[configuration_object] = existing.handle
            self._metrics.increment("explicit_objects_attached")
            logger.debug("Attached %s to existing %r", configuration_object, existing)
            return

        kind = GeometricObjectKind.of(configuration_object.object_type)
        geometric_object = self._graph.new_object(kind, configuration_object)
        for picture, object_map in zip(self._pictures, self._maps):
            object_map.add(geometric_object.handle, picture.get(configuration_object))
        self._handles[configuration_object] = geometric_object.handle

        if kind is _POINT:
            self._add_point(geometric_object, is_new)  # type: ignore[arg-type]
        elif kind is _LINE or kind is _CIRCLE:
            self._add_line_or_circle(geometric_object, is_new)  # type: ignore[arg-type]
        else:  # pragma: no cover - closed enumeration
            raise ConstructorError(f"Unhandled geometric object kind: {kind}")

    def _find_geometric_object(
        self,
        configuration_object: ConfigurationObject,
        analytic_object_factory: Callable[[Picture], AnalyticObject],
    ) -> Optional[GeometricObject]:
        # Every picture is consulted: a coincidence could be visible in only
        # some of them, and rarely two pictures round the same pair differently.
        found: Optional[int] = None
        for index, (picture, object_map) in enumerate(zip(self._pictures, self._maps)):
            equal = object_map.get_left_or_none(analytic_object_factory(picture))
            if index > 0 and equal != found:
                equal_objects = [self._graph[handle] for handle in (found, equal) if handle is not None]
                raise InconsistentEqualityException(configuration_object, equal_objects)
            found = equal
        return None if found is None else self._graph[found]

    def _add_point(self, point: PointObject, is_new: bool) -> None:
        other_points = [self._graph[handle] for handle in self._sorted(_POINT, ObjectsFilter.ALL)]
        existing_lines = self._sorted(_LINE, ObjectsFilter.ALL)
        existing_circles = self._sorted(_CIRCLE, ObjectsFilter.ALL)

        # Collinearity and concyclity are judged before incidence, so three
        # points collinear in only some pictures surface as a collinearity
        # disagreement rather than as a point-on-line one.
        with self._metrics.measure("lines"):
            for other in other_points:
                self._resolve_line(point, other, is_new)  # type: ignore[arg-type]

        with self._metrics.measure("circles"):
            for first, second in combinations(other_points, 2):
                self._resolve_circle(point, first, second, is_new)  # type: ignore[arg-type]

        with self._metrics.measure("incidences"):
            for handle in existing_lines + existing_circles:
                line_or_circle = self._graph[handle]
                if self._is_point_on(point, line_or_circle):  # type: ignore[arg-type]
                    self._graph.link(point, line_or_circle)  # type: ignore[arg-type]

        self._partition(is_new)[_POINT].add(point.handle)

    def _add_line_or_circle(self, line_or_circle: DefinableByPoints, is_new: bool) -> None:
        with self._metrics.measure("incidences"):
            for handle in self._sorted(_POINT, ObjectsFilter.ALL):
                point = self._graph[handle]
                if self._is_point_on(point, line_or_circle):  # type: ignore[arg-type]
                    self._graph.link(point, line_or_circle)  # type: ignore[arg-type]
        self._partition(is_new)[line_or_circle.kind].add(line_or_circle.handle)

    def _resolve_line(self, point1: PointObject, point2: PointObject, is_new: bool) -> None:
        analytic_lines: List[Line] = []
        result: Optional[int] = None

        for index, object_map in enumerate(self._maps):
            try:
                analytic_line = Line(object_map.get_right(point1.handle), object_map.get_right(point2.handle))
            except AnalyticException as exc:
                raise InconsistentPicturesException(
                    f"Points {point1} and {point2} were evaluated distinct, "
                    "yet no line through them could be constructed"
                ) from exc
            analytic_lines.append(analytic_line)

            existing = object_map.get_left_or_none(analytic_line)
            if index > 0 and existing != result:
                raise InconsistentCollinearityException(
                    self._problematic_points((result, existing), (point1, point2))
                )
            result = existing

        if result is not None:
            return

        line = self._graph.new_line((point1, point2))
        self._partition(is_new)[_LINE].add(line.handle)
        for object_map, analytic_line in zip(self._maps, analytic_lines):
            object_map.add(line.handle, analytic_line)
        self._metrics.increment("lines_created")

    def _resolve_circle(self, point1: PointObject, point2: PointObject, point3: PointObject, is_new: bool) -> None:
        analytic_circles: List[Circle] = []
        result: Optional[int] = None
        collinear: Optional[bool] = None

        for index, object_map in enumerate(self._maps):
            analytic_points = [object_map.get_right(point.handle) for point in (point1, point2, point3)]

            # Lines are resolved first, so a real collinearity disagreement
            # should have been caught already; this is the last line of defence.
            are_collinear_here = are_collinear(*analytic_points)
            if collinear is not None and collinear != are_collinear_here:
                raise InconsistentCollinearityException((point1, point2, point3))
            collinear = are_collinear_here
            if collinear:
                continue

            try:
                analytic_circle = Circle.through(*analytic_points)
            except AnalyticException as exc:
                raise InconsistentPicturesException(
                    f"Points {point1}, {point2}, {point3} were evaluated non-collinear, "
                    "yet no circle through them could be constructed"
                ) from exc
            analytic_circles.append(analytic_circle)

            existing = object_map.get_left_or_none(analytic_circle)
            if index > 0 and existing != result:
                raise InconsistentConcyclityException(
                    self._problematic_points((result, existing), (point1, point2, point3))
                )
            result = existing

        if result is not None or collinear:
            return

        circle = self._graph.new_circle((point1, point2, point3))
        self._partition(is_new)[_CIRCLE].add(circle.handle)
        for object_map, analytic_circle in zip(self._maps, analytic_circles):
            object_map.add(circle.handle, analytic_circle)
        self._metrics.increment("circles_created")

    def _is_point_on(self, point: PointObject, line_or_circle: DefinableByPoints) -> bool:
        result: Optional[bool] = None
        for object_map in self._maps:
            lies = lies_on(object_map.get_right(line_or_circle.handle), object_map.get_right(point.handle))
            if result is not None and result != lies:
                raise InconsistentIncidenceException(point, line_or_circle)
            result = lies
        return bool(result)

    def _problematic_points(
        self, handles: Iterable[Optional[int]], points: Sequence[PointObject]
    ) -> List[PointObject]:
        collected: Dict[int, PointObject] = {}
        for handle in handles:
            if handle is None:
                continue
            for point in self._graph.points_of(self._graph[handle]):  # type: ignore[arg-type]
                collected.setdefault(point.handle, point)
        for point in points:
            collected.setdefault(point.handle, point)
        return list(collected.values())

    def _partition(self, is_new: bool) -> Dict[GeometricObjectKind, Set[int]]:
        return self._new if is_new else self._old

    def _sorted(self, kind: GeometricObjectKind, objects_filter: ObjectsFilter) -> List[int]:
        if objects_filter is ObjectsFilter.OLD:
            handles: Iterable[int] = self._old[kind]
        elif objects_filter is ObjectsFilter.NEW:
            handles = self._new[kind]
        else:
            handles = self._old[kind] | self._new[kind]
        return sorted(handles)

    # ------------------------------------------------------------------
    # Queries

    @property
    def pictures(self) -> PicturesOfConfiguration:
        """The bundle the graph was built from.

        Its pictures are frozen once the graph is built; extend a
        :meth:`~geopictures.picture.Picture.clone` and use
        :meth:`construct_by_cloning` instead.
        """

        return self._pictures

    @property
    def configuration(self) -> Configuration:
        return self._pictures.configuration

    @property
    def metrics(self) -> ConstructionMetrics:
        return self._metrics

    def get_geometric_object(self, configuration_object: ConfigurationObject) -> GeometricObject:
        try:
            return self._graph[self._handles[configuration_object]]
        except KeyError as exc:
            raise KeyError(f"Object {configuration_object} is not part of the contextual picture") from exc

    def get_analytic_object(self, geometric_object: GeometricObject, picture: Picture) -> AnalyticObject:
        return self._maps[self._pictures.index_of(picture)].get_right(geometric_object.handle)

    def points(self, objects_filter: ObjectsFilter = ObjectsFilter.ALL) -> List[PointObject]:
        return [self._graph[handle] for handle in self._sorted(_POINT, objects_filter)]  # type: ignore[misc]

    def lines(self, objects_filter: ObjectsFilter = ObjectsFilter.ALL) -> List[LineObject]:
        return [self._graph[handle] for handle in self._sorted(_LINE, objects_filter)]  # type: ignore[misc]

    def circles(self, objects_filter: ObjectsFilter = ObjectsFilter.ALL) -> List[CircleObject]:
        return [self._graph[handle] for handle in self._sorted(_CIRCLE, objects_filter)]  # type: ignore[misc]

    def lines_and_circles(self, objects_filter: ObjectsFilter = ObjectsFilter.ALL) -> List[DefinableByPoints]:
        return [*self.lines(objects_filter), *self.circles(objects_filter)]

    def is_new(self, geometric_object: GeometricObject) -> bool:
        return geometric_object.handle in self._new[geometric_object.kind]

    def points_of(self, line_or_circle: DefinableByPoints) -> List[PointObject]:
        return self._graph.points_of(self._graph[line_or_circle.handle])  # type: ignore[arg-type]

    def lines_of(self, point: PointObject) -> List[LineObject]:
        return self._graph.lines_of(self._graph[point.handle])  # type: ignore[arg-type]

    def circles_of(self, point: PointObject) -> List[CircleObject]:
        return self._graph.circles_of(self._graph[point.handle])  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return (
            f"ContextualPicture(points={len(self._old[_POINT]) + len(self._new[_POINT])}, "
            f"lines={len(self._old[_LINE]) + len(self._new[_LINE])}, "
            f"circles={len(self._old[_CIRCLE]) + len(self._new[_CIRCLE])})"
        )


def create_contextual_picture(
    pictures: PicturesOfConfiguration, metrics: Optional[ConstructionMetrics] = None
) -> ContextualPicture:
    """Build a :class:`ContextualPicture`, wrapping inconsistencies.

    Raises :class:`InconstructibleContextualPicture` carrying the inner
    :class:`InconsistentPicturesException`.
    """

    try:
        return ContextualPicture(pictures, metrics)
    except InconsistentPicturesException as exc:
        logger.debug("Contextual picture of %r is inconstructible: %s", pictures.configuration, exc)
        raise InconstructibleContextualPicture(exc) from exc


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "ContextualPicture._initialize",
        "ContextualPicture._resolve_line",
        "ContextualPicture._resolve_circle",
        "ContextualPicture._is_point_on",
        "ContextualPicture._find_geometric_object",
        "ContextualPicture._problematic_points",
        "ContextualPicture._partition",
        "ContextualPicture._sorted",
        "ContextualPicture.get_analytic_object",
        "ContextualPicture.get_geometric_object",
        "ContextualPicture.points_of",
        "ContextualPicture.lines_of",
        "ContextualPicture.circles_of",
        "ContextualPicture.is_new",
    },
)


__all__ = ["ContextualPicture", "ObjectsFilter", "create_contextual_picture"]
