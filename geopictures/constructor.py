"""Drawing redundant pictures of configurations.

A :class:`GeometryConstructor` realizes a configuration several times with
independently drawn loose objects.  Each picture stops at the first object
that cannot be constructed or that duplicates an earlier one; the pictures of
one bundle are required to agree on that outcome, otherwise they are drawn
again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .analytic import AnalyticObject, Line, Point, are_collinear, random_point, random_scalene_acute_triangle
from .config import ConstructorSettings, get_constructor_settings
from .configuration import Configuration, ConfigurationObject, ConstructedConfigurationObject, LooseObjectLayout
from .constructions import construct_analytic_object
from .contextual_picture import ContextualPicture, create_contextual_picture
from .exceptions import GeometryConstructionException, InconsistentPicturesException, InconstructibleContextualPicture
from .logging_utils import apply_debug_logging
from .metrics import ConstructionMetrics
from .picture import Picture, PicturesOfConfiguration

logger = logging.getLogger(__name__)

# Rejection sampling of loose objects gives up after this many draws.
_MAX_SAMPLES = 1000


@dataclass
class ConstructionData:
    """Outcome of constructing one configuration.

    ``duplicate`` is ``(older_object, newer_object)`` when the newer object
    turned out equal to an object already present.
    """

    inconstructible_object: Optional[ConfigurationObject] = None
    duplicate: Optional[Tuple[ConfigurationObject, ConfigurationObject]] = None

    @property
    def successful(self) -> bool:
        return self.inconstructible_object is None and self.duplicate is None

    def describe(self) -> str:
        if self.inconstructible_object is not None:
            return f"inconstructible {self.inconstructible_object}"
        if self.duplicate is not None:
            return f"{self.duplicate[1]} duplicates {self.duplicate[0]}"
        return "success"


class GeometryConstructor:
    """Realizes configurations as :class:`PicturesOfConfiguration` bundles."""

    def __init__(
        self,
        settings: Optional[ConstructorSettings] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.settings = settings if settings is not None else get_constructor_settings()
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.random_seed)

    # ------------------------------------------------------------------
    # Pictures

    def construct(self, configuration: Configuration) -> Tuple[PicturesOfConfiguration, ConstructionData]:
        """Draw ``number_of_pictures`` pictures of ``configuration``.

        Raises :class:`GeometryConstructionException` when the pictures keep
        disagreeing after ``max_attempts_to_reconstruct_all_pictures`` bundles.
        """

        attempts = self.settings.max_attempts_to_reconstruct_all_pictures
        for attempt in range(attempts):
            outcomes = [self._construct_picture(configuration) for _ in range(self.settings.number_of_pictures)]
            pictures = [picture for picture, _ in outcomes]
            data = [datum for _, datum in outcomes]

            if all(datum == data[0] for datum in data[1:]):
                bundle = PicturesOfConfiguration(configuration, pictures)
                logger.info(
                    "Constructed %d pictures of %r: %s", len(bundle), configuration, data[0].describe()
                )
                return bundle, data[0]

            logger.warning(
                "Pictures of %r disagree on the outcome (%s), redrawing all of them (attempt %d/%d)",
                configuration,
                "; ".join(sorted({datum.describe() for datum in data})),
                attempt + 1,
                attempts,
            )

        raise GeometryConstructionException(
            f"Pictures of {configuration!r} could not be drawn consistently in {attempts} attempts"
        )

    def construct_by_cloning(
        self, pictures: PicturesOfConfiguration, configuration: Configuration
    ) -> Tuple[PicturesOfConfiguration, ConstructionData]:
        """Extend ``pictures`` by the last object of ``configuration``.

        The existing pictures are cloned and only the new object is
        constructed.  When the clones disagree on the outcome the whole
        configuration is constructed again from freshly drawn loose objects.
        """

        cloned = self._clone_pictures(pictures, configuration)
        if cloned is not None:
            return cloned
        logger.warning("Cloned pictures of %r disagree, constructing them from scratch", configuration)
        return self.construct(configuration)

    def _clone_pictures(
        self, pictures: PicturesOfConfiguration, configuration: Configuration
    ) -> Optional[Tuple[PicturesOfConfiguration, ConstructionData]]:
        if not configuration.extends(pictures.configuration):
            raise ValueError("The configuration must extend the pictured one by exactly one object")
        if not pictures.is_complete:
            raise ValueError("Cannot extend pictures of a configuration that failed to construct")

        new_object = configuration.last_constructed_object
        clones = [picture.clone() for picture in pictures]
        data = [self._construct_objects(clone, [new_object]) for clone in clones]  # type: ignore[list-item]
        if any(datum != data[0] for datum in data[1:]):
            return None

        logger.debug("Extended %d pictures by %r: %s", len(clones), new_object, data[0].describe())
        return PicturesOfConfiguration(configuration, clones), data[0]

    def _construct_picture(self, configuration: Configuration) -> Tuple[Picture, ConstructionData]:
        attempts = self.settings.max_attempts_to_reconstruct_picture
        for attempt in range(attempts):
            picture = Picture()
            for configuration_object, analytic_object in zip(
                configuration.loose_objects, self._draw_loose_objects(configuration.layout)
            ):
                picture.add(configuration_object, analytic_object)

            data = self._construct_objects(picture, configuration.constructed_objects)
            if data.successful:
                return picture, data
            logger.debug(
                "Picture of %r failed (%s), attempt %d/%d", configuration, data.describe(), attempt + 1, attempts
            )
        return picture, data

    def _construct_objects(
        self, picture: Picture, objects: Sequence[ConstructedConfigurationObject]
    ) -> ConstructionData:
        for configuration_object in objects:
            analytic_object = construct_analytic_object(configuration_object, picture)
            if analytic_object is None:
                return ConstructionData(inconstructible_object=configuration_object)
            result = picture.add(configuration_object, analytic_object)
            if result.equal_object is not None:
                return ConstructionData(duplicate=(result.equal_object, configuration_object))
        return ConstructionData()

    # ------------------------------------------------------------------
    # Loose objects

    def _draw_loose_objects(self, layout: LooseObjectLayout) -> List[AnalyticObject]:
        if layout is LooseObjectLayout.LINE_SEGMENT:
            first = random_point(self.rng)
            return [first, self._random_point_avoiding([first])]

        if layout is LooseObjectLayout.TRIANGLE:
            return self._random_triangle()

        if layout is LooseObjectLayout.QUADRILATERAL:
            points = self._random_triangle()
            for _ in range(_MAX_SAMPLES):
                fourth = random_point(self.rng)
                if fourth not in points and not any(are_collinear(*triple) for triple in combinations([*points, fourth], 3)):
                    return [*points, fourth]
            raise GeometryConstructionException("Could not draw a quadrilateral in general position")

        if layout in (LooseObjectLayout.LINE_AND_POINT, LooseObjectLayout.LINE_AND_TWO_POINTS):
            first = random_point(self.rng)
            line = Line(first, self._random_point_avoiding([first]))
            objects: List[AnalyticObject] = [line]
            points: List[Point] = []
            for _ in range(len(layout.object_types) - 1):
                point = self._random_point_avoiding(points, line)
                points.append(point)
                objects.append(point)
            return objects

        raise ValueError(f"Unsupported loose object layout: {layout}")

    def _random_triangle(self) -> List[Point]:
        triangle = random_scalene_acute_triangle(self.rng)
        # shuffle so the fixed base AB is not always the same pair of loose points
        return [triangle[index] for index in self.rng.permutation(3)]

    def _random_point_avoiding(self, points: Sequence[Point], line: Optional[Line] = None) -> Point:
        for _ in range(_MAX_SAMPLES):
            candidate = random_point(self.rng)
            if candidate in points or (line is not None and line.contains(candidate)):
                continue
            return candidate
        raise GeometryConstructionException("Could not draw a point in general position")

    # ------------------------------------------------------------------
    # Contextual pictures

    def construct_contextual_picture(
        self, configuration: Configuration, metrics: Optional[ConstructionMetrics] = None
    ) -> Tuple[Optional[ContextualPicture], ConstructionData]:
        """Construct pictures and, when successful, their contextual picture.

        Raises :class:`InconstructibleContextualPicture` when the pictures
        disagree on a geometric fact.
        """

        pictures, data = self.construct(configuration)
        if not data.successful:
            return None, data
        contextual_picture = create_contextual_picture(pictures, metrics)
        logger.info("Built %r for %r", contextual_picture, configuration)
        return contextual_picture, data

    def construct_contextual_picture_by_cloning(
        self,
        contextual_picture: ContextualPicture,
        configuration: Configuration,
        metrics: Optional[ConstructionMetrics] = None,
    ) -> Tuple[Optional[ContextualPicture], ConstructionData]:
        """Extend ``contextual_picture`` by the last object of ``configuration``.

        Falls back to building everything from scratch when the cloned
        pictures disagree on the outcome.
        """

        cloned = self._clone_pictures(contextual_picture.pictures, configuration)
        if cloned is None:
            logger.warning("Cloned pictures of %r disagree, constructing them from scratch", configuration)
            return self.construct_contextual_picture(configuration, metrics)

        pictures, data = cloned
        if not data.successful:
            return None, data
        try:
            extended = contextual_picture.construct_by_cloning(pictures, metrics)
        except InconsistentPicturesException as exc:
            logger.debug("Cloned contextual picture of %r is inconstructible: %s", configuration, exc)
            raise InconstructibleContextualPicture(exc) from exc
        logger.info("Extended %r for %r", extended, configuration)
        return extended, data


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "ConstructionData.describe",
        "GeometryConstructor._random_point_avoiding",
        "GeometryConstructor._random_triangle",
    },
)


__all__ = ["ConstructionData", "GeometryConstructor"]
