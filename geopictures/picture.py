"""Numeric realizations of configurations."""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .analytic import AnalyticObject
from .configuration import Configuration, ConfigurationObject
from .exceptions import InconsistentPicturesException
from .utils import BidirectionalMap


class PictureAddResult(NamedTuple):
    analytic_object: AnalyticObject
    equal_object: Optional[ConfigurationObject]


class Picture:
    """One realization: an injective map from configuration objects to analytic ones.

    Objects are added in dependency order.  The picture does no numerics of
    its own; whether two analytic objects coincide is decided by their
    tolerance-based equality.

    A picture handed to a contextual picture is frozen: its graph mirrors
    the stored objects, so further additions go to a :meth:`clone`.
    """

    def __init__(self) -> None:
        self._objects: BidirectionalMap[ConfigurationObject, AnalyticObject] = BidirectionalMap()
        self._frozen = False

    def add(self, configuration_object: ConfigurationObject, analytic_object: AnalyticObject) -> PictureAddResult:
        """Store ``analytic_object`` for ``configuration_object`` unless it collides.

        When an equal analytic object is already stored (for another object,
        or the same object is added a second time) nothing changes and the
        existing pair is reported back; the caller decides whether that is a
        duplicate or a failure.
        """

        if self._frozen:
            raise RuntimeError(f"Cannot add {configuration_object} to a frozen picture; add it to a clone")
        existing = self._objects.get_right_or_none(configuration_object)
        if existing is not None:
            return PictureAddResult(existing, configuration_object)
        equal_object = self._objects.get_left_or_none(analytic_object)
        if equal_object is not None:
            return PictureAddResult(self._objects.get_right(equal_object), equal_object)
        self._objects.add(configuration_object, analytic_object)
        return PictureAddResult(analytic_object, None)

    def get(self, configuration_object: ConfigurationObject) -> AnalyticObject:
        try:
            return self._objects.get_right(configuration_object)
        except KeyError as exc:
            raise KeyError(f"Object {configuration_object} has not been added to the picture") from exc

    def contains(self, configuration_object: ConfigurationObject) -> bool:
        return self._objects.contains_left(configuration_object)

    __contains__ = contains

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def objects(self) -> List[ConfigurationObject]:
        return list(self._objects.lefts())

    def items(self) -> Iterator[Tuple[ConfigurationObject, AnalyticObject]]:
        return self._objects.items()

    def clone(self) -> "Picture":
        """Return an unfrozen picture with the same pairs; analytic objects are immutable and shared."""

        clone = Picture()
        clone._objects = self._objects.copy()
        return clone

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"Picture({len(self)} objects)"


class PicturesOfConfiguration:
    """Fixed-size, ordered bundle of pictures of the same configuration.

    All pictures hold the same configuration objects in the same order, and
    that order is a prefix of ``configuration.all_objects``.  A bundle built
    for a failed construction holds only the objects up to the failure.
    """

    def __init__(self, configuration: Configuration, pictures: Sequence[Picture]) -> None:
        if not pictures:
            raise ValueError("A bundle needs at least one picture")
        self.configuration = configuration
        self._pictures: Tuple[Picture, ...] = tuple(pictures)
        self._verify_alignment()

    def _verify_alignment(self) -> None:
        expected = self._pictures[0].objects
        for index, picture in enumerate(self._pictures[1:], start=1):
            objects = picture.objects
            if len(objects) != len(expected) or any(a is not b for a, b in zip(objects, expected)):
                raise InconsistentPicturesException(
                    f"Picture {index} does not contain the same objects as picture 0"
                )
        all_objects = self.configuration.all_objects
        if len(expected) > len(all_objects) or any(a is not b for a, b in zip(expected, all_objects)):
            raise InconsistentPicturesException("The pictures do not follow the order of the configuration")

    @property
    def first(self) -> Picture:
        return self._pictures[0]

    @property
    def is_complete(self) -> bool:
        """``True`` when every configuration object has been realized."""

        return len(self._pictures[0]) == len(self.configuration)

    def index_of(self, picture: Picture) -> int:
        for index, candidate in enumerate(self._pictures):
            if candidate is picture:
                return index
        raise KeyError(f"{picture!r} is not part of this bundle")

    def __iter__(self) -> Iterator[Picture]:
        return iter(self._pictures)

    def __len__(self) -> int:
        return len(self._pictures)

    def __getitem__(self, index: int) -> Picture:
        return self._pictures[index]

    def __repr__(self) -> str:
        return f"PicturesOfConfiguration({len(self)} pictures, {len(self.first)} objects each)"


__all__ = ["Picture", "PictureAddResult", "PicturesOfConfiguration"]
