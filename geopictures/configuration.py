"""Symbolic configurations: loose objects, constructed objects and layouts."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .constructions import PredefinedConstructionType


class ConfigurationError(ValueError):
    """Raised when a configuration or one of its objects is malformed."""


class ConfigurationObjectType(Enum):
    POINT = "point"
    LINE = "line"
    CIRCLE = "circle"


class LooseObjectLayout(Enum):
    """Shape families the loose objects of a configuration are drawn from."""

    LINE_SEGMENT = (ConfigurationObjectType.POINT, ConfigurationObjectType.POINT)
    TRIANGLE = (ConfigurationObjectType.POINT,) * 3
    QUADRILATERAL = (ConfigurationObjectType.POINT,) * 4
    LINE_AND_POINT = (ConfigurationObjectType.LINE, ConfigurationObjectType.POINT)
    LINE_AND_TWO_POINTS = (
        ConfigurationObjectType.LINE,
        ConfigurationObjectType.POINT,
        ConfigurationObjectType.POINT,
    )

    @property
    def object_types(self) -> Tuple[ConfigurationObjectType, ...]:
        return self.value


_ids = itertools.count()


@dataclass(frozen=True, eq=False)
class ConfigurationObject:
    """Symbolic node of a configuration.

    Equality and hashing are by identity: two objects built from the same
    construction and arguments are still distinct nodes.
    """

    object_type: ConfigurationObjectType
    name: Optional[str] = None
    id: int = field(init=False, repr=False, default_factory=lambda: next(_ids))

    def __str__(self) -> str:
        return self.name or f"{self.object_type.value}#{self.id}"


@dataclass(frozen=True, eq=False)
class LooseConfigurationObject(ConfigurationObject):
    pass


@dataclass(frozen=True, eq=False, init=False)
class ConstructedConfigurationObject(ConfigurationObject):
    construction: "PredefinedConstructionType" = field(default=None)  # type: ignore[assignment]
    arguments: Tuple[ConfigurationObject, ...] = ()

    def __init__(
        self,
        construction: "PredefinedConstructionType",
        arguments: Sequence[ConfigurationObject],
        name: Optional[str] = None,
    ) -> None:
        arguments = tuple(arguments)
        expected = construction.input_types
        actual = tuple(argument.object_type for argument in arguments)
        if actual != expected:
            raise ConfigurationError(
                f"{construction.name} expects arguments "
                f"({', '.join(t.value for t in expected)}), got ({', '.join(t.value for t in actual)})"
            )
        object.__setattr__(self, "object_type", construction.output_type)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "id", next(_ids))
        object.__setattr__(self, "construction", construction)
        object.__setattr__(self, "arguments", arguments)

    def __repr__(self) -> str:
        args = ", ".join(str(argument) for argument in self.arguments)
        return f"{self}={self.construction.name}({args})"


def loose_point(name: Optional[str] = None) -> LooseConfigurationObject:
    return LooseConfigurationObject(ConfigurationObjectType.POINT, name)


def loose_line(name: Optional[str] = None) -> LooseConfigurationObject:
    return LooseConfigurationObject(ConfigurationObjectType.LINE, name)


class Configuration:
    """Loose objects drawn from a layout followed by constructed objects.

    ``all_objects`` is in dependency order: every argument of a constructed
    object precedes it.
    """

    def __init__(
        self,
        layout: LooseObjectLayout,
        loose_objects: Sequence[LooseConfigurationObject],
        constructed_objects: Iterable[ConstructedConfigurationObject] = (),
    ) -> None:
        self.layout = layout
        self.loose_objects: Tuple[LooseConfigurationObject, ...] = tuple(loose_objects)
        self.constructed_objects: Tuple[ConstructedConfigurationObject, ...] = tuple(constructed_objects)
        self._validate()

    def _validate(self) -> None:
        types = tuple(obj.object_type for obj in self.loose_objects)
        if types != self.layout.object_types:
            raise ConfigurationError(
                f"Layout {self.layout.name} needs loose objects "
                f"({', '.join(t.value for t in self.layout.object_types)}), "
                f"got ({', '.join(t.value for t in types)})"
            )
        seen = set()
        for obj in self.loose_objects:
            if obj in seen:
                raise ConfigurationError(f"Object {obj} appears twice in the configuration")
            seen.add(obj)
        for obj in self.constructed_objects:
            if not isinstance(obj, ConstructedConfigurationObject):
                raise ConfigurationError(f"Object {obj} is not a constructed object")
            if obj in seen:
                raise ConfigurationError(f"Object {obj} appears twice in the configuration")
            missing = [argument for argument in obj.arguments if argument not in seen]
            if missing:
                names = ", ".join(str(argument) for argument in missing)
                raise ConfigurationError(f"Object {obj} uses objects not defined before it: {names}")
            seen.add(obj)

    @property
    def all_objects(self) -> List[ConfigurationObject]:
        return [*self.loose_objects, *self.constructed_objects]

    @property
    def last_constructed_object(self) -> ConfigurationObject:
        if self.constructed_objects:
            return self.constructed_objects[-1]
        return self.loose_objects[-1]

    def derive(self, new_object: ConstructedConfigurationObject) -> "Configuration":
        """Return a new configuration extended by ``new_object``."""

        return Configuration(self.layout, self.loose_objects, (*self.constructed_objects, new_object))

    def extends(self, other: "Configuration") -> bool:
        """Return ``True`` when this configuration is ``other`` plus exactly one object."""

        mine = self.all_objects
        theirs = other.all_objects
        return len(mine) == len(theirs) + 1 and all(a is b for a, b in zip(mine, theirs))

    def __len__(self) -> int:
        return len(self.loose_objects) + len(self.constructed_objects)

    def __repr__(self) -> str:
        loose = ", ".join(str(obj) for obj in self.loose_objects)
        constructed = "; ".join(repr(obj) for obj in self.constructed_objects)
        return f"Configuration({self.layout.name}: {loose}{' | ' + constructed if constructed else ''})"


__all__ = [
    "Configuration",
    "ConfigurationError",
    "ConfigurationObject",
    "ConfigurationObjectType",
    "ConstructedConfigurationObject",
    "LooseConfigurationObject",
    "LooseObjectLayout",
    "loose_line",
    "loose_point",
]
