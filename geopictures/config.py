"""Configuration helpers for the geometry constructor."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class ConstructorSettings:
    """Redundancy and retry budgets for drawing pictures."""

    number_of_pictures: int = 5
    max_attempts_to_reconstruct_picture: int = 3
    max_attempts_to_reconstruct_all_pictures: int = 5
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.number_of_pictures < 1:
            raise ValueError("number_of_pictures must be at least 1")
        if self.max_attempts_to_reconstruct_picture < 1:
            raise ValueError("max_attempts_to_reconstruct_picture must be at least 1")
        if self.max_attempts_to_reconstruct_all_pictures < 1:
            raise ValueError("max_attempts_to_reconstruct_all_pictures must be at least 1")


_CONSTRUCTOR_SETTINGS = ConstructorSettings()


def get_constructor_settings() -> ConstructorSettings:
    return copy.deepcopy(_CONSTRUCTOR_SETTINGS)


def set_constructor_settings(settings: ConstructorSettings) -> None:
    global _CONSTRUCTOR_SETTINGS
    _CONSTRUCTOR_SETTINGS = copy.deepcopy(settings)
