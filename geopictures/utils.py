"""Utility helpers shared across picture modules."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterator, Optional, Tuple, TypeVar

L = TypeVar("L", bound=Hashable)
R = TypeVar("R", bound=Hashable)


class BidirectionalMap(Generic[L, R]):
    """Injective mapping navigable from both sides.

    Keys on either side are unique; ``add`` refuses to overwrite.  Iteration
    follows insertion order.
    """

    __slots__ = ("_left_to_right", "_right_to_left")

    def __init__(self) -> None:
        self._left_to_right: Dict[L, R] = {}
        self._right_to_left: Dict[R, L] = {}

    def add(self, left: L, right: R) -> None:
        if left in self._left_to_right:
            raise ValueError(f"Left key {left!r} is already mapped")
        if right in self._right_to_left:
            raise ValueError(f"Right key {right!r} is already mapped")
        self._left_to_right[left] = right
        self._right_to_left[right] = left

    def get_right(self, left: L) -> R:
        return self._left_to_right[left]

    def get_left(self, right: R) -> L:
        return self._right_to_left[right]

    def get_left_or_none(self, right: R) -> Optional[L]:
        return self._right_to_left.get(right)

    def get_right_or_none(self, left: L) -> Optional[R]:
        return self._left_to_right.get(left)

    def contains_left(self, left: L) -> bool:
        return left in self._left_to_right

    def contains_right(self, right: R) -> bool:
        return right in self._right_to_left

    def items(self) -> Iterator[Tuple[L, R]]:
        return iter(self._left_to_right.items())

    def lefts(self) -> Iterator[L]:
        return iter(self._left_to_right)

    def copy(self) -> "BidirectionalMap[L, R]":
        clone: BidirectionalMap[L, R] = BidirectionalMap()
        clone._left_to_right = dict(self._left_to_right)
        clone._right_to_left = dict(self._right_to_left)
        return clone

    def __len__(self) -> int:
        return len(self._left_to_right)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"BidirectionalMap({len(self)} pairs)"


__all__ = ["BidirectionalMap"]
