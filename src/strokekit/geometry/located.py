from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

import numpy as np

from strokekit.geometry.vectors import ORIGIN, require_vec2

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, eq=False)
class Located(Generic[T]):
    """A positionless value bound to a base point.

    Translating a located value moves only ``loc``; the payload keeps its
    local coordinates. ``translate`` and ``move_to`` are the only ways to
    reposition a payload.
    """

    loc: np.ndarray
    value: T

    def __post_init__(self) -> None:
        object.__setattr__(self, "loc", require_vec2(self.loc, "loc"))

    def __repr__(self) -> str:
        return f"Located(loc={self.loc.tolist()}, value={self.value!r})"

    def translate(self, offset: Sequence[float]) -> "Located[T]":
        return Located(self.loc + np.asarray(offset, dtype=float), self.value)

    def move_to(self, point: Sequence[float]) -> "Located[T]":
        return Located(point, self.value)

    def map(self, func: Callable[[T], U]) -> "Located[U]":
        return Located(self.loc, func(self.value))

    def start_point(self) -> np.ndarray:
        return np.array(self.loc, dtype=float)

    def end_point(self) -> np.ndarray:
        return self.loc + self.value.offset()  # type: ignore[attr-defined]


def at(value: T, point: Sequence[float] = ORIGIN) -> Located[T]:
    return Located(point, value)


def bind_loc(func: Callable[[T], Located[U]], located: Located[T]) -> Located[U]:
    """Apply ``func`` to the payload and translate its result by the base point."""
    return func(located.value).translate(located.loc)


__all__ = ["Located", "at", "bind_loc"]
