"""Two-component vector maths and the cardinal movement directions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .errors import DegenerateVectorError


@dataclass(frozen=True, slots=True)
class Vector2:
    """Lightweight immutable 2D vector.

    World space uses +x to the right and +y upward.
    """

    x: float
    y: float

    ZERO: ClassVar["Vector2"]

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        if not isinstance(scalar, (int, float)):
            raise TypeError("Vector2 can only be multiplied by a scalar")
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        if scalar == 0:
            raise ZeroDivisionError("Division by zero in Vector2")
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def length_squared(self) -> float:
        return self.dot(self)

    def distance_to(self, other: "Vector2") -> float:
        return (self - other).length()

    def normalized(self) -> "Vector2":
        """Return a unit-length copy.

        Raises :class:`DegenerateVectorError` for the zero vector, which has
        no direction to preserve.
        """
        length = self.length()
        if length == 0.0:
            raise DegenerateVectorError("Cannot normalize a zero-length Vector2")
        return self / length

    def normalize(self) -> "Vector2":
        """Return a new unit vector, same as :meth:`normalized`; ``self`` is unchanged."""
        return self.normalized()


Vector2.ZERO = Vector2(0.0, 0.0)


class Direction(Enum):
    """Camera movement directions in world space."""

    UP = (0.0, 1.0)
    DOWN = (0.0, -1.0)
    LEFT = (-1.0, 0.0)
    RIGHT = (1.0, 0.0)

    @property
    def vector(self) -> Vector2:
        return Vector2(*self.value)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
