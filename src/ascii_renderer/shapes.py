"""World-space shapes that can be hit-tested by the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .errors import InvalidConfigurationError
from .vector import Vector2


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigurationError(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Axis-aligned rectangle anchored at its top-left corner as seen on screen.

    ``position`` is the corner with the smallest x and the largest y; the
    rectangle extends ``width`` along +x and ``height`` along -y. Containment
    is half-open in that frame: the anchor corner is inside, while the edges at
    ``x + width`` and ``y - height`` are outside, so the rectangle covers
    exactly ``width`` by ``height`` cells and neighbours never share one.
    """

    position: Vector2
    width: float
    height: float

    def __post_init__(self) -> None:
        _require_positive("Rectangle width", self.width)
        _require_positive("Rectangle height", self.height)

    @property
    def left(self) -> float:
        return self.position.x

    @property
    def right(self) -> float:
        return self.position.x + self.width

    @property
    def top(self) -> float:
        return self.position.y

    @property
    def bottom(self) -> float:
        return self.position.y - self.height

    def contains(self, point: Vector2) -> bool:
        return self.left <= point.x < self.right and self.bottom < point.y <= self.top

    def bounding_box(self) -> "Rectangle":
        return self

    def intersects(self, other: "Rectangle") -> bool:
        # Closed edges: a circle touches the open edges of its own bounding box.
        return (
            self.left <= other.right
            and other.left <= self.right
            and self.bottom <= other.top
            and other.bottom <= self.top
        )


@dataclass(frozen=True, slots=True)
class Circle:
    """Circle around ``position``; points exactly ``radius`` away are inside."""

    position: Vector2
    radius: float

    def __post_init__(self) -> None:
        _require_positive("Circle radius", self.radius)

    def contains(self, point: Vector2) -> bool:
        return point.distance_to(self.position) <= self.radius

    def bounding_box(self) -> Rectangle:
        radius = self.radius
        return Rectangle(
            Vector2(self.position.x - radius, self.position.y + radius),
            2.0 * radius,
            2.0 * radius,
        )


Shape = Union[Rectangle, Circle]
