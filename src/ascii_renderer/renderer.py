"""Camera, coordinate mapping and rasterization of shapes into a character grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .errors import InvalidConfigurationError
from .framebuffer import FrameBuffer, require_cell
from .shapes import Rectangle, Shape
from .vector import Direction, Vector2


@dataclass(frozen=True)
class RendererOptions:
    viewport_width: int
    viewport_height: int
    foreground: str = "#"
    background: str = " "
    culling: bool = True

    def __post_init__(self) -> None:
        width = self.viewport_width
        height = self.viewport_height
        if not isinstance(width, int) or not isinstance(height, int):
            raise InvalidConfigurationError("Viewport dimensions must be integers")
        if width <= 0 or height <= 0:
            raise InvalidConfigurationError(
                f"Renderer requires viewport width and height >= 1, got {width}x{height}"
            )
        require_cell("Foreground character", self.foreground)
        require_cell("Background character", self.background)


class Renderer:
    """Rasterizes a scene of shapes as seen by a camera over the world plane.

    The camera position is the world point drawn at local pixel ``(0, 0)``,
    the top-left cell. Rows grow downward on screen while world y grows
    upward, so local ``(x, y)`` maps to world ``(camera.x + x, camera.y - y)``.
    """

    def __init__(self, options: RendererOptions, position: Vector2 = Vector2.ZERO) -> None:
        self.options = options
        self._buffer = FrameBuffer(options.viewport_width, options.viewport_height, fill=options.background)
        self._position = position
        self._shapes: List[Shape] = []

    @property
    def width(self) -> int:
        return self.options.viewport_width

    @property
    def height(self) -> int:
        return self.options.viewport_height

    @property
    def position(self) -> Vector2:
        return self._position

    @property
    def buffer(self) -> FrameBuffer:
        return self._buffer

    @property
    def shapes(self) -> Tuple[Shape, ...]:
        return tuple(self._shapes)

    def add_shape(self, shape: Shape) -> None:
        self._shapes.append(shape)

    def extend(self, shapes: Iterable[Shape]) -> None:
        for shape in shapes:
            self.add_shape(shape)

    def clear_shapes(self) -> None:
        self._shapes.clear()

    # Camera -----------------------------------------------------------

    def walk(self, direction: Union[Direction, Vector2], distance: float) -> None:
        vector = direction.vector if isinstance(direction, Direction) else direction
        self._position = self._position + vector * distance

    def bounding_box(self) -> Rectangle:
        """World rectangle covered by the viewport, anchored like a shape at its top-left."""
        return Rectangle(
            self._position,
            float(self.width),
            float(self.height),
        )

    # Coordinate mapping ----------------------------------------------

    def local_pixels(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def to_world(self, x: float, y: float) -> Vector2:
        return Vector2(self._position.x + x, self._position.y - y)

    def to_local(self, point: Vector2) -> Tuple[float, float]:
        return point.x - self._position.x, self._position.y - point.y

    def index(self, x: int, y: int) -> int:
        return self._buffer.index(x, y)

    # Rasterization ---------------------------------------------------

    def visible_shapes(self) -> List[Shape]:
        camera_box = self.bounding_box()
        return [shape for shape in self._shapes if shape.bounding_box().intersects(camera_box)]

    def render(self, cull: Optional[bool] = None) -> FrameBuffer:
        if cull is None:
            cull = self.options.culling
        candidates = self.visible_shapes() if cull else list(self._shapes)

        buffer = self._buffer
        buffer.fill(self.options.background)
        if not candidates:
            return buffer

        foreground = self.options.foreground
        for x, y in self.local_pixels():
            point = self.to_world(x, y)
            if any(shape.contains(point) for shape in candidates):
                buffer.set(x, y, foreground)
        return buffer

    def lines(self) -> List[str]:
        return self._buffer.rows()
