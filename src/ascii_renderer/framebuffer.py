"""Fixed-size character buffer holding one rendered frame."""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .errors import InvalidConfigurationError


def require_cell(name: str, char: str) -> None:
    if not isinstance(char, str) or len(char) != 1:
        raise InvalidConfigurationError(f"{name} must be a single character, got {char!r}")


class FrameBuffer:
    """Row-major grid of single characters, ``index = x + y * width``.

    The underlying list is allocated once and only ever overwritten, so its
    length stays ``width * height`` for the lifetime of the buffer.
    """

    def __init__(self, width: int, height: int, fill: str = " ") -> None:
        if not isinstance(width, int) or not isinstance(height, int):
            raise InvalidConfigurationError("FrameBuffer dimensions must be integers")
        if width <= 0 or height <= 0:
            raise InvalidConfigurationError(
                f"FrameBuffer requires width and height >= 1, got {width}x{height}"
            )
        require_cell("Fill character", fill)
        self.width = width
        self.height = height
        self._cells: List[str] = [fill] * (width * height)

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> str:
        return self._cells[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    @property
    def cells(self) -> Tuple[str, ...]:
        return tuple(self._cells)

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} buffer")
        return x + y * self.width

    def get(self, x: int, y: int) -> str:
        return self._cells[self.index(x, y)]

    def set(self, x: int, y: int, char: str) -> None:
        self._cells[self.index(x, y)] = char

    def fill(self, char: str) -> None:
        require_cell("Fill character", char)
        cells = self._cells
        for i in range(len(cells)):
            cells[i] = char

    def rows(self) -> List[str]:
        """Split the buffer into ``height`` strings of ``width`` characters, top row first."""
        width = self.width
        cells = self._cells
        return ["".join(cells[start:start + width]) for start in range(0, len(cells), width)]

    def __str__(self) -> str:
        return "\n".join(self.rows())
