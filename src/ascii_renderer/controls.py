"""Translation of key presses into camera commands."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from .renderer import Renderer
from .vector import Direction


class Command(Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    QUIT = "QUIT"

    @property
    def direction(self) -> Optional[Direction]:
        if self is Command.QUIT:
            return None
        return Direction[self.name]


_KEY_COMMANDS = {
    "UP": Command.UP,
    "DOWN": Command.DOWN,
    "LEFT": Command.LEFT,
    "RIGHT": Command.RIGHT,
    "q": Command.QUIT,
    "Q": Command.QUIT,
}


def command_for_key(key: str) -> Optional[Command]:
    return _KEY_COMMANDS.get(key)


def commands_for_keys(keys: Iterable[str]) -> List[Command]:
    return [command for command in map(command_for_key, keys) if command is not None]


def apply_command(renderer: Renderer, command: Command, distance: float = 1.0) -> bool:
    """Apply ``command`` to the camera; returns ``False`` once the loop should stop."""
    direction = command.direction
    if direction is None:
        return False
    renderer.walk(direction, distance)
    return True
