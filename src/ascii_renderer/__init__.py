"""Terminal-based 2D shape rasterizer with a movable camera."""

from .controls import Command, apply_command, command_for_key, commands_for_keys
from .errors import (
    DegenerateVectorError,
    DisplayWriteError,
    InvalidConfigurationError,
    RendererError,
    TerminalSetupError,
)
from .framebuffer import FrameBuffer
from .renderer import Renderer, RendererOptions
from .shapes import Circle, Rectangle, Shape
from .terminal import TerminalController, compose_frame
from .vector import Direction, Vector2

__all__ = [
    "Circle",
    "Command",
    "DegenerateVectorError",
    "Direction",
    "DisplayWriteError",
    "FrameBuffer",
    "InvalidConfigurationError",
    "Rectangle",
    "Renderer",
    "RendererError",
    "RendererOptions",
    "Shape",
    "TerminalController",
    "TerminalSetupError",
    "Vector2",
    "apply_command",
    "command_for_key",
    "commands_for_keys",
    "compose_frame",
]
