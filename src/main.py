"""Interactive entry point for the terminal shape renderer."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .ascii_renderer.controls import apply_command, commands_for_keys
from .ascii_renderer.errors import (
    DisplayWriteError,
    InvalidConfigurationError,
    TerminalSetupError,
)
from .ascii_renderer.logging_setup import configure_logging, get_logger
from .ascii_renderer.renderer import Renderer, RendererOptions
from .ascii_renderer.shapes import Circle, Rectangle, Shape
from .ascii_renderer.terminal import TerminalController
from .ascii_renderer.vector import Vector2

# One row for the camera position, one for the key help.
STATUS_ROWS = 2

EXIT_OK = 0
EXIT_SETUP_FAILURE = 1
EXIT_INTERRUPTED = 130


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pan a camera over 2D shapes drawn in your terminal")
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Viewport width in cells (default: half the terminal columns)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help=f"Viewport height in cells (default: terminal lines minus {STATUS_ROWS})",
    )
    parser.add_argument(
        "--step",
        type=float,
        default=1.0,
        help="World units the camera moves per key press (default: 1)",
    )
    parser.add_argument(
        "--poll-timeout",
        type=float,
        default=0.05,
        help="Seconds to wait for a key before redrawing (default: 0.05)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Render a fixed number of frames and exit (0 = interactive until 'q')",
    )
    parser.add_argument(
        "--no-cull",
        action="store_true",
        help="Test every shape against every cell instead of culling by bounding box",
    )
    parser.add_argument(
        "--spacer",
        type=str,
        default=" ",
        help="Character written after each cell to square up terminal glyphs",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write diagnostics to this file instead of stderr",
    )
    return parser.parse_args(argv)


@dataclass
class RuntimeConfig:
    width: Optional[int]
    height: Optional[int]
    step: float
    poll_timeout: float
    frames: int
    culling: bool
    spacer: str
    warnings: List[str] = field(default_factory=list)

    @property
    def interactive(self) -> bool:
        return self.frames == 0


def _setup_runtime(args: argparse.Namespace) -> RuntimeConfig:
    warnings: List[str] = []

    for name in ("width", "height"):
        value = getattr(args, name)
        if value is not None and value < 1:
            raise InvalidConfigurationError(f"--{name} must be at least 1, got {value}")

    if not math.isfinite(args.step) or args.step <= 0:
        raise InvalidConfigurationError(f"--step must be a positive number, got {args.step}")

    poll_timeout = args.poll_timeout
    if not math.isfinite(poll_timeout) or poll_timeout < 0:
        warnings.append(f"Ignoring invalid poll timeout {poll_timeout}; using 0.05s")
        poll_timeout = 0.05

    frames = args.frames
    if frames < 0:
        warnings.append(f"Negative frame count {frames} treated as interactive mode")
        frames = 0

    spacer = args.spacer
    if len(spacer) > 1:
        warnings.append(f"Spacer {spacer!r} truncated to one character")
        spacer = spacer[0]

    return RuntimeConfig(
        width=args.width,
        height=args.height,
        step=args.step,
        poll_timeout=poll_timeout,
        frames=frames,
        culling=not args.no_cull,
        spacer=spacer,
        warnings=warnings,
    )


def _emit_warnings(warnings: Sequence[str]) -> None:
    logger = get_logger()
    for warning in warnings:
        logger.warning(warning)


def default_scene() -> List[Shape]:
    return [
        Circle(Vector2(7.0, 3.0), 10.0),
        Rectangle(Vector2(-20.0, -8.0), 6.0, 4.0),
    ]


def initial_camera(width: int, height: int) -> Vector2:
    """Camera position that puts the world origin in the middle of the viewport."""
    return Vector2(float(-(width // 2)), float(height // 2))


def _viewport_size(controller: TerminalController, config: RuntimeConfig) -> Tuple[int, int]:
    width, height = config.width, config.height
    if width is None or height is None:
        columns, lines = controller.size_tuple()
        cell_columns = 2 if config.spacer else 1
        if width is None:
            width = columns // cell_columns
        if height is None:
            height = lines - STATUS_ROWS
    return width, height


def _create_renderer(width: int, height: int, config: RuntimeConfig) -> Renderer:
    options = RendererOptions(viewport_width=width, viewport_height=height, culling=config.culling)
    renderer = Renderer(options, position=initial_camera(width, height))
    renderer.extend(default_scene())
    return renderer


def _status_lines(renderer: Renderer) -> Tuple[str, str]:
    position = renderer.position
    return (
        f"Position: ({position.x:g}, {position.y:g})",
        "Arrow keys: move camera  q: quit",
    )


def _draw_frame(renderer: Renderer, controller: TerminalController) -> None:
    renderer.render()
    try:
        controller.draw_lines(renderer.lines(), _status_lines(renderer))
    except DisplayWriteError as exc:
        get_logger().warning("%s", exc)


def _run_loop(renderer: Renderer, controller: TerminalController, config: RuntimeConfig) -> int:
    frame_counter = 0
    while True:
        _draw_frame(renderer, controller)
        frame_counter += 1
        if config.frames and frame_counter >= config.frames:
            return EXIT_OK

        for command in commands_for_keys(controller.poll_keys(config.poll_timeout)):
            if not apply_command(renderer, command, config.step):
                return EXIT_OK


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    logger = configure_logging(getattr(logging, args.log_level), args.log_file)

    try:
        config = _setup_runtime(args)
    except InvalidConfigurationError as exc:
        logger.error("invalid configuration: %s", exc)
        return EXIT_SETUP_FAILURE
    _emit_warnings(config.warnings)

    controller = TerminalController(spacer=config.spacer, require_input=config.interactive)
    try:
        with controller:
            width, height = _viewport_size(controller, config)
            renderer = _create_renderer(width, height, config)
            return _run_loop(renderer, controller, config)
    except (TerminalSetupError, InvalidConfigurationError) as exc:
        logger.error("setup failed: %s", exc)
        return EXIT_SETUP_FAILURE
    except KeyboardInterrupt:  # pragma: no cover - interactive loop
        sys.stdout.write("\nInterrupted. Bye!\n")
        sys.stdout.flush()
        return EXIT_INTERRUPTED


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
