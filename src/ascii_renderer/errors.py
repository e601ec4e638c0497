"""Exception types raised by the renderer and its terminal adapter."""

from __future__ import annotations


class RendererError(Exception):
    """Base class for every error raised by this package."""


class InvalidConfigurationError(RendererError, ValueError):
    """A viewport, shape or CLI value that cannot be rendered."""


class DegenerateVectorError(RendererError, ZeroDivisionError):
    """Normalization of a vector whose length is zero."""


class DisplayWriteError(RendererError, OSError):
    """A frame could not be written to the display."""


class TerminalSetupError(RendererError, RuntimeError):
    """The terminal could not be measured or switched into cbreak mode."""
