"""
Digital Rain - Matrix-style falling characters in the terminal

Streams of glyphs fall down every column, fading from a bright head to the
background color. Only cells that changed since the last frame are written.

Basic Usage:
    digital-rain --color green --chars matrix --speed 5 --density 0.7

From Python:
    from digital_rain import main
    main(["--color", "amber"])
"""

__version__ = "1.0.0"

from .colors import RgbColor, fade_palette
from .charsets import CharSet, ColorTheme
from .drop import Drop
from .screen import CellWriter, FrameBuffers, Screen
from .engine import MatrixEngine
from .terminal import CursesTerminal, InputError, KeyEvent, RainError, TerminalSetupError
from .scheduler import RainLoop
from .cli import RainConfig, main

__all__ = [
    "__version__",
    # Model
    "RgbColor",
    "fade_palette",
    "CharSet",
    "ColorTheme",
    "Drop",
    "Screen",
    "FrameBuffers",
    "CellWriter",
    "MatrixEngine",
    # Terminal
    "CursesTerminal",
    "KeyEvent",
    "RainError",
    "TerminalSetupError",
    "InputError",
    # Loop
    "RainLoop",
    "RainConfig",
    "main",
]
