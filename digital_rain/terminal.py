"""Curses terminal: mode setup and teardown, key input, colored cell output."""

import curses
import locale
import logging
import math
from dataclasses import dataclass
from typing import Optional

from .colors import CHANNEL_MAX, RgbColor
from .screen import CellWriter

logger = logging.getLogger(__name__)

# xterm-256 color cube channel levels and first grayscale index
CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
GRAY_START = 232

# First color number free for custom RGB definitions (the 16 ANSI colors stay untouched)
CUSTOM_COLOR_START = 16

# Ctrl+A .. Ctrl+Z arrive as 1 .. 26 in raw mode
CTRL_KEY_MAX = 26


class RainError(Exception):
    """Base class for terminal-side failures."""


class TerminalSetupError(RainError):
    """The terminal cannot be put into a usable state."""


class InputError(RainError):
    """Reading the input stream failed."""


@dataclass(frozen=True)
class KeyEvent:
    """A key press: key code plus whether Ctrl was held."""

    code: int
    ctrl: bool = False

    @classmethod
    def from_curses(cls, key: int) -> "KeyEvent":
        if 1 <= key <= CTRL_KEY_MAX:
            return cls(code=ord("a") + key - 1, ctrl=True)
        return cls(code=key)

    @property
    def is_interrupt(self) -> bool:
        """True for Ctrl+C."""
        return self.ctrl and self.code == ord("c")


def _distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def xterm256_index(color: RgbColor) -> int:
    """Nearest xterm-256 palette entry, from the color cube or the gray ramp."""
    rgb = (color.r, color.g, color.b)

    levels = [min(range(len(CUBE_LEVELS)), key=lambda i: abs(CUBE_LEVELS[i] - c)) for c in rgb]
    cube = tuple(CUBE_LEVELS[i] for i in levels)
    cube_index = 16 + 36 * levels[0] + 6 * levels[1] + levels[2]

    gray_step = min(max(round((sum(rgb) / 3 - 8) / 10), 0), 23)
    gray = (8 + 10 * gray_step,) * 3

    if _distance(rgb, gray) < _distance(rgb, cube):
        return GRAY_START + gray_step
    return cube_index


def basic_index(color: RgbColor) -> int:
    """Nearest of the 8 basic curses colors (one bit per channel)."""
    half = (CHANNEL_MAX + 1) // 2
    return (color.r >= half) * curses.COLOR_RED + (color.g >= half) * curses.COLOR_GREEN \
        + (color.b >= half) * curses.COLOR_BLUE


class ColorRegistry:
    """Maps RGB colors to curses color pairs, allocating on first use."""

    def __init__(self):
        self._pairs: dict[RgbColor, int] = {}
        self._exact = curses.can_change_color() and curses.COLORS > CUSTOM_COLOR_START
        logger.debug("Colors: %d, pairs: %d, exact RGB: %s",
                     curses.COLORS, curses.COLOR_PAIRS, self._exact)

    def _color_number(self, color: RgbColor) -> int:
        if self._exact:
            number = CUSTOM_COLOR_START + len(self._pairs)
            if number < curses.COLORS:
                # curses expects channels on a 0-1000 scale
                curses.init_color(number, *(round(c * 1000 / CHANNEL_MAX) for c in (color.r, color.g, color.b)))
                return number
        if curses.COLORS >= 256:
            return xterm256_index(color)
        return basic_index(color)

    def pair_for(self, color: RgbColor) -> int:
        """Color pair number showing color on the default background."""
        pair = self._pairs.get(color)
        if pair is not None:
            return pair

        pair = len(self._pairs) + 1
        if pair >= curses.COLOR_PAIRS:
            logger.debug("Out of color pairs, %s uses the default pair", color)
            return 0
        curses.init_pair(pair, self._color_number(color), -1)
        self._pairs[color] = pair
        return pair


class CursesTerminal(CellWriter):
    """Curses-backed terminal used by the main loop."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.colors: Optional[ColorRegistry] = None
        self._row = 0
        self._col = 0
        self._attr = 0
        self._restored = False

    def setup(self) -> None:
        """Enter raw mode, hide the cursor and initialize colors."""
        # Initialize locale for proper Unicode rendering
        locale.setlocale(locale.LC_ALL, "")

        # Hide cursor (some terminals don't support this)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        # Raw mode delivers Ctrl+C as a key instead of SIGINT
        curses.raw()
        self.stdscr.keypad(True)

        if not curses.has_colors():
            raise TerminalSetupError("Terminal does not support colors.")
        curses.start_color()
        curses.use_default_colors()
        self.colors = ColorRegistry()

        self.stdscr.bkgd(" ", curses.color_pair(0))
        self.stdscr.clear()
        self.stdscr.refresh()

    def size(self) -> tuple[int, int]:
        """Current terminal (height, width)."""
        return self.stdscr.getmaxyx()

    def wait_event(self, timeout: float) -> Optional[KeyEvent]:
        """Block up to timeout seconds for a key press; None if none arrived."""
        self.stdscr.timeout(max(math.ceil(timeout * 1000), 0))
        try:
            key = self.stdscr.getch()
        except curses.error as e:
            raise InputError(f"Error reading input: {e}") from e
        if key == -1:
            return None
        return KeyEvent.from_curses(key)

    def move_to(self, row: int, col: int) -> None:
        """Remember where the next character goes."""
        self._row = row
        self._col = col

    def set_color(self, color: RgbColor) -> None:
        """Select the color pair for following characters."""
        self._attr = curses.color_pair(self.colors.pair_for(color))

    def put(self, char: str) -> None:
        """Draw one character; the bottom-right cell raises and is ignored."""
        try:
            self.stdscr.addstr(self._row, self._col, char, self._attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            pass

    def flush(self) -> None:
        """Push the frame to the terminal."""
        self.stdscr.refresh()

    def restore(self) -> None:
        """Show the cursor, clear, reset colors and leave raw mode. Runs once."""
        if self._restored:
            return
        self._restored = True

        try:
            curses.curs_set(1)
        except curses.error:
            pass
        self.stdscr.attrset(0)
        self.stdscr.clear()
        self.stdscr.refresh()
        curses.noraw()
