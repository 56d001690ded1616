"""Double-buffered character grid with minimal-diff terminal output."""

from abc import ABC, abstractmethod
from typing import Optional

from .colors import RgbColor


class CellWriter(ABC):
    """Output side of the diff renderer.

    Instructions are queued by move_to/set_color/put and written out by a
    single flush() per frame.
    """

    @abstractmethod
    def move_to(self, row: int, col: int) -> None:
        """Place the output cursor at (row, col)."""

    @abstractmethod
    def set_color(self, color: RgbColor) -> None:
        """Set the foreground color for following characters."""

    @abstractmethod
    def put(self, char: str) -> None:
        """Write one character at the cursor."""

    @abstractmethod
    def flush(self) -> None:
        """Send all queued output to the terminal."""


class Screen:
    """Character and color grids for one frame.

    A stale screen no longer describes what the terminal shows (it was resized
    since it was last rendered), so diffing against it redraws every cell.
    """

    def __init__(self, height: int, width: int, background: RgbColor):
        self.background = background
        self._allocate(height, width)
        self.stale = False

    def _allocate(self, height: int, width: int) -> None:
        self.height = height
        self.width = width
        self.chars: list[list[str]] = [[" "] * width for _ in range(height)]
        self.colors: list[list[Optional[RgbColor]]] = [[None] * width for _ in range(height)]

    def resize(self, new_height: int, new_width: int) -> None:
        """Reallocate both grids at the new size, blank and uncolored."""
        self._allocate(new_height, new_width)
        self.stale = True

    def clear(self) -> None:
        """Blank every cell and drop its color."""
        for row in self.chars:
            row[:] = [" "] * self.width
        for row in self.colors:
            row[:] = [None] * self.width

    def resolved_color(self, row: int, col: int) -> RgbColor:
        """Color a cell is painted with; uncolored cells use the background."""
        color = self.colors[row][col]
        return self.background if color is None else color

    def render_changes(self, previous: "Screen", out: CellWriter) -> int:
        """Write the cells that differ from previous and return how many did.

        Cells outside previous's bounds, or every cell when previous is stale,
        count as changed. The color is only re-sent when it differs from the
        last one set during this pass.
        """
        current_color: Optional[RgbColor] = None
        changed = 0

        for row in range(self.height):
            chars = self.chars[row]
            in_previous = row < previous.height and not previous.stale
            for col in range(self.width):
                color = self.resolved_color(row, col)
                if (
                    in_previous
                    and col < previous.width
                    and chars[col] == previous.chars[row][col]
                    and color == previous.resolved_color(row, col)
                ):
                    continue

                out.move_to(row, col)
                if color != current_color:
                    out.set_color(color)
                    current_color = color
                out.put(chars[col])
                changed += 1

        out.flush()
        self.stale = False
        return changed


class FrameBuffers:
    """The screen being painted and the one last written to the terminal.

    swap() exchanges the two roles by flipping an index; neither grid is copied.
    """

    def __init__(self, height: int, width: int, background: RgbColor):
        self._screens = (Screen(height, width, background), Screen(height, width, background))
        self._front = 0

    @property
    def current(self) -> Screen:
        """The screen the next frame is drawn into."""
        return self._screens[self._front]

    @property
    def previous(self) -> Screen:
        """The last frame shown, diffed against."""
        return self._screens[1 - self._front]

    def swap(self) -> None:
        """Exchange current and previous without copying cells."""
        self._front = 1 - self._front

    def resize(self, new_height: int, new_width: int) -> None:
        """Resize and clear both screens."""
        for screen in self._screens:
            screen.resize(new_height, new_width)
