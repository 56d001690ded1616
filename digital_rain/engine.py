"""Drop collection and trail palette driving the rain."""

import logging
from collections.abc import Sequence

from .colors import TRAIL_STEPS, RgbColor, fade_palette, round_half_away
from .drop import Drop
from .screen import Screen

logger = logging.getLogger(__name__)


class MatrixEngine:
    """Owns every drop and paints them into a screen each tick."""

    def __init__(self, height: int, width: int, base_color: RgbColor, density: float,
                 background: RgbColor, char_set: Sequence[str]):
        self.density = density
        self.char_set = tuple(char_set)
        self.trail_colors = self.calculate_trail_colors(base_color, background, TRAIL_STEPS)
        self.drops = self.create_drops(width, height)

    def drop_count(self, width: int) -> int:
        """Number of drops for a screen width; never fewer than one per column."""
        return round_half_away(max(width * self.density, width))

    def create_drops(self, width: int, height: int) -> list[Drop]:
        """Build a fresh, fully randomized drop collection."""
        return [Drop.new_random(height, self.char_set) for _ in range(self.drop_count(width))]

    def resize_drops(self, new_width: int, new_height: int) -> None:
        """Grow or shrink the collection to match a new screen size.

        Growing keeps every existing drop and appends new random ones.
        Shrinking drops the highest-indexed entries.
        """
        target = self.drop_count(new_width)
        if target > len(self.drops):
            self.drops.extend(
                Drop.new_random(new_height, self.char_set) for _ in range(target - len(self.drops))
            )
        else:
            del self.drops[target:]
        logger.debug("Resized to %dx%d with %d drops", new_width, new_height, len(self.drops))

    def update_drops(self, screen_height: int, fall_distance: float) -> None:
        """Advance every drop by the same fall distance."""
        for drop in self.drops:
            drop.update(screen_height, self.density, self.char_set, fall_distance)

    def render_drops(self, screen: Screen) -> None:
        """Clear screen and draw each drop into column (index mod width)."""
        screen.clear()
        if screen.width == 0:
            return
        for i, drop in enumerate(self.drops):
            drop.draw(screen, i % screen.width, self.trail_colors)

    @staticmethod
    def calculate_trail_colors(base: RgbColor, background: RgbColor, steps: int) -> list[RgbColor]:
        return fade_palette(base, background, steps)
