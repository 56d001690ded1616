"""A single falling character stream."""

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from .colors import RgbColor, round_half_away
from .screen import Screen

# Trail length range (upper bound exclusive)
MIN_LENGTH = 8
MAX_LENGTH = 20

# Lifecycle probabilities, per tick
ACTIVATION_CHANCE = 0.005  # scaled by density
PAUSE_CHANCE_BASE = 0.15
PAUSE_CHANCE_DENSITY = 0.05
PAUSE_CHANCE_MIN = 0.01

# Trail cells further than this fraction of the length are left blank
FADE_CUTOFF = 0.95


@dataclass
class Drop:
    """One stream: a head row, a trail length and the glyph it shows."""

    pos: float
    length: int
    char: str
    active: bool = True

    @classmethod
    def new_random(cls, screen_height: int, char_set: Sequence[str]) -> "Drop":
        """Create an active drop somewhere at or above the visible area."""
        pos = random.uniform(0, screen_height) - random.uniform(0, screen_height / 2)
        return cls(
            pos=pos,
            length=random.randrange(MIN_LENGTH, MAX_LENGTH),
            char=random.choice(char_set),
        )

    def respawn(self, screen_height: int, char_set: Sequence[str]) -> None:
        """Reinitialize this drop in place with a fresh random state."""
        fresh = Drop.new_random(screen_height, char_set)
        self.pos = fresh.pos
        self.length = fresh.length
        self.char = fresh.char
        self.active = True

    def update(self, screen_height: int, density: float, char_set: Sequence[str],
               fall_distance: float) -> None:
        """Advance the drop by fall_distance rows and handle its lifecycle."""
        if not self.active:
            if random.random() < ACTIVATION_CHANCE * density:
                self.respawn(screen_height, char_set)
            return

        self.pos += fall_distance

        # Whole trail has left the bottom of the screen
        if self.pos - self.length > screen_height:
            pause_chance = max(PAUSE_CHANCE_BASE - density * PAUSE_CHANCE_DENSITY, PAUSE_CHANCE_MIN)
            if random.random() < pause_chance:
                self.active = False
            else:
                self.respawn(screen_height, char_set)

    def draw(self, screen: Screen, col: int, palette: Sequence[RgbColor]) -> None:
        """Paint the visible part of the trail into column col of screen."""
        if not self.active or not 0 <= col < screen.width:
            return

        tail = round_half_away(self.pos - self.length)
        head = round_half_away(self.pos)
        steps = len(palette)

        for row in range(max(tail, 0), min(head, screen.height - 1) + 1):
            fade = (head - row) / self.length
            color_index = min(math.floor(fade * steps), steps - 1)
            screen.chars[row][col] = " " if fade > FADE_CUTOFF else self.char
            screen.colors[row][col] = palette[color_index]
