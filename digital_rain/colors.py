"""RGB color arithmetic and the fade palette used for rain trails."""

import math
from dataclasses import dataclass

# Color channel limits
CHANNEL_MAX = 255

# Trail palette
TRAIL_STEPS = 8
HEAD_BRIGHTEN = 1.4


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class RgbColor:
    """An RGB color with 8-bit channels."""

    r: int
    g: int
    b: int

    @classmethod
    def blend(cls, start: "RgbColor", target: "RgbColor", factor: float) -> "RgbColor":
        """Linear interpolation from start (factor 0) to target (factor 1)."""
        factor = min(max(factor, 0.0), 1.0)

        def mix(a: int, b: int) -> int:
            return round_half_away(a * (1.0 - factor) + b * factor)

        return cls(mix(start.r, target.r), mix(start.g, target.g), mix(start.b, target.b))

    def brighten(self, factor: float) -> "RgbColor":
        """Scale each channel by factor, truncating and clamping to the channel range."""

        def scale(channel: int) -> int:
            return min(max(int(channel * factor), 0), CHANNEL_MAX)

        return RgbColor(scale(self.r), scale(self.g), scale(self.b))

    @classmethod
    def parse(cls, text: str) -> "RgbColor":
        """Parse an ``R,G,B`` string such as ``255,255,255``."""
        parts = text.split(",")
        if len(parts) != 3:
            raise ValueError("RGB color must be in format R,G,B (e.g., 255,255,255)")

        channels = []
        for name, part in zip("RGB", parts):
            try:
                value = int(part.strip())
            except ValueError:
                raise ValueError(f"Invalid {name} component: {part.strip()!r}") from None
            if not 0 <= value <= CHANNEL_MAX:
                raise ValueError(f"Invalid {name} component: {value} is outside 0-{CHANNEL_MAX}")
            channels.append(value)
        return cls(*channels)

    def __str__(self) -> str:
        return f"{self.r},{self.g},{self.b}"


BLACK = RgbColor(0, 0, 0)


def fade_palette(base: RgbColor, background: RgbColor, steps: int = TRAIL_STEPS) -> list[RgbColor]:
    """Build the trail colors, brightest (stream head) first and background last.

    The fade follows a quadratic curve so the upper part of a trail stays close
    to the base color and drops off quickly toward the tail. The head entry is
    brightened past the base color.
    """
    colors = []
    for i in range(steps):
        fade_factor = (i / (steps - 1)) ** 2
        colors.append(RgbColor.blend(base, background, fade_factor))
    colors[0] = base.brighten(HEAD_BRIGHTEN)
    return colors
