"""Main loop: resize polling, key input and frame ticks on one thread."""

import logging
import time
from collections.abc import Callable

from .engine import MatrixEngine
from .screen import FrameBuffers
from .terminal import CursesTerminal, InputError

logger = logging.getLogger(__name__)

# Timing
FRAME_TIME = 0.033


class RainLoop:
    """Races the next frame deadline against key input until Ctrl+C."""

    def __init__(self, terminal: CursesTerminal, engine: MatrixEngine, buffers: FrameBuffers,
                 speed: float, frame_time: float = FRAME_TIME,
                 clock: Callable[[], float] = time.monotonic):
        self.terminal = terminal
        self.engine = engine
        self.buffers = buffers
        self.speed = speed
        self.frame_time = frame_time
        self.clock = clock
        self.height = buffers.current.height
        self.width = buffers.current.width
        self.frames = 0

    def check_resize(self) -> bool:
        """Follow the terminal size; True if it changed since the last check."""
        height, width = self.terminal.size()
        if (height, width) == (self.height, self.width):
            return False

        self.buffers.resize(height, width)
        self.engine.resize_drops(width, height)
        self.height, self.width = height, width
        return True

    def tick(self, elapsed: float) -> None:
        """Advance the simulation by elapsed seconds and draw one frame."""
        self.engine.update_drops(self.height, self.speed * elapsed)
        self.engine.render_drops(self.buffers.current)
        self.buffers.current.render_changes(self.buffers.previous, self.terminal)
        self.buffers.swap()
        self.frames += 1

    def run(self) -> int:
        """Loop until Ctrl+C or an input error; return the number of frames drawn.

        The frame deadline is measured from the previous tick and is never moved
        by key presses, so input can neither delay nor speed up rendering. Input
        is read once per iteration even when frames run late. The terminal is
        restored exactly once however the loop ends.
        """
        started = last_frame_time = self.clock()
        try:
            while True:
                self.check_resize()

                deadline = last_frame_time + self.frame_time
                remaining = deadline - self.clock()
                # An overdue frame still polls input, without blocking
                try:
                    event = self.terminal.wait_event(max(remaining, 0.0))
                except (InputError, OSError) as e:
                    logger.error("Input stream failed, exiting: %s", e)
                    break
                if event is not None and event.is_interrupt:
                    logger.debug("Ctrl+C received")
                    break
                if remaining > 0 and (event is not None or self.clock() < deadline):
                    continue

                now = self.clock()
                elapsed = now - last_frame_time
                last_frame_time = now
                self.tick(elapsed)
        finally:
            self.terminal.restore()
            logger.debug("Drew %d frames in %.1fs", self.frames, self.clock() - started)
        return self.frames
