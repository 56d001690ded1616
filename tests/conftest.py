"""
Shared test doubles: a recording cell writer and a scripted terminal.
"""

import pytest

from digital_rain.screen import CellWriter


class RecordingWriter(CellWriter):
    """Collects diff-renderer instructions instead of writing them."""

    def __init__(self):
        self.calls = []
        self.flushes = 0

    def move_to(self, row, col):
        self.calls.append(("move", row, col))

    def set_color(self, color):
        self.calls.append(("color", color))

    def put(self, char):
        self.calls.append(("put", char))

    def flush(self):
        self.flushes += 1

    def of(self, kind):
        return [call for call in self.calls if call[0] == kind]


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class ScriptedTerminal(RecordingWriter):
    """Terminal whose wait_event() plays back a list of steps.

    Each step is called with (terminal, timeout) and returns what wait_event
    should return, or raises. Each flush() costs flush_cost seconds.
    """

    def __init__(self, clock, size, steps, flush_cost=0.0):
        super().__init__()
        self.clock = clock
        self.dims = size
        self.steps = list(steps)
        self.timeouts = []
        self.puts_per_frame = []
        self.restores = 0
        self.flush_cost = flush_cost

    def size(self):
        return self.dims

    def wait_event(self, timeout):
        self.timeouts.append(timeout)
        return self.steps.pop(0)(self, timeout)

    def flush(self):
        super().flush()
        self.puts_per_frame.append(len(self.of("put")) - sum(self.puts_per_frame))
        self.clock.now += self.flush_cost

    def restore(self):
        self.restores += 1


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def clock():
    return FakeClock()
