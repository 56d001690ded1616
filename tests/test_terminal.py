"""
Tests for the curses terminal adapter (no real curses session needed).
"""

import curses

import pytest

from digital_rain.colors import RgbColor
from digital_rain.terminal import (
    CursesTerminal,
    InputError,
    KeyEvent,
    basic_index,
    xterm256_index,
)


class FakeStdscr:
    """Just enough of a curses window for CursesTerminal."""

    def __init__(self, keys=(), size=(24, 80)):
        self.keys = list(keys)
        self.size = size
        self.timeouts = []
        self.cells = {}
        self.refreshes = 0
        self.clears = 0
        self.attrs = []

    def timeout(self, ms):
        self.timeouts.append(ms)

    def getch(self):
        key = self.keys.pop(0)
        if isinstance(key, Exception):
            raise key
        return key

    def getmaxyx(self):
        return self.size

    def addstr(self, row, col, text, attr=0):
        if (row, col) == (self.size[0] - 1, self.size[1] - 1):
            raise curses.error("addwstr() returned ERR")
        self.cells[(row, col)] = text

    def refresh(self):
        self.refreshes += 1

    def clear(self):
        self.clears += 1

    def attrset(self, attr):
        self.attrs.append(attr)


class TestKeyEvent:

    def test_ctrl_c_is_interrupt(self):
        event = KeyEvent.from_curses(3)
        assert event == KeyEvent(code=ord("c"), ctrl=True)
        assert event.is_interrupt

    def test_plain_c_is_not_interrupt(self):
        assert not KeyEvent.from_curses(ord("c")).is_interrupt

    def test_other_ctrl_chords(self):
        event = KeyEvent.from_curses(4)
        assert event.ctrl and event.code == ord("d")
        assert not event.is_interrupt

    def test_special_keys(self):
        event = KeyEvent.from_curses(curses.KEY_RESIZE)
        assert event == KeyEvent(code=curses.KEY_RESIZE)
        assert not event.is_interrupt


class TestColorMapping:
    """Nearest-color fallbacks for terminals without custom colors."""

    @pytest.mark.parametrize("color, index", [
        (RgbColor(0, 0, 0), 16),
        (RgbColor(255, 255, 255), 231),
        (RgbColor(0, 255, 0), 46),
        (RgbColor(255, 0, 0), 196),
        (RgbColor(128, 128, 128), 244),
        (RgbColor(0, 100, 0), 22),
    ])
    def test_xterm256(self, color, index):
        assert xterm256_index(color) == index

    @pytest.mark.parametrize("color, index", [
        (RgbColor(0, 0, 0), curses.COLOR_BLACK),
        (RgbColor(0, 255, 0), curses.COLOR_GREEN),
        (RgbColor(255, 191, 0), curses.COLOR_YELLOW),
        (RgbColor(0, 255, 255), curses.COLOR_CYAN),
        (RgbColor(255, 20, 147), curses.COLOR_MAGENTA),
        (RgbColor(255, 255, 255), curses.COLOR_WHITE),
    ])
    def test_basic(self, color, index):
        assert basic_index(color) == index


class TestWaitEvent:
    """CursesTerminal.wait_event."""

    def test_timeout_returns_none(self):
        stdscr = FakeStdscr(keys=[-1])
        assert CursesTerminal(stdscr).wait_event(0.25) is None
        assert stdscr.timeouts == [250]

    def test_timeout_rounds_up(self):
        stdscr = FakeStdscr(keys=[-1])
        CursesTerminal(stdscr).wait_event(0.0301)
        assert stdscr.timeouts == [31]

    def test_negative_timeout_polls(self):
        stdscr = FakeStdscr(keys=[-1])
        CursesTerminal(stdscr).wait_event(-1.0)
        assert stdscr.timeouts == [0]

    def test_key(self):
        stdscr = FakeStdscr(keys=[3])
        assert CursesTerminal(stdscr).wait_event(0.25).is_interrupt

    def test_read_error(self):
        stdscr = FakeStdscr(keys=[curses.error("read failed")])
        with pytest.raises(InputError, match="read failed"):
            CursesTerminal(stdscr).wait_event(0.25)


class TestOutput:

    def test_size(self):
        assert CursesTerminal(FakeStdscr(size=(10, 20))).size() == (10, 20)

    def test_put_at_cursor(self):
        stdscr = FakeStdscr()
        terminal = CursesTerminal(stdscr)
        terminal.move_to(3, 7)
        terminal.put("x")
        terminal.flush()
        assert stdscr.cells == {(3, 7): "x"}
        assert stdscr.refreshes == 1

    def test_bottom_right_cell_is_tolerated(self):
        stdscr = FakeStdscr(size=(5, 5))
        terminal = CursesTerminal(stdscr)
        terminal.move_to(4, 4)
        terminal.put("x")
        assert stdscr.cells == {}


class TestRestore:

    @pytest.fixture
    def calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(curses, "curs_set", lambda visibility: calls.append(("curs_set", visibility)))
        monkeypatch.setattr(curses, "noraw", lambda: calls.append(("noraw",)))
        return calls

    def test_restore(self, calls):
        stdscr = FakeStdscr()
        CursesTerminal(stdscr).restore()
        assert calls == [("curs_set", 1), ("noraw",)]
        assert stdscr.attrs == [0]
        assert stdscr.clears == 1
        assert stdscr.refreshes == 1

    def test_restore_runs_once(self, calls):
        stdscr = FakeStdscr()
        terminal = CursesTerminal(stdscr)
        terminal.restore()
        terminal.restore()
        assert calls == [("curs_set", 1), ("noraw",)]
        assert stdscr.clears == 1
