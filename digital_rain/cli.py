"""Command line entry point for digital-rain."""

import argparse
import curses
import logging
import logging.handlers
import signal
import sys
from dataclasses import dataclass
from typing import Optional

from .charsets import CharSet, ColorTheme
from .colors import BLACK, RgbColor
from .engine import MatrixEngine
from .scheduler import RainLoop
from .screen import FrameBuffers
from .terminal import CursesTerminal, RainError

logger = logging.getLogger(__name__)

# Option limits
SPEED_RANGE = (1.0, 50.0)
DENSITY_RANGE = (0.1, 3.0)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Records held back while curses owns the screen
LOG_BUFFER_CAPACITY = 1000


class SessionLogBuffer(logging.handlers.MemoryHandler):
    """Holds records until close(), dropping the oldest once capacity is reached."""

    def emit(self, record: logging.LogRecord) -> None:
        self.acquire()
        try:
            self.buffer.append(record)
            if len(self.buffer) > self.capacity:
                del self.buffer[0]
        finally:
            self.release()

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        return False


@dataclass(frozen=True)
class RainConfig:
    """Everything the rain needs, with selectors already resolved."""

    base_color: RgbColor
    background: RgbColor
    char_set: tuple[str, ...]
    speed: float
    density: float


def _bounded_float(low: float, high: float):
    def parse(text: str) -> float:
        try:
            value = float(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"{text!r} is not a number") from None
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"{value:g} is outside {low:g}-{high:g}")
        return value
    return parse


def _rgb(text: str) -> RgbColor:
    try:
        return RgbColor.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the digital-rain command."""
    parser = argparse.ArgumentParser(
        prog="digital-rain",
        description="Matrix-style digital rain in the terminal. Press Ctrl+C to exit.",
    )
    parser.add_argument("--color", choices=[t.value for t in ColorTheme], default=ColorTheme.GREEN.value,
                        help="Color theme (default: green)")
    parser.add_argument("--chars", choices=[c.value for c in CharSet], default=CharSet.MATRIX.value,
                        help="Character set (default: matrix)")
    parser.add_argument("--speed", type=_bounded_float(*SPEED_RANGE), default=5.0,
                        help="Fall speed in rows per second, 1.0-50.0 (default: 5.0)")
    parser.add_argument("--density", type=_bounded_float(*DENSITY_RANGE), default=0.7,
                        help="Drops per column, 0.1-3.0 (default: 0.7)")
    parser.add_argument("--background-color", type=_rgb, metavar="R,G,B",
                        help="Terminal background color as R,G,B (e.g., 255,255,255 for white, "
                             "0,0,0 for black). Default: black")
    parser.add_argument("--list", action="store_true",
                        help="List available options and exit")
    parser.add_argument("--log-file", metavar="PATH",
                        help="Write log messages to PATH instead of stderr")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def list_options() -> str:
    """Return the --list text naming every theme, charset and range."""
    return "\n".join([
        "Available options:",
        "",
        f"Colors: {', '.join(t.value for t in ColorTheme)}",
        "",
        f"Character Sets: {', '.join(c.value for c in CharSet)}",
        "",
        "Speed: 1.0-50.0 (higher = faster)",
        "",
        "Density: 0.1-3.0 (higher = more drops)",
        "",
        "Background Color: R,G,B (e.g., 255,255,255 for white, 0,0,0 for black), default black",
    ])


def resolve_config(args: argparse.Namespace) -> RainConfig:
    """Turn parsed arguments into plain values for the engine."""
    background = args.background_color
    if background is None:
        logger.info("No background color given, assuming black")
        background = BLACK
    return RainConfig(
        base_color=ColorTheme(args.color).rgb,
        background=background,
        char_set=CharSet(args.chars).chars,
        speed=args.speed,
        density=args.density,
    )


def configure_logging(log_file: Optional[str], verbose: bool) -> logging.Handler:
    """Attach the session's log handler to the root logger and return it.

    Without a log file, records are buffered and only reach stderr when the
    handler is closed, after curses has released the screen.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
        handler.setFormatter(formatter)
    else:
        target = logging.StreamHandler(sys.stderr)
        target.setFormatter(formatter)
        handler = SessionLogBuffer(LOG_BUFFER_CAPACITY, target=target)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(handler)
    return handler


def run(stdscr, config: RainConfig) -> int:
    """Curses wrapper entry point; returns the number of frames drawn."""
    terminal = CursesTerminal(stdscr)
    terminal.setup()

    height, width = terminal.size()
    engine = MatrixEngine(height, width, config.base_color, config.density,
                          config.background, config.char_set)
    buffers = FrameBuffers(height, width, config.background)
    logger.debug("Starting at %dx%d with %d drops", width, height, len(engine.drops))
    return RainLoop(terminal, engine, buffers, config.speed).run()


def signal_handler(signum, frame) -> None:
    """Handle SIGINT and SIGTERM for clean exit."""
    sys.exit(0)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the rain from the command line and return the exit code."""
    args = build_parser().parse_args(argv)
    if args.list:
        print(list_options())
        return 0

    handler = configure_logging(args.log_file, args.verbose)
    try:
        config = resolve_config(args)

        # Check TTY requirement
        if not sys.stdout.isatty():
            print("Error: Requires TTY.", file=sys.stderr)
            return 1

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)
        try:
            curses.wrapper(run, config)
        except curses.error as e:
            print(
                f"Error: Cannot initialize terminal. "
                f"Ensure TERM is set and you're running in a supported terminal.\n"
                f"Details: {e}",
                file=sys.stderr,
            )
            return 1
        except RainError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()
