from __future__ import annotations

import curses

from tabline.config import Config
from tabline.console import Console, ConsoleKey
from tabline.debug_log import DebugLogger
from tabline.demo import register_demo_commands

_KEY_ACTIONS = {
    27: ConsoleKey.ESCAPE,
    curses.KEY_F10: ConsoleKey.TOGGLE,
    curses.KEY_UP: ConsoleKey.UP,
    curses.KEY_DOWN: ConsoleKey.DOWN,
    curses.KEY_BACKSPACE: ConsoleKey.BACKSPACE,
    127: ConsoleKey.BACKSPACE,
    8: ConsoleKey.BACKSPACE,
    curses.KEY_ENTER: ConsoleKey.ENTER,
    10: ConsoleKey.ENTER,
    13: ConsoleKey.ENTER,
    9: ConsoleKey.TAB,
}


def key_for(ch: int) -> ConsoleKey | None:
    """Map a curses key code to a console action."""
    return _KEY_ACTIONS.get(ch)


def handle_key(console: Console, logger: DebugLogger, ch: int) -> bool:
    """Apply one key code to the console. Returns False to quit."""
    if ch == -1:
        return True
    key = key_for(ch)
    if key == ConsoleKey.TOGGLE:
        console.on_key(key)
        return True
    if not console.is_open:
        return True

    if key == ConsoleKey.ENTER:
        line = console.typed_line.strip().lower()
        if line == "/quit":
            return False
        if line == "/debug":
            state = logger.toggle()
            console.output.add(f"Debug logging {'ON' if state else 'OFF'}")
            console.history.submit(console.typed_line)
            console.typed_line = ""
            return True
    if key is not None:
        console.on_key(key)
    elif 32 <= ch < 127:
        console.on_text_input(chr(ch))
    return True


def draw(stdscr, console: Console):
    stdscr.erase()
    h, w = stdscr.getmaxyx()
    if not console.is_open:
        stdscr.addnstr(h - 1, 0, "console closed (F10 to open, Ctrl+C to quit)", w - 1)
        stdscr.refresh()
        return

    lines = console.visible_output()
    top = max(0, h - 1 - len(lines))
    for i, line in enumerate(lines[-(h - 1):] if h > 1 else []):
        stdscr.addnstr(top + i, 0, f"| {line}", w - 1)

    prompt = console.config.console.prompt + console.typed_line
    stdscr.addnstr(h - 1, 0, prompt, w - 1, curses.A_BOLD)
    stdscr.move(h - 1, min(len(prompt), w - 1))
    stdscr.refresh()


def run_console(stdscr, config: Config, debug: bool = False):
    """Curses main loop: read keys, feed the console, redraw."""
    logger = DebugLogger()
    if debug:
        logger.start()

    console = Console(config, logger)
    register_demo_commands(console)
    console.is_open = True

    curses.curs_set(1)
    stdscr.keypad(True)
    try:
        draw(stdscr, console)
        while True:
            if not handle_key(console, logger, stdscr.getch()):
                break
            draw(stdscr, console)
    except KeyboardInterrupt:
        pass
    finally:
        logger.stop()
