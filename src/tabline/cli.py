import argparse
import sys

from tabline import __version__
from tabline.config import load_config
from tabline.console import Console
from tabline.debug_log import DebugLogger
from tabline.demo import register_demo_commands


def run_plain(console: Console, stdin=None, stdout=None):
    """Line mode: submit each input line; '?<text>' completes <text> instead."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    for raw in stdin:
        line = raw.rstrip("\n")
        mark = console.output.total
        completed = None
        if line.startswith("?"):
            completed = console.auto_complete(line[1:], False, True, True)
        else:
            console.submit_command(line)
        for out in console.output.since(mark):
            # skip the echoed input line and blank results
            if out and not out.startswith(" >> "):
                print(out, file=stdout)
        if completed is not None:
            print(completed, file=stdout)


def main(argv=None):
    p = argparse.ArgumentParser(description="Console with multi-token tab completion")
    p.add_argument("-v", "--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument("-c", "--config", default="default",
                   help="Configuration name or path (searches ~/.tabline/configs/, ./configs/, or use full path)")
    p.add_argument("-d", "--debug", action="store_true", default=False,
                   help="Enable debug logging to tabline_debug.log in current directory")
    p.add_argument("--plain", action="store_true", default=False,
                   help="Read lines from stdin instead of running the curses console")
    args = p.parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        p.error(str(e))

    if args.plain:
        logger = DebugLogger()
        if args.debug:
            logger.start()
        console = Console(config, logger)
        register_demo_commands(console)
        try:
            run_plain(console)
        finally:
            logger.stop()
        return

    import curses

    from tabline.app import run_console

    curses.wrapper(run_console, config, debug=args.debug)


if __name__ == "__main__":
    main()
