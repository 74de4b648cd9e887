# Terminal entry point for the Almanac calendar

import argparse
import sys

from almanac.calendar.errors import CalendarError
from almanac.calendar.store import CalendarStore
from almanac.core.prompter import Prompter
from almanac.core.shell import CalendarShell
from almanac.utils.config import CONFIG


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Almanac: interactive terminal calendar")
    p.add_argument("--file", help="Calendar file to load at startup (also the default for save/load)")
    p.add_argument("--debug", action="store_true", help="Print debug output to stderr")
    return p


def main(argv=None, stdin=None, stdout=None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        CONFIG["debug_mode"] = True

    prompter = Prompter(stdin=stdin, stdout=stdout)
    store = CalendarStore()
    shell = CalendarShell(store, prompter, default_file=args.file)

    try:
        if args.file:
            try:
                shell.load_file(args.file)
            except CalendarError as e:
                prompter.say(str(e))
        return shell.run()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Fatal I/O error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
