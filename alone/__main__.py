"""Command-line entry point: runs a source file, a single expression, or the interactive shell."""

import argparse
import logging
import sys

from alone import __version__
from alone.config import get_log_level
from alone.interpreter import Interpreter
from alone.shell import Shell, run_source


def main(argv=None):
    parser = argparse.ArgumentParser(prog="alone", description="A small S-expression interpreter.")
    parser.add_argument("file", help="source file to run (if empty, starts the interactive shell)", nargs="?")
    parser.add_argument("-e", "--eval", dest="expr", help="evaluate EXPR and print the result")
    parser.add_argument("--log-level", help="logging level (default: $ALONE_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    level = args.log_level.upper() if args.log_level else get_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    interp = Interpreter()
    if args.expr is not None:
        return run_source(interp, args.expr)
    if args.file is not None:
        try:
            with open(args.file, encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            print(f"Error! Can't read file: {e}", file=sys.stderr)
            return 1
        return run_source(interp, source)

    Shell(interp).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
