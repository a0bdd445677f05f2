"""Runs a pure lambda calculus program file and prints its value. Called from the untyped console script.

Basic program flow:
    1. Session reads the whole file as UTF-8.
    2. Scanner and parser (pure/lexical.py) turn it into a de Bruijn indexed term.
    3. The evaluator chosen on the command line (pure/reducer.py) reduces the term.
    4. The result is printed with fresh names picked for its binders (pure/term.py).

Every error is raised up to the ErrorHandler wrapped around main, which prints it and picks the exit status.
"""

import argparse
import sys

from untyped.lang.error import ErrorHandler, UsageError
from untyped.lang.session import Session


PROG = "untyped"
USAGE = "%(prog)s ( -small-step | -big-step ) file"
DESCRIPTION = "untyped is an implementation of the untyped lambda calculus (TAPL chapters 5-7)."
FLAGS = ("-small-step", "-big-step")

RECURSION_LIMIT = 10000  # parsing, big-step evaluation and printing all recurse on nesting depth


class ArgumentParser(argparse.ArgumentParser):
    """argparse.ArgumentParser that raises UsageError instead of exiting, so that ErrorHandler sets the status."""

    def error(self, message):
        raise UsageError()


def build_parser():
    """Returns the command-line parser. There is no -h: the only accepted command line is a flag then a file."""
    parser = ArgumentParser(prog=PROG, usage=USAGE, description=DESCRIPTION, add_help=False, allow_abbrev=False)

    strategy = parser.add_mutually_exclusive_group(required=True)
    strategy.add_argument("-small-step", dest="strategy", action="store_const", const="small-step",
                          help="run small-step evaluator")
    strategy.add_argument("-big-step", dest="strategy", action="store_const", const="big-step",
                          help="run big-step evaluator")

    parser.add_argument("file", help="file to interpret and run")
    return parser


def parse_args(parser, argv):
    """Parses exactly `<flag> <file>`. argparse alone would also take abbreviated flags and other orders."""
    if len(argv) != 2 or argv[0] not in FLAGS:
        raise UsageError()
    flag, file = argv
    return parser.parse_args([flag, "--", file])


def main(argv=None):
    """Runs untyped interpreter. Returns 0 on success; errors exit through ErrorHandler."""
    assert sys.version_info >= (3, 7), "untyped cannot be run with python < 3.7"

    if argv is None:
        argv = sys.argv[1:]
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    parser = build_parser()
    with ErrorHandler(usage=f"{parser.format_usage()}\n{DESCRIPTION}"):
        args = parse_args(parser, list(argv))

        sess = Session(args.file, args.strategy)
        print(sess.run())

    return 0


if __name__ == "__main__":
    sys.exit(main())
