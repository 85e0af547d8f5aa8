"""Command-line entry point for the rlisp interpreter: runs a source file, or starts command-line mode if no file is
given. Called from the rlisp executable script.
"""

import argparse
import logging

from rlisp.lang.error import ErrorHandler
from rlisp.lang.session import Session
from rlisp.lang.shell import Shell


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="rlisp", description="rlisp interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the parsed AST before evaluating it")
    parser.add_argument("-v", "--verbose", action="store_true", help="log interpreter internals to stderr")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs rlisp interpreter. Exits with status 1 on the first error in file mode."""
    with ErrorHandler() as error_handler:
        args = parse_args(argv)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

        if args.file is not None:
            Session(error_handler, args.file, show_ast=args.ast).run()
        else:
            Shell(Session(error_handler, cmd_line=True, show_ast=args.ast)).cmdloop()


if __name__ == "__main__":
    main()
