"""Uses the lceval evaluator to run program files, or to run in command-line mode. Also uses the error handling context
manager. Called from the lceval console script.
"""

import argparse
import sys

from lceval.lang.error import ErrorHandler
from lceval.lang.session import Session
from lceval.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="lceval", description="Environment-based λ-calculus evaluator.")
    parser.add_argument("file", help="program file to run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--bare", action="store_true", help="do not load the prelude")
    parser.add_argument("--no-numerals", dest="numerals", action="store_false",
                        help="do not display closures that behave like Church numerals as numbers")
    parser.add_argument("--recursion-limit", type=int, default=None,
                        help="maximum Python recursion depth (deeply nested evaluations need more)")
    return parser


def main(argv=None):
    """Runs lceval interpreter. Called from lceval console script."""
    args = build_parser().parse_args(argv)

    if args.recursion_limit is not None:
        sys.setrecursionlimit(args.recursion_limit)

    with ErrorHandler() as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, bare=args.bare, numerals=args.numerals)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, bare=args.bare, numerals=args.numerals)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
