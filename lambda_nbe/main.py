"""Uses the pure lambda calculus evaluator to run files of λ-terms (one per line) or run in command-line mode. Also
uses error handling context manager. Called from the lnbe console script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered and results are
dataclasses.
"""

import argparse
import sys

from lambda_nbe.lang.error import ErrorHandler
from lambda_nbe.lang.session import Session
from lambda_nbe.lang.shell import Shell


def main():
    """Runs lambda-nbe interpreter. Called from lnbe console script."""
    assert sys.version_info >= (3, 7), "lnbe cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(description="Evaluate untyped lambda calculus by normalization by evaluation.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--fresh", action="store_true", help="reify functions with fresh binder names")
        parser.add_argument("--tree", action="store_true", help="also print each result as an ascii tree")
        parser.add_argument("--keep-going", action="store_true", help="report errors and continue with the next line")
        args = parser.parse_args()

        if args.file is not None:
            error_handler.fatal = not args.keep_going
            sess = Session(error_handler, args.file, fresh=args.fresh, tree=args.tree, cmd_line=False)
            sess.run(echo=True)

        else:
            sess = Session(error_handler, Session.SH_FILE, fresh=args.fresh, tree=args.tree, cmd_line=True)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
