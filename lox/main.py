"""Uses the lox interpreter to run .lox files or run in command-line mode. Also uses the error handling context
manager. Installed as the `lox` console script.
"""

import argparse
import sys

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell
from lox.syntax.printer import AstPrinter

EX_DATAERR = 65   # static (syntax or resolution) error
EX_SOFTWARE = 70  # runtime error


def main(argv=None):
    """Runs the lox interpreter. Returns the process exit status for file mode."""
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the parsed syntax tree instead of running it")
    args = parser.parse_args(argv)

    with ErrorHandler(fatal=True) as error_handler:
        if args.file is None:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return 0

        sess = Session(error_handler, args.file, cmd_line=False)
        source = sess.read()

        if args.ast:
            printer = AstPrinter()
            for statement in sess.parse(source):
                print(printer.print(statement))
        else:
            sess.run(source)

    if error_handler.had_error:
        return EX_DATAERR
    if error_handler.had_runtime_error:
        return EX_SOFTWARE
    return 0


if __name__ == "__main__":
    sys.exit(main())
