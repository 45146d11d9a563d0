"""Session control for lox. Runs the scanner, parser, resolver and interpreter over a unit of source, either a whole
file or a single command-line entry, against one long-lived Interpreter so globals survive between entries.
"""

import sys

from lox.lang.error import LoxError
from lox.lang.interpreter import Interpreter
from lox.lang.resolver import Resolver
from lox.syntax.parser import Parser
from lox.syntax.scanner import Scanner


class Session:
    """Governs a lox session: one interpreter, one error handler."""
    SH_FILE = "<in>"  # command-line interpreter filename
    RECURSION_LIMIT = 10000  # each lox call costs several Python frames

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, out=None):
        self.error_handler = error_handler
        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.interpreter = Interpreter(error_handler, out=out)

        if sys.getrecursionlimit() < Session.RECURSION_LIMIT:
            sys.setrecursionlimit(Session.RECURSION_LIMIT)

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise LoxError("'{}' is a reserved filename", path)

    def read(self):
        """Returns the source of self.path."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                return file.read()
        except OSError:
            raise LoxError("'{}' could not be opened", self.path)

    def tokens(self, source):
        """Scans source. Errors are reported, never raised."""
        self.error_handler.register_source(self.path, source)
        return Scanner(source, self.error_handler).scan_tokens()

    def parse(self, source):
        """Scans and parses source, returning whatever statements could be recovered."""
        return Parser(self.tokens(source), self.error_handler).parse()

    def run(self, source):
        """Runs source through the whole pipeline. Each stage only runs if the ones before it reported no errors."""
        statements = self.parse(source)
        if self.error_handler.had_error:
            return

        Resolver(self.interpreter, self.error_handler).resolve(statements)
        if self.error_handler.had_error:
            return

        self.interpreter.interpret(statements)

    def run_file(self):
        self.run(self.read())
