"""Error handling for the lox language. Three kinds of errors are reported through an ErrorHandler, and never
conflated:

- syntax errors (scanner/parser) and resolution errors (resolver) are static: they are reported per offending
  token and set `had_error`, which keeps later stages from running
- runtime errors (interpreter) abort the current run and set `had_runtime_error`

Only LoxErrors should make it out of the interpreter: if another type of error makes it all the way to ErrorHandler,
it is assumed to be an internal issue.
"""

import sys

from termcolor import colored

from lox.syntax.tokens import TokenType


class LoxError(Exception):
    """Base class of every error raised by the interpreter. `parts` are snippets of msg that are bolded when printed,
    substituted into msg the same way str.format does.
    """

    def __init__(self, msg, *parts):
        self.template = msg
        self.parts = parts
        self.msg = msg.format(*parts) if parts else msg
        super().__init__(self.msg)


class ParseError(LoxError):
    """Raised inside the parser to unwind to the nearest declaration, where it is caught and the parser synchronizes.
    The error has already been reported by the time this is raised.
    """

    def __init__(self):
        super().__init__("parse error")


class LoxRuntimeError(LoxError):
    """Runtime error at token. Aborts the whole interpret run."""

    def __init__(self, token, msg):
        super().__init__(msg)
        self.token = token


class ErrorHandler:
    """Error-reporting sink shared by every stage, and a context manager that turns escaped Python errors into lox
    errors.
    """
    ERROR = "red"
    LOCATION = "cyan"

    def __init__(self, fatal=False, file=None):
        self.fatal = fatal  # whether escaped errors exit the process
        self.file = file    # stream diagnostics are printed to, None meaning stdout

        self.had_error = False
        self.had_runtime_error = False
        self.reports = []  # plain-text diagnostics, in the order they were reported

        self.path = None
        self.lines = []

    def register_source(self, path, source):
        """Registers the source currently being run, so diagnostics can show the offending line."""
        self.path = path
        self.lines = source.splitlines()

    def error(self, line, message, where="", lexeme=None):
        """Reports a static (syntax or resolution) error at line."""
        self.reports.append(f"[line {line}] Error{where}: {message}")
        self.had_error = True

        error_msg = colored(f"[line {line}] ", self.LOCATION, attrs=["bold"])
        error_msg += colored(f"Error{where}:", self.ERROR, attrs=["bold"]) + f" {message}"
        self._print(error_msg)

        if lexeme:
            diagnosis = self.diagnose(line, lexeme)
            if diagnosis:
                self._print(diagnosis)

    def token_error(self, token, message):
        """Reports a static error at token."""
        if token.type is TokenType.EOF:
            self.error(token.line, message, " at end")
        else:
            self.error(token.line, message, f" at '{token.lexeme}'", lexeme=token.lexeme)

    def runtime_error(self, error):
        """Reports a LoxRuntimeError. Tokenless runtime errors (like stack overflow) are reported without a line."""
        if error.token is None:
            self.reports.append(error.msg)
        else:
            self.reports.append(f"{error.msg}\n[line {error.token.line}]")
        self.had_runtime_error = True

        error_msg = colored("runtime error: ", self.ERROR, attrs=["bold"]) + error.msg
        if error.token is not None:
            error_msg += "\n" + colored(f"[line {error.token.line}]", self.LOCATION, attrs=["bold"])
        self._print(error_msg)

    def reset(self):
        """Clears both error flags. Called between REPL entries."""
        self.had_error = False
        self.had_runtime_error = False

    def diagnose(self, line, lexeme):
        """Returns the source line with lexeme highlighted and underlined, or None if the line isn't known."""
        if not 0 < line <= len(self.lines) or lexeme not in self.lines[line - 1]:
            return None

        source_line = self.lines[line - 1]
        start = source_line.index(lexeme)  # columns aren't tracked, so the first occurrence is used
        end = start + max(len(lexeme), 1)

        diagnosis = "  " + source_line[:start]
        diagnosis += colored(source_line[start:end], self.ERROR, attrs=["bold"])
        diagnosis += source_line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), self.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error, internal=False):
        """Prints a LoxError that escaped the pipeline. Exits the process if self.fatal."""
        message = error.msg
        if error.parts:
            message = error.template.format(*(colored(str(part), attrs=["bold"]) for part in error.parts))

        error_msg = ""
        if self.path:
            error_msg += colored(f"{self.path}: ", attrs=["bold"])
        if internal:
            error_msg += colored("[internal] ", self.ERROR, attrs=["bold"])

        error_msg += colored("error: ", self.ERROR, attrs=["bold"]) + message
        self.reports.append(error.msg)
        self._print(error_msg)

        if self.fatal:
            sys.exit(1)

    def _print(self, text):
        print(text, file=self.file if self.file is not None else sys.stdout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.runtime_error(LoxRuntimeError(None, "Stack overflow."))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError("unknown error: '{}: {}'", exc_type.__name__, exc_val), internal=True)
            do_exit = True

        return not do_exit
