"""Handles interactive/command-line mode for the lox interpreter. Uses cmd as backend."""

import cmd
import io

from lox.lang.error import ErrorHandler
from lox.syntax.scanner import Scanner
from lox.syntax.tokens import TokenType


class Shell(cmd.Cmd):
    """lox interpreter shell."""
    intro = "lox interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    commands = ("help", "exit")  # only taken as commands when typed alone at the primary prompt

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def needs_continuation(source):
        """Whether source has unclosed braces, i.e. the entry continues on the next line. Braces inside strings and
        comments don't count.
        """
        tokens = Scanner(source, ErrorHandler(file=io.StringIO())).scan_tokens()
        types = [token.type for token in tokens]
        return types.count(TokenType.LEFT_BRACE) > types.count(TokenType.RIGHT_BRACE)

    def parseline(self, line):
        """Sends lines like `help = 2;` or `exit();` to default, where they run as lox."""
        command, arg, line = super().parseline(line)
        if command in self.commands and (arg or self._tmp_line):
            return None, None, line
        return command, arg, line

    def default(self, line):
        """Executes arbitrary lox code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source = self._tmp_line + line + "\n"

            if self.needs_continuation(source):
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.error_handler.reset()
            self.sess.run(source)

    def do_help(self, arg):
        """Prints a short introduction to lox."""
        print("Welcome to the lox interpreter!\n\n"
              "lox is a small dynamically-typed scripting language with C-like syntax, closures \n"
              "and classes. Statements end with ';', and blocks can span several lines.\n\n"
              "Try it out by typing 'var greeting = \"hi\";'. Next, try typing \n"
              "'print greeting + \" there\";'.", file=self.stdout)

    def emptyline(self):
        """Blank entries run nothing; the last entry is not repeated."""
        return ""

    def do_EOF(self, arg):
        """Leaves the shell on end of input (Ctrl-D)."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Leaves the shell."""
        return True
