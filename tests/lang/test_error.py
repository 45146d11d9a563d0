import io
import unittest

from lox.lang.error import ErrorHandler, LoxError, LoxRuntimeError
from lox.syntax.tokens import Token, TokenType


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.file = io.StringIO()
        self.handler = ErrorHandler(file=self.file)

    def test_static_errors(self):
        self.handler.error(3, "Unexpected character.")
        self.handler.token_error(Token(TokenType.IDENTIFIER, "foo", None, 4), "Expected ';' after value.")
        self.handler.token_error(Token(TokenType.EOF, "", None, 5), "Expected expression.")

        self.assertEqual([
            "[line 3] Error: Unexpected character.",
            "[line 4] Error at 'foo': Expected ';' after value.",
            "[line 5] Error at end: Expected expression.",
        ], self.handler.reports)
        self.assertTrue(self.handler.had_error)
        self.assertFalse(self.handler.had_runtime_error)
        self.assertIn("Unexpected character.", self.file.getvalue())

    def test_runtime_error(self):
        token = Token(TokenType.PLUS, "+", None, 7)
        self.handler.runtime_error(LoxRuntimeError(token, "Operands must be numbers."))

        self.assertEqual(["Operands must be numbers.\n[line 7]"], self.handler.reports)
        self.assertTrue(self.handler.had_runtime_error)
        self.assertFalse(self.handler.had_error)

    def test_reset(self):
        self.handler.error(1, "Unexpected character.")
        self.handler.runtime_error(LoxRuntimeError(None, "Stack overflow."))
        self.handler.reset()

        self.assertFalse(self.handler.had_error)
        self.assertFalse(self.handler.had_runtime_error)
        self.assertEqual(2, len(self.handler.reports))

    def test_diagnose(self):
        self.handler.register_source("<in>", "var a = 1;\nprint a +;")

        diagnosis = self.handler.diagnose(2, "+")
        self.assertIsNotNone(diagnosis)
        self.assertIn("^", diagnosis)

        should_fail = [(3, "+"), (0, "var"), (1, "+")]
        for line, lexeme in should_fail:
            self.assertIsNone(self.handler.diagnose(line, lexeme), (line, lexeme))

    def test_lox_error(self):
        error = LoxError("'{}' could not be opened", "missing.lox")
        self.assertEqual("'missing.lox' could not be opened", error.msg)

        error = LoxError("no {parts} to format")
        self.assertEqual("no {parts} to format", error.msg)

    def test_context_manager(self):
        with self.handler:
            raise LoxError("'{}' could not be opened", "missing.lox")
        self.assertEqual(["'missing.lox' could not be opened"], self.handler.reports)

        with self.handler:
            raise RecursionError()
        self.assertTrue(self.handler.had_runtime_error)
        self.assertEqual("Stack overflow.", self.handler.reports[-1])

    def test_internal_errors_propagate(self):
        with self.assertRaises(ValueError):
            with self.handler:
                raise ValueError("boom")
        self.assertEqual("unknown error: 'ValueError: boom'", self.handler.reports[-1])

    def test_fatal(self):
        handler = ErrorHandler(fatal=True, file=io.StringIO())
        with self.assertRaises(SystemExit):
            with handler:
                raise LoxError("'{}' could not be opened", "missing.lox")


if __name__ == '__main__':
    unittest.main()
