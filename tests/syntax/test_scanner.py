import unittest

from lox.syntax.tokens import Token, TokenType
from tests.helpers import scan


def types(source):
    tokens, __ = scan(source)
    return [token.type for token in tokens]


class ScannerTestCase(unittest.TestCase):

    def test_operators(self):
        cases = {
            "(){},.-+;*/": [
                TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
                TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON,
                TokenType.STAR, TokenType.SLASH, TokenType.EOF,
            ],
            "!=": [TokenType.BANG_EQUAL, TokenType.EOF],
            "! =": [TokenType.BANG, TokenType.EQUAL, TokenType.EOF],
            "===": [TokenType.EQUAL_EQUAL, TokenType.EQUAL, TokenType.EOF],
            "<=<>=>": [TokenType.LESS_EQUAL, TokenType.LESS, TokenType.GREATER_EQUAL, TokenType.GREATER, TokenType.EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, types(case), case)

    def test_numbers(self):
        cases = {
            "123": [123.0],
            "12.5": [12.5],
            "0.25 7": [0.25, 7.0],
        }
        for case, expected in cases.items():
            tokens, __ = scan(case)
            self.assertEqual(expected, [token.literal for token in tokens if token.type is TokenType.NUMBER], case)

        # no leading or trailing dots
        self.assertEqual([TokenType.NUMBER, TokenType.DOT, TokenType.EOF], types("123."))
        self.assertEqual([TokenType.DOT, TokenType.NUMBER, TokenType.EOF], types(".5"))

    def test_strings(self):
        tokens, handler = scan("\"hello world\"")
        self.assertEqual(Token(TokenType.STRING, "\"hello world\"", "hello world", 1), tokens[0])
        self.assertFalse(handler.had_error)

        tokens, __ = scan("\"a\nb\" x")
        self.assertEqual("a\nb", tokens[0].literal)
        self.assertEqual(2, tokens[1].line)

    def test_unterminated_string(self):
        tokens, handler = scan("print \"abc")
        self.assertTrue(handler.had_error)
        self.assertEqual(["[line 1] Error: Unterminated string."], handler.reports)
        self.assertEqual([TokenType.PRINT, TokenType.EOF], [token.type for token in tokens])

    def test_unexpected_character(self):
        tokens, handler = scan("1 @ 2 #")
        self.assertEqual(["[line 1] Error: Unexpected character."] * 2, handler.reports)
        self.assertEqual([TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF], [token.type for token in tokens])

    def test_identifiers_and_keywords(self):
        cases = {
            "or orchid": [TokenType.OR, TokenType.IDENTIFIER, TokenType.EOF],
            "_x x1 X_2": [TokenType.IDENTIFIER] * 3 + [TokenType.EOF],
            "class fun var this super nil": [
                TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.THIS, TokenType.SUPER, TokenType.NIL,
                TokenType.EOF,
            ],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, types(case), case)

    def test_lines_and_comments(self):
        tokens, handler = scan("1 // a comment \"not a string\n2\r\n\t3")
        self.assertFalse(handler.had_error)
        self.assertEqual([(TokenType.NUMBER, 1), (TokenType.NUMBER, 2), (TokenType.NUMBER, 3), (TokenType.EOF, 3)],
                         [(token.type, token.line) for token in tokens])

    def test_empty_source(self):
        tokens, __ = scan("")
        self.assertEqual([Token(TokenType.EOF, "", None, 1)], tokens)


if __name__ == '__main__':
    unittest.main()
