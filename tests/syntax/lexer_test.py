import unittest

from rlisp.lang.error import LexicalError
from rlisp.syntax.lexer import Lexer, Location, TokenTag


def tokens(code):
    return list(Lexer(code))


class LexerTestCase(unittest.TestCase):

    def test_define(self):
        result = tokens("(define x 12)")

        expected = [
            (TokenTag.LPAREN, None),
            (TokenTag.IDENTIFIER, "define"),
            (TokenTag.IDENTIFIER, "x"),
            (TokenTag.INTEGER_LITERAL, 12),
            (TokenTag.RPAREN, None),
            (TokenTag.EOF, None),
        ]
        self.assertEqual(expected, [(token.tag, token.value) for token in result])

        offsets = [token.offset for token in result]
        self.assertEqual(sorted(offsets), offsets)
        self.assertEqual([0, 1, 8, 10, 12, 12], offsets)
        self.assertEqual([1, 2, 9, 11, 13, 13], [token.col for token in result])

    def test_eof_is_idempotent(self):
        cases = ["", "   ", "(debug 1)", "x\n"]
        for case in cases:
            lexer = Lexer(case)
            token = lexer.init()
            while token.tag is not TokenTag.EOF:
                token = lexer.next()

            for __ in range(3):
                self.assertEqual(token, lexer.next(), case)

    def test_empty(self):
        self.assertEqual(Location(-1, 1, 0), Lexer("").init().location)

    def test_rows(self):
        a, b, c, eof = tokens("a\nb\n  c")

        self.assertEqual(Location(0, 1, 1), a.location)
        self.assertEqual(Location(2, 2, 1), b.location)
        self.assertEqual(Location(6, 3, 3), c.location)
        self.assertEqual(c.location, eof.location)

    def test_whitespace(self):
        result = tokens(" \t(\r\n)\n")
        self.assertEqual([TokenTag.LPAREN, TokenTag.RPAREN, TokenTag.EOF], [token.tag for token in result])

    def test_identifier(self):
        cases = {"foo": "foo", "foo-bar2": "foo-bar2", "A-": "A-", "x)": "x", "undefined-name ": "undefined-name"}
        for case, expected in cases.items():
            token = Lexer(case).init()
            self.assertIs(TokenTag.IDENTIFIER, token.tag, case)
            self.assertEqual(expected, token.value, case)

    def test_integer(self):
        cases = {"0": 0, "12": 12, "007": 7, "2147483647": 2147483647}
        for case, expected in cases.items():
            token = Lexer(case).init()
            self.assertIs(TokenTag.INTEGER_LITERAL, token.tag, case)
            self.assertEqual(expected, token.value, case)

        number, identifier, __ = tokens("12abc")
        self.assertEqual(12, number.value)
        self.assertEqual("abc", identifier.value)

    def test_integer_overflow(self):
        lexer = Lexer("(x 2147483648)")
        lexer.init()
        lexer.next()

        with self.assertRaises(LexicalError) as context:
            lexer.next()
        self.assertEqual(Location(3, 1, 4), context.exception.location)

        cases = ["9" * 5000, "0" * 20 + "2147483648", "12345678901"]
        for case in cases:
            with self.assertRaises(LexicalError, msg=case[:20]) as context:
                Lexer(case).init()
            self.assertEqual(Location(0, 1, 1), context.exception.location)

        self.assertEqual(2147483647, Lexer("0" * 20 + "2147483647").init().value)

    def test_string(self):
        cases = {
            "\"abc\"": "abc",
            "\"\"": "",
            "\"a b(c)\"": "a b(c)",
            "\"a\\nb\\tc\\r\"": "a\nb\tc\r",
            "\"say \\\"hi\\\"\"": "say \"hi\"",
        }
        for case, expected in cases.items():
            token = Lexer(case).init()
            self.assertIs(TokenTag.STRING_LITERAL, token.tag, case)
            self.assertEqual(expected, token.value, case)

    def test_string_consumes_closing_quote(self):
        string, rparen, eof = tokens("\"ab\")")
        self.assertEqual(4, rparen.offset)
        self.assertIs(TokenTag.EOF, eof.tag)

    def test_string_errors(self):
        cases = {
            "\"abc": "unexpected EOF when parsing string",
            "\"abc\\": "unexpected EOF when parsing string",
            "\"a\\qb\"": "unknown escaped character",
        }
        for case, message in cases.items():
            with self.assertRaises(LexicalError) as context:
                Lexer(case).init()
            self.assertEqual(message, context.exception.message, case)
            self.assertEqual(Location(0, 1, 1), context.exception.location, case)

    def test_unexpected_character(self):
        lexer = Lexer("(a @)")
        lexer.init()
        lexer.next()

        with self.assertRaises(LexicalError) as context:
            lexer.next()
        self.assertEqual(3, context.exception.offset)
        self.assertIn("unexpected character", context.exception.message)


if __name__ == '__main__':
    unittest.main()
