import unittest

from rlisp.lang.error import LexicalError, ParserError, SyntaticError, WrappedLexicalError
from rlisp.syntax.ast import CallExpr, DefineExpr, IdentifierExpr, IntegerLiteral, Program, StringLiteral
from rlisp.syntax.lexer import Location
from rlisp.syntax.parser import Parser, parse


class ParserTestCase(unittest.TestCase):

    def test_define(self):
        program = parse("(define a 12)")

        self.assertEqual(1, len(program.exprs))
        define, = program.exprs
        self.assertIsInstance(define, DefineExpr)
        self.assertEqual("a", define.identifier.name)
        self.assertEqual(IntegerLiteral(Location(10, 1, 11), 12), define.value)
        self.assertEqual(Location(0, 1, 1), define.location)
        self.assertEqual(Location(8, 1, 9), define.identifier.location)

    def test_call(self):
        call, = parse("(foo 1 2)").exprs

        self.assertIsInstance(call, CallExpr)
        self.assertEqual(IdentifierExpr(Location(1, 1, 2), "foo"), call.function)
        self.assertEqual([1, 2], [parameter.value for parameter in call.parameters])

    def test_nested(self):
        call, = parse("(foo (bar x) \"s\"\n  ((baz)))").exprs

        inner, string, nested = call.parameters
        self.assertIsInstance(inner, CallExpr)
        self.assertEqual("bar", inner.function.name)
        self.assertEqual(StringLiteral(Location(13, 1, 14), "s"), string)

        self.assertIsInstance(nested, CallExpr)
        self.assertEqual(Location(19, 2, 3), nested.location)
        self.assertIsInstance(nested.function, CallExpr)
        self.assertEqual((), nested.parameters)

    def test_literal_callee(self):
        call, = parse("(1 2)").exprs
        self.assertEqual(IntegerLiteral(Location(1, 1, 2), 1), call.function)

    def test_program(self):
        cases = {
            "": Location(-1, 1, 0),
            "  \n": Location(2, 2, 0),
            "x (define a 1)": Location(0, 1, 1),
            "\n\n(debug)": Location(2, 3, 1),
        }
        for case, location in cases.items():
            program = parse(case)
            self.assertIsInstance(program, Program)
            self.assertEqual(location, program.location, case)

        program = parse("(define a 1)(define b a) 7 \"x\" b")
        types = [type(expr) for expr in program.exprs]
        self.assertEqual([DefineExpr, DefineExpr, IntegerLiteral, StringLiteral, IdentifierExpr], types)

    def test_syntax_errors(self):
        cases = {
            ")": Location(0, 1, 1),
            "()": Location(1, 1, 2),
            "(define 1 2)": Location(8, 1, 9),
            "(define a)": Location(9, 1, 10),
            "(define a 1 2)": Location(12, 1, 13),
            "(foo 1": Location(5, 1, 6),
            "(": Location(0, 1, 1),
            "(define": Location(6, 1, 7),
        }
        for case, location in cases.items():
            with self.assertRaises(SyntaticError, msg=case) as context:
                parse(case)
            self.assertEqual(location, context.exception.location, case)

    def test_call_like_error_message(self):
        with self.assertRaises(SyntaticError) as context:
            parse("())")
        self.assertEqual("unexpected token when parsing call-like expression", context.exception.message)

    def test_lexical_errors(self):
        cases = ["(debug " + "1" * 5000 + ")", "(define a \"x)", "(foo 99999999999)", "(foo \"\\z\")", "(a #)", "\"abc"]
        for case in cases:
            with self.assertRaises(WrappedLexicalError, msg=case) as context:
                parse(case)
            self.assertIsInstance(context.exception, ParserError)
            self.assertIsInstance(context.exception.error, LexicalError)
            self.assertEqual(context.exception.error.location, context.exception.location)

    def test_init(self):
        parser = Parser("(debug)")
        self.assertIsNone(parser.cur_token)

        token = parser.init()
        self.assertIs(token, parser.cur_token)
        self.assertEqual(1, len(parser.parse().exprs))


if __name__ == '__main__':
    unittest.main()
