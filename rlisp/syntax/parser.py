"""Recursive-descent parser for rlisp. The grammar (see ast.py) is LL(1): every decision is made from the current
token alone, so the parser only ever holds one token of lookahead and never backtracks.

Lexical errors raised while the parser requests a token are wrapped into WrappedLexicalError, so callers only need to
handle ParserError.
"""

from rlisp.lang.error import LexicalError, SyntaticError, WrappedLexicalError
from rlisp.syntax.ast import CallExpr, DefineExpr, IdentifierExpr, IntegerLiteral, Program, StringLiteral
from rlisp.syntax.lexer import Lexer, TokenTag

DEFINE = "define"

EXPR_START = (TokenTag.LPAREN, TokenTag.IDENTIFIER, TokenTag.INTEGER_LITERAL, TokenTag.STRING_LITERAL)


class Parser:
    """Builds a Program from code. Call init once, then parse."""

    def __init__(self, code):
        self.code = code
        self.lexer = Lexer(code)
        self.cur_token = None

    def init(self):
        """Obtains the first token."""
        try:
            self.cur_token = self.lexer.init()
        except LexicalError as error:
            raise WrappedLexicalError(error) from error
        return self.cur_token

    def next_token(self):
        """Advances to and returns the next token."""
        try:
            self.cur_token = self.lexer.next()
        except LexicalError as error:
            raise WrappedLexicalError(error) from error
        return self.cur_token

    def parse(self):
        """Parses top-level expressions until EOF."""
        exprs = []
        while self.cur_token.tag is not TokenTag.EOF:
            exprs.append(self.parse_expr())

        location = exprs[0].location if exprs else self.cur_token.location
        return Program(location, tuple(exprs))

    def parse_expr(self):
        token = self.cur_token

        if token.tag is TokenTag.LPAREN:
            return self.parse_call_like()
        elif token.tag is TokenTag.IDENTIFIER:
            return self.parse_identifier()
        elif token.tag is TokenTag.INTEGER_LITERAL:
            return self.parse_integer()
        elif token.tag is TokenTag.STRING_LITERAL:
            return self.parse_string()

        raise SyntaticError("unexpected token when parsing expression", token.location)

    def parse_identifier(self):
        token = self._expect(TokenTag.IDENTIFIER, "unexpected token when parsing identifier")
        return IdentifierExpr(token.location, token.value)

    def parse_integer(self):
        token = self._expect(TokenTag.INTEGER_LITERAL, "unexpected token when parsing integer")
        return IntegerLiteral(token.location, token.value)

    def parse_string(self):
        token = self._expect(TokenTag.STRING_LITERAL, "unexpected token when parsing string")
        return StringLiteral(token.location, token.value)

    def parse_call_like(self):
        """Parses a parenthesized form: a define if the first element is the identifier 'define', a call otherwise."""
        lparen = self._expect(TokenTag.LPAREN, "unexpected token when parsing call-like expression")
        first = self.cur_token

        if first.tag is TokenTag.IDENTIFIER and first.value == DEFINE:
            return self._parse_define(lparen)

        elif first.tag in EXPR_START:
            function = self.parse_expr()

            parameters = []
            while self.cur_token.tag is not TokenTag.RPAREN:
                if self.cur_token.tag is TokenTag.EOF:
                    raise SyntaticError("expecting ')' at the end of call expression", self.cur_token.location)
                parameters.append(self.parse_expr())
            self.next_token()

            return CallExpr(lparen.location, function, tuple(parameters))

        raise SyntaticError("unexpected token when parsing call-like expression", first.location)

    def _parse_define(self, lparen):
        self.next_token()  # define

        identifier = self.parse_identifier()
        value = self.parse_expr()

        if self.cur_token.tag is not TokenTag.RPAREN:
            raise SyntaticError("expecting ')' at the end of define expression", self.cur_token.location)
        self.next_token()

        return DefineExpr(lparen.location, identifier, value)

    def _expect(self, tag, message):
        """Consumes the current token if it has tag, raises SyntaticError with message otherwise."""
        token = self.cur_token
        if token.tag is not tag:
            raise SyntaticError(message, token.location)
        self.next_token()
        return token


def parse(code):
    """Parses code into a Program. Raises ParserError."""
    parser = Parser(code)
    parser.init()
    return parser.parse()
