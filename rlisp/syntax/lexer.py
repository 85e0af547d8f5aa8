"""Lexical analysis for rlisp. The lexer walks the source text one character at a time and hands out tokens on
demand: the token stream is never materialized in full.

Tokens can be loosely defined as follows:

```
<lparen>     ::= "("
<rparen>     ::= ")"
<identifier> ::= [A-Za-z] [A-Za-z0-9-]*
<integer>    ::= [0-9]+                 ; must fit in a 32-bit signed integer
<string>     ::= '"' (<char> | <escape>)* '"'
<escape>     ::= "\n" | "\r" | "\t" | '\"'
```

Whitespace (space, tab, CR, LF) separates tokens and is otherwise ignored.
"""

from dataclasses import dataclass
from enum import Enum

from rlisp.lang.error import LexicalError


INT32_MAX = 2 ** 31 - 1

WHITESPACE = " \t\r\n"
ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\"": "\""}


@dataclass(frozen=True)
class Location:
    """Position in the source text. offset is a 0-based character index, row and col are 1-based."""
    offset: int
    row: int
    col: int

    def __str__(self):
        return f"{self.row}:{self.col}"


class TokenTag(Enum):
    LPAREN = "LParen"
    RPAREN = "RParen"
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    STRING_LITERAL = "StringLiteral"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A single token. value is the identifier text, integer or string contents (None for punctuation and EOF)."""
    tag: TokenTag
    offset: int
    row: int
    col: int
    value: object = None

    @property
    def location(self):
        return Location(self.offset, self.row, self.col)

    def __repr__(self):
        if self.value is None:
            return f"{self.tag.value}@{self.row}:{self.col}"
        return f"{self.tag.value}({self.value!r})@{self.row}:{self.col}"


class Lexer:
    """Converts code into tokens, tracking offset, row and column of every token. Call init once, then next."""

    def __init__(self, code):
        self.code = code

        self.cur = None      # current character, None at end of input
        self.offset = -1     # offset of self.cur
        self.row = 1
        self.col = 0

        self._chars = iter(code)

    def init(self):
        """Primes the character cursor and returns the first token."""
        self._next_char()
        return self.next()

    def _next_char(self):
        """Advances to the next character. At end of input, the position stays where it was."""
        cur = next(self._chars, None)
        self.cur = cur

        if cur is not None:
            self.offset += 1
            self.col += 1
            if cur == "\n":
                self.col = 0
                self.row += 1

    def _location(self):
        return Location(self.offset, self.row, self.col)

    def _token(self, tag, location, value=None):
        return Token(tag, location.offset, location.row, location.col, value)

    def next(self):
        """Returns the next token. Raises LexicalError on malformed token text. Once the input is exhausted, every call
        returns an EOF token at the same position.
        """
        while self.cur is not None and self.cur in WHITESPACE:
            self._next_char()

        start = self._location()

        if self.cur is None:
            return self._token(TokenTag.EOF, start)

        elif self.cur == "(":
            self._next_char()
            return self._token(TokenTag.LPAREN, start)

        elif self.cur == ")":
            self._next_char()
            return self._token(TokenTag.RPAREN, start)

        elif is_letter(self.cur):
            return self._identifier(start)

        elif is_digit(self.cur):
            return self._integer(start)

        elif self.cur == "\"":
            return self._string(start)

        raise LexicalError(f"unexpected character '{self.cur}'", start)

    def _identifier(self, start):
        chars = []
        while self.cur is not None and (is_letter(self.cur) or is_digit(self.cur) or self.cur == "-"):
            chars.append(self.cur)
            self._next_char()

        return self._token(TokenTag.IDENTIFIER, start, "".join(chars))

    def _integer(self, start):
        digits = []
        while self.cur is not None and is_digit(self.cur):
            digits.append(self.cur)
            self._next_char()

        text = "".join(digits).lstrip("0") or "0"
        if len(text) > len(str(INT32_MAX)) or int(text) > INT32_MAX:
            raise LexicalError("number too large to fit in target type", start)

        return self._token(TokenTag.INTEGER_LITERAL, start, int(text))

    def _string(self, start):
        self._next_char()  # opening quote

        chars = []
        while True:
            if self.cur is None:
                raise LexicalError("unexpected EOF when parsing string", start)

            elif self.cur == "\\":
                self._next_char()
                if self.cur is None:
                    raise LexicalError("unexpected EOF when parsing string", start)
                elif self.cur not in ESCAPES:
                    raise LexicalError("unknown escaped character", start)

                chars.append(ESCAPES[self.cur])
                self._next_char()

            elif self.cur == "\"":
                self._next_char()
                return self._token(TokenTag.STRING_LITERAL, start, "".join(chars))

            else:
                chars.append(self.cur)
                self._next_char()

    def __iter__(self):
        """Yields every token up to and including EOF. Assumes init has not been called yet."""
        token = self.init()
        while token.tag is not TokenTag.EOF:
            yield token
            token = self.next()
        yield token


def is_letter(char):
    return "A" <= char <= "Z" or "a" <= char <= "z"


def is_digit(char):
    return "0" <= char <= "9"
