"""Error handling for rlisp. Every error the interpreter reports is an RlispError: lexical errors, parser errors and
evaluation errors are kept apart so that the caller always knows which stage failed. If another type of error makes
it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class RlispError(Exception):
    """Base class for all rlisp errors. location is the Location the error is anchored at (None if unknown)."""

    def __init__(self, message, location=None):
        super().__init__(message)
        self.message = message
        self.location = location

    @property
    def kind(self):
        """Name shown in diagnostics."""
        if type(self) is RlispError:
            return "error"
        return type(self).__name__


class LexicalError(RlispError):
    """Malformed token text: bad escape, unterminated string, integer overflow or an unrecognized character."""

    @property
    def offset(self):
        return self.location.offset

    @property
    def row(self):
        return self.location.row

    @property
    def col(self):
        return self.location.col

    def __str__(self):
        return f"Lexical error at line {self.row} column {self.col}: {self.message}"


class ParserError(RlispError):
    """Superclass for anything that stops the parser."""


class SyntaticError(ParserError):
    """Structurally invalid token sequence (wrong token in a given grammar position)."""


class WrappedLexicalError(ParserError):
    """A LexicalError that surfaced while the parser was requesting the next token."""

    def __init__(self, error):
        super().__init__(error.message, error.location)
        self.error = error

    @property
    def kind(self):
        return self.error.kind


class EvaluationError(RlispError):
    """Superclass for errors raised while evaluating an AST. name is the name involved in the failure."""
    TEMPLATE = "{}"

    def __init__(self, name, location=None):
        super().__init__(self.TEMPLATE.format(name), location)
        self.name = name

    def __eq__(self, other):
        return type(other) is type(self) and other.name == self.name

    def __hash__(self):
        return hash((type(self), self.name))


class AlreadyBound(EvaluationError):
    """Duplicate definition in one namespace."""
    TEMPLATE = "'{}' is already bound in this scope"


class Unbound(EvaluationError):
    """Reference to a name that no namespace binds."""
    TEMPLATE = "'{}' is not bound"


class NotCallable(EvaluationError):
    """Call of a value that is not a native thunk."""
    TEMPLATE = "'{}' is not callable"


class ErrorHandler:
    """Context manager that reports rlisp errors as diagnostics anchored in the source text. In fatal mode, the first
    reported error exits the process.
    """
    ERROR = "red"

    def __init__(self, fatal=True, file=None):
        self.fatal = fatal
        self.file = file  # None means sys.stdout at report time
        self.sources = {}

    def register_source(self, path, code):
        """Registers code as the text of path. Diagnostics for path will quote lines from it."""
        self.sources[path] = code

    @property
    def path(self):
        """Most recently registered path (the one errors are assumed to come from)."""
        return next(reversed(self.sources), "<in>")

    @staticmethod
    def diagnose(line, col):
        """Returns line with a caret under column col (1-based)."""
        diagnosis = "  " + line + "\n"
        diagnosis += "  " + " " * max(col - 1, 0) + colored("^", ErrorHandler.ERROR, attrs=["bold"])
        return diagnosis

    def _line(self, row):
        code = self.sources.get(self.path)
        if code is None:
            return None

        lines = code.split("\n")
        if 1 <= row <= len(lines):
            return lines[row - 1].rstrip("\r")
        return None

    def format(self, error, internal=False):
        """Returns the diagnostic text for error."""
        location = error.location if isinstance(error, RlispError) else None

        if location is not None:
            error_msg = colored(f"{self.path}:{location.row}:{location.col}: ", attrs=["bold"])
        else:
            error_msg = colored(f"{self.path}: ", attrs=["bold"])

        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        kind = error.kind if isinstance(error, RlispError) else "error"
        message = error.message if isinstance(error, RlispError) else str(error)
        error_msg += colored(f"{kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + message

        if location is not None:
            line = self._line(location.row)
            if line is not None:
                error_msg += "\n" + ErrorHandler.diagnose(line, location.col)

        return error_msg

    def throw(self, error, internal=False):
        """Prints error's diagnostic. Exits if this handler is fatal."""
        print(self.format(error, internal), file=self.file if self.file is not None else sys.stdout)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(RlispError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(RlispError("maximum recursion depth exceeded (expression nested too deeply)"))
        elif exc_type is not None and issubclass(exc_type, RlispError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(RlispError(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
