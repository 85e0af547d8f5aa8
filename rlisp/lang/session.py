"""Session control for rlisp. A Session runs source text through the whole pipeline (lexer, parser, evaluator) against
one Isolate, either for a whole file or line by line in command-line mode.
"""

import logging

from rlisp.lang.error import RlispError
from rlisp.lang.isolate import Isolate
from rlisp.syntax.parser import parse

logger = logging.getLogger("rlisp.session")
logger.addHandler(logging.NullHandler())


class Session:
    """Governs an rlisp session. Definitions made by one run are visible to the next, since they share an isolate."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False, show_ast=False, output=None):
        self.error_handler = error_handler
        self.error_handler.register_source(path, None)  # source text is registered once it is read

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_ast = show_ast  # whether or not to print each parsed Program before evaluating it

        self.isolate = Isolate(output)
        self.programs = []        # every Program this session has evaluated

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise RlispError(f"'{Session.SH_FILE}' is a reserved filename")

    def load(self):
        """Reads self.path. Returns its contents."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                code = file.read()
        except OSError as error:
            raise RlispError(f"'{self.path}' could not be opened ({error.strerror})") from error
        except UnicodeDecodeError as error:
            raise RlispError(f"'{self.path}' is not valid UTF-8 (byte {error.start})") from error

        logger.debug("loaded '%s' (%d characters)", self.path, len(code))
        return code

    def run(self):
        """Loads and runs self.path."""
        return self.run_source(self.load())

    def run_source(self, code):
        """Lexes, parses and evaluates code against this session's isolate. Returns the evaluated Program. Any
        RlispError is raised unchanged.
        """
        self.error_handler.register_source(self.path, code)

        program = parse(code)
        if self.show_ast:
            self.isolate.write(program.display())

        logger.debug("evaluating %d top-level form(s) from '%s'", len(program.exprs), self.path)
        program.evaluate(self.isolate)

        self.programs.append(program)
        return program

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Preprocesses a line from the command-line. add_to_prev is the unfinished text of previous lines, if any.
        Returns the joined line and whether or not it still needs a continuation.
        """
        line = f"{add_to_prev}\n{line}" if add_to_prev else line
        depth, in_string = Session.paren_depth(line)
        return line, depth > 0 or in_string

    @staticmethod
    def paren_depth(code):
        """Returns how many parentheses of code are left open, and whether or not code ends inside a string literal.
        Parentheses inside string literals are not counted.
        """
        depth = 0
        in_string = escaped = False
        for char in code:
            if escaped:
                escaped = False
            elif in_string:
                if char == "\\":
                    escaped = True
                elif char == "\"":
                    in_string = False
            elif char == "\"":
                in_string = True
            elif char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
        return depth, in_string
