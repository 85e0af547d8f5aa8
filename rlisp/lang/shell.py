"""Handles interactive/command-line mode for the rlisp interpreter. Uses cmd as backend."""

import cmd

from rlisp.lang.session import Session


class Shell(cmd.Cmd):
    """rlisp interpreter shell."""
    intro = "rlisp interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary rlisp code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.run_source(line)

    def do_help(self, arg):
        """Prints a short introduction to the language instead of command docs."""
        print("Welcome to the rlisp interpreter!\n\n"
              "rlisp is a small S-expression language. Values are integers, strings and\n"
              "built-in functions; names are bound with define and can't be rebound.\n\n"
              "Try it out by typing '(define x 12)'. This will bind 12 to the name 'x'.\n"
              "Next, try typing '(debug x \"hello\")'. This will print '12 \"hello\"'.")

    def emptyline(self):
        """Empty lines are ignored rather than repeating the last line."""
        return ""

    def do_EOF(self, arg):
        """Exits on end of input (Ctrl-D)."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits the shell. Definitions are not kept."""
        return True
