"""Evaluation environment for rlisp. An Isolate is a stack of Namespaces (innermost last), created once per session
and threaded through evaluation explicitly: there is no global interpreter state.
"""

import logging
import sys

from rlisp.lang.error import AlreadyBound, Unbound
from rlisp.lang.value import NONE, NativeThunk

logger = logging.getLogger("rlisp.isolate")
logger.addHandler(logging.NullHandler())


class Namespace:
    """One lexical scope: a mapping of names to values. A name can only be bound once per namespace."""

    def __init__(self, variables=None):
        self.variables = dict(variables) if variables else {}

    def bind(self, name, value, location=None):
        """Binds name to value. Raises AlreadyBound if name is already bound here."""
        if name in self.variables:
            raise AlreadyBound(name, location)
        self.variables[name] = value

    def get(self, name):
        """Returns the value bound to name, or None if name isn't bound here."""
        return self.variables.get(name)

    def __contains__(self, name):
        return name in self.variables

    def __len__(self):
        return len(self.variables)

    def __repr__(self):
        return f"Namespace({', '.join(self.variables)})"


class Isolate:
    """The whole evaluation session. namespaces is never empty: the first entry is the global namespace, pre-seeded
    with the native built-ins. output is where built-ins write (sys.stdout if None).
    """

    def __init__(self, output=None):
        self.output = output
        self.namespaces = [Namespace()]

        for name, factory in BUILTINS.items():
            self.define_native(name, factory(self))

    @property
    def global_namespace(self):
        return self.namespaces[0]

    @property
    def innermost(self):
        return self.namespaces[-1]

    def bind(self, name, value, location=None):
        """Binds name in the innermost namespace. Raises AlreadyBound if it's already bound there."""
        self.innermost.bind(name, value, location)
        logger.debug("bound '%s' to %s (depth %d)", name, value, len(self.namespaces))

    def resolve(self, name, location=None):
        """Returns the value of name, searching innermost to outermost. Raises Unbound if no namespace binds it."""
        for namespace in reversed(self.namespaces):
            if name in namespace:
                return namespace.get(name)
        raise Unbound(name, location)

    def define_native(self, name, function):
        """Binds a host callable (NativeThunkInput -> Value) as a native thunk called name."""
        self.bind(name, NativeThunk(name, function))

    def push(self, namespace=None):
        """Enters a new innermost namespace and returns it."""
        namespace = namespace if namespace is not None else Namespace()
        self.namespaces.append(namespace)
        return namespace

    def pop(self):
        """Leaves the innermost namespace and returns it. The global namespace can't be popped."""
        if len(self.namespaces) == 1:
            raise ValueError("cannot pop the global namespace")
        return self.namespaces.pop()

    def write(self, text):
        print(text, file=self.output if self.output is not None else sys.stdout)


def native_debug(isolate):
    """Returns the debug built-in for isolate: prints its parameters separated by spaces, returns none."""

    def debug(thunk_input):
        isolate.write(" ".join(str(parameter) for parameter in thunk_input.parameters))
        return NONE

    return debug


BUILTINS = {"debug": native_debug}  # name: factory taking the isolate and returning the native function
