"""rlisp abstract syntax tree. The node set is closed:

```
<program>    ::= <expr>*
<expr>       ::= <define> | <call> | <identifier> | <integer> | <string>
<define>     ::= "(" "define" <identifier> <expr> ")"
<call>       ::= "(" <expr> <expr>* ")"
```

Nodes are built once by the parser and never mutated afterwards; sub-expressions are shared by reference. Every node
knows its Location and how to evaluate itself against an Isolate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from rlisp.lang.error import NotCallable
from rlisp.lang.value import NONE, Integer, String
from rlisp.syntax.lexer import Location


class Node(ABC):
    """Superclass for every AST node."""
    location: Location

    @abstractmethod
    def evaluate(self, isolate):
        """Evaluates this node against isolate and returns a Value. Raises EvaluationError on failure."""

    @property
    def nodes(self):
        """Child nodes, in source order."""
        return []

    def label(self):
        """Short description used by display."""
        return f"{type(self).__name__}(location={self.location}"

    def display(self, indents=0):
        """Recursively displays this node's tree with readable format.

        Format:
        <Node>(location=<row>:<col>, ..., nodes=[
            <Node>(location=<row>:<col>, ...)  # <-- if nodes is empty
        ])
        """
        result = f"{'    ' * indents}{self.label()}"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return self.display()


class Expr(Node, ABC):
    """Anything that can appear where a value is expected."""


@dataclass(frozen=True)
class IdentifierExpr(Expr):
    location: Location
    name: str

    def evaluate(self, isolate):
        return isolate.resolve(self.name, self.location)

    def label(self):
        return f"{super().label()}, name='{self.name}'"


@dataclass(frozen=True)
class IntegerLiteral(Expr):
    location: Location
    value: int

    def evaluate(self, isolate):
        return Integer(self.value)

    def label(self):
        return f"{super().label()}, value={self.value}"


@dataclass(frozen=True)
class StringLiteral(Expr):
    location: Location
    value: str

    def evaluate(self, isolate):
        return String(self.value)

    def label(self):
        return f"{super().label()}, value={String(self.value)}"


@dataclass(frozen=True)
class DefineExpr(Expr):
    """(define <identifier> <value>): binds identifier in the innermost namespace. Evaluates to none."""
    location: Location
    identifier: IdentifierExpr
    value: Expr

    def evaluate(self, isolate):
        value = self.value.evaluate(isolate)
        isolate.bind(self.identifier.name, value, self.location)
        return NONE

    @property
    def nodes(self):
        return [self.identifier, self.value]


@dataclass(frozen=True)
class CallExpr(Expr):
    """(<function> <parameters>...): only native thunks can be called. Parameters are evaluated left to right after
    the function, and only once the function is known to be callable.
    """
    location: Location
    function: Expr
    parameters: tuple

    def evaluate(self, isolate):
        function = self.function.evaluate(isolate)

        if not function.callable:
            name = self.function.name if isinstance(self.function, IdentifierExpr) else str(function)
            raise NotCallable(name, self.function.location)

        parameters = [parameter.evaluate(isolate) for parameter in self.parameters]
        return function.call(parameters)

    @property
    def nodes(self):
        return [self.function, *self.parameters]


@dataclass(frozen=True)
class Program(Node):
    """Root of the tree. location is the first expression's, or the EOF token's for an empty program."""
    location: Location
    exprs: tuple

    def evaluate(self, isolate):
        """Evaluates every expression in order, for side effects. Always evaluates to none."""
        for expr in self.exprs:
            expr.evaluate(isolate)
        return NONE

    @property
    def nodes(self):
        return list(self.exprs)