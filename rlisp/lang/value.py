"""Runtime values produced by evaluating an rlisp AST.

```
<value> ::= Integer      ; 32-bit signed integer
          | String
          | None         ; "no value", what define and debug evaluate to
          | Thunk        ; deferred user computation with a captured environment (never built by the evaluator yet)
          | NativeThunk  ; built-in function provided by the host
```
"""

from dataclasses import dataclass, field


class Value:
    """Superclass for every rlisp value."""

    @property
    def callable(self):
        """Whether or not this value can be called by a CallExpr."""
        return False


@dataclass(frozen=True)
class Integer(Value):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class String(Value):
    value: str

    def __str__(self):
        escaped = self.value.replace("\\", "\\\\").replace("\"", "\\\"")
        escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
        return f"\"{escaped}\""


@dataclass(frozen=True)
class NoneValue(Value):
    """The "no value" value. Use the NONE singleton."""

    def __str__(self):
        return "none"


NONE = NoneValue()


@dataclass(eq=False)
class Thunk(Value):
    """Deferred user-level computation: source is the Expr to evaluate, closure the environment it was captured in."""
    source: object
    closure: dict = field(default_factory=dict)

    def __str__(self):
        return "<thunk>"


@dataclass(frozen=True)
class NativeThunkInput:
    """What a native function receives: the call's evaluated parameters, left to right."""
    parameters: tuple = ()


@dataclass(frozen=True)
class NativeThunk(Value):
    """Built-in function. function takes a NativeThunkInput and returns a Value, or raises an EvaluationError."""
    name: str
    function: object = field(compare=False)

    @property
    def callable(self):
        return True

    def call(self, parameters):
        """Invokes the native function with parameters (a sequence of Values)."""
        return self.function(NativeThunkInput(tuple(parameters)))

    def __str__(self):
        return f"<native {self.name}>"
