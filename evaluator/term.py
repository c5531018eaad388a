"""Abstract syntax of the untyped lambda calculus.

```
<λ-term> ::= <name>                  ; "variable"
           | "λ" <name> "." <λ-term>  ; "abstraction"
           | <λ-term> <λ-term>        ; "application"
```

Terms are immutable trees built directly from these classes (there is no parser). Equality is structural, which is
what the evaluators' results are compared with.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application."""

    @property
    @abstractmethod
    def expr(self):
        """Canonical string form of this term. Abstraction bodies are greedy, so λx.x y = λx.(x y)."""

    @property
    @abstractmethod
    def tokenizable(self):
        """Whether or not this term has subterms (and thus needs parentheses when nested)."""

    @abstractmethod
    def free_variables(self):
        """Returns frozenset of names that occur free in this term."""

    @property
    def is_closed(self):
        """Whether or not this term can be evaluated in an empty environment."""
        return not self.free_variables()

    def __str__(self):
        return self.expr


def _check_name(name, role):
    if not isinstance(name, str):
        raise TypeError(f"{role} must be a str, got {type(name).__name__}")
    if not name:
        raise ValueError(f"{role} cannot be empty")


def _check_term(term, role):
    if not isinstance(term, LambdaTerm):
        raise TypeError(f"{role} must be a LambdaTerm, got {type(term).__name__}")


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Reference to a name bound by an enclosing abstraction or by the environment."""
    name: str

    def __post_init__(self):
        _check_name(self.name, "variable name")

    @property
    def expr(self):
        return self.name

    @property
    def tokenizable(self):
        return False

    def free_variables(self):
        return frozenset([self.name])


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """λparameter.body"""
    parameter: str
    body: LambdaTerm

    def __post_init__(self):
        _check_name(self.parameter, "parameter")
        _check_term(self.body, "abstraction body")

    @property
    def expr(self):
        if isinstance(self.body, Application):
            return f"λ{self.parameter}.({self.body.expr})"
        return f"λ{self.parameter}.{self.body.expr}"

    @property
    def tokenizable(self):
        return True

    def free_variables(self):
        return self.body.free_variables() - {self.parameter}


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of function to argument. Associates by left: a b c = ((a b) c)."""
    function: LambdaTerm
    argument: LambdaTerm

    def __post_init__(self):
        _check_term(self.function, "applied function")
        _check_term(self.argument, "argument")

    @property
    def expr(self):
        result = ""
        for node in (self.function, self.argument):
            if not node.tokenizable:
                result += f"{node.expr} "
            else:
                result += f"({node.expr}) "
        return result.rstrip()

    @property
    def tokenizable(self):
        return True

    def free_variables(self):
        return self.function.free_variables() | self.argument.free_variables()


def apply(function, *arguments):
    """Returns left-associated application of function to arguments: apply(f, a, b) = (f a) b."""
    term = function
    for argument in arguments:
        term = Application(term, argument)
    return term


def abstract(parameters, body):
    """Returns curried abstraction over parameters: abstract("xy", body) = λx.λy.body. parameters may be a str of
    single-character names or an iterable of names.
    """
    for parameter in reversed(list(parameters)):
        body = Abstraction(parameter, body)
    return body
