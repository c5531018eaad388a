"""Runtime values and environments.

A Closure is the only kind of value: an abstraction paired with the Environment in effect when it was evaluated.
Environments are persistent: extend never mutates, it returns a new Environment that shares all existing frames with
the one it was extended from.
"""

from collections import namedtuple
from collections.abc import Mapping
from dataclasses import dataclass

from evaluator.error import NotApplicable, UnboundVariable
from evaluator.term import Abstraction, LambdaTerm


_Frame = namedtuple("_Frame", ["name", "value", "parent"])


class Environment(Mapping):
    """Immutable mapping of variable names to values. Later bindings shadow earlier ones with the same name."""

    __slots__ = ("_frame",)

    def __init__(self, bindings=None):
        frame = None
        for name, value in (bindings or {}).items():
            frame = _Frame(name, value, frame)
        self._frame = frame

    @classmethod
    def _from_frame(cls, frame):
        env = cls.__new__(cls)
        env._frame = frame
        return env

    def extend(self, name, value):
        """Returns a new Environment with name bound to value. self is left unchanged."""
        return Environment._from_frame(_Frame(name, value, self._frame))

    def lookup(self, name):
        """Returns value bound to name, raising UnboundVariable if there is none."""
        try:
            return self[name]
        except KeyError:
            raise UnboundVariable(name) from None

    def __getitem__(self, name):
        frame = self._frame
        while frame is not None:
            if frame.name == name:
                return frame.value
            frame = frame.parent
        raise KeyError(name)

    def __iter__(self):
        seen = set()
        frame = self._frame
        while frame is not None:
            if frame.name not in seen:
                seen.add(frame.name)
                yield frame.name
            frame = frame.parent

    def __len__(self):
        return sum(1 for __ in self)

    def __hash__(self):
        return hash(frozenset(self.items()))

    def __repr__(self):
        return f"Environment({dict(self)!r})"


def as_environment(bindings):
    """Returns bindings as an Environment, so plain mappings such as {} can be passed to the evaluators."""
    if isinstance(bindings, Environment):
        return bindings
    return Environment(bindings)


@dataclass(frozen=True)
class Closure:
    """Abstraction λparameter.body closed over environment. Equality and hashing compare captured environments
    recursively, so closures captured inside very long chains of other closures can raise RecursionError when compared.
    """
    environment: Environment
    parameter: str
    body: LambdaTerm

    def bind(self, argument):
        """Returns the environment the body is evaluated in when this closure is applied to argument."""
        return self.environment.extend(self.parameter, argument)

    @property
    def abstraction(self):
        return Abstraction(self.parameter, self.body)

    @property
    def expr(self):
        return self.abstraction.expr

    def __str__(self):
        return self.expr


def as_closure(value, term):
    """Returns value if it can be applied, otherwise raises NotApplicable. term is the function subterm that produced
    value (used for error messages).
    """
    if not isinstance(value, Closure):
        raise NotApplicable(value, term)
    return value
