"""Trampolines: resumable computations that are either complete or have exactly one pending step.

Driving a trampoline is a loop, not a recursion: each iteration invokes one step, which returns the next trampoline.
Native stack usage of the driver is therefore independent of the number of steps. Nothing here imposes a bound on the
number of steps; run never returns for a non-terminating computation. Callers that need a bound can use run_bounded, or
drive the computation themselves with advance/iterate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

from evaluator.error import EvaluationError, StepLimitExceeded


class Trampoline(ABC):
    """Superclass of the two trampoline states."""

    @property
    @abstractmethod
    def complete(self):
        """Whether or not this trampoline carries a final value."""

    @abstractmethod
    def advance(self):
        """Returns the next trampoline. Complete trampolines are terminal and return themselves."""


@dataclass(frozen=True)
class Complete(Trampoline):
    value: Any

    @property
    def complete(self):
        return True

    def advance(self):
        return self


@dataclass(frozen=True)
class Pending(Trampoline):
    step: Callable[[], Trampoline]

    @property
    def complete(self):
        return False

    def advance(self):
        result = self.step()
        if not isinstance(result, Trampoline):
            raise EvaluationError("pending step produced '{}', not a trampoline", repr(result), internal=True)
        return result


def advance(trampoline):
    """Runs a single step of trampoline and returns the next state."""
    return trampoline.advance()


def iterate(trampoline):
    """Yields every state of trampoline, from trampoline itself to the final Complete state."""
    yield trampoline
    while not trampoline.complete:
        trampoline = trampoline.advance()
        yield trampoline


def run(trampoline):
    """Drives trampoline to completion and returns its value. Errors raised by a step propagate unchanged."""
    while not trampoline.complete:
        trampoline = trampoline.advance()
    return trampoline.value


def run_bounded(trampoline, max_steps):
    """Like run, but raises StepLimitExceeded once max_steps steps have been taken without completing. The exception
    carries the last pending state, so the run can be resumed.
    """
    if max_steps < 0:
        raise ValueError("max_steps cannot be negative")

    steps = 0
    while not trampoline.complete:
        if steps == max_steps:
            raise StepLimitExceeded(max_steps, trampoline)
        trampoline = trampoline.advance()
        steps += 1
    return trampoline.value
