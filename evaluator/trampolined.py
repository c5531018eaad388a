"""Production evaluator: same semantics as evaluator.naive, expressed as trampolines.

Applications never evaluate their closure's body directly. Instead the pending step returns the body's trampoline to
the driver loop, so a chain of calls in tail position becomes iterations of run rather than nested Python frames. The
function and argument subterms are still run to values inside the step, so stack usage grows with their static nesting.
"""

from evaluator.error import EvaluationError
from evaluator.term import Abstraction, Application, Variable
from evaluator.trampoline import Complete, Pending, run
from evaluator.value import Closure, Environment, as_closure, as_environment


def evaluate_trampolined(term, environment):
    """Returns a trampoline (not yet run) that evaluates term under environment using call-by-value. Unbound variables
    at the top of term are reported immediately, since there is nothing to defer. environment may be any mapping.
    """
    environment = as_environment(environment)
    if isinstance(term, Variable):
        return Complete(environment.lookup(term.name))

    elif isinstance(term, Abstraction):
        return Complete(Closure(environment, term.parameter, term.body))

    elif isinstance(term, Application):

        def step():
            closure = as_closure(run(evaluate_trampolined(term.function, environment)), term.function)
            argument = run(evaluate_trampolined(term.argument, environment))
            return evaluate_trampolined(closure.body, closure.bind(argument))

        return Pending(step)

    raise EvaluationError("'{}' is not a λ-term", repr(term), internal=True)


def evaluate(term, environment=None):
    """Convenience wrapper: runs the trampolined evaluation of term to completion. environment defaults to empty."""
    if environment is None:
        environment = Environment()
    return run(evaluate_trampolined(term, environment))
