"""Reference evaluator: direct structural recursion over the term.

Native recursion depth equals the depth of evaluations in progress, so self-applying terms (e.g. Omega) and long
chains of calls raise RecursionError. Only used as a correctness oracle for the trampolined evaluator.
"""

from evaluator.error import EvaluationError
from evaluator.term import Abstraction, Application, Variable
from evaluator.value import Closure, as_closure, as_environment


def evaluate_naive(term, environment):
    """Evaluates term under environment (an Environment or any mapping) using call-by-value and returns the resulting
    value.
    """
    environment = as_environment(environment)
    if isinstance(term, Variable):
        return environment.lookup(term.name)

    elif isinstance(term, Abstraction):
        return Closure(environment, term.parameter, term.body)

    elif isinstance(term, Application):
        closure = as_closure(evaluate_naive(term.function, environment), term.function)
        argument = evaluate_naive(term.argument, environment)
        return evaluate_naive(closure.body, closure.bind(argument))

    raise EvaluationError("'{}' is not a λ-term", repr(term), internal=True)
