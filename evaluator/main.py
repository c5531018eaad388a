"""Demonstrates the naive and trampolined evaluators on a few standard terms, using the error handling context manager
to report failures. Run with `python -m evaluator.main`. Not part of the evaluator API.
"""

from evaluator.combinators import IDENTITY, OMEGA, tail_chain
from evaluator.error import ErrorHandler, StepLimitExceeded
from evaluator.naive import evaluate_naive
from evaluator.numerical import PRED, cnumber, number_of
from evaluator.term import Abstraction, Variable, apply
from evaluator.trampoline import iterate, run, run_bounded
from evaluator.trampolined import evaluate_trampolined
from evaluator.value import Environment

OMEGA_STEPS = 10_000  # steps to run Omega for before giving up
TAIL_DEPTH = 5_000    # well past the default recursion limit


def evaluate_both(error_handler, label, term):
    """Evaluates term with both evaluators and returns the trampolined result, warning if the two disagree."""
    error_handler.register_term(label, term)

    expected = evaluate_naive(term, Environment())
    actual = run(evaluate_trampolined(term, Environment()))
    if actual != expected:
        error_handler.warn("evaluators disagree on '{}'", term.expr)

    error_handler.remove_term(label)
    return actual


def main():
    """Runs each demo under a non-fatal error handler, so one failing demo does not stop the rest."""
    error_handler = ErrorHandler(fatal=False)

    with error_handler:
        value = evaluate_both(error_handler, "identity", apply(IDENTITY, Abstraction("y", Variable("y"))))
        print(f"identity: {value}")

    with error_handler:
        value = evaluate_both(error_handler, "predecessor", apply(PRED, cnumber(2)))
        print(f"predecessor: PRED 2 = {number_of(value)}")

    with error_handler:
        evaluate_both(error_handler, "unbound", apply(IDENTITY, Variable("y")))

    with error_handler:
        term = tail_chain(TAIL_DEPTH)
        for steps, state in enumerate(iterate(evaluate_trampolined(term, Environment()))):
            pass
        print(f"tail chain: {state.value} after {steps} steps")

    with error_handler:
        error_handler.register_term("tail chain", f"tail_chain({TAIL_DEPTH})")
        evaluate_naive(tail_chain(TAIL_DEPTH), Environment())  # expected to exhaust the native stack

    with error_handler:
        error_handler.register_term("omega", OMEGA)
        try:
            run_bounded(evaluate_trampolined(OMEGA, Environment()), OMEGA_STEPS)
        except StepLimitExceeded:
            error_handler.warn("'{}' did not terminate within {} steps", (OMEGA.expr, str(OMEGA_STEPS)))
        error_handler.remove_term("omega")


if __name__ == "__main__":
    main()
