"""Standard closed terms used to exercise the evaluators."""

from evaluator.term import Abstraction, Application, Variable, apply

IDENTITY = Abstraction("x", Variable("x"))                     # λx.x
SELF_APPLY = Abstraction("x", apply(Variable("x"), Variable("x")))  # λx.(x x)
OMEGA = Application(SELF_APPLY, SELF_APPLY)                    # (λx.(x x)) (λx.(x x)), never terminates


def tail_chain(depth):
    """Returns closed term (λa0.(λa1.(... (λaN.aN) aN-1 ...)) a0) λx.x with N = depth. Evaluates to λx.x after depth + 1
    calls, each made in tail position of the previous one, while every function/argument subterm stays shallow.
    """
    if depth < 0:
        raise ValueError("depth cannot be negative")

    term = Variable(f"a{depth}")
    for idx in range(depth, 0, -1):
        term = Application(Abstraction(f"a{idx}", term), Variable(f"a{idx - 1}"))
    return Application(Abstraction("a0", term), IDENTITY)
