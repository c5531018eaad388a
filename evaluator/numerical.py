"""Natural numbers encoded as Church numerals, plus the usual arithmetic combinators on them.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from evaluator.error import EvaluationError
from evaluator.term import Abstraction, Application, Variable, abstract, apply
from evaluator.trampoline import run_bounded
from evaluator.trampolined import evaluate_trampolined
from evaluator.value import Closure, Environment

NUMBER_STEPS = 100_000  # step budget for number_of

f, g, h, m, n, u, x = (Variable(name) for name in "fghmnux")

SUCC = abstract("nfx", apply(f, apply(n, f, x)))                                              # λn.λf.λx.f (n f x)
PLUS = abstract("mnfx", apply(m, f, apply(n, f, x)))                                          # λm.λn.λf.λx.m f (n f x)
MULT = abstract("mnf", apply(m, apply(n, f)))                                                 # λm.λn.λf.m (n f)
PRED = abstract("nfx", apply(n, abstract("gh", apply(h, apply(g, f))), Abstraction("u", x), Abstraction("u", u)))

# number_of applies a numeral to these: S = λp.λq.p wraps its argument in a closure, Z = λz.z marks the bottom
_SUCC_MARKER = Closure(Environment(), "p", Abstraction("q", Variable("p")))
_ZERO_MARKER = Closure(Environment(), "z", Variable("z"))


def cnumber(num):
    """Returns Church numeral λf.λx.f (... (f x)) for natural number num (cnum = Church numeral)."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise EvaluationError("expected natural number, got '{}'", repr(num), internal=True)

    body = x
    for __ in range(num):
        body = Application(f, body)
    return abstract("fx", body)


def number(cnum):
    """Returns int given Church numeral cnum (a LambdaTerm or Closure). If cnum isn't syntactically a Church numeral,
    returns None.
    """
    if isinstance(cnum, Closure):
        cnum = cnum.abstraction
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    first_arg, second_arg = cnum.parameter, cnum.body.parameter
    nth_body = cnum.body.body
    if first_arg == second_arg:  # λx.λx.x: inner binding shadows the outer one
        return 0 if nth_body == Variable(second_arg) else None

    num = 0
    while isinstance(nth_body, Application):
        if nth_body.function != Variable(first_arg):
            return None
        nth_body = nth_body.argument
        num += 1

    return num if nth_body == Variable(second_arg) else None


def number_of(value):
    """Returns int given a value that behaves like a Church numeral, found by applying it to marker closures and
    counting how many times the successor marker was applied. Values that are not numerals (including ones that fail
    or do not finish within NUMBER_STEPS steps) give None. Note that λf.f behaves like 1.
    """
    if not isinstance(value, Closure):
        return None

    env = Environment({"n": value, "s": _SUCC_MARKER, "z": _ZERO_MARKER})
    try:
        result = run_bounded(evaluate_trampolined(apply(n, Variable("s"), Variable("z")), env), NUMBER_STEPS)
    except (EvaluationError, RecursionError):
        return None

    num = 0
    while isinstance(result, Closure) and result.body is _SUCC_MARKER.body.body:
        result = result.environment["p"]
        num += 1

    return num if result is _ZERO_MARKER else None
